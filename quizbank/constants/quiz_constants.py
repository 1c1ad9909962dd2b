"""Quiz-related constants shared across the session, scoring and API layers."""

TICK_INTERVAL_SECONDS: float = 1.0
LOW_TIME_THRESHOLD_SECONDS: int = 300
MIN_OPTIONS_PER_QUESTION: int = 2

# Lower bound (inclusive) of each performance band, best first.
PERFORMANCE_MESSAGES: tuple[tuple[int, str], ...] = (
    (90, "Outstanding!"),
    (80, "Excellent Work!"),
    (70, "Good Job!"),
    (60, "Keep Improving!"),
    (0, "Practice More!"),
)

NO_QUESTIONS_MESSAGE: str = "This question bank doesn't have any questions yet."
SUBMIT_FAILED_MESSAGE: str = "Failed to submit quiz. Please try again."
