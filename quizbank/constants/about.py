"""Static metadata describing QuizBank."""

APP_NAME = "QuizBank"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "QuizBank is a timed multiple-choice quiz service. Browse subjects, pick a class "
    "level and a question bank, answer against the clock and get a scored result."
)
