"""Sample catalog used when the service starts without external reference data.

Seven subjects, each with six banks for every class from 1 to 12 and one
competitive-exam bank. Every bank in a subject shares the same small question
set; ids are derived from the subject, class and bank template so they are
stable across restarts.
"""

from __future__ import annotations

from dataclasses import dataclass

from quizbank.core.models import Question, QuestionBank, Subject
from quizbank.core.services.catalog_store import CatalogStore

CLASS_LEVELS: tuple[str, ...] = tuple(f"class-{number}" for number in range(1, 13))
COMPETITIVE_LEVEL = "competitive"


@dataclass(frozen=True, slots=True)
class _BankTemplate:
    key: str
    title: str
    description: str
    difficulty: str
    time_limit_minutes: int
    total_questions: int
    avg_score: int


_SUBJECTS: tuple[Subject, ...] = (
    Subject("hindi", "Hindi", "Hindi", "fas fa-language", "from-red-500 to-pink-500",
            "Master the beauty of Hindi language"),
    Subject("english", "English", "English", "fas fa-book", "from-blue-500 to-cyan-500",
            "Enhance your English proficiency"),
    Subject("math", "Mathematics", "Mathematics", "fas fa-calculator", "from-green-500 to-emerald-500",
            "Solve complex mathematical problems"),
    Subject("science", "Science", "Science", "fas fa-flask", "from-purple-500 to-indigo-500",
            "Explore the wonders of science"),
    Subject("social", "Social Science", "Social Science", "fas fa-globe", "from-yellow-500 to-orange-500",
            "Understand society and culture"),
    Subject("gk", "General Knowledge", "General Knowledge", "fas fa-lightbulb", "from-teal-500 to-cyan-500",
            "Broaden your general awareness"),
    Subject("contest", "Contest", "Contest", "fas fa-trophy", "from-rose-500 to-pink-500",
            "Compete and win exciting prizes"),
)

_BANK_TEMPLATES: tuple[_BankTemplate, ...] = (
    _BankTemplate("basic", "Basic Concepts", "Test your understanding of fundamental concepts",
                  "Beginner", 20, 15, 45),
    _BankTemplate("intermediate", "Intermediate Practice", "Challenge yourself with intermediate level problems",
                  "Intermediate", 30, 25, 62),
    _BankTemplate("advanced", "Advanced Challenge", "Master advanced concepts and problem-solving",
                  "Advanced", 45, 30, 34),
    _BankTemplate("revision", "Revision Test", "Quick revision of important topics",
                  "Mixed", 25, 20, 58),
    _BankTemplate("exam", "Exam Preparation", "Comprehensive exam preparation test",
                  "Exam Level", 60, 40, 71),
    _BankTemplate("mock", "Mock Test", "Full-length mock examination",
                  "Mock Exam", 90, 50, 67),
)

_COMPETITIVE_TEMPLATE = _BankTemplate(
    COMPETITIVE_LEVEL, "Competitive Exams", "JEE, NEET, UPSC & More", "Expert", 60, 50, 67,
)

# (text, options, correct index, explanation)
_QuestionData = tuple[str, tuple[str, ...], int, str]

_SUBJECT_QUESTIONS: dict[str, tuple[_QuestionData, ...]] = {
    "hindi": (
        ("हिंदी भाषा की मुख्य विशेषता क्या है?",
         ("देवनागरी लिपि", "अरबी लिपि", "रोमन लिपि", "गुरुमुखी लिपि"), 0,
         "हिंदी भाषा देवनागरी लिपि में लिखी जाती है।"),
        ("निम्न में से कौन सा शब्द तत्सम है?",
         ("आग", "सूर्य", "दूध", "पानी"), 1,
         "सूर्य एक तत्सम शब्द है जो संस्कृत से आया है।"),
        ("हिंदी की उत्पत्ति किस भाषा से हुई है?",
         ("संस्कृत", "अरबी", "पर्शियन", "तुर्की"), 0,
         "हिंदी भाषा का विकास संस्कृत भाषा से हुआ है।"),
    ),
    "english": (
        ("What is the past tense of 'go'?", ("goed", "went", "gone", "going"), 1,
         "The past tense of 'go' is 'went'."),
        ("Which of the following is a noun?", ("run", "quickly", "happiness", "blue"), 2,
         "'Happiness' is a noun that represents a state of being."),
        ("What is the correct spelling?", ("recieve", "receive", "recive", "receeve"), 1,
         "The correct spelling is 'receive' (i before e except after c)."),
    ),
    "math": (
        ("What is 15 + 27?", ("41", "42", "43", "44"), 1, "15 + 27 = 42"),
        ("What is the area of a square with side length 8 cm?", ("32 cm²", "64 cm²", "16 cm²", "24 cm²"), 1,
         "Area of square = side × side = 8 × 8 = 64 cm²"),
        ("What is 144 ÷ 12?", ("11", "12", "13", "14"), 1, "144 ÷ 12 = 12"),
    ),
    "science": (
        ("What is the chemical symbol for water?", ("H2O", "CO2", "NaCl", "O2"), 0,
         "Water is composed of two hydrogen atoms and one oxygen atom (H2O)."),
        ("Which planet is closest to the Sun?", ("Venus", "Mercury", "Earth", "Mars"), 1,
         "Mercury is the closest planet to the Sun."),
        ("What gas do plants absorb from the atmosphere during photosynthesis?",
         ("Oxygen", "Nitrogen", "Carbon Dioxide", "Hydrogen"), 2,
         "Plants absorb carbon dioxide during photosynthesis to make glucose."),
    ),
    "social": (
        ("Who was the first Prime Minister of India?",
         ("Mahatma Gandhi", "Jawaharlal Nehru", "Sardar Patel", "Dr. Rajendra Prasad"), 1,
         "Jawaharlal Nehru was India's first Prime Minister."),
        ("In which year did India gain independence?", ("1946", "1947", "1948", "1949"), 1,
         "India gained independence on August 15, 1947."),
        ("Which river is known as the lifeline of India?", ("Yamuna", "Brahmaputra", "Ganga", "Godavari"), 2,
         "The Ganga (Ganges) river is considered the lifeline of India."),
    ),
    "gk": (
        ("What is the capital of France?", ("London", "Berlin", "Paris", "Madrid"), 2,
         "Paris is the capital city of France."),
        ("Which is the largest ocean in the world?",
         ("Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"), 3,
         "The Pacific Ocean is the largest ocean in the world."),
        ("Who invented the telephone?",
         ("Thomas Edison", "Alexander Graham Bell", "Nikola Tesla", "Albert Einstein"), 1,
         "Alexander Graham Bell is credited with inventing the telephone."),
    ),
    "contest": (
        ("Which programming language is known for its simplicity and readability?",
         ("C++", "Java", "Python", "Assembly"), 2,
         "Python is known for its simple syntax and readability."),
        ("What does 'AI' stand for in technology?",
         ("Automated Intelligence", "Artificial Intelligence", "Advanced Integration", "Adaptive Interface"), 1,
         "AI stands for Artificial Intelligence."),
        ("Which company developed the ChatGPT model?", ("Google", "Microsoft", "OpenAI", "Meta"), 2,
         "ChatGPT was developed by OpenAI."),
    ),
}


def _competitive_questions(subject_id: str) -> tuple[_QuestionData, ...]:
    return (
        (f"Advanced {subject_id} concept for competitive examinations?",
         ("Advanced Option A", "Advanced Option B", "Advanced Option C", "Advanced Option D"), 0,
         "For competitive exams, this concept requires deep understanding."),
        (f"Complex problem-solving in {subject_id}?",
         ("Solution Method 1", "Solution Method 2", "Solution Method 3", "Solution Method 4"), 1,
         "This method is most effective for competitive level problems."),
    )


def _make_bank(subject_id: str, class_level: str, bank_id: str, template: _BankTemplate) -> QuestionBank:
    return QuestionBank(
        id=bank_id,
        subject_id=subject_id,
        class_level=class_level,
        title=template.title,
        description=template.description,
        difficulty=template.difficulty,
        time_limit_minutes=template.time_limit_minutes,
        total_questions=template.total_questions,
        avg_score=template.avg_score,
    )


def _make_questions(bank_id: str, data: tuple[_QuestionData, ...]) -> list[Question]:
    return [
        Question(
            id=f"{bank_id}-q{number}",
            question_bank_id=bank_id,
            text=text,
            options=options,
            correct_answer=correct,
            explanation=explanation,
        )
        for number, (text, options, correct, explanation) in enumerate(data, start=1)
    ]


def build_sample_catalog() -> tuple[list[Subject], list[QuestionBank], list[Question]]:
    """Return the subjects, banks and questions of the sample catalog."""
    subjects = list(_SUBJECTS)
    banks: list[QuestionBank] = []
    questions: list[Question] = []

    for subject in subjects:
        question_set = _SUBJECT_QUESTIONS.get(subject.id, _SUBJECT_QUESTIONS["gk"])
        for class_level in CLASS_LEVELS:
            for template in _BANK_TEMPLATES:
                bank_id = f"{subject.id}-{class_level}-{template.key}"
                banks.append(_make_bank(subject.id, class_level, bank_id, template))
                questions.extend(_make_questions(bank_id, question_set))

        competitive_id = f"{subject.id}-{COMPETITIVE_LEVEL}"
        banks.append(_make_bank(subject.id, COMPETITIVE_LEVEL, competitive_id, _COMPETITIVE_TEMPLATE))
        questions.extend(_make_questions(competitive_id, _competitive_questions(subject.id)))

    return subjects, banks, questions


def create_sample_store() -> CatalogStore:
    subjects, banks, questions = build_sample_catalog()
    return CatalogStore(subjects, banks, questions)
