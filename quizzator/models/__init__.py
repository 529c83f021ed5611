"""Data models for quizzes and evaluation results."""

from .question import (
    BaseQuestion,
    FreeTextQuestion,
    MCQQuestion,
    Question,
    QuestionResult,
    QuestionStatus,
    QuestionType,
    SliderQuestion,
    TrueFalseQuestion,
    UserAnswer,
    get_question_status,
)
from .quiz import (
    # Structured output models
    LLMEvaluationResult,
    Quiz,
    QuizResult,
    QuizScoring,
)

__all__ = [
    "BaseQuestion",
    "FreeTextQuestion",
    "MCQQuestion",
    "SliderQuestion",
    "TrueFalseQuestion",
    "Question",
    "QuestionType",
    "QuestionStatus",
    "QuestionResult",
    "UserAnswer",
    "get_question_status",
    "Quiz",
    "QuizScoring",
    "QuizResult",
    "LLMEvaluationResult",
]
