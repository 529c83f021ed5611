"""Pydantic models for quiz definitions and results."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .question import FreeTextQuestion, Question, QuestionResult, QuestionStatus


class QuizScoring(BaseModel):
    """Thresholds partitioning scores into passed / imprecise / failed."""

    min_score_to_pass: float = Field(default=80, ge=0, le=100)
    min_score_to_fail: float = Field(default=60, ge=0, le=100)

    @model_validator(mode="after")
    def validate_thresholds(self) -> "QuizScoring":
        """Ensure the pass threshold is not below the fail threshold."""
        if self.min_score_to_pass < self.min_score_to_fail:
            raise ValueError("min_score_to_pass must be >= min_score_to_fail")
        return self

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {"min_score_to_pass": 80, "min_score_to_fail": 60}
        },
    }


class Quiz(BaseModel):
    """A validated quiz definition."""

    title: str = Field(..., min_length=1, description="Quiz title")
    description: Optional[str] = Field(None, description="Quiz description or instructions")
    scoring: QuizScoring = Field(default_factory=QuizScoring)
    questions: list[Question] = Field(..., min_length=1, description="Questions in order")

    @property
    def total_questions(self) -> int:
        """Get the number of questions."""
        return len(self.questions)

    @property
    def has_free_text(self) -> bool:
        """Whether any question needs an external judge."""
        return any(isinstance(q, FreeTextQuestion) for q in self.questions)

    model_config = {"frozen": True}


class QuizResult(BaseModel):
    """Final outcome of a completed quiz."""

    quiz: Quiz
    question_results: list[QuestionResult]
    total_score: float = Field(..., description="Weighted mean score (0-100)")
    raw_score: float = Field(..., description="Weighted points earned")
    max_score: float = Field(..., description="Weighted points possible")
    status: QuestionStatus
    completed_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}


# Structured output model for judge responses


class LLMEvaluationResult(BaseModel):
    """Verdict returned by an external judge for a free-text answer."""

    score: float = Field(..., description="Score, expected 0-100 but not guaranteed")
    explanation: str
    expected_answer: str = Field(..., alias="expectedAnswer")

    model_config = {"populate_by_name": True}
