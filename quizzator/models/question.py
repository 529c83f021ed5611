"""Pydantic models for quiz questions and per-question results."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class QuestionType(str, Enum):
    """Question kinds a quiz can contain."""

    FREE_TEXT = "free-text"
    MCQ = "mcq"
    SLIDER = "slider"
    TRUE_FALSE = "true-false"


class QuestionStatus(str, Enum):
    """Three-way verdict derived from a score and the quiz thresholds."""

    PASSED = "passed"
    IMPRECISE = "imprecise"
    FAILED = "failed"


class BaseQuestion(BaseModel):
    """Fields shared by every question kind."""

    question_text: str = Field(
        ...,
        alias="q",
        min_length=1,
        description="The question shown to the user",
    )
    weight: float = Field(
        default=1.0,
        gt=0,
        description="Relative importance in the overall quiz score",
    )

    model_config = {"frozen": True, "populate_by_name": True}


class FreeTextQuestion(BaseQuestion):
    """Open question graded by an external judge."""

    type: Literal["free-text"] = "free-text"
    answer: str = Field(..., min_length=1, description="Reference answer")
    context: Optional[str] = Field(
        None,
        description="Extra grading guidance for the judge, never shown to the user",
    )


class MCQQuestion(BaseQuestion):
    """Multiple choice question, single or multi select."""

    type: Literal["mcq"] = "mcq"
    options: list[str] = Field(..., min_length=2, description="Options in display order")
    answer: list[str] = Field(..., min_length=1, description="Correct options")
    multiple: bool = Field(default=False, description="Allow selecting several options")

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Ensure options are unique."""
        if len(set(v)) != len(v):
            raise ValueError("Options must be unique")
        return v

    @model_validator(mode="after")
    def validate_answer(self) -> "MCQQuestion":
        """Ensure correct answers are options, and single-select has exactly one."""
        unknown = [a for a in self.answer if a not in self.options]
        if unknown:
            raise ValueError(f"Answer not among options: {', '.join(unknown)}")
        if not self.multiple and len(set(self.answer)) != 1:
            raise ValueError("Single-select question must have exactly one correct answer")
        return self


class SliderQuestion(BaseQuestion):
    """Numeric answer picked on a bounded scale."""

    type: Literal["slider"] = "slider"
    answer: float
    min: float
    max: float
    step: Optional[float] = Field(None, gt=0, description="Display granularity only")
    tolerance: Optional[float] = Field(
        None,
        ge=0,
        description="Accepted absolute distance from the answer; exact match when unset",
    )

    @model_validator(mode="after")
    def validate_range(self) -> "SliderQuestion":
        """Ensure min is strictly below max."""
        if self.min >= self.max:
            raise ValueError("Slider min must be < max")
        return self


class TrueFalseQuestion(BaseQuestion):
    """Boolean statement question."""

    type: Literal["true-false"] = "true-false"
    answer: bool


Question = Annotated[
    Union[FreeTextQuestion, MCQQuestion, SliderQuestion, TrueFalseQuestion],
    Field(discriminator="type"),
]

# bool first so True/False are not coerced into numbers
UserAnswer = Union[bool, int, float, str, list[str]]


class QuestionResult(BaseModel):
    """Outcome of evaluating one answer."""

    question: Question
    user_answer: UserAnswer
    score: int = Field(..., ge=0, le=100)
    status: QuestionStatus
    explanation: Optional[str] = None
    expected_answer: Optional[str] = None

    model_config = {"frozen": True}


def get_question_status(
    score: float, min_score_to_pass: float, min_score_to_fail: float
) -> QuestionStatus:
    """
    Classify a score against the pass/fail thresholds.

    Args:
        score: Score between 0 and 100
        min_score_to_pass: Lowest score counted as passed
        min_score_to_fail: Lowest score not counted as failed

    Returns:
        The matching QuestionStatus
    """
    if score >= min_score_to_pass:
        return QuestionStatus.PASSED
    if score >= min_score_to_fail:
        return QuestionStatus.IMPRECISE
    return QuestionStatus.FAILED
