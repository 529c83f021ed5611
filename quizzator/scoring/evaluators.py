"""Per-kind answer evaluators."""

import math
from typing import NamedTuple, Optional, Sequence

from quizzator.errors import JudgeUnavailableError
from quizzator.judges.base import DEFAULT_LANGUAGE, Judge, clamp_score
from quizzator.models.question import (
    FreeTextQuestion,
    MCQQuestion,
    SliderQuestion,
    TrueFalseQuestion,
)


class Evaluation(NamedTuple):
    """Score, explanation and expected answer for one answer."""

    score: int
    explanation: str
    expected_answer: str


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


async def evaluate_free_text(
    question: FreeTextQuestion,
    user_answer: str,
    judge: Optional[Judge],
    language: str = DEFAULT_LANGUAGE,
) -> Evaluation:
    """
    Delegate grading of a free-text answer to the judge.

    Args:
        question: Free-text question
        user_answer: Raw answer text
        judge: External judge; required
        language: Language of the judge's explanation

    Returns:
        Evaluation with the judge's score clamped and rounded

    Raises:
        JudgeUnavailableError: If no judge is given
    """
    if judge is None:
        raise JudgeUnavailableError()

    result = await judge.evaluate(question, user_answer, language)

    return Evaluation(
        score=round_half_up(clamp_score(result.score)),
        explanation=result.explanation,
        expected_answer=result.expected_answer,
    )


def evaluate_mcq(question: MCQQuestion, user_answer: Sequence[str]) -> Evaluation:
    """
    Evaluate a multiple choice answer.

    Single-select questions score 100 or 0. Multi-select questions get
    proportional credit: each wrong pick cancels a right one, and missed
    correct options count against the total.

    Args:
        question: MCQ question
        user_answer: Selected options

    Returns:
        Evaluation result
    """
    correct = list(dict.fromkeys(question.answer))
    correct_set = set(correct)
    selected = list(dict.fromkeys(user_answer))
    expected_answer = ", ".join(correct)

    if not question.multiple:
        is_correct = len(selected) == 1 and len(correct) == 1 and selected[0] == correct[0]
        return Evaluation(
            score=100 if is_correct else 0,
            explanation="Correct!" if is_correct else f"Incorrect. You selected: {', '.join(selected)}",
            expected_answer=expected_answer,
        )

    correct_selections = sum(1 for option in selected if option in correct_set)
    incorrect_selections = len(selected) - correct_selections
    missed = len(correct_set) - correct_selections

    score = max(
        0,
        round_half_up((correct_selections - incorrect_selections) / len(correct_set) * 100),
    )

    if score == 100:
        explanation = "Perfect! All correct answers selected."
    else:
        parts = []
        if correct_selections > 0:
            parts.append(f"{correct_selections} correct")
        if incorrect_selections > 0:
            parts.append(f"{incorrect_selections} incorrect")
        if missed > 0:
            parts.append(f"{missed} missed")
        explanation = ", ".join(parts)

    return Evaluation(score=score, explanation=explanation, expected_answer=expected_answer)


def evaluate_slider(question: SliderQuestion, user_answer: float) -> Evaluation:
    """
    Evaluate a slider answer, within tolerance or by exact match.

    The slider step only affects how the value is picked, never the score.
    """
    correct = question.answer
    shown = format_number(user_answer)

    if question.tolerance is not None:
        tolerance = format_number(question.tolerance)
        within = abs(user_answer - correct) <= question.tolerance
        if within:
            explanation = f"Correct! Your answer {shown} is within ±{tolerance} of the correct answer."
        else:
            explanation = f"Incorrect. Your answer {shown} is outside the tolerance range of ±{tolerance}."
        return Evaluation(
            score=100 if within else 0,
            explanation=explanation,
            expected_answer=f"{format_number(correct)} (±{tolerance})",
        )

    exact = user_answer == correct
    return Evaluation(
        score=100 if exact else 0,
        explanation="Perfect! Exact answer." if exact else f"Incorrect. You answered {shown}.",
        expected_answer=format_number(correct),
    )


def evaluate_true_false(question: TrueFalseQuestion, user_answer: bool) -> Evaluation:
    is_correct = user_answer == question.answer
    return Evaluation(
        score=100 if is_correct else 0,
        explanation="Correct!" if is_correct else f"Incorrect. You answered: {format_bool(user_answer)}",
        expected_answer=format_bool(question.answer),
    )
