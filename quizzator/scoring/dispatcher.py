"""Evaluation dispatcher - routes an answer to the evaluator for its question kind."""

import logging
from typing import Optional

from quizzator.errors import (
    EvaluationError,
    JudgeUnavailableError,
    QuestionEvaluationError,
    UnknownQuestionTypeError,
)
from quizzator.judges.base import DEFAULT_LANGUAGE, Judge
from quizzator.models.question import (
    FreeTextQuestion,
    MCQQuestion,
    Question,
    QuestionResult,
    QuestionType,
    SliderQuestion,
    TrueFalseQuestion,
    UserAnswer,
    get_question_status,
)
from quizzator.models.quiz import QuizScoring

from .evaluators import (
    Evaluation,
    evaluate_free_text,
    evaluate_mcq,
    evaluate_slider,
    evaluate_true_false,
)

logger = logging.getLogger(__name__)


async def evaluate_answer(
    question: Question,
    user_answer: UserAnswer,
    scoring: QuizScoring,
    judge: Optional[Judge] = None,
    language: str = DEFAULT_LANGUAGE,
) -> QuestionResult:
    """
    Evaluate a user's answer and classify it against the quiz thresholds.

    Only free-text questions suspend (on the judge call); the other kinds are
    scored synchronously.

    Args:
        question: The question being answered
        user_answer: Answer shaped for the question kind
        scoring: Pass/fail thresholds of the quiz
        judge: External judge, required for free-text questions
        language: Response language for the judge

    Returns:
        The complete QuestionResult

    Raises:
        JudgeUnavailableError: Free-text question without a judge
        QuestionEvaluationError: The evaluator failed (e.g. judge error)
        UnknownQuestionTypeError: The question kind is not handled
    """
    try:
        evaluation = await _evaluate(question, user_answer, judge, language)
    except (JudgeUnavailableError, QuestionEvaluationError):
        raise
    except EvaluationError as e:
        logger.warning("Evaluation of %s question failed: %s", question.type, e)
        raise QuestionEvaluationError(question.type, str(e)) from e

    status = get_question_status(
        evaluation.score, scoring.min_score_to_pass, scoring.min_score_to_fail
    )

    return QuestionResult(
        question=question,
        user_answer=user_answer,
        score=evaluation.score,
        status=status,
        explanation=evaluation.explanation,
        expected_answer=evaluation.expected_answer,
    )


async def _evaluate(
    question: Question,
    user_answer: UserAnswer,
    judge: Optional[Judge],
    language: str,
) -> Evaluation:
    if isinstance(question, FreeTextQuestion):
        return await evaluate_free_text(question, str(user_answer), judge, language)
    if isinstance(question, MCQQuestion):
        return evaluate_mcq(question, user_answer)
    if isinstance(question, SliderQuestion):
        return evaluate_slider(question, user_answer)
    if isinstance(question, TrueFalseQuestion):
        return evaluate_true_false(question, user_answer)

    kind = getattr(question, "type", type(question).__name__)
    known = ", ".join(t.value for t in QuestionType)
    raise UnknownQuestionTypeError(f"Unknown question type: {kind} (expected one of {known})")
