"""Quiz aggregator - rolls per-question results into the final quiz verdict."""

from datetime import datetime
from typing import Sequence

from quizzator.models.question import QuestionResult, get_question_status
from quizzator.models.quiz import Quiz, QuizResult


def calculate_quiz_result(quiz: Quiz, question_results: Sequence[QuestionResult]) -> QuizResult:
    """
    Calculate the weighted score and status of a finished quiz.

    Args:
        quiz: The quiz that was taken
        question_results: Results in question order

    Returns:
        QuizResult; total_score is 0 when there is no weight at all
    """
    total_weighted_score = 0.0
    total_weight = 0.0

    for result in question_results:
        weight = result.question.weight
        total_weighted_score += result.score * weight
        total_weight += weight

    total_score = total_weighted_score / total_weight if total_weight > 0 else 0.0

    status = get_question_status(
        total_score,
        quiz.scoring.min_score_to_pass,
        quiz.scoring.min_score_to_fail,
    )

    return QuizResult(
        quiz=quiz,
        question_results=list(question_results),
        total_score=total_score,
        raw_score=total_weighted_score,
        max_score=total_weight * 100,
        status=status,
        completed_at=datetime.now(),
    )
