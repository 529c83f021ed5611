"""Answer evaluation and quiz scoring."""

from .aggregator import calculate_quiz_result
from .dispatcher import evaluate_answer
from .evaluators import (
    Evaluation,
    evaluate_free_text,
    evaluate_mcq,
    evaluate_slider,
    evaluate_true_false,
)

__all__ = [
    "evaluate_answer",
    "calculate_quiz_result",
    "Evaluation",
    "evaluate_free_text",
    "evaluate_mcq",
    "evaluate_slider",
    "evaluate_true_false",
]
