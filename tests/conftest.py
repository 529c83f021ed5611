"""Shared test fixtures and configuration for pytest."""

from typing import Optional

import pytest

from quizzator.judges.base import Judge
from quizzator.models.question import (
    FreeTextQuestion,
    MCQQuestion,
    SliderQuestion,
    TrueFalseQuestion,
)
from quizzator.models.quiz import LLMEvaluationResult, Quiz, QuizScoring


class FakeJudge(Judge):
    """Judge returning a canned verdict, recording every call."""

    name = "Fake"

    def __init__(
        self,
        result: Optional[LLMEvaluationResult] = None,
        error: Optional[Exception] = None,
        connected: bool = True,
    ):
        super().__init__(model="fake-model")
        self.result = result or LLMEvaluationResult(
            score=85, explanation="Good answer.", expected_answer="Paris"
        )
        self.error = error
        self.connected = connected
        self.calls: list[tuple[FreeTextQuestion, str, str]] = []

    async def evaluate(self, question, user_answer, language="Français"):
        self.calls.append((question, user_answer, language))
        if self.error is not None:
            raise self.error
        return self.result

    async def test_connection(self) -> bool:
        return self.connected

    async def _send_evaluation(self, client, prompt):
        raise NotImplementedError

    async def _send_ping(self, client):
        raise NotImplementedError

    def _extract_content(self, data):
        raise NotImplementedError


@pytest.fixture
def fake_judge() -> FakeJudge:
    """Create a judge that always scores 85."""
    return FakeJudge()


@pytest.fixture
def sample_scoring() -> QuizScoring:
    """Create scoring thresholds of 80 (pass) and 60 (fail)."""
    return QuizScoring(min_score_to_pass=80, min_score_to_fail=60)


@pytest.fixture
def free_text_question() -> FreeTextQuestion:
    """Create a sample free-text question."""
    return FreeTextQuestion(
        q="What is the capital of France?",
        answer="Paris",
        context="Accept 'Paris, France'.",
    )


@pytest.fixture
def single_mcq_question() -> MCQQuestion:
    """Create a single-select MCQ question."""
    return MCQQuestion(
        q="Which city is the capital of France?",
        options=["Paris", "Lyon", "Marseille"],
        answer=["Paris"],
    )


@pytest.fixture
def multi_mcq_question() -> MCQQuestion:
    """Create a multi-select MCQ question with three correct options."""
    return MCQQuestion(
        q="Which letters are correct?",
        options=["A", "B", "C", "D", "E"],
        answer=["A", "B", "C"],
        multiple=True,
    )


@pytest.fixture
def slider_question() -> SliderQuestion:
    """Create a slider question with a tolerance of 5."""
    return SliderQuestion(q="Pick fifty", answer=50, min=0, max=100, tolerance=5)


@pytest.fixture
def exact_slider_question() -> SliderQuestion:
    """Create a slider question without tolerance."""
    return SliderQuestion(q="Boiling point of water (°C)?", answer=100, min=0, max=200, step=1)


@pytest.fixture
def true_false_question() -> TrueFalseQuestion:
    """Create a true/false question whose answer is true."""
    return TrueFalseQuestion(q="The Earth orbits the Sun.", answer=True)


@pytest.fixture
def sample_quiz(
    sample_scoring: QuizScoring,
    single_mcq_question: MCQQuestion,
    slider_question: SliderQuestion,
    true_false_question: TrueFalseQuestion,
) -> Quiz:
    """Create a quiz without free-text questions."""
    return Quiz(
        title="Test Quiz",
        description="A test quiz",
        scoring=sample_scoring,
        questions=[single_mcq_question, slider_question, true_false_question],
    )


SAMPLE_QUIZ_YAML = """
quiz:
  title: Geography
  description: Capitals and facts
  scoring:
    min_score_to_pass: 75
    min_score_to_fail: 50
  questions:
    - type: free-text
      q: What is the capital of France?
      answer: Paris
      context: City name is enough
    - type: mcq
      q: Which are in Europe?
      options: [France, Japan, Spain]
      answer: [France, Spain]
      multiple: true
      weight: 2
    - type: slider
      q: How many continents?
      answer: 7
      min: 1
      max: 10
    - type: true-false
      q: Rome is in Italy.
      answer: true
"""


@pytest.fixture
def sample_quiz_yaml() -> str:
    """Return YAML text for a quiz with one question of each kind."""
    return SAMPLE_QUIZ_YAML


@pytest.fixture
def judge_factory() -> type[FakeJudge]:
    """Return the FakeJudge class for tests needing custom verdicts."""
    return FakeJudge
