"""Quiz session - drives one attempt at a quiz, one question at a time."""

import logging
from enum import Enum
from typing import Optional

from quizzator.errors import SessionStateError
from quizzator.judges.base import DEFAULT_LANGUAGE, Judge
from quizzator.models.question import Question, QuestionResult, UserAnswer
from quizzator.models.quiz import Quiz, QuizResult
from quizzator.scoring.aggregator import calculate_quiz_result
from quizzator.scoring.dispatcher import evaluate_answer

logger = logging.getLogger(__name__)


class SessionPhase(str, Enum):
    """Where a session is in its question loop."""

    PRESENTING = "presenting"
    EVALUATING = "evaluating"
    SHOWING_RESULT = "showing_result"
    FINISHED = "finished"


class QuizSession:
    """
    State machine for a single quiz attempt.

    presenting -> evaluating -> showing_result -> presenting ... -> finished

    While an answer is being evaluated no other answer is accepted. A failed
    evaluation returns to ``presenting`` so the same question can be retried.
    """

    def __init__(
        self,
        quiz: Quiz,
        judge: Optional[Judge] = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.quiz = quiz
        self.judge = judge
        self.language = language
        self.phase = SessionPhase.PRESENTING
        self.current_index = 0
        self._results: list[QuestionResult] = []
        self._quiz_result: Optional[QuizResult] = None

    @property
    def current_question(self) -> Question:
        if self.phase == SessionPhase.FINISHED:
            raise SessionStateError("Quiz is finished")
        return self.quiz.questions[self.current_index]

    @property
    def question_number(self) -> int:
        """One-based number of the current question."""
        return self.current_index + 1

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.quiz.total_questions - 1

    @property
    def results(self) -> list[QuestionResult]:
        return list(self._results)

    @property
    def last_result(self) -> Optional[QuestionResult]:
        return self._results[-1] if self._results else None

    @property
    def quiz_result(self) -> Optional[QuizResult]:
        """Final result, available once the session is finished."""
        return self._quiz_result

    async def submit_answer(self, answer: UserAnswer) -> QuestionResult:
        """
        Evaluate the answer to the current question.

        Args:
            answer: The user's answer

        Returns:
            The question result

        Raises:
            SessionStateError: If not waiting for an answer
            ValueError: If the answer is empty
        """
        if self.phase != SessionPhase.PRESENTING:
            raise SessionStateError(f"Cannot submit an answer while {self.phase.value}")
        if answer is None or answer == "" or answer == []:
            raise ValueError("An answer is required")

        question = self.current_question
        self.phase = SessionPhase.EVALUATING
        try:
            result = await evaluate_answer(
                question,
                answer,
                self.quiz.scoring,
                judge=self.judge,
                language=self.language,
            )
        except Exception:
            self.phase = SessionPhase.PRESENTING
            raise

        self._results.append(result)
        self.phase = SessionPhase.SHOWING_RESULT
        logger.debug(
            "Question %d scored %d (%s)", self.question_number, result.score, result.status.value
        )
        return result

    def advance(self) -> SessionPhase:
        """
        Move past the result of the current question.

        Returns:
            The new phase; ``finished`` after the last question
        """
        if self.phase != SessionPhase.SHOWING_RESULT:
            raise SessionStateError(f"Cannot advance while {self.phase.value}")

        if self.is_last_question:
            self._quiz_result = calculate_quiz_result(self.quiz, self._results)
            self.phase = SessionPhase.FINISHED
        else:
            self.current_index += 1
            self.phase = SessionPhase.PRESENTING

        return self.phase
