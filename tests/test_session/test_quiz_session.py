"""Tests for the quiz session state machine."""

import asyncio

import pytest

from quizzator.errors import (
    JudgeTransportError,
    JudgeUnavailableError,
    QuestionEvaluationError,
    SessionStateError,
)
from quizzator.models.question import FreeTextQuestion, QuestionStatus
from quizzator.models.quiz import Quiz, QuizScoring
from quizzator.session.quiz_session import QuizSession, SessionPhase


@pytest.fixture
def free_text_quiz(free_text_question: FreeTextQuestion, sample_scoring: QuizScoring) -> Quiz:
    """Create a one-question free-text quiz."""
    return Quiz(title="Capitals", scoring=sample_scoring, questions=[free_text_question])


class TestQuizSession:
    """Test a complete pass through a quiz."""

    def test_starts_presenting_first_question(self, sample_quiz: Quiz):
        """Test the initial state."""
        session = QuizSession(sample_quiz)

        assert session.phase == SessionPhase.PRESENTING
        assert session.question_number == 1
        assert session.current_question == sample_quiz.questions[0]
        assert session.last_result is None

    def test_full_run(self, sample_quiz: Quiz):
        """Test answering every question and finishing."""
        session = QuizSession(sample_quiz)

        for answer in (["Paris"], 53, False):
            result = asyncio.run(session.submit_answer(answer))
            assert session.phase == SessionPhase.SHOWING_RESULT
            assert session.last_result == result
            session.advance()

        assert session.phase == SessionPhase.FINISHED
        assert [r.score for r in session.results] == [100, 100, 0]
        assert session.quiz_result is not None
        assert session.quiz_result.total_score == pytest.approx(200 / 3)
        assert session.quiz_result.status == QuestionStatus.IMPRECISE

    def test_advance_moves_to_next_question(self, sample_quiz: Quiz):
        """Test that advancing presents the next question."""
        session = QuizSession(sample_quiz)
        asyncio.run(session.submit_answer(["Lyon"]))

        assert session.advance() == SessionPhase.PRESENTING
        assert session.question_number == 2
        assert not session.is_last_question
        assert session.quiz_result is None

    def test_results_are_a_copy(self, sample_quiz: Quiz):
        """Test that callers cannot alter recorded results."""
        session = QuizSession(sample_quiz)
        asyncio.run(session.submit_answer(["Paris"]))

        session.results.clear()

        assert len(session.results) == 1

    def test_uses_judge_and_language(self, free_text_quiz: Quiz, fake_judge):
        """Test that free-text answers go to the session judge."""
        session = QuizSession(free_text_quiz, judge=fake_judge, language="English")

        result = asyncio.run(session.submit_answer("Paris"))

        assert result.score == 85
        assert fake_judge.calls[0][2] == "English"


class TestSessionGuards:
    """Test transitions that are not allowed."""

    def test_empty_answer(self, sample_quiz: Quiz):
        """Test that empty answers are refused without evaluation."""
        session = QuizSession(sample_quiz)

        for empty in (None, "", []):
            with pytest.raises(ValueError, match="answer is required"):
                asyncio.run(session.submit_answer(empty))

        assert session.phase == SessionPhase.PRESENTING

    def test_submit_twice(self, sample_quiz: Quiz):
        """Test that a shown result must be acknowledged first."""
        session = QuizSession(sample_quiz)
        asyncio.run(session.submit_answer(["Paris"]))

        with pytest.raises(SessionStateError, match="showing_result"):
            asyncio.run(session.submit_answer(["Paris"]))

    def test_advance_before_answer(self, sample_quiz: Quiz):
        """Test that advancing needs a result."""
        with pytest.raises(SessionStateError, match="presenting"):
            QuizSession(sample_quiz).advance()

    def test_no_submission_while_evaluating(self, free_text_quiz: Quiz, judge_factory):
        """Test that a second answer is refused while the first is in flight."""

        class SlowJudge(judge_factory):
            def __init__(self):
                super().__init__()
                self.release = asyncio.Event()

            async def evaluate(self, question, user_answer, language="Français"):
                await self.release.wait()
                return await super().evaluate(question, user_answer, language)

        async def scenario():
            judge = SlowJudge()
            session = QuizSession(free_text_quiz, judge=judge)
            first = asyncio.create_task(session.submit_answer("Paris"))
            await asyncio.sleep(0)

            assert session.phase == SessionPhase.EVALUATING
            with pytest.raises(SessionStateError, match="evaluating"):
                await session.submit_answer("Lyon")

            judge.release.set()
            await first
            return session, judge

        session, judge = asyncio.run(scenario())

        assert session.phase == SessionPhase.SHOWING_RESULT
        assert [call[1] for call in judge.calls] == ["Paris"]

    def test_finished_session(self, sample_quiz: Quiz):
        """Test that a finished session has no current question."""
        quiz = sample_quiz.model_copy(update={"questions": sample_quiz.questions[:1]})
        session = QuizSession(quiz)
        asyncio.run(session.submit_answer(["Paris"]))
        session.advance()

        with pytest.raises(SessionStateError):
            session.current_question
        with pytest.raises(SessionStateError):
            asyncio.run(session.submit_answer(["Paris"]))


class TestSessionFailures:
    """Test recovery after evaluation errors."""

    def test_failed_evaluation_allows_retry(self, free_text_quiz: Quiz, judge_factory):
        """Test that a judge failure keeps the question open."""
        judge = judge_factory(error=JudgeTransportError("OpenAI", 503))
        session = QuizSession(free_text_quiz, judge=judge)

        with pytest.raises(QuestionEvaluationError):
            asyncio.run(session.submit_answer("Paris"))

        assert session.phase == SessionPhase.PRESENTING
        assert session.results == []

        judge.error = None
        result = asyncio.run(session.submit_answer("Paris"))

        assert result.score == 85
        assert session.phase == SessionPhase.SHOWING_RESULT

    def test_missing_judge(self, free_text_quiz: Quiz):
        """Test that a free-text quiz without judge reports it and stays open."""
        session = QuizSession(free_text_quiz)

        with pytest.raises(JudgeUnavailableError):
            asyncio.run(session.submit_answer("Paris"))

        assert session.phase == SessionPhase.PRESENTING
