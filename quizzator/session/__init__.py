"""Interactive quiz session state."""

from .quiz_session import QuizSession, SessionPhase

__all__ = ["QuizSession", "SessionPhase"]
