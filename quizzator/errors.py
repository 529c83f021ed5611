"""Exception hierarchy for quiz evaluation."""

from typing import Optional


class QuizzatorError(Exception):
    """Base class for all expected, caller-visible failures."""


class EvaluationError(QuizzatorError):
    """An answer could not be evaluated."""


class JudgeUnavailableError(EvaluationError):
    """A free-text question was evaluated without a judge."""

    def __init__(self, message: str = "A judge is required for free-text questions"):
        super().__init__(message)


class JudgeError(EvaluationError):
    """Failure reported by (or while talking to) an external judge."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider} evaluation failed: {message}")


class JudgeTransportError(JudgeError):
    """Non-200 status or network failure when calling a judge."""

    def __init__(self, provider: str, status_code: Optional[int], message: str = ""):
        self.status_code = status_code
        if status_code is not None:
            detail = f"API error: {status_code}"
        else:
            detail = "request failed"
        if message:
            detail = f"{detail} ({message})"
        super().__init__(provider, detail)


class JudgeResponseError(JudgeError):
    """The judge answered, but not in the expected structured shape."""


class QuestionEvaluationError(EvaluationError):
    """Evaluation of a specific question kind failed."""

    def __init__(self, question_type: str, message: str):
        self.question_type = question_type
        super().__init__(f"[{question_type}] {message}")


class JudgeConfigurationError(QuizzatorError):
    """The selected judge provider is missing required settings."""


class QuizParseError(QuizzatorError):
    """A quiz definition could not be read or validated."""


class SessionStateError(QuizzatorError):
    """A session operation was called in the wrong phase."""


class UnknownQuestionTypeError(TypeError):
    """A question of an unhandled kind reached the dispatcher."""
