"""Judge contract - shared prompt, response coercion and request flow for LLM graders."""

import json
import logging
import math
import re
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx
from pydantic import ValidationError

from quizzator.errors import JudgeResponseError, JudgeTransportError
from quizzator.models.question import FreeTextQuestion
from quizzator.models.quiz import LLMEvaluationResult

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "Français"
DEFAULT_TIMEOUT = 60.0

# Whole response wrapped in a fence, with an optional label such as ```json
_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n?(.*?)\s*```$", re.DOTALL)


def build_evaluation_prompt(
    question: FreeTextQuestion, user_answer: str, language: str = DEFAULT_LANGUAGE
) -> str:
    """
    Build the grading prompt sent to every judge.

    Args:
        question: Free-text question being graded
        user_answer: Raw text typed by the user
        language: Language the judge must answer in

    Returns:
        Prompt text
    """
    context = f"Additional Context: {question.context}" if question.context else ""

    return f"""You are an expert quiz evaluator. Evaluate the following answer.

IMPORTANT: You MUST respond entirely in {language}.

Question: {question.question_text}

Expected Answer: {question.answer}

{context}

User's Answer: {user_answer}

Evaluate and respond with this exact JSON format:
{{
    "score": <number 0-100>,
    "explanation": "<brief feedback in {language}, 1-2 sentences max>",
    "expectedAnswer": "<the correct answer in {language}, concise>"
}}

Scoring guidelines:
- 100: Perfect or near-perfect answer
- 70-99: Good answer with minor issues
- 40-69: Partial understanding, missing key elements
- 0-39: Incorrect or very incomplete

CRITICAL:
- Respond ONLY with JSON, no other text
- Keep explanation SHORT (1-2 sentences)
- expectedAnswer should be the ANSWER only, not your reasoning
- Everything must be in {language}"""


def strip_code_fence(content: str) -> str:
    """
    Remove a markdown code fence around a judge response, if present.

    Args:
        content: Raw response content

    Returns:
        The fenced content, or the stripped input when there is no fence
    """
    content = content.strip()

    match = _FENCE_RE.match(content)
    if match:
        return match.group(1).strip()

    # Fenced JSON surrounded by prose
    if "```json" in content:
        return content.split("```json")[1].split("```")[0].strip()

    return content


def parse_evaluation_response(content: str, provider: str) -> LLMEvaluationResult:
    """
    Decode a judge response into an LLMEvaluationResult.

    Args:
        content: Text produced by the judge
        provider: Provider name used in error messages

    Returns:
        Parsed (unclamped) evaluation result

    Raises:
        JudgeResponseError: If the content is not a JSON object with the
            score, explanation and expectedAnswer fields
    """
    text = strip_code_fence(content)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise JudgeResponseError(provider, f"invalid JSON in response: {e}") from e

    if not isinstance(payload, dict):
        raise JudgeResponseError(provider, "response is not a JSON object")

    try:
        result = LLMEvaluationResult.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise JudgeResponseError(provider, f"missing or invalid fields: {fields}") from e

    if not math.isfinite(result.score):
        raise JudgeResponseError(provider, f"score is not a finite number: {result.score}")

    return result


def clamp_score(score: float) -> float:
    """Clamp an untrusted score into [0, 100]."""
    return max(0.0, min(100.0, score))


class Judge(ABC):
    """
    External grader for free-text answers.

    Subclasses only translate their provider's wire format: build the
    evaluation and ping requests, and pull the text content out of the
    decoded response body. Prompting, status checks, decoding and clamping
    stay here.
    """

    name: str = "Judge"

    def __init__(
        self,
        model: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.model = model
        self.timeout = timeout
        self._client = client

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    @abstractmethod
    async def _send_evaluation(self, client: httpx.AsyncClient, prompt: str) -> httpx.Response:
        """Send the grading prompt to the provider."""

    @abstractmethod
    async def _send_ping(self, client: httpx.AsyncClient) -> httpx.Response:
        """Send the cheapest request the provider accepts."""

    @abstractmethod
    def _extract_content(self, data: Any) -> str:
        """Return the text the model produced from a decoded response body."""

    async def evaluate(
        self,
        question: FreeTextQuestion,
        user_answer: str,
        language: str = DEFAULT_LANGUAGE,
    ) -> LLMEvaluationResult:
        """
        Grade a free-text answer.

        Args:
            question: The free-text question
            user_answer: The user's answer text
            language: Language for explanation and expected answer

        Returns:
            Evaluation result with the score clamped into [0, 100]

        Raises:
            JudgeTransportError: On network failure or non-200 status
            JudgeResponseError: On malformed or incomplete output
        """
        prompt = build_evaluation_prompt(question, user_answer, language)
        logger.debug("Requesting %s evaluation with model %s", self.name, self.model)

        try:
            async with self._http() as client:
                response = await self._send_evaluation(client, prompt)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise JudgeTransportError(self.name, None, str(e)) from e

        if response.status_code != 200:
            raise JudgeTransportError(self.name, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise JudgeResponseError(self.name, "response body is not JSON") from e

        try:
            content = self._extract_content(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise JudgeResponseError(self.name, f"unexpected response shape: {e!r}") from e

        if not isinstance(content, str) or not content.strip():
            raise JudgeResponseError(self.name, f"empty response from {self.name}")

        result = parse_evaluation_response(content, self.name)
        logger.debug("%s scored answer %s", self.name, result.score)
        return result.model_copy(update={"score": clamp_score(result.score)})

    async def test_connection(self) -> bool:
        """
        Check the provider is reachable with the current credentials.

        Returns:
            True only when the provider answered with status 200
        """
        try:
            async with self._http() as client:
                response = await self._send_ping(client)
            return response.status_code == 200
        except Exception as e:
            logger.warning("%s connection test failed: %s", self.name, e)
            return False
