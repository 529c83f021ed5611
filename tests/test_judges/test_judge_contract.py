"""Tests for the shared judge prompt and response coercion."""

import pytest

from quizzator.errors import JudgeResponseError
from quizzator.judges.base import (
    build_evaluation_prompt,
    clamp_score,
    parse_evaluation_response,
    strip_code_fence,
)
from quizzator.models.question import FreeTextQuestion

VALID_JSON = '{"score": 80, "explanation": "Mostly right.", "expectedAnswer": "Paris"}'


class TestBuildEvaluationPrompt:
    """Test the grading prompt."""

    def test_contains_question_material(self, free_text_question: FreeTextQuestion):
        """Test that question, reference, context and answer are included."""
        prompt = build_evaluation_prompt(free_text_question, "It is Paris", "English")

        assert "Question: What is the capital of France?" in prompt
        assert "Expected Answer: Paris" in prompt
        assert "Additional Context: Accept 'Paris, France'." in prompt
        assert "User's Answer: It is Paris" in prompt

    def test_language_directive(self, free_text_question: FreeTextQuestion):
        """Test that the response language is enforced."""
        prompt = build_evaluation_prompt(free_text_question, "Paris", "Deutsch")

        assert "You MUST respond entirely in Deutsch." in prompt
        assert "Everything must be in Deutsch" in prompt

    def test_default_language_is_french(self, free_text_question: FreeTextQuestion):
        """Test the default response language."""
        assert "respond entirely in Français" in build_evaluation_prompt(free_text_question, "Paris")

    def test_output_contract_and_rubric(self, free_text_question: FreeTextQuestion):
        """Test that fields, brevity and rubric are spelled out."""
        prompt = build_evaluation_prompt(free_text_question, "Paris", "English")

        for field in ('"score"', '"explanation"', '"expectedAnswer"'):
            assert field in prompt
        assert "Respond ONLY with JSON" in prompt
        assert "1-2 sentences" in prompt
        assert "expectedAnswer should be the ANSWER only" in prompt
        assert "- 100: Perfect or near-perfect answer" in prompt
        assert "- 70-99: Good answer with minor issues" in prompt
        assert "- 40-69: Partial understanding, missing key elements" in prompt
        assert "- 0-39: Incorrect or very incomplete" in prompt

    def test_context_is_optional(self):
        """Test that no context line appears without context."""
        question = FreeTextQuestion(q="Why?", answer="Because")
        assert "Additional Context" not in build_evaluation_prompt(question, "No idea")


class TestStripCodeFence:
    """Test fence removal."""

    def test_json_fence(self):
        """Test a ```json fenced response."""
        assert strip_code_fence(f"```json\n{VALID_JSON}\n```") == VALID_JSON

    def test_bare_fence(self):
        """Test an unlabeled fence."""
        assert strip_code_fence(f"```\n{VALID_JSON}\n```") == VALID_JSON

    def test_fence_embedded_in_prose(self):
        """Test a fenced block surrounded by text."""
        content = f"Here is my verdict:\n```json\n{VALID_JSON}\n```\nHope it helps."
        assert strip_code_fence(content) == VALID_JSON

    def test_unwrapped_is_unchanged(self):
        """Test that plain JSON only loses surrounding whitespace."""
        assert strip_code_fence(f"  {VALID_JSON}\n") == VALID_JSON
        assert strip_code_fence(strip_code_fence(VALID_JSON)) == VALID_JSON


class TestParseEvaluationResponse:
    """Test structural decoding of judge output."""

    def test_plain_json(self):
        """Test decoding an unwrapped response."""
        result = parse_evaluation_response(VALID_JSON, "OpenAI")

        assert result.score == 80
        assert result.explanation == "Mostly right."
        assert result.expected_answer == "Paris"

    def test_fenced_equals_unwrapped(self):
        """Test that wrapping in a json fence does not change the result."""
        fenced = parse_evaluation_response(f"```json\n{VALID_JSON}\n```", "Anthropic")
        assert fenced == parse_evaluation_response(VALID_JSON, "Anthropic")

    def test_score_is_not_clamped_here(self):
        """Test that clamping is left to the caller."""
        content = '{"score": 120, "explanation": "", "expectedAnswer": "x"}'
        assert parse_evaluation_response(content, "Ollama").score == 120

    def test_malformed_json(self):
        """Test that invalid JSON raises a provider-named error."""
        with pytest.raises(JudgeResponseError, match="Ollama evaluation failed"):
            parse_evaluation_response("{score: eighty}", "Ollama")

    def test_non_object(self):
        """Test that a JSON array is rejected."""
        with pytest.raises(JudgeResponseError, match="not a JSON object"):
            parse_evaluation_response("[80]", "OpenAI")

    def test_missing_field(self):
        """Test that a missing expectedAnswer is rejected, not defaulted."""
        with pytest.raises(JudgeResponseError, match="expectedAnswer"):
            parse_evaluation_response('{"score": 80, "explanation": "ok"}', "OpenAI")

    def test_non_numeric_score(self):
        """Test that a non-numeric score is rejected."""
        with pytest.raises(JudgeResponseError, match="score"):
            parse_evaluation_response(
                '{"score": "great", "explanation": "ok", "expectedAnswer": "x"}', "OpenAI"
            )

    def test_non_finite_score(self):
        """Test that NaN scores are rejected."""
        with pytest.raises(JudgeResponseError, match="finite"):
            parse_evaluation_response(
                '{"score": NaN, "explanation": "ok", "expectedAnswer": "x"}', "OpenAI"
            )

    def test_error_keeps_provider(self):
        """Test that the error exposes the provider name."""
        with pytest.raises(JudgeResponseError) as exc_info:
            parse_evaluation_response("", "Anthropic")
        assert exc_info.value.provider == "Anthropic"


class TestClampScore:
    """Test clamping of untrusted scores."""

    @pytest.mark.parametrize("raw,expected", [(-5, 0), (0, 0), (55.5, 55.5), (100, 100), (1000, 100)])
    def test_clamp(self, raw: float, expected: float):
        """Test values below, inside and above the range."""
        assert clamp_score(raw) == expected
