"""External judges for free-text answers."""

from .anthropic_judge import AnthropicJudge
from .base import (
    Judge,
    build_evaluation_prompt,
    clamp_score,
    parse_evaluation_response,
    strip_code_fence,
)
from .factory import create_judge
from .ollama_judge import OllamaJudge
from .openai_judge import OpenAIJudge

__all__ = [
    "Judge",
    "OpenAIJudge",
    "AnthropicJudge",
    "OllamaJudge",
    "create_judge",
    "build_evaluation_prompt",
    "strip_code_fence",
    "parse_evaluation_response",
    "clamp_score",
]
