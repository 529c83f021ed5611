"""Build the configured judge from settings."""

from quizzator.config.settings import JudgeProvider, Settings
from quizzator.errors import JudgeConfigurationError

from .anthropic_judge import AnthropicJudge
from .base import Judge
from .ollama_judge import OllamaJudge
from .openai_judge import OpenAIJudge


def create_judge(settings: Settings) -> Judge:
    """
    Create the judge selected by ``settings.judge_provider``.

    Args:
        settings: Application settings

    Returns:
        A ready-to-use Judge

    Raises:
        JudgeConfigurationError: If the selected provider is missing its
            credentials, URL or model
    """
    provider = settings.judge_provider

    if provider == JudgeProvider.OPENAI:
        if not settings.openai_api_key:
            raise JudgeConfigurationError("OpenAI API key not configured (OPENAI_API_KEY)")
        return OpenAIJudge(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout,
        )

    if provider == JudgeProvider.ANTHROPIC:
        if not settings.anthropic_api_key:
            raise JudgeConfigurationError(
                "Anthropic API key not configured (ANTHROPIC_API_KEY)"
            )
        return AnthropicJudge(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            base_url=settings.anthropic_base_url,
            timeout=settings.request_timeout,
        )

    if provider == JudgeProvider.OLLAMA:
        if not settings.ollama_url or not settings.ollama_model:
            raise JudgeConfigurationError("Ollama configuration incomplete (OLLAMA_URL, OLLAMA_MODEL)")
        return OllamaJudge(
            base_url=settings.ollama_url,
            model=settings.ollama_model,
            timeout=settings.request_timeout,
        )

    raise JudgeConfigurationError(f"Invalid judge provider selected: {provider}")
