"""Application settings and configuration."""

from enum import Enum
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class JudgeProvider(str, Enum):
    """External judges available for free-text grading."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Judge selection
    judge_provider: JudgeProvider = Field(
        default=JudgeProvider.OPENAI,
        description="Which provider grades free-text answers",
        validation_alias="JUDGE_PROVIDER",
    )

    # OpenAI
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
        validation_alias="OPENAI_API_KEY",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI chat model",
        validation_alias="OPENAI_MODEL",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL",
        validation_alias="OPENAI_BASE_URL",
    )

    # Anthropic
    anthropic_api_key: str | None = Field(
        default=None,
        description="Anthropic API key",
        validation_alias="ANTHROPIC_API_KEY",
    )
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-20241022",
        description="Anthropic model",
        validation_alias="ANTHROPIC_MODEL",
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com/v1",
        description="Anthropic API base URL",
        validation_alias="ANTHROPIC_BASE_URL",
    )

    # Ollama
    ollama_url: str = Field(
        default="http://localhost:11434",
        description="URL of the Ollama instance",
        validation_alias="OLLAMA_URL",
    )
    ollama_model: str = Field(
        default="llama3.2",
        description="Ollama model name",
        validation_alias="OLLAMA_MODEL",
    )

    # Evaluation
    response_language: str = Field(
        default="Français",
        description="Language the judge must answer in, passed verbatim into prompts",
        validation_alias="RESPONSE_LANGUAGE",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0.0,
        description="Judge HTTP timeout in seconds",
        validation_alias="REQUEST_TIMEOUT",
    )

    # Quiz discovery
    quiz_folder: str = Field(
        default=".",
        description="Folder scanned (recursively) for quiz markdown files",
        validation_alias="QUIZ_FOLDER",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI",
        validation_alias="LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
    }


# Loaded once, then shared by the CLI commands
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
