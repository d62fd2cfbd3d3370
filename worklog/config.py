"""Environment-backed settings: API keys, default models and log level."""

from __future__ import annotations

from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Worklog generator settings.

    Each field maps to the upper-cased environment variable of the same name.
    """

    # Credentials
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Summarization
    llm_provider: str = "openai"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-20250514"
    summary_max_tokens: int = 500

    # App config
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def credential_for(self, provider: str) -> str:
        """Return the API key configured for *provider* (empty if unset)."""
        if provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, provider: str) -> str:
        """Return the default model name for *provider*."""
        if provider == "anthropic":
            return self.anthropic_model
        return self.openai_model


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings, read once.

    A malformed or unreadable `.env` is skipped; the environment alone still
    supplies the keys.
    """
    try:
        return Settings()
    except (ValidationError, OSError):
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
