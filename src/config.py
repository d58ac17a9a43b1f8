from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Recall.ai bot provider
    recall_base_url: str = ""
    recall_api_key: str = ""
    recall_bot_name: str = "Meeting Notetaker"

    # Analyzer backends
    openai_api_key: str = ""
    anthropic_api_key: str = ""  # Only needed when llm_provider=anthropic
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-20250514"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    poll_interval_seconds: float = 2.5
    http_timeout_seconds: float = 30.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
