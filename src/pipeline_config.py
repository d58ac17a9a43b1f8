"""Pipeline configuration: provider enums and immutable config values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from src.errors import ConfigurationError

if TYPE_CHECKING:
    from src.config import Settings


class LLMProvider(StrEnum):
    """Available analyzer backends for the decision step."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class RecallConfig:
    """Immutable connection settings for the Recall bot API.

    Passed explicitly into the client and orchestrator so several
    configurations (test, production) can coexist in one process.
    """

    base_url: str
    api_key: str
    bot_name: str = "Meeting Notetaker"
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RecallConfig:
        """Build a config from environment settings.

        Raises:
            ConfigurationError: If the base URL or API key is blank.
        """
        if not settings.recall_base_url or not settings.recall_api_key:
            raise ConfigurationError("Missing RECALL_BASE_URL or RECALL_API_KEY")
        return cls(
            base_url=settings.recall_base_url.rstrip("/"),
            api_key=settings.recall_api_key,
            bot_name=settings.recall_bot_name,
            timeout_seconds=settings.http_timeout_seconds,
        )


@dataclass(frozen=True)
class PollingConfig:
    """Caller-side polling cadence.

    The interval is measured from the end of one completed round-trip to the
    start of the next status check.
    """

    interval_seconds: float = 2.5
