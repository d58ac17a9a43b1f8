"""Tests for Settings, provider enums, and explicit config values."""

from __future__ import annotations

import pytest

from src.config import Settings, get_settings
from src.errors import ConfigurationError
from src.pipeline_config import LLMProvider, PollingConfig, RecallConfig

# ---------------------------------------------------------------------------
# Enum tests
# ---------------------------------------------------------------------------


class TestLLMProvider:
    def test_values(self) -> None:
        assert LLMProvider.OPENAI.value == "openai"
        assert LLMProvider.ANTHROPIC.value == "anthropic"

    def test_from_string(self) -> None:
        assert LLMProvider("openai") is LLMProvider.OPENAI
        assert LLMProvider("anthropic") is LLMProvider.ANTHROPIC

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            LLMProvider("invalid")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings for JSON serialization."""
        assert isinstance(LLMProvider.OPENAI, str)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("RECALL_BOT_NAME", "LLM_PROVIDER", "LLM_MODEL", "POLL_INTERVAL_SECONDS"):
            monkeypatch.delenv(name, raising=False)
        cfg = Settings(_env_file=None)  # type: ignore[call-arg]

        assert cfg.recall_bot_name == "Meeting Notetaker"
        assert cfg.llm_provider == "openai"
        assert cfg.llm_model == "gpt-4o-mini"
        assert cfg.poll_interval_seconds == 2.5

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECALL_BASE_URL", "https://us-west-2.recall.ai")
        monkeypatch.setenv("RECALL_API_KEY", "env-key")
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "5")
        cfg = Settings(_env_file=None)  # type: ignore[call-arg]

        assert cfg.recall_base_url == "https://us-west-2.recall.ai"
        assert cfg.recall_api_key == "env-key"
        assert cfg.poll_interval_seconds == 5.0

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


# ---------------------------------------------------------------------------
# RecallConfig / PollingConfig
# ---------------------------------------------------------------------------


class TestRecallConfig:
    def test_from_settings(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            recall_base_url="https://us-west-2.recall.ai/",
            recall_api_key="key",
            recall_bot_name="Notetaker",
            http_timeout_seconds=10.0,
        )
        cfg = RecallConfig.from_settings(settings)

        assert cfg == RecallConfig(
            base_url="https://us-west-2.recall.ai",
            api_key="key",
            bot_name="Notetaker",
            timeout_seconds=10.0,
        )

    @pytest.mark.parametrize(
        ("base_url", "api_key"), [("", "key"), ("https://recall.test", ""), ("", "")]
    )
    def test_missing_values_raise(self, base_url: str, api_key: str) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, recall_base_url=base_url, recall_api_key=api_key
        )
        with pytest.raises(ConfigurationError, match="RECALL_BASE_URL or RECALL_API_KEY"):
            RecallConfig.from_settings(settings)

    def test_immutable(self) -> None:
        cfg = RecallConfig(base_url="https://a", api_key="k")
        with pytest.raises(AttributeError):
            cfg.api_key = "other"  # type: ignore[misc]

    def test_configs_coexist(self) -> None:
        test_cfg = RecallConfig(base_url="https://recall.test", api_key="test")
        prod_cfg = RecallConfig(base_url="https://us-west-2.recall.ai", api_key="prod")
        assert test_cfg != prod_cfg


class TestPollingConfig:
    def test_default_interval(self) -> None:
        assert PollingConfig().interval_seconds == 2.5

    def test_immutable(self) -> None:
        cfg = PollingConfig()
        with pytest.raises(AttributeError):
            cfg.interval_seconds = 1.0  # type: ignore[misc]
