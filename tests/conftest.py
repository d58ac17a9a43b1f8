"""Shared fixtures: Recall payloads, a valid decision, and a fake analyzer."""

from __future__ import annotations

from typing import Any

import pytest

from tests.fakes import TRANSCRIPT_URL, FakeAnalyzer, word


@pytest.fixture
def decision_payload() -> dict[str, Any]:
    return {
        "meeting_was_worth_it": False,
        "sassy_verdict": "Darling, this could have been a two-line email.",
        "should_schedule": True,
        "firm_verdict": "Schedule a follow-up to finalize the budget.",
        "confidence": 0.8,
        "suggested_title": "Budget follow-up",
        "suggested_when": "next Tuesday",
        "suggested_start_iso": None,
        "duration_minutes": 30,
    }


@pytest.fixture
def transcript_payload() -> list[dict[str, Any]]:
    """Two chunks: Alice says "Hi", pauses 2.0s, says "bye"; Bob talks over her first turn."""
    return [
        {
            "participant": {"id": 1, "name": "Alice", "email": "alice@example.com"},
            "words": [word("Hi", 0.0, 0.4), word("bye", 2.4, 2.8)],
        },
        {
            "participant": {"id": 2, "name": "Bob", "email": None},
            "words": [word("Hello", 0.2, 0.6), word("there", 0.7, 1.0)],
        },
    ]


@pytest.fixture
def fake_analyzer(decision_payload: dict[str, Any]) -> FakeAnalyzer:
    return FakeAnalyzer(decision_payload)


@pytest.fixture
def ended_bot() -> dict[str, Any]:
    return {
        "id": "bot-123",
        "status_changes": [
            {"code": "joining"},
            {"code": "in_call_recording"},
            {"code": "call_ended"},
        ],
        "recordings": [
            {"media_shortcuts": {"transcript": {"data": {"download_url": TRANSCRIPT_URL}}}},
        ],
    }
