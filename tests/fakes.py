"""Test doubles and payload builders shared across test modules."""

from __future__ import annotations

from typing import Any

from src.analysis.analyzer import TranscriptAnalyzer

TRANSCRIPT_URL = "https://recall-artifacts.test/transcript.json"


def word(text: str, start: float, end: float) -> dict[str, Any]:
    """A Recall transcript word with relative and absolute timestamps."""
    return {
        "text": text,
        "start_timestamp": {"relative": start, "absolute": "2026-01-27T15:00:00Z"},
        "end_timestamp": {"relative": end, "absolute": "2026-01-27T15:00:01Z"},
    }


class FakeAnalyzer(TranscriptAnalyzer):
    """Records the readable text it receives and returns a canned payload."""

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.calls: list[str] = []

    def analyze(self, readable_text: str) -> Any:
        self.calls.append(readable_text)
        return self.payload
