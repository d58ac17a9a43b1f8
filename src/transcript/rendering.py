"""Render utterances as the plain-text transcript handed to the analyzer."""

from __future__ import annotations

from src.transcript.models import Utterance


def utterances_to_readable_text(utterances: list[Utterance]) -> str:
    """One ``"<speaker>: <text>"`` line per utterance, in the given order."""
    return "\n".join(f"{u.participant_name}: {u.text}" for u in utterances)
