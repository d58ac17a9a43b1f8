"""Parser for the Recall transcript artifact (JSON array of participant chunks)."""

from __future__ import annotations

from typing import Any

from src.transcript.models import Participant, Timestamp, TranscriptChunk, Word


def _parse_timestamp(data: dict[str, Any]) -> Timestamp:
    return Timestamp(relative=float(data["relative"]), absolute=data.get("absolute"))


def _parse_word(data: dict[str, Any]) -> Word:
    return Word(
        text=data["text"],
        start=_parse_timestamp(data["start_timestamp"]),
        end=_parse_timestamp(data["end_timestamp"]),
    )


def parse_chunks(raw: list[dict[str, Any]]) -> list[TranscriptChunk]:
    """Convert the downloaded transcript payload into :class:`TranscriptChunk` objects.

    Expected shape::

        [
          {
            "participant": {"id": 1, "name": "Alice", "email": null},
            "words": [
              {
                "text": "Hi",
                "start_timestamp": {"relative": 0.0, "absolute": "..."},
                "end_timestamp": {"relative": 0.4, "absolute": "..."}
              }
            ]
          }
        ]

    Words are assumed well-formed; a missing timestamp raises ``KeyError``.
    Chunk and word order is preserved as delivered.
    """
    chunks: list[TranscriptChunk] = []
    for item in raw:
        person = item.get("participant") or {}
        participant = Participant(
            id=person.get("id"),
            name=person.get("name") or "Unknown",
            email=person.get("email"),
        )
        words = tuple(_parse_word(w) for w in item.get("words") or [])
        chunks.append(TranscriptChunk(participant=participant, words=words))
    return chunks
