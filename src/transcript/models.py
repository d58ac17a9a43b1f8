"""Data models for word-level transcripts and reconstructed utterances."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Timestamp:
    """A word boundary: seconds from recording start plus wall-clock time.

    Only ``relative`` takes part in segmentation; ``absolute`` is informational.
    """

    relative: float
    absolute: str | None = None


@dataclass(frozen=True)
class Word:
    """A single transcribed token with its start and end timestamps."""

    text: str
    start: Timestamp
    end: Timestamp


@dataclass(frozen=True)
class Participant:
    """The speaker a transcript chunk is attributed to."""

    id: int | str | None
    name: str
    email: str | None = None


@dataclass(frozen=True)
class TranscriptChunk:
    """One provider-delivered batch of words for a single speaker."""

    participant: Participant
    words: tuple[Word, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Utterance:
    """A reconstructed continuous speech turn."""

    participant_name: str
    start_rel: float
    end_rel: float
    text: str
