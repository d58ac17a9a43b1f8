"""Utterance segmentation: rebuild speech turns from word-level chunks."""

from __future__ import annotations

import re

from src.transcript.models import TranscriptChunk, Utterance, Word

# Silence longer than this (seconds) between two words ends a turn.
GAP_THRESHOLD_SECONDS = 1.2

_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.!?;:])")


def join_words(words: list[str]) -> str:
    """Space-join tokens, attaching punctuation to the preceding token.

    >>> join_words(["Hello", ",", "world", "."])
    'Hello, world.'
    """
    return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", " ".join(words))


def _to_utterance(speaker: str, buffer: list[Word]) -> Utterance:
    return Utterance(
        participant_name=speaker,
        start_rel=buffer[0].start.relative,
        end_rel=buffer[-1].end.relative,
        text=join_words([w.text for w in buffer]),
    )


def chunks_to_utterances(chunks: list[TranscriptChunk]) -> list[Utterance]:
    """Split each chunk on silence gaps and merge all turns into time order.

    Each chunk is processed independently: a turn is flushed whenever the
    next word starts more than :data:`GAP_THRESHOLD_SECONDS` after the
    previous word ended (a gap of exactly the threshold does not split).
    Turns from different chunks are never merged, even when the same
    speaker continues seamlessly across a chunk boundary.

    The combined list is stable-sorted by start time, so utterances that
    start together keep their chunk order.

    Args:
        chunks: Transcript chunks, each with words in start-time order.

    Returns:
        Utterances sorted by ``start_rel`` ascending.
    """
    utterances: list[Utterance] = []

    for chunk in chunks:
        speaker = chunk.participant.name
        buffer: list[Word] = []
        last_end: float | None = None

        for word in chunk.words:
            if last_end is not None and word.start.relative - last_end > GAP_THRESHOLD_SECONDS:
                utterances.append(_to_utterance(speaker, buffer))
                buffer = []
            buffer.append(word)
            last_end = word.end.relative

        if buffer:
            utterances.append(_to_utterance(speaker, buffer))

    # list.sort is stable
    utterances.sort(key=lambda u: u.start_rel)
    return utterances
