"""Tests for transcript parsing, utterance segmentation, and rendering."""

from __future__ import annotations

from typing import Any

import pytest

from src.transcript.models import Participant, Timestamp, TranscriptChunk, Utterance, Word
from src.transcript.parsers import parse_chunks
from src.transcript.rendering import utterances_to_readable_text
from src.transcript.segmentation import (
    GAP_THRESHOLD_SECONDS,
    chunks_to_utterances,
    join_words,
)


def _w(text: str, start: float, end: float) -> Word:
    return Word(text=text, start=Timestamp(start), end=Timestamp(end))


def _chunk(name: str, *words: Word) -> TranscriptChunk:
    return TranscriptChunk(participant=Participant(id=None, name=name), words=tuple(words))


# ---------------------------------------------------------------------------
# join_words
# ---------------------------------------------------------------------------


class TestJoinWords:
    def test_punctuation_attaches_to_previous_token(self) -> None:
        assert join_words(["Hello", ",", "world", "."]) == "Hello, world."

    @pytest.mark.parametrize("mark", [",", ".", "!", "?", ";", ":"])
    def test_each_punctuation_mark(self, mark: str) -> None:
        assert join_words(["Wait", mark]) == f"Wait{mark}"

    def test_other_symbols_keep_their_space(self) -> None:
        assert join_words(["cost", "-", "benefit"]) == "cost - benefit"

    def test_empty(self) -> None:
        assert join_words([]) == ""


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


class TestChunksToUtterances:
    def test_empty_input(self) -> None:
        assert chunks_to_utterances([]) == []

    def test_chunk_without_words_yields_nothing(self) -> None:
        assert chunks_to_utterances([_chunk("Alice")]) == []

    def test_single_turn(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("Hello", 0.0, 0.5), _w(",", 0.5, 0.5), _w("team", 0.6, 1.0))]
        )
        assert utterances == [
            Utterance(participant_name="Alice", start_rel=0.0, end_rel=1.0, text="Hello, team")
        ]

    def test_gap_exactly_at_threshold_does_not_split(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("one", 0.0, 0.0), _w("two", GAP_THRESHOLD_SECONDS, 1.5))]
        )
        assert len(utterances) == 1
        assert utterances[0].text == "one two"

    def test_gap_just_over_threshold_splits(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("one", 0.0, 0.0), _w("two", 1.2001, 1.5))]
        )
        assert [u.text for u in utterances] == ["one", "two"]
        assert utterances[1].start_rel == 1.2001
        assert utterances[1].end_rel == 1.5

    def test_gap_measured_from_previous_word_end(self) -> None:
        # A long word ending late keeps the next word in the same turn.
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("sooo", 0.0, 3.0), _w("long", 3.5, 4.0))]
        )
        assert len(utterances) == 1

    def test_span_uses_first_start_and_last_end(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Bob", _w("a", 1.0, 1.2), _w("b", 1.3, 1.9), _w("c", 2.0, 2.6))]
        )
        assert (utterances[0].start_rel, utterances[0].end_rel) == (1.0, 2.6)

    def test_global_order_by_start_time(self) -> None:
        late = _chunk("Carol", _w("late", 10.0, 10.5))
        early = _chunk("Dan", _w("early", 1.0, 1.5))
        middle = _chunk("Erin", _w("middle", 5.0, 5.5))

        utterances = chunks_to_utterances([late, early, middle])

        assert [u.text for u in utterances] == ["early", "middle", "late"]

    def test_equal_start_times_keep_chunk_order(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("first", 2.0, 2.5)), _chunk("Bob", _w("second", 2.0, 2.4))]
        )
        assert [u.participant_name for u in utterances] == ["Alice", "Bob"]

    def test_same_speaker_across_chunks_is_not_merged(self) -> None:
        utterances = chunks_to_utterances(
            [_chunk("Alice", _w("part", 0.0, 0.5)), _chunk("Alice", _w("two", 0.6, 1.0))]
        )
        assert [u.text for u in utterances] == ["part", "two"]

    def test_deterministic(self) -> None:
        chunks = [
            _chunk("Alice", _w("Hi", 0.0, 0.4), _w("bye", 2.4, 2.8)),
            _chunk("Bob", _w("Hello", 0.2, 0.6)),
        ]
        assert chunks_to_utterances(chunks) == chunks_to_utterances(chunks)

    def test_interleaved_speakers(self, transcript_payload: list[dict[str, Any]]) -> None:
        utterances = chunks_to_utterances(parse_chunks(transcript_payload))

        assert [(u.participant_name, u.text) for u in utterances] == [
            ("Alice", "Hi"),
            ("Bob", "Hello there"),
            ("Alice", "bye"),
        ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestReadableText:
    def test_empty(self) -> None:
        assert utterances_to_readable_text([]) == ""

    def test_one_line_per_utterance(self) -> None:
        text = utterances_to_readable_text(
            [
                Utterance("Alice", 0.0, 0.4, "Hi"),
                Utterance("Bob", 0.2, 1.0, "Hello there"),
            ]
        )
        assert text == "Alice: Hi\nBob: Hello there"

    def test_keeps_given_order(self) -> None:
        text = utterances_to_readable_text(
            [Utterance("Zed", 9.0, 9.5, "last"), Utterance("Amy", 1.0, 1.5, "first")]
        )
        assert text.splitlines() == ["Zed: last", "Amy: first"]


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParseChunks:
    def test_parses_participant_and_words(self, transcript_payload: list[dict[str, Any]]) -> None:
        chunks = parse_chunks(transcript_payload)

        assert len(chunks) == 2
        assert chunks[0].participant == Participant(
            id=1, name="Alice", email="alice@example.com"
        )
        assert [w.text for w in chunks[0].words] == ["Hi", "bye"]
        assert chunks[0].words[1].start.relative == 2.4
        assert chunks[0].words[0].start.absolute == "2026-01-27T15:00:00Z"

    def test_missing_words_is_empty_chunk(self) -> None:
        chunks = parse_chunks([{"participant": {"id": 3, "name": "Eve"}}])
        assert chunks[0].words == ()

    def test_missing_timestamp_raises(self) -> None:
        with pytest.raises(KeyError):
            parse_chunks([{"participant": {"name": "Eve"}, "words": [{"text": "hi"}]}])
