"""Transcript analysis pipeline: segment -> render -> analyze -> validate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.analysis.models import Decision, validate_decision
from src.transcript.rendering import utterances_to_readable_text
from src.transcript.segmentation import chunks_to_utterances

if TYPE_CHECKING:
    from src.analysis.analyzer import TranscriptAnalyzer
    from src.transcript.models import TranscriptChunk

logger = logging.getLogger(__name__)


def analyze_chunks(chunks: list[TranscriptChunk], analyzer: TranscriptAnalyzer) -> Decision:
    """Run the full decision pipeline over parsed transcript chunks.

    Args:
        chunks: Parsed transcript chunks.
        analyzer: Backend that turns readable text into a Decision payload.

    Returns:
        The validated :class:`Decision`.

    Raises:
        AnalysisUnavailable: The analyzer produced no payload.
        AnalysisContractViolation: The payload failed validation.
    """
    utterances = chunks_to_utterances(chunks)
    readable = utterances_to_readable_text(utterances)
    logger.info(
        "Analyzing transcript: %d chunks, %d utterances", len(chunks), len(utterances)
    )

    payload = analyzer.analyze(readable)
    return validate_decision(payload)
