"""Analyze endpoint: run the decision pipeline over an uploaded transcript."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from src.analysis.analyzer import TranscriptAnalyzer
from src.analysis.service import analyze_chunks
from src.api.dependencies import get_transcript_analyzer
from src.api.models import AnalyzeRequest, AnalyzeResponse, AnalyzerStatusResponse
from src.config import settings
from src.errors import InvalidInput
from src.transcript.models import TranscriptChunk
from src.transcript.parsers import parse_chunks

router = APIRouter()


def require_transcript_chunks(request: AnalyzeRequest) -> list[TranscriptChunk]:
    """Parse the body before the analyzer dependency is resolved."""
    if not isinstance(request.transcript, list):
        raise InvalidInput("Body must be { transcript: [...] } (transcript must be an array)")

    try:
        return parse_chunks(request.transcript)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Transcript chunk is malformed: {exc!r}") from exc


@router.get("/api/analyze", response_model=AnalyzerStatusResponse)
async def analyzer_status() -> AnalyzerStatusResponse:
    """Liveness probe that also reports whether an OpenAI key is configured."""
    return AnalyzerStatusResponse(openai_key_exists=bool(settings.openai_api_key))


@router.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze(
    chunks: Annotated[list[TranscriptChunk], Depends(require_transcript_chunks)],
    analyzer: Annotated[TranscriptAnalyzer, Depends(get_transcript_analyzer)],
) -> AnalyzeResponse:
    """Segment, render, and analyze a raw Recall transcript array."""
    decision = await asyncio.to_thread(analyze_chunks, chunks, analyzer)
    return AnalyzeResponse(decision=decision)
