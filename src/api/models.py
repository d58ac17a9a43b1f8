"""Pydantic request/response schemas for the Meeting Recall API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from src.analysis.models import Decision


class StartBotRequest(BaseModel):
    """Request body for POST /api/recall/start.

    ``meeting_url`` is optional at the schema level so a missing value is
    reported as ``InvalidInput`` rather than a generic validation error.
    """

    meeting_url: str | None = None


class StartBotResponse(BaseModel):
    """Response body for POST /api/recall/start."""

    bot_id: str


class AnalyzeRequest(BaseModel):
    """Request body for POST /api/analyze.

    ``transcript`` must be the raw Recall transcript array.
    """

    transcript: Any = None


class AnalyzeResponse(BaseModel):
    """Response body for POST /api/analyze."""

    decision: Decision


class AnalyzerStatusResponse(BaseModel):
    """Response body for GET /api/analyze (liveness probe)."""

    status: str = "alive"
    openai_key_exists: bool
