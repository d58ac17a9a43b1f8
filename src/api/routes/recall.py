"""Recall bot endpoints: send a bot into a meeting and poll it to a decision."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_orchestrator, get_recall_client
from src.api.models import StartBotRequest, StartBotResponse
from src.errors import InvalidInput
from src.recall.client import RecallClient
from src.recall.orchestrator import PollingOrchestrator, PollOutcome, start_job

router = APIRouter()


# Input checks are dependencies declared ahead of the client so a bad request
# is rejected before configuration is looked at.
def require_meeting_url(request: StartBotRequest) -> str:
    url = (request.meeting_url or "").strip()
    if not url:
        raise InvalidInput("meeting_url required")
    return url


def require_bot_id(bot_id: str | None = None) -> str:
    if not bot_id:
        raise InvalidInput("bot_id required")
    return bot_id


@router.post("/api/recall/start", response_model=StartBotResponse)
async def start_bot(
    meeting_url: Annotated[str, Depends(require_meeting_url)],
    client: Annotated[RecallClient, Depends(get_recall_client)],
) -> StartBotResponse:
    """Create a Recall bot for the given meeting link."""
    # Synchronous httpx call, run in a worker thread.
    bot_id = await asyncio.to_thread(start_job, client, meeting_url)
    return StartBotResponse(bot_id=bot_id)


@router.get("/api/recall/status", response_model=PollOutcome, response_model_exclude_unset=True)
async def bot_status(
    bot_id: Annotated[str, Depends(require_bot_id)],
    orchestrator: Annotated[PollingOrchestrator, Depends(get_orchestrator)],
) -> PollOutcome:
    """Run one poll tick for a bot.

    Returns a plain status while the meeting runs, a ``transcript_not_ready``
    hint once it has ended, an ``error`` for a malformed transcript, or the
    validated ``decision``. The client keeps polling until it sees a
    ``decision`` or an ``error``.
    """
    return await asyncio.to_thread(orchestrator.poll_once, bot_id)
