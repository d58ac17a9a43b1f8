"""FastAPI dependencies that turn settings into explicit pipeline objects.

Tests swap these out through ``app.dependency_overrides``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends

from src.analysis.analyzer import TranscriptAnalyzer, get_analyzer
from src.config import settings
from src.pipeline_config import PollingConfig, RecallConfig
from src.recall.client import RecallClient
from src.recall.orchestrator import PollingOrchestrator


def get_recall_client() -> Iterator[RecallClient]:
    """Yield a Recall client for the request and close it afterwards.

    Raises:
        ConfigurationError: RECALL_BASE_URL or RECALL_API_KEY is unset.
    """
    client = RecallClient(RecallConfig.from_settings(settings))
    try:
        yield client
    finally:
        client.close()


def get_transcript_analyzer() -> TranscriptAnalyzer:
    return get_analyzer(settings)


def get_orchestrator(
    client: Annotated[RecallClient, Depends(get_recall_client)],
) -> PollingOrchestrator:
    # The analyzer is built only once a transcript is ready.
    return PollingOrchestrator(
        client,
        analyzer=lambda: get_analyzer(settings),
        polling=PollingConfig(interval_seconds=settings.poll_interval_seconds),
    )
