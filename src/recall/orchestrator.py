"""Polling orchestrator: one status tick per call, plus a blocking poll loop.

A tick performs, strictly in sequence, bot fetch -> (transcript fetch) ->
(segment, render, analyze, validate). Nothing is retried internally; the
caller decides when to tick again based on the returned :class:`PollOutcome`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from src.analysis.analyzer import TranscriptAnalyzer
from src.analysis.models import Decision
from src.analysis.service import analyze_chunks
from src.errors import InvalidInput, TranscriptMalformed, TranscriptNotReady
from src.pipeline_config import PollingConfig
from src.recall.client import RecallClient
from src.recall.lifecycle import (
    HINT_NO_TRANSCRIPT_URL,
    BotSnapshot,
    BotState,
    PollAction,
    classify,
    next_action,
    read_transcript_chunks,
)

logger = logging.getLogger(__name__)


class PollOutcome(BaseModel):
    """Result of a single poll tick.

    Only the fields relevant to the outcome are set; serialize with
    ``model_dump(exclude_unset=True)`` to get the wire shape.
    """

    bot_id: str
    status: str
    state: BotState

    # "keep polling" outcomes
    transcript_not_ready: bool | None = None
    hint: str | None = None
    recordings_count: int | None = None
    transcript_fetch_status: int | None = None
    recall_error: Any = None

    # malformed artifact
    error: str | None = None
    error_code: str | None = None
    transcript_preview: Any = None

    decision: Decision | None = None

    @property
    def is_terminal(self) -> bool:
        """True when polling should stop (decision reached or fatal artifact error)."""
        return self.decision is not None or self.error is not None


class CancellationToken:
    """Lets a caller abandon a poll loop, including while it is waiting."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to *timeout* seconds; return True if cancelled meanwhile."""
        return self._event.wait(timeout)


AnalyzerSource = TranscriptAnalyzer | Callable[[], TranscriptAnalyzer]


def start_job(client: RecallClient, meeting_url: str | None) -> str:
    """Send a recording bot into a meeting and return its bot ID.

    Raises:
        InvalidInput: *meeting_url* is empty or missing.
        UpstreamError: The provider rejected the request.
    """
    url = (meeting_url or "").strip()
    if not url:
        raise InvalidInput("meeting_url required")
    return client.create_bot(url)


class PollingOrchestrator:
    """Drive a bot job from status checks to a validated :class:`Decision`.

    Args:
        client: Recall API client built from an explicit ``RecallConfig``.
        analyzer: A :class:`TranscriptAnalyzer`, or a zero-argument factory
            that builds one the first time a transcript is ready (so polling
            a live meeting does not require analyzer credentials).
        polling: Poll cadence used by :meth:`run`.
    """

    def __init__(
        self,
        client: RecallClient,
        analyzer: AnalyzerSource,
        polling: PollingConfig | None = None,
    ) -> None:
        self._client = client
        self._analyzer: TranscriptAnalyzer | None = None
        self._analyzer_factory: Callable[[], TranscriptAnalyzer]
        if isinstance(analyzer, TranscriptAnalyzer):
            self._analyzer = analyzer
            self._analyzer_factory = lambda: analyzer
        elif callable(analyzer):
            self._analyzer_factory = analyzer
        else:
            raise TypeError(
                f"analyzer must be a TranscriptAnalyzer or a factory, got {type(analyzer).__name__}"
            )
        self.polling = polling or PollingConfig()

    @property
    def analyzer(self) -> TranscriptAnalyzer:
        if self._analyzer is None:
            self._analyzer = self._analyzer_factory()
        return self._analyzer

    def start_job(self, meeting_url: str | None) -> str:
        return start_job(self._client, meeting_url)

    def poll_once(self, bot_id: str) -> PollOutcome:
        """Run one status tick for *bot_id*.

        Returns:
            A :class:`PollOutcome` that is either a plain status, a "keep
            polling" hint, a malformed-artifact error, or a decision.

        Raises:
            InvalidInput: *bot_id* is empty.
            UpstreamError: The bot record could not be fetched.
            AnalysisUnavailable: The analyzer returned nothing.
            AnalysisContractViolation: The analyzer payload failed validation.
        """
        if not bot_id:
            raise InvalidInput("bot_id required")

        bot = self._client.get_bot(bot_id)
        snapshot = BotSnapshot.from_payload(bot_id, bot)
        action = next_action(snapshot)
        logger.info("Bot %s status=%s action=%s", bot_id, snapshot.status_code, action)

        if action is PollAction.WAIT:
            return PollOutcome(
                bot_id=bot_id, status=snapshot.status_code, state=classify(snapshot)
            )

        transcript_url = snapshot.transcript_url
        # FETCH_TRANSCRIPT implies a URL; without one the bot is still pending.
        if action is PollAction.REPORT_NOT_READY or transcript_url is None:
            logger.warning("Bot %s ended but has no transcript URL yet", bot_id)
            return PollOutcome(
                bot_id=bot_id,
                status=snapshot.status_code,
                state=BotState.TRANSCRIPT_PENDING,
                transcript_not_ready=True,
                hint=HINT_NO_TRANSCRIPT_URL,
                recordings_count=snapshot.recordings_count,
            )

        response = self._client.download_transcript(transcript_url)
        try:
            chunks = read_transcript_chunks(response)
        except TranscriptNotReady as exc:
            logger.warning(
                "Transcript for bot %s not downloadable yet (%s)",
                bot_id,
                response.status_code,
            )
            return PollOutcome(
                bot_id=bot_id,
                status=snapshot.status_code,
                state=BotState.TRANSCRIPT_PENDING,
                transcript_not_ready=True,
                hint=exc.hint,
                **exc.diagnostics,
            )
        except TranscriptMalformed as exc:
            logger.warning("Transcript for bot %s is malformed: %s", bot_id, exc.message)
            return PollOutcome(
                bot_id=bot_id,
                status=snapshot.status_code,
                state=BotState.TRANSCRIPT_FAILED,
                error=exc.message,
                error_code=exc.kind,
                transcript_preview=exc.preview,
            )

        decision = analyze_chunks(chunks, self.analyzer)
        logger.info(
            "Decision for bot %s: worth_it=%s schedule=%s",
            bot_id,
            decision.meeting_was_worth_it,
            decision.should_schedule,
        )
        return PollOutcome(
            bot_id=bot_id, status="done", state=BotState.ANALYZED, decision=decision
        )

    def run(
        self,
        bot_id: str,
        cancel: CancellationToken | None = None,
        on_outcome: Callable[[PollOutcome], None] | None = None,
    ) -> PollOutcome | None:
        """Poll until a terminal outcome, waiting the configured interval between ticks.

        The wait starts after each completed round-trip. Errors from
        :meth:`poll_once` propagate and end the loop.

        Args:
            bot_id: The bot to follow.
            cancel: Token the caller can use to abandon the loop.
            on_outcome: Called with every outcome produced before cancellation.

        Returns:
            The terminal outcome, or ``None`` if the loop was cancelled. An
            outcome that arrives after cancellation is discarded.
        """
        cancel = cancel or CancellationToken()

        while not cancel.cancelled:
            outcome = self.poll_once(bot_id)
            if cancel.cancelled:
                logger.info("Polling for bot %s cancelled; discarding outcome", bot_id)
                return None

            if on_outcome is not None:
                on_outcome(outcome)
            if outcome.is_terminal:
                return outcome

            if cancel.wait(self.polling.interval_seconds):
                break

        logger.info("Polling for bot %s cancelled", bot_id)
        return None
