"""Bot lifecycle tracking: classify a Recall bot and decide the next poll action.

Everything here is pure: it reads the bot payload returned by
:meth:`RecallClient.get_bot` and never performs I/O, so the transition logic
can be driven by any scheduler (HTTP route, CLI loop, client timer).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from src.errors import TranscriptMalformed, TranscriptNotReady
from src.transcript.parsers import parse_chunks

if TYPE_CHECKING:
    from src.recall.client import JsonResponse
    from src.transcript.models import TranscriptChunk

# Exact (lower-cased) matches only. Similar-looking codes stay non-terminal.
TERMINAL_STATUS_CODES = frozenset({"done", "recording_done", "call_ended"})

UNKNOWN_STATUS = "unknown"

# The transcript shortcut has exposed its URL under both names.
TRANSCRIPT_URL_FIELDS = ("download_url", "transcript_download_url")

HINT_NO_TRANSCRIPT_URL = "Meeting ended, but transcript artifact not available yet. Keep polling."
HINT_NOT_DOWNLOADABLE = "Transcript URL exists but is not downloadable yet. Keep polling."


class BotState(StrEnum):
    """Where a bot job sits in the record -> transcript -> decision lifecycle."""

    CREATED = "created"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    TRANSCRIPT_PENDING = "transcript_pending"
    TRANSCRIPT_FAILED = "transcript_failed"
    ANALYZED = "analyzed"


class PollAction(StrEnum):
    """What a single poll tick should do after reading the bot."""

    WAIT = "wait"
    REPORT_NOT_READY = "report_not_ready"
    FETCH_TRANSCRIPT = "fetch_transcript"


def is_done_status(code: str | None) -> bool:
    """Return True for the terminal status codes, case-insensitively."""
    return (code or "").lower() in TERMINAL_STATUS_CODES


def latest_status_code(bot: dict[str, Any]) -> str:
    """Code of the most recent status change, or ``"unknown"`` if there is none."""
    changes = bot.get("status_changes")
    if not isinstance(changes, list) or not changes:
        return UNKNOWN_STATUS
    last = changes[-1]
    code = last.get("code") if isinstance(last, dict) else None
    return code if isinstance(code, str) else UNKNOWN_STATUS


def _recordings(bot: dict[str, Any]) -> list[Any]:
    recordings = bot.get("recordings")
    return recordings if isinstance(recordings, list) else []


def find_transcript_url(bot: dict[str, Any]) -> str | None:
    """Look up the transcript download URL on the latest recording.

    Checks ``media_shortcuts.transcript.data`` for each name in
    :data:`TRANSCRIPT_URL_FIELDS`, in order.
    """
    recordings = _recordings(bot)
    if not recordings:
        return None

    data: Any = recordings[-1]
    for key in ("media_shortcuts", "transcript", "data"):
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    if not isinstance(data, dict):
        return None

    for name in TRANSCRIPT_URL_FIELDS:
        url = data.get(name)
        if url:
            return str(url)
    return None


@dataclass(frozen=True)
class BotSnapshot:
    """The parts of a bot record the lifecycle depends on."""

    bot_id: str
    status_code: str
    has_history: bool
    transcript_url: str | None = None
    recordings_count: int = 0

    @classmethod
    def from_payload(cls, bot_id: str, bot: dict[str, Any]) -> BotSnapshot:
        code = latest_status_code(bot)
        done = is_done_status(code)
        changes = bot.get("status_changes")
        return cls(
            bot_id=bot_id,
            status_code=code,
            has_history=isinstance(changes, list) and bool(changes),
            # Recordings are only consulted once the call is over.
            transcript_url=find_transcript_url(bot) if done else None,
            recordings_count=len(_recordings(bot)),
        )

    @property
    def is_done(self) -> bool:
        return is_done_status(self.status_code)


def classify(snapshot: BotSnapshot) -> BotState:
    """Map a snapshot to its lifecycle state before any transcript fetch."""
    if not snapshot.is_done:
        return BotState.IN_PROGRESS if snapshot.has_history else BotState.CREATED
    if snapshot.transcript_url is None:
        return BotState.TRANSCRIPT_PENDING
    return BotState.DONE


def next_action(snapshot: BotSnapshot) -> PollAction:
    """Pure transition function: given the current snapshot, what to do next."""
    state = classify(snapshot)
    if state is BotState.DONE:
        return PollAction.FETCH_TRANSCRIPT
    if state is BotState.TRANSCRIPT_PENDING:
        return PollAction.REPORT_NOT_READY
    return PollAction.WAIT


def read_transcript_chunks(response: JsonResponse) -> list[TranscriptChunk]:
    """Validate a transcript download and parse it into chunks.

    Raises:
        TranscriptNotReady: The download answered non-2xx.
        TranscriptMalformed: The body is not an array of participant chunks.
    """
    if not response.ok:
        raise TranscriptNotReady(
            HINT_NOT_DOWNLOADABLE,
            transcript_fetch_status=response.status_code,
            recall_error=response.body,
        )

    payload = response.data
    if not isinstance(payload, list):
        raise TranscriptMalformed(response.body)

    try:
        return parse_chunks(payload)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise TranscriptMalformed(
            payload[:1],
            message=f"Transcript chunk is malformed: {exc!r}",
            kind="transcript_chunk_malformed",
        ) from exc
