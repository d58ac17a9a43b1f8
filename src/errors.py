"""Error taxonomy shared by the Recall, analysis, and API layers.

Every error carries the HTTP status the API layer should answer with and a
``to_dict()`` body, so routes never need to re-classify failures.
"""

from __future__ import annotations

from typing import Any


class MeetingRecallError(Exception):
    """Base class for all errors surfaced to callers."""

    status_code: int = 500
    kind: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class InvalidInput(MeetingRecallError):
    """A request field is missing or malformed."""

    status_code = 400
    kind = "invalid_input"


class ConfigurationError(MeetingRecallError):
    """A required operating parameter (URL, API key) is not set."""

    status_code = 500
    kind = "configuration_error"


class UpstreamError(MeetingRecallError):
    """The recording provider answered with a non-success response."""

    kind = "upstream_error"

    def __init__(self, message: str, status_code: int = 502, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.body is not None:
            data["details"] = self.body
        return data


class TranscriptNotReady(MeetingRecallError):
    """Transient state: the job is done but its transcript cannot be read yet.

    Not a failure. The orchestrator turns this into a "keep polling" outcome.
    """

    status_code = 200
    kind = "transcript_not_ready"

    def __init__(self, hint: str, **diagnostics: Any) -> None:
        super().__init__(hint)
        self.hint = hint
        self.diagnostics = diagnostics


class TranscriptMalformed(MeetingRecallError):
    """The transcript artifact downloaded but has an unexpected structure.

    Fatal for the job: a structural problem does not fix itself by polling.
    """

    status_code = 200
    kind = "transcript_not_array"

    def __init__(
        self,
        preview: Any,
        message: str = "Transcript download was not an array",
        kind: str | None = None,
    ) -> None:
        super().__init__(message)
        self.preview = preview
        if kind is not None:
            self.kind = kind


class AnalysisContractViolation(MeetingRecallError):
    """The analyzer payload failed Decision schema or range validation."""

    status_code = 502
    kind = "analysis_contract_violation"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"Invalid decision field {field!r}: {message}")
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data


class AnalysisUnavailable(MeetingRecallError):
    """The analyzer returned no parsed payload or could not be reached."""

    status_code = 503
    kind = "analysis_unavailable"
