"""Decision contract: the validated shape of an analyzer result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.errors import AnalysisContractViolation


class Decision(BaseModel):
    """Meeting verdict and follow-up scheduling intent.

    Every field is required. Unknown values are ``null``, never absent.
    Validation is strict so no value is silently coerced (``"0.5"`` is not a
    confidence, ``1`` is not a boolean). The one exception is a whole-number
    float for ``duration_minutes``, which becomes an ``int``.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    meeting_was_worth_it: bool
    sassy_verdict: str = Field(min_length=1)

    should_schedule: bool
    firm_verdict: str = Field(min_length=1)

    confidence: float = Field(ge=0, le=1)

    suggested_title: str | None
    suggested_when: str | None

    # Consumed by calendar export
    suggested_start_iso: str | None
    duration_minutes: int | None = Field(ge=5, le=240)

    @field_validator("sassy_verdict", "firm_verdict")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _integral_minutes(cls, value: Any) -> Any:
        # JSON has one number type, so 30.0 is still a whole number of minutes.
        if type(value) is float and value.is_integer():
            return int(value)
        return value


def _first_error(exc: ValidationError) -> tuple[str, str]:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"]) or "decision"
    return field, err["msg"]


def validate_decision(payload: Any) -> Decision:
    """Validate an analyzer payload against the :class:`Decision` contract.

    Args:
        payload: The structured object returned by the analyzer.

    Returns:
        A frozen :class:`Decision`.

    Raises:
        AnalysisContractViolation: Naming the first offending field.
    """
    if not isinstance(payload, dict):
        raise AnalysisContractViolation(
            "decision", f"expected an object, got {type(payload).__name__}"
        )
    try:
        return Decision.model_validate(payload)
    except ValidationError as exc:
        field, message = _first_error(exc)
        raise AnalysisContractViolation(field, message) from exc


# JSON schema handed to the analyzer backends. Nullable fields are still
# listed as required so the model must emit them explicitly.
DECISION_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "meeting_was_worth_it": {"type": "boolean"},
        "sassy_verdict": {"type": "string"},
        "should_schedule": {"type": "boolean"},
        "firm_verdict": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "suggested_title": {"type": ["string", "null"]},
        "suggested_when": {"type": ["string", "null"]},
        "suggested_start_iso": {"type": ["string", "null"]},
        "duration_minutes": {"type": ["integer", "null"], "minimum": 5, "maximum": 240},
    },
    "required": list(Decision.model_fields),
    "additionalProperties": False,
}
