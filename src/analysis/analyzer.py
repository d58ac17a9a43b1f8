"""Analyzer backends: turn a readable transcript into a Decision-shaped payload.

The backends only produce the raw payload. Validation against the
:class:`~src.analysis.models.Decision` contract happens in the caller, so a
backend can be swapped or mocked without touching segmentation or lifecycle
logic.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import anthropic
import openai

from src.analysis.models import DECISION_JSON_SCHEMA
from src.errors import AnalysisContractViolation, AnalysisUnavailable, ConfigurationError
from src.pipeline_config import LLMProvider

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Chief of Recall. You MUST return JSON that matches the schema.\n\n"
    "Output requirements:\n"
    '1. "sassy_verdict": in a sassy tone, say whether this should have been a '
    "meeting at all.\n"
    '   - Set "meeting_was_worth_it" to true if meaningful decisions were made.\n'
    "   - Otherwise false (it could have been an email or a quick async update).\n"
    '2. "firm_verdict": in a firm tone, say whether a follow-up meeting should be '
    "scheduled.\n"
    '   - Set "should_schedule" to true ONLY if there is explicit intent to meet '
    "again or a clear need to sync again (action items and/or a timeframe).\n"
    '   - Polite closings like "see you next time" are not enough without a '
    "concrete reason or timeframe.\n\n"
    "Scheduling fields:\n"
    '- If follow-up timing is explicitly discussed ("tomorrow at 3pm", "next '
    'Tuesday", "in two weeks"), put it in "suggested_when"; otherwise null.\n'
    '- If a title is clear, set "suggested_title"; otherwise null.\n'
    '- Set "suggested_start_iso" to an ISO-8601 start time only when an exact '
    'time is stated; otherwise null.\n'
    '- Set "duration_minutes" (5-240) only when a length is stated or obvious; '
    "otherwise null.\n\n"
    'Always return ALL fields. "confidence" is a number between 0 and 1.'
)

DECISION_TOOL: dict[str, Any] = {
    "name": "record_decision",
    "description": (
        "Record the verdict on whether the meeting was worth it and whether a "
        "follow-up should be scheduled. Call this exactly once."
    ),
    "input_schema": DECISION_JSON_SCHEMA,
}


class TranscriptAnalyzer(ABC):
    """Capability: accept readable transcript text, return a Decision-shaped payload."""

    @abstractmethod
    def analyze(self, readable_text: str) -> Any:
        """Return the raw structured payload (normally a ``dict``).

        Raises:
            AnalysisUnavailable: No parsed payload came back.
        """
        raise NotImplementedError


def _user_message(readable_text: str) -> str:
    return f"Transcript:\n{readable_text}"


class OpenAIAnalyzer(TranscriptAnalyzer):
    """Structured-output analysis via the OpenAI chat completions API."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini") -> None:
        self._client = openai.OpenAI(api_key=api_key)
        self._model = model

    def analyze(self, readable_text: str) -> Any:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": _user_message(readable_text)},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "decision",
                        "schema": DECISION_JSON_SCHEMA,
                        "strict": True,
                    },
                },
            )
        except openai.APIError as exc:
            raise AnalysisUnavailable(f"LLM unavailable: {exc.message}") from exc

        return _parse_completion(response)


def _parse_completion(response: Any) -> Any:
    """Extract the JSON payload from an OpenAI chat completion."""
    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise AnalysisUnavailable("Failed to parse decision from OpenAI response")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise AnalysisContractViolation("decision", f"response is not valid JSON: {exc}") from exc


class AnthropicAnalyzer(TranscriptAnalyzer):
    """Forced tool-use analysis via the Anthropic messages API."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514") -> None:
        self._client = anthropic.Anthropic(api_key=api_key)
        self._model = model

    def analyze(self, readable_text: str) -> Any:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=1024,
                system=SYSTEM_PROMPT,
                tools=[DECISION_TOOL],
                tool_choice={"type": "tool", "name": DECISION_TOOL["name"]},
                messages=[{"role": "user", "content": _user_message(readable_text)}],
            )
        except anthropic.APIStatusError as exc:
            raise AnalysisUnavailable(f"LLM unavailable: {exc.message}") from exc
        except anthropic.APIError as exc:
            raise AnalysisUnavailable(f"LLM unavailable: {exc}") from exc

        return _parse_tool_response(response)


def _parse_tool_response(response: Any) -> Any:
    """Return the input of the first ``record_decision`` tool_use block."""
    for block in response.content:
        if block.type != "tool_use":
            continue
        if block.name != DECISION_TOOL["name"]:
            continue

        data = block.input
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise AnalysisContractViolation(
                    "decision", f"tool input is not valid JSON: {exc}"
                ) from exc
        return data

    raise AnalysisUnavailable("Failed to parse decision from Anthropic response")


def get_analyzer(settings: Settings) -> TranscriptAnalyzer:
    """Build the analyzer selected by ``settings.llm_provider``.

    Raises:
        ConfigurationError: Unknown provider, or its API key is not set.
    """
    try:
        provider = LLMProvider(settings.llm_provider.lower())
    except ValueError as exc:
        supported = [p.value for p in LLMProvider]
        raise ConfigurationError(
            f"Unknown LLM_PROVIDER {settings.llm_provider!r}. Supported: {supported}"
        ) from exc

    if provider is LLMProvider.ANTHROPIC:
        if not settings.anthropic_api_key:
            raise ConfigurationError("Missing ANTHROPIC_API_KEY")
        logger.info("Using Anthropic analyzer (%s)", settings.anthropic_model)
        return AnthropicAnalyzer(settings.anthropic_api_key, settings.anthropic_model)

    if not settings.openai_api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY")
    logger.info("Using OpenAI analyzer (%s)", settings.llm_model)
    return OpenAIAnalyzer(settings.openai_api_key, settings.llm_model)
