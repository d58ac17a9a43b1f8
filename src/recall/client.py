"""HTTP client for the Recall.ai bot API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from src.errors import UpstreamError
from src.pipeline_config import RecallConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonResponse:
    """An HTTP response whose body may or may not be JSON."""

    ok: bool
    status_code: int
    data: Any
    text: str

    @property
    def body(self) -> Any:
        """Parsed JSON when available, raw text otherwise."""
        return self.data if self.data is not None else self.text


def read_json_safe(response: httpx.Response) -> JsonResponse:
    """Read a response body, tolerating non-JSON content."""
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        data = None
    return JsonResponse(
        ok=response.is_success,
        status_code=response.status_code,
        data=data,
        text=text,
    )


class RecallClient:
    """Thin wrapper over the three Recall endpoints the pipeline consumes.

    Args:
        config: Base URL, API key, and bot name.
        http: Optional pre-built ``httpx.Client`` (tests pass one backed by
            ``httpx.MockTransport``).
    """

    def __init__(self, config: RecallConfig, http: httpx.Client | None = None) -> None:
        self.config = config
        self._http = http or httpx.Client(timeout=config.timeout_seconds)

    def __enter__(self) -> RecallClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Token {self.config.api_key}"}

    def _request(self, method: str, url: str, **kwargs: Any) -> JsonResponse:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Recall request failed: {exc}", status_code=502) from exc
        return read_json_safe(response)

    def create_bot(self, meeting_url: str) -> str:
        """Send a bot into *meeting_url* and return the new bot ID.

        Raises:
            UpstreamError: With the provider's status and body on a non-2xx answer.
        """
        result = self._request(
            "POST",
            f"{self.config.base_url}/api/v1/bot",
            headers={**self._auth_headers, "Content-Type": "application/json"},
            json={
                "meeting_url": meeting_url,
                "bot_name": self.config.bot_name,
                "recording_config": {
                    "transcript": {"provider": {"meeting_captions": {}}},
                },
            },
        )
        if not result.ok:
            raise UpstreamError(result.text, status_code=result.status_code)

        if not isinstance(result.data, dict) or "id" not in result.data:
            raise UpstreamError("Recall bot response missing id", body=result.body)

        bot_id = str(result.data["id"])
        logger.info("Created Recall bot %s for %s", bot_id, meeting_url)
        return bot_id

    def get_bot(self, bot_id: str) -> dict[str, Any]:
        """Fetch the bot record (status history and recordings).

        Raises:
            UpstreamError: On a non-2xx answer. Reported as a 500 because the
                caller cannot act on the provider's status directly.
        """
        result = self._request(
            "GET",
            f"{self.config.base_url}/api/v1/bot/{bot_id}/",
            headers=self._auth_headers,
        )
        if not result.ok:
            raise UpstreamError(
                f"Recall bot fetch failed ({result.status_code})",
                status_code=500,
                body=result.body,
            )
        return result.data if isinstance(result.data, dict) else {}

    def download_transcript(self, url: str) -> JsonResponse:
        """Download the transcript artifact.

        The URL is pre-signed, so no auth header is sent. A non-2xx answer is
        returned rather than raised: it usually means "not ready yet".
        """
        return self._request("GET", url)
