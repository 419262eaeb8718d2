"""EventDock health API client."""

import json
import logging

import httpx

from webhook_health.config.defaults import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from webhook_health.errors import (
    ApiError,
    ConnectionFailed,
    MalformedResponse,
    RequestTimeout,
)
from webhook_health.ingest.deadline import with_deadline
from webhook_health.ingest.snapshot_parser import parse_snapshot
from webhook_health.models.health import HealthSnapshot

logger = logging.getLogger(__name__)

HEALTH_PATH = "/v1/health"


class EventDockClient:
    """Single-shot client for the delivery health endpoint.

    One request per call, no retries. The whole exchange (connect, send,
    read) is bounded by ``timeout`` seconds of wall-clock time.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def health_url(self) -> str:
        return f"{self.base_url}{HEALTH_PATH}"

    async def fetch_health(self, endpoint_id: str | None = None) -> HealthSnapshot:
        """GET /v1/health, optionally filtered to one endpoint."""
        raw = await with_deadline(self._get_health(endpoint_id), self.timeout)
        return parse_snapshot(raw)

    async def _get_health(self, endpoint_id: str | None) -> dict:
        params = {"endpoint_id": endpoint_id} if endpoint_id else None
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    self.health_url(), params=params, headers=self._headers()
                )
        except httpx.TimeoutException as e:
            logger.error("EventDock request timed out: %s", e)
            raise RequestTimeout(self.timeout) from e
        except httpx.RequestError as e:
            logger.error("EventDock request failed: %s", e)
            raise ConnectionFailed(f"Request failed: {e}") from e

        if not resp.is_success:
            body = _read_text(resp)
            logger.error("EventDock API %d: %s", resp.status_code, body)
            raise ApiError(resp.status_code, body)

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponse(f"Invalid JSON in health response: {e}") from e
        if not isinstance(data, dict):
            raise MalformedResponse(
                f"Expected a JSON object in health response, got {type(data).__name__}"
            )
        return data


def _read_text(resp: httpx.Response) -> str:
    try:
        return resp.text
    except (UnicodeDecodeError, LookupError):
        return "<unreadable body>"
