"""Tests for the EventDock health client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from webhook_health.errors import (
    ApiError,
    ConnectionFailed,
    MalformedResponse,
    RequestTimeout,
)
from webhook_health.ingest.eventdock_client import EventDockClient
from webhook_health.models.health import EndpointStat

HEALTH_URL = "https://test-eventdock.example.com/v1/health"


@pytest.fixture
def client() -> EventDockClient:
    return EventDockClient(api_key="test-key-123", base_url="https://test-eventdock.example.com/")


class TestFetchHealth:
    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, client: EventDockClient, healthy_payload: dict):
        route = respx.get(HEALTH_URL).mock(
            return_value=httpx.Response(200, json=healthy_payload)
        )

        snapshot = await client.fetch_health()

        assert route.call_count == 1
        assert snapshot.total_events == 1000
        assert snapshot.success_rate == 99.5
        assert snapshot.endpoints[0] == EndpointStat("Stripe", "stripe", "active", 99.5)
        assert snapshot.period.start == "2024-01-01T00:00:00Z"

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_bearer_and_content_type(self, client, healthy_payload):
        route = respx.get(HEALTH_URL).mock(
            return_value=httpx.Response(200, json=healthy_payload)
        )

        await client.fetch_health()

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-key-123"
        assert request.headers["Content-Type"] == "application/json"
        assert request.url.query == b""

    @pytest.mark.asyncio
    @respx.mock
    async def test_endpoint_filter(self, client, healthy_payload):
        route = respx.get(HEALTH_URL, params={"endpoint_id": "ep_123"}).mock(
            return_value=httpx.Response(200, json=healthy_payload)
        )

        await client.fetch_health("ep_123")

        assert route.called
        assert route.calls.last.request.url.params["endpoint_id"] == "ep_123"

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error(self, client):
        respx.get(HEALTH_URL).mock(return_value=httpx.Response(500, text="internal error"))

        with pytest.raises(ApiError) as exc_info:
            await client.fetch_health()

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "internal error"
        assert "500" in str(exc_info.value)
        assert "internal error" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_unauthorized(self, client):
        respx.get(HEALTH_URL).mock(
            return_value=httpx.Response(401, json={"error": "invalid token"})
        )

        with pytest.raises(ApiError, match="401"):
            await client.fetch_health()

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json(self, client):
        respx.get(HEALTH_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(MalformedResponse):
            await client.fetch_health()

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_json(self, client):
        respx.get(HEALTH_URL).mock(return_value=httpx.Response(200, json=[1, 2, 3]))

        with pytest.raises(MalformedResponse, match="list"):
            await client.fetch_health()

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_timeout(self, client):
        respx.get(HEALTH_URL).mock(side_effect=httpx.ReadTimeout("read timed out"))

        with pytest.raises(RequestTimeout) as exc_info:
            await client.fetch_health()

        assert not isinstance(exc_info.value, ApiError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_refused(self, client):
        respx.get(HEALTH_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(ConnectionFailed, match="connection refused"):
            await client.fetch_health()

    @pytest.mark.asyncio
    async def test_wall_clock_deadline(self, monkeypatch):
        client = EventDockClient(api_key="k", base_url="https://test-eventdock.example.com", timeout=0.05)
        cancelled = []

        async def hang(endpoint_id):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        monkeypatch.setattr(client, "_get_health", hang)

        with pytest.raises(RequestTimeout) as exc_info:
            await client.fetch_health()

        assert exc_info.value.timeout == 0.05
        assert cancelled == [True]
