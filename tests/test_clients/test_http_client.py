"""Tests for HTTP client infrastructure layer."""

import json

import httpx
import pytest
import respx

from stars_sync.clients.http_client import (
    HTTPClient,
    HTTPClientError,
    RateLimitError,
    RetryConfig,
)

FAST_RETRY = RetryConfig(max_retries=3, base_delay=0.01, jitter_factor=0.0)


class TestRetryConfig:
    """Tests for RetryConfig."""

    def test_default_values(self):
        """Should have sensible defaults."""
        config = RetryConfig()

        assert config.max_retries == 3
        assert config.max_backoff_seconds == 60.0
        assert config.base_delay == 1.0
        assert config.jitter_factor == 0.1

    def test_calculate_backoff_exponential(self):
        """Should calculate exponential backoff."""
        config = RetryConfig(base_delay=1.0, jitter_factor=0.0)

        assert config.calculate_backoff(0) == 1.0
        assert config.calculate_backoff(1) == 2.0
        assert config.calculate_backoff(2) == 4.0

    def test_calculate_backoff_respects_max(self):
        """Should cap backoff at max_backoff_seconds."""
        config = RetryConfig(base_delay=1.0, max_backoff_seconds=5.0, jitter_factor=0.0)

        assert config.calculate_backoff(3) == 5.0
        assert config.calculate_backoff(10) == 5.0

    def test_calculate_backoff_with_jitter(self):
        """Should add jitter within expected range."""
        config = RetryConfig(base_delay=1.0, jitter_factor=0.1)

        backoffs = [config.calculate_backoff(0) for _ in range(100)]

        assert all(1.0 <= b < 1.1 for b in backoffs)

    def test_is_retryable_status(self):
        """Should retry 429 and 5xx, but not other 4xx or success codes."""
        config = RetryConfig()

        for code in (429, 500, 502, 503, 504):
            assert config.is_retryable_status(code) is True
        for code in (200, 201, 400, 401, 404, 409):
            assert config.is_retryable_status(code) is False

    def test_is_retryable_exception(self):
        """Should retry transport failures only."""
        config = RetryConfig()

        assert config.is_retryable_exception(httpx.TimeoutException("timeout")) is True
        assert config.is_retryable_exception(httpx.ConnectError("refused")) is True
        assert config.is_retryable_exception(httpx.ReadError("reset")) is True
        assert config.is_retryable_exception(ValueError("bad value")) is False


class TestHTTPClient:
    """Tests for HTTPClient."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_with_base_url_and_default_headers(self):
        """Should resolve relative URLs and send default headers."""
        route = respx.get("https://api.example.com/v1/data").mock(
            return_value=httpx.Response(200, json={"result": "success"})
        )

        async with HTTPClient(
            base_url="https://api.example.com/v1",
            headers={"Authorization": "Bearer secret"},
        ) as client:
            response = await client.get("/data", params={"page": 2})

        assert response.json() == {"result": "success"}
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer secret"
        assert "page=2" in str(request.url)

    @pytest.mark.asyncio
    @respx.mock
    async def test_post_sends_json_body(self):
        """Should send JSON body in POST request."""
        route = respx.post("https://api.example.com/items").mock(
            return_value=httpx.Response(200, json={"id": 123})
        )

        async with HTTPClient() as client:
            response = await client.post("https://api.example.com/items", json_body={"name": "test"})

        assert response.json() == {"id": 123}
        assert route.calls.last.request.headers.get("content-type") == "application/json"

    @pytest.mark.asyncio
    @respx.mock
    async def test_patch_sends_json_body(self):
        """Should send PATCH with JSON body."""
        route = respx.patch("https://api.example.com/items/1").mock(
            return_value=httpx.Response(200, json={"archived": True})
        )

        async with HTTPClient() as client:
            await client.patch("https://api.example.com/items/1", json_body={"archived": True})

        assert route.called
        assert json.loads(route.calls.last.request.content) == {"archived": True}

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_on_429_with_success(self):
        """Should retry on 429 and succeed on subsequent attempt."""
        call_count = 0

        def side_effect(request):
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                return httpx.Response(429, text="Rate limited")
            return httpx.Response(200, json={"success": True})

        respx.get("https://api.example.com/data").mock(side_effect=side_effect)

        async with HTTPClient(retry_config=FAST_RETRY) as client:
            response = await client.get("https://api.example.com/data")

        assert response.status_code == 200
        assert call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_error_after_retries_exhausted(self):
        """Should raise RateLimitError after all retries fail with 429."""
        respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(429, text="Rate limited")
        )

        config = RetryConfig(max_retries=2, base_delay=0.01, jitter_factor=0.0)
        async with HTTPClient(retry_config=config) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get("https://api.example.com/data")

        assert exc_info.value.status_code == 429
        assert "Rate limit exceeded" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_after_retries_exhausted(self):
        """Should raise HTTPClientError after all retries fail with 5xx."""
        route = respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(503, text="Service unavailable")
        )

        config = RetryConfig(max_retries=2, base_delay=0.01, jitter_factor=0.0)
        async with HTTPClient(retry_config=config) as client:
            with pytest.raises(HTTPClientError) as exc_info:
                await client.get("https://api.example.com/data")

        assert exc_info.value.status_code == 503
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_retry_on_4xx_and_message_extracted(self):
        """Should not retry on non-429 4xx errors and surface the API message."""
        route = respx.get("https://api.example.com/data").mock(
            return_value=httpx.Response(404, json={"message": "Could not find database with ID: abc"})
        )

        async with HTTPClient(retry_config=FAST_RETRY) as client:
            with pytest.raises(HTTPClientError) as exc_info:
                await client.get("https://api.example.com/data")

        assert route.call_count == 1
        assert exc_info.value.status_code == 404
        assert "Could not find database with ID" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_on_connect_error_then_fail(self):
        """Should retry transport errors and wrap the final one."""
        route = respx.get("https://api.example.com/data").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        config = RetryConfig(max_retries=1, base_delay=0.01, jitter_factor=0.0)
        async with HTTPClient(retry_config=config) as client:
            with pytest.raises(HTTPClientError) as exc_info:
                await client.get("https://api.example.com/data")

        assert route.call_count == 2
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        """Should refuse requests outside the async context manager."""
        client = HTTPClient()

        with pytest.raises(RuntimeError, match="async context manager"):
            await client.get("https://api.example.com/data")

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_retryable_transport_error_is_wrapped(self):
        """Should wrap protocol errors without retrying."""
        route = respx.get("https://api.example.com/data").mock(
            side_effect=httpx.RemoteProtocolError("server disconnected")
        )

        async with HTTPClient(retry_config=FAST_RETRY) as client:
            with pytest.raises(HTTPClientError, match="server disconnected"):
                await client.get("https://api.example.com/data")

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_decision_uses_retry_config(self):
        """Should let RetryConfig.is_retryable_exception decide which errors retry."""

        class ProtocolRetryConfig(RetryConfig):
            def is_retryable_exception(self, exc: Exception) -> bool:
                return isinstance(exc, httpx.RemoteProtocolError)

        route = respx.get("https://api.example.com/data").mock(
            side_effect=[
                httpx.RemoteProtocolError("server disconnected"),
                httpx.Response(200, json={"ok": True}),
            ]
        )

        config = ProtocolRetryConfig(max_retries=2, base_delay=0.01, jitter_factor=0.0)
        async with HTTPClient(retry_config=config) as client:
            response = await client.get("https://api.example.com/data")

        assert response.json() == {"ok": True}
        assert route.call_count == 2
