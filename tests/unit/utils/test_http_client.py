"""Tests for the HTTP transport."""

from __future__ import annotations

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from yarl import URL

from gbomb.exceptions import (
    ConnectError,
    GiantBombError,
    RequestTimeoutError,
    TransportError,
)
from gbomb.utils.http_client import (
    AiohttpStream,
    HTTPClient,
    HTTPClientConfig,
    HTTPResponse,
    ResponseStream,
    Transport,
    redact_url,
)


def _aiohttp_response(
    status: int = 200,
    content: bytes = b"",
    headers: dict[str, str] | None = None,
) -> MagicMock:
    """Build a stand-in for an unread aiohttp.ClientResponse."""
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.url = "https://www.giantbomb.com/api/videos"
    response.read = AsyncMock(return_value=content)
    response.closed = False

    async def iter_chunked(size: int) -> AsyncIterator[bytes]:
        for start in range(0, len(content), size):
            yield content[start : start + size]

    response.content.iter_chunked = iter_chunked
    return response


class TestHTTPClientConfig:
    """Tests for HTTPClientConfig dataclass."""

    def test_default_values(self) -> None:
        config = HTTPClientConfig()

        assert config.timeout == 30.0
        assert config.connect_timeout == 10.0
        assert config.total_timeout is None
        assert config.user_agent == "gbomb/1.0"
        assert config.max_connections == 10
        assert config.verify_ssl is True

    def test_config_is_immutable(self) -> None:
        config = HTTPClientConfig()

        with pytest.raises(AttributeError):
            config.timeout = 999.0  # type: ignore[misc]

    def test_default_headers_property(self) -> None:
        headers = HTTPClientConfig(user_agent="TestAgent/1.0").default_headers

        assert headers["User-Agent"] == "TestAgent/1.0"
        assert "Accept" in headers
        assert "Accept-Encoding" in headers


class TestHTTPResponse:
    """Tests for HTTPResponse."""

    def test_url_has_no_api_key(self) -> None:
        """The recorded URL keeps the query but not the API key."""
        raw = _aiohttp_response()
        raw.url = URL("https://www.giantbomb.com/api/videos?api_key=SECRETKEY&format=json")

        response = HTTPResponse.from_aiohttp_response(raw)

        assert "SECRETKEY" not in response.url
        assert response.url == "https://www.giantbomb.com/api/videos?format=json"

    @pytest.mark.parametrize(
        ("status", "success", "rate_limited"),
        [(200, True, False), (204, True, False), (429, False, True), (500, False, False)],
    )
    def test_status_checks(self, status: int, success: bool, rate_limited: bool) -> None:
        response = HTTPResponse.from_aiohttp_response(_aiohttp_response(status=status))

        assert response.is_success is success
        assert response.is_rate_limited is rate_limited

    @pytest.mark.asyncio
    async def test_read_releases_connection(self) -> None:
        raw = _aiohttp_response(content=b'{"error": "OK"}')
        response = HTTPResponse.from_aiohttp_response(raw)

        assert await response.read() == b'{"error": "OK"}'
        raw.release.assert_called_once()


class TestAiohttpStream:
    """Tests for streaming bodies."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(AiohttpStream(_aiohttp_response()), ResponseStream)

    @pytest.mark.asyncio
    async def test_iter_chunks(self) -> None:
        stream = AiohttpStream(_aiohttp_response(content=b"abcdefghij"))

        chunks = [chunk async for chunk in stream.iter_chunks(4)]

        assert chunks == [b"abcd", b"efgh", b"ij"]

    @pytest.mark.asyncio
    async def test_context_manager_releases(self) -> None:
        raw = _aiohttp_response(content=b"mp3")

        async with AiohttpStream(raw) as stream:
            assert await stream.read() == b"mp3"

        raw.release.assert_called_once()

    @pytest.mark.asyncio
    async def test_read_error_is_wrapped(self) -> None:
        """Body errors become TransportError without leaking the API key."""
        raw = _aiohttp_response()
        raw.url = URL("https://www.giantbomb.com/api/videos?api_key=SECRETKEY&format=json")
        raw.read.side_effect = aiohttp.ClientPayloadError("truncated")

        with pytest.raises(TransportError, match="Failed reading body") as exc_info:
            await AiohttpStream(raw).read()

        assert "SECRETKEY" not in str(exc_info.value)
        assert exc_info.value.url == "https://www.giantbomb.com/api/videos?format=json"

    @pytest.mark.asyncio
    async def test_stream_error_hides_api_key(self) -> None:
        raw = _aiohttp_response()
        raw.url = URL("https://giantbomb-pdl.akamaized.net/video/a.mp4?api_key=SECRETKEY")

        async def broken(size: int) -> AsyncIterator[bytes]:
            yield b"partial"
            raise aiohttp.ClientPayloadError("connection reset")

        raw.content.iter_chunked = broken

        with pytest.raises(TransportError, match="Failed streaming body") as exc_info:
            async for _ in AiohttpStream(raw).iter_chunks():
                pass

        assert "SECRETKEY" not in str(exc_info.value)
        assert exc_info.value.url == "https://giantbomb-pdl.akamaized.net/video/a.mp4"


class TestRedactUrl:
    """Tests for removing credentials from URLs."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (
                "https://www.giantbomb.com/api/search?api_key=k&query=Bangai-O",
                "https://www.giantbomb.com/api/search?query=Bangai-O",
            ),
            (
                "https://www.giantbomb.com/feeds/podcast/?api_key=k",
                "https://www.giantbomb.com/feeds/podcast/",
            ),
            (
                "https://www.giantbomb.com/api/videos?format=json",
                "https://www.giantbomb.com/api/videos?format=json",
            ),
            ("https://www.giantbomb.com/", "https://www.giantbomb.com/"),
        ],
    )
    def test_redact_url(self, url: str, expected: str) -> None:
        assert redact_url(url) == expected


class TestTransportErrors:
    """Tests for the error hierarchy."""

    def test_transport_error_context(self) -> None:
        cause = ValueError("Original error")
        error = TransportError(
            "Failed to fetch", url="https://example.com", status=503, cause=cause
        )

        assert "Failed to fetch" in str(error)
        assert "status=503" in str(error)
        assert error.url == "https://example.com"
        assert error.cause is cause

    def test_inheritance(self) -> None:
        assert issubclass(ConnectError, TransportError)
        assert issubclass(RequestTimeoutError, TransportError)
        assert issubclass(TransportError, GiantBombError)


class TestHTTPClient:
    """Tests for HTTPClient."""

    def test_satisfies_transport_protocol(self) -> None:
        assert isinstance(HTTPClient(), Transport)

    @pytest.mark.asyncio
    async def test_context_manager_lifecycle(self) -> None:
        client = HTTPClient()
        assert client._session is None

        async with client:
            assert client._session is not None
            assert not client._session.closed

        assert client._session is None

    @pytest.mark.asyncio
    async def test_exchange_returns_unread_response(self) -> None:
        raw = _aiohttp_response(
            content=b"{}", headers={"Content-Type": "application/json"}
        )
        with patch.object(
            aiohttp.ClientSession, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.return_value = raw

            async with HTTPClient() as client:
                response = await client.exchange(
                    "GET",
                    "https://www.giantbomb.com/api/videos",
                    params={"api_key": "k", "format": "json"},
                )

        mock_request.assert_awaited_once_with(
            "GET",
            "https://www.giantbomb.com/api/videos",
            params={"api_key": "k", "format": "json"},
        )
        assert response.status == 200
        assert response.url == "https://www.giantbomb.com/api/videos"
        raw.read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_connection_error_handling(self) -> None:
        with patch.object(
            aiohttp.ClientSession, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.side_effect = aiohttp.ClientConnectorError(
                connection_key=MagicMock(), os_error=OSError("Connection refused")
            )

            async with HTTPClient() as client:
                with pytest.raises(ConnectError) as exc_info:
                    await client.exchange("GET", "https://api.example.com/data")

        assert exc_info.value.url == "https://api.example.com/data"

    @pytest.mark.asyncio
    async def test_timeout_error_handling(self) -> None:
        with patch.object(
            aiohttp.ClientSession, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.side_effect = aiohttp.ServerTimeoutError("Request timed out")

            async with HTTPClient() as client:
                with pytest.raises(RequestTimeoutError):
                    await client.exchange("GET", "https://api.example.com/data")

    @pytest.mark.asyncio
    async def test_generic_client_error_handling(self) -> None:
        with patch.object(
            aiohttp.ClientSession, "request", new_callable=AsyncMock
        ) as mock_request:
            mock_request.side_effect = aiohttp.ClientError("Generic error")

            async with HTTPClient() as client:
                with pytest.raises(TransportError) as exc_info:
                    await client.exchange("GET", "https://api.example.com/data")

        assert isinstance(exc_info.value.cause, aiohttp.ClientError)
