"""HTTP transport for the Giant Bomb client.

The ``Invoker`` never talks to aiohttp directly. It depends on the
``Transport`` protocol, a single ``exchange`` operation returning an
``HTTPResponse`` whose body has not been read yet. ``HTTPClient`` is the
aiohttp-backed implementation used in production; tests substitute their own.

Example usage:
    async with HTTPClient() as client:
        response = await client.exchange(
            "GET", "https://www.giantbomb.com/api/videos", params={"format": "json"}
        )
        data = await response.read()

    # Streaming a large body
    response = await client.exchange("GET", url)
    async with response.body as stream:
        async for chunk in stream.iter_chunks():
            sink.write(chunk)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import aiohttp
from yarl import URL

from gbomb.exceptions import ConnectError, RequestTimeoutError, TransportError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

# Query parameters never copied into logs or exceptions
CREDENTIAL_PARAMS = frozenset({"api_key"})


def redact_url(url: str | URL) -> str:
    """Return ``url`` with credential query parameters removed."""
    parsed = URL(str(url))
    if not CREDENTIAL_PARAMS.intersection(parsed.query):
        return str(parsed)
    kept = [(k, v) for k, v in parsed.query.items() if k not in CREDENTIAL_PARAMS]
    return str(parsed.with_query(kept or None))


@dataclass(frozen=True, slots=True)
class HTTPClientConfig:
    """Configuration for the HTTP client.

    Attributes:
        timeout: Socket read timeout in seconds
        connect_timeout: Connection timeout in seconds
        total_timeout: Total operation timeout in seconds, None for downloads
            that may legitimately run long
        user_agent: User-Agent header value
        max_connections: Maximum number of connections in the pool
        verify_ssl: Whether to verify SSL certificates
    """

    timeout: float = 30.0
    connect_timeout: float = 10.0
    total_timeout: float | None = None
    user_agent: str = "gbomb/1.0"
    max_connections: int = 10
    verify_ssl: bool = True

    @property
    def default_headers(self) -> dict[str, str]:
        """Get default headers for all requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json, application/xml, */*",
            "Accept-Encoding": "gzip, deflate",
        }


@runtime_checkable
class ResponseStream(Protocol):
    """An unread response body. The holder is responsible for closing it."""

    async def read(self) -> bytes:
        """Read the remaining body into memory."""
        ...

    def iter_chunks(self, size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Iterate over the body in chunks of at most ``size`` bytes."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...

    async def __aenter__(self) -> ResponseStream: ...

    async def __aexit__(self, *args: object) -> None: ...


class AiohttpStream:
    """``ResponseStream`` over an unread aiohttp response."""

    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self._response = response

    async def read(self) -> bytes:
        try:
            return await self._response.read()
        except aiohttp.ClientError as e:
            url = redact_url(self._response.url)
            raise TransportError(
                f"Failed reading body from {url}: {e}", url=url, cause=e
            ) from e

    async def iter_chunks(
        self, size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.content.iter_chunked(size):
                yield chunk
        except aiohttp.ClientError as e:
            url = redact_url(self._response.url)
            raise TransportError(
                f"Failed streaming body from {url}: {e}", url=url, cause=e
            ) from e

    def close(self) -> None:
        self._response.release()

    @property
    def closed(self) -> bool:
        return self._response.closed

    async def __aenter__(self) -> AiohttpStream:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.close()


@dataclass
class HTTPResponse:
    """Wrapper for an HTTP response whose body is still a stream.

    Attributes:
        status: HTTP status code
        headers: Response headers
        url: Final URL after redirects, credentials removed
        body: Unread response body
    """

    status: int
    headers: dict[str, str]
    url: str
    body: ResponseStream

    @classmethod
    def from_aiohttp_response(cls, response: aiohttp.ClientResponse) -> HTTPResponse:
        """Create HTTPResponse from an unread aiohttp response."""
        return cls(
            status=response.status,
            headers=dict(response.headers),
            url=redact_url(response.url),
            body=AiohttpStream(response),
        )

    @property
    def is_success(self) -> bool:
        """Check if response indicates success (2xx status)."""
        return 200 <= self.status < 300

    @property
    def is_rate_limited(self) -> bool:
        """Check if response indicates rate limiting."""
        return self.status == 429

    async def read(self) -> bytes:
        """Read the whole body and release the connection."""
        try:
            return await self.body.read()
        finally:
            self.body.close()


@runtime_checkable
class Transport(Protocol):
    """Capability to perform one HTTP exchange."""

    async def exchange(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        """Send a request and return the response with its body unread.

        Raises:
            TransportError: If the exchange fails
        """
        ...


class HTTPClient:
    """Async HTTP client with connection pooling.

    Should be used as an async context manager to ensure the session is
    closed; a session is also created lazily on first use.
    """

    def __init__(self, config: HTTPClientConfig | None = None) -> None:
        """Initialize the HTTP client.

        Args:
            config: Optional configuration. Uses defaults if not provided.
        """
        self.config = config or HTTPClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> HTTPClient:
        """Enter async context and create session."""
        await self._ensure_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context and cleanup resources."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Create the aiohttp session on first use and return it."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.config.max_connections,
                ssl=self.config.verify_ssl,
            )
            timeout = aiohttp.ClientTimeout(
                total=self.config.total_timeout,
                connect=self.config.connect_timeout,
                sock_read=self.config.timeout,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers=self.config.default_headers,
            )
            logger.debug(
                "Created HTTP session with pool size %d", self.config.max_connections
            )
        return self._session

    async def close(self) -> None:
        """Close the session and release resources."""
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Closed HTTP session")

    async def exchange(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        """Perform an HTTP request, leaving the body unread.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: The URL to request
            params: Query parameters to append to URL

        Returns:
            HTTPResponse whose body the caller must read or close

        Raises:
            ConnectError: If connection fails
            RequestTimeoutError: If request times out
            TransportError: For other HTTP errors
        """
        session = await self._ensure_session()

        logger.debug("HTTP %s %s", method, url)

        try:
            response = await session.request(
                method, url, params=dict(params) if params else None
            )
        except aiohttp.ClientConnectorError as e:
            logger.warning("Connection error for %s: %s", url, e)
            raise ConnectError(f"Failed to connect to {url}", url=url, cause=e) from e
        except (aiohttp.ServerTimeoutError, TimeoutError) as e:
            logger.warning("Timeout for %s: %s", url, e)
            raise RequestTimeoutError(
                f"Request timed out for {url}", url=url, cause=e
            ) from e
        except aiohttp.ClientError as e:
            logger.warning("HTTP error for %s: %s", url, e)
            raise TransportError(f"HTTP error for {url}: {e}", url=url, cause=e) from e

        logger.debug("HTTP %s %s -> %d", method, url, response.status)
        return HTTPResponse.from_aiohttp_response(response)
