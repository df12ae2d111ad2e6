"""Shared pytest fixtures for gbomb tests.

Fixtures are organized into categories:
- Fixture file loading (recorded Giant Bomb responses)
- In-memory transport standing in for the aiohttp client
- Invokers wired to the in-memory transport with no request spacing

Usage:
    async def test_example(invoker, fake_transport, load_fixture):
        fake_transport.queue(load_fixture("gameSearch.json"))
        search = await invoker.search_games("Bangai-O")
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from gbomb.api.invoker import Invoker
from gbomb.api.rate_limiter import RateLimiter
from gbomb.exceptions import TransportError
from gbomb.utils.http_client import HTTPResponse

TEST_ENDPOINT = "https://www.giantbomb.com"
TEST_API_KEY = "coolbeans"


# =============================================================================
# Fixture Files
# =============================================================================


@pytest.fixture
def test_data_dir() -> Path:
    """Return the path to the test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def load_fixture(test_data_dir: Path) -> Callable[[str], bytes]:
    """Factory fixture returning the raw bytes of a test data file.

    Usage:
        def test_example(load_fixture):
            body = load_fixture("gameRequest.json")
    """

    def _load(filename: str) -> bytes:
        filepath = test_data_dir / filename
        if not filepath.exists():
            raise FileNotFoundError(f"Test fixture not found: {filepath}")
        return filepath.read_bytes()

    return _load


# =============================================================================
# In-memory Transport
# =============================================================================


class MemoryStream:
    """ResponseStream over bytes held in memory."""

    def __init__(self, content: bytes) -> None:
        self._content = content
        self.closed = False

    async def read(self) -> bytes:
        return self._content

    async def iter_chunks(self, size: int = 4) -> AsyncIterator[bytes]:
        for start in range(0, len(self._content), size):
            yield self._content[start : start + size]

    def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> MemoryStream:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.close()


@dataclass
class RecordedRequest:
    method: str
    url: str
    params: dict[str, str]


@dataclass
class FakeTransport:
    """Transport answering from a queue of canned responses.

    Every exchange is recorded in ``requests``. Queue an exception to make the
    next exchange fail.
    """

    requests: list[RecordedRequest] = field(default_factory=list)
    responses: list[HTTPResponse | Exception] = field(default_factory=list)
    streams: list[MemoryStream] = field(default_factory=list)

    def queue(
        self,
        content: bytes = b"",
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        stream = MemoryStream(content)
        self.streams.append(stream)
        self.responses.append(
            HTTPResponse(
                status=status,
                headers=headers or {},
                url=TEST_ENDPOINT,
                body=stream,
            )
        )

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    async def exchange(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> HTTPResponse:
        self.requests.append(RecordedRequest(method, url, dict(params or {})))
        if not self.responses:
            raise TransportError("No response queued", url=url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def fake_transport() -> FakeTransport:
    """In-memory transport with an empty response queue."""
    return FakeTransport()


@pytest.fixture
def no_wait_limiter() -> RateLimiter:
    """Rate limiter that never delays."""
    return RateLimiter(interval=0)


@pytest.fixture
def invoker(fake_transport: FakeTransport, no_wait_limiter: RateLimiter) -> Invoker:
    """Invoker for the test endpoint backed by the fake transport."""
    return Invoker(
        TEST_ENDPOINT,
        TEST_API_KEY,
        rate_limiter=no_wait_limiter,
        transport=fake_transport,
    )
