"""Rate-limited request pipeline shared by every Giant Bomb resource.

The ``Invoker`` knows nothing about concrete resources. It asks a
``Pageable`` for its path, offset and extra query parameters, takes a token
from the rate limiter, performs the exchange and hands the body back to the
``Pageable`` to decode itself.

Example usage:
    async with Invoker("https://www.giantbomb.com", api_key) as invoker:
        search = await invoker.search_games("Bangai-O")
        while not search.is_complete():
            for game in search.results:
                print(game.name)
            await invoker.next(search)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from gbomb.api.rate_limiter import RateLimiter
from gbomb.api.resources import GameResponse, GameSearchResponse, VideosResponse
from gbomb.exceptions import TransportError
from gbomb.feeds.podcast import feed_path, parse_feed
from gbomb.utils.http_client import HTTPClient, HTTPClientConfig

if TYPE_CHECKING:
    from gbomb.api.protocol import Pageable
    from gbomb.config.settings import GiantBombSettings
    from gbomb.feeds.podcast import RSSChannel, RSSFeedEntry
    from gbomb.models.game import Game
    from gbomb.utils.http_client import HTTPResponse, ResponseStream, Transport

logger = logging.getLogger(__name__)


async def _upstream_error(response: HTTPResponse) -> str:
    """Read the ``error`` text of a failed response's JSON envelope.

    Returns an empty string when the body is unreadable or not an envelope.
    The body is always released.
    """
    try:
        body = await response.read()
    except TransportError as e:
        logger.debug("Could not read error body from %s: %s", response.url, e)
        return ""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return ""
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return ""


class Invoker:
    """Shared orchestrator for Giant Bomb requests.

    Every request, successful or not, spends one rate limiter token.

    Attributes:
        endpoint: Base URL, e.g. ``https://www.giantbomb.com``
        api_key: Giant Bomb API key
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        *,
        rate_limiter: RateLimiter | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the invoker.

        Args:
            endpoint: Base URL of the service
            api_key: API key sent with every request
            rate_limiter: Optional custom rate limiter; a fresh one with the
                default interval is created otherwise
            transport: Optional transport; an owned ``HTTPClient`` otherwise
        """
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self._rate_limiter = rate_limiter or RateLimiter()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HTTPClient()

        logger.debug(
            "Initialized invoker for %s with request interval %.1fs",
            self.endpoint,
            self._rate_limiter.interval,
        )

    @classmethod
    def from_settings(cls, settings: GiantBombSettings) -> Invoker:
        """Build an invoker from loaded settings.

        The invoker owns the HTTP client it creates and closes it on exit.
        """
        invoker = cls(
            settings.endpoint,
            settings.api_key,
            rate_limiter=RateLimiter(interval=settings.request_interval),
            transport=HTTPClient(
                HTTPClientConfig(
                    timeout=settings.http_timeout,
                    user_agent=settings.user_agent,
                )
            ),
        )
        invoker._owns_transport = True
        return invoker

    async def __aenter__(self) -> Invoker:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport if this invoker created it."""
        if self._owns_transport and isinstance(self._transport, HTTPClient):
            await self._transport.close()

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def _authenticated_get(
        self, url: str, params: dict[str, str] | None = None
    ) -> HTTPResponse:
        """Wait for a token, then GET ``url`` with the API key attached.

        Raises:
            TransportError: If the exchange fails or returns a non-2xx status
        """
        query = {"api_key": self.api_key}
        if params:
            query.update(params)

        await self._rate_limiter.wait()
        response = await self._transport.exchange("GET", url, params=query)

        if not response.is_success:
            if response.is_rate_limited:
                logger.warning("GET %s was rate limited by the server", url)
            else:
                logger.warning("GET %s returned status %d", url, response.status)
            message = f"Request to {url} failed"
            detail = await _upstream_error(response)
            if detail:
                message = f"{message}: {detail}"
            raise TransportError(message, url=url, status=response.status)
        return response

    async def perform(self, pageable: Pageable) -> bytes:
        """Request the pageable's current page and return the raw body.

        Raises:
            TransportError: If the exchange fails
        """
        url = f"{self.endpoint}/{pageable.path()}"
        offset = pageable.current_offset()
        params = {"format": "json", "offset": str(offset)}
        params.update(pageable.query_params())

        logger.debug("Requesting %s at offset %d", url, offset)
        response = await self._authenticated_get(url, params)
        return await response.read()

    async def get(self, pageable: Pageable) -> None:
        """Fetch the page at the pageable's current offset into it.

        Raises:
            TransportError: If the exchange fails
            DecodeError: If the body is malformed
        """
        body = await self.perform(pageable)
        pageable.parse(body)

    async def next(self, pageable: Pageable) -> None:
        """Advance to the next page and fetch it.

        The offset moves before the request is sent and is not rolled back
        if the request or decode fails. Retry with ``get`` to refetch the
        page at the advanced offset; calling ``next`` again skips it.

        Raises:
            ExhaustedError: If there is no next page; nothing is requested
            TransportError: If the exchange fails
            DecodeError: If the body is malformed
        """
        pageable.advance_offset()
        await self.get(pageable)

    async def previous(self, pageable: Pageable) -> None:
        """Step back and fetch the page at the new offset.

        As with ``next``, the offset stays moved if the fetch fails.

        Raises:
            ExhaustedError: If already at offset 0; nothing is requested
            TransportError: If the exchange fails
            DecodeError: If the body is malformed
        """
        pageable.retreat_offset()
        await self.get(pageable)

    async def get_videos(self, offset: int = 0) -> VideosResponse:
        """Fetch the page of videos starting at ``offset``."""
        videos = VideosResponse(offset=offset)
        await self.get(videos)
        return videos

    async def get_game(self, game_id: str) -> Game | None:
        """Look up a game by id (e.g. ``3030-56733``).

        Returns:
            The game, or None if the API does not know it
        """
        response = GameResponse(game_id)
        await self.get(response)
        return response.game

    async def search_games(self, query: str) -> GameSearchResponse:
        """Fetch the first page of games matching ``query``."""
        search = GameSearchResponse(query)
        await self.get(search)
        return search

    async def download_asset(self, url: str) -> ResponseStream:
        """Open an authenticated download of ``url``.

        The caller must close the returned stream:

            async with await invoker.download_asset(video.hd_url) as stream:
                async for chunk in stream.iter_chunks():
                    sink.write(chunk)

        Raises:
            TransportError: If the exchange fails
        """
        logger.debug("Downloading %s", url)
        response = await self._authenticated_get(url)
        return response.body

    async def download_feed_entry(self, entry: RSSFeedEntry) -> ResponseStream:
        """Open a download of a podcast episode's audio."""
        return await self.download_asset(entry.link)

    async def fetch_feed(self, feed_name: str) -> RSSChannel:
        """Fetch and decode a podcast feed.

        ``bombcast`` maps to the legacy feed location; every other name is
        looked up under ``podcast-xml/``.

        Raises:
            TransportError: If the exchange fails
            DecodeError: If the feed cannot be decoded
        """
        url = f"{self.endpoint}/{feed_path(feed_name)}"
        logger.debug("Fetching feed %s", url)
        response = await self._authenticated_get(url)
        return parse_feed(await response.read())
