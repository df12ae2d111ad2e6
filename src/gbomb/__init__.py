"""Giant Bomb API client.

Example usage:
    from gbomb import Invoker

    async with Invoker("https://www.giantbomb.com", api_key) as invoker:
        game = await invoker.get_game("3030-56733")
"""

from gbomb.api import (
    GameResponse,
    GameSearchResponse,
    Invoker,
    Pageable,
    RateLimiter,
    ResponsePage,
    VideosResponse,
)
from gbomb.exceptions import (
    DecodeError,
    ExhaustedError,
    GiantBombError,
    TransportError,
)
from gbomb.feeds import RSSChannel, RSSFeedEntry
from gbomb.models import Date, Game, Video

__version__ = "1.0.0"

__all__ = [
    "Date",
    "DecodeError",
    "ExhaustedError",
    "Game",
    "GameResponse",
    "GameSearchResponse",
    "GiantBombError",
    "Invoker",
    "Pageable",
    "RateLimiter",
    "ResponsePage",
    "RSSChannel",
    "RSSFeedEntry",
    "TransportError",
    "Video",
    "VideosResponse",
]
