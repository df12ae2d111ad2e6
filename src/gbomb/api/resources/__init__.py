"""Pageable Giant Bomb resources."""

from gbomb.api.resources.games import GameResponse, GameSearchResponse
from gbomb.api.resources.page import PagedResource, ResponsePage
from gbomb.api.resources.videos import VideosResponse

__all__ = [
    "GameResponse",
    "GameSearchResponse",
    "PagedResource",
    "ResponsePage",
    "VideosResponse",
]
