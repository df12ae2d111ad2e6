"""Request pipeline and pagination.

This package provides:
- Invoker, the rate-limited request pipeline
- Pageable protocol and the resources implementing it
- RateLimiter for the per-key request quota
"""

from gbomb.api.invoker import Invoker
from gbomb.api.protocol import Pageable
from gbomb.api.rate_limiter import RateLimiter, TokenBucket
from gbomb.api.resources import (
    GameResponse,
    GameSearchResponse,
    PagedResource,
    ResponsePage,
    VideosResponse,
)

__all__ = [
    "GameResponse",
    "GameSearchResponse",
    "Invoker",
    "Pageable",
    "PagedResource",
    "RateLimiter",
    "ResponsePage",
    "TokenBucket",
    "VideosResponse",
]
