"""Images and tag records shared by videos and games.

Tags are flat shapes that share a common prefix (``api_detail_url``,
``name``). The specializations add fields; nothing dispatches on them.
"""

from __future__ import annotations

from gbomb.models.base import GiantBombModel


class Image(GiantBombModel):
    """Image URLs in every size the API publishes."""

    icon_url: str | None = None
    medium_url: str | None = None
    screen_url: str | None = None
    screen_large_url: str | None = None
    small_url: str | None = None
    super_url: str | None = None
    thumb_url: str | None = None
    tiny_url: str | None = None
    original_url: str | None = None
    image_tags: str | None = None


class Tag(GiantBombModel):
    """Reference to another API resource."""

    api_detail_url: str | None = None
    name: str | None = None


class ImageTag(Tag):
    """Image gallery name with its image count."""

    total: int = 0


class GameRatingTag(Tag):
    id: int | None = None


class CompleteTag(Tag):
    id: int | None = None
    site_detail_url: str | None = None


class PlatformTag(CompleteTag):
    abbreviation: str | None = None
