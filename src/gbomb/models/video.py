"""Video records."""

from __future__ import annotations

from datetime import timedelta

from pydantic import Field

from gbomb.models.base import GiantBombModel
from gbomb.models.common import Image
from gbomb.models.date import Date, DateField


class VideoShow(GiantBombModel):
    """The show a video belongs to."""

    api_detail_url: str | None = None
    id: int | None = None
    title: str | None = None
    position: int | None = None
    site_detail_url: str | None = None
    image: Image | None = None
    logo: Image | None = None


class Association(GiantBombModel):
    """A resource (game, franchise, ...) associated with a video."""

    api_detail_url: str | None = None
    site_detail_url: str | None = None
    guid: str | None = None
    id: int | None = None
    name: str | None = None


class VideoCategory(GiantBombModel):
    api_detail_url: str | None = None
    site_detail_url: str | None = None
    id: int | None = None
    name: str | None = None


class Video(GiantBombModel):
    """A Giant Bomb video.

    ``low_url``, ``high_url`` and ``hd_url`` point at downloadable files; use
    ``best_quality_url`` to pick the best one available.
    """

    api_detail_url: str | None = None
    site_detail_url: str | None = None
    guid: str | None = None
    id: int | None = None
    associations: list[Association] = Field(default_factory=list)
    deck: str | None = None
    embed_player: str | None = None
    length_seconds: int = 0
    name: str | None = None
    premium: bool = False
    publish_date: DateField = Field(default_factory=Date)
    user: str | None = None
    hosts: str | None = None
    crew: str | None = None
    video_type: str | None = None
    video_show: VideoShow | None = None
    video_categories: list[VideoCategory] = Field(default_factory=list)
    saved_time: str | None = None
    youtube_id: str | None = None
    low_url: str | None = None
    high_url: str | None = None
    hd_url: str | None = None
    url: str | None = None

    @property
    def length(self) -> timedelta:
        """Running time of the video."""
        return timedelta(seconds=self.length_seconds)

    @property
    def on_youtube(self) -> bool:
        """Whether the video can also be found on YouTube."""
        return bool(self.youtube_id)

    @property
    def highest_url(self) -> str | None:
        """High quality URL if present, otherwise the low quality one."""
        return self.high_url or self.low_url

    @property
    def best_quality_url(self) -> str | None:
        """HD URL if present, otherwise ``highest_url``."""
        return self.hd_url or self.highest_url
