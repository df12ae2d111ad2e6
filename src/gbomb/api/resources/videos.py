"""Paginated video listing (``api/videos``)."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from gbomb.api.resources.page import PagedResource
from gbomb.models.video import Video

VIDEOS_PATH = "api/videos"

_VIDEO_LIST = TypeAdapter(list[Video])


class VideosResponse(PagedResource[list[Video]]):
    """One page of the video listing."""

    def __init__(self, offset: int = 0) -> None:
        super().__init__(offset)
        self.videos: list[Video] = []

    def path(self) -> str:
        return VIDEOS_PATH

    def _decode_results(self, results: Any) -> list[Video]:
        return _VIDEO_LIST.validate_python(results or [])

    def _replace_results(self, payload: list[Video]) -> None:
        self.videos = payload
