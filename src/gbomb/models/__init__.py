"""Payload records decoded from Giant Bomb responses."""

from gbomb.models.common import (
    CompleteTag,
    GameRatingTag,
    Image,
    ImageTag,
    PlatformTag,
    Tag,
)
from gbomb.models.date import ZERO_TIME, Date
from gbomb.models.game import Game
from gbomb.models.video import Association, Video, VideoCategory, VideoShow

__all__ = [
    "Association",
    "CompleteTag",
    "Date",
    "Game",
    "GameRatingTag",
    "Image",
    "ImageTag",
    "PlatformTag",
    "Tag",
    "Video",
    "VideoCategory",
    "VideoShow",
    "ZERO_TIME",
]
