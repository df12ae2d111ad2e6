"""Podcast feed decoding."""

from gbomb.feeds.podcast import (
    RSSChannel,
    RSSFeedEntry,
    download_link,
    feed_path,
    parse_feed,
    parse_publish_time,
)

__all__ = [
    "RSSChannel",
    "RSSFeedEntry",
    "download_link",
    "feed_path",
    "parse_feed",
    "parse_publish_time",
]
