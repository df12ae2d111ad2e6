"""Giant Bomb podcast feed decoding.

Feeds are RSS 2.0 documents. They do not carry a direct audio URL, so each
entry's download link is derived from the episode id embedded in its GUID
(``podcast-3246-...`` -> ``3246``).

Example usage:
    channel = parse_feed(xml_bytes)
    for entry in channel.entries:
        print(entry.title, entry.publish_time(), entry.link)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from bs4 import BeautifulSoup, Tag

from gbomb.exceptions import DecodeError

logger = logging.getLogger(__name__)

DOWNLOAD_LINK_TEMPLATE = (
    "https://dts.podtrac.com/redirect.mp3/www.giantbomb.com"
    "/podcasts/download/{episode_id}/audio.mp3"
)

# The flagship show lives under a different path than every other feed
LEGACY_FEED_NAME = "bombcast"
LEGACY_FEED_PATH = "feeds/podcast/"
FEED_PATH_PREFIX = "podcast-xml"

PUBLISH_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S"

_UTC_NAMES = frozenset({"UTC", "GMT", "UT", "Z"})


def feed_path(feed_name: str) -> str:
    """Path of a feed relative to the endpoint, with trailing slash.

    Examples:
        >>> feed_path("bombcast")
        'feeds/podcast/'
        >>> feed_path("duders")
        'podcast-xml/duders/'
    """
    if feed_name == LEGACY_FEED_NAME:
        return LEGACY_FEED_PATH
    return f"{FEED_PATH_PREFIX}/{feed_name}/"


def download_link(guid: str) -> str:
    """Derive the audio download URL from an entry GUID.

    Raises:
        DecodeError: If the GUID has no second ``-`` separated segment
    """
    segments = guid.split("-")
    if len(segments) < 2:
        raise DecodeError(f"Feed entry GUID has no episode id: {guid!r}")
    return DOWNLOAD_LINK_TEMPLATE.format(episode_id=segments[1])


def parse_publish_time(value: str) -> datetime:
    """Parse an RSS ``pubDate`` such as ``Tue, 09 Feb 2021 14:52:00 PST``.

    The zone abbreviation is kept as the tzinfo name. Only UTC/GMT are known
    abbreviations; any other name is taken at a zero offset.

    Raises:
        DecodeError: If the value does not match the expected layout
    """
    stamp, _, zone = value.strip().rpartition(" ")
    if not stamp or not zone.isalpha():
        raise DecodeError(f"Invalid publish date: {value!r}")
    try:
        parsed = datetime.strptime(stamp, PUBLISH_TIME_FORMAT)
    except ValueError as e:
        raise DecodeError(f"Invalid publish date {value!r}: {e}", cause=e) from e

    tz = timezone.utc if zone in _UTC_NAMES else timezone(timedelta(0), zone)
    return parsed.replace(tzinfo=tz)


@dataclass(frozen=True, slots=True)
class RSSFeedEntry:
    """One podcast episode.

    Attributes:
        title: Episode title
        pub_date: Raw ``pubDate`` string
        guid: Entry GUID
        link: Derived audio download URL
    """

    title: str
    pub_date: str
    guid: str
    link: str

    def publish_time(self) -> datetime:
        """Parse ``pub_date``.

        Raises:
            DecodeError: If the date is malformed
        """
        return parse_publish_time(self.pub_date)


@dataclass(frozen=True, slots=True)
class RSSChannel:
    """A decoded podcast feed."""

    title: str
    entries: list[RSSFeedEntry] = field(default_factory=list)


def _child_text(element: Tag, name: str) -> str:
    child = element.find(name, recursive=False)
    return child.get_text(strip=True) if child is not None else ""


def parse_feed(content: bytes | str) -> RSSChannel:
    """Decode an RSS document into a channel with derived download links.

    Raises:
        DecodeError: If the document has no channel or an entry GUID
            carries no episode id
    """
    soup = BeautifulSoup(content, "xml")
    channel = soup.find("channel")
    if not isinstance(channel, Tag):
        raise DecodeError("Feed document has no channel element")

    entries = []
    for item in channel.find_all("item", recursive=False):
        guid = _child_text(item, "guid")
        entries.append(
            RSSFeedEntry(
                title=_child_text(item, "title"),
                pub_date=_child_text(item, "pubDate"),
                guid=guid,
                link=download_link(guid),
            )
        )

    result = RSSChannel(title=_child_text(channel, "title"), entries=entries)
    logger.debug("Decoded feed %r with %d entries", result.title, len(entries))
    return result
