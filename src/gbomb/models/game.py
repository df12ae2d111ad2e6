"""Game records."""

from __future__ import annotations

from pydantic import Field

from gbomb.models.base import GiantBombModel
from gbomb.models.common import (
    CompleteTag,
    GameRatingTag,
    Image,
    ImageTag,
    PlatformTag,
)
from gbomb.models.date import Date, DateField


class Game(GiantBombModel):
    """A game as returned by ``api/game/<id>`` and ``api/search``.

    Search results only carry a subset of these fields; list fields default
    to empty.
    """

    aliases: str | None = None
    api_detail_url: str | None = None
    site_detail_url: str | None = None
    guid: str | None = None
    id: int | None = None
    date_added: DateField = Field(default_factory=Date)
    date_last_updated: DateField = Field(default_factory=Date)
    deck: str | None = None
    description: str | None = None
    expected_release_day: int | None = None
    expected_release_month: int | None = None
    expected_release_quarter: int | None = None
    expected_release_year: int | None = None
    image: Image | None = None
    image_tags: list[ImageTag] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    name: str | None = None
    number_of_user_reviews: int = 0
    original_game_rating: list[GameRatingTag] = Field(default_factory=list)
    original_release_date: DateField = Field(default_factory=Date)
    platforms: list[PlatformTag] = Field(default_factory=list)
    videos: list[CompleteTag] = Field(default_factory=list)
    characters: list[CompleteTag] = Field(default_factory=list)
    concepts: list[CompleteTag] = Field(default_factory=list)
    developers: list[CompleteTag] = Field(default_factory=list)
    first_appearance_characters: list[CompleteTag] = Field(default_factory=list)
    first_appearance_concepts: list[CompleteTag] = Field(default_factory=list)
    first_appearance_locations: list[CompleteTag] = Field(default_factory=list)
    first_appearance_people: list[CompleteTag] = Field(default_factory=list)
    franchises: list[CompleteTag] = Field(default_factory=list)
    genres: list[CompleteTag] = Field(default_factory=list)
    killed_characters: list[CompleteTag] = Field(default_factory=list)
    locations: list[CompleteTag] = Field(default_factory=list)
    objects: list[CompleteTag] = Field(default_factory=list)
    people: list[CompleteTag] = Field(default_factory=list)
    publishers: list[CompleteTag] = Field(default_factory=list)
    releases: list[CompleteTag] = Field(default_factory=list)
    dlcs: list[CompleteTag] = Field(default_factory=list)
    reviews: list[CompleteTag] = Field(default_factory=list)
    similar_games: list[CompleteTag] = Field(default_factory=list)
    themes: list[CompleteTag] = Field(default_factory=list)
