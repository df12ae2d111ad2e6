"""Game lookup (``api/game/<id>``) and game search (``api/search``)."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from gbomb.api.resources.page import PagedResource
from gbomb.exceptions import DecodeError
from gbomb.models.game import Game

GAME_PATH = "api/game"
SEARCH_PATH = "api/search"

_GAME_LIST = TypeAdapter(list[Game])


class GameResponse(PagedResource[Game | None]):
    """A single game looked up by id.

    ``game`` is None when the API has no game with that id; that is not an
    error.
    """

    def __init__(self, game_id: str) -> None:
        super().__init__()
        # Only used to build the path, never decoded from the response
        self.game_id = game_id
        self.game: Game | None = None

    def path(self) -> str:
        return f"{GAME_PATH}/{self.game_id}"

    def _decode_results(self, results: Any) -> Game | None:
        # The API answers an unknown id with an empty list
        if results is None or results == []:
            return None
        if not isinstance(results, dict):
            raise DecodeError(
                f"Expected a game object for {self.path()}, "
                f"got {type(results).__name__}"
            )
        return Game.model_validate(results)

    def _replace_results(self, payload: Game | None) -> None:
        self.game = payload


class GameSearchResponse(PagedResource[list[Game]]):
    """One page of game search results for ``query``."""

    def __init__(self, query: str, offset: int = 0) -> None:
        super().__init__(offset)
        self.query = query
        self.results: list[Game] = []

    def path(self) -> str:
        return SEARCH_PATH

    def query_params(self) -> dict[str, str]:
        return {"query": self.query, "resources": "game"}

    def _decode_results(self, results: Any) -> list[Game]:
        return _GAME_LIST.validate_python(results or [])

    def _replace_results(self, payload: list[Game]) -> None:
        self.results = payload
