"""CLI commands.

Each ``run_*`` function is the synchronous entry point for one subcommand and
returns a process exit code.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gbomb.api.invoker import Invoker
from gbomb.exceptions import ExhaustedError, GiantBombError

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from gbomb.api.resources import GameSearchResponse, VideosResponse
    from gbomb.config.settings import GiantBombSettings

logger = logging.getLogger(__name__)


def _print_videos(page: VideosResponse) -> None:
    for video in page.videos:
        print(
            f"{video.publish_date}  {video.name}  "
            f"({int(video.length.total_seconds()) // 60} min)"
        )


def _print_search(page: GameSearchResponse) -> None:
    for game in page.results:
        released = game.original_release_date or "unreleased"
        print(f"{game.guid}  {game.name}  [{released}]")


async def _videos_async(
    settings: GiantBombSettings, offset: int, pages: int
) -> int:
    async with Invoker.from_settings(settings) as invoker:
        page = await invoker.get_videos(offset)
        _print_videos(page)
        for _ in range(pages - 1):
            try:
                await invoker.next(page)
            except ExhaustedError:
                break
            _print_videos(page)
        print(f"\n{page.page.offset} of {page.page.max_results} videos")
    return 0


async def _game_async(settings: GiantBombSettings, game_id: str) -> int:
    async with Invoker.from_settings(settings) as invoker:
        game = await invoker.get_game(game_id)

    if game is None:
        print(f"Game {game_id} not found")
        return 1

    print(game.name)
    if game.deck:
        print(f"  {game.deck}")
    print(f"  Released: {game.original_release_date or 'unknown'}")
    platforms = ", ".join(p.name or "?" for p in game.platforms)
    if platforms:
        print(f"  Platforms: {platforms}")
    print(f"  {game.site_detail_url}")
    return 0


async def _search_async(settings: GiantBombSettings, query: str, pages: int) -> int:
    async with Invoker.from_settings(settings) as invoker:
        page = await invoker.search_games(query)
        _print_search(page)
        for _ in range(pages - 1):
            try:
                await invoker.next(page)
            except ExhaustedError:
                break
            _print_search(page)
    return 0


async def _podcasts_async(settings: GiantBombSettings, feed: str) -> int:
    async with Invoker.from_settings(settings) as invoker:
        channel = await invoker.fetch_feed(feed)

    print(f"{channel.title} ({len(channel.entries)} episodes)")
    for entry in channel.entries:
        print(f"  {entry.pub_date}  {entry.title}")
        print(f"    {entry.link}")
    return 0


async def _download_async(settings: GiantBombSettings, url: str, output: Path) -> int:
    async with Invoker.from_settings(settings) as invoker:
        stream = await invoker.download_asset(url)
        written = 0
        async with stream:
            with output.open("wb") as sink:
                async for chunk in stream.iter_chunks():
                    sink.write(chunk)
                    written += len(chunk)

    print(f"Saved {written} bytes to {output}")
    return 0


def _run(
    settings: GiantBombSettings, coro_factory: Callable[[], Coroutine[Any, Any, int]]
) -> int:
    if not settings.api_key:
        print("No API key configured; set GIANTBOMB_API_KEY")
        return 2
    try:
        return asyncio.run(coro_factory())
    except GiantBombError as e:
        logger.error("Request failed: %s", e)
        return 1


def run_videos(settings: GiantBombSettings, offset: int = 0, pages: int = 1) -> int:
    return _run(settings, lambda: _videos_async(settings, offset, pages))


def run_game(settings: GiantBombSettings, game_id: str) -> int:
    return _run(settings, lambda: _game_async(settings, game_id))


def run_search(settings: GiantBombSettings, query: str, pages: int = 1) -> int:
    return _run(settings, lambda: _search_async(settings, query, pages))


def run_podcasts(settings: GiantBombSettings, feed: str = "bombcast") -> int:
    return _run(settings, lambda: _podcasts_async(settings, feed))


def run_download(settings: GiantBombSettings, url: str, output: str) -> int:
    return _run(settings, lambda: _download_async(settings, url, Path(output)))
