"""CLI entry point for gbomb.

Usage:
    python -m gbomb.cli videos --offset 0 --pages 2
    python -m gbomb.cli game 3030-56733
    python -m gbomb.cli search Bangai-O
    python -m gbomb.cli podcasts bombcast
    python -m gbomb.cli download URL --output video.mp4
"""

from __future__ import annotations

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="gbomb",
        description="Giant Bomb API command-line tools",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    videos_parser = subparsers.add_parser("videos", help="List videos")
    videos_parser.add_argument(
        "--offset", type=int, default=0, help="Offset of the first video"
    )
    videos_parser.add_argument(
        "--pages", type=int, default=1, help="Number of pages to fetch (default: 1)"
    )

    game_parser = subparsers.add_parser("game", help="Show a single game")
    game_parser.add_argument("game_id", help="Game id, e.g. 3030-56733")

    search_parser = subparsers.add_parser("search", help="Search games by name")
    search_parser.add_argument("query", help="Search terms")
    search_parser.add_argument(
        "--pages", type=int, default=1, help="Number of pages to fetch (default: 1)"
    )

    podcasts_parser = subparsers.add_parser("podcasts", help="List podcast episodes")
    podcasts_parser.add_argument(
        "feed", nargs="?", default="bombcast", help="Feed name (default: bombcast)"
    )

    download_parser = subparsers.add_parser("download", help="Download a file")
    download_parser.add_argument("url", help="Asset URL, e.g. a video hd_url")
    download_parser.add_argument(
        "--output", "-o", required=True, help="Destination file path"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    from gbomb.cli import commands
    from gbomb.config.settings import get_settings

    settings = get_settings()

    if args.command == "videos":
        return commands.run_videos(settings, offset=args.offset, pages=args.pages)
    if args.command == "game":
        return commands.run_game(settings, args.game_id)
    if args.command == "search":
        return commands.run_search(settings, args.query, pages=args.pages)
    if args.command == "podcasts":
        return commands.run_podcasts(settings, args.feed)
    if args.command == "download":
        return commands.run_download(settings, args.url, args.output)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
