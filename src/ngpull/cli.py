"""Command-line interface for ngpull."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .core import NewgroundsClient
from .logging_config import setup_logging
from .models.config import NgpullConfig
from .models.records import SearchOptions, SearchSort


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="ngpull",
        description="Extract audio, search and playlist records from Newgrounds as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search audio, second page, best scored first
  ngpull search "chiptune" --page 2 --sort score-desc

  # Read an audio page
  ngpull audio 1234567

  # Read a playlist (requires Playwright)
  ngpull playlist someuser/chill-mix
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )

    network_group = parser.add_argument_group("network settings")
    network_group.add_argument(
        "--user-agent",
        type=str,
        help="Custom User-Agent string",
    )
    network_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request and navigation timeout in seconds",
    )

    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print errors",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    search_parser = subparsers.add_parser("search", help="Search audio submissions")
    search_parser.add_argument("terms", help="Search terms")
    search_parser.add_argument("--page", type=int, default=1, help="Result page (default: 1)")
    search_parser.add_argument(
        "--sort",
        choices=[sort.value for sort in SearchSort],
        default=SearchSort.RELEVANCE.value,
        help="Sort order (default: relevance)",
    )

    audio_parser = subparsers.add_parser("audio", help="Read an audio page")
    audio_parser.add_argument("id", help="Audio id")

    playlist_parser = subparsers.add_parser("playlist", help="Read a playlist page")
    playlist_parser.add_argument("id", help="Playlist id, e.g. someuser/chill-mix")

    return parser


def build_config(args: argparse.Namespace) -> NgpullConfig:
    """Merge the config file (if any) with command-line overrides."""
    config = NgpullConfig.from_yaml_file(args.config) if args.config else NgpullConfig()
    data = config.model_dump()

    if args.user_agent:
        data["network"]["user_agent"] = args.user_agent
    if args.timeout is not None:
        data["network"]["timeout"] = args.timeout
        data["browser"]["timeout"] = args.timeout

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return NgpullConfig.model_validate(data)


async def run_command(args: argparse.Namespace, config: NgpullConfig) -> Any:
    """Run the selected command and return JSON-able output."""
    async with NewgroundsClient(config) as client:
        if args.command == "search":
            options = SearchOptions(page=args.page, sort_by=SearchSort(args.sort))
            results = await client.search_audio(args.terms, options)
            return [result.to_dict() for result in results]
        if args.command == "audio":
            audio = await client.get_audio(args.id)
            return audio.data.to_dict()
        playlist = await client.get_playlist(args.id)
        return playlist.data.to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file)

    try:
        output = asyncio.run(run_command(args, config))
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if args.verbose:
            console.print_exception()
        return 1

    Console().print_json(json.dumps(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
