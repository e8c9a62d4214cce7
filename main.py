# main.py

"""Entry point for the feed_catalog command-line interface."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("feed_catalog.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog=Settings.APP_NAME,
        description="Query XML product feeds for the cheapest match.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {Settings.APP_VERSION}",
    )
    parser.add_argument(
        "--settings",
        default=None,
        dest="settings_path",
        help="Path to the JSON deployment settings "
        f"(default: {Settings.APP_SETTINGS_PATH.name}).",
    )
    parser.add_argument(
        "-u",
        "--url",
        action="append",
        default=None,
        dest="urls",
        help="Feed URL; repeat for failover order. Overrides settings.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        default=False,
        dest="no_cache",
        help="Always download the feed.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Probe every configured feed URL and exit.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Also save the JSON result into this directory.",
    )

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("feed", help="Print the whole feed as JSON.")
    cheapest = commands.add_parser(
        "cheapest", help="Find the cheapest product matching a query."
    )
    cheapest.add_argument("query", help="Text to look for in titles.")
    cheapest.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    return parser


def main() -> None:
    """Dispatch to the health check, feed dump, or cheapest search."""
    log_file = setup_logging()
    logger.info("feed_catalog starting — log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    from src.cli.runner import (
        cli_cheapest,
        cli_feed,
        resolve_settings,
        run_health_check,
    )

    settings = resolve_settings(args.settings_path, args.urls, args.no_cache)

    if args.health:
        exit_code = asyncio.run(run_health_check(settings))
    elif args.command == "feed":
        exit_code = asyncio.run(cli_feed(settings, args.output_dir))
    elif args.command == "cheapest":
        exit_code = asyncio.run(
            cli_cheapest(
                settings,
                args.query,
                args.output_format,
                args.output_dir,
            )
        )
    else:
        parser.print_help()
        exit_code = 2
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
