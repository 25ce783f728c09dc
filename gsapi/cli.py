#!/usr/bin/env python3
"""
Query the Grooveshark web API from the command line.

USAGE:
    gsapi [--config CONFIG] COMMAND [ARGS]

SYNOPSIS:
    Reads client credentials from a YAML configuration file (or from the
    GSAPI_CLIENT_KEY / GSAPI_CLIENT_SECRET environment variables), starts a
    session and prints the result of one API call as JSON.

COMMANDS:
    ping                  Check the service is reachable
    country [--ip IP]     Look up the country of an IP address
    search QUERY          Search for songs
    playlist PLAYLIST_ID  Show a playlist and its songs
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from gsapi.api import GroovesharkAPI
from gsapi.config import ClientSettings, load_config, settings_from_env
from gsapi.exceptions import ConfigError, GSAPIError
from gsapi.models import NOT_SET
from gsapi.session import Session

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging based on config."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    logger.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsapi",
        description="Call the Grooveshark web API.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the YAML configuration file (defaults to environment variables).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("ping", help="Check the service is reachable.")

    country = subparsers.add_parser("country", help="Look up the country of an IP address.")
    country.add_argument("--ip", type=str, default=None, help="IP address (defaults to yours).")

    search = subparsers.add_parser("search", help="Search for songs.")
    search.add_argument("query", type=str, help="Search query.")
    search.add_argument("--limit", type=int, default=None, help="Maximum number of results.")

    playlist = subparsers.add_parser("playlist", help="Show a playlist and its songs.")
    playlist.add_argument("playlist_id", type=int, help="Playlist ID.")
    playlist.add_argument("--limit", type=int, default=None, help="Maximum number of songs.")

    return parser


def load_settings(config_path: Optional[str]) -> ClientSettings:
    """Load client settings from a config file or the environment."""
    if config_path:
        config = load_config(config_path)
        logger.info(f"Loaded configuration version {config.version}")
        return config.client
    return settings_from_env()


def run_command(api: GroovesharkAPI, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to the API."""
    if args.command == "ping":
        return api.ping_service()
    if args.command == "country":
        return api.get_country(args.ip if args.ip else NOT_SET)
    if args.command == "search":
        return api.get_song_search_results(
            args.query, limit=args.limit if args.limit is not None else NOT_SET
        )
    if args.command == "playlist":
        return api.get_playlist(
            args.playlist_id, limit=args.limit if args.limit is not None else NOT_SET
        )
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("INFO")

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(settings.log_level)

    session = Session.from_settings(settings)
    api = GroovesharkAPI(session)

    try:
        session.start_session()
        result = run_command(api, args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)
    except GSAPIError as e:
        logger.error(f"API call failed: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
