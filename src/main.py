# src/main.py - v2
"""CLI entry point: resolve, fingerprint, timezone commands.

Usage:
    eventlocator resolve <clue> [<clue> ...] [--city-state "City, ST"] [--lat F --lng F]
    eventlocator fingerprint <clue> [<clue> ...] [--city-state "City, ST"]
    eventlocator timezone <lat> <lng>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from eventlocator.core.errors import LocationResolutionError
from eventlocator.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except LocationResolutionError as exc:
        logger.error("Location resolution failed: %s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="eventlocator",
        description=f"eventlocator v{__version__} - resolve event location clues to coordinates",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- resolve ---
    p_resolve = subparsers.add_parser(
        "resolve", help="Resolve location clues to an address and coordinates",
    )
    p_resolve.add_argument("clues", nargs="+", help="Free-text location clues")
    p_resolve.add_argument(
        "--city-state", default=None,
        help='User location context, e.g. "Salt Lake City, UT"',
    )
    p_resolve.add_argument("--lat", type=float, default=None, help="User latitude")
    p_resolve.add_argument("--lng", type=float, default=None, help="User longitude")
    p_resolve.set_defaults(func=_cmd_resolve)

    # --- fingerprint ---
    p_fingerprint = subparsers.add_parser(
        "fingerprint", help="Print the cache key for a set of clues",
    )
    p_fingerprint.add_argument("clues", nargs="+", help="Free-text location clues")
    p_fingerprint.add_argument("--city-state", default=None, help="User location context")
    p_fingerprint.set_defaults(func=_cmd_fingerprint)

    # --- timezone ---
    p_timezone = subparsers.add_parser(
        "timezone", help="Print the IANA timezone for a point",
    )
    p_timezone.add_argument("lat", type=float, help="Latitude")
    p_timezone.add_argument("lng", type=float, help="Longitude")
    p_timezone.set_defaults(func=_cmd_timezone)

    return parser


async def _cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve clues and print the result as JSON."""
    from eventlocator.api.facade import resolve_event_location
    from eventlocator.api.models import EventLocationRequest
    from eventlocator.config.settings import load_settings
    from eventlocator.core.models import UserCoordinates

    if (args.lat is None) != (args.lng is None):
        logger.error("--lat and --lng must be given together")
        return 2

    coordinates = None
    if args.lat is not None:
        coordinates = UserCoordinates(lat=args.lat, lng=args.lng)

    request = EventLocationRequest(
        clues=args.clues,
        user_city_state=args.city_state,
        user_coordinates=coordinates,
    )
    result = await resolve_event_location(request, settings=load_settings())
    print(result.model_dump_json(indent=2))
    return 0


async def _cmd_fingerprint(args: argparse.Namespace) -> int:
    """Print the clue fingerprint."""
    from eventlocator.cache.fingerprint import compute_clues_fingerprint

    print(compute_clues_fingerprint(args.clues, args.city_state))
    return 0


async def _cmd_timezone(args: argparse.Namespace) -> int:
    """Print the timezone for a coordinate pair."""
    from eventlocator.api.facade import get_timezone
    from eventlocator.config.settings import load_settings

    print(await get_timezone(args.lat, args.lng, settings=load_settings()))
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage: human-readable, on stderr."""
    from eventlocator.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO", log_format="text", stream=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
