"""Command line entry point: ``python -m trading_places snapshot|historical``."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional

from .app import create_app
from .config import get_settings
from .logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trading-places", description="Trade and macro data for the dashboard")
    parser.add_argument("--log-level", default=None, help="Override TRADING_PLACES_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    snapshot = sub.add_parser("snapshot", help="Merged per-country records and global stats")
    snapshot.add_argument("--live", action="store_true", help="Fetch live data instead of the static table")
    snapshot.add_argument("--countries", nargs="+", default=None, help="Alpha-2 or alpha-3 country codes")

    historical = sub.add_parser("historical", help="Year-indexed records with trends")
    historical.add_argument("--live", action="store_true", help="Fetch live data (otherwise only enabled via settings)")
    historical.add_argument("--countries", nargs="+", default=None, help="Alpha-2 or alpha-3 country codes")
    historical.add_argument("--start", type=int, default=None, help="First year")
    historical.add_argument("--end", type=int, default=None, help="Last year")
    return parser


async def run_command(args: argparse.Namespace) -> Any:
    app = create_app(get_settings())
    try:
        if args.command == "snapshot":
            controller = app.trade_data_controller(args.countries, enable_real_data=args.live or None)
        else:
            controller = app.historical_controller(
                args.countries, args.start, args.end, enable_real_data=args.live or None
            )
        state = await controller.fetch()
        return state.model_dump(mode="json", by_alias=True)
    finally:
        await app.aclose()


def cli(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    result = asyncio.run(run_command(args))
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 1 if result.get("error") else 0


if __name__ == "__main__":
    sys.exit(cli())
