"""CLI argument parsing for stablecoin tracker."""

from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser used by the main entrypoint."""
    parser = argparse.ArgumentParser(
        prog="stablecoin-tracker",
        description="Stablecoin tracker - market data reconciliation for a stablecoin catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Refresh market figures once
  stablecoin-tracker sync

  # Query CoinGecko before CoinLore
  stablecoin-tracker --providers coingecko,coinlore sync

  # Find provider ids for the built-in catalog, scanning 10 pages
  stablecoin-tracker discover --page-limit 10 --output results.json

  # Insert the built-in catalog into the store
  stablecoin-tracker seed

  # Sync now and then on SYNC_SCHEDULE
  stablecoin-tracker serve

Environment Variables:
  DB_CONNECTION        Async SQLAlchemy URL of the record store
  COINGECKO_API_KEY    CoinGecko API key (required for discovery on coingecko)
  PROVIDER_PRIORITY    Comma-separated provider order (overridden by --providers)
  DEBUG_PROVIDERS      Comma-separated list for debug logging
        """,
    )

    parser.add_argument(
        "--providers",
        type=str,
        default=None,
        help="Comma-separated provider priority (default: coinlore,coingecko).",
    )
    parser.add_argument(
        "--debug-providers",
        type=str,
        default=None,
        help="Comma-separated list of providers for DEBUG logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("sync", help="Run one market data synchronization.")

    discover = subparsers.add_parser("discover", help="Discover provider ids for the catalog.")
    discover.add_argument(
        "--provider",
        type=str,
        default=None,
        help="Provider whose listing is scanned (default: coingecko).",
    )
    discover.add_argument(
        "--page-limit",
        type=int,
        default=None,
        help="Maximum number of listing pages to scan (default: 40).",
    )
    discover.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path of the JSON report (default: discovery-report.json).",
    )
    discover.add_argument(
        "--no-enrich",
        action="store_true",
        help="Skip per-match detail calls.",
    )

    subparsers.add_parser("seed", help="Insert the built-in catalog into the record store.")
    subparsers.add_parser("serve", help="Run synchronization now and then on SYNC_SCHEDULE.")

    return parser
