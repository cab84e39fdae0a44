"""Provider client verification CLI."""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from stablecoin_tracker.providers import PROVIDERS, provider_capabilities
from stablecoin_tracker.providers.dto import ListingItem, MarketSnapshot
from stablecoin_tracker.providers.protocol import (
    BulkMarketProvider,
    DetailProvider,
    ListingProvider,
)
from stablecoin_tracker.runtime import build_provider_kwargs
from stablecoin_tracker.settings import Settings

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify provider client with real API calls")
    parser.add_argument(
        "provider_id",
        nargs="?",
        help="Provider ID from PROVIDERS registry (for example: coinlore)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available provider IDs and exit",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Listing page to request (default: 1)",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=5,
        help="How many listed ids to use for bulk and detail checks (default: 5)",
    )
    return parser


def _render_listing_preview(items: list[ListingItem], limit: int) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Symbol", style="yellow")
    table.add_column("Name", style="green")

    for index, item in enumerate(items[:limit]):
        table.add_row(str(index), item.provider_id, item.symbol, item.name)

    if len(items) > limit:
        table.add_row("...", "...", "...", "...")

    console.print(table)


def _describe(snapshot: MarketSnapshot) -> str:
    return (
        f"market cap ${snapshot.market_cap_usd:,.0f}, "
        f"volume ${snapshot.volume_24h_usd:,.0f}"
    )


async def verify_provider(
    provider_id: str, page: int, sample_size: int, settings: Settings | None = None
) -> bool:
    console.print(f"\n[bold cyan]Verifying provider client: {provider_id}[/bold cyan]\n")

    if provider_id not in PROVIDERS:
        available = ", ".join(sorted(PROVIDERS.keys()))
        console.print(
            f"[bold red][FAIL][/bold red] Provider '{provider_id}' "
            "not found in PROVIDERS registry.\n"
            f"Available providers: {available}"
        )
        return False

    provider_cls = PROVIDERS[provider_id]
    settings = settings or Settings()
    provider_kwargs = build_provider_kwargs(settings, settings.discovery_page_size)
    provider = provider_cls(**provider_kwargs.get(provider_id, {}))

    console.print("[bold]Step 1: Capabilities[/bold]")
    console.print(f"  [green][OK][/green] PROVIDER_ID: {provider.PROVIDER_ID}")
    console.print(
        f"  [green][OK][/green] Capabilities: {', '.join(provider_capabilities(provider_cls))}"
    )

    if not isinstance(provider, ListingProvider):
        console.print("  [yellow][WARN][/yellow] No listing API, remaining checks skipped")
        return True

    console.print(f"\n[bold]Step 2: API - list_page({page})[/bold]")
    try:
        listing = await provider.list_page(page)
        console.print(f"  [green][OK][/green] Retrieved {len(listing.items)} listings")
        if not listing.items:
            console.print("  [bold red][FAIL][/bold red] list_page() returned empty page")
            return False
        _render_listing_preview(listing.items, sample_size)
    except Exception as exc:
        console.print(f"  [bold red][FAIL][/bold red] list_page() failed: {exc}")
        return False

    sample_ids = [item.provider_id for item in listing.items[:sample_size]]

    if isinstance(provider, BulkMarketProvider):
        batch = sample_ids[: provider.BATCH_LIMIT]
        console.print(f"\n[bold]Step 3: API - fetch_many({len(batch)} ids)[/bold]")
        try:
            snapshots = await provider.fetch_many(batch)
            console.print(f"  [green][OK][/green] fetch_many() returned {len(snapshots)} snapshots")
            missing = [provider_id for provider_id in batch if provider_id not in snapshots]
            if missing:
                console.print(f"  [yellow][WARN][/yellow] No data for: {', '.join(missing)}")
            for sample_id, snapshot in list(snapshots.items())[:3]:
                console.print(f"  [dim]{sample_id}: {_describe(snapshot)}[/dim]")
        except Exception as exc:
            console.print(f"  [bold red][FAIL][/bold red] fetch_many() failed: {exc}")
            return False

    if isinstance(provider, DetailProvider):
        console.print(f"\n[bold]Step 4: API - fetch_one({sample_ids[0]})[/bold]")
        try:
            detail = await provider.fetch_one(sample_ids[0])
            if detail is None:
                console.print("  [yellow][WARN][/yellow] fetch_one() returned no market data")
            else:
                console.print(f"  [green][OK][/green] {_describe(detail)}")
        except Exception as exc:
            console.print(f"  [bold red][FAIL][/bold red] fetch_one() failed: {exc}")
            return False

    console.print(f"\n[bold green][OK] All checks passed for {provider_id}[/bold green]\n")
    return True


async def amain(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list:
        console.print("Available provider IDs:")
        for provider_id in sorted(PROVIDERS.keys()):
            console.print(f"  - {provider_id}")
        return 0

    if args.provider_id is None:
        parser.print_help()
        console.print("\nExample: stablecoin-verify coinlore")
        return 1

    if args.page < 1:
        console.print("[bold red][FAIL][/bold red] --page must be >= 1")
        return 1

    if args.sample_size < 1:
        console.print("[bold red][FAIL][/bold red] --sample-size must be >= 1")
        return 1

    success = await verify_provider(
        provider_id=args.provider_id,
        page=args.page,
        sample_size=args.sample_size,
    )
    return 0 if success else 1


def main() -> int:
    return asyncio.run(amain())


def entrypoint() -> None:
    sys.exit(main())
