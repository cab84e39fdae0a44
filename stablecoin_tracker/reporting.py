"""Console rendering of discovery reports and sync summaries."""

from rich.console import Console
from rich.table import Table

from stablecoin_tracker.coordinators.identifier_resolver import DiscoveryReport
from stablecoin_tracker.coordinators.market_synchronizer import SyncResult


def format_usd(value: float | None, scale: float, suffix: str) -> str:
    if not value:
        return "N/A"
    return f"${value / scale:.2f}{suffix}"


def render_discovery_report(report: DiscoveryReport, console: Console) -> None:
    console.print("\n[bold]=== SEARCH RESULTS ===[/bold]")
    console.print(f"Total listings searched on {report.provider}: {report.total_scanned}\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan")
    table.add_column("ID", style="yellow")
    table.add_column("Name")
    table.add_column("Market Cap", justify="right", style="green")
    table.add_column("Volume 24h", justify="right", style="green")

    for symbol, candidates in report.matches.items():
        for candidate in candidates:
            market = candidate.market
            table.add_row(
                symbol,
                candidate.provider_id,
                candidate.matched_name,
                format_usd(market.market_cap_usd if market else None, 1e9, "B"),
                format_usd(market.volume_24h_usd if market else None, 1e6, "M"),
            )

    console.print(table)
    console.print(f"\nTotal matches found: {report.total_matches}")

    if report.failed_pages:
        console.print(f"[yellow]Listing pages that failed: {report.failed_pages}[/yellow]")

    if report.unmatched:
        console.print("\n[bold]Stablecoins with no matches:[/bold]")
        for entry in report.unmatched:
            console.print(f"  {entry.symbol} ({', '.join(entry.alias_names)})")


def render_sync_result(result: SyncResult, console: Console) -> None:
    if result.failed:
        console.print(
            f"[bold red]{len(result.failed)} of {result.total} records failed to update[/bold red]"
        )
        for record_id, message in result.failed.items():
            console.print(f"  [red]{record_id}[/red]: {message}")
        return

    console.print("[bold green]Market data has been successfully updated![/bold green]")
