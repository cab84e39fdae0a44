"""Entry point for stablecoin tracker application."""

import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from stablecoin_tracker.bootstrap import bootstrap
from stablecoin_tracker.catalog import DEFAULT_CATALOG
from stablecoin_tracker.cli import build_parser
from stablecoin_tracker.db.store import SqlRecordStore
from stablecoin_tracker.db.unit_of_work import create_uow_factory
from stablecoin_tracker.errors import TrackerError
from stablecoin_tracker.logging_setup import configure_logging, configure_provider_debug_logging
from stablecoin_tracker.orchestration import TrackerOrchestrator
from stablecoin_tracker.providers.dto import SyncProgress
from stablecoin_tracker.reporting import render_discovery_report, render_sync_result
from stablecoin_tracker.runtime import RuntimeConfig, build_providers, build_runtime_config
from stablecoin_tracker.settings import Settings

logger = logging.getLogger(__name__)

console = Console()


def _build_store(config: RuntimeConfig) -> SqlRecordStore | None:
    if not config.db_connection:
        return None
    uow_factory = create_uow_factory(
        config.db_connection,
        session_kwargs=config.db_session_kwargs,
        engine_kwargs=config.db_engine_kwargs,
    )
    return SqlRecordStore(uow_factory)


async def run_sync(orchestrator: TrackerOrchestrator) -> int:
    with Progress(
        TextColumn("Updating records..."),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("sync", total=None)

        def on_progress(update: SyncProgress) -> None:
            progress.update(task, completed=update.current, total=update.total)

        result = await orchestrator.synchronize(on_progress=on_progress)

    render_sync_result(result, console)
    return 0 if result.ok else 1


async def run_discover(orchestrator: TrackerOrchestrator, output: Path) -> int:
    report = await orchestrator.discover(DEFAULT_CATALOG, output_path=output)
    render_discovery_report(report, console)
    console.print(f"\nResults saved to {output}")
    return 0


async def run_seed(store: SqlRecordStore) -> int:
    inserted = await store.seed(DEFAULT_CATALOG)
    console.print(f"Inserted {inserted} catalog records")
    return 0


async def run_scheduler(orchestrator: TrackerOrchestrator, schedule: str) -> int:
    scheduler = bootstrap(orchestrator, schedule)
    scheduler.start()
    logger.info("Scheduler started, waiting for jobs...")

    # Block forever, keeping the scheduler running
    await asyncio.Event().wait()
    return 0


async def dispatch(config: RuntimeConfig) -> int:
    store = _build_store(config)
    orchestrator = TrackerOrchestrator(config, build_providers(config), store)

    if config.command == "sync":
        return await run_sync(orchestrator)
    if config.command == "discover":
        return await run_discover(orchestrator, Path(config.discovery.output))
    if config.command == "seed":
        assert store is not None
        return await run_seed(store)
    if config.command == "serve":
        return await run_scheduler(orchestrator, config.sync_schedule)

    raise ValueError(f"Unknown command: {config.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for stablecoin tracker."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        settings = Settings()
        config = build_runtime_config(args, settings)
    except Exception as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        return 1

    configure_provider_debug_logging(config.debug_providers)
    logger.info(f"Starting stablecoin tracker: {config.command}")

    try:
        return asyncio.run(dispatch(config))
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
        return 130
    except TrackerError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        console.print(f"[bold red]Failed to {config.command}:[/bold red] {e}")
        return 1


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
