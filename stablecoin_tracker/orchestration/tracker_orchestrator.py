"""Tracker orchestrator."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from stablecoin_tracker.coordinators.identifier_resolver import DiscoveryReport, IdentifierResolver
from stablecoin_tracker.coordinators.market_synchronizer import (
    MarketSynchronizer,
    ProgressCallback,
    SyncResult,
)
from stablecoin_tracker.db.store import RecordStore
from stablecoin_tracker.infrastructure.batcher import SleepFunc
from stablecoin_tracker.providers.base import BaseProvider
from stablecoin_tracker.providers.dto import CatalogEntry
from stablecoin_tracker.providers.protocol import (
    BulkMarketProvider,
    DetailProvider,
    ListingProvider,
)
from stablecoin_tracker.runtime import RuntimeConfig

logger = logging.getLogger(__name__)


class TrackerOrchestrator:
    """Exposes synchronize() and discover() to the CLI and the scheduler."""

    def __init__(
        self,
        config: RuntimeConfig,
        providers: Mapping[str, BaseProvider],
        store: RecordStore | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._config = config
        self._providers = providers
        self._store = store
        self._sleep = sleep

    async def synchronize(self, on_progress: ProgressCallback | None = None) -> SyncResult:
        """Refresh market figures for every record with known provider ids.

        Raises:
            StoreUpdateFailure: Only when halt_on_store_failure is configured
        """
        if self._store is None:
            raise RuntimeError("synchronize() requires a record store")

        bulk_providers = {
            name: provider
            for name, provider in self._providers.items()
            if name in self._config.priority and isinstance(provider, BulkMarketProvider)
        }

        synchronizer = MarketSynchronizer(
            store=self._store,
            providers=bulk_providers,
            priority=self._config.priority,
            rate_limits=self._config.rate_limits,
            halt_on_store_failure=self._config.halt_on_store_failure,
            sleep=self._sleep,
        )
        result = await synchronizer.run(on_progress=on_progress)

        if result.failed:
            logger.warning(
                f"{len(result.failed)} record(s) failed to update: {sorted(result.failed)}"
            )
        return result

    async def scheduled_synchronize(self) -> None:
        """Scheduler job wrapper; a failed run is logged and the next one still fires."""
        try:
            await self.synchronize()
        except Exception as e:
            logger.error(f"Scheduled synchronization failed: {e}", exc_info=True)

    async def discover(
        self, catalog: Sequence[CatalogEntry], output_path: Path | None = None
    ) -> DiscoveryReport:
        """Run discovery and persist the report as JSON."""
        discovery = self._config.discovery
        provider = self._providers[discovery.provider]

        if not isinstance(provider, ListingProvider):
            raise ValueError(f"Provider '{discovery.provider}' does not support listing")

        detail_provider = provider if isinstance(provider, DetailProvider) else None
        if detail_provider is None and discovery.enrich:
            logger.warning(
                f"Provider '{discovery.provider}' has no detail API, skipping enrichment"
            )

        resolver = IdentifierResolver(
            catalog=catalog,
            listing_provider=provider,
            detail_provider=detail_provider,
            page_limit=discovery.page_limit,
            listing_rate=discovery.listing_rate,
            detail_rate=discovery.detail_rate,
            sleep=self._sleep,
        )
        report = await resolver.run(enrich=discovery.enrich)

        path = output_path or Path(discovery.output)
        write_report(report, path)
        return report


def write_report(report: DiscoveryReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Discovery report saved to {path}")
