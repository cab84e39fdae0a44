"""Market data synchronizer for catalog records with known provider ids."""

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from stablecoin_tracker.coordinators.merge_policy import merge_snapshots
from stablecoin_tracker.errors import StoreUpdateFailure
from stablecoin_tracker.infrastructure.batcher import RateLimit, RateLimitedBatcher, SleepFunc
from stablecoin_tracker.providers.dto import (
    CatalogEntry,
    MarketFields,
    MarketSnapshot,
    SyncProgress,
)
from stablecoin_tracker.providers.protocol import BulkMarketProvider

if TYPE_CHECKING:
    from stablecoin_tracker.db.store import RecordStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[SyncProgress], None]


@dataclass
class SyncResult:
    total: int
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # no provider returned data
    failed: dict[str, str] = field(default_factory=dict)  # record id -> error

    @property
    def processed(self) -> int:
        return len(self.updated) + len(self.skipped) + len(self.failed)

    @property
    def progress(self) -> SyncProgress:
        return SyncProgress(current=self.processed, total=self.total)

    @property
    def ok(self) -> bool:
        return not self.failed


def partition_provider_ids(entries: Sequence[CatalogEntry]) -> dict[str, list[str]]:
    """Group provider ids by provider, deduplicated, in catalog order."""
    partitioned: dict[str, list[str]] = {}
    for entry in entries:
        for provider, provider_id in entry.provider_ids.items():
            if not provider_id:
                continue
            ids = partitioned.setdefault(provider, [])
            if provider_id not in ids:
                ids.append(provider_id)
    return partitioned


class MarketSynchronizer:
    """Refreshes market figures in the store from the configured providers.

    Providers are queried one after another in priority order; their batches
    are spaced by each provider's RateLimit. Store updates are issued one at a
    time in catalog order.
    """

    def __init__(
        self,
        store: "RecordStore",
        providers: Mapping[str, BulkMarketProvider],
        priority: Sequence[str],
        rate_limits: Mapping[str, RateLimit] | None = None,
        halt_on_store_failure: bool = False,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._store = store
        self._providers = providers
        self._priority = list(priority)
        self._rate_limits = rate_limits or {}
        self._halt_on_store_failure = halt_on_store_failure
        self._sleep = sleep

    def _query_order(self, provider_names: set[str]) -> list[str]:
        ordered = [name for name in self._priority if name in provider_names]
        ordered += sorted(provider_names - set(ordered))
        return ordered

    def _batcher_for(self, name: str, provider: BulkMarketProvider) -> RateLimitedBatcher:
        rate_limit = self._rate_limits.get(name) or RateLimit(batch_size=provider.BATCH_LIMIT)
        if rate_limit.batch_size > provider.BATCH_LIMIT:
            logger.warning(
                f"Batch size {rate_limit.batch_size} for {name} exceeds provider limit "
                f"{provider.BATCH_LIMIT}, clamping"
            )
            rate_limit = RateLimit(
                batch_size=provider.BATCH_LIMIT,
                delay=rate_limit.delay,
                cooldown_every=rate_limit.cooldown_every,
                cooldown_delay=rate_limit.cooldown_delay,
            )
        return RateLimitedBatcher(rate_limit, sleep=self._sleep, name=name)

    async def fetch_snapshots(
        self, ids_by_provider: Mapping[str, list[str]]
    ) -> dict[tuple[str, str], MarketSnapshot]:
        """Bulk-fetch snapshots for every provider that has ids; failed batches yield nothing."""
        snapshots: dict[tuple[str, str], MarketSnapshot] = {}

        for name in self._query_order({n for n, ids in ids_by_provider.items() if ids}):
            provider = self._providers.get(name)
            if provider is None or not isinstance(provider, BulkMarketProvider):
                logger.warning(f"No bulk market provider configured for '{name}', skipping its ids")
                continue

            ids = ids_by_provider[name]
            batcher = self._batcher_for(name, provider)
            logger.info(
                f"Fetching {len(ids)} ids from {name} in {len(batcher.split(ids))} batch(es)"
            )

            outcomes = await batcher.run(ids, provider.fetch_many)

            received = 0
            for outcome in outcomes:
                if outcome.result is None:
                    continue
                for provider_id, snapshot in outcome.result.items():
                    snapshots[(name, provider_id)] = snapshot
                    received += 1

            failed_batches = sum(1 for outcome in outcomes if not outcome.ok)
            logger.info(
                f"Received {received}/{len(ids)} snapshots from {name}"
                + (f" ({failed_batches} batch(es) failed)" if failed_batches else "")
            )

        return snapshots

    async def run(self, on_progress: ProgressCallback | None = None) -> SyncResult:
        """Run one synchronization pass.

        Raises:
            StoreUpdateFailure: On the first failed update when halt_on_store_failure is set
        """
        start_time = datetime.now(UTC)
        logger.info("Starting market data synchronization")

        records = await self._store.list_all()
        entries = [entry for entry in records if entry.record_id and entry.provider_ids]
        if len(entries) < len(records):
            logger.info(f"Skipping {len(records) - len(entries)} records without provider ids")

        result = SyncResult(total=len(entries))
        self._report(on_progress, result)

        if not entries:
            logger.warning("No records with provider ids to synchronize")
            return result

        snapshots = await self.fetch_snapshots(partition_provider_ids(entries))

        for entry in entries:
            assert entry.record_id is not None
            by_provider = {
                provider: snapshots[(provider, provider_id)]
                for provider, provider_id in entry.provider_ids.items()
                if (provider, provider_id) in snapshots
            }
            merged = merge_snapshots(by_provider, self._priority)

            if merged is None:
                logger.debug(f"No market data for {entry.symbol}, skipping update")
                result.skipped.append(entry.record_id)
            else:
                await self._update(entry, merged, result)

            self._report(on_progress, result)

        duration = datetime.now(UTC) - start_time
        logger.info(
            f"Synchronization completed in {duration}: {len(result.updated)} updated, "
            f"{len(result.skipped)} without data, {len(result.failed)} failed"
        )
        return result

    async def _update(
        self, entry: CatalogEntry, snapshot: MarketSnapshot, result: SyncResult
    ) -> None:
        assert entry.record_id is not None
        fields = MarketFields(
            market_cap_usd=snapshot.market_cap_usd,
            volume_24h_usd=snapshot.volume_24h_usd,
        )

        try:
            await self._store.update(entry.record_id, fields)
        except Exception as e:
            if isinstance(e, StoreUpdateFailure):
                failure = e
            else:
                failure = StoreUpdateFailure(entry.record_id, str(e))
            if self._halt_on_store_failure:
                logger.error(f"Store update failed for {entry.symbol}, aborting run: {failure}")
                if failure is e:
                    raise
                raise failure from e

            logger.error(f"Store update failed for {entry.symbol}: {failure}", exc_info=True)
            result.failed[entry.record_id] = str(failure)
            return

        logger.debug(
            f"Updated {entry.symbol} from {snapshot.source_provider}: "
            f"market cap {snapshot.market_cap_usd:,.0f}, volume {snapshot.volume_24h_usd:,.0f}"
        )
        result.updated.append(entry.record_id)

    @staticmethod
    def _report(on_progress: ProgressCallback | None, result: SyncResult) -> None:
        if on_progress is not None:
            on_progress(result.progress)
