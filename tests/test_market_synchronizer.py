"""Market synchronizer tests."""

import httpx
import pytest

from stablecoin_tracker.coordinators import (
    MarketSynchronizer,
    SyncResult,
    partition_provider_ids,
)
from stablecoin_tracker.errors import StoreUpdateFailure
from stablecoin_tracker.infrastructure.batcher import RateLimit
from stablecoin_tracker.providers.dto import CatalogEntry, MarketFields, SyncProgress

from .conftest import FakeBulkProvider, FakeStore

PRIORITY = ["coinlore", "coingecko"]


def entry(record_id: str, symbol: str, **provider_ids: str) -> CatalogEntry:
    return CatalogEntry(symbol=symbol, record_id=record_id, provider_ids=provider_ids)


def test_partition_deduplicates_in_catalog_order():
    entries = [
        entry("1", "USDT", coinlore="518", coingecko="tether"),
        entry("2", "USDC", coingecko="usd-coin"),
        entry("3", "USDT.e", coinlore="518", coingecko=""),
    ]

    assert partition_provider_ids(entries) == {
        "coinlore": ["518"],
        "coingecko": ["tether", "usd-coin"],
    }


class TestMarketSynchronizer:
    @pytest.mark.asyncio
    async def test_single_entry_end_to_end(self, recording_sleep):
        store = FakeStore([entry("r1", "USDT", coinlore="518")])
        provider = FakeBulkProvider("coinlore", {"518": (83e9, 45e9)})
        progress: list[SyncProgress] = []

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        result = await sync.run(progress.append)

        assert store.updates == [("r1", MarketFields(market_cap_usd=83e9, volume_24h_usd=45e9))]
        assert result.updated == ["r1"]
        assert progress[-1] == SyncProgress(current=1, total=1)

    @pytest.mark.asyncio
    async def test_transport_error_yields_no_updates(self, recording_sleep):
        store = FakeStore([entry("r1", "USDT", coinlore="518")])
        provider = FakeBulkProvider("coinlore", {}, error=httpx.ConnectError("unreachable"))
        progress: list[SyncProgress] = []

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        result = await sync.run(progress.append)

        assert store.updates == []
        assert result.skipped == ["r1"]
        assert result.ok
        assert progress[-1] == SyncProgress(current=1, total=1)

    @pytest.mark.asyncio
    async def test_highest_priority_provider_wins(self, recording_sleep):
        store = FakeStore([entry("r1", "USDT", coinlore="518", coingecko="tether")])
        providers = {
            "coinlore": FakeBulkProvider("coinlore", {"518": (100, 10)}),
            "coingecko": FakeBulkProvider("coingecko", {"tether": (200, 20)}),
        }

        sync = MarketSynchronizer(
            store, providers, ["coingecko", "coinlore"], sleep=recording_sleep
        )
        await sync.run()

        assert store.updates == [("r1", MarketFields(market_cap_usd=200, volume_24h_usd=20))]

    @pytest.mark.asyncio
    async def test_lower_priority_provider_fills_gaps(self, recording_sleep):
        store = FakeStore([entry("r1", "USDC", coinlore="33285", coingecko="usd-coin")])
        providers = {
            "coinlore": FakeBulkProvider("coinlore", {}),
            "coingecko": FakeBulkProvider("coingecko", {"usd-coin": (32e9, 5e9)}),
        }

        sync = MarketSynchronizer(store, providers, PRIORITY, sleep=recording_sleep)
        await sync.run()

        assert store.updates == [("r1", MarketFields(market_cap_usd=32e9, volume_24h_usd=5e9))]

    @pytest.mark.asyncio
    async def test_entries_without_data_are_skipped(self, recording_sleep):
        store = FakeStore(
            [
                entry("r1", "USDT", coinlore="518"),
                entry("r2", "DAI", coinlore="2311"),
                CatalogEntry(symbol="PYUSD", record_id="r3"),
            ]
        )
        provider = FakeBulkProvider("coinlore", {"518": (83e9, 45e9)})

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        result = await sync.run()

        assert result.total == 2
        assert result.updated == ["r1"]
        assert result.skipped == ["r2"]
        assert [record_id for record_id, _ in store.updates] == ["r1"]

    @pytest.mark.asyncio
    async def test_store_failure_is_recorded_and_run_continues(self, recording_sleep):
        store = FakeStore(
            [entry("r1", "USDT", coinlore="518"), entry("r2", "DAI", coinlore="2311")],
            failing={"r1"},
        )
        provider = FakeBulkProvider("coinlore", {"518": (1, 1), "2311": (2, 2)})

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        result = await sync.run()

        assert not result.ok
        assert "r1" in result.failed
        assert result.updated == ["r2"]

    @pytest.mark.asyncio
    async def test_store_failure_halts_when_configured(self, recording_sleep):
        store = FakeStore(
            [entry("r1", "USDT", coinlore="518"), entry("r2", "DAI", coinlore="2311")],
            failing={"r1"},
        )
        provider = FakeBulkProvider("coinlore", {"518": (1, 1), "2311": (2, 2)})

        sync = MarketSynchronizer(
            store,
            {"coinlore": provider},
            PRIORITY,
            halt_on_store_failure=True,
            sleep=recording_sleep,
        )
        with pytest.raises(StoreUpdateFailure) as exc_info:
            await sync.run()

        assert exc_info.value.record_id == "r1"
        assert store.updates == []

    @pytest.mark.asyncio
    async def test_progress_is_monotone_and_complete(self, recording_sleep):
        entries = [entry(f"r{n}", f"S{n}", coinlore=str(n)) for n in range(5)]
        store = FakeStore(entries, failing={"r2"})
        provider = FakeBulkProvider("coinlore", {"0": (1, 1), "1": (1, 1), "2": (1, 1)})
        progress: list[SyncProgress] = []

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        await sync.run(progress.append)

        assert progress[0] == SyncProgress(current=0, total=5)
        currents = [p.current for p in progress]
        assert currents == sorted(currents)
        assert all(p.current <= p.total for p in progress)
        assert progress[-1] == SyncProgress(current=5, total=5)

    @pytest.mark.asyncio
    async def test_batches_respect_provider_limits_and_delays(self, recording_sleep):
        entries = [
            entry(f"r{n}", f"S{n}", coinlore=f"cl-{n}", coingecko=f"cg-{n}") for n in range(25)
        ]
        store = FakeStore(entries)
        coinlore = FakeBulkProvider("coinlore", {}, batch_limit=50)
        coingecko = FakeBulkProvider("coingecko", {}, batch_limit=10)
        rate_limits = {
            "coinlore": RateLimit(batch_size=50, delay=1.0),
            "coingecko": RateLimit(batch_size=10, delay=120.0),
        }

        sync = MarketSynchronizer(
            store,
            {"coinlore": coinlore, "coingecko": coingecko},
            PRIORITY,
            rate_limits=rate_limits,
            sleep=recording_sleep,
        )
        result = await sync.run()

        assert [len(batch) for batch in coinlore.calls] == [25]
        assert [len(batch) for batch in coingecko.calls] == [10, 10, 5]
        assert recording_sleep.calls == [120.0, 120.0]
        assert len(result.skipped) == 25

    @pytest.mark.asyncio
    async def test_oversized_rate_limit_is_clamped(self, recording_sleep):
        entries = [entry(f"r{n}", f"S{n}", coingecko=f"cg-{n}") for n in range(12)]
        coingecko = FakeBulkProvider("coingecko", {}, batch_limit=10)

        sync = MarketSynchronizer(
            FakeStore(entries),
            {"coingecko": coingecko},
            PRIORITY,
            rate_limits={"coingecko": RateLimit(batch_size=50)},
            sleep=recording_sleep,
        )
        await sync.run()

        assert [len(batch) for batch in coingecko.calls] == [10, 2]

    @pytest.mark.asyncio
    async def test_ids_for_unconfigured_providers_are_ignored(self, recording_sleep):
        store = FakeStore([entry("r1", "USDT", coinlore="518", other="tether-x")])
        provider = FakeBulkProvider("coinlore", {"518": (5, 6)})

        sync = MarketSynchronizer(store, {"coinlore": provider}, PRIORITY, sleep=recording_sleep)
        result = await sync.run()

        assert result.updated == ["r1"]

    @pytest.mark.asyncio
    async def test_empty_store(self, recording_sleep):
        progress: list[SyncProgress] = []
        sync = MarketSynchronizer(FakeStore([]), {}, PRIORITY, sleep=recording_sleep)

        result = await sync.run(progress.append)

        assert result == SyncResult(total=0)
        assert progress == [SyncProgress(current=0, total=0)]
