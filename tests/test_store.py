"""SQL record store tests against a throwaway SQLite database."""

from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from stablecoin_tracker.catalog import DEFAULT_CATALOG
from stablecoin_tracker.coordinators import MarketSynchronizer
from stablecoin_tracker.db import SqlRecordStore, create_uow_factory
from stablecoin_tracker.db.models import Stablecoin
from stablecoin_tracker.errors import StoreUpdateFailure
from stablecoin_tracker.providers.dto import CatalogEntry, MarketFields

from .conftest import FakeBulkProvider


@pytest_asyncio.fixture
async def uow_factory(tmp_path):
    db_connection = f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}"

    engine = create_async_engine(db_connection)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    await engine.dispose()

    return create_uow_factory(db_connection)


@pytest_asyncio.fixture
async def store(uow_factory):
    return SqlRecordStore(uow_factory)


async def _insert(uow_factory, *records: Stablecoin) -> None:
    async with uow_factory() as uow:
        await uow.stablecoins.add_all(records)


@pytest.mark.asyncio
async def test_seed_is_idempotent(store):
    assert await store.seed(DEFAULT_CATALOG) == len(DEFAULT_CATALOG)
    assert await store.seed(DEFAULT_CATALOG) == 0

    entries = await store.list_all()
    assert len(entries) == len(DEFAULT_CATALOG)
    assert all(entry.record_id for entry in entries)


@pytest.mark.asyncio
async def test_seed_uses_first_alias_as_name(store, uow_factory):
    await store.seed([CatalogEntry(symbol="PYUSD", alias_names=("PayPal USD", "PayPal"))])

    entries = await store.list_all()

    assert entries[0].symbol == "PYUSD"
    assert entries[0].alias_names == ("PayPal USD",)
    assert entries[0].provider_ids == {}


@pytest.mark.asyncio
async def test_list_all_is_ordered_by_symbol(store, uow_factory):
    await _insert(
        uow_factory,
        Stablecoin(symbol="USDT", name="Tether", provider_ids={"coinlore": "518"}),
        Stablecoin(symbol="DAI", name="Dai"),
        Stablecoin(symbol="FDUSD", name="First Digital USD"),
    )

    entries = await store.list_all()

    assert [entry.symbol for entry in entries] == ["DAI", "FDUSD", "USDT"]
    assert entries[2].provider_ids == {"coinlore": "518"}


@pytest.mark.asyncio
async def test_update_writes_market_fields(store, uow_factory):
    record = Stablecoin(symbol="USDT", name="Tether")
    await _insert(uow_factory, record)

    await store.update(record.id, MarketFields(market_cap_usd=83e9, volume_24h_usd=45e9))
    # Same values again is harmless
    await store.update(record.id, MarketFields(market_cap_usd=83e9, volume_24h_usd=45e9))

    async with uow_factory() as uow:
        stored = await uow.stablecoins.get(record.id)

    assert stored is not None
    assert stored.market_cap == 83e9
    assert stored.volume_24h == 45e9
    assert stored.market_data_updated_at is not None


@pytest.mark.asyncio
async def test_update_unknown_record_fails(store):
    with pytest.raises(StoreUpdateFailure, match="record not found") as exc_info:
        await store.update("missing", MarketFields(market_cap_usd=1, volume_24h_usd=1))

    assert exc_info.value.record_id == "missing"


@pytest.mark.asyncio
async def test_synchronizer_against_sql_store(store, uow_factory, recording_sleep):
    tether = Stablecoin(symbol="USDT", name="Tether", provider_ids={"coinlore": "518"})
    dai = Stablecoin(symbol="DAI", name="Dai")
    await _insert(uow_factory, tether, dai)
    provider = FakeBulkProvider("coinlore", {"518": (83e9, 45e9)})

    sync = MarketSynchronizer(
        store, {"coinlore": provider}, ["coinlore", "coingecko"], sleep=recording_sleep
    )
    result = await sync.run()

    assert result.total == 1
    assert result.updated == [tether.id]

    async with uow_factory() as uow:
        stored = await uow.stablecoins.get(tether.id)
        untouched = await uow.stablecoins.get(dai.id)

    assert stored.market_cap == 83e9
    assert untouched.market_cap == 0.0


@pytest.mark.asyncio
async def test_repository_updates_through_loaded_record(uow_factory):
    record = Stablecoin(symbol="DAI", name="Dai")
    await _insert(uow_factory, record)
    updated_at = datetime(2026, 1, 1, tzinfo=UTC)

    async with uow_factory() as uow:
        assert await uow.stablecoins.update_market_data(record.id, 5e9, 1e8, updated_at)
        assert not await uow.stablecoins.update_market_data("missing", 1.0, 1.0, updated_at)

    async with uow_factory() as uow:
        stored = await uow.stablecoins.get(record.id)

    assert stored is not None
    assert (stored.market_cap, stored.volume_24h) == (5e9, 1e8)


@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_on_error(store, uow_factory):
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await uow.stablecoins.add(Stablecoin(symbol="USDT", name="Tether"))
            raise RuntimeError("abort")

    assert await store.list_all() == []
