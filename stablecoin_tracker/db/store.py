"""Record store interface consumed by the synchronizer, and its SQL implementation."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from stablecoin_tracker.db.models import Stablecoin
from stablecoin_tracker.db.unit_of_work import UOWFactoryType
from stablecoin_tracker.errors import StoreUpdateFailure
from stablecoin_tracker.providers.dto import CatalogEntry, MarketFields

logger = logging.getLogger(__name__)


@runtime_checkable
class RecordStore(Protocol):
    """Key-value record store keyed by an opaque record id.

    Both calls are atomic per call; repeating an update with the same values
    is harmless.
    """

    async def list_all(self) -> list[CatalogEntry]: ...

    async def update(self, record_id: str, fields: MarketFields) -> None: ...


class SqlRecordStore:
    """RecordStore over the stablecoin table; each call runs in its own unit of work."""

    def __init__(self, uow_factory: UOWFactoryType) -> None:
        self._uow_factory = uow_factory

    async def list_all(self) -> list[CatalogEntry]:
        async with self._uow_factory() as uow:
            records = await uow.stablecoins.list_ordered()
        return [record.to_catalog_entry() for record in records]

    async def update(self, record_id: str, fields: MarketFields) -> None:
        try:
            async with self._uow_factory() as uow:
                found = await uow.stablecoins.update_market_data(
                    record_id,
                    market_cap=fields.market_cap_usd,
                    volume_24h=fields.volume_24h_usd,
                    updated_at=datetime.now(UTC),
                )
        except SQLAlchemyError as e:
            raise StoreUpdateFailure(record_id, str(e)) from e

        if not found:
            raise StoreUpdateFailure(record_id, "record not found")

    async def seed(self, catalog: Iterable[CatalogEntry]) -> int:
        """Insert catalog entries whose symbol is not stored yet; returns inserted count."""
        async with self._uow_factory() as uow:
            existing = await uow.stablecoins.get_symbols()
            new_records = [
                Stablecoin(
                    symbol=entry.symbol,
                    name=entry.alias_names[0] if entry.alias_names else entry.symbol,
                    provider_ids=dict(entry.provider_ids),
                )
                for entry in catalog
                if entry.symbol not in existing
            ]
            await uow.stablecoins.add_all(new_records)

        logger.info(
            f"Seeded {len(new_records)} catalog records ({len(existing)} already present)"
        )
        return len(new_records)
