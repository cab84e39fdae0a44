import datetime
from collections.abc import Sequence

from sqlalchemy.sql.expression import select

from stablecoin_tracker.db.models import Stablecoin
from stablecoin_tracker.db.repositories.base import Repository


class StablecoinRepository(Repository[Stablecoin]):
    _model = Stablecoin

    async def list_ordered(self) -> Sequence[Stablecoin]:
        stmt = select(Stablecoin).order_by(Stablecoin.symbol)  # type: ignore[arg-type]
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def get_symbols(self) -> set[str]:
        stmt = select(Stablecoin.symbol)  # type: ignore[call-overload]
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def update_market_data(
        self,
        record_id: str,
        market_cap: float,
        volume_24h: float,
        updated_at: datetime.datetime,
    ) -> bool:
        """Returns False when no record has the given id."""
        record = await self.get(record_id)
        if record is None:
            return False

        record.market_cap = market_cap
        record.volume_24h = volume_24h
        record.market_data_updated_at = updated_at
        await self.add(record)
        return True
