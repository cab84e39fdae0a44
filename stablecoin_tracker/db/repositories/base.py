from collections.abc import Iterable
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

M = TypeVar("M", bound=SQLModel)


class Repository(Generic[M]):
    _model: type[M]

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, record_id: str) -> M | None:
        return await self._session.get(self._model, record_id)

    async def add(self, record: M) -> M:
        self._session.add(record)
        await self._session.flush()
        return record

    async def add_all(self, records: Iterable[M]) -> None:
        self._session.add_all(list(records))
        await self._session.flush()
