"""Unit of Work for the stablecoin record store."""

import asyncio
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stablecoin_tracker.db.repositories import StablecoinRepository

UOWFactoryType = Callable[[], "UnitOfWork"]


def setup_db_session(
    db_connection: str,
    session_kwargs: dict[str, Any] | None = None,
    engine_kwargs: dict[str, Any] | None = None,
) -> async_sessionmaker[AsyncSession]:
    # Records are read after commit when mapped to catalog entries
    session_kwargs = {"expire_on_commit": False, **(session_kwargs or {})}
    engine = create_async_engine(db_connection, **(engine_kwargs or {}))
    return async_sessionmaker(bind=engine, class_=AsyncSession, **session_kwargs)


def create_uow_factory(
    db_connection: str,
    session_kwargs: dict[str, Any] | None = None,
    engine_kwargs: dict[str, Any] | None = None,
) -> UOWFactoryType:
    """Bind one engine to the connection string and return a UnitOfWork factory."""
    session_factory = setup_db_session(db_connection, session_kwargs, engine_kwargs)
    return lambda: UnitOfWork(session_factory)


class UnitOfWork:
    """One session per `async with` block, committed on clean exit.

    Usage:
        async with uow_factory() as uow:
            records = await uow.stablecoins.list_ordered()
    """

    stablecoins: StablecoinRepository

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def __aenter__(self) -> Self:
        self._session: AsyncSession = self._session_factory()
        self.stablecoins = StablecoinRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_val:
                await self._session.rollback()
            else:
                await self._session.commit()
        finally:
            # Shielded so a cancelled sync run still returns its connection
            await asyncio.shield(self._session.close())
