"""Shared fakes and helpers for tracker tests."""

import argparse
from collections.abc import Iterable
from datetime import UTC, datetime

import pytest

from stablecoin_tracker.cli import build_parser
from stablecoin_tracker.errors import StoreUpdateFailure
from stablecoin_tracker.providers.dto import (
    CatalogEntry,
    ListingItem,
    ListingPage,
    MarketFields,
    MarketSnapshot,
)
from stablecoin_tracker.settings import Settings

DB = "sqlite+aiosqlite:///tracker.db"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment for the credential fields."""
    values = {"DB_CONNECTION": None, "COINGECKO_API_KEY": None, **overrides}
    return Settings(_env_file=None, **values)


def parse(*argv: str) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


def snapshot(provider: str, market_cap: float, volume: float) -> MarketSnapshot:
    return MarketSnapshot(
        market_cap_usd=market_cap,
        volume_24h_usd=volume,
        source_provider=provider,
        fetched_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


class RecordingSleep:
    """Stands in for asyncio.sleep and records requested pauses."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


class FakeStore:
    def __init__(self, entries: Iterable[CatalogEntry], failing: Iterable[str] = ()) -> None:
        self.entries = list(entries)
        self.failing = set(failing)
        self.updates: list[tuple[str, MarketFields]] = []

    async def list_all(self) -> list[CatalogEntry]:
        return list(self.entries)

    async def update(self, record_id: str, fields: MarketFields) -> None:
        if record_id in self.failing:
            raise StoreUpdateFailure(record_id, "write rejected")
        self.updates.append((record_id, fields))


class FakeBulkProvider:
    def __init__(
        self,
        provider_id: str,
        data: dict[str, tuple[float, float]],
        batch_limit: int = 50,
        error: Exception | None = None,
    ) -> None:
        self.PROVIDER_ID = provider_id
        self.BATCH_LIMIT = batch_limit
        self.data = data
        self.error = error
        self.calls: list[list[str]] = []

    async def fetch_many(self, provider_ids: list[str]) -> dict[str, MarketSnapshot]:
        self.calls.append(list(provider_ids))
        if self.error is not None:
            raise self.error
        return {
            provider_id: snapshot(self.PROVIDER_ID, *self.data[provider_id])
            for provider_id in provider_ids
            if provider_id in self.data
        }


class FakeListingProvider:
    PROVIDER_ID = "fake"

    def __init__(
        self,
        pages: list[list[ListingItem]],
        errors: dict[int, Exception] | None = None,
    ) -> None:
        self.pages = pages
        self.errors = errors or {}
        self.requested: list[int] = []

    async def list_page(self, page_number: int) -> ListingPage:
        self.requested.append(page_number)
        if page_number in self.errors:
            raise self.errors[page_number]
        index = page_number - 1
        items = self.pages[index] if index < len(self.pages) else []
        return ListingPage(page_number=page_number, items=list(items))


class FakeDetailProvider:
    PROVIDER_ID = "fake"

    def __init__(
        self,
        details: dict[str, tuple[float, float]],
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.details = details
        self.errors = errors or {}
        self.requested: list[str] = []

    async def fetch_one(self, provider_id: str) -> MarketSnapshot | None:
        self.requested.append(provider_id)
        if provider_id in self.errors:
            raise self.errors[provider_id]
        if provider_id not in self.details:
            return None
        return snapshot(self.PROVIDER_ID, *self.details[provider_id])


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
