"""Data Transfer Objects for provider clients and coordinators."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CatalogEntry:
    symbol: str
    alias_names: tuple[str, ...] = ()
    record_id: str | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)  # provider name -> provider id


@dataclass(frozen=True)
class ListingItem:
    provider_id: str
    symbol: str
    name: str


@dataclass(frozen=True)
class ListingPage:
    page_number: int
    items: list[ListingItem]


@dataclass(frozen=True)
class MarketSnapshot:
    market_cap_usd: float
    volume_24h_usd: float
    source_provider: str
    fetched_at: datetime


@dataclass(frozen=True)
class MatchCandidate:
    catalog_symbol: str
    provider_id: str
    provider_name: str
    matched_name: str
    market: MarketSnapshot | None = None  # filled by enrichment


@dataclass(frozen=True)
class MarketFields:
    market_cap_usd: float
    volume_24h_usd: float


@dataclass(frozen=True)
class SyncProgress:
    current: int
    total: int
