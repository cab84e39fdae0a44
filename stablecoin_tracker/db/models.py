"""Database models for the stablecoin record store."""

import datetime
import uuid

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from stablecoin_tracker.providers.dto import CatalogEntry


def _new_record_id() -> str:
    return uuid.uuid4().hex


class Stablecoin(SQLModel, table=True):
    """Catalog record; provider_ids maps provider name to provider-specific id."""

    id: str = Field(default_factory=_new_record_id, primary_key=True)
    symbol: str = Field(index=True, unique=True)
    name: str
    provider_ids: dict[str, str] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False, server_default="{}")
    )
    market_cap: float = Field(default=0.0)
    volume_24h: float = Field(default=0.0)
    market_data_updated_at: datetime.datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    def to_catalog_entry(self) -> CatalogEntry:
        return CatalogEntry(
            symbol=self.symbol,
            alias_names=(self.name,),
            record_id=self.id,
            provider_ids=dict(self.provider_ids or {}),
        )
