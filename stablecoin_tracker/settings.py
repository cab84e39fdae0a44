"""Environment-backed settings for stablecoin tracker."""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Record store
    db_connection: str | None = Field(default=None, alias="DB_CONNECTION")
    db_engine_kwargs: dict[str, Any] | None = Field(default=None, alias="DB_ENGINE_KWARGS")
    db_session_kwargs: dict[str, Any] | None = Field(default=None, alias="DB_SESSION_KWARGS")

    # Providers
    coingecko_api_key: str | None = Field(default=None, alias="COINGECKO_API_KEY")
    coingecko_api_url: str | None = Field(default=None, alias="COINGECKO_API_URL")
    coinlore_api_url: str | None = Field(default=None, alias="COINLORE_API_URL")
    provider_priority: str = Field(default="coinlore,coingecko", alias="PROVIDER_PRIORITY")
    http_timeout: float = Field(default=30.0, alias="HTTP_TIMEOUT")

    # Per-provider rate parameters for bulk market fetches
    coinlore_batch_size: int = Field(default=50, alias="COINLORE_BATCH_SIZE")
    coinlore_batch_delay: float = Field(default=1.0, alias="COINLORE_BATCH_DELAY")
    coingecko_batch_size: int = Field(default=10, alias="COINGECKO_BATCH_SIZE")
    coingecko_batch_delay: float = Field(default=120.0, alias="COINGECKO_BATCH_DELAY")

    # Discovery
    discovery_provider: str = Field(default="coingecko", alias="DISCOVERY_PROVIDER")
    discovery_page_limit: int = Field(default=40, alias="DISCOVERY_PAGE_LIMIT")
    discovery_page_size: int = Field(default=25, alias="DISCOVERY_PAGE_SIZE")
    discovery_page_delay: float = Field(default=1.5, alias="DISCOVERY_PAGE_DELAY")
    discovery_cooldown_every: int | None = Field(default=25, alias="DISCOVERY_COOLDOWN_EVERY")
    discovery_cooldown_delay: float = Field(default=120.0, alias="DISCOVERY_COOLDOWN_DELAY")
    discovery_detail_delay: float = Field(default=1.5, alias="DISCOVERY_DETAIL_DELAY")
    discovery_output: str = Field(default="discovery-report.json", alias="DISCOVERY_OUTPUT")

    # Synchronization
    sync_halt_on_store_failure: bool = Field(default=False, alias="SYNC_HALT_ON_STORE_FAILURE")
    sync_schedule: str = Field(default="0 * * * *", alias="SYNC_SCHEDULE")

    debug_providers: str | None = Field(default=None, alias="DEBUG_PROVIDERS")
