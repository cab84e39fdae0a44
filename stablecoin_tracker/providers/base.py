"""Base provider client."""

import logging
from abc import ABC
from datetime import UTC, datetime
from typing import Any

from stablecoin_tracker.infrastructure import http_client
from stablecoin_tracker.providers.dto import MarketSnapshot
from stablecoin_tracker.providers.utils import to_usd


class BaseProvider(ABC):
    """Base class for provider clients.

    Subclasses declare PROVIDER_ID and implement the capability methods they
    support (see protocol.py). BATCH_LIMIT is the provider's ceiling for bulk
    calls; subclasses without a bulk API leave it at 1.
    """

    PROVIDER_ID: str
    API_ENDPOINT: str
    BATCH_LIMIT: int = 1

    def __init__(
        self,
        api_endpoint: str | None = None,
        api_key: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_endpoint = (api_endpoint or self.API_ENDPOINT).rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @property
    def logger(self) -> logging.Logger:
        """Provider logger.

        Enables per-provider log control via DEBUG_PROVIDERS or
        LOGLEVEL=stablecoin_tracker.providers.{PROVIDER_ID}:LEVEL
        """
        return logging.getLogger(f"stablecoin_tracker.providers.{self.PROVIDER_ID}")

    def __init_subclass__(cls) -> None:
        """Validate subclass declares its identity."""
        super().__init_subclass__()

        if not hasattr(cls, "PROVIDER_ID"):
            raise NotImplementedError(f"{cls.__name__}: missing PROVIDER_ID class attribute")
        if not hasattr(cls, "API_ENDPOINT"):
            raise NotImplementedError(f"{cls.__name__}: missing API_ENDPOINT class attribute")

    def _headers(self) -> dict[str, str] | None:
        return None

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await http_client.get(
            f"{self.api_endpoint}{path}",
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
        )

    def _snapshot(self, market_cap: object, volume: object) -> MarketSnapshot:
        return MarketSnapshot(
            market_cap_usd=to_usd(market_cap),
            volume_24h_usd=to_usd(volume),
            source_provider=self.PROVIDER_ID,
            fetched_at=datetime.now(UTC),
        )

    def _check_batch(self, provider_ids: list[str]) -> None:
        if len(provider_ids) > self.BATCH_LIMIT:
            raise ValueError(
                f"{self.PROVIDER_ID}: {len(provider_ids)} ids exceeds "
                f"batch limit of {self.BATCH_LIMIT}"
            )
