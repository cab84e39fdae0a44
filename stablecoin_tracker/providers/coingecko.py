"""CoinGecko provider client.

Modern simple-price API. Bulk price lookup is capped at 10 ids per call here,
and the public tier allows only a handful of calls per minute, so bulk batches
are spaced minutes apart by configuration. Listing uses /coins/markets ordered
by market cap; per-coin detail (/coins/{id}) supplies market data during
discovery.

API docs: https://docs.coingecko.com/reference/introduction
"""

import logging
from typing import Any

from stablecoin_tracker.providers.base import BaseProvider
from stablecoin_tracker.providers.dto import ListingItem, ListingPage, MarketSnapshot
from stablecoin_tracker.providers.utils import join_ids

logger = logging.getLogger(__name__)


class CoinGeckoProvider(BaseProvider):
    """CoinGecko provider client."""

    PROVIDER_ID = "coingecko"
    API_ENDPOINT = "https://api.coingecko.com/api/v3"
    API_KEY_HEADER = "x-cg-pro-api-key"
    BATCH_LIMIT = 10

    def __init__(self, page_size: int = 25, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.page_size = min(page_size, 250)

    def _headers(self) -> dict[str, str] | None:
        if not self.api_key:
            return None
        return {self.API_KEY_HEADER: self.api_key}

    async def list_page(self, page_number: int) -> ListingPage:
        self.logger.debug(f"Fetching markets page {page_number}")

        response: Any = await self._get(
            "/coins/markets",
            params={
                "vs_currency": "usd",
                "order": "market_cap_desc",
                "per_page": self.page_size,
                "page": page_number,
                "sparkline": "false",
            },
        )

        items = [
            ListingItem(
                provider_id=record["id"],
                symbol=record.get("symbol") or "",
                name=record.get("name") or "",
            )
            for record in response or []
        ]

        return ListingPage(page_number=page_number, items=items)

    async def fetch_many(self, provider_ids: list[str]) -> dict[str, MarketSnapshot]:
        self._check_batch(provider_ids)
        if not provider_ids:
            return {}

        self.logger.debug(f"Fetching simple prices for {len(provider_ids)} ids")
        response: Any = await self._get(
            "/simple/price",
            params={
                "ids": join_ids(provider_ids),
                "vs_currencies": "usd",
                "include_market_cap": "true",
                "include_24hr_vol": "true",
            },
        )

        snapshots = {}
        for coin_id, details in (response or {}).items():
            details = details or {}
            snapshots[coin_id] = self._snapshot(
                details.get("usd_market_cap"), details.get("usd_24h_vol")
            )

        self.logger.debug(f"Fetched {len(snapshots)}/{len(provider_ids)} simple prices")
        return snapshots

    async def fetch_one(self, provider_id: str) -> MarketSnapshot | None:
        self.logger.debug(f"Fetching details for {provider_id}")

        response: Any = await self._get(
            f"/coins/{provider_id}",
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
                "sparkline": "false",
            },
        )

        market_data = (response or {}).get("market_data")
        if not market_data:
            self.logger.debug(f"No market data in details for {provider_id}")
            return None

        return self._snapshot(
            (market_data.get("market_cap") or {}).get("usd"),
            (market_data.get("total_volume") or {}).get("usd"),
        )
