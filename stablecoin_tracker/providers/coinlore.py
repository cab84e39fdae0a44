"""CoinLore provider client.

Legacy ticker-style API without authentication. Listing is offset based
(/tickers/ with start/limit, 100 max per call). Bulk lookup goes through
/ticker/, which accepts a comma-separated id list regardless of rank; the
ceiling used here is 50 ids per call.

API docs: https://www.coinlore.com/cryptocurrency-data-api
"""

import logging
from typing import Any

from stablecoin_tracker.providers.base import BaseProvider
from stablecoin_tracker.providers.dto import ListingItem, ListingPage, MarketSnapshot
from stablecoin_tracker.providers.utils import join_ids

logger = logging.getLogger(__name__)


class CoinLoreProvider(BaseProvider):
    """CoinLore provider client."""

    PROVIDER_ID = "coinlore"
    API_ENDPOINT = "https://api.coinlore.net/api"
    BATCH_LIMIT = 50

    def __init__(self, page_size: int = 100, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.page_size = min(page_size, 100)

    async def list_page(self, page_number: int) -> ListingPage:
        start = (page_number - 1) * self.page_size
        self.logger.debug(f"Fetching listing page {page_number} (start={start})")

        response: Any = await self._get(
            "/tickers/", params={"start": start, "limit": self.page_size}
        )

        items = [
            ListingItem(
                provider_id=str(record["id"]),
                symbol=record.get("symbol") or "",
                name=record.get("name") or "",
            )
            for record in _records(response)
        ]

        return ListingPage(page_number=page_number, items=items)

    async def fetch_many(self, provider_ids: list[str]) -> dict[str, MarketSnapshot]:
        self._check_batch(provider_ids)
        if not provider_ids:
            return {}

        self.logger.debug(f"Fetching tickers for {len(provider_ids)} ids")
        response: Any = await self._get("/ticker/", params={"id": join_ids(provider_ids)})

        snapshots = {}
        for record in _records(response):
            snapshots[str(record["id"])] = self._snapshot(
                record.get("market_cap_usd"), record.get("volume24")
            )

        self.logger.debug(f"Fetched {len(snapshots)}/{len(provider_ids)} tickers")
        return snapshots


def _records(response: Any) -> list[dict[str, Any]]:
    # /tickers/ wraps results in {"data": [...]}, /ticker/ returns a bare list
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        return response.get("data") or []
    return []
