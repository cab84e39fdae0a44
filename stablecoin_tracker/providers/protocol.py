"""Provider capability protocols.

Providers implement any subset of the capabilities. Coordinators detect what a
provider offers with isinstance() against these runtime-checkable protocols.
"""

from typing import Protocol, runtime_checkable

from stablecoin_tracker.providers.dto import ListingPage, MarketSnapshot


@runtime_checkable
class ListingProvider(Protocol):
    """Ranked listing of assets by market capitalization."""

    PROVIDER_ID: str

    async def list_page(self, page_number: int) -> ListingPage:
        """Fetch one page (1-based) of the provider's listing.

        An empty page means the listing is exhausted.
        """
        ...


@runtime_checkable
class BulkMarketProvider(Protocol):
    """[PREFERRED] Market figures for many ids in one call."""

    PROVIDER_ID: str
    BATCH_LIMIT: int

    async def fetch_many(self, provider_ids: list[str]) -> dict[str, MarketSnapshot]:
        """Fetch snapshots for at most BATCH_LIMIT ids.

        Ids the provider does not know are absent from the result.
        """
        ...


@runtime_checkable
class DetailProvider(Protocol):
    """[FALLBACK] Full detail for a single id."""

    PROVIDER_ID: str

    async def fetch_one(self, provider_id: str) -> MarketSnapshot | None: ...


CAPABILITIES: dict[str, type] = {
    "list_page": ListingProvider,
    "fetch_many": BulkMarketProvider,
    "fetch_one": DetailProvider,
}
