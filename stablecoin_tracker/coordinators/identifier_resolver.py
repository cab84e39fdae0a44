"""Provider identifier discovery for catalog entries."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime

from pydantic import BaseModel, computed_field

from stablecoin_tracker.infrastructure.batcher import RateLimit, RateLimitedBatcher, SleepFunc
from stablecoin_tracker.providers.dto import (
    CatalogEntry,
    ListingItem,
    ListingPage,
    MarketSnapshot,
    MatchCandidate,
)
from stablecoin_tracker.providers.protocol import DetailProvider, ListingProvider

logger = logging.getLogger(__name__)


class DiscoveryReport(BaseModel):
    """Result of one discovery run, handed to downstream reconciliation."""

    provider: str
    total_scanned: int
    matches: dict[str, list[MatchCandidate]]
    unmatched: list[CatalogEntry]
    failed_pages: list[int] = []
    generated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_matches(self) -> int:
        return sum(len(candidates) for candidates in self.matches.values())


def symbol_matches(item: ListingItem, entry: CatalogEntry) -> bool:
    return item.symbol.lower() == entry.symbol.lower()


def name_matches(item: ListingItem, entry: CatalogEntry) -> bool:
    name = item.name.lower()
    return any(alias and alias.lower() in name for alias in entry.alias_names)


def matches_entry(item: ListingItem, entry: CatalogEntry) -> bool:
    return symbol_matches(item, entry) or name_matches(item, entry)


class IdentifierResolver:
    """Scans a provider's ranked listing and matches it against the catalog.

    The page ceiling is a scan budget: assets ranked below the scanned window
    end the run unmatched.
    """

    def __init__(
        self,
        catalog: Sequence[CatalogEntry],
        listing_provider: ListingProvider,
        detail_provider: DetailProvider | None = None,
        page_limit: int = 40,
        listing_rate: RateLimit | None = None,
        detail_rate: RateLimit | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if page_limit < 1:
            raise ValueError(f"page_limit must be >= 1, got {page_limit}")

        self._catalog = tuple(catalog)
        self._listing_provider = listing_provider
        self._detail_provider = detail_provider
        self._page_limit = page_limit
        # Pages and detail calls are dispatched one per batch
        self._listing_batcher = RateLimitedBatcher(
            replace(listing_rate or RateLimit(batch_size=1), batch_size=1),
            sleep=sleep,
            name=f"{listing_provider.PROVIDER_ID}.listing",
        )
        self._detail_batcher = RateLimitedBatcher(
            replace(detail_rate or RateLimit(batch_size=1), batch_size=1),
            sleep=sleep,
            name="detail",
        )

    def match_item(self, item: ListingItem) -> list[CatalogEntry]:
        return [entry for entry in self._catalog if matches_entry(item, entry)]

    async def scan(self) -> tuple[dict[str, dict[str, MatchCandidate]], int, list[int]]:
        """Walk listing pages and collect deduplicated candidates per catalog symbol.

        Returns (candidates by symbol then provider id, listings scanned, failed pages).
        """
        provider_id = self._listing_provider.PROVIDER_ID
        scanned = 0

        async def fetch_page(batch: list[int]) -> ListingPage:
            nonlocal scanned
            page_number = batch[0]
            logger.info(f"Searching {provider_id} page {page_number} ({scanned} listings searched)")
            page = await self._listing_provider.list_page(page_number)
            scanned += len(page.items)
            return page

        outcomes = await self._listing_batcher.run(
            list(range(1, self._page_limit + 1)),
            fetch_page,
            stop_when=lambda page: not page.items,
        )

        candidates: dict[str, dict[str, MatchCandidate]] = {}
        failed_pages: list[int] = []

        for outcome in outcomes:
            if not outcome.ok or outcome.result is None:
                failed_pages.extend(outcome.items)
                continue

            page = outcome.result
            if not page.items:
                logger.info(f"No more listings after page {page.page_number - 1}")
                break

            for item in page.items:
                for entry in self.match_item(item):
                    by_id = candidates.setdefault(entry.symbol, {})
                    if item.provider_id not in by_id:
                        by_id[item.provider_id] = MatchCandidate(
                            catalog_symbol=entry.symbol,
                            provider_id=item.provider_id,
                            provider_name=provider_id,
                            matched_name=item.name,
                        )

        if failed_pages:
            logger.warning(f"Failed to fetch {len(failed_pages)} listing page(s): {failed_pages}")

        return candidates, scanned, failed_pages

    async def enrich(
        self, candidates: dict[str, dict[str, MatchCandidate]]
    ) -> dict[str, list[MatchCandidate]]:
        """Attach market detail to each candidate; failed lookups stay without it."""
        flat = [c for by_id in candidates.values() for c in by_id.values()]

        detail_provider = self._detail_provider
        if detail_provider is None or not flat:
            return {symbol: list(by_id.values()) for symbol, by_id in candidates.items()}

        logger.info(f"Fetching detailed information for {len(flat)} matched listings")

        async def fetch_detail(batch: list[MatchCandidate]) -> MarketSnapshot | None:
            return await detail_provider.fetch_one(batch[0].provider_id)

        outcomes = await self._detail_batcher.run(flat, fetch_detail)

        enriched: dict[str, list[MatchCandidate]] = {symbol: [] for symbol in candidates}
        for outcome in outcomes:
            candidate = outcome.items[0]
            if outcome.result is not None:
                candidate = replace(candidate, market=outcome.result)
            enriched[candidate.catalog_symbol].append(candidate)

        return enriched

    async def run(self, enrich: bool = True) -> DiscoveryReport:
        start_time = datetime.now(UTC)
        provider_id = self._listing_provider.PROVIDER_ID
        logger.info(
            f"Starting discovery on {provider_id} for {len(self._catalog)} catalog entries "
            f"(page limit {self._page_limit})"
        )

        candidates, scanned, failed_pages = await self.scan()

        if enrich:
            matches = await self.enrich(candidates)
        else:
            matches = {symbol: list(by_id.values()) for symbol, by_id in candidates.items()}

        unmatched = [entry for entry in self._catalog if not matches.get(entry.symbol)]

        report = DiscoveryReport(
            provider=provider_id,
            total_scanned=scanned,
            matches=matches,
            unmatched=unmatched,
            failed_pages=failed_pages,
            generated_at=datetime.now(UTC),
        )

        duration = datetime.now(UTC) - start_time
        logger.info(
            f"Discovery completed on {provider_id} in {duration}: {scanned} listings searched, "
            f"{report.total_matches} matches, {len(unmatched)} catalog entries unmatched"
        )
        return report
