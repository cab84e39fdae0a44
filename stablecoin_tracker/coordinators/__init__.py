"""Coordinators for provider discovery and market data synchronization.

This module provides coordinators that work with any provider client:
- identifier_resolver: Match provider listings to catalog entries
- market_synchronizer: Refresh market figures for records with known provider ids
- merge_policy: Pick one snapshot per record by provider priority
"""

from stablecoin_tracker.coordinators.identifier_resolver import (
    DiscoveryReport,
    IdentifierResolver,
    matches_entry,
)
from stablecoin_tracker.coordinators.market_synchronizer import (
    MarketSynchronizer,
    SyncResult,
    partition_provider_ids,
)
from stablecoin_tracker.coordinators.merge_policy import merge_snapshots

__all__ = [
    "DiscoveryReport",
    "IdentifierResolver",
    "MarketSynchronizer",
    "SyncResult",
    "matches_entry",
    "merge_snapshots",
    "partition_provider_ids",
]
