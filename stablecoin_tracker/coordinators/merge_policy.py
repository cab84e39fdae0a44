"""Priority-based selection between provider snapshots."""

from collections.abc import Mapping, Sequence

from stablecoin_tracker.providers.dto import MarketSnapshot


def merge_snapshots(
    snapshots: Mapping[str, MarketSnapshot], priority: Sequence[str]
) -> MarketSnapshot | None:
    """Return the snapshot of the highest-priority provider that reported one.

    The winner's snapshot is taken whole; values are never averaged across
    providers. Providers missing from ``priority`` rank after it, by name.
    """
    if not snapshots:
        return None

    rank = {provider: index for index, provider in enumerate(priority)}
    winner = min(snapshots, key=lambda provider: (rank.get(provider, len(rank)), provider))
    return snapshots[winner]
