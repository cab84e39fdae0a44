"""Priority merge tests."""

from stablecoin_tracker.coordinators import merge_snapshots

from .conftest import snapshot


def test_empty_input_has_no_winner():
    assert merge_snapshots({}, ["coinlore", "coingecko"]) is None


def test_highest_priority_snapshot_wins_whole():
    snapshots = {
        "coinlore": snapshot("coinlore", 100, 10),
        "coingecko": snapshot("coingecko", 200, 20),
    }

    winner = merge_snapshots(snapshots, ["coinlore", "coingecko"])
    assert (winner.market_cap_usd, winner.volume_24h_usd) == (100, 10)

    winner = merge_snapshots(snapshots, ["coingecko", "coinlore"])
    assert (winner.market_cap_usd, winner.volume_24h_usd) == (200, 20)


def test_falls_back_to_lower_priority_provider():
    snapshots = {"coingecko": snapshot("coingecko", 200, 20)}

    winner = merge_snapshots(snapshots, ["coinlore", "coingecko"])

    assert winner.source_provider == "coingecko"


def test_zero_values_are_not_mixed_with_other_providers():
    snapshots = {
        "coinlore": snapshot("coinlore", 100, 0),
        "coingecko": snapshot("coingecko", 200, 20),
    }

    winner = merge_snapshots(snapshots, ["coinlore", "coingecko"])

    assert (winner.market_cap_usd, winner.volume_24h_usd) == (100, 0)


def test_unlisted_providers_rank_last_by_name():
    snapshots = {
        "zeta": snapshot("zeta", 3, 3),
        "alpha": snapshot("alpha", 2, 2),
    }

    assert merge_snapshots(snapshots, ["coinlore"]).source_provider == "alpha"
    assert merge_snapshots(snapshots, ["zeta"]).source_provider == "zeta"
