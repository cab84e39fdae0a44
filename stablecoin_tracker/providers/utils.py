"""Common utilities for provider clients."""

import math


def to_usd(value: object) -> float:
    """Parse a provider number; missing or non-numeric values become 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def join_ids(provider_ids: list[str]) -> str:
    return ",".join(provider_ids)
