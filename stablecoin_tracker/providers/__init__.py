"""Provider client registry.

This module maintains a registry of all available provider clients.
Each client is a BaseProvider subclass implementing one or more capabilities
from providers/protocol.py.

To add a new provider:
1. Create providers/{provider_name}.py with a BaseProvider subclass
2. Implement the capability methods the upstream API supports
3. Import the class here and add it to the registry below
4. validate_provider() checks the implementation at import time
"""

import logging

from stablecoin_tracker.providers.base import BaseProvider
from stablecoin_tracker.providers.coingecko import CoinGeckoProvider
from stablecoin_tracker.providers.coinlore import CoinLoreProvider
from stablecoin_tracker.providers.protocol import (
    CAPABILITIES,
    BulkMarketProvider,
    DetailProvider,
    ListingProvider,
)

logger = logging.getLogger(__name__)


def provider_capabilities(provider_cls: type[BaseProvider]) -> list[str]:
    return [name for name in CAPABILITIES if callable(getattr(provider_cls, name, None))]


def validate_provider(provider_cls: type[BaseProvider], name: str) -> None:
    """Validate that a class can serve as a provider client.

    Raises:
        TypeError: If PROVIDER_ID is missing or not a string, or the class
                   implements none of the capability methods
    """
    provider_id = getattr(provider_cls, "PROVIDER_ID", None)
    if not isinstance(provider_id, str):
        raise TypeError(f"{name}: PROVIDER_ID must be str, got {type(provider_id)}")

    if provider_id != name:
        raise TypeError(
            f"{name}: registered under a different name than PROVIDER_ID {provider_id!r}"
        )

    capabilities = provider_capabilities(provider_cls)
    if not capabilities:
        raise TypeError(
            f"{name}: must implement at least one of: {', '.join(CAPABILITIES)}"
        )

    if "fetch_many" in capabilities and provider_cls.BATCH_LIMIT < 1:
        raise TypeError(f"{name}: BATCH_LIMIT must be >= 1 for bulk providers")

    logger.debug(f"{name}: validated (capabilities: {', '.join(capabilities)})")


def _build_registry() -> dict[str, type[BaseProvider]]:
    providers: dict[str, type[BaseProvider]] = {
        "coinlore": CoinLoreProvider,
        "coingecko": CoinGeckoProvider,
    }

    for name, provider_cls in providers.items():
        validate_provider(provider_cls, name)

    logger.debug(f"Provider registry initialized with {len(providers)} providers")
    return providers


# Registry mapping provider_id to provider class (with validation)
PROVIDERS: dict[str, type[BaseProvider]] = _build_registry()

__all__ = [
    "PROVIDERS",
    "BaseProvider",
    "BulkMarketProvider",
    "CoinGeckoProvider",
    "CoinLoreProvider",
    "DetailProvider",
    "ListingProvider",
    "provider_capabilities",
    "validate_provider",
]
