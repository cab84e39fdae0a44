"""Runtime configuration building for stablecoin tracker startup."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Any

from stablecoin_tracker.errors import MissingCredentials
from stablecoin_tracker.infrastructure.batcher import RateLimit
from stablecoin_tracker.logging_setup import parse_csv
from stablecoin_tracker.providers import PROVIDERS, BaseProvider
from stablecoin_tracker.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveryConfig:
    provider: str
    page_limit: int
    page_size: int
    listing_rate: RateLimit
    detail_rate: RateLimit
    output: str
    enrich: bool = True


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved startup configuration after CLI/ENV merge."""

    command: str
    db_connection: str | None
    db_engine_kwargs: dict[str, Any]
    db_session_kwargs: dict[str, Any]
    priority: list[str]
    rate_limits: dict[str, RateLimit]
    provider_kwargs: dict[str, dict[str, Any]]
    discovery: DiscoveryConfig
    halt_on_store_failure: bool
    sync_schedule: str
    debug_providers: str | None


def build_runtime_config(args: argparse.Namespace, settings: Settings) -> RuntimeConfig:
    """Resolve final runtime configuration used by main().

    Raises:
        MissingCredentials: If the command needs a credential that is not configured
        ValueError: If no usable provider remains or a numeric option is out of range
    """
    command = args.command
    all_providers = set(PROVIDERS)

    providers_arg = args.providers if args.providers is not None else settings.provider_priority
    priority = _parse_priority(providers_arg, all_providers)
    if not priority:
        raise ValueError(
            f"No known providers in '{providers_arg}'. Available: {sorted(all_providers)}"
        )

    discovery = _build_discovery_config(args, settings)
    if discovery.provider not in all_providers:
        raise ValueError(
            f"Unknown discovery provider '{discovery.provider}'. Available: {sorted(all_providers)}"
        )

    config = RuntimeConfig(
        command=command,
        db_connection=settings.db_connection,
        db_engine_kwargs=_resolve_engine_kwargs(settings.db_engine_kwargs),
        db_session_kwargs=_resolve_session_kwargs(settings.db_session_kwargs),
        priority=priority,
        rate_limits=_build_rate_limits(settings),
        provider_kwargs=build_provider_kwargs(settings, discovery.page_size),
        discovery=discovery,
        halt_on_store_failure=settings.sync_halt_on_store_failure,
        sync_schedule=settings.sync_schedule,
        debug_providers=(
            args.debug_providers if args.debug_providers is not None else settings.debug_providers
        ),
    )

    require_credentials(config, settings)
    return config


def require_credentials(config: RuntimeConfig, settings: Settings) -> None:
    """Fail before any network call when the command lacks its static credentials."""
    if config.command in ("sync", "seed", "serve") and not config.db_connection:
        raise MissingCredentials("DB_CONNECTION", config.command)

    if (
        config.command == "discover"
        and config.discovery.provider == "coingecko"
        and not settings.coingecko_api_key
    ):
        raise MissingCredentials("COINGECKO_API_KEY", config.command)


def build_providers(config: RuntimeConfig) -> dict[str, BaseProvider]:
    """Instantiate every registered provider with its configured kwargs."""
    return {
        name: provider_cls(**config.provider_kwargs.get(name, {}))
        for name, provider_cls in PROVIDERS.items()
    }


def _parse_priority(providers_spec: str | None, all_providers: set[str]) -> list[str]:
    """Parse comma-separated provider priority, dropping unknown names."""
    requested: list[str] = []
    for name in parse_csv(providers_spec):
        if name not in requested:
            requested.append(name)

    unknown = [name for name in requested if name not in all_providers]
    if unknown:
        logger.warning(
            "Unknown provider IDs requested: %s. Available providers: %s",
            unknown,
            sorted(all_providers),
        )

    return [name for name in requested if name in all_providers]


def _build_rate_limits(settings: Settings) -> dict[str, RateLimit]:
    return {
        "coinlore": RateLimit(
            batch_size=settings.coinlore_batch_size, delay=settings.coinlore_batch_delay
        ),
        "coingecko": RateLimit(
            batch_size=settings.coingecko_batch_size, delay=settings.coingecko_batch_delay
        ),
    }


def _build_discovery_config(args: argparse.Namespace, settings: Settings) -> DiscoveryConfig:
    page_limit = getattr(args, "page_limit", None)
    if page_limit is None:
        page_limit = settings.discovery_page_limit
    output = getattr(args, "output", None) or settings.discovery_output
    enrich = not getattr(args, "no_enrich", False)

    if page_limit < 1:
        raise ValueError("DISCOVERY_PAGE_LIMIT must be >= 1")
    if settings.discovery_page_size < 1:
        raise ValueError("DISCOVERY_PAGE_SIZE must be >= 1")

    return DiscoveryConfig(
        provider=getattr(args, "provider", None) or settings.discovery_provider,
        page_limit=page_limit,
        page_size=settings.discovery_page_size,
        listing_rate=RateLimit(
            batch_size=1,
            delay=settings.discovery_page_delay,
            cooldown_every=settings.discovery_cooldown_every or None,
            cooldown_delay=settings.discovery_cooldown_delay,
        ),
        detail_rate=RateLimit(batch_size=1, delay=settings.discovery_detail_delay),
        output=output,
        enrich=enrich,
    )


def build_provider_kwargs(settings: Settings, page_size: int) -> dict[str, dict[str, Any]]:
    """Constructor kwargs per provider id, taken from settings."""
    return {
        "coinlore": {
            "api_endpoint": settings.coinlore_api_url,
            "timeout": settings.http_timeout,
            "page_size": page_size,
        },
        "coingecko": {
            "api_endpoint": settings.coingecko_api_url,
            "api_key": settings.coingecko_api_key,
            "timeout": settings.http_timeout,
            "page_size": page_size,
        },
    }


def _resolve_engine_kwargs(service_engine_kwargs: dict[str, Any] | None) -> dict[str, Any]:
    defaults = {
        "echo": False,
        "pool_pre_ping": True,
    }
    return {**defaults, **(service_engine_kwargs or {})}


def _resolve_session_kwargs(service_session_kwargs: dict[str, Any] | None) -> dict[str, Any]:
    defaults = {
        "expire_on_commit": False,
    }
    return {**defaults, **(service_session_kwargs or {})}
