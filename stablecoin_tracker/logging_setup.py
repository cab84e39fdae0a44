"""Logging setup helpers for stablecoin tracker startup."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure base logging and quiet chatty third-party loggers."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def configure_provider_debug_logging(providers_spec: str | None) -> None:
    """Enable DEBUG logs for provider-level loggers."""
    for provider_name in parse_csv(providers_spec):
        logging.getLogger(f"stablecoin_tracker.providers.{provider_name}").setLevel(logging.DEBUG)
        logging.getLogger(f"stablecoin_tracker.infrastructure.batcher.{provider_name}").setLevel(
            logging.DEBUG
        )
    if providers_spec:
        logger.info("Enabling DEBUG logging for providers: %s", parse_csv(providers_spec))


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
