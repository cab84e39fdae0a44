"""HTTP client with exponential backoff retry on transport errors."""

import logging
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_delay,
    wait_exponential,
)

from stablecoin_tracker.errors import ProviderUnavailable

logger = logging.getLogger(__name__)

# JSON can be any of these types
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# Only connection-level failures are retried; error statuses surface as ProviderUnavailable
RETRY_CONFIG = {
    "retry": retry_if_exception_type(httpx.TransportError),
    "stop": stop_after_delay(60),
    "wait": wait_exponential(multiplier=1, max=10),
    "reraise": True,
}


@retry(**RETRY_CONFIG)
async def get(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
) -> JsonValue:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(url, params=params, headers=headers)
        if not response.is_success:
            logger.debug(f"GET {url} returned HTTP {response.status_code}")
            raise ProviderUnavailable(response.status_code, url)
        return response.json()
