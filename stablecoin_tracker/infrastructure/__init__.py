"""Infrastructure layer providing reusable components.

This module contains shared infrastructure components used across the stablecoin tracker:
- HTTP client with retry logic
- Rate-limited batch dispatcher
"""

from stablecoin_tracker.infrastructure.batcher import BatchOutcome, RateLimit, RateLimitedBatcher
from stablecoin_tracker.infrastructure.http_client import get

__all__ = ["get", "BatchOutcome", "RateLimit", "RateLimitedBatcher"]
