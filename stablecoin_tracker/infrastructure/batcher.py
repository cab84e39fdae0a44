"""Rate-limited sequential batch dispatcher."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RateLimit:
    """Per-provider pacing parameters.

    ``delay`` is awaited before every batch except the first. When
    ``cooldown_every`` is set, the pause following every N-th batch is
    ``cooldown_delay`` instead.
    """

    batch_size: int
    delay: float = 0.0
    cooldown_every: int | None = None
    cooldown_delay: float = 0.0

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.delay < 0 or self.cooldown_delay < 0:
            raise ValueError("delays must be >= 0")
        if self.cooldown_every is not None and self.cooldown_every < 1:
            raise ValueError(f"cooldown_every must be >= 1, got {self.cooldown_every}")

    def pause_after(self, batch_number: int) -> float:
        """Pause before the batch that follows batch ``batch_number`` (1-based)."""
        if self.cooldown_every and batch_number % self.cooldown_every == 0:
            return self.cooldown_delay
        return self.delay


@dataclass(frozen=True)
class BatchOutcome(Generic[T, R]):
    items: list[T]
    result: R | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RateLimitedBatcher:
    """Splits work into fixed-size batches and dispatches them one at a time.

    A failing batch is logged and recorded as an outcome without a result;
    the run continues with the next batch. Retries are left to the caller.
    """

    def __init__(
        self,
        rate_limit: RateLimit,
        sleep: SleepFunc = asyncio.sleep,
        name: str = "batcher",
    ) -> None:
        self.rate_limit = rate_limit
        self._sleep = sleep
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def split(self, items: Sequence[T]) -> list[list[T]]:
        size = self.rate_limit.batch_size
        return [list(items[i : i + size]) for i in range(0, len(items), size)]

    async def run(
        self,
        items: Sequence[T],
        process: Callable[[list[T]], Awaitable[R]],
        stop_when: Callable[[R], bool] | None = None,
    ) -> list[BatchOutcome[T, R]]:
        batches = self.split(items)
        outcomes: list[BatchOutcome[T, R]] = []

        for number, batch in enumerate(batches, start=1):
            if number > 1:
                pause = self.rate_limit.pause_after(number - 1)
                if pause > 0:
                    self._logger.debug(f"Waiting {pause:.1f}s before batch {number}/{len(batches)}")
                    await self._sleep(pause)

            try:
                result = await process(batch)
            except Exception as e:
                self._logger.error(
                    f"Batch {number}/{len(batches)} failed ({len(batch)} items): {e}",
                    exc_info=True,
                )
                outcomes.append(BatchOutcome(items=batch, error=e))
                continue

            outcomes.append(BatchOutcome(items=batch, result=result))

            if stop_when is not None and stop_when(result):
                self._logger.debug(f"Stopping after batch {number}/{len(batches)}")
                break

        return outcomes
