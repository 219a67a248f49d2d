"""Retry with Exponential Backoff for Python."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Tuple, Type, TypeVar
import structlog

from ..observability.metrics import get_metrics

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class RetryConfig:
    retries: int = 3
    initial_delay: float = 0.3
    max_delay: float = 10.0
    multiplier: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)

    @property
    def max_attempts(self) -> int:
        return self.retries + 1


async def with_retry(
    operation: str,
    func: Callable[..., Awaitable[T]],
    *args,
    config: RetryConfig = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    **kwargs,
) -> T:
    """Execute func, retrying failures listed in config.retry_on.

    The first attempt is followed by at most config.retries more, each one
    preceded by a wait that starts at initial_delay and grows by multiplier.
    The exception of the last attempt propagates unchanged.
    """
    config = config or RetryConfig()
    delay = config.initial_delay

    for attempt in range(1, config.max_attempts + 1):
        try:
            result = await func(*args, **kwargs)
        except config.retry_on as e:
            get_metrics().retry_attempts.labels(
                operation=operation, outcome="failure"
            ).inc()

            if attempt >= config.max_attempts:
                logger.error(
                    "retry_exhausted",
                    operation=operation,
                    attempt=attempt,
                    error=repr(e),
                )
                raise

            logger.warning(
                "retry_attempt",
                operation=operation,
                attempt=attempt,
                delay_seconds=delay,
                error=repr(e),
            )

            await sleep(delay)
            delay = min(delay * config.multiplier, config.max_delay)
            continue

        if attempt > 1:
            get_metrics().retry_attempts.labels(
                operation=operation, outcome="success"
            ).inc()
            logger.info(
                "retry_succeeded",
                operation=operation,
                attempt=attempt,
            )
        return result

    raise RuntimeError(f"{operation}: retry loop ended without a result")
