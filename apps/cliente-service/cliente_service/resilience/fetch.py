"""HTTP GET with per-attempt timeout and retry on transient failures."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional

import aiohttp
import structlog

from ..errors import MalformedUpstreamResponse, UpstreamServerError
from ..observability.metrics import get_metrics
from .retry import RetryConfig, with_retry

logger = structlog.get_logger()

TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, UpstreamServerError)


@dataclass
class FetchResponse:
    """Response envelope of a completed fetch."""
    status: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class ResilientFetcher:
    """Issues requests through one shared session.

    Network errors, timeouts and 5xx answers are retried with exponential
    backoff. 4xx answers are returned as-is.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 20.0,
        retries: int = 3,
        initial_delay: float = 0.3,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._session = session
        self._owns_session = session is None
        self.timeout = timeout
        self.retry_config = RetryConfig(
            retries=retries,
            initial_delay=initial_delay,
            retry_on=TRANSIENT_ERRORS,
        )
        self._sleep = sleep

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
    ) -> FetchResponse:
        """Fetch url, retrying transient failures before giving up."""
        return await with_retry(
            "upstream_fetch",
            self._attempt,
            url,
            method,
            headers,
            config=self.retry_config,
            sleep=self._sleep,
        )

    async def _attempt(
        self,
        url: str,
        method: str,
        headers: Optional[Mapping[str, str]],
    ) -> FetchResponse:
        metrics = get_metrics()
        started = time.monotonic()
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with self._get_session().request(
                method, url, headers=headers, timeout=timeout
            ) as response:
                if response.status >= 500:
                    metrics.upstream_requests.labels(status_class="5xx").inc()
                    raise UpstreamServerError(response.status, url)

                body = await self._read_body(response)
                elapsed = time.monotonic() - started
                metrics.upstream_requests.labels(
                    status_class=f"{response.status // 100}xx"
                ).inc()
                logger.debug(
                    "upstream_response",
                    url=url,
                    status=response.status,
                    elapsed_seconds=round(elapsed, 3),
                )
                return FetchResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers),
                    elapsed=elapsed,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError):
            metrics.upstream_requests.labels(status_class="error").inc()
            raise

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        if response.content_type == "application/json":
            try:
                return await response.json()
            except ValueError as e:
                raise MalformedUpstreamResponse(f"Invalid JSON from upstream: {e}") from e
        text = await response.text()
        return text or None
