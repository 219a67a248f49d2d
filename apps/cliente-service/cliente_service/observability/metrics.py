"""Prometheus Metrics for Cliente Service."""

from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest
from aiohttp import web

# Global registry
REGISTRY = CollectorRegistry()

# Lookup metrics
cliente_lookups = Counter(
    "cliente_lookups_total",
    "Total cliente lookups by outcome",
    ["backend", "outcome"],
    registry=REGISTRY,
)

lookup_duration = Histogram(
    "cliente_lookup_duration_seconds",
    "Cliente lookup duration",
    ["backend"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

# Resilience metrics
upstream_requests = Counter(
    "cliente_upstream_requests_total",
    "Upstream HTTP attempts by status class",
    ["status_class"],
    registry=REGISTRY,
)

retry_attempts = Counter(
    "cliente_retry_attempts_total",
    "Retry attempts",
    ["operation", "outcome"],
    registry=REGISTRY,
)


class ClienteMetrics:
    """Metrics accessor class."""

    cliente_lookups = cliente_lookups
    lookup_duration = lookup_duration
    upstream_requests = upstream_requests
    retry_attempts = retry_attempts


_metrics = ClienteMetrics()


def init_metrics() -> ClienteMetrics:
    """Initialize metrics."""
    return _metrics


def get_metrics() -> ClienteMetrics:
    """Get metrics instance."""
    return _metrics


class MetricsServer:
    """HTTP server for metrics and health endpoints."""

    def __init__(self, host: str = "0.0.0.0", port: int = 9102):
        self.host = host
        self.port = port
        self.app = web.Application()
        self.app.router.add_get("/metrics", self.metrics_handler)
        self.app.router.add_get("/health", self.health_handler)
        self._healthy = True
        self._runner = None

    async def metrics_handler(self, request: web.Request) -> web.Response:
        return web.Response(
            body=generate_latest(REGISTRY),
            content_type="text/plain",
        )

    async def health_handler(self, request: web.Request) -> web.Response:
        if self._healthy:
            return web.json_response({"status": "healthy"})
        return web.json_response({"status": "unhealthy"}, status=503)

    def set_healthy(self, healthy: bool) -> None:
        self._healthy = healthy

    async def start(self) -> None:
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
