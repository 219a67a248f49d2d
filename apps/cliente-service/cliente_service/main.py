"""Cliente Service main entry point with observability."""

import asyncio
import signal

from aiohttp import web

from .config import Settings, get_settings
from .handler import create_app
from .models import NormalizationPolicy
from .observability import init_tracing, init_metrics, MetricsServer, configure_logging
from .resilience import ResilientFetcher
from .sources import CsvFileSource, LookupSource, SqlApiSource
from .vendedores import VendedorDirectory


def build_source(settings: Settings) -> LookupSource:
    """Construct the lookup source selected by LOOKUP_BACKEND."""
    if settings.lookup_backend == "sql_api":
        fetcher = ResilientFetcher(
            timeout=settings.fetch_timeout_seconds,
            retries=settings.fetch_retries,
            initial_delay=settings.fetch_initial_delay,
        )
        return SqlApiSource(settings.sql_api_url, fetcher)

    if settings.lookup_backend == "csv":
        vendedores = None
        if settings.vendedores_csv_path:
            vendedores = VendedorDirectory(
                settings.vendedores_csv_path,
                reload_after=settings.vendedores_reload_seconds,
            )
            vendedores.load()
        return CsvFileSource(
            settings.clientes_csv_path,
            policy=NormalizationPolicy.from_settings(settings),
            vendedores=vendedores,
        )

    raise ValueError(f"Unknown lookup backend: {settings.lookup_backend}")


class ClienteService:
    """Main cliente service application with observability."""

    def __init__(self, settings: Settings = None):
        self.settings = settings or get_settings()
        self.running = False

        # Observability
        self.logger = configure_logging("cliente-service", self.settings.log_level)
        init_tracing(
            "cliente-service",
            otlp_endpoint=self.settings.otel_exporter_otlp_endpoint,
            environment=self.settings.environment,
            enabled=self.settings.tracing_enabled,
        )
        init_metrics()

        # Lookup
        self.source = build_source(self.settings)
        self.app = create_app(self.settings, self.source)
        self._runner = None

        # Metrics server
        self.metrics_server = MetricsServer(
            host=self.settings.host, port=self.settings.metrics_port
        )

    async def start(self):
        self.logger.info("starting_cliente_service", backend=self.source.name)

        await self.metrics_server.start()
        self.logger.info("metrics_server_started", port=self.settings.metrics_port)

        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.settings.host, self.settings.port)
        await site.start()

        self.logger.info(
            "cliente_service_started",
            host=self.settings.host,
            port=self.settings.port,
        )
        self.running = True
        self.metrics_server.set_healthy(True)

    async def stop(self):
        self.logger.info("stopping_cliente_service")
        self.running = False
        self.metrics_server.set_healthy(False)
        if self._runner:
            # cleanup() runs the app's on_cleanup hooks, closing the source
            await self._runner.cleanup()
            self._runner = None
        await self.metrics_server.stop()
        self.logger.info("cliente_service_stopped")


async def main():
    service = ClienteService()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda: asyncio.create_task(service.stop()))

    await service.start()

    while service.running:
        await asyncio.sleep(1)


if __name__ == "__main__":
    asyncio.run(main())
