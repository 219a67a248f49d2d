"""Tests for configuration, source wiring and the metrics server."""

import pytest
from aiohttp.test_utils import TestClient, TestServer

from cliente_service.config import Settings
from cliente_service.main import ClienteService, build_source
from cliente_service.models import NormalizationPolicy
from cliente_service.observability.metrics import MetricsServer, get_metrics
from cliente_service.sources import CsvFileSource, SqlApiSource


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SQL_API_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.sql_api_url.startswith("http://localhost")
        assert settings.fetch_timeout_seconds == 20.0
        assert settings.fetch_retries == 3
        assert settings.fetch_initial_delay == 0.3

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SQL_API_URL", "https://sql.example.com/api")
        monkeypatch.setenv("LOOKUP_BACKEND", "csv")

        settings = Settings(_env_file=None)

        assert settings.sql_api_url == "https://sql.example.com/api"
        assert settings.lookup_backend == "csv"

    def test_normalization_policy_from_settings(self):
        settings = Settings(
            id_columns="CLAVE, #Cliente ,",
            name_columns="RAZON",
            gps_separators="&",
            _env_file=None,
        )

        policy = NormalizationPolicy.from_settings(settings)

        assert policy.id_columns == ("CLAVE", "#Cliente")
        assert policy.name_columns == ("RAZON",)
        assert policy.gps_separators == ("&",)


class TestBuildSource:

    def test_sql_api(self, settings):
        source = build_source(settings)

        assert isinstance(source, SqlApiSource)
        assert source.base_url == "http://upstream.test/api"
        assert source.fetcher.timeout == 20.0
        assert source.fetcher.retry_config.retries == 3

    def test_csv_with_vendedores(self, tmp_path):
        vendedores = tmp_path / "vendedores.csv"
        vendedores.write_text("CLAVE,NOMBRE,TELEFONO\nV01,Juan,33\n", encoding="utf-8")
        settings = Settings(
            lookup_backend="csv",
            clientes_csv_path=str(tmp_path / "clientes.csv"),
            vendedores_csv_path=str(vendedores),
            _env_file=None,
        )

        source = build_source(settings)

        assert isinstance(source, CsvFileSource)
        assert source.vendedores.loaded
        assert len(source.vendedores) == 1

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_source(Settings(lookup_backend="excel", _env_file=None))


class TestClienteService:

    def test_builds_app_for_configured_backend(self, settings):
        service = ClienteService(settings)

        assert isinstance(service.source, SqlApiSource)
        assert service.running is False
        assert service.metrics_server.port == settings.metrics_port


class TestMetricsServer:

    @pytest.mark.asyncio
    async def test_metrics_and_health(self):
        server = MetricsServer()
        get_metrics().cliente_lookups.labels(backend="stub", outcome="found").inc()

        async with TestClient(TestServer(server.app)) as client:
            metrics = await client.get("/metrics")
            text = await metrics.text()
            healthy = await client.get("/health")

            server.set_healthy(False)
            unhealthy = await client.get("/health")

        assert metrics.status == 200
        assert "cliente_lookups_total" in text
        assert healthy.status == 200
        assert unhealthy.status == 503
