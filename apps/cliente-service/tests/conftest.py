"""Pytest fixtures for Cliente Service tests."""

import pytest

from cliente_service.config import Settings

from helpers import SleepRecorder


@pytest.fixture
def settings():
    return Settings(
        sql_api_url="http://upstream.test/api",
        cors_allow_origin="*",
        cache_control="public, s-maxage=60, stale-while-revalidate=300",
        _env_file=None,
    )


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def sucursal_centro():
    return {
        "id": "6062",
        "nombre": "ABARROTES LA ESPERANZA",
        "latitud": 20.6597,
        "longitud": -103.3496,
        "vendedorNombre": "Juan Pérez",
        "vendedorTelefono": "3312345678",
        "sucursal": "Centro",
    }


@pytest.fixture
def sucursal_norte():
    return {
        "id": "6062",
        "nombre": "ABARROTES LA ESPERANZA",
        "latitud": 20.7211,
        "longitud": -103.3920,
        "vendedorNombre": "Juan Pérez",
        "vendedorTelefono": "3312345678",
        "sucursal": "Norte",
    }


@pytest.fixture
def sucursal_sin_gps():
    return {
        "id": "6062",
        "nombre": "ABARROTES LA ESPERANZA",
        "latitud": 0,
        "longitud": 0,
        "vendedorNombre": "Juan Pérez",
        "vendedorTelefono": "3312345678",
    }
