"""HTTP handler for cliente lookups."""

import time

import structlog
from aiohttp import web

from .config import Settings
from .errors import LookupSourceError, is_connection_refused
from .lookup import resolve_cliente
from .observability.metrics import get_metrics
from .observability.tracing import get_tracer
from .sources import LookupSource

logger = structlog.get_logger()

CLIENTE_ROUTE = "/api/cliente"

MISSING_ID_MESSAGE = 'El parámetro "id" del cliente es requerido.'
BUSY_MESSAGE = "El servidor está ocupado (servidor ocupado), intenta de nuevo en unos momentos."
INTERNAL_ERROR_MESSAGE = "Error interno del servidor."

SETTINGS_KEY = web.AppKey("settings", Settings)
SOURCE_KEY = web.AppKey("source", LookupSource)


def _outcome_label(status: int, payload: dict) -> str:
    if status == 404:
        return "not_found"
    if payload.get("sinGPS"):
        return "sin_gps"
    if payload.get("multipleSucursales"):
        return "multiple"
    return "found"


@web.middleware
async def cors_middleware(request: web.Request, handler):
    settings = request.app[SETTINGS_KEY]
    try:
        response = await handler(request)
    except web.HTTPException as e:
        _add_cors_headers(e, settings)
        raise
    _add_cors_headers(response, settings)
    return response


def _add_cors_headers(response: web.StreamResponse, settings: Settings) -> None:
    response.headers["Access-Control-Allow-Origin"] = settings.cors_allow_origin
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"


async def handle_preflight(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def handle_cliente(request: web.Request) -> web.Response:
    """GET /api/cliente?id=<id>"""
    settings = request.app[SETTINGS_KEY]
    source = request.app[SOURCE_KEY]
    metrics = get_metrics()

    cliente_id = (request.query.get("id") or "").strip()
    if not cliente_id:
        metrics.cliente_lookups.labels(backend=source.name, outcome="bad_request").inc()
        return web.json_response({"message": MISSING_ID_MESSAGE}, status=400)

    started = time.monotonic()
    with get_tracer().start_as_current_span("cliente_lookup") as span:
        span.set_attribute("cliente.id", cliente_id)
        span.set_attribute("cliente.backend", source.name)
        try:
            records = await source.fetch_sucursales(cliente_id)
            result = resolve_cliente(records)
        except Exception as e:
            span.record_exception(e)
            return _failure_response(source.name, cliente_id, e)
        finally:
            metrics.lookup_duration.labels(backend=source.name).observe(
                time.monotonic() - started
            )

    outcome = _outcome_label(result.status, result.payload)
    metrics.cliente_lookups.labels(backend=source.name, outcome=outcome).inc()
    logger.info(
        "cliente_lookup",
        cliente_id=cliente_id,
        outcome=outcome,
        status=result.status,
    )

    response = web.json_response(result.payload, status=result.status)
    if result.status == 200:
        response.headers["Cache-Control"] = settings.cache_control
    return response


def _failure_response(backend: str, cliente_id: str, error: Exception) -> web.Response:
    metrics = get_metrics()

    if is_connection_refused(error):
        metrics.cliente_lookups.labels(backend=backend, outcome="unavailable").inc()
        logger.error(
            "cliente_lookup_unavailable",
            cliente_id=cliente_id,
            error=repr(error),
        )
        return web.json_response({"message": BUSY_MESSAGE}, status=503)

    metrics.cliente_lookups.labels(backend=backend, outcome="error").inc()
    logger.error(
        "cliente_lookup_failed",
        cliente_id=cliente_id,
        error=repr(error),
        code=error.code if isinstance(error, LookupSourceError) else None,
        exc_info=not isinstance(error, LookupSourceError),
    )
    return web.json_response({"message": INTERNAL_ERROR_MESSAGE}, status=500)


async def handle_health(request: web.Request) -> web.Response:
    return web.json_response({"status": "healthy"})


async def _close_source(app: web.Application) -> None:
    await app[SOURCE_KEY].close()


def create_app(settings: Settings, source: LookupSource) -> web.Application:
    """Build the web application around an already constructed source."""
    app = web.Application(middlewares=[cors_middleware])
    app[SETTINGS_KEY] = settings
    app[SOURCE_KEY] = source
    app.router.add_get(CLIENTE_ROUTE, handle_cliente)
    app.router.add_route("OPTIONS", CLIENTE_ROUTE, handle_preflight)
    app.router.add_get("/health", handle_health)
    app.on_cleanup.append(_close_source)
    return app
