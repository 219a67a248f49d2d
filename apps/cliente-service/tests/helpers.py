"""Shared test doubles and a local upstream server."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List

from aiohttp import web
from aiohttp.test_utils import TestServer

from cliente_service.sources import LookupSource


class StubSource(LookupSource):
    """Source returning canned records or raising a canned error."""

    name = "stub"

    def __init__(self, records: List[Dict[str, Any]] = None, error: Exception = None):
        self.records = records or []
        self.error = error
        self.calls: List[str] = []

    async def fetch_sucursales(self, cliente_id: str) -> List[Dict[str, Any]]:
        self.calls.append(cliente_id)
        if self.error is not None:
            raise self.error
        return self.records


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@asynccontextmanager
async def upstream(handler, path="/clientes/app-search"):
    app = web.Application()
    app.router.add_get(path, handler)
    async with TestServer(app) as server:
        yield server


def counting(responses):
    """Handler answering with the given (status, body) pairs, repeating the last."""
    calls = []

    async def handler(request):
        calls.append(dict(request.query))
        status, body = responses[min(len(calls), len(responses)) - 1]
        return web.json_response(body, status=status)

    handler.calls = calls
    return handler


async def closed_port_url(path="/clientes/app-search"):
    """URL on a port that was just released, so connections are refused."""
    server = TestServer(web.Application())
    await server.start_server()
    url = str(server.make_url(path))
    await server.close()
    return url
