"""Lookup through the SQL-backed HTTP API."""

from typing import Any, Dict, List
from urllib.parse import urlencode

from ..errors import MalformedUpstreamResponse, UpstreamClientError
from ..resilience import ResilientFetcher
from .base import LookupSource


class SqlApiSource(LookupSource):
    """Queries <base_url>/clientes/app-search?id=<id>."""

    name = "sql_api"

    def __init__(self, base_url: str, fetcher: ResilientFetcher):
        self.base_url = base_url.rstrip("/")
        self.fetcher = fetcher

    def search_url(self, cliente_id: str) -> str:
        return f"{self.base_url}/clientes/app-search?{urlencode({'id': cliente_id})}"

    async def fetch_sucursales(self, cliente_id: str) -> List[Dict[str, Any]]:
        url = self.search_url(cliente_id)
        response = await self.fetcher.fetch(url, headers={"Accept": "application/json"})

        if response.status >= 400:
            raise UpstreamClientError(response.status, url)

        if not isinstance(response.body, list):
            raise MalformedUpstreamResponse(
                f"Expected a JSON array from {url}, got {type(response.body).__name__}"
            )
        if not all(isinstance(item, dict) for item in response.body):
            raise MalformedUpstreamResponse(f"Expected JSON objects in array from {url}")

        return response.body

    async def close(self) -> None:
        await self.fetcher.close()
