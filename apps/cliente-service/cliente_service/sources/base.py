"""Lookup source interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class LookupSource(ABC):
    """Produces the sucursal records of a cliente."""

    name: str = "unknown"

    @abstractmethod
    async def fetch_sucursales(self, cliente_id: str) -> List[Dict[str, Any]]:
        """Return the records for cliente_id, or an empty list if unknown."""

    async def close(self) -> None:
        """Release resources held by the source."""
