"""Salesperson directory loaded from a CSV export."""

import csv
import time
from typing import Callable, Dict, Optional

import structlog

from .errors import LookupSourceError
from .models import Vendedor

logger = structlog.get_logger()


class VendedorDirectory:
    """In-memory vendedor table with an explicit reload policy.

    Nothing is read until load() is called. When reload_after is set,
    refresh_if_stale() reloads the file once that many seconds have passed
    since the last successful load; a failed reload keeps the current table.
    """

    def __init__(
        self,
        path: str,
        reload_after: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.path = path
        self.reload_after = reload_after
        self._clock = clock
        self._vendedores: Dict[str, Vendedor] = {}
        self._loaded_at: Optional[float] = None

    @property
    def loaded(self) -> bool:
        return self._loaded_at is not None

    def __len__(self) -> int:
        return len(self._vendedores)

    def load(self) -> None:
        """Read the whole file and replace the table."""
        try:
            with open(self.path, newline="", encoding="utf-8-sig") as f:
                table = {}
                for row in csv.DictReader(f):
                    clave = (row.get("CLAVE") or "").strip()
                    if not clave:
                        continue
                    table[clave] = Vendedor(
                        clave=clave,
                        nombre=(row.get("NOMBRE") or "").strip(),
                        telefono=(row.get("TELEFONO") or "").strip(),
                    )
        except OSError as e:
            raise LookupSourceError(
                f"Cannot read vendedores file {self.path}: {e}", "VENDEDORES_UNAVAILABLE"
            ) from e

        self._vendedores = table
        self._loaded_at = self._clock()
        logger.info("vendedores_loaded", path=self.path, count=len(table))

    def is_stale(self) -> bool:
        if not self.loaded:
            return True
        if not self.reload_after:
            return False
        return self._clock() - self._loaded_at >= self.reload_after

    def refresh_if_stale(self) -> None:
        if not self.is_stale():
            return
        try:
            self.load()
        except LookupSourceError as e:
            if not self.loaded:
                raise
            logger.warning("vendedores_reload_failed", path=self.path, error=e.message)

    def get(self, clave: Optional[str]) -> Optional[Vendedor]:
        if not clave:
            return None
        return self._vendedores.get(clave.strip())
