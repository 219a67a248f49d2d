"""Lookup in a single spreadsheet-derived CSV file."""

import asyncio
import csv
from typing import Any, Dict, List, Mapping, Optional

import structlog

from ..errors import LookupSourceError
from ..gps import parse_gps
from ..models import (
    ID,
    LATITUD,
    LONGITUD,
    NOMBRE,
    VENDEDOR_NOMBRE,
    VENDEDOR_TELEFONO,
    NormalizationPolicy,
)
from ..vendedores import VendedorDirectory
from .base import LookupSource

logger = structlog.get_logger()


class CsvFileSource(LookupSource):
    """Streams the CSV and stops at the first row matching the id."""

    name = "csv"

    def __init__(
        self,
        path: str,
        policy: Optional[NormalizationPolicy] = None,
        vendedores: Optional[VendedorDirectory] = None,
    ):
        self.path = path
        self.policy = policy or NormalizationPolicy()
        self.vendedores = vendedores

    async def fetch_sucursales(self, cliente_id: str) -> List[Dict[str, Any]]:
        record = await asyncio.to_thread(self._lookup, cliente_id)
        if record is None:
            logger.info("cliente_not_in_csv", cliente_id=cliente_id, path=self.path)
            return []
        return [record]

    def _lookup(self, cliente_id: str) -> Optional[Dict[str, Any]]:
        row = self._find_row(cliente_id)
        if row is None:
            return None
        return self._to_record(row)

    def _find_row(self, cliente_id: str) -> Optional[Mapping[str, str]]:
        try:
            with open(self.path, newline="", encoding="utf-8-sig") as f:
                for row in csv.DictReader(f):
                    if self.policy.pick(row, self.policy.id_columns) == cliente_id:
                        return row
        except OSError as e:
            raise LookupSourceError(
                f"Cannot read clientes file {self.path}: {e}", "CSV_UNAVAILABLE"
            ) from e
        return None

    def _to_record(self, row: Mapping[str, str]) -> Dict[str, Any]:
        latitud, longitud = parse_gps(
            row.get(self.policy.gps_column), self.policy.gps_separators
        )
        record = {
            ID: self.policy.pick(row, self.policy.id_columns),
            NOMBRE: self.policy.pick(row, self.policy.name_columns),
            LATITUD: latitud,
            LONGITUD: longitud,
            VENDEDOR_NOMBRE: None,
            VENDEDOR_TELEFONO: None,
        }

        if self.vendedores is not None:
            self.vendedores.refresh_if_stale()
            vendedor = self.vendedores.get(row.get(self.policy.vendedor_column))
            if vendedor is not None:
                record[VENDEDOR_NOMBRE] = vendedor.nombre
                record[VENDEDOR_TELEFONO] = vendedor.telefono

        return record
