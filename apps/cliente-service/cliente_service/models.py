"""Data types for cliente lookups."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


# Record keys as served by the upstream app-search endpoint
ID = "id"
NOMBRE = "nombre"
LATITUD = "latitud"
LONGITUD = "longitud"
VENDEDOR_NOMBRE = "vendedorNombre"
VENDEDOR_TELEFONO = "vendedorTelefono"


@dataclass
class Vendedor:
    """Salesperson contact."""
    clave: str
    nombre: str
    telefono: str


@dataclass
class NormalizationPolicy:
    """How raw spreadsheet rows map onto sucursal records.

    Columns are tried in order and the first one present in the row wins.
    GPS strings are split on the first separator found, in the given order.
    """
    id_columns: Tuple[str, ...] = ("CLAVE", "#Cliente")
    name_columns: Tuple[str, ...] = ("RAZON", "Nombre del Cliente")
    gps_column: str = "GPS"
    vendedor_column: str = "VENDEDOR"
    gps_separators: Tuple[str, ...] = (",", "&")

    @classmethod
    def from_settings(cls, settings) -> "NormalizationPolicy":
        return cls(
            id_columns=_split_columns(settings.id_columns),
            name_columns=_split_columns(settings.name_columns),
            gps_separators=tuple(settings.gps_separators) or (",",),
        )

    def pick(self, row: Mapping[str, Any], columns: Tuple[str, ...]) -> Optional[str]:
        for column in columns:
            value = row.get(column)
            if value is not None and str(value).strip() != "":
                return str(value).strip()
        return None


@dataclass
class LookupResult:
    """Client-facing status and JSON payload."""
    status: int
    payload: Dict[str, Any] = field(default_factory=dict)


def _split_columns(raw: str) -> Tuple[str, ...]:
    return tuple(column.strip() for column in raw.split(",") if column.strip())
