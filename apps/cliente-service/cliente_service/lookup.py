"""Shape source records into the client-facing lookup result."""

from typing import Any, Dict, List, Mapping, Sequence

from .gps import has_valid_gps
from .models import ID, NOMBRE, VENDEDOR_NOMBRE, VENDEDOR_TELEFONO, LookupResult

NOT_FOUND_MESSAGE = "Cliente no encontrado"


def _summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        ID: record.get(ID),
        NOMBRE: record.get(NOMBRE),
        VENDEDOR_NOMBRE: record.get(VENDEDOR_NOMBRE),
        VENDEDOR_TELEFONO: record.get(VENDEDOR_TELEFONO),
    }


def resolve_cliente(records: Sequence[Mapping[str, Any]]) -> LookupResult:
    """Pick the response for the sucursales of one cliente.

    - no records: 404
    - no record with usable GPS: 200 summary flagged sinGPS
    - one record with usable GPS: 200 with that record as-is
    - several: 200 summary flagged multipleSucursales, in upstream order
    """
    if not records:
        return LookupResult(404, {"message": NOT_FOUND_MESSAGE})

    located: List[Mapping[str, Any]] = [r for r in records if has_valid_gps(r)]

    if not located:
        payload = _summary(records[0])
        payload["sinGPS"] = True
        return LookupResult(200, payload)

    if len(located) == 1:
        return LookupResult(200, dict(located[0]))

    payload = _summary(located[0])
    payload["multipleSucursales"] = True
    payload["sucursales"] = [dict(r) for r in located]
    return LookupResult(200, payload)
