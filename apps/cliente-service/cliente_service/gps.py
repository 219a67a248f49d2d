"""GPS string parsing and coordinate validation."""

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from .models import LATITUD, LONGITUD


def parse_gps(
    raw: Optional[str],
    separators: Sequence[str] = (",", "&"),
) -> Tuple[Optional[float], Optional[float]]:
    """Parse a raw "lat,lon" (or "lat&lon") string.

    Returns (None, None) when the string is empty or not a coordinate pair.
    """
    if not raw:
        return None, None

    cleaned = raw.replace('"', "").strip()
    for separator in separators:
        if separator in cleaned:
            parts = cleaned.split(separator)
            break
    else:
        return None, None

    if len(parts) != 2:
        return None, None

    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError:
        return None, None


def _coordinate(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def has_valid_gps(record: Mapping[str, Any]) -> bool:
    """True when both coordinates are present, finite and nonzero."""
    lat = _coordinate(record.get(LATITUD))
    lon = _coordinate(record.get(LONGITUD))
    return lat is not None and lon is not None and lat != 0 and lon != 0
