from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from app.core.realtime_config import EARTH_RADIUS_KM
from app.realtime.fields import is_finite_number


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _vertex(v: Any) -> Optional[Tuple[float, float]]:
    if not isinstance(v, Mapping):
        return None
    lat = v.get("latitude", v.get("lat"))
    lng = v.get("longitude", v.get("lng"))
    if not is_finite_number(lat) or not is_finite_number(lng):
        return None
    return float(lat), float(lng)


def point_in_polygon(lat: float, lng: float, vertices: Sequence[Any]) -> bool:
    """
    Even-odd ray casting over an implicitly closed ring of
    {"latitude", "longitude"} (or {"lat", "lng"}) vertices.

    An edge touching a malformed vertex contributes no crossing.
    """
    if not vertices or len(vertices) < 3:
        return False

    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        vi = _vertex(vertices[i])
        vj = _vertex(vertices[j])
        j = i
        if vi is None or vj is None:
            continue

        xi, yi = vi
        xj, yj = vj
        if (yi > lng) != (yj > lng):
            threshold = (xj - xi) * (lng - yi) / (yj - yi) + xi
            if lat < threshold:
                inside = not inside

    return inside
