from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from app.core.realtime_config import PRESENCE_MAX_AGE_MS
from app.realtime.fields import is_finite_number, now_ms
from app.realtime.geo import haversine_km
from app.realtime.presence import get_all_presence
from app.realtime.store import RealtimeStore


@dataclass
class NearestPartner:
    partner_id: str
    distance_km: float
    lat: float
    lng: float


async def find_nearest_partner(
    store: Optional[RealtimeStore],
    pickup_lat: float,
    pickup_lng: float,
    max_age_ms: int = PRESENCE_MAX_AGE_MS,
    now: Optional[int] = None,
) -> Optional[NearestPartner]:
    """
    Closest online partner with a fresh, located heartbeat, or None.

    Equidistant partners resolve to whichever the store yields first; callers
    must not rely on a particular winner.
    """
    if store is None:
        return None
    if not is_finite_number(pickup_lat) or not is_finite_number(pickup_lng):
        logger.warning(f"Nearest partner lookup skipped, bad pickup | lat={pickup_lat} lng={pickup_lng}")
        return None

    records = await get_all_presence(store)
    current = now if now is not None else now_ms()

    nearest: Optional[NearestPartner] = None
    for partner_id, rec in records.items():
        if not rec.is_online or not rec.is_locatable:
            continue
        if current - rec.last_updated > max_age_ms:
            continue

        distance = haversine_km(pickup_lat, pickup_lng, rec.lat, rec.lng)
        if nearest is None or distance < nearest.distance_km:
            nearest = NearestPartner(partner_id, distance, rec.lat, rec.lng)

    if nearest is None:
        logger.info(f"No eligible partner | pickup=({pickup_lat}, {pickup_lng}) scanned={len(records)}")
    else:
        logger.info(f"Nearest partner | partner={nearest.partner_id} distance_km={nearest.distance_km:.3f}")
    return nearest
