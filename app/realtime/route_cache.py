from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from app.core.realtime_config import (
    ROUTE_CACHE_PRECISION,
    ROUTE_CACHE_ROOT,
    ROUTE_CACHE_TTL_MS,
)
from app.realtime.fields import is_finite_number, is_valid_key, now_ms, put_number
from app.realtime.result import SyncResult
from app.realtime.store import RealtimeStore


@dataclass
class RouteCacheEntry:
    polyline: str
    cached_at: int
    expires_at: int
    distance: Optional[float] = None
    duration: Optional[float] = None

    def is_expired(self, now: Optional[int] = None) -> bool:
        return (now if now is not None else now_ms()) >= self.expires_at

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "RouteCacheEntry":
        return cls(
            polyline=raw.get("polyline") or "",
            cached_at=raw.get("cached_at") or 0,
            expires_at=raw.get("expires_at") or 0,
            distance=raw.get("distance"),
            duration=raw.get("duration"),
        )


def _key_part(value: float) -> str:
    scale = 10 ** ROUTE_CACHE_PRECISION
    # half-up, so 0.00005 and -0.00005 land on neighbouring buckets consistently
    rounded = math.floor(value * scale + 0.5) / scale
    text = str(int(rounded)) if rounded.is_integer() else repr(rounded)
    return text.replace(".", "_").replace("-", "m")


def route_cache_key(
    restaurant_lat: float,
    restaurant_lng: float,
    customer_lat: float,
    customer_lng: float,
) -> str:
    coords = (restaurant_lat, restaurant_lng, customer_lat, customer_lng)
    if not all(is_finite_number(c) for c in coords):
        raise ValueError("route cache key needs four finite coordinates")
    return "_".join(_key_part(float(c)) for c in coords)


async def upsert_route(
    store: Optional[RealtimeStore],
    key: str,
    polyline: str,
    distance: Optional[float] = None,
    duration: Optional[float] = None,
    now: Optional[int] = None,
) -> SyncResult:
    if not is_valid_key(key) or not polyline:
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    cached_at = now if now is not None else now_ms()
    payload: Dict[str, Any] = {
        "cached_at": cached_at,
        "expires_at": cached_at + ROUTE_CACHE_TTL_MS,
        "polyline": polyline,
    }
    put_number(payload, "distance", distance)
    put_number(payload, "duration", duration)

    await store.update(f"{ROUTE_CACHE_ROOT}/{key}", payload)
    logger.debug(f"Route cached | key={key}")
    return SyncResult.ok(payload)


async def get_cached_route(store: Optional[RealtimeStore], key: str) -> Optional[RouteCacheEntry]:
    """Entries are returned whether or not they are past `expires_at`."""
    if store is None or not is_valid_key(key):
        return None

    raw = await store.get(f"{ROUTE_CACHE_ROOT}/{key}")
    if not isinstance(raw, dict) or not raw.get("polyline"):
        return None
    return RouteCacheEntry.from_raw(raw)
