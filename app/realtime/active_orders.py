from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger

from app.core.realtime_config import ACTIVE_ORDERS_ROOT
from app.realtime.fields import is_finite_number, is_valid_key, now_ms, put_number, put_text
from app.realtime.result import SyncResult
from app.realtime.route_cache import route_cache_key, upsert_route
from app.realtime.store import RealtimeStore

ASSIGNED = "assigned"
ON_THE_WAY = "on_the_way"


def _order_path(order_id: str) -> str:
    return f"{ACTIVE_ORDERS_ROOT}/{order_id}"


async def _base_payload(store: RealtimeStore, order_id: str, status: str) -> Dict[str, Any]:
    existing = await store.get(_order_path(order_id))
    existing = existing if isinstance(existing, dict) else {}
    now = now_ms()
    return {
        "status": status,
        "created_at": existing.get("created_at") or now,
        "last_updated": now,
    }


async def sync_assignment(
    store: Optional[RealtimeStore],
    order_id: str,
    *,
    partner_id: Optional[str] = None,
    polyline: Optional[str] = None,
    restaurant_lat: Optional[float] = None,
    restaurant_lng: Optional[float] = None,
    customer_lat: Optional[float] = None,
    customer_lng: Optional[float] = None,
    distance: Optional[float] = None,
    duration: Optional[float] = None,
) -> SyncResult:
    """
    Merge the assignment snapshot of one order into `active_orders/{order_id}`.

    Only fields that are present and well typed are written, so a later call
    carrying just a polyline keeps the partner set by an earlier call.
    `created_at` is taken from the stored record when there is one.

    When the polyline and all four coordinates are known the route is also
    written to the route cache.
    """
    if not is_valid_key(order_id):
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    payload = await _base_payload(store, order_id, ASSIGNED)
    put_text(payload, "boy_id", partner_id)
    put_text(payload, "polyline", polyline)
    put_number(payload, "restaurant_lat", restaurant_lat)
    put_number(payload, "restaurant_lng", restaurant_lng)
    put_number(payload, "customer_lat", customer_lat)
    put_number(payload, "customer_lng", customer_lng)
    put_number(payload, "distance", distance)
    put_number(payload, "duration", duration)

    await store.update(_order_path(order_id), payload)
    logger.info(f"Active order assignment synced | order={order_id} fields={sorted(payload)}")

    coords = (restaurant_lat, restaurant_lng, customer_lat, customer_lng)
    if polyline and isinstance(polyline, str) and all(is_finite_number(c) for c in coords):
        await upsert_route(
            store,
            route_cache_key(*coords),
            polyline,
            distance=distance,
            duration=duration,
            now=payload["last_updated"],
        )

    return SyncResult.ok(payload)


async def sync_live_location(
    store: Optional[RealtimeStore],
    order_id: str,
    *,
    partner_id: Optional[str] = None,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    status: str = ON_THE_WAY,
) -> SyncResult:
    if not is_valid_key(order_id) or not isinstance(status, str) or not status:
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    payload = await _base_payload(store, order_id, status)
    put_text(payload, "boy_id", partner_id)
    put_number(payload, "boy_lat", lat)
    put_number(payload, "boy_lng", lng)

    await store.update(_order_path(order_id), payload)
    logger.debug(f"Active order location synced | order={order_id} status={payload['status']}")
    return SyncResult.ok(payload)


async def remove_active_order(store: Optional[RealtimeStore], order_id: str) -> SyncResult:
    if not is_valid_key(order_id):
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    await store.remove(_order_path(order_id))
    logger.info(f"Active order removed | order={order_id}")
    return SyncResult.ok()


async def get_active_order(store: Optional[RealtimeStore], order_id: str) -> Optional[Dict[str, Any]]:
    if store is None or not is_valid_key(order_id):
        return None
    raw = await store.get(_order_path(order_id))
    return raw if isinstance(raw, dict) else None
