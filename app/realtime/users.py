from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger

from app.core.realtime_config import USERS_ROOT
from app.realtime.fields import is_finite_number, is_valid_key, now_ms, put_number, put_text
from app.realtime.result import SyncResult
from app.realtime.store import RealtimeStore


async def sync_user_location(
    store: Optional[RealtimeStore],
    user_id: str,
    *,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    address: Optional[str] = None,
    area: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    formatted_address: Optional[str] = None,
    accuracy: Optional[float] = None,
    last_updated: Optional[int] = None,
) -> SyncResult:
    if not is_valid_key(user_id):
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    payload: Dict[str, Any] = {
        "last_updated": last_updated if is_finite_number(last_updated) else now_ms(),
    }
    put_number(payload, "lat", lat)
    put_number(payload, "lng", lng)
    put_text(payload, "address", address)
    put_text(payload, "area", area)
    put_text(payload, "city", city)
    put_text(payload, "state", state)
    put_text(payload, "formatted_address", formatted_address)
    put_number(payload, "accuracy", accuracy)

    await store.update(f"{USERS_ROOT}/{user_id}", payload)
    logger.debug(f"User location synced | user={user_id}")
    return SyncResult.ok(payload)
