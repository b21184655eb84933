from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends
from loguru import logger

from app.core.realtime_config import PRESENCE_MAX_AGE_MS
from app.realtime.active_orders import sync_assignment
from app.realtime.context import get_realtime_store
from app.realtime.matcher import find_nearest_partner
from app.realtime.store import RealtimeStore
from app.schemas.realtime import NearestRequest, NearestResponse

router = APIRouter()


def _max_age(payload: NearestRequest) -> int:
    return payload.max_age_ms if payload.max_age_ms is not None else PRESENCE_MAX_AGE_MS


@router.post("/nearest", response_model=NearestResponse)
async def dispatch_nearest(
    payload: NearestRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    nearest = await find_nearest_partner(store, payload.lat, payload.lng, _max_age(payload))
    return {"candidate": asdict(nearest) if nearest else None}


@router.post("/{order_id}/assign-nearest")
async def dispatch_assign_nearest(
    order_id: str,
    payload: NearestRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    nearest = await find_nearest_partner(store, payload.lat, payload.lng, _max_age(payload))
    if nearest is None:
        # manual assignment is decided by the caller
        return {"assigned": False, "fallback": "manual", "candidate": None}

    result = await sync_assignment(
        store,
        order_id,
        partner_id=nearest.partner_id,
        restaurant_lat=payload.lat,
        restaurant_lng=payload.lng,
    )
    if not result:
        logger.warning(f"Assignment sync skipped | order={order_id} reason={result.status.value}")

    return {
        "assigned": bool(result),
        "fallback": None if result else "manual",
        "candidate": asdict(nearest),
    }
