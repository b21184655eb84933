from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.realtime.context import get_realtime_store
from app.realtime.route_cache import get_cached_route, route_cache_key
from app.realtime.store import RealtimeStore
from app.schemas.realtime import RouteCacheOut

router = APIRouter()


@router.get("", response_model=RouteCacheOut)
async def route_cache_lookup(
    restaurant_lat: float = Query(...),
    restaurant_lng: float = Query(...),
    customer_lat: float = Query(...),
    customer_lng: float = Query(...),
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    try:
        key = route_cache_key(restaurant_lat, restaurant_lng, customer_lat, customer_lng)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    entry = await get_cached_route(store, key)
    if entry is None:
        raise HTTPException(status_code=404, detail="Route not cached")

    return RouteCacheOut(
        key=key,
        polyline=entry.polyline,
        cached_at=entry.cached_at,
        expires_at=entry.expires_at,
        expired=entry.is_expired(),
        distance=entry.distance,
        duration=entry.duration,
    )
