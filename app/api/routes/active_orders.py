from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import to_sync_response
from app.realtime.active_orders import (
    get_active_order,
    remove_active_order,
    sync_assignment,
    sync_live_location,
)
from app.realtime.context import get_realtime_store
from app.realtime.store import RealtimeStore
from app.schemas.realtime import AssignmentSyncRequest, LiveLocationSyncRequest, SyncResponse

router = APIRouter()


@router.put("/{order_id}/assignment", response_model=SyncResponse)
async def active_order_assignment(
    order_id: str,
    payload: AssignmentSyncRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    result = await sync_assignment(store, order_id, **payload.model_dump())
    return to_sync_response(result, missing="order_id")


@router.put("/{order_id}/location", response_model=SyncResponse)
async def active_order_location(
    order_id: str,
    payload: LiveLocationSyncRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    result = await sync_live_location(
        store,
        order_id,
        partner_id=payload.partner_id,
        lat=payload.lat,
        lng=payload.lng,
        status=payload.status,
    )
    return to_sync_response(result, missing="order_id and status")


@router.get("/{order_id}")
async def active_order_get(
    order_id: str,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    record = await get_active_order(store, order_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Active order not found")
    return record


@router.delete("/{order_id}", response_model=SyncResponse)
async def active_order_remove(
    order_id: str,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    result = await remove_active_order(store, order_id)
    return to_sync_response(result, missing="order_id")
