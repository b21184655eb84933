from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import to_sync_response
from app.realtime.context import get_realtime_store
from app.realtime.store import RealtimeStore
from app.realtime.users import sync_user_location
from app.schemas.realtime import SyncResponse, UserLocationRequest

router = APIRouter()


@router.put("/{user_id}/location", response_model=SyncResponse)
async def user_location(
    user_id: str,
    payload: UserLocationRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    result = await sync_user_location(store, user_id, **payload.model_dump())
    return to_sync_response(result, missing="user_id")
