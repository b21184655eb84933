from typing import List, Optional

from fastapi import APIRouter, Depends
from loguru import logger

from app.api.deps import to_sync_response
from app.realtime.context import get_realtime_store
from app.realtime.presence import get_all_presence, set_presence
from app.realtime.store import RealtimeStore
from app.schemas.realtime import PresenceHeartbeatRequest, PresenceOut, SyncResponse

router = APIRouter()


# ------------------------------------------------------------------
# HEARTBEAT
# ------------------------------------------------------------------

@router.post("/heartbeat", response_model=SyncResponse)
async def presence_heartbeat(
    payload: PresenceHeartbeatRequest,
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    result = await set_presence(
        store,
        payload.partner_id.strip(),
        online=payload.online,
        lat=payload.lat,
        lng=payload.lng,
    )
    return to_sync_response(result, missing="partner_id")


# ------------------------------------------------------------------
# LIST
# ------------------------------------------------------------------

@router.get("", response_model=List[PresenceOut])
async def presence_list(
    store: Optional[RealtimeStore] = Depends(get_realtime_store),
):
    records = await get_all_presence(store)
    logger.debug(f"Presence list | count={len(records)}")
    return [
        PresenceOut(
            partner_id=pid,
            status=rec.status,
            last_updated=rec.last_updated,
            lat=rec.lat if rec.is_locatable else None,
            lng=rec.lng if rec.is_locatable else None,
        )
        for pid, rec in records.items()
    ]
