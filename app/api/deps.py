from fastapi import HTTPException

from app.realtime.result import SyncResult, SyncStatus


def to_sync_response(result: SyncResult, missing: str = "id") -> dict:
    if result.status is SyncStatus.invalid_input:
        raise HTTPException(status_code=400, detail=f"valid {missing} required")

    # store not configured: report it, never fail the caller's flow
    if not result:
        return {"ok": False, "reason": result.status.value}

    return {"ok": True, "record": result.value}
