from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from loguru import logger

from app.core.realtime_config import PRESENCE_ROOT
from app.realtime.fields import is_finite_number, is_valid_key, now_ms
from app.realtime.result import SyncResult
from app.realtime.store import RealtimeStore

ONLINE = "online"
OFFLINE = "offline"


@dataclass
class PresenceRecord:
    status: str
    last_updated: int = 0
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def is_online(self) -> bool:
        return self.status == ONLINE

    @property
    def is_locatable(self) -> bool:
        return is_finite_number(self.lat) and is_finite_number(self.lng)

    @classmethod
    def from_raw(cls, raw: Any) -> "PresenceRecord":
        raw = raw if isinstance(raw, dict) else {}
        last_updated = raw.get("last_updated")
        return cls(
            status=str(raw.get("status") or OFFLINE),
            last_updated=last_updated if is_finite_number(last_updated) else 0,
            lat=raw.get("lat"),
            lng=raw.get("lng"),
        )


async def set_presence(
    store: Optional[RealtimeStore],
    partner_id: str,
    online: bool,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
) -> SyncResult:
    if not is_valid_key(partner_id):
        return SyncResult.invalid_input()
    if store is None:
        return SyncResult.unavailable()

    payload: Dict[str, Any] = {
        "status": ONLINE if online else OFFLINE,
        "last_updated": now_ms(),
    }

    # coordinates travel as a pair; a heartbeat without them keeps the old ones
    if is_finite_number(lat) and is_finite_number(lng):
        payload["lat"] = lat
        payload["lng"] = lng

    await store.update(f"{PRESENCE_ROOT}/{partner_id}", payload)
    logger.debug(f"Presence synced | partner={partner_id} status={payload['status']}")
    return SyncResult.ok(payload)


async def get_all_presence(store: Optional[RealtimeStore]) -> Dict[str, PresenceRecord]:
    if store is None:
        return {}

    raw = await store.get(PRESENCE_ROOT)
    if not isinstance(raw, dict):
        return {}

    return {str(pid): PresenceRecord.from_raw(rec) for pid, rec in raw.items()}
