from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SyncStatus(str, Enum):
    ok = "ok"
    unavailable = "unavailable"
    invalid_input = "invalid_input"


@dataclass(frozen=True)
class SyncResult:
    """
    Outcome of a realtime write.

    Expected conditions (store not configured, missing id) come back as a
    falsy result instead of raising, so callers can keep going:

        if not await set_presence(store, partner_id, online=True):
            ...

    Store I/O failures are not represented here; they propagate.
    """

    status: SyncStatus
    value: Any = None

    def __bool__(self) -> bool:
        return self.status is SyncStatus.ok

    @classmethod
    def ok(cls, value: Any = None) -> "SyncResult":
        return cls(SyncStatus.ok, value)

    @classmethod
    def unavailable(cls) -> "SyncResult":
        return cls(SyncStatus.unavailable)

    @classmethod
    def invalid_input(cls) -> "SyncResult":
        return cls(SyncStatus.invalid_input)
