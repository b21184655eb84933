from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


# ---------- PRESENCE ----------

class PresenceHeartbeatRequest(BaseModel):
    partner_id: str
    online: bool = True
    lat: Optional[float] = None
    lng: Optional[float] = None


class PresenceOut(BaseModel):
    partner_id: str
    status: str
    last_updated: int
    lat: Optional[float] = None
    lng: Optional[float] = None


# ---------- DISPATCH ----------

class NearestRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    max_age_ms: Optional[int] = Field(default=None, ge=0)


class NearestPartnerOut(BaseModel):
    partner_id: str
    distance_km: float
    lat: float
    lng: float


class NearestResponse(BaseModel):
    candidate: Optional[NearestPartnerOut] = None


# ---------- ACTIVE ORDERS ----------

class AssignmentSyncRequest(BaseModel):
    partner_id: Optional[str] = None
    polyline: Optional[str] = None
    restaurant_lat: Optional[float] = None
    restaurant_lng: Optional[float] = None
    customer_lat: Optional[float] = None
    customer_lng: Optional[float] = None
    distance: Optional[float] = None
    duration: Optional[float] = None


class LiveLocationSyncRequest(BaseModel):
    partner_id: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    status: str = "on_the_way"


class SyncResponse(BaseModel):
    ok: bool
    reason: Optional[str] = None
    record: Optional[Dict[str, Any]] = None


# ---------- ROUTE CACHE ----------

class RouteCacheOut(BaseModel):
    key: str
    polyline: str
    cached_at: int
    expires_at: int
    expired: bool
    distance: Optional[float] = None
    duration: Optional[float] = None


# ---------- USERS ----------

class UserLocationRequest(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None
    area: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    formatted_address: Optional[str] = None
    accuracy: Optional[float] = None
    last_updated: Optional[int] = None
