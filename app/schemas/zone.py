from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ZoneVertex(BaseModel):
    latitude: float
    longitude: float


class ZoneCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    coordinates: List[ZoneVertex]
    is_active: bool = True


class ZoneOut(BaseModel):
    id: int
    name: str
    is_active: bool
    coordinates: List[dict]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ZoneCheckRequest(BaseModel):
    lat: float
    lng: float


class ZoneCheckResponse(BaseModel):
    serviceable: bool
    zone_id: Optional[int] = None
    zone_name: Optional[str] = None
