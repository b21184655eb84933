from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.zone import ZoneCheckRequest, ZoneCheckResponse, ZoneCreateRequest, ZoneOut
from app.services.zones import create_zone, find_zone_for_point, list_active_zones

router = APIRouter()


@router.post("", response_model=ZoneOut)
def zone_create(
    payload: ZoneCreateRequest,
    db: Session = Depends(get_db),
):
    try:
        return create_zone(
            db,
            payload.name.strip(),
            [v.model_dump() for v in payload.coordinates],
            is_active=payload.is_active,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[ZoneOut])
def zone_list(db: Session = Depends(get_db)):
    return list_active_zones(db)


@router.post("/check", response_model=ZoneCheckResponse)
def zone_check(
    payload: ZoneCheckRequest,
    db: Session = Depends(get_db),
):
    zone = find_zone_for_point(db, payload.lat, payload.lng)
    if zone is None:
        return {"serviceable": False}
    return {"serviceable": True, "zone_id": zone.id, "zone_name": zone.name}
