from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from app.models.zone import Zone
from app.realtime.geo import point_in_polygon


def create_zone(db: Session, name: str, coordinates: List[dict], is_active: bool = True) -> Zone:
    if not name:
        raise ValueError("Zone name required")
    if not coordinates or len(coordinates) < 3:
        raise ValueError("Zone needs at least 3 coordinates")

    zone = Zone(name=name, coordinates=coordinates, is_active=is_active)
    db.add(zone)
    db.commit()
    db.refresh(zone)
    logger.info(f"Zone created | id={zone.id} name={zone.name} vertices={len(coordinates)}")
    return zone


def list_active_zones(db: Session) -> List[Zone]:
    return (
        db.query(Zone)
        .filter(Zone.is_active.is_(True))
        .order_by(Zone.id.asc())
        .all()
    )


def find_zone_for_point(db: Session, lat: float, lng: float) -> Optional[Zone]:
    for zone in list_active_zones(db):
        if not zone.coordinates or len(zone.coordinates) < 3:
            logger.debug(f"Skipping zone {zone.id}: invalid coordinates")
            continue
        if point_in_polygon(lat, lng, zone.coordinates):
            return zone
    return None
