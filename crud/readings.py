from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from errors import StoreError
from models import SensorReading

logger = logging.getLogger("smart_plant.crud.readings")


def create(db: Session, obj_in: Dict[str, Any]) -> SensorReading:
    """Append one device sample. No range checks and no dedup."""
    db_obj = SensorReading(**obj_in)
    db.add(db_obj)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store reading for device=%s", obj_in.get("device_id"))
        raise StoreError("Error al guardar datos")
    db.refresh(db_obj)
    return db_obj


def list_for_device(db: Session, device_id: str, limit: int = 50) -> List[SensorReading]:
    try:
        return (
            db.query(SensorReading)
            .filter(SensorReading.device_id == device_id)
            .order_by(SensorReading.timestamp.desc(), SensorReading.id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Failed to list readings for device=%s", device_id)
        raise StoreError("Error al obtener lecturas")


def latest_for_device(db: Session, device_id: str) -> Optional[SensorReading]:
    rows = list_for_device(db, device_id, limit=1)
    return rows[0] if rows else None
