# routers/sensors.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from auth_utils import get_current_user_id
from config import Settings, get_settings
from crud import readings
from database import get_db
from models import SensorReading

router = APIRouter(prefix="/api", tags=["Sensors"])


# ----------------------------
# ✅ Pydantic Schemas
# ----------------------------
class SensorReadingIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    device_id: str = Field(..., min_length=1, max_length=50)
    timestamp: datetime
    soil_percent: float
    temperature_c: float
    humidity_percent: float
    pump_on: bool


def _num(v) -> Optional[float]:
    return float(v) if v is not None else None


def to_reading_row(r: SensorReading):
    return {
        "id": r.id,
        "device_id": r.device_id,
        "timestamp": r.timestamp.isoformat() if r.timestamp else None,
        "soil_percent": _num(r.soil_percent),
        "temperature_c": _num(r.temperature_c),
        "humidity_percent": _num(r.humidity_percent),
        "pump_on": bool(r.pump_on),
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }


def _device_or_default(device_id: Optional[str], settings: Settings) -> str:
    device_id = (device_id or "").strip()
    return device_id or settings.default_device_id


# ----------------------------
# ✅ ROUTES
# ----------------------------

@router.post("/sensores")
def receive_reading(body: SensorReadingIn, db: Session = Depends(get_db)):
    """Device push. No auth: boards only know their own device_id."""
    readings.create(db, body.model_dump())
    return {"message": "Datos recibidos correctamente"}


@router.get("/lecturas")
def list_readings(
    device_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=1000),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    rows = readings.list_for_device(db, _device_or_default(device_id, settings), limit)
    return [to_reading_row(r) for r in rows]


@router.get("/lectura-actual")
def current_reading(
    device_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    user_id: int = Depends(get_current_user_id),
):
    row = readings.latest_for_device(db, _device_or_default(device_id, settings))
    return to_reading_row(row) if row else None
