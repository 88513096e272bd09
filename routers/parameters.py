# routers/parameters.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from auth_utils import get_current_user_id
from crud import parameters
from database import get_db
from errors import ValidationError
from models import DeviceParameters

router = APIRouter(prefix="/api", tags=["Parameters"])


# =========================
# Schemas
# =========================
class DeviceParametersOut(BaseModel):
    min_soil: int
    watering_time: int


class ParametersUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    device_id: str = Field(..., min_length=1, max_length=50)
    min_soil: int = Field(..., ge=0, le=100)
    watering_time: int = Field(..., ge=1)
    tipo_planta_id: Optional[int] = None


def to_user_parameters(r: DeviceParameters):
    return {
        "id": r.id,
        "user_id": r.user_id,
        "device_id": r.device_id,
        "min_soil": r.min_soil,
        "watering_time": r.watering_time,
        "tipo_planta_id": r.plant_profile_id,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }


# =========================================================
# DEVICE: current thresholds (no auth, never a "not found")
# =========================================================
@router.get("/parametros", response_model=DeviceParametersOut)
def get_device_parameters(
    device_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    device_id = (device_id or "").strip()
    if not device_id:
        raise ValidationError("device_id requerido")

    return parameters.get_for_device(db, device_id)


# =========================================================
# USER: save thresholds for one of their devices
# =========================================================
@router.put("/parametros")
def update_parameters(
    body: ParametersUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    parameters.upsert(
        db,
        user_id=user_id,
        device_id=body.device_id,
        min_soil=body.min_soil,
        watering_time=body.watering_time,
        plant_profile_id=body.tipo_planta_id,
    )
    return {"message": "Parámetros actualizados"}


@router.get("/user-parametros")
def get_user_parameters(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    row = parameters.get_for_user(db, user_id)
    return to_user_parameters(row) if row else None
