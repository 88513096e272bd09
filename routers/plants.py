# routers/plants.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth_utils import get_current_user_id
from crud import plants
from database import get_db
from models import PlantProfile

router = APIRouter(prefix="/api", tags=["Plants"])


def to_plant_row(p: PlantProfile):
    """Wire names match the web client's plant picker."""
    return {
        "id": p.id,
        "nombre": p.name,
        "min_soil": p.min_soil,
        "max_soil": p.max_soil,
        "min_humidity": p.min_humidity,
        "max_humidity": p.max_humidity,
        "min_temp": float(p.min_temp),
        "max_temp": float(p.max_temp),
        "watering_time": p.watering_time,
        "descripcion": p.description,
    }


@router.get("/plantas")
def list_plants(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return [to_plant_row(p) for p in plants.list_plant_profiles(db)]
