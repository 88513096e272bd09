import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from errors import StoreError
from models import PlantProfile

logger = logging.getLogger("smart_plant.crud.plants")

# name, soil %, air humidity %, temperature °C, watering seconds, notes
DEFAULT_PLANT_PROFILES = [
    ("Suculentas", 20, 40, 30, 50, "18.0", "30.0", 2, "Requieren poco riego, suelo bien drenado"),
    ("Helechos", 60, 80, 60, 80, "15.0", "24.0", 5, "Necesitan alta humedad y suelo húmedo"),
    ("Cactáceas", 15, 30, 20, 40, "20.0", "35.0", 2, "Muy resistentes a la sequía"),
    ("Plantas Tropicales", 50, 70, 60, 80, "20.0", "28.0", 4, "Requieren calor y humedad constante"),
    ("Aromáticas (Albahaca, Menta)", 40, 60, 50, 70, "18.0", "25.0", 3, "Necesitan riego regular"),
    ("Tomates", 50, 70, 50, 70, "18.0", "27.0", 4, "Riego frecuente durante crecimiento"),
    ("Pimientos", 45, 65, 50, 70, "20.0", "28.0", 3, "Riego moderado constante"),
    ("Flores Ornamentales", 40, 60, 50, 70, "15.0", "25.0", 3, "Riego moderado regular"),
]


def seed_plant_profiles(db: Session) -> int:
    """Insert the predefined catalog once. Returns how many rows were added."""
    if db.query(PlantProfile.id).first() is not None:
        return 0

    for (name, min_soil, max_soil, min_hum, max_hum,
         min_temp, max_temp, watering_time, description) in DEFAULT_PLANT_PROFILES:
        db.add(PlantProfile(
            name=name,
            min_soil=min_soil,
            max_soil=max_soil,
            min_humidity=min_hum,
            max_humidity=max_hum,
            min_temp=Decimal(min_temp),
            max_temp=Decimal(max_temp),
            watering_time=watering_time,
            description=description,
        ))

    db.commit()
    logger.info("Seeded %d plant profiles", len(DEFAULT_PLANT_PROFILES))
    return len(DEFAULT_PLANT_PROFILES)


def list_plant_profiles(db: Session) -> list[PlantProfile]:
    try:
        return db.query(PlantProfile).order_by(PlantProfile.id.asc()).all()
    except SQLAlchemyError:
        logger.exception("Failed to list plant profiles")
        raise StoreError("Error al obtener plantas")
