"""
Parameter store: irrigation thresholds per (user, device).

Devices read without credentials and always get a usable answer: the most
recently updated row for their device id, across every user, or the factory
defaults when nobody has configured the device yet.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from errors import StoreError, ValidationError
from models import DeviceParameters, PlantProfile

logger = logging.getLogger("smart_plant.crud.parameters")

DEFAULT_MIN_SOIL = 40
DEFAULT_WATERING_TIME = 3

UPSERT_KEY = ("user_id", "device_id")


def default_parameters() -> dict:
    return {"min_soil": DEFAULT_MIN_SOIL, "watering_time": DEFAULT_WATERING_TIME}


def get_for_device(db: Session, device_id: str) -> dict:
    try:
        row = (
            db.query(DeviceParameters.min_soil, DeviceParameters.watering_time)
            .filter(DeviceParameters.device_id == device_id)
            .order_by(DeviceParameters.updated_at.desc(), DeviceParameters.id.desc())
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Failed to load parameters for device=%s", device_id)
        raise StoreError("Error al obtener parámetros")

    if row is None:
        return default_parameters()

    return {"min_soil": row.min_soil, "watering_time": row.watering_time}


def get_for_user(db: Session, user_id: int) -> DeviceParameters | None:
    # no device filter: a user with several devices gets the latest one
    try:
        return (
            db.query(DeviceParameters)
            .filter(DeviceParameters.user_id == user_id)
            .order_by(DeviceParameters.updated_at.desc(), DeviceParameters.id.desc())
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Failed to load parameters for user=%s", user_id)
        raise StoreError("Error al obtener parámetros")


def _upsert_statement(dialect_name: str, values: dict):
    """
    Single-statement insert-or-update keyed on (user_id, device_id).
    Returns None when the dialect has no native upsert.
    """
    changed = ("min_soil", "watering_time", "plant_profile_id", "updated_at")

    if dialect_name in ("postgresql", "sqlite"):
        dialect_insert = postgresql.insert if dialect_name == "postgresql" else sqlite.insert
        stmt = dialect_insert(DeviceParameters).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=list(UPSERT_KEY),
            set_={c: stmt.excluded[c] for c in changed},
        )

    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(DeviceParameters).values(**values)
        return stmt.on_duplicate_key_update(
            **{c: stmt.inserted[c] for c in changed}
        )

    return None


def _upsert_orm(db: Session, values: dict) -> None:
    """
    Check-then-write for dialects without a native upsert. The unique
    constraint turns a lost insert race into an update of the winner's row.
    """
    query = db.query(DeviceParameters).filter(
        DeviceParameters.user_id == values["user_id"],
        DeviceParameters.device_id == values["device_id"],
    )

    row = query.first()
    if row is None:
        db.add(DeviceParameters(**values))
        try:
            db.commit()
            return
        except IntegrityError:
            db.rollback()
            row = query.one()

    for key in ("min_soil", "watering_time", "plant_profile_id", "updated_at"):
        setattr(row, key, values[key])
    db.commit()


def upsert(
    db: Session,
    user_id: int,
    device_id: str,
    min_soil: int,
    watering_time: int,
    plant_profile_id: int | None = None,
) -> DeviceParameters:
    device_id = (device_id or "").strip()
    if not device_id:
        raise ValidationError("device_id requerido")

    try:
        if plant_profile_id is not None and db.get(PlantProfile, plant_profile_id) is None:
            raise ValidationError("Tipo de planta no encontrado")

        values = {
            "user_id": user_id,
            "device_id": device_id,
            "min_soil": min_soil,
            "watering_time": watering_time,
            "plant_profile_id": plant_profile_id,
            # python clock: sub-second resolution for recency ordering
            "updated_at": datetime.now(timezone.utc),
        }

        stmt = _upsert_statement(db.get_bind().dialect.name, values)
        if stmt is not None:
            db.execute(stmt)
            db.commit()
        else:
            _upsert_orm(db, values)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save parameters user=%s device=%s", user_id, device_id)
        raise StoreError("Error al actualizar parámetros")

    logger.info(
        "Parameters saved user=%s device=%s min_soil=%s watering_time=%s",
        user_id, device_id, min_soil, watering_time,
    )

    return (
        db.query(DeviceParameters)
        .filter(DeviceParameters.user_id == user_id, DeviceParameters.device_id == device_id)
        .one()
    )
