# models.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.sql import func

# ✅ Import the SAME Base object from database.py
from database import Base


# ===============================
# 👤 USER MODEL (Authentication)
# ===============================
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)

    # bcrypt hashes are ~60 chars, give safe room
    hashed_password = Column(String(128), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


# ===============================
# 🌱 PLANT PROFILE (reference data)
# ===============================
class PlantProfile(Base):
    __tablename__ = "plant_profiles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    min_soil = Column(Integer, nullable=False)
    max_soil = Column(Integer, nullable=False)
    min_humidity = Column(Integer, nullable=False)
    max_humidity = Column(Integer, nullable=False)
    min_temp = Column(Numeric(4, 1), nullable=False)
    max_temp = Column(Numeric(4, 1), nullable=False)

    # seconds the pump should run per watering
    watering_time = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)


# ===============================
# 💧 DEVICE PARAMETERS (per user + device)
# ===============================
class DeviceParameters(Base):
    __tablename__ = "device_parameters"
    __table_args__ = (
        # 🔑 One row per (user, device): target of the atomic upsert
        UniqueConstraint("user_id", "device_id", name="uq_device_parameters_user_device"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    device_id = Column(String(50), nullable=False, index=True)

    min_soil = Column(Integer, nullable=False)
    watering_time = Column(Integer, nullable=False)

    plant_profile_id = Column(Integer, ForeignKey("plant_profiles.id"), nullable=True)

    # MySQL DATETIME defaults to whole seconds; recency ordering needs microseconds
    updated_at = Column(
        DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql", "mariadb"),
        server_default=func.now(),
        onupdate=func.now(),
        index=True,
    )


# ===============================
# 📡 SENSOR READINGS (Telemetry)
# ===============================
class SensorReading(Base):
    __tablename__ = "sensor_readings"
    __table_args__ = (
        Index("idx_device_timestamp", "device_id", "timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(String(50), nullable=False)

    # device clock, not server clock
    timestamp = Column(DateTime, nullable=False)

    soil_percent = Column(Numeric(5, 2), nullable=False)
    temperature_c = Column(Numeric(4, 1), nullable=False)
    humidity_percent = Column(Numeric(5, 2), nullable=False)
    pump_on = Column(Boolean, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
