# app_factory.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# ========================================
# 🗄 IMPORT MODELS FIRST (CRITICAL)
# ========================================
import models  # noqa: F401  Load models before Base metadata
from config import Settings, load_settings
from crud.plants import seed_plant_profiles
from database import Base, create_db_engine, create_session_factory
from errors import register_exception_handlers
from utils.logger import setup_logging

logger = logging.getLogger("smart_plant.app")


def init_db(app: FastAPI) -> None:
    """Create tables and seed the plant catalog if this is a fresh database."""
    Base.metadata.create_all(bind=app.state.engine)
    db = app.state.session_factory()
    try:
        seed_plant_profiles(db)
    finally:
        db.close()
    logger.info("Database initialized")


def create_app(settings: Settings | None = None, engine=None) -> FastAPI:
    # ========================================
    # ⚙️ SETTINGS (built once, shared by reference)
    # ========================================
    settings = settings or load_settings()
    setup_logging(settings)

    # ========================================
    # 🚀 FASTAPI APP
    # ========================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app)
        yield

    app = FastAPI(
        lifespan=lifespan,
        title="SmartPlant API",
        version="1.0.0",
        description="Irrigation thresholds and telemetry for ESP32 plant monitors.",
    )

    app.state.settings = settings
    app.state.engine = engine if engine is not None else create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    register_exception_handlers(app)

    # ========================================
    # 📝 REQUEST LOG
    # ========================================
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method, request.url.path, status_code, elapsed_ms,
            )

    # ========================================
    # 🌍 CORS SETTINGS
    # ========================================
    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================
    # 🔐 AUTH ROUTES
    # ========================================
    from auth_routes import router as auth_router
    app.include_router(auth_router)

    # ========================================
    # 💧 PARAMETERS / 🌱 PLANTS / 📡 SENSORS
    # ========================================
    from routers.parameters import router as parameters_router
    from routers.plants import router as plants_router
    from routers.sensors import router as sensors_router
    app.include_router(parameters_router)
    app.include_router(plants_router)
    app.include_router(sensors_router)

    # ========================================
    # ❤️ HEALTH CHECK
    # ========================================
    @app.get("/health")
    def health():
        return {"ok": True, "status": "API running"}

    return app
