# config.py
import logging
import os
from dataclasses import dataclass, field

from fastapi import Request

logger = logging.getLogger("smart_plant.config")

# Local development only. Settings.validate() refuses it anywhere else.
DEV_JWT_SECRET = "smart-plant-dev-secret-change-me"

DEV_ENVIRONMENTS = {"development", "test"}


def _clean(v: str | None) -> str | None:
    if v is None:
        return None
    # remove hidden whitespace/newlines from copy/paste
    v = v.strip().strip('"').strip("'")
    return v or None


def normalize_database_url(url: str) -> str:
    """
    Hosting providers hand out bare scheme URLs; SQLAlchemy needs the driver prefix.
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    if url.startswith("mysql://"):
        return url.replace("mysql://", "mysql+pymysql://", 1)
    return url


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    database_url: str = "sqlite:///./smart_plant.db"
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    db_pool_size: int = 10
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"
    log_file: str | None = None
    default_device_id: str = "esp32s3_01"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in DEV_ENVIRONMENTS

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret == DEV_JWT_SECRET

    def validate(self) -> "Settings":
        if not self.jwt_secret:
            raise RuntimeError("JWT_SECRET is empty")

        if self.uses_dev_secret:
            if not self.is_development:
                raise RuntimeError(
                    "JWT_SECRET is not set. The built-in development secret "
                    f"cannot be used with ENVIRONMENT={self.environment!r}."
                )
            logger.warning(
                "!!! Using the built-in development JWT secret. "
                "Set JWT_SECRET before deploying. !!!"
            )

        if self.token_expire_days < 1:
            raise RuntimeError("TOKEN_EXPIRE_DAYS must be at least 1")
        if self.db_pool_size < 1:
            raise RuntimeError("DB_POOL_SIZE must be at least 1")

        return self


def load_settings(environ=None) -> Settings:
    """
    Builds the process-wide Settings from environment variables.

    Called once at startup; everything else receives the resulting object.
    """
    env = os.environ if environ is None else environ

    origins_raw = _clean(env.get("CORS_ORIGINS")) or "*"
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())

    settings = Settings(
        environment=_clean(env.get("ENVIRONMENT")) or "development",
        database_url=normalize_database_url(
            _clean(env.get("DATABASE_URL")) or "sqlite:///./smart_plant.db"
        ),
        jwt_secret=_clean(env.get("JWT_SECRET")) or DEV_JWT_SECRET,
        jwt_algorithm=_clean(env.get("JWT_ALGORITHM")) or "HS256",
        token_expire_days=int(env.get("TOKEN_EXPIRE_DAYS", "7")),
        db_pool_size=int(env.get("DB_POOL_SIZE", "10")),
        cors_origins=origins or ("*",),
        log_level=_clean(env.get("LOG_LEVEL")) or "INFO",
        log_file=_clean(env.get("LOG_FILE")),
        default_device_id=_clean(env.get("DEFAULT_DEVICE_ID")) or "esp32s3_01",
    )
    return settings.validate()


# Dependency for FastAPI routes
def get_settings(request: Request) -> Settings:
    return request.app.state.settings
