# errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("smart_plant.errors")


class AppError(Exception):
    status_code = 500
    default_message = "Error interno del servidor"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input."""
    status_code = 400
    default_message = "Datos inválidos"


class ConflictError(AppError):
    """Duplicate identity."""
    status_code = 400
    default_message = "El email ya está registrado"


class AuthError(AppError):
    """Bad credentials or a missing/invalid/expired token."""
    status_code = 401
    default_message = "No autorizado"


class StoreError(AppError):
    """
    Backing-store failure. The message goes to the client as-is, so it must
    stay generic; the underlying exception is logged where it is raised.
    """
    status_code = 500
    default_message = "Error interno del servidor"


# ========================================
# 🚦 HANDLERS
# ========================================
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            continue
        # integer parts are list indexes or JSON byte offsets, not field names
        loc = [p for p in err.get("loc", ()) if isinstance(p, str) and p not in ("body", "query")]
        name = ".".join(loc)
        if name and name not in fields:
            fields.append(name)

    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.default_message, "fields": fields},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": StoreError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
