import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict

from auth_utils import is_valid_email
from config import Settings, get_settings
from crud import users
from database import get_db
from errors import AuthError, ValidationError
from jwt_handler import create_access_token

logger = logging.getLogger("smart_plant.auth")

router = APIRouter(
    prefix="/api",
    tags=["auth"]
)

# -------------------------------
# REQUEST / RESPONSE MODELS
# -------------------------------
class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginResponse(BaseModel):
    token: str
    userId: int
    email: str


# -------------------------------
# REGISTER USER
# -------------------------------
@router.post("/register", response_model=RegisterResponse)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    user = users.register(db, request.email, request.password)
    return RegisterResponse(message="Usuario creado exitosamente", userId=user.id)


# -------------------------------
# LOGIN USER
# -------------------------------
@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # shape problems are the caller's fault (400); anything past this is 401
    if not is_valid_email(request.email):
        raise ValidationError("Email inválido")
    if not request.password:
        raise ValidationError("Contraseña requerida")

    try:
        user = users.verify(db, request.email, request.password)
    except AuthError:
        logger.info("Login failed")
        raise

    token = create_access_token(user.id, settings)
    logger.info("Login successful: user_id=%s", user.id)

    return LoginResponse(token=token, userId=user.id, email=user.email)
