import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from auth_utils import (
    dummy_verify,
    hash_password,
    is_valid_email,
    is_valid_password,
    verify_password,
)
from errors import AuthError, ConflictError, StoreError, ValidationError
from models import User

logger = logging.getLogger("smart_plant.crud.users")

INVALID_CREDENTIALS = "Credenciales inválidas"


def register(db: Session, email: str, password: str) -> User:
    if not is_valid_email(email):
        raise ValidationError("Email inválido. Debe tener formato: usuario@dominio.com")

    if not is_valid_password(password):
        raise ValidationError(
            "Contraseña inválida. Debe tener mínimo 6 caracteres, al menos una letra y un número"
        )

    # uniqueness is enforced by the constraint, not a pre-check
    user = User(email=email, hashed_password=hash_password(password))
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("El email ya está registrado")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create user")
        raise StoreError("Error al crear usuario")

    db.refresh(user)
    logger.info("User created: id=%s", user.id)
    return user


def verify(db: Session, email: str, password: str) -> User:
    """
    Every failure raises the same AuthError so callers cannot tell an
    unknown email from a wrong password.
    """
    if not is_valid_email(email) or not isinstance(password, str) or not password:
        raise AuthError(INVALID_CREDENTIALS)

    try:
        user = db.query(User).filter(User.email == email).first()
    except SQLAlchemyError:
        logger.exception("Failed to load user for login")
        raise StoreError("Error al iniciar sesión")

    if user is None:
        dummy_verify()
        raise AuthError(INVALID_CREDENTIALS)

    if not verify_password(password, user.hashed_password):
        raise AuthError(INVALID_CREDENTIALS)

    return user
