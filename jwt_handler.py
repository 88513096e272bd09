# jwt_handler.py
from datetime import datetime, timedelta, timezone
from jose import JWTError, ExpiredSignatureError, jwt
import secrets

from config import Settings
from errors import AuthError


def create_access_token(user_id: int, settings: Settings, now: datetime | None = None) -> str:
    """
    Creates a JWT with:
      - sub: the user id (string; jose rejects non-string subjects)
      - userId: the user id as an int (what the web client reads)
      - iat: issued-at (unix timestamp)
      - exp: expiry (unix timestamp), `token_expire_days` after iat
      - jti: random unique id (guarantees uniqueness)

    Tokens are never stored server-side; a token stays valid until exp.
    """
    now = now or datetime.now(timezone.utc)
    exp = now + timedelta(days=settings.token_expire_days)

    to_encode = {
        "sub": str(user_id),
        "userId": int(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": secrets.token_hex(16),
    }

    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str | None, settings: Settings) -> int:
    """Returns the user id embedded in a valid token, or raises AuthError."""
    if not token:
        raise AuthError("No autorizado")

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthError("Token expirado")
    except JWTError:
        raise AuthError("Token inválido")

    sub = payload.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise AuthError("Token inválido")
