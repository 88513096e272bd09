# auth_utils.py

import re

from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from config import Settings, get_settings
from jwt_handler import decode_access_token

# ========================================
# ✅ INPUT FORMATS
# ========================================

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# min 6 chars, at least one letter and one digit, restricted symbol set
PASSWORD_RE = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]{6,}$")


def is_valid_email(email) -> bool:
    return isinstance(email, str) and EMAIL_RE.fullmatch(email) is not None


def is_valid_password(password) -> bool:
    return isinstance(password, str) and PASSWORD_RE.fullmatch(password) is not None


# ========================================
# 🔐 PASSWORD HASHING
# ========================================

# cost 10 keeps a verify around ~100ms on typical hosts
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str):
    # bcrypt only accepts passwords ≤ 72 bytes
    safe_password = password.encode("utf-8")[:72]
    return pwd_context.hash(safe_password)


def verify_password(plain_password: str, hashed_password: str):
    # truncate before verify (bcrypt requirement)
    safe_plain = plain_password.encode("utf-8")[:72]
    return pwd_context.verify(safe_plain, hashed_password)


def dummy_verify() -> None:
    """Burn one hash verification so a missing account costs the same time."""
    pwd_context.dummy_verify()


# ========================================
# 👤 CURRENT USER DEPENDENCY (JWT)
# ========================================

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def get_current_user_id(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Stateless: the signed token is the session, no DB lookup is made.
    """
    return decode_access_token(token, settings)
