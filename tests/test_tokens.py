from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from config import Settings
from errors import AuthError
from jwt_handler import create_access_token, decode_access_token


def test_token_round_trip(settings):
    token = create_access_token(7, settings)
    assert decode_access_token(token, settings) == 7


def test_token_expires_after_seven_days(settings):
    issued = datetime.now(timezone.utc) - timedelta(days=7, seconds=5)
    token = create_access_token(7, settings, now=issued)
    with pytest.raises(AuthError) as exc:
        decode_access_token(token, settings)
    assert exc.value.message == "Token expirado"


def test_token_still_valid_before_expiry(settings):
    issued = datetime.now(timezone.utc) - timedelta(days=6, hours=23)
    token = create_access_token(7, settings, now=issued)
    assert decode_access_token(token, settings) == 7


def test_token_claims(settings):
    token = create_access_token(3, settings)
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "3"
    assert claims["userId"] == 3
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600
    assert len(claims["jti"]) == 32


def test_tokens_are_unique(settings):
    assert create_access_token(1, settings) != create_access_token(1, settings)


def test_wrong_key_is_rejected(settings):
    other = Settings(environment="test", jwt_secret="someone-else")
    token = create_access_token(1, other)
    with pytest.raises(AuthError):
        decode_access_token(token, settings)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_missing_or_malformed_token(settings, token):
    with pytest.raises(AuthError):
        decode_access_token(token, settings)


def test_token_without_subject(settings):
    token = jwt.encode({"foo": "bar"}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(AuthError):
        decode_access_token(token, settings)


# -------------------------------
# bearer gate on protected routes
# -------------------------------
@pytest.mark.parametrize("path", ["/api/plantas", "/api/user-parametros", "/api/lecturas", "/api/lectura-actual"])
def test_protected_routes_need_token(client, path):
    r = client.get(path)
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_protected_route_rejects_bad_token(client):
    r = client.get("/api/plantas", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == {"error": "Token inválido"}


def test_protected_route_rejects_expired_token(client, settings):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = create_access_token(1, settings, now=issued)
    r = client.get("/api/plantas", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
