import dataclasses

import pytest

from config import Settings, load_settings, normalize_database_url


def test_defaults_are_development():
    s = load_settings({})
    assert s.environment == "development"
    assert s.uses_dev_secret
    assert s.token_expire_days == 7
    assert s.db_pool_size == 10
    assert s.cors_origins == ("*",)


def test_dev_secret_rejected_outside_development():
    with pytest.raises(RuntimeError):
        load_settings({"ENVIRONMENT": "production"})


def test_production_with_secret():
    s = load_settings({
        "ENVIRONMENT": "production",
        "JWT_SECRET": "  s3cr3t-from-vault \n",
        "CORS_ORIGINS": "https://a.example, https://b.example",
        "DB_POOL_SIZE": "5",
    })
    assert s.jwt_secret == "s3cr3t-from-vault"
    assert s.cors_origins == ("https://a.example", "https://b.example")
    assert s.db_pool_size == 5
    assert not s.uses_dev_secret


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.jwt_secret = "other"


def test_invalid_pool_size():
    with pytest.raises(RuntimeError):
        Settings(db_pool_size=0).validate()


@pytest.mark.parametrize("raw, expected", [
    ("postgres://u:p@h/db", "postgresql+psycopg2://u:p@h/db"),
    ("postgresql://u:p@h/db", "postgresql+psycopg2://u:p@h/db"),
    ("mysql://u:p@h/db", "mysql+pymysql://u:p@h/db"),
    ("sqlite:///./x.db", "sqlite:///./x.db"),
])
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected

def test_app_factory_ignores_process_environment(monkeypatch, settings, engine):
    # a production shell without JWT_SECRET must not break an app built from explicit settings
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    from fastapi.testclient import TestClient

    from app_factory import create_app

    app = create_app(settings, engine=engine)
    with TestClient(app) as c:
        assert c.get("/health").status_code == 200
    assert app.state.settings is settings
