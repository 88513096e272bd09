import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from config import Settings
from app_factory import create_app

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        database_url="sqlite://",
        jwt_secret=TEST_SECRET,
    )


@pytest.fixture
def engine():
    # one shared in-memory database for every session in the test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app):
    # context manager runs startup: tables + plant catalog
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    session = app.state.session_factory()
    yield session
    session.close()


def register_and_login(client, email="a@b.com", password="abc123"):
    r = client.post("/api/register", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    r = client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["userId"]


@pytest.fixture
def auth_headers(client):
    headers, _ = register_and_login(client)
    return headers
