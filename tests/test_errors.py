import logging

from fastapi.testclient import TestClient

from models import DeviceParameters


def test_store_failure_is_generic_500(client, engine):
    DeviceParameters.__table__.drop(engine)

    r = client.get("/api/parametros", params={"device_id": "x"})
    assert r.status_code == 500
    assert r.json() == {"error": "Error al obtener parámetros"}
    assert "device_parameters" not in r.text


def test_store_failure_on_save_is_generic_500(client, engine, auth_headers):
    DeviceParameters.__table__.drop(engine)

    r = client.put(
        "/api/parametros",
        json={"device_id": "d1", "min_soil": 35, "watering_time": 4},
        headers=auth_headers,
    )
    assert r.status_code == 500
    assert r.json() == {"error": "Error al actualizar parámetros"}
    assert "INSERT" not in r.text


def _add_failing_route(app):
    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals: SELECT * FROM users")


def test_unhandled_error_is_generic_500(app):
    _add_failing_route(app)

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/boom")

    assert r.status_code == 500
    assert r.json() == {"error": "Error interno del servidor"}
    assert "secret internals" not in r.text


def test_failed_request_is_still_logged(app, caplog):
    _add_failing_route(app)
    caplog.set_level(logging.INFO, logger="smart_plant")

    with TestClient(app, raise_server_exceptions=False) as c:
        c.get("/boom")

    lines = [rec.getMessage() for rec in caplog.records if rec.name == "smart_plant.app"]
    assert any(line.startswith("GET /boom -> 500") for line in lines)


def test_successful_request_is_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="smart_plant")
    client.get("/health")

    lines = [rec.getMessage() for rec in caplog.records if rec.name == "smart_plant.app"]
    assert any(line.startswith("GET /health -> 200") for line in lines)


def test_malformed_json_reports_no_fields(client):
    r = client.post(
        "/api/register",
        content='{"email": "a@b.com", "pass',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Datos inválidos", "fields": []}
