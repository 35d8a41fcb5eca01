from __future__ import annotations

from fastapi.testclient import TestClient

from main import create_app


def test_health_is_up(client, fake_db):
    fake_db.available = False
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "UP"}


def test_ready_when_store_answers(client):
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "READY"}


def test_not_ready_when_store_is_down(client, fake_db):
    fake_db.available = False
    resp = client.get("/ready")
    assert resp.status_code == 500
    assert resp.json() == {"status": "NOT_READY"}


def test_root_wraps_student_list(client):
    client.post("/addstudent", json={"name": "Asha", "rollNo": "1", "class": "9"})
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "From Backend"
    assert [s["name"] for s in body["studentData"]] == ["Asha"]


def test_cors_headers_present(client):
    resp = client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_shutdown_closes_database(fake_db):
    with TestClient(create_app(fake_db)) as test_client:
        assert test_client.get("/health").status_code == 200
        assert fake_db.closed is False
    assert fake_db.closed is True
