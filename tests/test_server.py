from __future__ import annotations

from fastapi.testclient import TestClient

from server.app import app


def test_request_starts_a_trip():
    with TestClient(app) as client:
        state = client.get("/state").json()
        assert state["current_floor"] == 1

        body = client.post("/requests", json={"floor": 4}).json()
        assert body["accepted"] is True
        assert body["moving"] is True
        assert body["target_floor"] == 4

        body = client.post("/requests", json={"floor": 4}).json()
        assert body["accepted"] is False


def test_emergency_blocks_requests():
    with TestClient(app) as client:
        client.post("/requests", json={"floor": 5})
        body = client.post("/emergency").json()
        assert body["modes"]["emergency"] is True
        assert body["queue_floors"] == []
        assert body["moving"] is False

        body = client.post("/requests", json={"floor": 3}).json()
        assert body["accepted"] is False
        assert body["status"] == "EMERGENCY"


def test_hall_call_and_maintenance():
    with TestClient(app) as client:
        body = client.post("/calls", json={"floor": 6, "direction": "up"}).json()
        assert body["accepted"] is False
        body = client.post("/maintenance").json()
        assert body["status"] == "MAINTENANCE"
        body = client.post("/maintenance").json()
        assert body["status"] == "Idle"


def test_reset_and_speed_validation():
    with TestClient(app) as client:
        body = client.post("/reset", json={"floor_count": 25}).json()
        assert body["accepted"] is False
        assert body["floor_count"] == 6

        body = client.post("/reset", json={"floor_count": 12, "ms_per_floor": 400}).json()
        assert body["accepted"] is True
        assert body["floor_count"] == 12

        body = client.post("/config/speed", json={"ms_per_floor": 0}).json()
        assert body["accepted"] is False
        assert body["ms_per_floor"] == 400


def test_algorithm_selection():
    with TestClient(app) as client:
        response = client.post("/algorithm", json={"name": "nope"})
        assert response.status_code == 400
        body = client.post("/algorithm", json={"name": "look"}).json()
        assert body["ordering"] == "look"


def test_stream_sends_state_on_connect():
    with TestClient(app) as client:
        with client.websocket_connect("/ws/stream") as websocket:
            payload = websocket.receive_json()
            assert payload["floor_count"] == 6
            assert "logs" in payload
