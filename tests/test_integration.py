from datetime import date, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fetchroute.api.dependencies import get_appointment_provider, get_route_store, get_storage_factory
from fetchroute.main import create_app
from fetchroute.models.domain import Address, Appointment, Client, Coordinate
from fetchroute.persistence.filesystem import FileStorage


def _appointment_payload(aid: str, lat: float | None, lon: float | None, when: str, duration: int | None = 60) -> dict:
    coordinates = {"latitude": lat, "longitude": lon} if lat is not None else None
    return {
        "id": aid,
        "date": when,
        "duration": duration,
        "client_id": f"client-{aid}",
        "pet_id": f"pet-{aid}",
        "service_type": "grooming",
        "client": {
            "id": f"client-{aid}",
            "name": f"Client {aid}",
            "address": {"formatted": f"{aid} Main St", "coordinates": coordinates},
        },
    }


START = {"name": "Home/Office", "address": "Default Location", "coordinates": {"latitude": 37.7749, "longitude": -122.4194}}


class FakeProvider:
    def get_appointments_for_routing(self, user_id, route_date):
        return [
            Appointment(
                appointment_id=aid,
                date=datetime.combine(route_date, datetime.min.time()).replace(hour=hour),
                duration=45,
                client_id=f"client-{aid}",
                client=Client(client_id=f"client-{aid}", name=f"Client {aid}", address=Address(f"{aid} Main St", Coordinate(lat, lon))),
            )
            for aid, lat, lon, hour in [("far", 37.70, -122.45, 11), ("near", 37.78, -122.41, 9)]
        ]


class FakeStore:
    def __init__(self):
        self.routes: dict[str, dict] = {}

    def create_route(self, user_id, route_date, result):
        route_id = f"route-{len(self.routes) + 1}"
        self.routes[route_id] = {
            "id": route_id,
            "user_id": user_id,
            "route_date": route_date.isoformat(),
            "appointment_ids": list(result.appointment_ids),
        }
        return route_id

    def get_route_by_date(self, user_id, route_date):
        for route in self.routes.values():
            if route["user_id"] == user_id and route["route_date"] == route_date.isoformat():
                return route
        return None

    def get_routes(self, user_id):
        return [route for route in self.routes.values() if route["user_id"] == user_id]

    def get_route(self, route_id):
        return self.routes.get(route_id)

    def delete_route(self, route_id):
        return self.routes.pop(route_id, None) is not None


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def api_client(tmp_path: Path, store: FakeStore) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_appointment_provider] = lambda: FakeProvider()
    app.dependency_overrides[get_route_store] = lambda: store
    app.dependency_overrides[get_storage_factory] = lambda: (lambda: FileStorage(root=tmp_path))
    return TestClient(app)


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "running"


def test_optimize_endpoint(api_client: TestClient):
    body = {
        "appointments": [
            _appointment_payload("B", 37.70, -122.45, "2024-05-01T10:30:00", 30),
            _appointment_payload("A", 37.78, -122.41, "2024-05-01T09:00:00", 60),
        ],
        "starting_point": START,
    }

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["appointment_ids"] == ["A", "B"]
    assert [w["type"] for w in payload["waypoints"]] == ["start", "appointment", "appointment", "end"]
    assert payload["waypoints"][1]["arrival_time"].startswith("2024-05-01T09:00:00")
    assert payload["total_distance_km"] > 0
    assert payload["route_id"] is None


def test_optimize_endpoint_reports_missing_coordinates(api_client: TestClient):
    body = {
        "appointments": [_appointment_payload("A", None, None, "2024-05-01T09:00:00")],
        "starting_point": START,
    }

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["kind"] == "missing_coordinates"
    assert detail["appointment_id"] == "A"
    assert detail["field"] == "client.address.coordinates"


def test_optimize_endpoint_with_no_appointments(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"starting_point": START})

    assert response.status_code == 200
    payload = response.json()
    assert payload["optimized_route"] == []
    assert [w["type"] for w in payload["waypoints"]] == ["start", "end"]


def test_daily_route_is_planned_stored_and_retrievable(api_client: TestClient, store: FakeStore, tmp_path: Path):
    response = api_client.post(
        "/api/routes/daily",
        json={"user_id": "user-1", "route_date": "2024-05-01", "persist": True},
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["route_id"] == "route-1"
    assert payload["appointment_ids"] == ["near", "far"]
    assert payload["start_point"]["name"] == "Home/Office"
    assert list((tmp_path / "outputs").glob("route_user-1_2024-05-01_*"))

    by_date = api_client.get("/api/routes/users/user-1/2024-05-01")
    assert by_date.status_code == 200
    assert by_date.json()["appointment_ids"] == ["near", "far"]

    assert len(api_client.get("/api/routes/users/user-1").json()) == 1
    assert api_client.get("/api/routes/route-1").json()["id"] == "route-1"

    assert api_client.delete("/api/routes/route-1").status_code == 204
    assert api_client.get("/api/routes/route-1").status_code == 404
    assert api_client.get(f"/api/routes/users/user-1/{date(2024, 5, 1).isoformat()}").status_code == 404


def test_daily_route_without_appointments(api_client: TestClient):
    class EmptyProvider:
        def get_appointments_for_routing(self, user_id, route_date):
            return []

    api_client.app.dependency_overrides[get_appointment_provider] = lambda: EmptyProvider()

    response = api_client.post("/api/routes/daily", json={"user_id": "user-1", "route_date": "2024-05-01"})

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "no_appointments"


def test_delete_unknown_route(api_client: TestClient):
    assert api_client.delete("/api/routes/missing").status_code == 404


def test_database_health_unconfigured(api_client: TestClient, monkeypatch):
    from fetchroute.db import supabase as supabase_module

    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: None)
    payload = api_client.get("/api/health/database").json()
    assert payload["configured"] is False


def test_database_health_connected(api_client: TestClient, monkeypatch, fake_supabase, fake_table):
    from fetchroute.db import supabase as supabase_module

    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: fake_supabase(routes=fake_table()))
    assert api_client.get("/api/health/database").json()["connected"] is True

    broken = fake_supabase(routes=fake_table(error=ConnectionError("offline")))
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: broken)
    payload = api_client.get("/api/health/database").json()
    assert payload["connected"] is False
    assert "offline" in payload["error"]
