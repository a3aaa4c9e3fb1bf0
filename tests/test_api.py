"""HTTP tests for the v1 API."""

import pytest
from httpx import AsyncClient

from app.config import Settings, get_settings
from app.main import app

pytestmark = pytest.mark.asyncio


async def _create_location(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "HQ", "timezone": "Europe/Budapest", **overrides}
    response = await client.post("/api/v1/locations", json=payload)
    assert response.status_code == 201
    return response.json()


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

        response = await client.get("/api/v1/health")
        assert response.json()["status"] == "ok"


class TestDocs:
    async def test_production_flag(self):
        assert Settings(app_env="production", _env_file=None).is_production is True
        assert Settings(app_env="staging", _env_file=None).is_production is False

    async def test_docs_follow_environment(self):
        expected = None if get_settings().is_production else "/docs"
        assert app.docs_url == expected


class TestLocationsApi:
    async def test_create_and_get(self, client: AsyncClient):
        created = await _create_location(client, base_email="hq@example.com")
        assert created["name"] == "HQ"
        assert created["is_deleted"] is False

        response = await client.get(f"/api/v1/locations/{created['id']}")
        assert response.status_code == 200
        assert response.json()["base_email"] == "hq@example.com"

    async def test_unknown_location_is_404(self, client: AsyncClient):
        response = await client.get("/api/v1/locations/999")
        assert response.status_code == 404
        assert response.json()["code"] == "location_not_found"

    async def test_invalid_timezone_is_422(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/locations", json={"name": "HQ", "timezone": "Mars/Base"}
        )
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_timezone"

    async def test_delete_and_restore(self, client: AsyncClient):
        created = await _create_location(client)

        response = await client.delete(f"/api/v1/locations/{created['id']}")
        assert response.status_code == 204
        assert (await client.get(f"/api/v1/locations/{created['id']}")).status_code == 404

        response = await client.post(f"/api/v1/locations/{created['id']}/restore")
        assert response.status_code == 200
        assert response.json()["is_deleted"] is False


class TestBusinessHoursApi:
    async def test_round_trip(self, client: AsyncClient):
        location = await _create_location(client)
        url = f"/api/v1/locations/{location['id']}/business-hours"

        response = await client.put(url, json={"1": {"open": "09:00", "close": "17:00"}})
        assert response.status_code == 200
        saved = response.json()
        assert saved["1"] == {"open": "09:00", "close": "17:00", "is_closed": False}
        assert saved["7"]["is_closed"] is True

        assert (await client.get(url)).json() == saved

    async def test_order_violation_is_422(self, client: AsyncClient):
        location = await _create_location(client)
        url = f"/api/v1/locations/{location['id']}/business-hours"

        response = await client.put(url, json={"1": {"open": "17:00", "close": "09:00"}})
        assert response.status_code == 422
        assert response.json()["code"] == "business_hours_order"

        hours = (await client.get(url)).json()
        assert all(day["is_closed"] for day in hours.values())

    async def test_holidays(self, client: AsyncClient):
        location = await _create_location(client)
        url = f"/api/v1/locations/{location['id']}/holidays"

        response = await client.post(
            url, json={"start_date": "2025-12-24", "end_date": "2025-12-26", "note": "Xmas"}
        )
        assert response.status_code == 201
        holidays = response.json()
        assert [h["holiday_date"] for h in holidays] == ["2025-12-24", "2025-12-25", "2025-12-26"]

        response = await client.delete(f"{url}/{holidays[0]['id']}")
        assert response.status_code == 204
        assert len((await client.get(url)).json()) == 2

        response = await client.delete(f"{url}/9999")
        assert response.status_code == 404


class TestBookingFlow:
    """Service, employee, appointment and calendar through the API."""

    async def test_day_schedule(self, client: AsyncClient):
        location = await _create_location(client)
        await client.put(
            f"/api/v1/locations/{location['id']}/business-hours",
            json={"1": {"open": "09:00", "close": "17:00"}},
        )

        response = await client.post(
            "/api/v1/services", json={"name": "Haircut", "duration_minutes": 30, "price": 8000}
        )
        assert response.status_code == 201
        service = response.json()

        response = await client.post(
            "/api/v1/employees",
            json={
                "name": "Eva",
                "location_ids": [location["id"]],
                "services": [{"service_id": service["id"], "order": 1}],
                "schedule": {"1": {"start_time": "09:00", "end_time": "17:00"}},
            },
        )
        assert response.status_code == 201
        employee = response.json()
        assert employee["location_ids"] == [location["id"]]

        response = await client.post(
            "/api/v1/appointments",
            json={
                "provider_id": employee["id"],
                "service_id": service["id"],
                "appointment_date": "2025-05-05",
                "appointment_start": "10:00",
                "appointment_end": "10:30",
            },
        )
        assert response.status_code == 201
        appointment = response.json()
        assert appointment["employee_name"] == "Eva"
        assert appointment["status"] == "pending"

        response = await client.get(f"/api/v1/calendar/{location['id']}/2025-05-05")
        assert response.status_code == 200
        schedule = response.json()
        assert schedule["is_closed"] is False
        assert len(schedule["slots"]) == 16
        assert [e["id"] for e in schedule["employees"]] == [employee["id"]]
        assert [a["id"] for a in schedule["appointments"]] == [appointment["id"]]
        assert schedule["appointments"][0]["service_name"] == "Haircut"
        assert schedule["view_window"]["slot_min_time"] == "07:00:00"

    async def test_invalid_period_is_422(self, client: AsyncClient):
        response = await client.post("/api/v1/services", json={"name": "Haircut"})
        service = response.json()
        response = await client.post("/api/v1/employees", json={"name": "Eva"})
        employee = response.json()

        response = await client.post(
            "/api/v1/appointments",
            json={
                "provider_id": employee["id"],
                "service_id": service["id"],
                "appointment_date": "2025-05-05",
                "appointment_start": "11:00",
                "appointment_end": "10:00",
            },
        )
        assert response.status_code == 422
        assert response.json()["code"] == "invalid_period"

        listing = (await client.get("/api/v1/appointments")).json()
        assert listing["total"] == 0

    async def test_calendar_unknown_location(self, client: AsyncClient):
        response = await client.get("/api/v1/calendar/404/2025-05-05")
        assert response.status_code == 404
        assert response.json() == {
            "code": "location_not_found",
            "detail": "The requested location could not be found.",
        }
