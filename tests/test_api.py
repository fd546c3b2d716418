"""Testy API / API tests."""

import io

import pytest
from openpyxl import load_workbook
from sqlalchemy import event

from travel_costs.exceptions import StatOfficeError
from travel_costs.models.trip import Trip
from travel_costs.services.stat_office_service import StatOfficeService


async def _vehicle(client, **overrides):
    payload = {
        "name": "Škoda Octavia",
        "license_plate": "BA123AB",
        "consumption": 6.5,
        "fuel_type": "diesel",
        "ownership_type": "private",
    }
    payload.update(overrides)
    resp = await client.post("/api/vehicles/", json=payload)
    assert resp.status_code == 201
    return resp.json()


async def _employee(client):
    resp = await client.post("/api/employees/", json={"name": "Ján Novák", "address": "Hlavná 1, Trnava"})
    assert resp.status_code == 201
    return resp.json()


async def _fuel_price(client):
    resp = await client.post("/api/fuel-prices/", json={
        "valid_from": "2024-01-01T00:00:00.000",
        "valid_to": "2024-01-07T23:59:59.999",
        "price_diesel": 1.45,
        "price_benzin": 1.65,
    })
    assert resp.status_code == 201
    return resp.json()


def _trip_payload(vehicle_id, employee_id, **overrides):
    payload = {
        "vehicle_id": vehicle_id,
        "employee_id": employee_id,
        "date_start": "2024-01-03T08:00:00",
        "date_end": "2024-01-03T16:00:00",
        "origin": "Mlynské Nivy 1, Bratislava",
        "destination": "Hlavná 5, Košice",
        "distance_km": 120,
        "purpose": "Stretnutie so zákazníkom",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def trip_setup(client):
    vehicle = await _vehicle(client)
    employee = await _employee(client)
    await _fuel_price(client)
    return vehicle, employee


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"


@pytest.mark.asyncio
async def test_vehicle_crud(client):
    vehicle = await _vehicle(client)
    assert vehicle["fuel_type"] == "diesel"

    resp = await client.put(f"/api/vehicles/{vehicle['id']}", json={"consumption": 7.1})
    assert resp.status_code == 200
    assert resp.json()["consumption"] == 7.1

    resp = await client.get("/api/vehicles/")
    assert len(resp.json()) == 1

    resp = await client.delete(f"/api/vehicles/{vehicle['id']}")
    assert resp.status_code == 204
    resp = await client.get(f"/api/vehicles/{vehicle['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_vehicle_negative_consumption_rejected(client):
    resp = await client.post("/api/vehicles/", json={
        "name": "X", "license_plate": "X", "consumption": -1, "fuel_type": "diesel", "ownership_type": "company",
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_project_code_unique(client):
    resp = await client.post("/api/projects/", json={"code": "P-01", "name": "Alfa"})
    assert resp.status_code == 201
    resp = await client.post("/api/projects/", json={"code": "P-01", "name": "Beta"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_location_crud(client):
    resp = await client.post("/api/locations/", json={
        "name": "Sídlo", "street": "Mlynské Nivy 1", "city": "Bratislava", "zip": "82109", "country": "Slovensko",
    })
    assert resp.status_code == 201
    assert resp.json()["address"] == "Mlynské Nivy 1, Bratislava"


@pytest.mark.asyncio
async def test_settings_defaults_and_update(client):
    resp = await client.get("/api/settings/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["meal_rate_low"] == 7.80
    assert data["amortization_rate"] == 0.252

    resp = await client.put("/api/settings/", json={"meal_rate_low": 8.0})
    assert resp.status_code == 200
    assert resp.json()["meal_rate_low"] == 8.0
    assert resp.json()["meal_rate_mid"] == 11.60


@pytest.mark.asyncio
async def test_fuel_price_period_validation(client):
    resp = await client.post("/api/fuel-prices/", json={"valid_from": "2024-01-07", "valid_to": "2024-01-01"})
    assert resp.status_code == 400
    resp = await client.post("/api/fuel-prices/", json={"valid_from": "not a date", "valid_to": "2024-01-01"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_trip_create_and_calculation(client, trip_setup):
    vehicle, employee = trip_setup
    resp = await client.post("/api/trips/", json=_trip_payload(
        vehicle["id"], employee["id"],
        waypoints=[{"location": "Námestie 3, Žilina"}],
        expenses=[{"expense_type": "parking", "amount": "abc"}],
    ))
    assert resp.status_code == 201
    trip = resp.json()
    assert trip["is_settled"] is False
    assert trip["waypoints"][0]["sequence_order"] == 0
    assert trip["expenses"][0]["amount"] == 0

    resp = await client.get(f"/api/trips/{trip['id']}/calculation")
    assert resp.status_code == 200
    report = resp.json()
    assert report["warnings"] == []
    calc = report["calculation"]
    assert calc["meal_allowance"] == pytest.approx(7.80)
    assert calc["fuel_cost"] == pytest.approx(11.31)
    assert calc["amortization_cost"] == pytest.approx(30.24)
    assert calc["total_cost"] == pytest.approx(49.35)


@pytest.mark.asyncio
async def test_trip_validation_errors(client, trip_setup):
    vehicle, employee = trip_setup
    resp = await client.post("/api/trips/", json=_trip_payload(
        vehicle["id"], employee["id"], date_end="2024-01-03T07:00:00",
    ))
    assert resp.status_code == 400

    resp = await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"], distance_km=-5))
    assert resp.status_code == 400

    resp = await client.post("/api/trips/", json=_trip_payload(999, employee["id"]))
    assert resp.status_code == 400

    resp = await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"]))
    assert resp.status_code == 201
    resp = await client.post("/api/trips/", json=_trip_payload(
        vehicle["id"], employee["id"], date_start="2024-01-03T12:00:00", date_end="2024-01-03T20:00:00",
    ))
    assert resp.status_code == 400
    assert "kolízia" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_preview_warns_on_missing_price(client, trip_setup):
    vehicle, employee = trip_setup
    resp = await client.post("/api/trips/preview", json=_trip_payload(
        vehicle["id"], employee["id"], date_start="2024-02-03T08:00:00", date_end="2024-02-03T16:00:00",
    ))
    assert resp.status_code == 200
    report = resp.json()
    assert report["calculation"]["fuel_cost"] == 0
    assert report["warnings"][0]["code"] == "MISSING_FUEL_PRICE"

    resp = await client.get("/api/trips/")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_settlement_lifecycle(client, trip_setup):
    vehicle, employee = trip_setup
    trip_ids = []
    for day in ("03", "04"):
        resp = await client.post("/api/trips/", json=_trip_payload(
            vehicle["id"], employee["id"],
            date_start=f"2024-01-{day}T08:00:00", date_end=f"2024-01-{day}T16:00:00",
        ))
        assert resp.status_code == 201
        trip_ids.append(resp.json()["id"])

    resp = await client.post("/api/settlements/", json={"name": "Január 2024", "trip_ids": trip_ids})
    assert resp.status_code == 201
    settlement = resp.json()
    assert settlement["status"] == "draft"
    assert sorted(settlement["trip_ids"]) == sorted(trip_ids)
    assert settlement["total_amount"] == pytest.approx(98.70)

    resp = await client.get(f"/api/trips/{trip_ids[0]}")
    assert resp.json()["is_settled"] is True
    assert resp.json()["settlement_id"] == settlement["id"]

    # Vyúčtovaná cesta je uzamknutá / Settled trip is locked
    resp = await client.put(f"/api/trips/{trip_ids[0]}", json={"purpose": "Iné"})
    assert resp.status_code == 409
    resp = await client.post("/api/settlements/", json={"name": "Duplicitné", "trip_ids": [trip_ids[0]]})
    assert resp.status_code == 409
    resp = await client.get("/api/settlements/")
    assert len(resp.json()) == 1

    resp = await client.get(f"/api/settlements/{settlement['id']}/breakdown")
    assert resp.status_code == 200
    assert len(resp.json()["per_trip_breakdowns"]) == 2

    resp = await client.get(f"/api/exports/settlements/{settlement['id']}", params={"format": "csv"})
    assert resp.status_code == 200
    assert "Bratislava ➝ Košice" in resp.content.decode("utf-8")

    resp = await client.get(f"/api/exports/settlements/{settlement['id']}")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats")

    resp = await client.put(f"/api/settlements/{settlement['id']}/status", json={"status": "approved"})
    assert resp.status_code == 200
    resp = await client.delete(f"/api/settlements/{settlement['id']}")
    assert resp.status_code == 409

    resp = await client.put(f"/api/settlements/{settlement['id']}/status", json={"status": "draft"})
    resp = await client.delete(f"/api/settlements/{settlement['id']}")
    assert resp.status_code == 204

    resp = await client.get("/api/trips/", params={"is_settled": False})
    assert len(resp.json()) == 2
    assert all(t["settlement_id"] is None for t in resp.json())

    resp = await client.get("/api/audit/", params={"entity_type": "settlement"})
    assert [item["action"] for item in resp.json()["items"]] == ["DELETE", "STATUS", "STATUS", "CREATE"]


@pytest.mark.asyncio
async def test_settlement_unknown_trip(client):
    resp = await client.post("/api/settlements/", json={"name": "Prázdne", "trip_ids": [404]})
    assert resp.status_code == 409
    resp = await client.get("/api/settlements/")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_dashboard(client, trip_setup):
    vehicle, employee = trip_setup
    project = (await client.post("/api/projects/", json={"code": "P-01", "name": "Alfa"})).json()
    await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"], project_id=project["id"]))

    resp = await client.get("/api/dashboard/")
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["trips_count"] == 1
    assert stats["total_km"] == 120
    assert stats["unsettled_cost"] == pytest.approx(49.35)
    assert stats["settled_cost"] == 0
    assert stats["top_projects"][0]["key"] == "Alfa"


@pytest.mark.asyncio
async def test_fuel_price_import(client, monkeypatch):
    payload = {
        "id": ["sp0207ts_tyz", "sp0207ts_ukaz"],
        "size": [1, 2],
        "dimension": {
            "sp0207ts_tyz": {"category": {"index": {"202401": 0}}},
            "sp0207ts_ukaz": {"category": {
                "index": {"FR02011": 0, "FR02012": 1},
                "label": {"FR02011": "Benzín 95", "FR02012": "Motorová nafta"},
            }},
        },
        "value": [1.65, 1.45],
    }

    async def fake_fetch(week_codes):
        return payload

    monkeypatch.setattr(StatOfficeService, "fetch_dataset", staticmethod(fake_fetch))
    resp = await client.post("/api/fuel-prices/import", params={"weeks": 2})
    assert resp.status_code == 200
    assert resp.json()["created"] == 1

    resp = await client.post("/api/fuel-prices/import", params={"weeks": 2})
    assert resp.json() == {"created": 0, "updated": 0, "weeks": resp.json()["weeks"]}

    prices = (await client.get("/api/fuel-prices/")).json()
    assert prices[0]["valid_to"] == "2024-01-07T23:59:59.999"
    assert prices[0]["price_diesel"] == 1.45


@pytest.mark.asyncio
async def test_fuel_price_import_upstream_error(client, monkeypatch):
    async def failing_fetch(week_codes):
        raise StatOfficeError("Statistical office API error: 503")

    monkeypatch.setattr(StatOfficeService, "fetch_dataset", staticmethod(failing_fetch))
    resp = await client.post("/api/fuel-prices/import")
    assert resp.status_code == 502


@pytest.mark.asyncio
async def test_stored_trip_matches_preview(client, trip_setup):
    """Uložené hodnoty sa nezaokrúhľujú / Stored values are not rounded."""
    _, employee = trip_setup
    vehicle = await _vehicle(client, license_plate="BA999ZZ", consumption=6.555)
    assert vehicle["consumption"] == 6.555
    payload = _trip_payload(
        vehicle["id"], employee["id"],
        distance_km=120.25,
        odometer_start=10000.125,
        odometer_end=10120.375,
        expenses=[{"expense_type": "parking", "amount": 1.005}],
    )

    preview = (await client.post("/api/trips/preview", json=payload)).json()
    resp = await client.post("/api/trips/", json=payload)
    assert resp.status_code == 201
    trip = resp.json()
    assert trip["distance_km"] == 120.25
    assert trip["expenses"][0]["amount"] == 1.005

    stored = (await client.get(f"/api/trips/{trip['id']}/calculation")).json()
    assert stored["calculation"] == preview["calculation"]
    assert stored["calculation"]["other_expenses_cost"] == 1.005


@pytest.mark.asyncio
async def test_update_rejects_explicit_null(client, trip_setup):
    vehicle, employee = trip_setup
    trip = (await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"]))).json()

    resp = await client.put(f"/api/trips/{trip['id']}", json={"purpose": None})
    assert resp.status_code == 422
    resp = await client.put(f"/api/trips/{trip['id']}", json={"date_start": None})
    assert resp.status_code == 422
    resp = await client.put(f"/api/trips/{trip['id']}", json={"notes": None, "project_id": None})
    assert resp.status_code == 200

    price = (await client.get("/api/fuel-prices/")).json()[0]
    resp = await client.put(f"/api/fuel-prices/{price['id']}", json={"valid_from": None})
    assert resp.status_code == 422
    resp = await client.put(f"/api/fuel-prices/{price['id']}", json={"note": None})
    assert resp.status_code == 200

    resp = await client.put(f"/api/vehicles/{vehicle['id']}", json={"consumption": None})
    assert resp.status_code == 422
    resp = await client.put(f"/api/employees/{employee['id']}", json={"name": None})
    assert resp.status_code == 422
    resp = await client.put("/api/settings/", json={"meal_rate_low": None})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_settlement_write_failure_rolls_back(client, trip_setup):
    """Zlyhanie zápisu druhej cesty vráti prvú / A failed write on the second trip restores the first."""
    vehicle, employee = trip_setup
    trip_ids = []
    for day in ("03", "04"):
        resp = await client.post("/api/trips/", json=_trip_payload(
            vehicle["id"], employee["id"],
            date_start=f"2024-01-{day}T08:00:00", date_end=f"2024-01-{day}T16:00:00",
        ))
        trip_ids.append(resp.json()["id"])
    failing_id = trip_ids[1]

    def fail_on_settle(mapper, connection, target):
        if target.id == failing_id and target.is_settled:
            raise RuntimeError("disk I/O error")

    event.listen(Trip, "before_update", fail_on_settle)
    try:
        resp = await client.post("/api/settlements/", json={"name": "Január 2024", "trip_ids": trip_ids})
    finally:
        event.remove(Trip, "before_update", fail_on_settle)

    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail["failed_trip_id"] == failing_id
    assert "unreconciled_trip_ids" not in detail

    trips = (await client.get("/api/trips/")).json()
    assert all(t["is_settled"] is False and t["settlement_id"] is None for t in trips)
    assert (await client.get("/api/settlements/")).json() == []

    resp = await client.post("/api/settlements/", json={"name": "Január 2024", "trip_ids": trip_ids})
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_settlement_xlsx_sheet_title_sanitized(client, trip_setup):
    vehicle, employee = trip_setup
    trip = (await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"]))).json()
    settlement = (await client.post("/api/settlements/", json={
        "name": "Január/Február 2024", "trip_ids": [trip["id"]],
    })).json()

    resp = await client.get(f"/api/exports/settlements/{settlement['id']}", params={"format": "xlsx"})
    assert resp.status_code == 200
    wb = load_workbook(io.BytesIO(resp.content))
    assert wb.active.title == "Január_Február 2024"


@pytest.mark.asyncio
async def test_audit_history(client, trip_setup):
    vehicle, employee = trip_setup
    trip = (await client.post("/api/trips/", json=_trip_payload(vehicle["id"], employee["id"]))).json()
    settlement = (await client.post("/api/settlements/", json={"name": "Január", "trip_ids": [trip["id"]]})).json()

    resp = await client.get(f"/api/audit/settlement/{settlement['id']}")
    assert resp.status_code == 200
    history = resp.json()
    assert [h["action"] for h in history] == ["CREATE"]
    assert history[0]["changes"]["trip_ids"] == [trip["id"]]
    assert history[0]["changes"]["total_amount"] == pytest.approx(49.35)

    resp = await client.get("/api/audit/", params={"entity_type": "trip", "action": "CREATE"})
    page = resp.json()
    assert page["total"] == 1
    assert page["items"][0]["changes"] == {"purpose": "Stretnutie so zákazníkom"}

    resp = await client.get("/api/audit/", params={"date_from": "2999-01-01"})
    assert resp.json() == {"total": 0, "items": []}
    resp = await client.get("/api/audit/", params={"action": "RENAME"})
    assert resp.status_code == 422
    resp = await client.get("/api/audit/vehicle/1")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_project_delete_blocked_by_settled_trip(client, trip_setup):
    vehicle, employee = trip_setup
    settled_project = (await client.post("/api/projects/", json={"code": "P-01", "name": "Alfa"})).json()
    free_project = (await client.post("/api/projects/", json={"code": "P-02", "name": "Beta"})).json()
    settled_trip = (await client.post("/api/trips/", json=_trip_payload(
        vehicle["id"], employee["id"], project_id=settled_project["id"],
    ))).json()
    open_trip = (await client.post("/api/trips/", json=_trip_payload(
        vehicle["id"], employee["id"], project_id=free_project["id"],
        date_start="2024-01-04T08:00:00", date_end="2024-01-04T16:00:00",
    ))).json()
    await client.post("/api/settlements/", json={"name": "Január", "trip_ids": [settled_trip["id"]]})

    resp = await client.delete(f"/api/projects/{settled_project['id']}")
    assert resp.status_code == 409
    resp = await client.get(f"/api/trips/{settled_trip['id']}")
    assert resp.json()["project_id"] == settled_project["id"]

    resp = await client.delete(f"/api/projects/{free_project['id']}")
    assert resp.status_code == 204
    resp = await client.get(f"/api/trips/{open_trip['id']}")
    assert resp.json()["project_id"] is None


@pytest.mark.asyncio
async def test_fuel_price_import_malformed_dataset(client, monkeypatch):
    async def truncated_fetch(week_codes):
        return {"value": [1.0]}

    monkeypatch.setattr(StatOfficeService, "fetch_dataset", staticmethod(truncated_fetch))
    resp = await client.post("/api/fuel-prices/import")
    assert resp.status_code == 502
    assert (await client.get("/api/fuel-prices/")).json() == []
