"""Routy Pracovné cesty / Trip API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.exceptions import TripValidationError
from travel_costs.models.audit import AuditAction, AuditEntity
from travel_costs.models.employee import Employee
from travel_costs.models.project import Project
from travel_costs.models.trip import Trip
from travel_costs.models.trip_expense import TripExpense
from travel_costs.models.trip_waypoint import TripWaypoint
from travel_costs.models.vehicle import Vehicle
from travel_costs.schemas.calculation import TripCostReport
from travel_costs.schemas.trip import TripCreate, TripRead, TripUpdate
from travel_costs.services.reference_data import load_allowance_settings, load_fuel_prices
from travel_costs.services.trip_cost_calculator import TripCostCalculator
from travel_costs.services.trip_validation import TripValidationService
from travel_costs.utils.audit import log_audit

logger = logging.getLogger(__name__)

router = APIRouter()

# Stĺpce cesty bez vnorených zoznamov / Trip columns without nested lists
TRIP_FIELDS = (
    "vehicle_id", "employee_id", "project_id", "date_start", "date_end",
    "origin", "origin_country", "destination", "destination_country",
    "odometer_start", "odometer_end", "distance_km", "purpose", "notes",
)


async def _check_references(db: AsyncSession, candidate: dict) -> None:
    """Odkazované záznamy musia existovať / Referenced records must exist."""
    if candidate.get("vehicle_id") is None or not await db.get(Vehicle, candidate["vehicle_id"]):
        raise HTTPException(status_code=400, detail=f"Vehicle {candidate.get('vehicle_id')} not found")
    if candidate.get("employee_id") is None or not await db.get(Employee, candidate["employee_id"]):
        raise HTTPException(status_code=400, detail=f"Employee {candidate.get('employee_id')} not found")
    if candidate.get("project_id") is not None and not await db.get(Project, candidate["project_id"]):
        raise HTTPException(status_code=400, detail=f"Project {candidate['project_id']} not found")


async def _validate(db: AsyncSession, candidate: dict) -> None:
    """Kontrola voči ostatným cestám vozidla / Check against the vehicle's other trips."""
    result = await db.execute(select(Trip).where(Trip.vehicle_id == candidate["vehicle_id"]))
    try:
        TripValidationService.validate(candidate, result.scalars().all())
    except TripValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _waypoints(items) -> list[TripWaypoint]:
    return [
        TripWaypoint(sequence_order=i, location=wp.location, country=wp.country)
        for i, wp in enumerate(items)
    ]


def _expenses(items) -> list[TripExpense]:
    return [TripExpense(**e.model_dump()) for e in items]


async def _get_trip(db: AsyncSession, trip_id: int) -> Trip:
    trip = await db.get(Trip, trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.get("/", response_model=list[TripRead])
async def list_trips(
    vehicle_id: int | None = None,
    employee_id: int | None = None,
    project_id: int | None = None,
    is_settled: bool | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Zoznam ciest od najnovšej / List trips, newest first."""
    query = select(Trip).order_by(Trip.date_start.desc())
    if vehicle_id is not None:
        query = query.where(Trip.vehicle_id == vehicle_id)
    if employee_id is not None:
        query = query.where(Trip.employee_id == employee_id)
    if project_id is not None:
        query = query.where(Trip.project_id == project_id)
    if is_settled is not None:
        query = query.where(Trip.is_settled.is_(is_settled))
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/preview", response_model=TripCostReport)
async def preview_trip(data: TripCreate, db: AsyncSession = Depends(get_db)):
    """
    Náhľad výpočtu bez uloženia / Cost preview without saving.
    Chýbajúce vozidlo alebo cena paliva sa vráti ako varovanie / Missing data is reported as warnings.
    """
    report = TripCostCalculator.report(
        data,
        await db.get(Vehicle, data.vehicle_id),
        await load_allowance_settings(db),
        await load_fuel_prices(db),
    )
    for warning in report.warnings:
        logger.warning("Trip preview: %s", warning.message)
    return report


@router.get("/{trip_id}", response_model=TripRead)
async def get_trip(trip_id: int, db: AsyncSession = Depends(get_db)):
    """Detail cesty / Get trip detail."""
    return await _get_trip(db, trip_id)


@router.get("/{trip_id}/calculation", response_model=TripCostReport)
async def get_trip_calculation(trip_id: int, db: AsyncSession = Depends(get_db)):
    """Rozpis nákladov cesty / Trip cost breakdown with warnings."""
    trip = await _get_trip(db, trip_id)
    report = TripCostCalculator.report(
        trip,
        await db.get(Vehicle, trip.vehicle_id),
        await load_allowance_settings(db),
        await load_fuel_prices(db),
    )
    for warning in report.warnings:
        logger.warning("Trip %d: %s", trip_id, warning.message)
    return report


@router.post("/", response_model=TripRead, status_code=201)
async def create_trip(data: TripCreate, db: AsyncSession = Depends(get_db)):
    """Vytvoriť cestu / Create trip."""
    candidate = data.model_dump(include=set(TRIP_FIELDS))
    await _check_references(db, candidate)
    await _validate(db, candidate)

    trip = Trip(
        **candidate,
        waypoints=_waypoints(data.waypoints),
        expenses=_expenses(data.expenses),
    )
    db.add(trip)
    await db.flush()
    log_audit(db, AuditEntity.TRIP, trip.id, AuditAction.CREATE, {"purpose": trip.purpose})
    await db.refresh(trip)
    return trip


@router.put("/{trip_id}", response_model=TripRead)
async def update_trip(trip_id: int, data: TripUpdate, db: AsyncSession = Depends(get_db)):
    """Upraviť cestu / Update trip (vyúčtovaná cesta je uzamknutá / settled trips are locked)."""
    trip = await _get_trip(db, trip_id)
    if trip.is_settled:
        raise HTTPException(status_code=409, detail="Trip is settled and cannot be modified")

    updates = data.model_dump(exclude_unset=True, include=set(TRIP_FIELDS))
    candidate = {field: getattr(trip, field) for field in TRIP_FIELDS}
    candidate.update(updates)
    candidate["id"] = trip.id
    await _check_references(db, candidate)
    await _validate(db, candidate)

    for key, value in updates.items():
        setattr(trip, key, value)
    if data.waypoints is not None:
        trip.waypoints = _waypoints(data.waypoints)
    if data.expenses is not None:
        trip.expenses = _expenses(data.expenses)

    log_audit(db, AuditEntity.TRIP, trip.id, AuditAction.UPDATE, updates)
    await db.flush()
    await db.refresh(trip)
    return trip


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(trip_id: int, db: AsyncSession = Depends(get_db)):
    """Zmazať cestu / Delete trip."""
    trip = await _get_trip(db, trip_id)
    if trip.is_settled:
        raise HTTPException(status_code=409, detail="Trip is settled and cannot be deleted")
    log_audit(db, AuditEntity.TRIP, trip.id, AuditAction.DELETE)
    await db.delete(trip)
