"""Routy Vozidlá / Vehicle API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.trip import Trip
from travel_costs.models.vehicle import Vehicle
from travel_costs.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate

router = APIRouter()


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(
    active_only: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """Zoznam vozidiel / List vehicles."""
    query = select(Vehicle).order_by(Vehicle.name)
    if active_only:
        query = query.where(Vehicle.is_active.is_(True))
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Detail vozidla / Get vehicle detail."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(data: VehicleCreate, db: AsyncSession = Depends(get_db)):
    """Vytvoriť vozidlo / Create vehicle."""
    vehicle = Vehicle(**data.model_dump())
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(vehicle_id: int, data: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    """Upraviť vozidlo / Update vehicle."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(vehicle, key, value)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Zmazať vozidlo / Delete vehicle (iba bez ciest / only without trips)."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    used = await db.scalar(select(func.count(Trip.id)).where(Trip.vehicle_id == vehicle_id))
    if used:
        raise HTTPException(status_code=409, detail=f"Vehicle is used by {used} trip(s), deactivate it instead")
    await db.delete(vehicle)
