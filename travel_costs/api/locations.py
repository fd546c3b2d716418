"""Routy Uložené miesta / Saved location API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.saved_location import SavedLocation
from travel_costs.schemas.saved_location import SavedLocationCreate, SavedLocationRead, SavedLocationUpdate

router = APIRouter()


@router.get("/", response_model=list[SavedLocationRead])
async def list_locations(db: AsyncSession = Depends(get_db)):
    """Zoznam miest / List saved locations."""
    result = await db.execute(select(SavedLocation).order_by(SavedLocation.name))
    return result.scalars().all()


@router.get("/{location_id}", response_model=SavedLocationRead)
async def get_location(location_id: int, db: AsyncSession = Depends(get_db)):
    location = await db.get(SavedLocation, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location


@router.post("/", response_model=SavedLocationRead, status_code=201)
async def create_location(data: SavedLocationCreate, db: AsyncSession = Depends(get_db)):
    location = SavedLocation(**data.model_dump())
    db.add(location)
    await db.flush()
    await db.refresh(location)
    return location


@router.put("/{location_id}", response_model=SavedLocationRead)
async def update_location(location_id: int, data: SavedLocationUpdate, db: AsyncSession = Depends(get_db)):
    location = await db.get(SavedLocation, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(location, key, value)
    await db.flush()
    await db.refresh(location)
    return location


@router.delete("/{location_id}", status_code=204)
async def delete_location(location_id: int, db: AsyncSession = Depends(get_db)):
    location = await db.get(SavedLocation, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    await db.delete(location)
