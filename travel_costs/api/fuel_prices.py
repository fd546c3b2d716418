"""Routy Ceny palív / Fuel price API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.config import settings
from travel_costs.database import get_db
from travel_costs.exceptions import StatOfficeError
from travel_costs.models.fuel_price import FuelPrice
from travel_costs.schemas.fuel_price import (
    FuelPriceCreate,
    FuelPriceImportResult,
    FuelPriceRead,
    FuelPriceUpdate,
)
from travel_costs.services.fuel_price_resolver import FuelPriceResolver
from travel_costs.services.reference_data import load_fuel_prices
from travel_costs.services.stat_office_service import StatOfficeService
from travel_costs.utils.dates import parse_timestamp

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_period(valid_from: str, valid_to: str) -> None:
    if parse_timestamp(valid_from) > parse_timestamp(valid_to):
        raise HTTPException(status_code=400, detail="valid_from must not be after valid_to")


async def _warn_overlaps(db: AsyncSession, entry: FuelPrice) -> None:
    """Prekryv sa iba loguje / Overlaps are logged, not rejected."""
    for a, b in FuelPriceResolver.find_overlaps(await load_fuel_prices(db)):
        if entry in (a, b):
            other = b if a is entry else a
            logger.warning("Fuel price %s overlaps %s, first record in id order wins", entry, other)


@router.get("/", response_model=list[FuelPriceRead])
async def list_fuel_prices(db: AsyncSession = Depends(get_db)):
    """Ceny palív zoradené od najnovších / Fuel prices sorted by valid_from DESC."""
    result = await db.execute(select(FuelPrice).order_by(FuelPrice.valid_from.desc()))
    return result.scalars().all()


@router.get("/{entry_id}", response_model=FuelPriceRead)
async def get_fuel_price(entry_id: int, db: AsyncSession = Depends(get_db)):
    entry = await db.get(FuelPrice, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Fuel price entry not found")
    return entry


@router.post("/", response_model=FuelPriceRead, status_code=201)
async def create_fuel_price(data: FuelPriceCreate, db: AsyncSession = Depends(get_db)):
    """Vytvoriť cenu paliva / Create a fuel price entry."""
    _check_period(data.valid_from, data.valid_to)
    entry = FuelPrice(**data.model_dump())
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    await _warn_overlaps(db, entry)
    return entry


@router.post("/import", response_model=FuelPriceImportResult)
async def import_fuel_prices(
    weeks: int = Query(default=settings.STAT_OFFICE_WEEKS, ge=1, le=52),
    db: AsyncSession = Depends(get_db),
):
    """Import týždenných cien zo ŠÚ SR / Import weekly prices from the statistical office."""
    try:
        stats, codes = await StatOfficeService.import_weeks(db, weeks)
    except StatOfficeError as exc:
        logger.error("Fuel price import failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return FuelPriceImportResult(created=stats["created"], updated=stats["updated"], weeks=codes)


@router.put("/{entry_id}", response_model=FuelPriceRead)
async def update_fuel_price(entry_id: int, data: FuelPriceUpdate, db: AsyncSession = Depends(get_db)):
    """Upraviť cenu paliva / Update a fuel price entry."""
    entry = await db.get(FuelPrice, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Fuel price entry not found")
    updates = data.model_dump(exclude_unset=True)
    _check_period(updates.get("valid_from") or entry.valid_from, updates.get("valid_to") or entry.valid_to)
    for key, value in updates.items():
        setattr(entry, key, value)
    await db.flush()
    await db.refresh(entry)
    await _warn_overlaps(db, entry)
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_fuel_price(entry_id: int, db: AsyncSession = Depends(get_db)):
    """Zmazať cenu paliva / Delete a fuel price entry."""
    entry = await db.get(FuelPrice, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Fuel price entry not found")
    await db.delete(entry)
