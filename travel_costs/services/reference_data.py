"""
Načítanie snímky referenčných dát / Reference data snapshot loading.
Volajúci si pred každým výpočtom načíta aktuálne nastavenia, ceny a vozidlá.
Callers load fresh settings, prices and vehicles before each calculation.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.config import settings
from travel_costs.models.allowance_settings import AllowanceSettings
from travel_costs.models.fuel_price import FuelPrice
from travel_costs.models.project import Project
from travel_costs.models.vehicle import Vehicle


async def load_allowance_settings(db: AsyncSession) -> AllowanceSettings:
    """Aktívne nastavenia sadzieb / Active allowance settings.
    Ak chýbajú, založia sa z konfigurácie / Seeded from config when missing.
    """
    current = await db.scalar(select(AllowanceSettings).order_by(AllowanceSettings.id).limit(1))
    if current is None:
        current = AllowanceSettings(
            meal_rate_low=settings.DEFAULT_MEAL_RATE_LOW,
            meal_rate_mid=settings.DEFAULT_MEAL_RATE_MID,
            meal_rate_high=settings.DEFAULT_MEAL_RATE_HIGH,
            amortization_rate=settings.DEFAULT_AMORTIZATION_RATE,
        )
        db.add(current)
        await db.flush()
        await db.refresh(current)
    return current


async def load_fuel_prices(db: AsyncSession) -> list[FuelPrice]:
    """Ceny palív v poradí importu (id) / Fuel prices in import order (id)."""
    result = await db.execute(select(FuelPrice).order_by(FuelPrice.id))
    return list(result.scalars().all())


async def load_vehicle_lookup(db: AsyncSession) -> dict[int, Vehicle]:
    """Vozidlá podľa id / Vehicles by id."""
    result = await db.execute(select(Vehicle))
    return {v.id: v for v in result.scalars().all()}


async def load_project_names(db: AsyncSession) -> dict[int, str]:
    """Názvy projektov podľa id / Project names by id."""
    result = await db.execute(select(Project.id, Project.name))
    return {pid: name for pid, name in result.all()}
