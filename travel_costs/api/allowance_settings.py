"""Routy Nastavenia sadzieb / Allowance settings API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.audit import AuditAction, AuditEntity
from travel_costs.schemas.allowance_settings import AllowanceSettingsRead, AllowanceSettingsUpdate
from travel_costs.services.reference_data import load_allowance_settings
from travel_costs.utils.audit import log_audit

router = APIRouter()


@router.get("/", response_model=AllowanceSettingsRead)
async def get_settings(db: AsyncSession = Depends(get_db)):
    """Aktuálne sadzby / Current rates."""
    return await load_allowance_settings(db)


@router.put("/", response_model=AllowanceSettingsRead)
async def update_settings(data: AllowanceSettingsUpdate, db: AsyncSession = Depends(get_db)):
    """Upraviť sadzby / Update rates (platí pre všetky ďalšie výpočty / applies to all later calculations)."""
    current = await load_allowance_settings(db)
    updates = data.model_dump(exclude_unset=True)
    for key, value in updates.items():
        setattr(current, key, value)
    log_audit(db, AuditEntity.ALLOWANCE_SETTINGS, current.id, AuditAction.UPDATE, updates)
    await db.flush()
    await db.refresh(current)
    return current
