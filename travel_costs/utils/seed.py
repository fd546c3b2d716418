"""
Založenie predvolených nastavení / Default settings seeding.
Pri prvom štarte vytvorí jediný záznam sadzieb z konfigurácie.
Creates the single allowance settings row from config on first startup.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.models.allowance_settings import AllowanceSettings
from travel_costs.services.reference_data import load_allowance_settings

log = logging.getLogger(__name__)


async def seed_allowance_settings(session: AsyncSession) -> None:
    """Vytvoriť nastavenia, ak neexistujú / Create settings if none exist."""
    count = await session.scalar(select(func.count(AllowanceSettings.id)))
    if count:
        log.info("%d allowance settings record(s) present, seed skipped", count)
        return
    current = await load_allowance_settings(session)
    await session.commit()
    log.info("Allowance settings seeded: %r", current)
