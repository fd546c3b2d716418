"""Routy Prehľad / Dashboard API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.config import settings
from travel_costs.database import get_db
from travel_costs.models.trip import Trip
from travel_costs.schemas.calculation import DashboardStats
from travel_costs.services.reference_data import (
    load_allowance_settings,
    load_fuel_prices,
    load_project_names,
    load_vehicle_lookup,
)
from travel_costs.services.settlement_aggregator import SettlementAggregator

router = APIRouter()


@router.get("/", response_model=DashboardStats)
async def get_dashboard(
    date_from: str | None = Query(default=None, description="YYYY-MM-DD"),
    date_to: str | None = Query(default=None, description="YYYY-MM-DD"),
    top_n: int = Query(default=settings.DASHBOARD_TOP_PROJECTS, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    """Súhrnné náklady a top projekty / Cost totals and top projects."""
    query = select(Trip)
    # ISO reťazce sa dajú porovnávať lexikograficky / ISO strings compare lexicographically
    if date_from:
        query = query.where(Trip.date_start >= date_from)
    if date_to:
        query = query.where(Trip.date_start <= f"{date_to}T23:59:59.999")
    trips = (await db.execute(query)).scalars().all()

    return SettlementAggregator.dashboard(
        trips,
        await load_vehicle_lookup(db),
        await load_project_names(db),
        await load_allowance_settings(db),
        await load_fuel_prices(db),
        top_n=top_n,
    )
