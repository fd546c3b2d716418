"""Routy Export CSV/Excel / Export API routes."""

import io

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.settlement import Settlement
from travel_costs.models.trip import Trip
from travel_costs.services.export_service import SETTLEMENT_FIELDS, ExportService
from travel_costs.services.reference_data import (
    load_allowance_settings,
    load_fuel_prices,
    load_vehicle_lookup,
)
from travel_costs.services.settlement_aggregator import SettlementAggregator

router = APIRouter()


@router.get("/settlements/{settlement_id}")
async def export_settlement(
    settlement_id: int,
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    db: AsyncSession = Depends(get_db),
):
    """Export vyúčtovania do CSV alebo XLSX / Export a settlement to CSV or XLSX."""
    settlement = await db.get(Settlement, settlement_id)
    if not settlement:
        raise HTTPException(status_code=404, detail="Settlement not found")

    result = await db.execute(select(Trip).where(Trip.id.in_(settlement.trip_ids)).order_by(Trip.date_start))
    trips = result.scalars().all()
    aggregate = SettlementAggregator.aggregate(
        trips,
        await load_vehicle_lookup(db),
        await load_allowance_settings(db),
        await load_fuel_prices(db),
    )
    rows = [
        ExportService.trip_row(trip, breakdown.calculation)
        for trip, breakdown in zip(trips, aggregate.per_trip_breakdowns)
    ]

    filename = f"vyuctovanie_{settlement.id}"
    if format == "csv":
        content = ExportService.to_csv(rows, SETTLEMENT_FIELDS)
        media_type = "text/csv; charset=utf-8"
        filename += ".csv"
    else:
        content = ExportService.to_xlsx(rows, SETTLEMENT_FIELDS, sheet_name=settlement.name)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename += ".xlsx"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
