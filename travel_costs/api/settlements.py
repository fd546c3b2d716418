"""Routy Vyúčtovania / Settlement API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.exceptions import (
    SettlementConflictError,
    SettlementPartialFailure,
    SettlementTransitionError,
)
from travel_costs.models.audit import AuditAction, AuditEntity
from travel_costs.models.settlement import Settlement, SettlementStatus, SettlementTrip
from travel_costs.models.trip import Trip
from travel_costs.schemas.calculation import SettlementAggregate
from travel_costs.schemas.settlement import SettlementCreate, SettlementRead, SettlementStatusUpdate
from travel_costs.services.reference_data import (
    load_allowance_settings,
    load_fuel_prices,
    load_vehicle_lookup,
)
from travel_costs.services.settlement_aggregator import SettlementAggregator
from travel_costs.services.settlement_service import SettlementService, SettlementTransition, TripFlagMutation
from travel_costs.utils.audit import log_audit
from travel_costs.utils.dates import now_iso

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_settlement(db: AsyncSession, settlement_id: int) -> Settlement:
    settlement = await db.get(Settlement, settlement_id)
    if not settlement:
        raise HTTPException(status_code=404, detail="Settlement not found")
    return settlement


async def _aggregate(db: AsyncSession, trips) -> SettlementAggregate:
    return SettlementAggregator.aggregate(
        trips,
        await load_vehicle_lookup(db),
        await load_allowance_settings(db),
        await load_fuel_prices(db),
    )


def _trip_writer(db: AsyncSession, trips_by_id: dict[int, Trip]):
    """Zápis mutácie do cesty / Writes one mutation onto its trip."""
    async def write(mutation: TripFlagMutation) -> None:
        trip = trips_by_id[mutation.trip_id]
        # Každý zápis vo vlastnom SAVEPOINT, chyba nezruší predchádzajúce zápisy
        # Each write in its own SAVEPOINT so a failed flush leaves earlier writes intact
        async with db.begin_nested():
            trip.is_settled = mutation.is_settled
            trip.settlement_id = mutation.settlement_id
    return write


async def _apply(db: AsyncSession, transition: SettlementTransition, trips_by_id: dict[int, Trip]) -> None:
    """Aplikovať prechod, chyby -> 500 / Apply the transition, failures map to 500."""
    try:
        await transition.apply(_trip_writer(db, trips_by_id))
    except SettlementPartialFailure as exc:
        logger.error(
            "Settlement partial failure, unreconciled trips %s (failed on %s)",
            exc.unreconciled_trip_ids, exc.failed_trip_id,
        )
        raise HTTPException(status_code=500, detail={
            "message": str(exc),
            "failed_trip_id": exc.failed_trip_id,
            "unreconciled_trip_ids": exc.unreconciled_trip_ids,
        }) from exc
    except SettlementTransitionError as exc:
        raise HTTPException(status_code=500, detail={
            "message": str(exc),
            "failed_trip_id": exc.failed_trip_id,
        }) from exc


@router.get("/", response_model=list[SettlementRead])
async def list_settlements(status: SettlementStatus | None = None, db: AsyncSession = Depends(get_db)):
    """Zoznam vyúčtovaní od najnovšieho / List settlements, newest first."""
    query = select(Settlement).order_by(Settlement.id.desc())
    if status is not None:
        query = query.where(Settlement.status == status)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{settlement_id}", response_model=SettlementRead)
async def get_settlement(settlement_id: int, db: AsyncSession = Depends(get_db)):
    return await _get_settlement(db, settlement_id)


@router.get("/{settlement_id}/breakdown", response_model=SettlementAggregate)
async def get_settlement_breakdown(settlement_id: int, db: AsyncSession = Depends(get_db)):
    """
    Rozpis po cestách s aktuálnymi sadzbami / Per-trip breakdown with current rates.
    Uložená total_amount je stav pri vytvorení / Stored total_amount is the snapshot at creation.
    """
    settlement = await _get_settlement(db, settlement_id)
    result = await db.execute(select(Trip).where(Trip.id.in_(settlement.trip_ids)).order_by(Trip.date_start))
    return await _aggregate(db, result.scalars().all())


@router.post("/", response_model=SettlementRead, status_code=201)
async def create_settlement(data: SettlementCreate, db: AsyncSession = Depends(get_db)):
    """
    Vytvoriť vyúčtovanie / Create a settlement.
    Všetky cesty sa označia ako vyúčtované, alebo žiadna / All trips are flagged settled, or none.
    """
    settlement = Settlement(
        date_created=now_iso(),
        name=data.name,
        status=SettlementStatus.DRAFT,
        total_amount=0,
        trip_links=[],
    )
    db.add(settlement)
    await db.flush()

    result = await db.execute(select(Trip).where(Trip.id.in_(data.trip_ids)))
    trips = result.scalars().all()
    try:
        transition = SettlementService.plan_settle(trips, data.trip_ids, settlement.id)
    except SettlementConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    trips_by_id = {t.id: t for t in trips}
    aggregate = await _aggregate(db, [trips_by_id[tid] for tid in transition.trip_ids])
    await _apply(db, transition, trips_by_id)

    settlement.total_amount = aggregate.total_amount
    settlement.trip_links.extend(SettlementTrip(trip_id=tid) for tid in transition.trip_ids)
    log_audit(db, AuditEntity.SETTLEMENT, settlement.id, AuditAction.CREATE, {
        "name": settlement.name,
        "trip_ids": transition.trip_ids,
        "total_amount": aggregate.total_amount,
    })
    await db.flush()
    await db.refresh(settlement)
    logger.info("Settlement %d created with %d trip(s)", settlement.id, len(transition.trip_ids))
    return settlement


@router.put("/{settlement_id}/status", response_model=SettlementRead)
async def update_settlement_status(
    settlement_id: int,
    data: SettlementStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Zmeniť stav (koncept / schválené) / Change status (draft / approved)."""
    settlement = await _get_settlement(db, settlement_id)
    previous = settlement.status
    settlement.status = data.status
    log_audit(db, AuditEntity.SETTLEMENT, settlement.id, AuditAction.STATUS, {"from": previous.value, "to": data.status.value})
    await db.flush()
    await db.refresh(settlement)
    return settlement


@router.delete("/{settlement_id}", status_code=204)
async def delete_settlement(settlement_id: int, db: AsyncSession = Depends(get_db)):
    """
    Zmazať vyúčtovanie / Delete a settlement.
    Cesty sa vrátia do stavu nevyúčtované / Its trips are released back to unsettled.
    """
    settlement = await _get_settlement(db, settlement_id)
    if settlement.status == SettlementStatus.APPROVED:
        raise HTTPException(status_code=409, detail="Approved settlement cannot be deleted")

    result = await db.execute(select(Trip).where(Trip.id.in_(settlement.trip_ids)))
    trips = result.scalars().all()
    transition = SettlementService.plan_release(trips, settlement.id)
    await _apply(db, transition, {t.id: t for t in trips})

    log_audit(db, AuditEntity.SETTLEMENT, settlement.id, AuditAction.DELETE, {"trip_ids": transition.trip_ids})
    await db.delete(settlement)
    logger.info("Settlement %d deleted, %d trip(s) released", settlement_id, len(transition.trip_ids))
