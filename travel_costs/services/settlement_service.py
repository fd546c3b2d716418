"""
Služba vyúčtovania / Settlement transition service.

Vytvorenie vyúčtovania prepne všetky jeho cesty is_settled False -> True,
zmazanie ich vráti späť. Zmeny sa plánujú vopred ako zoznam mutácií a
aplikujú sa naraz; pri chybe sa už aplikované mutácie kompenzujú.
Creating a settlement flips all its trips is_settled False -> True, deleting
it flips them back. Mutations are planned up front and applied as one unit;
on failure the applied ones are compensated in reverse order.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from travel_costs.exceptions import (
    SettlementConflictError,
    SettlementPartialFailure,
    SettlementTransitionError,
)
from travel_costs.utils.coerce import get_field

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripFlagMutation:
    """Zmena príznaku vyúčtovania jednej cesty / Settlement flag change of one trip."""
    trip_id: int
    is_settled: bool
    settlement_id: int | None
    previous_is_settled: bool
    previous_settlement_id: int | None

    def inverse(self) -> "TripFlagMutation":
        return TripFlagMutation(
            trip_id=self.trip_id,
            is_settled=self.previous_is_settled,
            settlement_id=self.previous_settlement_id,
            previous_is_settled=self.is_settled,
            previous_settlement_id=self.settlement_id,
        )


MutationWriter = Callable[[TripFlagMutation], Awaitable[None]]


class SettlementTransition:
    """Naplánovaný prechod viacerých ciest / Planned multi-trip transition."""

    def __init__(self, mutations: list[TripFlagMutation]):
        self.mutations = mutations

    @property
    def trip_ids(self) -> list[int]:
        return [m.trip_id for m in self.mutations]

    async def apply(self, writer: MutationWriter) -> None:
        """
        Aplikovať mutácie v poradí / Apply mutations in order.

        SettlementTransitionError: zlyhanie, všetko vrátené / failed, fully compensated.
        SettlementPartialFailure: zlyhanie aj kompenzácie / compensation failed too.
        """
        applied: list[TripFlagMutation] = []
        for mutation in self.mutations:
            try:
                await writer(mutation)
            except Exception as exc:
                log.warning("Settlement transition failed on trip %s: %s", mutation.trip_id, exc)
                unreconciled = await self._compensate(applied, writer)
                if unreconciled:
                    raise SettlementPartialFailure(
                        f"Trip {mutation.trip_id} failed and {len(unreconciled)} trip(s) "
                        f"could not be restored, manual reconciliation required",
                        applied_trip_ids=[m.trip_id for m in applied],
                        failed_trip_id=mutation.trip_id,
                        unreconciled_trip_ids=unreconciled,
                    ) from exc
                raise SettlementTransitionError(
                    f"Trip {mutation.trip_id} could not be updated, no changes kept",
                    failed_trip_id=mutation.trip_id,
                ) from exc
            applied.append(mutation)

    @staticmethod
    async def _compensate(applied: list[TripFlagMutation], writer: MutationWriter) -> list[int]:
        """Vrátiť aplikované mutácie / Undo applied mutations, return ids that failed."""
        unreconciled: list[int] = []
        for mutation in reversed(applied):
            try:
                await writer(mutation.inverse())
            except Exception:
                log.exception("Compensation failed for trip %s", mutation.trip_id)
                unreconciled.append(mutation.trip_id)
        return unreconciled


class SettlementService:
    """Plánovanie prechodov vyúčtovania / Settlement transition planning."""

    @staticmethod
    def plan_settle(trips, requested_ids: list[int], settlement_id: int) -> SettlementTransition:
        """
        Naplánovať vyúčtovanie ciest / Plan settling the requested trips.
        Každá cesta musí existovať a byť nevyúčtovaná.
        Every trip must exist and be unsettled.
        """
        by_id = {get_field(t, "id"): t for t in trips}
        unique_ids = list(dict.fromkeys(requested_ids))

        missing = [tid for tid in unique_ids if tid not in by_id]
        if missing:
            raise SettlementConflictError(f"Trips not found: {missing}")

        already = [tid for tid in unique_ids if get_field(by_id[tid], "is_settled")]
        if already:
            raise SettlementConflictError(f"Trips already settled: {already}")

        return SettlementTransition([
            TripFlagMutation(
                trip_id=tid,
                is_settled=True,
                settlement_id=settlement_id,
                previous_is_settled=False,
                previous_settlement_id=get_field(by_id[tid], "settlement_id"),
            )
            for tid in unique_ids
        ])

    @staticmethod
    def plan_release(trips, settlement_id: int) -> SettlementTransition:
        """Naplánovať uvoľnenie ciest pri zmazaní / Plan releasing trips on deletion."""
        return SettlementTransition([
            TripFlagMutation(
                trip_id=get_field(t, "id"),
                is_settled=False,
                settlement_id=None,
                previous_is_settled=bool(get_field(t, "is_settled")),
                previous_settlement_id=get_field(t, "settlement_id", settlement_id),
            )
            for t in trips
        ])
