"""
Služba súčtov vyúčtovania / Settlement aggregation service.
Sčíta výpočty jednotlivých ciest pre vyúčtovania a dashboard.
Folds per-trip calculations into batch totals for settlements and the dashboard.
"""

from collections.abc import Callable, Iterable, Mapping

from travel_costs.schemas.calculation import DashboardStats, GroupTotal, SettlementAggregate, TripBreakdown
from travel_costs.services.trip_cost_calculator import TripCostCalculator
from travel_costs.utils.coerce import get_field, to_float

NO_PROJECT_LABEL = "Bez projektu"


class SettlementAggregator:
    """Súčty nákladov za dávku ciest / Cost totals over a batch of trips.

    Predpokladá, že žiadna cesta nie je vo viacerých vyúčtovaniach.
    Assumes no trip belongs to more than one settlement.
    """

    @staticmethod
    def _vehicle_for(trip, vehicle_lookup: Mapping | None):
        if not vehicle_lookup:
            return None
        return vehicle_lookup.get(get_field(trip, "vehicle_id"))

    @classmethod
    def aggregate(cls, trips, vehicle_lookup, settings, fuel_prices) -> SettlementAggregate:
        """Celková suma a rozpis po cestách / Total amount and per-trip breakdowns."""
        total_amount = 0.0
        breakdowns: list[TripBreakdown] = []
        for trip in trips:
            calculation = TripCostCalculator.calculate(
                trip, cls._vehicle_for(trip, vehicle_lookup), settings, fuel_prices
            )
            total_amount += calculation.total_cost
            breakdowns.append(TripBreakdown(trip_id=get_field(trip, "id"), calculation=calculation))
        return SettlementAggregate(total_amount=total_amount, per_trip_breakdowns=breakdowns)

    @staticmethod
    def group_totals(pairs: Iterable[tuple], limit: int | None = None) -> list[GroupTotal]:
        """Zoskupiť (kľúč, suma) a zoradiť zostupne / Group (key, amount) pairs, sorted descending."""
        sums: dict = {}
        for key, amount in pairs:
            sums[key] = sums.get(key, 0.0) + amount
        ordered = sorted(sums.items(), key=lambda kv: kv[1], reverse=True)
        if limit is not None:
            ordered = ordered[:limit]
        return [GroupTotal(key=key, total=total) for key, total in ordered]

    @classmethod
    def group_and_sum(
        cls,
        trips,
        key_fn: Callable,
        vehicle_lookup,
        settings,
        fuel_prices,
        limit: int | None = None,
    ) -> list[GroupTotal]:
        """Súčet total_cost podľa ľubovoľného kľúča / Sum total_cost per arbitrary key (top-N)."""
        pairs = (
            (
                key_fn(trip),
                TripCostCalculator.calculate(
                    trip, cls._vehicle_for(trip, vehicle_lookup), settings, fuel_prices
                ).total_cost,
            )
            for trip in trips
        )
        return cls.group_totals(pairs, limit)

    @classmethod
    def dashboard(
        cls,
        trips,
        vehicle_lookup,
        project_names: Mapping,
        settings,
        fuel_prices,
        top_n: int = 5,
    ) -> DashboardStats:
        """Prehľad nákladov / Cost overview (vyúčtované, otvorené, top projekty)."""
        total_cost = 0.0
        settled_cost = 0.0
        unsettled_cost = 0.0
        total_km = 0.0
        project_pairs = []

        trips = list(trips)
        for trip in trips:
            cost = TripCostCalculator.calculate(
                trip, cls._vehicle_for(trip, vehicle_lookup), settings, fuel_prices
            ).total_cost
            total_cost += cost
            total_km += to_float(get_field(trip, "distance_km"))
            if get_field(trip, "is_settled"):
                settled_cost += cost
            else:
                unsettled_cost += cost
            project_name = project_names.get(get_field(trip, "project_id")) or NO_PROJECT_LABEL
            project_pairs.append((project_name, cost))

        return DashboardStats(
            total_cost=total_cost,
            settled_cost=settled_cost,
            unsettled_cost=unsettled_cost,
            total_km=total_km,
            trips_count=len(trips),
            top_projects=cls.group_totals(project_pairs, top_n),
        )
