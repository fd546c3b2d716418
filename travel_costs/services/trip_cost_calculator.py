"""
Služba výpočtu nákladov cesty / Trip cost calculation service.
Stravné, palivo, amortizácia súkromného vozidla a vedľajšie výdavky.
Meal allowance, fuel, private-vehicle amortization and ancillary expenses.

Čisté funkcie nad snímkou dát: bez stavu, bez I/O, bez zaokrúhľovania.
Pure functions over a data snapshot: no state, no I/O, no rounding.
"""

from travel_costs.models.vehicle import OwnershipType
from travel_costs.schemas.calculation import CostWarning, TripCalculation, TripCostReport, WarningCode
from travel_costs.services.fuel_price_resolver import FuelPriceResolver
from travel_costs.utils.coerce import enum_value, get_field, to_float
from travel_costs.utils.dates import parse_timestamp

# Hranice pásiem stravného v hodinách / Meal allowance tier bounds (hours)
MEAL_TIER_LOW_FROM = 5.0
MEAL_TIER_MID_FROM = 12.0
MEAL_TIER_MID_TO = 18.0


class TripCostCalculator:
    """Výpočet nákladov cesty / Trip cost calculation."""

    @staticmethod
    def duration_hours(date_start, date_end) -> float:
        """Trvanie v hodinách, bez zaokrúhlenia / Duration in hours, unrounded.
        Záporné trvanie sa nekontroluje / Negative durations pass through.
        """
        start = parse_timestamp(date_start)
        end = parse_timestamp(date_end)
        if start is None or end is None:
            return 0.0
        return (end - start).total_seconds() / 3600

    @staticmethod
    def meal_allowance(duration_hours: float, settings) -> float:
        """
        Stravné podľa trvania / Meal allowance by duration.
        < 5 h -> 0, [5, 12) -> nízka, [12, 18] -> stredná, > 18 -> vysoká sadzba.
        """
        if MEAL_TIER_LOW_FROM <= duration_hours < MEAL_TIER_MID_FROM:
            return to_float(get_field(settings, "meal_rate_low"))
        if MEAL_TIER_MID_FROM <= duration_hours <= MEAL_TIER_MID_TO:
            return to_float(get_field(settings, "meal_rate_mid"))
        if duration_hours > MEAL_TIER_MID_TO:
            return to_float(get_field(settings, "meal_rate_high"))
        return 0.0

    @staticmethod
    def fuel_cost(trip, vehicle, fuel_prices) -> float:
        """
        Náklady na palivo / Fuel cost.
        Formula: (distance_km / 100) * consumption * price.
        Cena podľa obdobia platného k date_start; bez záznamu je cena 0.
        Price from the period valid at date_start; 0 when no period matches.
        """
        if vehicle is None:
            return 0.0
        record = FuelPriceResolver.resolve(get_field(trip, "date_start"), fuel_prices)
        price = FuelPriceResolver.price_for_type(record, get_field(vehicle, "fuel_type"))
        distance_km = to_float(get_field(trip, "distance_km"))
        return (distance_km / 100) * to_float(get_field(vehicle, "consumption")) * price

    @staticmethod
    def amortization_cost(trip, vehicle, settings) -> float:
        """Základná náhrada, iba súkromné vozidlo / Amortization, private vehicles only."""
        if vehicle is None:
            return 0.0
        if enum_value(get_field(vehicle, "ownership_type")) != OwnershipType.PRIVATE.value:
            return 0.0
        return to_float(get_field(trip, "distance_km")) * to_float(get_field(settings, "amortization_rate"))

    @staticmethod
    def other_expenses_cost(trip) -> float:
        """Súčet vedľajších výdavkov / Sum of ancillary expenses."""
        expenses = get_field(trip, "expenses") or []
        return sum((to_float(get_field(e, "amount")) for e in expenses), 0.0)

    @classmethod
    def calculate(cls, trip, vehicle, settings, fuel_prices) -> TripCalculation:
        """Rozpis nákladov cesty / Trip cost breakdown."""
        duration = cls.duration_hours(get_field(trip, "date_start"), get_field(trip, "date_end"))
        meal_allowance = cls.meal_allowance(duration, settings)
        fuel_cost = cls.fuel_cost(trip, vehicle, fuel_prices)
        amortization_cost = cls.amortization_cost(trip, vehicle, settings)
        other_expenses_cost = cls.other_expenses_cost(trip)
        return TripCalculation(
            duration_hours=duration,
            meal_allowance=meal_allowance,
            fuel_cost=fuel_cost,
            amortization_cost=amortization_cost,
            other_expenses_cost=other_expenses_cost,
            total_cost=meal_allowance + fuel_cost + amortization_cost + other_expenses_cost,
        )

    @staticmethod
    def collect_warnings(trip, vehicle, fuel_prices) -> list[CostWarning]:
        """
        Varovania k nulovým zložkám / Warnings for zero-degraded components.
        Výpočet nechýba, len je neúplný; používateľ musí byť upozornený.
        The figures are still computed but incomplete, the user must be told.
        """
        if vehicle is None:
            return [CostWarning(
                code=WarningCode.MISSING_VEHICLE,
                message="Vozidlo cesty neexistuje, náklady na palivo a amortizáciu sú nulové.",
            )]

        date_start = get_field(trip, "date_start")
        trip_date = parse_timestamp(date_start)
        date_label = trip_date.strftime("%d.%m.%Y") if trip_date else str(date_start)

        record = FuelPriceResolver.resolve(date_start, fuel_prices)
        if record is None:
            return [CostWarning(
                code=WarningCode.MISSING_FUEL_PRICE,
                message=f"Pre dátum {date_label} neexistuje záznam o cene paliva!",
            )]

        fuel_type = enum_value(get_field(vehicle, "fuel_type"))
        if not FuelPriceResolver.price_for_type(record, fuel_type):
            return [CostWarning(
                code=WarningCode.ZERO_FUEL_PRICE,
                message=f"Pre dátum {date_label} je cena paliva ({fuel_type}) nulová alebo neznáma!",
            )]
        return []

    @classmethod
    def report(cls, trip, vehicle, settings, fuel_prices) -> TripCostReport:
        """Výpočet spolu s varovaniami / Calculation paired with its warnings."""
        return TripCostReport(
            calculation=cls.calculate(trip, vehicle, settings, fuel_prices),
            warnings=cls.collect_warnings(trip, vehicle, fuel_prices),
        )
