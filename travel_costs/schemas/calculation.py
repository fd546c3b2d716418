"""Schémy výpočtu nákladov / Cost calculation schemas."""

import enum
from typing import Any

from pydantic import BaseModel


class TripCalculation(BaseModel):
    """Rozpis nákladov cesty / Trip cost breakdown (bez zaokrúhlenia / unrounded)."""
    duration_hours: float
    meal_allowance: float
    fuel_cost: float
    amortization_cost: float
    other_expenses_cost: float
    total_cost: float


class WarningCode(str, enum.Enum):
    """Chýbajúce referenčné dáta / Missing reference data."""
    MISSING_VEHICLE = "MISSING_VEHICLE"
    MISSING_FUEL_PRICE = "MISSING_FUEL_PRICE"
    ZERO_FUEL_PRICE = "ZERO_FUEL_PRICE"


class CostWarning(BaseModel):
    code: WarningCode
    message: str


class TripCostReport(BaseModel):
    """Výpočet s varovaniami / Calculation paired with warnings."""
    calculation: TripCalculation
    warnings: list[CostWarning] = []


class TripBreakdown(BaseModel):
    trip_id: int | None = None
    calculation: TripCalculation


class SettlementAggregate(BaseModel):
    total_amount: float
    per_trip_breakdowns: list[TripBreakdown]


class GroupTotal(BaseModel):
    key: Any
    total: float


class DashboardStats(BaseModel):
    total_cost: float
    settled_cost: float
    unsettled_cost: float
    total_km: float
    trips_count: int
    top_projects: list[GroupTotal]
