"""Schémy Pracovná cesta / Trip schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from travel_costs.config import settings
from travel_costs.schemas.common import reject_null
from travel_costs.models.trip_expense import ExpenseType
from travel_costs.utils.dates import parse_timestamp
from travel_costs.utils.coerce import to_float


class WaypointBase(BaseModel):
    location: str
    country: str = settings.DEFAULT_COUNTRY


class WaypointRead(WaypointBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    sequence_order: int


class TripExpenseBase(BaseModel):
    expense_type: ExpenseType
    amount: float = 0.0
    note: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        """Nečíselná suma = 0 / Non-numeric amount becomes 0."""
        return to_float(v)


class TripExpenseRead(TripExpenseBase):
    model_config = ConfigDict(from_attributes=True)
    id: int


def _check_timestamp(v: str | None) -> str | None:
    if v is not None and parse_timestamp(v) is None:
        raise ValueError(f"Invalid ISO 8601 timestamp: {v!r}")
    return v


class TripBase(BaseModel):
    vehicle_id: int
    employee_id: int
    project_id: int | None = None
    date_start: str
    date_end: str
    origin: str
    origin_country: str = settings.DEFAULT_COUNTRY
    destination: str
    destination_country: str = settings.DEFAULT_COUNTRY
    odometer_start: float | None = None
    odometer_end: float | None = None
    distance_km: float = 0.0
    purpose: str
    notes: str | None = None

    @field_validator("date_start", "date_end")
    @classmethod
    def validate_timestamp(cls, v):
        return _check_timestamp(v)


class TripCreate(TripBase):
    waypoints: list[WaypointBase] = []
    expenses: list[TripExpenseBase] = []


class TripUpdate(BaseModel):
    vehicle_id: int | None = None
    employee_id: int | None = None
    project_id: int | None = None
    date_start: str | None = None
    date_end: str | None = None
    origin: str | None = None
    origin_country: str | None = None
    destination: str | None = None
    destination_country: str | None = None
    odometer_start: float | None = None
    odometer_end: float | None = None
    distance_km: float | None = None
    purpose: str | None = None
    notes: str | None = None
    waypoints: list[WaypointBase] | None = None
    expenses: list[TripExpenseBase] | None = None

    @field_validator("date_start", "date_end")
    @classmethod
    def validate_timestamp(cls, v):
        return _check_timestamp(v)

    @field_validator(
        "vehicle_id", "employee_id", "date_start", "date_end", "origin", "origin_country",
        "destination", "destination_country", "distance_km", "purpose", "waypoints", "expenses",
    )
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class TripRead(TripBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    is_settled: bool
    settlement_id: int | None = None
    waypoints: list[WaypointRead] = []
    expenses: list[TripExpenseRead] = []
