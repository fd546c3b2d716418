"""Schémy Ceny palív / Fuel price schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from travel_costs.schemas.common import reject_null
from travel_costs.utils.dates import parse_timestamp


def _check_timestamp(v: str | None) -> str | None:
    if v is not None and parse_timestamp(v) is None:
        raise ValueError(f"Invalid ISO 8601 timestamp: {v!r}")
    return v


class FuelPriceBase(BaseModel):
    valid_from: str
    valid_to: str
    price_diesel: float = 0.0
    price_benzin: float = 0.0
    price_lpg: float = 0.0
    price_electric: float = 0.0
    note: str | None = None

    @field_validator("valid_from", "valid_to")
    @classmethod
    def validate_timestamp(cls, v):
        return _check_timestamp(v)

    @field_validator("valid_from", "valid_to", "price_diesel", "price_benzin", "price_lpg", "price_electric")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class FuelPriceCreate(FuelPriceBase):
    pass


class FuelPriceUpdate(BaseModel):
    valid_from: str | None = None
    valid_to: str | None = None
    price_diesel: float | None = None
    price_benzin: float | None = None
    price_lpg: float | None = None
    price_electric: float | None = None
    note: str | None = None

    @field_validator("valid_from", "valid_to")
    @classmethod
    def validate_timestamp(cls, v):
        return _check_timestamp(v)


class FuelPriceRead(FuelPriceBase):
    model_config = ConfigDict(from_attributes=True)
    id: int


class FuelPriceImportResult(BaseModel):
    """Výsledok importu zo ŠÚ SR / Statistical office import result."""
    created: int
    updated: int
    weeks: list[str]
