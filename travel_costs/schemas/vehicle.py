"""Schémy Vozidlo / Vehicle schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_costs.models.vehicle import FuelType, OwnershipType
from travel_costs.schemas.common import reject_null


class VehicleBase(BaseModel):
    name: str
    license_plate: str
    consumption: float = Field(ge=0)
    fuel_type: FuelType
    ownership_type: OwnershipType
    is_active: bool = True


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    name: str | None = None
    license_plate: str | None = None
    consumption: float | None = Field(default=None, ge=0)
    fuel_type: FuelType | None = None
    ownership_type: OwnershipType | None = None
    is_active: bool | None = None

    @field_validator("name", "license_plate", "consumption", "fuel_type", "ownership_type", "is_active")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class VehicleRead(VehicleBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
