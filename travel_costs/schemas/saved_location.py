"""Schémy Uložené miesto / Saved location schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from travel_costs.schemas.common import reject_null


class SavedLocationBase(BaseModel):
    name: str
    street: str
    city: str
    zip: str
    country: str
    note: str | None = None


class SavedLocationCreate(SavedLocationBase):
    pass


class SavedLocationUpdate(BaseModel):
    name: str | None = None
    street: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    note: str | None = None

    @field_validator("name", "street", "city", "zip", "country")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class SavedLocationRead(SavedLocationBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    address: str
