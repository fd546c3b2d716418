"""Schémy Zamestnanec / Employee schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from travel_costs.schemas.common import reject_null


class EmployeeBase(BaseModel):
    name: str
    address: str
    role: str | None = None
    is_active: bool = True


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: str | None = None
    address: str | None = None
    role: str | None = None
    is_active: bool | None = None

    @field_validator("name", "address", "is_active")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class EmployeeRead(EmployeeBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
