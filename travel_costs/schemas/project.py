"""Schémy Projekt / Project schemas."""

from pydantic import BaseModel, ConfigDict, field_validator

from travel_costs.schemas.common import reject_null


class ProjectBase(BaseModel):
    code: str
    name: str
    is_active: bool = True


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    code: str | None = None
    name: str | None = None
    is_active: bool | None = None

    @field_validator("code", "name", "is_active")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ProjectRead(ProjectBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
