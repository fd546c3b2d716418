"""Schémy Nastavenia sadzieb / Allowance settings schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_costs.schemas.common import reject_null


class AllowanceSettingsBase(BaseModel):
    meal_rate_low: float = Field(ge=0)
    meal_rate_mid: float = Field(ge=0)
    meal_rate_high: float = Field(ge=0)
    amortization_rate: float = Field(ge=0)


class AllowanceSettingsUpdate(BaseModel):
    meal_rate_low: float | None = Field(default=None, ge=0)
    meal_rate_mid: float | None = Field(default=None, ge=0)
    meal_rate_high: float | None = Field(default=None, ge=0)
    amortization_rate: float | None = Field(default=None, ge=0)

    @field_validator("meal_rate_low", "meal_rate_mid", "meal_rate_high", "amortization_rate")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class AllowanceSettingsRead(AllowanceSettingsBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
