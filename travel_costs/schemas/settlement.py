"""Schémy Vyúčtovanie / Settlement schemas."""

from pydantic import BaseModel, ConfigDict, Field

from travel_costs.models.settlement import SettlementStatus


class SettlementCreate(BaseModel):
    name: str = Field(min_length=1)
    trip_ids: list[int] = Field(min_length=1)


class SettlementStatusUpdate(BaseModel):
    status: SettlementStatus


class SettlementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    date_created: str
    name: str
    status: SettlementStatus
    total_amount: float
    trip_ids: list[int]
