"""Schémy História zmien / Audit log schemas."""

from pydantic import BaseModel, ConfigDict

from travel_costs.models.audit import AuditAction, AuditEntity


class AuditLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    entity_type: AuditEntity
    entity_id: int
    action: AuditAction
    changes: dict | None = None
    timestamp: str


class AuditLogPage(BaseModel):
    total: int
    items: list[AuditLogRead]
