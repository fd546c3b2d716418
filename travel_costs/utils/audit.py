"""Zápis do histórie zmien / Audit log writing."""

from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.models.audit import AuditAction, AuditEntity, AuditLog
from travel_costs.utils.dates import now_iso


def log_audit(
    db: AsyncSession,
    entity_type: AuditEntity,
    entity_id: int,
    action: AuditAction,
    changes: dict | None = None,
) -> None:
    """Zaznamenať akciu do audit_logs / Log an action to audit_logs."""
    db.add(AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        changes=jsonable_encoder(changes) if changes else None,
        timestamp=now_iso(),
    ))
