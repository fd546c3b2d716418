"""Routy História zmien / Audit log API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_costs.database import get_db
from travel_costs.models.audit import AuditAction, AuditEntity, AuditLog
from travel_costs.schemas.audit import AuditLogPage, AuditLogRead

router = APIRouter()


@router.get("/", response_model=AuditLogPage)
async def list_audit_logs(
    entity_type: AuditEntity | None = None,
    entity_id: int | None = None,
    action: AuditAction | None = None,
    date_from: str | None = Query(default=None, description="ISO 8601, vrátane / inclusive"),
    date_to: str | None = Query(default=None, description="ISO 8601, vrátane dňa / inclusive day"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Zoznam záznamov histórie od najnovšieho / List audit entries, newest first."""
    conditions = []
    if entity_type is not None:
        conditions.append(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        conditions.append(AuditLog.entity_id == entity_id)
    if action is not None:
        conditions.append(AuditLog.action == action)
    # ISO reťazce sa porovnávajú lexikograficky / ISO strings compare lexicographically
    if date_from:
        conditions.append(AuditLog.timestamp >= date_from)
    if date_to:
        bound = date_to if "T" in date_to else f"{date_to}T23:59:59.999"
        conditions.append(AuditLog.timestamp <= bound)

    total = await db.scalar(select(func.count(AuditLog.id)).where(*conditions)) or 0
    result = await db.execute(
        select(AuditLog).where(*conditions).order_by(AuditLog.id.desc()).offset(offset).limit(limit)
    )
    return AuditLogPage(total=total, items=result.scalars().all())


@router.get("/{entity_type}/{entity_id}", response_model=list[AuditLogRead])
async def entity_history(entity_type: AuditEntity, entity_id: int, db: AsyncSession = Depends(get_db)):
    """História jedného záznamu chronologicky / One record's history, oldest first."""
    result = await db.execute(
        select(AuditLog)
        .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
        .order_by(AuditLog.id)
    )
    return result.scalars().all()
