"""
Model História zmien / Audit log model.
Zaznamenáva zmeny ciest, vyúčtovaní a sadzieb náhrad.
Records changes to trips, settlements and allowance rates.
"""

import enum

from sqlalchemy import JSON, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class AuditEntity(str, enum.Enum):
    TRIP = "trip"
    SETTLEMENT = "settlement"
    ALLOWANCE_SETTINGS = "allowance_settings"


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    STATUS = "STATUS"  # zmena stavu vyúčtovania / settlement status change


class AuditLog(Base):
    __tablename__ = "audit_logs"
    __table_args__ = (Index("ix_audit_logs_entity", "entity_type", "entity_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    entity_type: Mapped[AuditEntity] = mapped_column(Enum(AuditEntity), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[AuditAction] = mapped_column(Enum(AuditAction), nullable=False)
    changes: Mapped[dict | None] = mapped_column(JSON)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601 UTC

    def __repr__(self) -> str:
        return f"<AuditLog {self.action.value} {self.entity_type.value}:{self.entity_id}>"
