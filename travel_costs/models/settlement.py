"""Model Vyúčtovanie / Settlement model."""

import enum

from sqlalchemy import Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_costs.database import Base


class SettlementStatus(str, enum.Enum):
    """Stav vyúčtovania / Settlement status.

    draft = upraviteľné / editable, approved = uzavreté a vyplatené / closed and paid.
    """
    DRAFT = "draft"
    APPROVED = "approved"


class Settlement(Base):
    __tablename__ = "settlements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date_created: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    name: Mapped[str] = mapped_column(String(150), nullable=False)  # napr. "Vyúčtovanie Február 2026"
    status: Mapped[SettlementStatus] = mapped_column(
        Enum(SettlementStatus), default=SettlementStatus.DRAFT
    )
    total_amount: Mapped[float] = mapped_column(Float, default=0)  # súčet pri vytvorení, nezaokrúhlený

    trip_links: Mapped[list["SettlementTrip"]] = relationship(
        back_populates="settlement", cascade="all, delete-orphan",
        order_by="SettlementTrip.trip_id", lazy="selectin",
    )

    @property
    def trip_ids(self) -> list[int]:
        return [link.trip_id for link in self.trip_links]

    def __repr__(self) -> str:
        return f"<Settlement {self.name} ({self.status})>"


class SettlementTrip(Base):
    """Cesta zahrnutá vo vyúčtovaní / Trip covered by a settlement.

    trip_id je unikátne: cesta patrí najviac do jedného vyúčtovania.
    trip_id is unique: a trip belongs to at most one settlement.
    """
    __tablename__ = "settlement_trips"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    settlement_id: Mapped[int] = mapped_column(ForeignKey("settlements.id"), nullable=False)
    trip_id: Mapped[int] = mapped_column(ForeignKey("trips.id"), unique=True, nullable=False)

    settlement: Mapped["Settlement"] = relationship(back_populates="trip_links")

    def __repr__(self) -> str:
        return f"<SettlementTrip settlement={self.settlement_id} trip={self.trip_id}>"
