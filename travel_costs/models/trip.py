"""Model Pracovná cesta / Business trip model."""

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_costs.database import Base


class Trip(Base):
    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"), nullable=False)
    project_id: Mapped[int | None] = mapped_column(ForeignKey("projects.id"))

    date_start: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    date_end: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601

    # Trasa / Route
    origin: Mapped[str] = mapped_column(String(255), nullable=False)
    origin_country: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    destination_country: Mapped[str] = mapped_column(String(100), nullable=False)

    # Tachometer / Odometer
    odometer_start: Mapped[float | None] = mapped_column(Float)
    odometer_end: Mapped[float | None] = mapped_column(Float)
    distance_km: Mapped[float] = mapped_column(Float, nullable=False)

    purpose: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    # Vyúčtovanie / Settlement status
    is_settled: Mapped[bool] = mapped_column(Boolean, default=False)
    settlement_id: Mapped[int | None] = mapped_column(ForeignKey("settlements.id"))

    # Relations
    waypoints: Mapped[list["TripWaypoint"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan",
        order_by="TripWaypoint.sequence_order", lazy="selectin",
    )
    expenses: Mapped[list["TripExpense"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Trip {self.id} {self.date_start} {self.origin} -> {self.destination}>"
