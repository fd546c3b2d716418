"""Model Zastávka cesty / Trip waypoint model."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_costs.database import Base


class TripWaypoint(Base):
    __tablename__ = "trip_waypoints"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(ForeignKey("trips.id"), nullable=False)
    sequence_order: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    trip: Mapped["Trip"] = relationship(back_populates="waypoints")

    def __repr__(self) -> str:
        return f"<TripWaypoint trip={self.trip_id} seq={self.sequence_order} {self.location}>"
