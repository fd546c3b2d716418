"""Model Uložené miesto / Saved location model (sídlo firmy, klienti)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class SavedLocation(Base):
    __tablename__ = "saved_locations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)  # napr. "Sídlo firmy"
    street: Mapped[str] = mapped_column(String(150), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    zip: Mapped[str] = mapped_column(String(10), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    @property
    def address(self) -> str:
        """Adresa na jeden riadok / Single-line address."""
        return f"{self.street}, {self.city}"

    def __repr__(self) -> str:
        return f"<SavedLocation {self.name}>"
