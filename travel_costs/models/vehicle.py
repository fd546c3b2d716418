"""Model Vozidlo / Vehicle model.

Súkromné vozidlá majú nárok na základnú náhradu (amortizáciu), služobné nie.
Private vehicles earn the per-km amortization, company vehicles do not.
"""

import enum

from sqlalchemy import Boolean, Enum, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class FuelType(str, enum.Enum):
    """Druh paliva / Fuel type."""
    DIESEL = "diesel"
    BENZIN = "benzin"  # benzín / gasoline
    LPG = "lpg"
    ELECTRIC = "electric"


class OwnershipType(str, enum.Enum):
    """Vlastníctvo vozidla / Vehicle ownership."""
    PRIVATE = "private"
    COMPANY = "company"


class Vehicle(Base):
    """Vozidlo / Vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)  # napr. "Škoda Octavia"
    license_plate: Mapped[str] = mapped_column(String(20), nullable=False)  # ŠPZ
    consumption: Mapped[float] = mapped_column(Float, nullable=False)  # l (kWh) / 100 km
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)
    ownership_type: Mapped[OwnershipType] = mapped_column(Enum(OwnershipType), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)  # archivácia / soft delete

    def __repr__(self) -> str:
        return f"<Vehicle {self.license_plate} - {self.name}>"
