"""Model Nastavenia sadzieb / Allowance settings model.

Jediný aktívny záznam v systéme (singleton podľa konvencie).
Exactly one active record in the system (singleton by convention).
"""

from sqlalchemy import Float
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class AllowanceSettings(Base):
    __tablename__ = "allowance_settings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # Stravné / Meal allowances
    meal_rate_low: Mapped[float] = mapped_column(Float, nullable=False)  # 5 - 12 h
    meal_rate_mid: Mapped[float] = mapped_column(Float, nullable=False)  # 12 - 18 h
    meal_rate_high: Mapped[float] = mapped_column(Float, nullable=False)  # > 18 h
    # Základná náhrada za 1 km (súkromné auto) / Per-km amortization (private car)
    amortization_rate: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<AllowanceSettings meal={self.meal_rate_low}/{self.meal_rate_mid}/{self.meal_rate_high}"
            f" amortization={self.amortization_rate}>"
        )
