"""Model Ceny palív / Fuel price model."""

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class FuelPrice(Base):
    """Ceny palív s obdobím platnosti / Fuel prices with validity period.

    Interval [valid_from, valid_to] je uzavretý na oboch koncoch.
    The [valid_from, valid_to] interval is closed on both ends.
    """
    __tablename__ = "fuel_prices"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    valid_from: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    valid_to: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    price_diesel: Mapped[float] = mapped_column(Float, default=0)
    price_benzin: Mapped[float] = mapped_column(Float, default=0)
    price_lpg: Mapped[float] = mapped_column(Float, default=0)
    price_electric: Mapped[float] = mapped_column(Float, default=0)  # EUR/kWh
    note: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<FuelPrice {self.valid_from}→{self.valid_to}>"
