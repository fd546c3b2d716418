"""Model Vedľajší výdavok cesty / Trip ancillary expense model."""

import enum

from sqlalchemy import Enum, Float, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travel_costs.database import Base


class ExpenseType(str, enum.Enum):
    """Druh výdavku / Expense category."""
    PARKING = "parking"
    ACCOMMODATION = "accommodation"
    TOLL = "toll"
    OTHER = "other"


class TripExpense(Base):
    __tablename__ = "trip_expenses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(ForeignKey("trips.id"), nullable=False)
    expense_type: Mapped[ExpenseType] = mapped_column(Enum(ExpenseType), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    trip: Mapped["Trip"] = relationship(back_populates="expenses")

    def __repr__(self) -> str:
        return f"<TripExpense trip={self.trip_id} {self.expense_type} {self.amount}>"
