"""Model Zamestnanec / Employee model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(100))  # napr. "Obchodný zástupca"
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<Employee {self.name}>"
