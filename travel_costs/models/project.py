"""Model Projekt / Project model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_costs.database import Base


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)  # napr. "2024-001"
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def __repr__(self) -> str:
        return f"<Project {self.code} - {self.name}>"
