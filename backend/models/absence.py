"""Модель довідника типів відсутності."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base


class AbsenceType(Base):
    """
    Тип відсутності (чергування, відпустка, лікарняний тощо).

    Attributes:
        id: Унікальний ідентифікатор
        name: Назва типу
    """

    __tablename__ = "type_absence"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(25), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<AbsenceType {self.id}: {self.name}>"
