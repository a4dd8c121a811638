"""Моделі співробітника та підрозділу."""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.models.base import Base


class Department(Base):
    """
    Підрозділ підприємства.

    Attributes:
        id: Унікальний ідентифікатор
        name: Назва підрозділу
    """

    __tablename__ = "employee_department"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Department {self.id}: {self.name}>"


class Employee(Base):
    """
    Співробітник. Довідник ведеться окремим модулем кадрового обліку,
    графік лише посилається на нього за ідентифікатором.

    Attributes:
        id: Непрозорий GUID співробітника
        surname: Прізвище
        first_name: Ім'я
        patronymic: По батькові (може бути відсутнім)
        department_id: ID підрозділу
    """

    __tablename__ = "employee"
    __table_args__ = (
        UniqueConstraint("surname", "first_name", "patronymic", name="full_name"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    surname: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    patronymic: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    department_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("employee_department.id", ondelete="SET NULL"),
        nullable=True,
    )

    department: Mapped[Optional["Department"]] = relationship(lazy="joined")

    @property
    def full_name(self) -> str:
        """ПІБ у форматі 'Прізвище Ім'я По батькові'."""
        parts = [self.surname, self.first_name]
        if self.patronymic and self.patronymic.strip():
            parts.append(self.patronymic)
        return " ".join(p for p in parts if p).strip()

    def __repr__(self) -> str:
        return f"<Employee {self.id}: {self.full_name}>"
