"""Модель запису графіка чергувань та відсутностей."""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.models.base import Base, TimestampMixin


class DutySchedule(Base, TimestampMixin):
    """
    Запис графіка: період чергування або відсутності співробітника.

    Співробітник і тип відсутності зберігаються лише як посилання,
    дані для відображення отримуються через довідники.

    Attributes:
        id: Унікальний ідентифікатор
        employee_id: GUID співробітника
        date_start: Дата початку (включно)
        date_end: Дата завершення (включно)
        absence_category_id: ID типу відсутності
        description: Коментар
    """

    __tablename__ = "duty_schedule"
    __table_args__ = (
        CheckConstraint("date_start <= date_end", name="date_range"),
        Index("ix_duty_schedule_employee_period", "employee_id", "date_start", "date_end"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    employee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("employee.id", ondelete="RESTRICT"),
        nullable=False,
    )
    date_start: Mapped[date] = mapped_column(Date, nullable=False)
    date_end: Mapped[date] = mapped_column(Date, nullable=False)
    absence_category_id: Mapped[int] = mapped_column(
        ForeignKey("type_absence.id", ondelete="RESTRICT"),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def days_count(self) -> int:
        """Кількість календарних днів у періоді."""
        return (self.date_end - self.date_start).days + 1

    def __repr__(self) -> str:
        return f"<DutySchedule {self.id}: {self.employee_id} {self.date_start}..{self.date_end}>"
