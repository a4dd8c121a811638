"""Ініціалізація ORM моделей."""

# Базові класи та mixins
from backend.models.base import Base, TimestampMixin

# Моделі
from backend.models.absence import AbsenceType
from backend.models.duty_schedule import DutySchedule
from backend.models.employee import Department, Employee

__all__ = [
    "Base",
    "TimestampMixin",
    "AbsenceType",
    "Department",
    "DutySchedule",
    "Employee",
]
