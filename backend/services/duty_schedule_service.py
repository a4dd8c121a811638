"""Сервіс для управління графіком чергувань та відсутностей."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from backend.models.duty_schedule import DutySchedule
from backend.services.conflict_service import Interval, has_conflict
from backend.services.directory_service import (
    AbsenceCategoryCatalog,
    CategoryRef,
    EmployeeDirectory,
    EmployeeRef,
    split_full_name,
)
from backend.services.schedule_store import EmployeeLocks, ScheduleStore, employee_locks
from shared.constants import REPORT_ABSENCE_CATEGORIES
from shared.enums import AuditAction
from shared.exceptions import (
    AbsenceCategoryNotFoundError,
    DateConflictError,
    EmployeeNotFoundError,
    RecordNotFoundError,
    ValidationError,
)
from shared.validators import normalize_filter, validate_date_range

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScheduleRecord:
    """
    Запис графіка разом з даними для відображення.

    Attributes:
        id: ID запису
        employee_id: GUID співробітника
        employee_name: ПІБ співробітника
        department: Назва підрозділу
        date_start: Дата початку (включно)
        date_end: Дата завершення (включно)
        absence_category: Назва типу відсутності
        description: Коментар
    """
    id: int
    employee_id: str
    employee_name: str
    department: Optional[str]
    date_start: date
    date_end: date
    absence_category: str
    description: Optional[str] = None


class DutyScheduleService:
    """
    Сервіс для управління записами графіка чергувань та відсутностей.

    Гарантує, що періоди одного співробітника не перетинаються
    (межі включні), та пише аудит кожної зміни.
    """

    def __init__(
        self,
        store: ScheduleStore,
        employees: EmployeeDirectory,
        categories: AbsenceCategoryCatalog,
        locks: EmployeeLocks = employee_locks,
    ):
        """
        Ініціалізує сервіс.

        Args:
            store: Сховище записів графіка
            employees: Довідник співробітників
            categories: Довідник типів відсутності
            locks: Реєстр блокувань за співробітником
        """
        self.store = store
        self.employees = employees
        self.categories = categories
        self.locks = locks

    # ---- читання ----

    def list_records(
        self,
        department: Optional[str] = None,
        employee_name: Optional[str] = None,
        absence_category: Optional[str] = None,
        *,
        acting_user: str,
    ) -> list[ScheduleRecord]:
        """
        Повертає записи з фільтрацією за підрядком (без урахування регістру).

        Фільтри об'єднуються через AND, порожні значення ігноруються.
        Порядок - порядок сховища.
        """
        department_q = normalize_filter(department)
        name_q = normalize_filter(employee_name)
        category_q = normalize_filter(absence_category)

        result = []
        for entry in self.store.find_all():
            record = self._to_record(entry)
            if department_q and department_q not in (record.department or "").lower():
                continue
            if name_q and name_q not in record.employee_name.lower():
                continue
            if category_q and category_q not in record.absence_category.lower():
                continue
            result.append(record)

        logger.debug(
            "duty_schedule_listed",
            actor=acting_user,
            count=len(result),
        )
        return result

    def list_for_period(
        self,
        period_start: Optional[date],
        period_end: Optional[date],
        department: Optional[str] = None,
        *,
        acting_user: str,
    ) -> list[ScheduleRecord]:
        """
        Повертає чергування та відпустки, що перетинаються з періодом.

        Назва підрозділу обрізається до першої коми.

        Args:
            period_start: Початок періоду (None - без обмеження)
            period_end: Кінець періоду (None - без обмеження)
            department: Підрядок назви підрозділу
            acting_user: Користувач для аудиту
        """
        if department and "," in department:
            department = department[:department.index(",")]
        department_q = normalize_filter(department)

        result = []
        for entry in self.store.find_all():
            if period_start is not None and entry.date_end < period_start:
                continue
            if period_end is not None and entry.date_start > period_end:
                continue
            record = self._to_record(entry)
            if record.absence_category.lower() not in REPORT_ABSENCE_CATEGORIES:
                continue
            if department_q and department_q not in (record.department or "").lower():
                continue
            result.append(record)

        logger.debug(
            "duty_schedule_period_listed",
            actor=acting_user,
            period_start=str(period_start),
            period_end=str(period_end),
            count=len(result),
        )
        return result

    def list_absence_category_names(self, *, acting_user: str) -> list[str]:
        """Унікальні назви типів відсутності з довідника."""
        return self.categories.all_names()

    # ---- зміни ----

    def create(
        self,
        employee_name: str,
        date_start: date,
        date_end: date,
        absence_category: str,
        description: Optional[str] = None,
        *,
        acting_user: str,
    ) -> ScheduleRecord:
        """
        Створює запис графіка.

        Raises:
            ValidationError: Дата завершення раніше дати початку
            EmployeeNotFoundError: ПІБ не знайдено
            AbsenceCategoryNotFoundError: Тип відсутності не знайдено
            DateConflictError: Перетин з існуючим записом співробітника
        """
        self._validate_dates(date_start, date_end)
        employee = self._resolve_employee(employee_name)
        category = self._resolve_category(absence_category)

        with self.locks.hold(employee.id), self.store.employee_lock(employee.id):
            self._ensure_no_conflict(employee, date_start, date_end, exclude_id=None)
            entry = self.store.save(
                DutySchedule(
                    employee_id=employee.id,
                    date_start=date_start,
                    date_end=date_end,
                    absence_category_id=category.id,
                    description=description,
                )
            )

        record = self._to_record(entry, employee=employee, category=category)
        self._audit(AuditAction.CREATE, record, acting_user)
        return record

    def update(
        self,
        record_id: int,
        employee_name: str,
        date_start: date,
        date_end: date,
        absence_category: str,
        description: Optional[str] = None,
        *,
        acting_user: str,
    ) -> ScheduleRecord:
        """
        Повністю замінює дані запису графіка.

        Сам запис не враховується при перевірці перетинів.

        Raises:
            RecordNotFoundError: Запис не знайдено або видалено до збереження
            ValidationError, EmployeeNotFoundError,
            AbsenceCategoryNotFoundError, DateConflictError: як у create()
        """
        entry = self.store.find_by_id(record_id)
        if entry is None:
            raise RecordNotFoundError(f"Запис не знайдено: {record_id}")

        self._validate_dates(date_start, date_end)
        employee = self._resolve_employee(employee_name)
        category = self._resolve_category(absence_category)

        with self.locks.hold(entry.employee_id, employee.id), self.store.employee_lock(employee.id):
            self._ensure_no_conflict(employee, date_start, date_end, exclude_id=record_id)
            entry.employee_id = employee.id
            entry.date_start = date_start
            entry.date_end = date_end
            entry.absence_category_id = category.id
            entry.description = description
            entry = self.store.save(entry)

        record = self._to_record(entry, employee=employee, category=category)
        self._audit(AuditAction.UPDATE, record, acting_user)
        return record

    def delete(self, record_id: int, *, acting_user: str) -> None:
        """
        Видаляє запис графіка.

        Raises:
            RecordNotFoundError: Запис не знайдено
        """
        entry = self.store.find_by_id(record_id)
        if entry is None:
            raise RecordNotFoundError(f"Запис не знайдено: {record_id}")

        employee_id = entry.employee_id
        period = (entry.date_start, entry.date_end)
        with self.locks.hold(employee_id), self.store.employee_lock(employee_id):
            self.store.delete_by_id(record_id)

        logger.info(
            "duty_schedule_deleted",
            action=AuditAction.DELETE.value,
            actor=acting_user,
            record_id=record_id,
            employee_id=employee_id,
            date_start=period[0].isoformat(),
            date_end=period[1].isoformat(),
        )

    # ---- допоміжні ----

    def _validate_dates(self, date_start: date, date_end: date) -> None:
        try:
            validate_date_range(date_start, date_end)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def _resolve_employee(self, employee_name: str) -> EmployeeRef:
        parts = split_full_name(employee_name)
        employee = None
        if parts is not None:
            employee = self.employees.find_by_name(parts.surname, parts.first_name, parts.patronymic)
        if employee is None:
            logger.warning("duty_schedule_rejected", reason="employee_not_found", employee_name=employee_name)
            raise EmployeeNotFoundError(f"Співробітника не знайдено: {employee_name}")
        return employee

    def _resolve_category(self, absence_category: str) -> CategoryRef:
        category = self.categories.find_by_name(absence_category)
        if category is None:
            logger.warning("duty_schedule_rejected", reason="category_not_found", absence_category=absence_category)
            raise AbsenceCategoryNotFoundError(f"Тип відсутності не знайдено: {absence_category}")
        return category

    def _ensure_no_conflict(
        self,
        employee: EmployeeRef,
        date_start: date,
        date_end: date,
        exclude_id: Optional[int],
    ) -> None:
        existing = [
            Interval(id=e.id, employee_id=e.employee_id, start=e.date_start, end=e.date_end)
            for e in self.store.find_by_employee(employee.id)
        ]
        candidate = Interval(id=exclude_id, employee_id=employee.id, start=date_start, end=date_end)
        if has_conflict(existing, candidate, exclude_id=exclude_id):
            logger.warning(
                "duty_schedule_rejected",
                reason="date_conflict",
                employee_id=employee.id,
                date_start=date_start.isoformat(),
                date_end=date_end.isoformat(),
            )
            raise DateConflictError(f"Перетин дат для співробітника {employee.full_name}")

    def _to_record(
        self,
        entry: DutySchedule,
        employee: Optional[EmployeeRef] = None,
        category: Optional[CategoryRef] = None,
    ) -> ScheduleRecord:
        employee = employee or self.employees.get(entry.employee_id)
        category = category or self.categories.get(entry.absence_category_id)
        return ScheduleRecord(
            id=entry.id,
            employee_id=entry.employee_id,
            employee_name=employee.full_name if employee else "",
            department=employee.department if employee else None,
            date_start=entry.date_start,
            date_end=entry.date_end,
            absence_category=category.name if category else "",
            description=entry.description,
        )

    def _audit(self, action: AuditAction, record: ScheduleRecord, acting_user: str) -> None:
        logger.info(
            f"duty_schedule_{action.value}d",
            action=action.value,
            actor=acting_user,
            record_id=record.id,
            employee_id=record.employee_id,
            date_start=record.date_start.isoformat(),
            date_end=record.date_end.isoformat(),
            absence_category=record.absence_category,
        )
