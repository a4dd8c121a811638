"""Довідники співробітників та типів відсутності для графіка."""

from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from backend.models.absence import AbsenceType
from backend.models.employee import Employee


@dataclass(frozen=True)
class EmployeeRef:
    """Посилання на співробітника разом з даними для відображення."""
    id: str
    surname: str
    first_name: str
    patronymic: Optional[str] = None
    department: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [self.surname, self.first_name]
        if self.patronymic and self.patronymic.strip():
            parts.append(self.patronymic)
        return " ".join(parts).strip()


@dataclass(frozen=True)
class CategoryRef:
    """Посилання на тип відсутності."""
    id: int
    name: str


@dataclass(frozen=True)
class NameParts:
    """Розібраний ПІБ."""
    surname: str
    first_name: str
    patronymic: Optional[str] = None


def split_full_name(full_name: Optional[str]) -> Optional[NameParts]:
    """
    Розбиває ПІБ за пробілами на прізвище, ім'я та по батькові.

    Частини після третьої ігноруються.

    Returns:
        NameParts або None, якщо частин менше двох
    """
    if full_name is None:
        return None
    parts = full_name.split()
    if len(parts) < 2:
        return None
    return NameParts(
        surname=parts[0],
        first_name=parts[1],
        patronymic=parts[2] if len(parts) > 2 else None,
    )


class EmployeeDirectory(Protocol):
    """Пошук співробітників."""

    def find_by_name(
        self, surname: str, first_name: str, patronymic: Optional[str] = None
    ) -> Optional[EmployeeRef]: ...

    def get(self, employee_id: str) -> Optional[EmployeeRef]: ...


class AbsenceCategoryCatalog(Protocol):
    """Довідник типів відсутності."""

    def find_by_name(self, name: str) -> Optional[CategoryRef]: ...

    def get(self, category_id: int) -> Optional[CategoryRef]: ...

    def all_names(self) -> list[str]: ...


def _employee_ref(employee: Employee) -> EmployeeRef:
    return EmployeeRef(
        id=employee.id,
        surname=employee.surname,
        first_name=employee.first_name,
        patronymic=employee.patronymic,
        department=employee.department.name if employee.department else None,
    )


class SqlEmployeeDirectory:
    """Довідник співробітників поверх таблиці employee."""

    def __init__(self, db: Session):
        """
        Args:
            db: Сесія бази даних
        """
        self.db = db
        self._cache: dict[str, Optional[EmployeeRef]] = {}

    def find_by_name(
        self, surname: str, first_name: str, patronymic: Optional[str] = None
    ) -> Optional[EmployeeRef]:
        """
        Шукає співробітника за точним збігом усіх частин ПІБ.

        Відсутнє по батькові збігається лише з записами без по батькові.
        Якщо знайдено більше одного співробітника, повертає None.
        """
        stmt = select(Employee).where(
            Employee.surname == surname,
            Employee.first_name == first_name,
        )
        if patronymic is None:
            stmt = stmt.where(or_(Employee.patronymic.is_(None), Employee.patronymic == ""))
        else:
            stmt = stmt.where(Employee.patronymic == patronymic)

        matches = self.db.execute(stmt.limit(2)).unique().scalars().all()
        if len(matches) != 1:
            return None
        return _employee_ref(matches[0])

    def get(self, employee_id: str) -> Optional[EmployeeRef]:
        """Повертає дані співробітника за GUID (з кешем на час сесії)."""
        if employee_id not in self._cache:
            employee = self.db.get(Employee, employee_id)
            self._cache[employee_id] = _employee_ref(employee) if employee else None
        return self._cache[employee_id]


class SqlAbsenceCategoryCatalog:
    """Довідник типів відсутності поверх таблиці type_absence."""

    def __init__(self, db: Session):
        self.db = db
        self._cache: dict[int, Optional[CategoryRef]] = {}

    def find_by_name(self, name: str) -> Optional[CategoryRef]:
        """Шукає тип за назвою без урахування регістру."""
        if name is None:
            return None
        absence_type = self.db.execute(
            select(AbsenceType).where(func.lower(AbsenceType.name) == name.strip().lower())
        ).scalars().first()
        if absence_type is None:
            return None
        return CategoryRef(id=absence_type.id, name=absence_type.name)

    def get(self, category_id: int) -> Optional[CategoryRef]:
        if category_id not in self._cache:
            absence_type = self.db.get(AbsenceType, category_id)
            self._cache[category_id] = (
                CategoryRef(id=absence_type.id, name=absence_type.name) if absence_type else None
            )
        return self._cache[category_id]

    def all_names(self) -> list[str]:
        """Унікальні назви типів у порядку довідника."""
        names = self.db.execute(select(AbsenceType.name).order_by(AbsenceType.id)).scalars().all()
        return list(dict.fromkeys(names))
