"""Сховище записів графіка та блокування за співробітником."""

import threading
import zlib
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from sqlalchemy import select, text
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from backend.models.duty_schedule import DutySchedule
from shared.exceptions import RecordNotFoundError


class ScheduleStore(Protocol):
    """Збереження записів графіка."""

    def find_all(self) -> list[DutySchedule]: ...

    def find_by_id(self, record_id: int) -> Optional[DutySchedule]: ...

    def find_by_employee(self, employee_id: str) -> list[DutySchedule]: ...

    def save(self, record: DutySchedule) -> DutySchedule: ...

    def delete_by_id(self, record_id: int) -> None: ...

    def employee_lock(self, employee_id: str): ...


class EmployeeLocks:
    """
    Реєстр блокувань у межах процесу: один замок на співробітника.

    Перевірка перетинів і запис виконуються під замком, тому два
    паралельні запити для одного співробітника не можуть обидва пройти
    перевірку до збереження.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # Замки не видаляються: реєстр обмежений кількістю співробітників
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, employee_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = self._locks[employee_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *employee_ids: str) -> Iterator[None]:
        """Захоплює замки співробітників у стабільному порядку."""
        locks = [self._lock_for(eid) for eid in sorted(set(employee_ids))]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()


# Спільний для всіх запитів процесу
employee_locks = EmployeeLocks()


def _advisory_key(employee_id: str) -> int:
    """Стабільний 32-бітний ключ для pg_advisory_xact_lock."""
    return zlib.crc32(employee_id.encode("utf-8"))


class SqlScheduleStore:
    """Сховище записів графіка поверх таблиці duty_schedule."""

    def __init__(self, db: Session):
        """
        Args:
            db: Сесія бази даних
        """
        self.db = db

    def find_all(self) -> list[DutySchedule]:
        """Всі записи в порядку створення."""
        return list(self.db.execute(select(DutySchedule).order_by(DutySchedule.id)).scalars().all())

    def find_by_id(self, record_id: int) -> Optional[DutySchedule]:
        return self.db.get(DutySchedule, record_id)

    def find_by_employee(self, employee_id: str) -> list[DutySchedule]:
        return list(
            self.db.execute(
                select(DutySchedule)
                .where(DutySchedule.employee_id == employee_id)
                .order_by(DutySchedule.date_start)
            ).scalars().all()
        )

    def save(self, record: DutySchedule) -> DutySchedule:
        """
        Створює або оновлює запис і фіксує транзакцію.

        Raises:
            RecordNotFoundError: Запис видалено іншим запитом до збереження
        """
        record_id = record.id
        self.db.add(record)
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise RecordNotFoundError(f"Запис не знайдено: {record_id}") from e
        self.db.refresh(record)
        return record

    def delete_by_id(self, record_id: int) -> None:
        record = self.db.get(DutySchedule, record_id)
        if record is not None:
            self.db.delete(record)
        self.db.commit()

    @contextmanager
    def employee_lock(self, employee_id: str) -> Iterator[None]:
        """
        Транзакційне advisory-блокування співробітника в PostgreSQL.

        Блокування знімається при commit/rollback. Для інших СУБД нічого
        не робить, там достатньо замків процесу (EmployeeLocks).
        """
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(:key)"),
                {"key": _advisory_key(employee_id)},
            )
        try:
            yield
        except Exception:
            self.db.rollback()
            raise
