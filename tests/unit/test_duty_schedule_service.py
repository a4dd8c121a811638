"""Тести для сервісу графіка чергувань та відсутностей."""

import threading
from datetime import date

import pytest

from backend.models import DutySchedule
from backend.services.directory_service import SqlAbsenceCategoryCatalog, SqlEmployeeDirectory
from backend.services.duty_schedule_service import DutyScheduleService
from backend.services.schedule_store import EmployeeLocks, SqlScheduleStore
from shared.exceptions import (
    AbsenceCategoryNotFoundError,
    DateConflictError,
    EmployeeNotFoundError,
    RecordNotFoundError,
    ValidationError,
)

IVANENKO = "Іваненко Іван Петрович"
PETRENKO = "Петренко Олена Василівна"
SYDORENKO = "Сидоренко Тарас"
ACTOR = "admin"


class TestCreate:
    """Тести для DutyScheduleService.create."""

    def test_create_resolves_employee_and_category(self, service, directory):
        """Тест: запис отримує GUID співробітника та назву типу."""
        record = service.create(
            IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "Duty", "нічна зміна",
            acting_user=ACTOR,
        )

        assert record.id is not None
        assert record.employee_id == directory["Іваненко"].id
        assert record.employee_name == IVANENKO
        assert record.department == "ІТ відділ"
        assert record.absence_category == "duty"
        assert record.description == "нічна зміна"

    def test_boundary_touch_rejected(self, service):
        """Тест: спільний день на межі - DateConflict."""
        service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        with pytest.raises(DateConflictError):
            service.create(IVANENKO, date(2025, 5, 3), date(2025, 5, 5), "vacation", acting_user=ACTOR)

    def test_other_employee_same_dates_allowed(self, service):
        service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
        record = service.create(PETRENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
        assert record.employee_name == PETRENKO

    def test_single_day_record(self, service):
        record = service.create(IVANENKO, date(2025, 5, 7), date(2025, 5, 7), "day off", acting_user=ACTOR)
        assert record.date_start == record.date_end

    def test_reversed_dates_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create(IVANENKO, date(2025, 5, 5), date(2025, 5, 1), "duty", acting_user=ACTOR)

    def test_unknown_employee(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.create("Невідомий Петро Іванович", date(2025, 5, 1), date(2025, 5, 1), "duty", acting_user=ACTOR)

    def test_single_word_name_not_found(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.create("Іваненко", date(2025, 5, 1), date(2025, 5, 1), "duty", acting_user=ACTOR)

    def test_two_part_name_matches_employee_without_patronymic(self, service):
        """Тест: ПІБ без по батькові знаходить співробітника без по батькові."""
        record = service.create(SYDORENKO, date(2025, 5, 1), date(2025, 5, 1), "duty", acting_user=ACTOR)
        assert record.employee_name == SYDORENKO

    def test_two_part_name_does_not_match_employee_with_patronymic(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.create("Іваненко Іван", date(2025, 5, 1), date(2025, 5, 1), "duty", acting_user=ACTOR)

    def test_unknown_category(self, service):
        with pytest.raises(AbsenceCategoryNotFoundError):
            service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 1), "training", acting_user=ACTOR)

    def test_rejected_create_persists_nothing(self, service):
        service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
        with pytest.raises(DateConflictError):
            service.create(IVANENKO, date(2025, 5, 2), date(2025, 5, 2), "duty", acting_user=ACTOR)

        assert len(service.list_records(acting_user=ACTOR)) == 1


class TestUpdate:
    """Тести для DutyScheduleService.update."""

    def test_update_excludes_self(self, service):
        """Тест: розширення власного періоду не є конфліктом."""
        record = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        updated = service.update(
            record.id, IVANENKO, date(2025, 5, 2), date(2025, 5, 6), "vacation",
            acting_user=ACTOR,
        )

        assert updated.id == record.id
        assert updated.date_end == date(2025, 5, 6)
        assert updated.absence_category == "vacation"

    def test_update_conflicts_with_other_record(self, service):
        first = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
        service.create(IVANENKO, date(2025, 5, 10), date(2025, 5, 12), "duty", acting_user=ACTOR)

        with pytest.raises(DateConflictError):
            service.update(first.id, IVANENKO, date(2025, 5, 1), date(2025, 5, 10), "duty", acting_user=ACTOR)

    def test_update_reassigns_employee(self, service, directory):
        record = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        updated = service.update(record.id, PETRENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        assert updated.employee_id == directory["Петренко"].id
        assert updated.department == "Бухгалтерія"

    def test_update_missing_record(self, service):
        with pytest.raises(RecordNotFoundError):
            service.update(999, IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

    def test_missing_record_reported_before_validation(self, service):
        """Тест: відсутній запис перевіряється раніше за дані."""
        with pytest.raises(RecordNotFoundError):
            service.update(999, "Невідомий", date(2025, 5, 3), date(2025, 5, 1), "x", acting_user=ACTOR)

    def test_update_description_only(self, service):
        """Тест: зміна лише коментаря при тих самих датах не є конфліктом."""
        record = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", "old", acting_user=ACTOR)

        updated = service.update(
            record.id, IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", "new",
            acting_user=ACTOR,
        )

        assert updated.description == "new"
        assert (updated.date_start, updated.date_end) == (record.date_start, record.date_end)
        assert len(service.list_records(acting_user=ACTOR)) == 1

    def test_update_of_concurrently_deleted_record(self, service, session_factory):
        """Тест: запис видалено іншою сесією між читанням і збереженням."""
        record = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        other = session_factory()
        try:
            other.delete(other.get(DutySchedule, record.id))
            other.commit()
        finally:
            other.close()

        with pytest.raises(RecordNotFoundError):
            service.update(record.id, IVANENKO, date(2025, 5, 1), date(2025, 5, 5), "duty", acting_user=ACTOR)


class TestDelete:
    """Тести для DutyScheduleService.delete."""

    def test_delete(self, service):
        record = service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

        service.delete(record.id, acting_user=ACTOR)

        assert service.list_records(acting_user=ACTOR) == []
        # Після видалення період знову вільний
        service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)

    def test_delete_missing_record(self, service):
        with pytest.raises(RecordNotFoundError):
            service.delete(999, acting_user=ACTOR)


class TestListing:
    """Тести для list_records та list_for_period."""

    @pytest.fixture
    def populated(self, service):
        service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
        service.create(PETRENKO, date(2025, 5, 5), date(2025, 5, 9), "vacation", acting_user=ACTOR)
        service.create(SYDORENKO, date(2025, 5, 12), date(2025, 5, 14), "sick leave", acting_user=ACTOR)
        service.create(IVANENKO, date(2025, 6, 2), date(2025, 6, 4), "vacation", acting_user=ACTOR)
        return service

    def test_no_filters_returns_all_in_store_order(self, populated):
        records = populated.list_records(acting_user=ACTOR)
        assert [r.id for r in records] == sorted(r.id for r in records)
        assert len(records) == 4

    def test_filters_are_case_insensitive_substrings(self, populated):
        records = populated.list_records(employee_name="іваненко", acting_user=ACTOR)
        assert len(records) == 2

        records = populated.list_records(department="бухгалт", acting_user=ACTOR)
        assert [r.employee_name for r in records] == [PETRENKO]

        records = populated.list_records(absence_category="LEAVE", acting_user=ACTOR)
        assert [r.absence_category for r in records] == ["sick leave"]

    def test_filters_combine_with_and(self, populated):
        records = populated.list_records(
            department="ІТ", absence_category="vacation", acting_user=ACTOR,
        )
        assert len(records) == 1
        assert records[0].date_start == date(2025, 6, 2)

    def test_blank_filter_ignored(self, populated):
        assert len(populated.list_records(department="   ", acting_user=ACTOR)) == 4

    def test_period_keeps_only_duty_and_vacation(self, populated):
        """Тест: лікарняний не потрапляє у звіт."""
        records = populated.list_for_period(date(2025, 5, 1), date(2025, 5, 31), acting_user=ACTOR)
        assert [r.absence_category for r in records] == ["duty", "vacation"]

    def test_period_includes_partially_overlapping(self, populated):
        records = populated.list_for_period(date(2025, 5, 3), date(2025, 5, 5), acting_user=ACTOR)
        assert len(records) == 2

    def test_period_without_bounds(self, populated):
        records = populated.list_for_period(None, None, acting_user=ACTOR)
        assert len(records) == 3

    def test_department_truncated_at_comma(self, populated):
        records = populated.list_for_period(
            date(2025, 5, 1), date(2025, 5, 31), "Бухгалтерія, головний офіс", acting_user=ACTOR,
        )
        assert [r.employee_name for r in records] == [PETRENKO]

    def test_absence_category_names(self, service):
        names = service.list_absence_category_names(acting_user=ACTOR)
        assert names[:2] == ["duty", "vacation"]
        assert len(names) == 6


class TestConcurrency:
    """Тести паралельних запитів для одного співробітника."""

    def test_parallel_creates_keep_single_record(self, session_factory, directory):
        """Тест: з N паралельних create на той самий період проходить рівно один."""
        workers = 8
        locks = EmployeeLocks()
        barrier = threading.Barrier(workers)
        results = []
        results_guard = threading.Lock()

        def worker():
            db = session_factory()
            try:
                service = DutyScheduleService(
                    store=SqlScheduleStore(db),
                    employees=SqlEmployeeDirectory(db),
                    categories=SqlAbsenceCategoryCatalog(db),
                    locks=locks,
                )
                barrier.wait()
                try:
                    service.create(IVANENKO, date(2025, 5, 1), date(2025, 5, 3), "duty", acting_user=ACTOR)
                    outcome = "ok"
                except DateConflictError:
                    outcome = "conflict"
                with results_guard:
                    results.append(outcome)
            finally:
                db.close()

        threads = [threading.Thread(target=worker) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert sorted(results) == ["conflict"] * (workers - 1) + ["ok"]

        db = session_factory()
        try:
            assert db.query(DutySchedule).count() == 1
        finally:
            db.close()
