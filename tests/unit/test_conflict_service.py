"""Тести для перевірки перетину періодів."""

from datetime import date

from backend.services.conflict_service import Interval, has_conflict


def _interval(record_id, start, end, employee_id="emp-1"):
    return Interval(id=record_id, employee_id=employee_id, start=start, end=end)


class TestIntervalOverlap:
    """Тести для Interval.overlaps."""

    def test_shared_boundary_day_overlaps(self):
        """Тест: спільний день на межі - перетин."""
        a = _interval(1, date(2025, 5, 1), date(2025, 5, 3))
        b = _interval(None, date(2025, 5, 3), date(2025, 5, 5))
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_adjacent_periods_do_not_overlap(self):
        """Тест: періоди, що йдуть день у день, не перетинаються."""
        a = _interval(1, date(2025, 5, 1), date(2025, 5, 3))
        b = _interval(None, date(2025, 5, 4), date(2025, 5, 5))
        assert not a.overlaps(b)

    def test_nested_period_overlaps(self):
        """Тест: вкладений період."""
        outer = _interval(1, date(2025, 5, 1), date(2025, 5, 31))
        inner = _interval(None, date(2025, 5, 10), date(2025, 5, 10))
        assert outer.overlaps(inner)
        assert inner.overlaps(outer)


class TestHasConflict:
    """Тести для has_conflict."""

    def test_boundary_touch_is_conflict(self):
        """Тест: [1..3] і [3..5] одного співробітника конфліктують."""
        existing = [_interval(1, date(2025, 5, 1), date(2025, 5, 3))]
        candidate = _interval(None, date(2025, 5, 3), date(2025, 5, 5))
        assert has_conflict(existing, candidate)

    def test_other_employee_ignored(self):
        """Тест: періоди інших співробітників не враховуються."""
        existing = [_interval(1, date(2025, 5, 1), date(2025, 5, 10), employee_id="emp-2")]
        candidate = _interval(None, date(2025, 5, 3), date(2025, 5, 5))
        assert not has_conflict(existing, candidate)

    def test_excluded_record_ignored(self):
        """Тест: запис, що оновлюється, не конфліктує сам з собою."""
        existing = [_interval(7, date(2025, 5, 1), date(2025, 5, 10))]
        candidate = _interval(7, date(2025, 5, 2), date(2025, 5, 12))
        assert not has_conflict(existing, candidate, exclude_id=7)

    def test_exclusion_keeps_other_records(self):
        """Тест: виключається лише вказаний запис."""
        existing = [
            _interval(7, date(2025, 5, 1), date(2025, 5, 10)),
            _interval(8, date(2025, 5, 12), date(2025, 5, 14)),
        ]
        candidate = _interval(7, date(2025, 5, 2), date(2025, 5, 12))
        assert has_conflict(existing, candidate, exclude_id=7)

    def test_empty_history(self):
        """Тест: без існуючих записів конфлікту немає."""
        candidate = _interval(None, date(2025, 5, 1), date(2025, 5, 1))
        assert not has_conflict([], candidate)
