"""Тести для рендерингу календаря у HTML."""

from datetime import date, datetime

import pytest

from backend.services.calendar_renderer import HtmlCalendarRenderer, period_label
from backend.services.calendar_service import build_calendar_grid
from backend.services.duty_schedule_service import ScheduleRecord
from shared.constants import TEMPLATES_DIR
from shared.exceptions import CalendarRenderError


@pytest.fixture
def grid():
    records = [
        ScheduleRecord(
            id=1, employee_id="emp-1", employee_name="Іваненко Іван Петрович",
            department="ІТ відділ", date_start=date(2025, 5, 5), date_end=date(2025, 5, 5),
            absence_category="duty",
        ),
        ScheduleRecord(
            id=2, employee_id="emp-2", employee_name="Петренко Олена Василівна",
            department="Бухгалтерія", date_start=date(2025, 5, 5), date_end=date(2025, 5, 7),
            absence_category="vacation",
        ),
    ]
    return build_calendar_grid(date(2025, 5, 1), date(2025, 5, 31), records)


def test_period_label():
    assert period_label(date(2025, 5, 1)) == "Травень 2025"
    assert period_label(date(2024, 12, 1)) == "Грудень 2024"


class TestHtmlCalendarRenderer:
    """Тести для HtmlCalendarRenderer."""

    def test_render_contains_header_and_marks(self, grid):
        renderer = HtmlCalendarRenderer(TEMPLATES_DIR)

        html = renderer.render(grid, "Травень 2025", datetime(2025, 5, 31, 10, 0)).decode("utf-8")

        assert "Графік чергувань та відсутності співробітників" in html
        assert "Травень" in html
        assert "31.05.2025" in html
        assert "Іваненко І.П." in html
        assert "Петренко О.В." in html
        assert "#ffff00" in html
        assert "#ffc000" in html
        assert "Чергування" in html
        assert "Відпустка" in html
        assert "Лікарняний" not in html

    def test_render_one_block_per_week(self, grid):
        renderer = HtmlCalendarRenderer(TEMPLATES_DIR)

        html = renderer.render(grid, "Травень 2025", datetime(2025, 5, 31)).decode("utf-8")

        assert html.count("<tbody") == len(grid.weeks)

    def test_render_escapes_names(self):
        record = ScheduleRecord(
            id=1, employee_id="emp-1", employee_name="<b>Hacker</b> X",
            department=None, date_start=date(2025, 5, 1), date_end=date(2025, 5, 1),
            absence_category="duty",
        )
        grid = build_calendar_grid(date(2025, 5, 1), date(2025, 5, 31), [record])

        html = HtmlCalendarRenderer(TEMPLATES_DIR).render(grid, "Травень 2025", datetime(2025, 5, 1))

        assert b"<b>Hacker" not in html
        assert b"&lt;b&gt;Hacker" in html

    def test_missing_template_raises_render_error(self, grid, tmp_path):
        renderer = HtmlCalendarRenderer(tmp_path)

        with pytest.raises(CalendarRenderError):
            renderer.render(grid, "Травень 2025", datetime(2025, 5, 31))
