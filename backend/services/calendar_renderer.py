"""Рендеринг календаря чергувань та відпусток у документ."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from backend.services.calendar_service import CalendarGrid
from shared.constants import (
    ABSENCE_CATEGORY_COLORS,
    CALENDAR_TEMPLATE,
    CELL_COLOR_HEX,
    DAYS_IN_WEEK,
    MONTHS_UKR,
    REPORT_ABSENCE_CATEGORIES,
)
from shared.enums import AbsenceCategory, get_absence_category_label
from shared.exceptions import CalendarRenderError

# Logger for this module
logger = logging.getLogger(__name__)

WEEKDAY_HEADERS = ["Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Нд"]


def period_label(period_start: date) -> str:
    """Назва місяця та рік, наприклад 'Травень 2025'."""
    return f"{MONTHS_UKR[period_start.month - 1]} {period_start.year}"


def _legend() -> list[dict]:
    """Легенда кольорів для типів, що потрапляють у календар."""
    return [
        {
            "label": get_absence_category_label(category.value),
            "background": CELL_COLOR_HEX[ABSENCE_CATEGORY_COLORS[category.value]],
        }
        for category in AbsenceCategory
        if category.value in REPORT_ABSENCE_CATEGORIES
    ]


class CalendarRenderer(Protocol):
    """Перетворює сітку календаря на готовий документ."""

    media_type: str
    file_extension: str

    def render(self, grid: CalendarGrid, period_label: str, generated_at: datetime) -> bytes: ...


def get_jinja_env(templates_dir: Path) -> Environment:
    """Get Jinja2 environment with template loader."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        undefined=StrictUndefined,
    )


class HtmlCalendarRenderer:
    """
    Рендерить календар у HTML за шаблоном duty_calendar.html.

    Кожен тижневий блок - рядок номерів днів і row_count рядків
    з позначками співробітників, фон клітинки за типом відсутності.
    """

    media_type = "text/html; charset=utf-8"
    file_extension = "html"

    def __init__(self, templates_dir: Path):
        """
        Args:
            templates_dir: Директорія з шаблонами звітів
        """
        self.templates_dir = templates_dir

    def _context(self, grid: CalendarGrid, label: str, generated_at: datetime) -> dict:
        weeks = []
        for week in grid.weeks:
            rows = []
            for sub_row in range(1, week.row_count + 1):
                rows.append([
                    {
                        "mark": cell.mark,
                        "background": CELL_COLOR_HEX[cell.color] if cell.color else "",
                    }
                    for cell in grid.row(week.index, sub_row)
                ])
            weeks.append({
                "days": [d.day if d else "" for d in week.days],
                "rows": rows,
            })

        return {
            "title": "Графік чергувань та відсутності співробітників",
            "month_number": grid.month,
            "month_name": MONTHS_UKR[grid.month - 1],
            "period_label": label,
            "generated_on": generated_at.strftime("%d.%m.%Y"),
            "weekday_headers": WEEKDAY_HEADERS[:DAYS_IN_WEEK],
            "weeks": weeks,
            "legend": _legend(),
        }

    def render(self, grid: CalendarGrid, period_label: str, generated_at: datetime) -> bytes:
        """
        Генерує HTML календаря.

        Raises:
            CalendarRenderError: Якщо шаблон не знайдено або він містить помилки
        """
        logger.info(f"Rendering duty calendar: {grid.year}-{grid.month:02d}, weeks={len(grid.weeks)}")
        try:
            template = get_jinja_env(self.templates_dir).get_template(CALENDAR_TEMPLATE)
            html = template.render(**self._context(grid, period_label, generated_at))
        except TemplateError as e:
            logger.exception("Error rendering duty calendar")
            raise CalendarRenderError(f"Помилка генерації календаря: {e}") from e
        return html.encode("utf-8")
