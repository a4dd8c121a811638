"""Побудова сітки календаря чергувань та відпусток."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Protocol, Sequence

from shared.constants import (
    ABSENCE_CATEGORY_COLORS,
    DAYS_IN_WEEK,
    DEFAULT_CELL_COLOR,
    MIN_WEEK_ROWS,
)
from shared.enums import CellColor
from shared.exceptions import ValidationError
from shared.validators import validate_single_month


class CalendarRecord(Protocol):
    """Мінімальні дані запису, потрібні для календаря."""
    id: int
    employee_id: str
    employee_name: str
    date_start: date
    date_end: date
    absence_category: str


def format_occupant_mark(full_name: str) -> str:
    """
    Formats full name 'Last First Middle' to 'Last F.M.'
    Example: Іваненко Іван Петрович -> Іваненко І.П.
    """
    parts = full_name.split()
    if not parts:
        return ""
    initials = "".join(f"{part[0]}." for part in parts[1:3])
    return f"{parts[0]} {initials}" if initials else parts[0]


def resolve_cell_color(absence_category: Optional[str]) -> CellColor:
    """Колір клітинки за назвою типу відсутності (без урахування регістру)."""
    if not absence_category:
        return DEFAULT_CELL_COLOR
    return ABSENCE_CATEGORY_COLORS.get(absence_category.strip().lower(), DEFAULT_CELL_COLOR)


@dataclass(frozen=True)
class GridCell:
    """Клітинка календаря: позначка співробітника та колір типу відсутності."""
    record_id: Optional[int] = None
    mark: str = ""
    color: Optional[CellColor] = None

    @property
    def is_empty(self) -> bool:
        return self.record_id is None


EMPTY_CELL = GridCell()


@dataclass(frozen=True)
class WeekBlock:
    """
    Тижневий блок календаря.

    Attributes:
        index: Номер блоку (з 0)
        days: 7 дат (Пн..Нд), None для днів поза місяцем
        row_count: Кількість рядків під співробітників (не менше MIN_WEEK_ROWS)
    """
    index: int
    days: tuple[Optional[date], ...]
    row_count: int


@dataclass(frozen=True)
class CalendarGrid:
    """
    Сітка календаря на місяць.

    Клітинки індексуються (week_index, column, sub_row), де column 0..6
    (Пн..Нд), а sub_row 1..row_count відповідного блоку. Усі клітинки
    блоку виділені, порожні мають EMPTY_CELL.
    """
    year: int
    month: int
    weeks: tuple[WeekBlock, ...] = ()
    cells: dict[tuple[int, int, int], GridCell] = field(default_factory=dict)

    def cell(self, week_index: int, column: int, sub_row: int) -> GridCell:
        """Клітинка за координатами; KeyError для координат поза сіткою."""
        return self.cells[(week_index, column, sub_row)]

    def column_cells(self, week_index: int, column: int) -> list[GridCell]:
        """Клітинки стовпця тижневого блоку зверху вниз."""
        week = self.weeks[week_index]
        return [self.cells[(week_index, column, r)] for r in range(1, week.row_count + 1)]

    def occupied_count(self, week_index: int, column: int) -> int:
        return sum(1 for c in self.column_cells(week_index, column) if not c.is_empty)

    def row(self, week_index: int, sub_row: int) -> list[GridCell]:
        """Рядок тижневого блоку (7 клітинок)."""
        return [self.cells[(week_index, col, sub_row)] for col in range(DAYS_IN_WEEK)]


def _occupant_cell(record: CalendarRecord) -> GridCell:
    return GridCell(
        record_id=record.id,
        mark=format_occupant_mark(record.employee_name),
        color=resolve_cell_color(record.absence_category),
    )


def build_calendar_grid(
    period_start: date,
    period_end: date,
    records: Sequence[CalendarRecord],
) -> CalendarGrid:
    """
    Будує сітку календаря на місяць з тижневими блоками.

    Алгоритм:
    1. Кількість днів береться з period_end, дні йдуть з 1-го.
    2. Кожен блок починається зі стовпця дня тижня поточного дня
       (перший блок може бути неповним) і заповнюється до неділі або
       до кінця місяця.
    3. Для кожної дати блоку збираються записи, що її покривають,
       у порядку вхідного списку; вони складаються в стовпець дати
       в рядки 1..N.
    4. Висота блоку - max(MIN_WEEK_ROWS, найбільше N у блоці).

    Args:
        period_start: Перший день місяця звіту
        period_end: Останній день місяця звіту
        records: Записи (чергування та відпустки) за період

    Returns:
        CalendarGrid

    Raises:
        ValidationError: Якщо період не лежить в одному місяці
    """
    try:
        validate_single_month(period_start, period_end)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    year, month = period_start.year, period_start.month
    days_in_month = period_end.day

    weeks: list[WeekBlock] = []
    cells: dict[tuple[int, int, int], GridCell] = {}

    current_day = 1
    while current_day <= days_in_month:
        week_index = len(weeks)
        col = date(year, month, current_day).weekday()  # 0 = Понеділок, 6 = Неділя

        days: list[Optional[date]] = [None] * DAYS_IN_WEEK
        while col < DAYS_IN_WEEK and current_day <= days_in_month:
            days[col] = date(year, month, current_day)
            col += 1
            current_day += 1

        occupants: dict[int, list[CalendarRecord]] = defaultdict(list)
        for column, day in enumerate(days):
            if day is None:
                continue
            for record in records:
                if record.date_start <= day <= record.date_end:
                    occupants[column].append(record)

        busiest = max((len(v) for v in occupants.values()), default=0)
        row_count = max(MIN_WEEK_ROWS, busiest)

        for column in range(DAYS_IN_WEEK):
            stacked = occupants.get(column, [])
            for sub_row in range(1, row_count + 1):
                if sub_row <= len(stacked):
                    cells[(week_index, column, sub_row)] = _occupant_cell(stacked[sub_row - 1])
                else:
                    cells[(week_index, column, sub_row)] = EMPTY_CELL

        weeks.append(WeekBlock(index=week_index, days=tuple(days), row_count=row_count))

    return CalendarGrid(year=year, month=month, weeks=tuple(weeks), cells=cells)


@dataclass(frozen=True)
class TimelineRow:
    """Рядок співробітника: день місяця -> клітинка."""
    employee_id: str
    employee_name: str
    days: dict[int, GridCell] = field(default_factory=dict)


@dataclass(frozen=True)
class EmployeeTimeline:
    """Календар у вигляді 'співробітник x день'."""
    period_start: date
    period_end: date
    rows: tuple[TimelineRow, ...] = ()

    @property
    def day_numbers(self) -> list[int]:
        return [
            (self.period_start + timedelta(days=i)).day
            for i in range((self.period_end - self.period_start).days + 1)
        ]


def build_employee_timeline(
    period_start: date,
    period_end: date,
    records: Sequence[CalendarRecord],
) -> EmployeeTimeline:
    """
    Будує таблицю 'співробітник x день' за період у межах місяця.

    Рядки йдуть у порядку першої появи співробітника у вхідному списку.
    У клітинці - прізвище та колір типу; якщо на день припадає кілька
    записів одного співробітника, перемагає останній.
    """
    try:
        validate_single_month(period_start, period_end)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    # Групування за GUID: однакові ПІБ різних співробітників - окремі рядки
    rows: dict[str, TimelineRow] = {}
    for record in records:
        row = rows.get(record.employee_id)
        if row is None:
            row = rows[record.employee_id] = TimelineRow(
                employee_id=record.employee_id,
                employee_name=record.employee_name,
            )
        days = row.days
        name_parts = record.employee_name.split()
        surname = name_parts[0] if name_parts else ""
        current = max(record.date_start, period_start)
        end = min(record.date_end, period_end)
        while current <= end:
            days[current.day] = GridCell(
                record_id=record.id,
                mark=surname,
                color=resolve_cell_color(record.absence_category),
            )
            current += timedelta(days=1)

    return EmployeeTimeline(
        period_start=period_start,
        period_end=period_end,
        rows=tuple(rows.values()),
    )
