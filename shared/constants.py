"""Константи DutyScheduler."""

from pathlib import Path

from shared.enums import AbsenceCategory, CellColor

# Шлях до кореневої директорії проекту
BASE_DIR = Path(__file__).parent.parent

# Директорія шаблонів звітів
TEMPLATES_DIR = BASE_DIR / "backend" / "templates"

# Шаблон календаря чергувань та відпусток
CALENDAR_TEMPLATE = "duty_calendar.html"

# Типи відсутності, що потрапляють у календар (порівняння без урахування регістру)
REPORT_ABSENCE_CATEGORIES = frozenset({
    AbsenceCategory.DUTY.value,
    AbsenceCategory.VACATION.value,
})

# Кольори клітинок за типом відсутності
ABSENCE_CATEGORY_COLORS: dict[str, CellColor] = {
    AbsenceCategory.DAY_OFF.value: CellColor.GREY,
    AbsenceCategory.DUTY.value: CellColor.YELLOW,
    AbsenceCategory.UNPAID_LEAVE.value: CellColor.LIGHT_GREEN,
    AbsenceCategory.UNEXCUSED_ABSENCE.value: CellColor.RED,
    AbsenceCategory.SICK_LEAVE.value: CellColor.LIGHT_BLUE,
    AbsenceCategory.VACATION.value: CellColor.ORANGE,
}

DEFAULT_CELL_COLOR = CellColor.WHITE

# HTML кольори для рендерингу
CELL_COLOR_HEX = {
    CellColor.YELLOW: "#ffff00",
    CellColor.ORANGE: "#ffc000",
    CellColor.LIGHT_BLUE: "#99ccff",
    CellColor.LIGHT_GREEN: "#ccffcc",
    CellColor.GREY: "#c0c0c0",
    CellColor.RED: "#ff0000",
    CellColor.WHITE: "#ffffff",
}

# Дні тижня (0 = Понеділок, 6 = Неділя)
DAYS_IN_WEEK = 7

# Мінімальна кількість рядків під співробітників у тижневому блоці
MIN_WEEK_ROWS = 4

# Назви місяців українською
MONTHS_UKR = [
    "Січень", "Лютий", "Березень", "Квітень", "Травень", "Червень",
    "Липень", "Серпень", "Вересень", "Жовтень", "Листопад", "Грудень"
]
