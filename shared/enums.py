"""Enumerations for DutyScheduler.

All system-wide enums are defined here.
"""
from enum import Enum


# Mapping dictionaries for UI labels
ABSENCE_CATEGORY_LABELS: dict[str, str] = {
    "duty": "Чергування",
    "vacation": "Відпустка",
    "sick leave": "Лікарняний",
    "unpaid leave": "Відгул",
    "day off": "Вихідний",
    "unexcused absence": "Прогул",
}


def get_absence_category_label(value: str) -> str:
    """Get Ukrainian label for absence category name."""
    return ABSENCE_CATEGORY_LABELS.get(value.lower(), value)


class AbsenceCategory(str, Enum):
    """Типи відсутності, що постачаються разом із системою"""
    DUTY = "duty"                              # Чергування
    VACATION = "vacation"                      # Відпустка
    SICK_LEAVE = "sick leave"                  # Лікарняний
    UNPAID_LEAVE = "unpaid leave"              # Відгул
    DAY_OFF = "day off"                        # Вихідний
    UNEXCUSED_ABSENCE = "unexcused absence"    # Прогул


class CellColor(str, Enum):
    """Категорія кольору клітинки календаря"""
    YELLOW = "yellow"              # Чергування
    ORANGE = "orange"              # Відпустка
    LIGHT_BLUE = "light_blue"      # Лікарняний
    LIGHT_GREEN = "light_green"    # Відгул
    GREY = "grey"                  # Вихідний
    RED = "red"                    # Прогул
    WHITE = "white"                # Невідомий тип


class AuditAction(str, Enum):
    """Тип дії над записом графіка"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
