"""Спільні валідатори для використання в Pydantic моделях та сервісах."""

from datetime import date


def validate_date_range(date_start: date, date_end: date) -> None:
    """
    Перевіряє, що дата завершення не раніше дати початку.

    Діапазон включний: запис на один день має date_start == date_end.

    Args:
        date_start: Дата початку
        date_end: Дата завершення

    Raises:
        ValueError: Якщо дата завершення раніше дати початку
    """
    if date_end < date_start:
        raise ValueError("Дата завершення не може бути раніше дати початку")


def validate_single_month(period_start: date, period_end: date) -> None:
    """
    Перевіряє, що період лежить у межах одного календарного місяця.

    Raises:
        ValueError: Якщо межі переплутані або належать різним місяцям
    """
    validate_date_range(period_start, period_end)
    if (period_start.year, period_start.month) != (period_end.year, period_end.month):
        raise ValueError("Період календаря має охоплювати один місяць")


def normalize_filter(value: str | None) -> str | None:
    """
    Нормалізує текстовий фільтр пошуку.

    Returns:
        Обрізаний рядок у нижньому регістрі або None для порожнього значення
    """
    if value is None or not value.strip():
        return None
    return value.strip().lower()
