"""Джерело поточного часу для формування звітів."""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Поточний локальний час."""
    return datetime.now()


def fixed_clock(moment: datetime) -> Clock:
    """
    Годинник, що завжди повертає заданий момент.

    Використовується в тестах та при перегенерації архівних звітів.
    """
    def _clock() -> datetime:
        return moment

    return _clock
