"""Перевірка перетину періодів графіка."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional


@dataclass(frozen=True)
class Interval:
    """
    Включний період співробітника.

    Attributes:
        id: ID запису (None для ще не збереженого)
        employee_id: GUID співробітника
        start: Перший день
        end: Останній день
    """
    id: Optional[int]
    employee_id: str
    start: date
    end: date

    def overlaps(self, other: "Interval") -> bool:
        """Два періоди перетинаються, якщо A.start <= B.end AND B.start <= A.end."""
        return self.start <= other.end and other.start <= self.end


def has_conflict(
    existing: Iterable[Interval],
    candidate: Interval,
    exclude_id: Optional[int] = None,
) -> bool:
    """
    Перевіряє чи перетинається кандидат з будь-яким періодом того ж співробітника.

    Межі включні: період, що закінчується в день N, конфліктує з періодом,
    що починається в день N.

    Args:
        existing: Наявні періоди (можуть містити інших співробітників)
        candidate: Новий або змінений період
        exclude_id: ID запису, який не враховується (сам запис при оновленні)

    Returns:
        True при першому знайденому перетині, False якщо перетинів немає
    """
    for other in existing:
        if other.employee_id != candidate.employee_id:
            continue
        if exclude_id is not None and other.id == exclude_id:
            continue
        if candidate.overlaps(other):
            return True
    return False
