"""
Скрипт ініціалізації бази даних графіка.

Створює таблиці та заповнює довідник типів відсутності. Повторний
запуск безпечний: наявні типи не дублюються.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.core.database import engine, get_db_context
from backend.models import AbsenceType, Base
from shared.enums import AbsenceCategory


def seed_absence_categories(db: Session) -> int:
    """
    Додати відсутні типи відсутності до довідника.

    Порівняння назв без урахування регістру.

    Returns:
        Кількість доданих типів
    """
    existing = set(db.execute(select(func.lower(AbsenceType.name))).scalars().all())

    added = 0
    for category in AbsenceCategory:
        if category.value in existing:
            continue
        db.add(AbsenceType(name=category.value))
        added += 1
        print(f"  ✓ Додано тип: {category.value}")

    db.flush()
    return added


def main():
    print("Створення таблиць...")
    Base.metadata.create_all(bind=engine)

    print("Заповнення довідника типів відсутності...")
    with get_db_context() as db:
        added = seed_absence_categories(db)

    print(f"Готово. Додано {added} типів.")


if __name__ == "__main__":
    main()
