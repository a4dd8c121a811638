"""Конфігурація pytest для тестів."""

import pytest
from datetime import datetime
from pathlib import Path
import tempfile
import shutil

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backend.models import Base
from backend.core.database import get_db


@pytest.fixture
def temp_db():
    """
    Створює тимчасову базу даних для тестів.

    Yields:
        URL тимчасової бази даних
    """
    temp_dir = tempfile.mkdtemp()
    db_path = Path(temp_dir) / "test.db"
    db_url = f"sqlite:///{db_path}"

    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)

    yield db_url

    # Cleanup
    engine.dispose()
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def session_factory(temp_db):
    """Фабрика сесій для тимчасової бази."""
    engine = create_engine(temp_db, connect_args={"check_same_thread": False})
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """
    Створює сесію бази даних для тестів.

    Yields:
        Сесія SQLAlchemy
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def directory(db_session):
    """
    Заповнює довідники: підрозділи, співробітники, типи відсутності.

    Returns:
        Словник співробітників за прізвищем
    """
    from backend.models import Department, Employee
    from backend.scripts.init_db import seed_absence_categories

    it_dept = Department(name="ІТ відділ")
    accounting = Department(name="Бухгалтерія")
    db_session.add_all([it_dept, accounting])
    db_session.flush()

    employees = {
        "Іваненко": Employee(
            surname="Іваненко", first_name="Іван", patronymic="Петрович",
            department_id=it_dept.id,
        ),
        "Петренко": Employee(
            surname="Петренко", first_name="Олена", patronymic="Василівна",
            department_id=accounting.id,
        ),
        "Сидоренко": Employee(
            surname="Сидоренко", first_name="Тарас", patronymic=None,
            department_id=it_dept.id,
        ),
    }
    db_session.add_all(employees.values())
    seed_absence_categories(db_session)
    db_session.commit()

    return employees


@pytest.fixture
def service(db_session, directory):
    """DutyScheduleService поверх тимчасової бази з власним реєстром замків."""
    from backend.services.directory_service import SqlAbsenceCategoryCatalog, SqlEmployeeDirectory
    from backend.services.duty_schedule_service import DutyScheduleService
    from backend.services.schedule_store import EmployeeLocks, SqlScheduleStore

    return DutyScheduleService(
        store=SqlScheduleStore(db_session),
        employees=SqlEmployeeDirectory(db_session),
        categories=SqlAbsenceCategoryCatalog(db_session),
        locks=EmployeeLocks(),
    )


@pytest.fixture
def auth_headers():
    """Заголовок Authorization з дійсним токеном."""
    from backend.core.security import create_access_token

    token = create_access_token({"sub": "1", "username": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(session_factory, directory):
    """
    TestClient з тимчасовою базою та фіксованим годинником.

    Yields:
        fastapi.testclient.TestClient
    """
    from fastapi.testclient import TestClient

    from backend.api.dependencies import get_clock
    from backend.core.clock import fixed_clock
    from backend.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock(datetime(2025, 5, 31, 10, 0))

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
