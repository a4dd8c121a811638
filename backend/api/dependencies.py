"""Dependency Injection для FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.core.clock import Clock, system_clock
from backend.core.config import get_settings
from backend.core.database import get_db
from backend.core.dependencies import get_acting_user
from backend.schemas.auth import ActingUser
from backend.services.calendar_renderer import CalendarRenderer, HtmlCalendarRenderer
from backend.services.directory_service import SqlAbsenceCategoryCatalog, SqlEmployeeDirectory
from backend.services.duty_schedule_service import DutyScheduleService
from backend.services.schedule_store import SqlScheduleStore


def get_duty_schedule_service(
    db: Annotated[Session, Depends(get_db)],
) -> DutyScheduleService:
    """
    Dependency для DutyScheduleService.

    Args:
        db: Сесія бази даних

    Returns:
        Екземпляр DutyScheduleService з SQL довідниками
    """
    return DutyScheduleService(
        store=SqlScheduleStore(db),
        employees=SqlEmployeeDirectory(db),
        categories=SqlAbsenceCategoryCatalog(db),
    )


def get_calendar_renderer() -> CalendarRenderer:
    """Dependency для рендерера календаря."""
    return HtmlCalendarRenderer(get_settings().templates_dir)


def get_clock() -> Clock:
    """Dependency для джерела поточного часу."""
    return system_clock


# Типізовані aliases для зручності
DutyScheduleSvc = Annotated[DutyScheduleService, Depends(get_duty_schedule_service)]
CalendarRendererDep = Annotated[CalendarRenderer, Depends(get_calendar_renderer)]
ClockDep = Annotated[Clock, Depends(get_clock)]
CurrentUser = Annotated[ActingUser, Depends(get_acting_user)]
