"""API маршрути для графіка чергувань та відсутностей."""

from datetime import date
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Query, Response

from backend.api.dependencies import (
    CalendarRendererDep,
    ClockDep,
    CurrentUser,
    DutyScheduleSvc,
)
from backend.schemas.duty_schedule import (
    CalendarGridResponse,
    DutyScheduleCreate,
    DutyScheduleResponse,
    GridCellResponse,
    MessageResponse,
    TimelineCellResponse,
    TimelineResponse,
    TimelineRowResponse,
    WeekBlockResponse,
)
from backend.services.calendar_renderer import period_label
from backend.services.calendar_service import (
    CalendarGrid,
    build_calendar_grid,
    build_employee_timeline,
)
from shared.exceptions import CalendarRenderError, RecordNotFoundError, ValidationError

router = APIRouter(prefix="/duty-schedule", tags=["duty-schedule"])

EXPORT_FILENAME = "Графік чергувань та відсутності співробітників"


def _grid_response(grid: CalendarGrid, period_start: date) -> CalendarGridResponse:
    weeks = []
    for week in grid.weeks:
        cells = [
            GridCellResponse(
                column=column,
                sub_row=sub_row,
                record_id=cell.record_id,
                mark=cell.mark,
                color=cell.color,
            )
            for (week_index, column, sub_row), cell in sorted(grid.cells.items())
            if week_index == week.index and not cell.is_empty
        ]
        weeks.append(WeekBlockResponse(
            index=week.index,
            days=[d.day if d else None for d in week.days],
            row_count=week.row_count,
            cells=cells,
        ))
    return CalendarGridResponse(
        year=grid.year,
        month=grid.month,
        period_label=period_label(period_start),
        weeks=weeks,
    )


@router.get("", response_model=list[DutyScheduleResponse])
async def list_duty_schedules(
    service: DutyScheduleSvc,
    current_user: CurrentUser,
    department: str | None = Query(None, description="Фільтр за підрозділом"),
    employee_name: str | None = Query(None, description="Фільтр за ПІБ"),
    type_of_absence: str | None = Query(None, description="Фільтр за типом відсутності"),
):
    """
    Отримати записи графіка з фільтрацією.

    Усі фільтри - пошук підрядка без урахування регістру, об'єднуються через AND.
    """
    records = service.list_records(
        department,
        employee_name,
        type_of_absence,
        acting_user=current_user.audit_name,
    )
    return [DutyScheduleResponse.model_validate(r) for r in records]


@router.post("", response_model=DutyScheduleResponse, status_code=201)
async def create_duty_schedule(
    entry_data: DutyScheduleCreate,
    service: DutyScheduleSvc,
    current_user: CurrentUser,
):
    """
    Створити запис графіка.

    Errors:
    - **400 Bad Request**: Співробітника або тип не знайдено, перетин дат.
    """
    try:
        record = service.create(
            entry_data.employee_name,
            entry_data.date_start,
            entry_data.date_end,
            entry_data.type_of_absence,
            entry_data.description,
            acting_user=current_user.audit_name,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DutyScheduleResponse.model_validate(record)


@router.put("/{record_id}", response_model=DutyScheduleResponse)
async def update_duty_schedule(
    record_id: int,
    entry_data: DutyScheduleCreate,
    service: DutyScheduleSvc,
    current_user: CurrentUser,
):
    """
    Оновити запис графіка (повна заміна даних).

    Errors:
    - **400 Bad Request**: Співробітника або тип не знайдено, перетин дат.
    - **404 Not Found**: Запис не знайдено.
    """
    try:
        record = service.update(
            record_id,
            entry_data.employee_name,
            entry_data.date_start,
            entry_data.date_end,
            entry_data.type_of_absence,
            entry_data.description,
            acting_user=current_user.audit_name,
        )
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DutyScheduleResponse.model_validate(record)


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_duty_schedule(
    record_id: int,
    service: DutyScheduleSvc,
    current_user: CurrentUser,
):
    """Видалити запис графіка."""
    try:
        service.delete(record_id, acting_user=current_user.audit_name)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Запис успішно видалено")


@router.get("/absence-types", response_model=list[str])
async def list_absence_types(
    service: DutyScheduleSvc,
    current_user: CurrentUser,
):
    """Отримати всі типи відсутності."""
    return service.list_absence_category_names(acting_user=current_user.audit_name)


@router.get("/calendar", response_model=CalendarGridResponse)
async def get_duty_calendar(
    service: DutyScheduleSvc,
    current_user: CurrentUser,
    start: date = Query(..., description="Перший день місяця"),
    end: date = Query(..., description="Останній день місяця"),
    department: str | None = Query(None, description="Фільтр за підрозділом"),
):
    """
    Отримати сітку календаря чергувань та відпусток на місяць.

    Повертає тижневі блоки з зайнятими клітинками (порожні не передаються).
    """
    records = service.list_for_period(start, end, department, acting_user=current_user.audit_name)
    try:
        grid = build_calendar_grid(start, end, records)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _grid_response(grid, start)


@router.get("/timeline", response_model=TimelineResponse)
async def get_employee_timeline(
    service: DutyScheduleSvc,
    current_user: CurrentUser,
    start: date = Query(..., description="Початок періоду"),
    end: date = Query(..., description="Кінець періоду"),
):
    """Отримати таблицю 'співробітник x день' за всіма типами відсутності."""
    records = [
        r for r in service.list_records(acting_user=current_user.audit_name)
        if not (r.date_end < start or r.date_start > end)
    ]
    try:
        timeline = build_employee_timeline(start, end, records)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TimelineResponse(
        period_start=timeline.period_start,
        period_end=timeline.period_end,
        day_numbers=timeline.day_numbers,
        rows=[
            TimelineRowResponse(
                employee_id=row.employee_id,
                employee_name=row.employee_name,
                days={
                    day: TimelineCellResponse(record_id=cell.record_id, mark=cell.mark, color=cell.color)
                    for day, cell in sorted(row.days.items())
                },
            )
            for row in timeline.rows
        ],
    )


@router.get("/export/vacation")
async def export_vacation_calendar(
    service: DutyScheduleSvc,
    renderer: CalendarRendererDep,
    clock: ClockDep,
    current_user: CurrentUser,
    start: date = Query(..., description="Перший день місяця"),
    end: date = Query(..., description="Останній день місяця"),
    department: str | None = Query(None, description="Фільтр за підрозділом"),
):
    """
    Експорт календаря чергувань та відпусток за місяць.

    Errors:
    - **400 Bad Request**: Період не лежить в одному місяці.
    - **500 Internal Server Error**: Помилка формування документа.
    """
    records = service.list_for_period(start, end, department, acting_user=current_user.audit_name)
    try:
        grid = build_calendar_grid(start, end, records)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        content = renderer.render(grid, period_label(start), clock())
    except CalendarRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))

    filename = quote(f"{EXPORT_FILENAME}.{renderer.file_extension}")
    return Response(
        content=content,
        media_type=renderer.media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )
