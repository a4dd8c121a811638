"""Pydantic схеми для графіка чергувань та відсутностей."""

from datetime import date
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from shared.enums import CellColor
from shared.validators import validate_date_range


class DutyScheduleBase(BaseModel):
    """Базова схема запису графіка."""

    employee_name: str = Field(..., min_length=1, max_length=300, description="ПІБ співробітника")
    date_start: date = Field(..., description="Дата початку (включно)")
    date_end: date = Field(..., description="Дата завершення (включно)")
    type_of_absence: str = Field(..., min_length=1, max_length=25, description="Тип відсутності")
    description: Optional[str] = Field(None, description="Коментар")


class DutyScheduleCreate(DutyScheduleBase):
    """Схема для створення та оновлення запису графіка."""

    @model_validator(mode="after")
    def check_dates(self) -> "DutyScheduleCreate":
        validate_date_range(self.date_start, self.date_end)
        return self


class DutyScheduleResponse(BaseModel):
    """Схема відповіді запису графіка."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    employee_name: str
    department: Optional[str] = None
    date_start: date
    date_end: date
    type_of_absence: str = Field(validation_alias=AliasChoices("absence_category", "type_of_absence"))
    description: Optional[str] = None


class MessageResponse(BaseModel):
    """Проста відповідь з повідомленням."""

    message: str


class GridCellResponse(BaseModel):
    """Зайнята клітинка календаря."""

    column: int
    sub_row: int
    record_id: int
    mark: str
    color: CellColor


class WeekBlockResponse(BaseModel):
    """Тижневий блок календаря."""

    index: int
    days: list[Optional[int]] = Field(..., description="Числа місяця по стовпцях Пн..Нд")
    row_count: int
    cells: list[GridCellResponse]


class CalendarGridResponse(BaseModel):
    """Сітка календаря на місяць."""

    year: int
    month: int
    period_label: str
    weeks: list[WeekBlockResponse]


class TimelineCellResponse(BaseModel):
    """Клітинка дня співробітника."""

    record_id: int
    mark: str
    color: CellColor


class TimelineRowResponse(BaseModel):
    """Рядок співробітника в таблиці 'співробітник x день'."""

    employee_id: str
    employee_name: str
    days: dict[int, TimelineCellResponse]


class TimelineResponse(BaseModel):
    """Таблиця 'співробітник x день' за період."""

    period_start: date
    period_end: date
    day_numbers: list[int]
    rows: list[TimelineRowResponse]
