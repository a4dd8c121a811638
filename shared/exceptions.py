"""Custom exceptions for DutyScheduler."""


class DutySchedulerError(Exception):
    """Базовий клас для всіх винятків системи."""

    pass


class ValidationError(DutySchedulerError):
    """Виникає при валідації даних."""

    pass


class EmployeeNotFoundError(ValidationError):
    """Виникає коли ПІБ не вдалося зіставити рівно з одним співробітником."""

    pass


class AbsenceCategoryNotFoundError(ValidationError):
    """Виникає коли тип відсутності не знайдено в довіднику."""

    pass


class DateConflictError(ValidationError):
    """Виникає коли період перетинається з існуючим записом співробітника."""

    pass


class RecordNotFoundError(DutySchedulerError):
    """Виникає коли запис графіка не знайдено."""

    pass


class CalendarRenderError(DutySchedulerError):
    """Виникає при помилках формування звіту-календаря."""

    pass
