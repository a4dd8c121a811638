"""Налаштування структурованого логування."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from backend.core.config import get_settings

settings = get_settings()


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Додає рівень логування до запису."""
    event_dict["level"] = method_name.upper()
    return event_dict


def drop_color_message_key(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Видаляє ключ color_message для JSON формату."""
    event_dict.pop("color_message", None)
    return event_dict


def add_app_info(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Додає назву та версію сервісу до запису."""
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("app_version", settings.app_version)
    return event_dict


def bind_request_context(request_id: str, method: str, path: str) -> None:
    """
    Прив'язує дані HTTP запиту до всіх подій поточного контексту.

    Попередній контекст очищується, тому події аудиту графіка
    (duty_schedule_*) несуть лише request_id свого запиту.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def setup_logging() -> None:
    """
    Налаштовує структуроване логування для додатку.

    Використовує structlog для уніфікованого логування в форматі
    JSON або Console залежно від налаштувань. Аудит змін графіка
    пишеться сюди ж як структуровані події.
    """
    log_level = getattr(logging, settings.log_level)

    # Shared processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        add_app_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        # JSON формат для продакшн
        processors = shared_processors + [
            structlog.processors.JSONRenderer()
        ]
    else:
        # Console формат для розробки
        processors = shared_processors + [
            drop_color_message_key,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Логування в файл, якщо задано директорію
    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_dir / "duty_scheduler.log", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)

    # Зменшити шум від зовнішніх бібліотек
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
