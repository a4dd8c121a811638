"""Налаштування додатку через Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.constants import TEMPLATES_DIR


class Settings(BaseSettings):
    """Налаштування додатку, що завантажуються з .env файлу або змінних середовища."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DS_",
        extra="ignore",
    )

    # APP
    app_name: str = Field(default="DutyScheduler", description="Назва додатку")
    app_version: str = Field(default="1.0.0", description="Версія додатку")
    debug: bool = Field(default=False, description="Режим налагодження")

    # DATABASE
    database_url: str = Field(
        default="sqlite:///./duty_scheduler.db",
        description="URL бази даних (SQLite або PostgreSQL)",
    )

    # SECURITY
    secret_key: str = Field(
        default="change-me-in-production-use-secrets-manager",
        description="Секретний ключ для перевірки JWT токенів",
    )
    algorithm: str = Field(default="HS256", description="Алгоритм шифрування JWT")

    # WEB SERVER
    host: str = Field(default="127.0.0.1", description="Хост для FastAPI сервера")
    port: int = Field(default=8000, description="Порт для FastAPI сервера")
    reload: bool = Field(default=False, description="Автоматичний перезапуск при зміні коду")

    # REPORTS
    templates_dir: Path = Field(
        default=TEMPLATES_DIR,
        description="Директорія з Jinja2 шаблонами звітів",
    )

    # LOGGING
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Рівень логування",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Формат логування",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Директорія для файлу логів (None - лише stdout)",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Повертає кешований екземпляр налаштувань.

    Returns:
        Settings: Екземпляр налаштувань додатку
    """
    return Settings()
