"""Головний файл FastAPI додатку."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routes import duty_schedule
from backend.core.config import get_settings
from backend.core.logging import bind_request_context, setup_logging

settings = get_settings()

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    setup_logging()
    logging.info(f"{settings.app_name} {settings.app_version} started")
    yield
    logging.info(f"{settings.app_name} stopped")


app = FastAPI(
    title="DutyScheduler API",
    description="""
    API графіка чергувань та відсутностей співробітників.

    ## Основні можливості

    * **Графік**: Ведення періодів чергувань, відпусток, лікарняних тощо без перетинів для одного співробітника.
    * **Календар**: Місячна сітка чергувань та відпусток по тижнях.
    * **Експорт**: Формування документа календаря за місяць.

    ## Авторизація

    Токен видає сервіс автентифікації підприємства.
    Додавайте заголовок `Authorization: Bearer <token>` до кожного запиту.
    """,
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшені обмежити
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Прив'язує ID запиту до логів та подій аудиту."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    bind_request_context(request_id, request.method, request.url.path)
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# Routes
app.include_router(duty_schedule.router, prefix="/api")


@app.get("/")
async def root():
    """Коренева точка API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Перевірка здоров'я API."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
