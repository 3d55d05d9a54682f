"""Точка входа сервиса учета автомобилей и заправок."""
import logging
import time
from typing import Dict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .db.models import Base
from .db.session import build_engine, build_session_factory
from .errors import ApiError
from .logging_config import configure_logging
from .routes import fuel_purchases, users, vehicles


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Собирает приложение.

    Движок БД и фабрика сессий создаются один раз при старте и хранятся
    в ``app.state``; настройки читаются один раз на экземпляр приложения.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    logger = logging.getLogger(settings.app_name)

    app = FastAPI(
        title="Vehicle Tracker",
        version="0.1.0",
        description="Учет автомобилей, заправок и обслуживания пользователя.",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            '"%s %s" %s - %.2f ms',
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": exc.status_code, "message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"status": 422, "message": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Необработанная ошибка %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"status": 500, "message": "Internal Server Error"},
        )

    @app.get("/health/live")
    async def health_live() -> Dict[str, str]:
        """Эндпоинт для проверки, что процесс живой."""
        return {"status": "live"}

    @app.get("/health/ready")
    async def health_ready() -> Dict[str, str]:
        """Эндпоинт для проверки готовности приложения."""
        return {"status": "ready"}

    @app.on_event("startup")
    async def on_startup() -> None:
        """Создает пул соединений и выводит информацию при старте сервиса."""
        engine = build_engine(settings.database_url)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        if settings.create_schema:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info(
            "Сервис %s запущен на %s:%s с БД %s",
            settings.app_name,
            settings.host,
            settings.port,
            make_url(settings.database_url).render_as_string(hide_password=True),
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Закрывает пул соединений."""
        await app.state.engine.dispose()
        logger.info("Сервис %s завершает работу", settings.app_name)

    app.include_router(users.router)
    app.include_router(vehicles.router)
    app.include_router(fuel_purchases.router)
    return app


app = create_app()


def run() -> None:
    """Запуск через uvicorn с адресом и портом из настроек."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
