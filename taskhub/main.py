# -*- coding: utf-8 -*-
"""
Точка входа FastAPI-приложения TaskHub.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskhub.api.v1.auth import router as auth_router
from taskhub.api.v1.todos import router as todos_router
from taskhub.api.v1.users import router as users_router
from taskhub.clients.database_client import async_engine, init_db
from taskhub.config.logger import configure_logger
from taskhub.config.settings import settings
from taskhub.config.uvicorn_config import setup_uvicorn_logging
from taskhub.utils.exceptions import (GENERIC_ERROR_MESSAGE, APIException,
                                      ErrorCode)

logger = configure_logger()

app = FastAPI(
    title="TaskHub API",
    description="API управления пользователями и задачами TaskHub",
    version="0.1.0",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json",
)

# Настройка CORS из настроек
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.get_cors_methods(),
    allow_headers=settings.get_cors_headers(),
)


# Middleware для логирования всех запросов
@app.middleware("http")
async def log_all_requests(request: Request, call_next):
    if request.url.path.startswith("/api/"):
        logger.info(f"🌐 API запрос: {request.method} {request.url.path}")

    response = await call_next(request)

    if request.url.path.startswith("/api/"):
        if response.status_code >= 400:
            logger.warning(
                f"❌ API ошибка: {request.method} {request.url.path} → {response.status_code}"
            )
        else:
            logger.info(
                f"✅ API ответ: {request.method} {request.url.path} → {response.status_code}"
            )
    return response


# ---------------------------------------------------------------------------
# Обработчики исключений: единый формат {"message", "error_code"}
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int, message: str, error_code: str, headers: dict | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "error_code": error_code},
        headers=headers,
    )


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    error_code = getattr(exc.error_code, "value", exc.error_code)
    return _error_response(exc.status_code, exc.detail, error_code, exc.headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(
        exc.status_code, str(exc.detail), "HTTP_ERROR", getattr(exc, "headers", None)
    )


def first_validation_message(exc: RequestValidationError) -> str:
    """Возвращает первое сообщение об ошибке валидации в виде "<поле>: <текст>"."""
    errors = exc.errors()
    if not errors:
        return "The given data was invalid."
    error = errors[0]
    location = [
        str(part)
        for part in error.get("loc", ())
        if part not in ("body", "query", "path", "header")
    ]
    message = str(error.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = first_validation_message(exc)
    logger.warning(f"Ошибка валидации {request.method} {request.url.path}: {message}")
    return _error_response(422, message, ErrorCode.VALIDATION_ERROR.value)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"💥 Критическая ошибка API: {request.method} {request.url.path}")
    logger.opt(exception=exc).error(f"Детали ошибки: {str(exc)[:1000]}")
    return _error_response(422, GENERIC_ERROR_MESSAGE, ErrorCode.UNEXPECTED_ERROR.value)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(todos_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    setup_uvicorn_logging()
    logger.info("🔧 Инициализация сервисов...")

    # Проверяем подключение к базе данных
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("✅ База данных подключена")
    except Exception as e:
        logger.error(f"❌ Ошибка базы данных: {e}")
        raise

    await init_db()
    logger.info(f"⚙️ Конфигурация: {settings.get_config_source()}, демо-режим: {settings.is_demo}")


if __name__ == "__main__":
    import uvicorn

    from taskhub.config.uvicorn_config import get_uvicorn_config

    uvicorn.run(**get_uvicorn_config())
