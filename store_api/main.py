"""Главный файл приложения FastAPI"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from store_api import db
from store_api.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from store_api.errors import format_validation_errors
from store_api.logging_config import setup_logging
from store_api.routers import health, products, users

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ошибки валидации тела запроса -> 400 со списком полей."""
    errors = format_validation_errors(exc.errors(), skip_loc="body")
    logger.info(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"errors": errors})


def create_app() -> FastAPI:
    setup_logging(LOG_LEVEL)

    app = FastAPI(
        title="Store MCP API",
        version="1.0.0",
        description="CRUD API for users and products backed by MongoDB, also exposed as MCP tools",
        docs_url="/api-docs",
    )

    # Настройка CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Подключение роутеров
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)

    @app.on_event("startup")
    async def on_startup():
        """Подключение к MongoDB и создание индексов при старте."""
        database = await db.connect()
        await db.ensure_indexes(database)

    @app.on_event("shutdown")
    async def on_shutdown():
        await db.close()

    return app


app = create_app()


def run() -> None:
    """Точка входа: uvicorn на HOST:PORT из конфигурации."""
    logger.info(f"Starting server on {HOST}:{PORT}, docs at /api-docs")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
