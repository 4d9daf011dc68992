from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from shopsmart.api.routes import router
from shopsmart.core.config import Settings, get_settings
from shopsmart.core.db import Database
from shopsmart.core.logging import configure_logging, get_logger
from shopsmart.errors import ProductError
from shopsmart.middlewares.request_id import RequestIdMiddleware

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The storage handle is created here (or injected by tests) and kept on
    ``app.state.database``; the lifespan disposes it on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    database = database or Database(settings.database_url_resolved)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.db_create_all:
            database.create_all()
        logger.info(
            "%s started env=%s version=%s",
            settings.app_name,
            settings.environment,
            settings.app_version,
        )
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    @app.exception_handler(ProductError)
    async def product_error_handler(request: Request, exc: ProductError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # Unexpected error: keep internals in the log, not in the response.
        request_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled exception requestId=%s", request_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "ShopSmart Backend Service"

    app.include_router(router)
    return app
