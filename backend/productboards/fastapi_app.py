"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Run with:
    uvicorn productboards.fastapi_app:create_fastapi_app --factory --port 5001
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from productboards.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from productboards.config.settings import Config
from productboards.domain.exceptions import (
    AccessDeniedError,
    AiFailureReason,
    AiUnavailableError,
    DomainValidationError,
    EntityNotFoundError,
    StoreError,
)
from productboards.observability.metrics import observe_request_latency
from productboards.presentation.api import (
    ai_router,
    alert_preferences_router,
    boards_router,
    conversations_router,
    metrics_router,
    product_links_router,
    products_router,
    shared_router,
)

logger = logging.getLogger(__name__)

AI_STATUS = {
    AiFailureReason.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    AiFailureReason.QUOTA_EXHAUSTED: status.HTTP_402_PAYMENT_REQUIRED,
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class RequestLatencyMiddleware(BaseHTTPMiddleware):
    """Records request latency per route template."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        observe_request_latency(
            request.method,
            getattr(route, "path", "unmatched"),
            response.status_code,
            time.perf_counter() - started,
        )
        return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP responses with an {"error": ...} body."""

    @app.exception_handler(DomainValidationError)
    async def validation_error_handler(request: Request, exc: DomainValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message)

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(request: Request, exc: AccessDeniedError):
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"[STORE ERROR] {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Store unavailable")

    @app.exception_handler(AiUnavailableError)
    async def ai_unavailable_handler(request: Request, exc: AiUnavailableError):
        status_code = AI_STATUS.get(exc.reason, status.HTTP_503_SERVICE_UNAVAILABLE)
        return _error(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"[VALIDATION ERROR] {errors}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Validation error", "details": jsonable_errors(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def jsonable_errors(errors: list) -> list:
    """Pydantic error entries may carry exception objects in `ctx`."""
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items()}
        for error in errors
    ]


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Dishka container; defaults to the production container
            (Prisma, Redis, AI gateway)
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

    if container is None:
        from productboards.setup.ioc.container import create_container

        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FastAPI application started. DI container initialized.")
        yield
        await container.close()
        logger.info("FastAPI application shutdown. DI container closed.")

    app = FastAPI(
        title="ProductBoards API",
        description="Shopping assistant chat, boards and price tracking",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(RequestLatencyMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(conversations_router)
    app.include_router(ai_router)
    app.include_router(boards_router)
    app.include_router(products_router)
    app.include_router(product_links_router)
    app.include_router(shared_router)
    app.include_router(alert_preferences_router)
    app.include_router(metrics_router)

    return app
