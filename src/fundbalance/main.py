"""FastAPI application entry point."""

import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fundbalance.config.settings import get_settings
from fundbalance.config.logging_config import setup_logging
from fundbalance.repositories.sqlalchemy.database import init_db, get_session
from fundbalance.repositories.sqlalchemy import SqlAlchemyPortfolioRepository
from fundbalance.api.routers import portfolio_router, rebalance_router
from fundbalance.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
)
from fundbalance.core.result import Result
from fundbalance.services import PortfolioService, default_buckets

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (PersistenceError, 500),
)


def seed_portfolio(lock: threading.RLock) -> None:
    """Insert the default buckets into an empty database."""
    session = get_session()
    try:
        service = PortfolioService(SqlAlchemyPortfolioRepository(session), lock=lock)
        service.seed_defaults(default_buckets())
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    if get_settings().seed_default_portfolio:
        seed_portfolio(app.state.portfolio_lock)
    logger.info("Database ready")
    yield
    # Shutdown (nothing to clean up)


def status_for(exc: AppError) -> int:
    """Map an application error to its HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def create_app() -> FastAPI:
    """Build the FastAPI application with its own store locks."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Bucket-based fund portfolio rebalancing",
        version=settings.app_version,
        lifespan=lifespan,
    )
    application.state.portfolio_lock = threading.RLock()
    application.state.history_lock = threading.RLock()

    application.include_router(portfolio_router)
    application.include_router(rebalance_router)

    @application.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status_code,
            content=Result.from_exception(exc).to_envelope(),
        )

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed request bodies with the standard envelope."""
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        logger.warning("%s %s invalid request: %s", request.method, request.url.path, details)
        return JSONResponse(
            status_code=422,
            content=Result.fail("INVALID_REQUEST", f"Invalid request parameters: {details}").to_envelope(),
        )

    @application.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Render unexpected failures with the standard envelope."""
        logger.exception("%s %s crashed", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=Result.fail("INTERNAL_ERROR", "Internal server error").to_envelope(),
        )

    @application.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @application.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return application


app = create_app()
