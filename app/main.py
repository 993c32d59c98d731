"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from fastapi import FastAPI, Request
from sqlalchemy.orm import sessionmaker

from app.core import get_logger, get_settings
from app.core.logger import init_logging, log_context, shutdown_logging
from app.db.session import get_sessionmaker, init_schema
from app.web.errors import register_exception_handlers
from app.web.routers import employees_router, titles_router

LOGGER = get_logger(__name__)


def create_app(session_factory: sessionmaker | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``session_factory`` defaults to one bound to the configured database.
    """

    settings = get_settings()
    init_logging(level=settings.log_level, log_dir=settings.log_dir)

    app = FastAPI(title="Employee Records", version="0.1.0")
    app.state.session_factory = session_factory or get_sessionmaker()

    register_exception_handlers(app)
    app.include_router(employees_router)
    app.include_router(titles_router)

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        with log_context.scoped(method=request.method, path=request.url.path):
            return await call_next(request)

    @app.on_event("startup")
    def create_schema() -> None:
        try:
            init_schema(app.state.session_factory.kw["bind"])
        except Exception:  # pragma: no cover - fail fast on startup issues
            LOGGER.exception("Failed to initialise the database schema")
            raise

    @app.on_event("shutdown")
    def flush_logs() -> None:
        LOGGER.info("Shutting down")
        shutdown_logging()

    @app.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
