"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from app.core.config import get_settings
from app.core.logger import get_logger

LOGGER = get_logger(__name__)


def get_sqlalchemy_url() -> str:
    """Return the configured SQLAlchemy URL."""

    settings = get_settings()
    return settings.database.sqlalchemy_url


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)

    is_sqlite = resolved_url.startswith("sqlite")
    if is_sqlite:
        connect_args = dict(options.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        options["connect_args"] = connect_args
    else:
        options.setdefault("pool_pre_ping", True)

    if url is None and not is_sqlite:
        masked_url = "{driver}://{user}:{pwd}@{host}:{port}/{name}".format(
            driver=settings.database.driver,
            user=settings.database.user,
            pwd="***" if settings.database.password else "",
            host=settings.database.host,
            port=settings.database.port,
            name=settings.database.name,
        )
    else:
        masked_url = resolved_url.split("@")[-1]
    LOGGER.debug("Creating SQLAlchemy engine", extra={"url": masked_url})

    engine = create_engine(resolved_url, **options)
    if is_sqlite:
        _enable_sqlite_foreign_keys(engine)
    return engine
