"""SQLAlchemy session helpers and schema bootstrap."""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.logger import get_logger, timeit
from app.models import Base

from .engine import create_sync_engine

LOGGER = get_logger(__name__)


def get_sessionmaker(url: str | None = None, **kwargs) -> sessionmaker:
    """Return a ``sessionmaker`` bound to a freshly created engine."""

    engine = create_sync_engine(url, **kwargs)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create the employee tables when they do not exist yet."""

    with timeit("Schema bootstrap", logger=LOGGER, unit="tables") as timer:
        Base.metadata.create_all(engine)
        timer.set_total(len(Base.metadata.tables))
