"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.services import EmployeeService


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield a request-scoped session from the application's session factory."""

    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_employee_service(session: Session = Depends(get_db_session)) -> EmployeeService:
    """Return a service instance per request."""

    return EmployeeService(
        session,
        max_page_size=get_settings().pagination.max_page_size,
    )
