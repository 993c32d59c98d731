"""Shared fixtures: an in-memory database per test and an API client on top of it."""
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.engine import create_sync_engine
from app.main import create_app
from app.models import Base


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_sync_engine("sqlite://", poolclass=StaticPool, echo=False)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    with TestClient(create_app(session_factory)) as test_client:
        yield test_client


@pytest.fixture
def employee_payload() -> Callable[..., dict[str, Any]]:
    """Build a valid camelCase hiring payload, overriding selected fields."""

    def _build(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "Jane Doe",
            "ssn": "123-45-6789",
            "dob": "1990-01-01",
            "address": "1 Main Street",
            "city": "Springfield",
            "country": "United States",
            "zip": "12345",
            "phone": "555-123-4567",
            "joinDate": "2020-03-01",
            "exitDate": None,
            "title": "Software Engineer",
            "salary": 90000,
        }
        payload.update(overrides)
        return payload

    return _build
