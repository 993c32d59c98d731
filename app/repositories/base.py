"""Shared helpers for repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

LIKE_ESCAPE = "\\"


class BaseRepository:
    """Base repository providing convenience helpers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _scalar(self, statement: Executable, params: dict[str, Any] | None = None) -> int:
        """Execute ``statement`` and return the scalar integer result."""

        value = self._session.execute(statement, params or {}).scalar() or 0
        return int(value)

    @staticmethod
    def _search_pattern(value: str | None) -> str | None:
        """Return a lower-cased ``LIKE`` pattern matching ``value`` anywhere."""

        if not value:
            return None
        escaped = (
            value.lower()
            .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
            .replace("%", f"{LIKE_ESCAPE}%")
            .replace("_", f"{LIKE_ESCAPE}_")
        )
        return f"%{escaped}%"
