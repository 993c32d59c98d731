"""Request-scoped values that are prefixed to every log line."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_context_var: contextvars.ContextVar[dict[str, object]] = contextvars.ContextVar(
    "log_context", default={}
)


class LogContext:
    """Holds the key-value pairs bound to the running request."""

    @contextmanager
    def scoped(self, **values: object) -> Iterator[None]:
        """Bind ``values`` for the duration of the block, then restore."""

        bound = {key: value for key, value in values.items() if value is not None}
        token = _context_var.set({**_context_var.get(), **bound})
        try:
            yield
        finally:
            _context_var.reset(token)

    def render(self) -> str:
        context = _context_var.get()
        if not context:
            return ""
        return " ".join(f"{key}={value}" for key, value in context.items()) + " "


log_context = LogContext()


class ContextFilter(logging.Filter):
    """Stamp ``record.context`` on the thread that emits the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "context", None) is None:
            record.context = log_context.render()
        return True
