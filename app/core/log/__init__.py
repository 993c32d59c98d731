"""Logging for the API process: rich console output plus a daily log file.

Records are handed to a queue on the request thread and written by a
``QueueListener`` thread, so slow handlers never hold up a response.
"""
from __future__ import annotations

import logging
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
from threading import RLock

from rich.console import Console
from rich.logging import RichHandler

from .context import ContextFilter, log_context
from .timing import timeit

__all__ = [
    "get_logger",
    "init_logging",
    "log_context",
    "shutdown_logging",
    "timeit",
]

ROOT_LOGGER_NAME = "employees"
LOG_FILE_NAME = "employees.log"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"

_lock = RLock()
_active: tuple[int, Path | None] | None = None
_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _console_handler() -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
    return handler


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        when="midnight",
        encoding="utf-8",
    )
    handler.suffix = "%Y_%m_%d"
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def init_logging(*, level: str | int = "INFO", log_dir: Path | None = None) -> None:
    """Route records to the console and, when ``log_dir`` is set, to a daily file.

    Calling again with the same arguments keeps the running listener.
    """

    global _active, _listener, _queue_handler

    resolved = _resolve_level(level)
    key = (resolved, Path(log_dir) if log_dir else None)
    with _lock:
        if _active == key:
            return
        _stop_locked()

        handlers = [_console_handler()]
        if key[1] is not None:
            handlers.append(_file_handler(key[1]))

        log_queue: SimpleQueue = SimpleQueue()
        queue_handler = QueueHandler(log_queue)
        queue_handler.addFilter(ContextFilter())

        root = logging.getLogger()
        root.setLevel(resolved)
        root.addHandler(queue_handler)

        listener = QueueListener(log_queue, *handlers)
        listener.start()

        _queue_handler = queue_handler
        _listener = listener
        _active = key


def _stop_locked() -> None:
    global _active, _listener, _queue_handler

    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
    _active = None
    _listener = None
    _queue_handler = None


def shutdown_logging() -> None:
    """Flush queued records and detach the handlers installed by ``init_logging``."""

    with _lock:
        _stop_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER_NAME)
