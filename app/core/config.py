"""Configuration for the employee records service."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_FALSE_VALUES = {"0", "false", "False", "no"}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the relational store."""

    driver: str = "sqlite"
    host: str = "127.0.0.1"
    port: int = 3306
    user: str = "employees"
    password: str = "employees"
    name: str = "employees.db"

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            host=os.getenv("DB_HOST", defaults.host),
            port=int(os.getenv("DB_PORT", defaults.port)),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            name=os.getenv("DB_NAME", defaults.name),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.driver.startswith("sqlite")

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.is_sqlite:
            if self.name in ("", ":memory:"):
                return f"{self.driver}://"
            return f"{self.driver}:///{self.name}"
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class PaginationSettings:
    """Bounds applied to paginated listings."""

    default_page_size: int = 10
    max_page_size: int = 100

    @classmethod
    def from_env(cls) -> "PaginationSettings":
        defaults = cls()
        default_size = int(os.getenv("DEFAULT_PAGE_SIZE", defaults.default_page_size))
        max_size = int(os.getenv("MAX_PAGE_SIZE", defaults.max_page_size))
        if default_size < 1 or max_size < 1:
            raise ValueError("Page sizes must be positive integers.")
        return cls(default_page_size=min(default_size, max_size), max_page_size=max_size)


@dataclass(frozen=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    pagination: PaginationSettings
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_dir: Optional[Path] = Path("logs")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        raw_log_dir = os.getenv("LOG_DIR", "logs").strip()
        return cls(
            database=DatabaseSettings.from_env(),
            pagination=PaginationSettings.from_env(),
            sqlalchemy_echo=os.getenv("SQLALCHEMY_ECHO", "false") not in _FALSE_VALUES,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(raw_log_dir) if raw_log_dir else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": {
                "driver": settings.database.driver,
                "host": settings.database.host,
                "port": settings.database.port,
                "name": settings.database.name,
            },
            "pagination": {
                "default_page_size": settings.pagination.default_page_size,
                "max_page_size": settings.pagination.max_page_size,
            },
        },
    )
    return settings
