"""Router package for the FastAPI application."""

from .employees import router as employees_router
from .titles import router as titles_router

__all__ = ["employees_router", "titles_router"]
