"""Parsing helpers for pagination and search query parameters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from starlette.datastructures import QueryParams

from app.core.validation import MAX_ID

ParamsMapping = Mapping[str, str] | QueryParams


@dataclass(frozen=True)
class PaginationParams:
    page: int
    limit: int


def parse_positive_int(
    value: str | None, *, default: int, maximum: int | None = None
) -> int:
    """Parse a positive integer, falling back to ``default`` on bad input.

    Values above ``maximum`` count as bad input.
    """

    try:
        parsed = int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    if parsed < 1 or (maximum is not None and parsed > maximum):
        return default
    return parsed


def extract_pagination(
    params: ParamsMapping,
    *,
    default_limit: int,
    max_limit: int,
    page_param: str = "page",
    limit_param: str = "limit",
) -> PaginationParams:
    # Keeps the row offset inside a 64-bit integer.
    max_page = MAX_ID // max_limit
    page = parse_positive_int(params.get(page_param), default=1, maximum=max_page)
    limit = parse_positive_int(params.get(limit_param), default=default_limit)
    return PaginationParams(page=page, limit=min(limit, max_limit))


def extract_search_term(params: ParamsMapping, *, key: str) -> str | None:
    value = params.get(key)
    if not value:
        return None
    stripped = value.strip()
    return stripped or None
