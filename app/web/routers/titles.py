"""JSON routes for per-title salary statistics."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.core.logger import get_logger
from app.schemas.employees import TitleStatisticsOut
from app.services import EmployeeService
from app.web.dependencies import get_employee_service

router = APIRouter(prefix="/titles", tags=["titles"])
LOGGER = get_logger(__name__)


@router.get("", response_model=list[TitleStatisticsOut])
def title_statistics(
    service: EmployeeService = Depends(get_employee_service),
) -> list[TitleStatisticsOut]:
    try:
        rows = service.get_title_statistics()
    except SQLAlchemyError:
        LOGGER.exception("Error fetching title statistics")
        raise HTTPException(status_code=500, detail="Failed to fetch title statistics")
    return [TitleStatisticsOut.model_validate(row) for row in rows]
