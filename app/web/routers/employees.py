"""JSON routes for employees and their salary history."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.validation import (
    COUNTRIES,
    FORM_AGE_RANGE,
    JOB_TITLES,
    MAX_ID,
    MIN_SALARY,
    PHONE_PATTERN,
    SERVER_AGE_RANGE,
    SSN_PATTERN,
    ZIP_PATTERN,
)
from app.schemas.employees import (
    AgeRange,
    EmployeeCreatedResponse,
    EmployeeListResponse,
    EmployeeOut,
    FormOptions,
    NewEmployeeWithSalary,
    NewSalaryRecord,
    SalaryRecordOut,
)
from app.services import (
    EmployeeNotFoundError,
    EmployeePage,
    EmployeeService,
    SalaryPeriodError,
)
from app.web.dependencies import get_employee_service
from app.web.utils.query_params import (
    PaginationParams,
    extract_pagination,
    extract_search_term,
)

router = APIRouter(prefix="/employees", tags=["employees"])
LOGGER = get_logger(__name__)


def _page_response(page: EmployeePage) -> EmployeeListResponse:
    return EmployeeListResponse(
        employees=[EmployeeOut.model_validate(item) for item in page.items],
        total=page.total,
    )


def _pagination(request: Request) -> PaginationParams:
    settings = get_settings()
    return extract_pagination(
        request.query_params,
        default_limit=settings.pagination.default_page_size,
        max_limit=settings.pagination.max_page_size,
    )


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeListResponse:
    pagination = _pagination(request)
    try:
        page = service.list_employees(page=pagination.page, limit=pagination.limit)
    except SQLAlchemyError:
        LOGGER.exception("Error fetching employees")
        raise HTTPException(status_code=500, detail="Failed to fetch employees")
    return _page_response(page)


@router.get("/search", response_model=EmployeeListResponse)
def search_employees(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeListResponse:
    pagination = _pagination(request)
    name = extract_search_term(request.query_params, key="name")
    title = extract_search_term(request.query_params, key="title")
    try:
        page = service.search_employees(
            name=name,
            title=title,
            page=pagination.page,
            limit=pagination.limit,
        )
    except SQLAlchemyError:
        LOGGER.exception("Error searching employees")
        raise HTTPException(status_code=500, detail="Failed to search employees")
    return _page_response(page)


@router.get("/form-options", response_model=FormOptions)
def form_options() -> FormOptions:
    """Constraints for the data-entry form, including its narrower age range."""

    return FormOptions(
        countries=list(COUNTRIES),
        job_titles=list(JOB_TITLES),
        age_range=AgeRange(min=FORM_AGE_RANGE[0], max=FORM_AGE_RANGE[1]),
        server_age_range=AgeRange(min=SERVER_AGE_RANGE[0], max=SERVER_AGE_RANGE[1]),
        min_salary=MIN_SALARY,
        ssn_pattern=SSN_PATTERN.pattern,
        phone_pattern=PHONE_PATTERN.pattern,
        zip_pattern=ZIP_PATTERN.pattern,
    )


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int = Path(..., le=MAX_ID),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeOut:
    try:
        employee = service.get_employee(employee_id)
    except EmployeeNotFoundError:
        raise HTTPException(status_code=404, detail="Employee not found")
    except SQLAlchemyError:
        LOGGER.exception("Error fetching employee")
        raise HTTPException(status_code=500, detail="Failed to fetch employee")
    return EmployeeOut.model_validate(employee)


@router.post(
    "",
    response_model=EmployeeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    payload: NewEmployeeWithSalary,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeCreatedResponse:
    try:
        employee, salary = service.create_employee(payload)
    except SQLAlchemyError:
        LOGGER.exception("Error creating employee")
        raise HTTPException(status_code=500, detail="Failed to create employee")
    return EmployeeCreatedResponse(
        employee=EmployeeOut.model_validate(employee),
        salary=SalaryRecordOut.model_validate(salary),
    )


@router.get("/{employee_id}/salaries", response_model=list[SalaryRecordOut])
def list_salaries(
    employee_id: int = Path(..., le=MAX_ID),
    service: EmployeeService = Depends(get_employee_service),
) -> list[SalaryRecordOut]:
    try:
        history = service.get_salary_history(employee_id)
    except SQLAlchemyError:
        LOGGER.exception("Error fetching salary history")
        raise HTTPException(status_code=500, detail="Failed to fetch salary history")
    return [SalaryRecordOut.model_validate(record) for record in history]


@router.post(
    "/{employee_id}/salaries",
    response_model=SalaryRecordOut,
    status_code=status.HTTP_201_CREATED,
)
def add_salary(
    payload: NewSalaryRecord,
    employee_id: int = Path(..., le=MAX_ID),
    service: EmployeeService = Depends(get_employee_service),
) -> SalaryRecordOut:
    try:
        record = service.add_salary_record(employee_id, payload)
    except EmployeeNotFoundError:
        raise HTTPException(status_code=404, detail="Employee not found")
    except SalaryPeriodError as exc:
        raise HTTPException(status_code=400, detail=f"Validation error: {exc}")
    except SQLAlchemyError:
        LOGGER.exception("Error adding salary record")
        raise HTTPException(status_code=500, detail="Failed to add salary record")
    return SalaryRecordOut.model_validate(record)
