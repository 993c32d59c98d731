"""Service layer entrypoints for domain logic."""

from .employees_service import (
    CurrentSalary,
    EmployeeDetail,
    EmployeePage,
    EmployeeService,
)
from .errors import EmployeeNotFoundError, EmployeeRecordsError, SalaryPeriodError

__all__ = [
    "CurrentSalary",
    "EmployeeDetail",
    "EmployeeNotFoundError",
    "EmployeePage",
    "EmployeeRecordsError",
    "EmployeeService",
    "SalaryPeriodError",
]
