"""Repositories wrapping the SQL used by the service layer."""

from .employee_repository import (
    EmployeeRepository,
    EmployeeRow,
    SalaryRow,
    TitleStatisticsRow,
)

__all__ = [
    "EmployeeRepository",
    "EmployeeRow",
    "SalaryRow",
    "TitleStatisticsRow",
]
