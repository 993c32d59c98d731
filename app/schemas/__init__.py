"""Pydantic schemas for request and response payloads."""

from .employees import (
    AgeRange,
    CurrentSalaryOut,
    EmployeeCreatedResponse,
    EmployeeListResponse,
    EmployeeOut,
    FormOptions,
    NewEmployeeWithSalary,
    NewSalaryRecord,
    SalaryRecordOut,
    TitleStatisticsOut,
)

__all__ = [
    "AgeRange",
    "CurrentSalaryOut",
    "EmployeeCreatedResponse",
    "EmployeeListResponse",
    "EmployeeOut",
    "FormOptions",
    "NewEmployeeWithSalary",
    "NewSalaryRecord",
    "SalaryRecordOut",
    "TitleStatisticsOut",
]
