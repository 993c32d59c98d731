"""Domain errors raised by the service layer."""
from __future__ import annotations


class EmployeeRecordsError(Exception):
    """Base class for expected, client-facing failures."""


class EmployeeNotFoundError(EmployeeRecordsError):
    def __init__(self, employee_id: int) -> None:
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class SalaryPeriodError(EmployeeRecordsError):
    """A new salary record would end the current one before it started."""
