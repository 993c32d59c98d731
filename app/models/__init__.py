"""Database models for the employee records domain."""
from __future__ import annotations

from .base import Base
from .employees import Employee, EmployeeSalary

__all__ = [
    "Base",
    "Employee",
    "EmployeeSalary",
]
