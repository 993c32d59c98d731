"""ORM models for employees and their salary history."""
from __future__ import annotations

from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Employee(Base):
    """Personal and employment details of a single employee."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    ssn: Mapped[str] = mapped_column(String(11), nullable=False, unique=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    country: Mapped[str] = mapped_column(String(64), nullable=False)
    zip: Mapped[str] = mapped_column(String(5), nullable=False)
    phone: Mapped[str] = mapped_column(String(12), nullable=False)
    join_date: Mapped[date] = mapped_column(Date, nullable=False)
    exit_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class EmployeeSalary(Base):
    """A title and salary held by an employee over a date interval.

    ``to_date`` is ``NULL`` for the current record.
    """

    __tablename__ = "employee_salaries"
    __table_args__ = (
        Index("ix_employee_salaries_employee_from", "employee_id", "from_date"),
        # At most one open interval per employee where partial indexes exist.
        Index(
            "uq_employee_salaries_current",
            "employee_id",
            unique=True,
            sqlite_where=text("to_date IS NULL"),
            postgresql_where=text("to_date IS NULL"),
        ).ddl_if(dialect=("sqlite", "postgresql")),
    )

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        _ID_TYPE, ForeignKey("employees.id"), nullable=False
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False)
    to_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    title: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)
