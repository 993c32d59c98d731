"""Data access for employees and their salary history."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sqlalchemy import Select, distinct, func, select, update

from app.models import Employee, EmployeeSalary

from .base import LIKE_ESCAPE, BaseRepository


@dataclass(frozen=True)
class EmployeeRow:
    id: int
    name: str
    ssn: str
    dob: date
    address: str
    city: str
    country: str
    zip: str
    phone: str
    join_date: date
    exit_date: date | None


@dataclass(frozen=True)
class SalaryRow:
    id: int
    employee_id: int
    from_date: date
    to_date: date | None
    title: str
    salary: int


@dataclass(frozen=True)
class TitleStatisticsRow:
    title: str
    min_salary: int
    max_salary: int
    employee_count: int


def _employee_row(employee: Employee) -> EmployeeRow:
    return EmployeeRow(
        id=int(employee.id),
        name=employee.name,
        ssn=employee.ssn,
        dob=employee.dob,
        address=employee.address,
        city=employee.city,
        country=employee.country,
        zip=employee.zip,
        phone=employee.phone,
        join_date=employee.join_date,
        exit_date=employee.exit_date,
    )


def _salary_row(salary: EmployeeSalary) -> SalaryRow:
    return SalaryRow(
        id=int(salary.id),
        employee_id=int(salary.employee_id),
        from_date=salary.from_date,
        to_date=salary.to_date,
        title=salary.title,
        salary=int(salary.salary),
    )


class EmployeeRepository(BaseRepository):
    """Repository encapsulating the SQL for employees and salary records."""

    def _filter_by_name(self, statement: Select, name: str | None) -> Select:
        pattern = self._search_pattern(name)
        if pattern is None:
            return statement
        return statement.where(func.lower(Employee.name).like(pattern, escape=LIKE_ESCAPE))

    def count_employees(self, *, name: str | None = None) -> int:
        statement = self._filter_by_name(select(func.count()).select_from(Employee), name)
        return self._scalar(statement)

    def fetch_employees(
        self,
        *,
        name: str | None = None,
        limit: int,
        offset: int,
    ) -> list[EmployeeRow]:
        statement = (
            self._filter_by_name(select(Employee), name)
            .order_by(Employee.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return [_employee_row(employee) for employee in self._session.scalars(statement)]

    def get_employee(self, employee_id: int) -> EmployeeRow | None:
        employee = self._session.get(Employee, employee_id)
        if employee is None:
            return None
        return _employee_row(employee)

    def insert_employee(
        self,
        *,
        name: str,
        ssn: str,
        dob: date,
        address: str,
        city: str,
        country: str,
        zip: str,
        phone: str,
        join_date: date,
        exit_date: date | None = None,
    ) -> EmployeeRow:
        """Insert an employee and flush so the generated id is available.

        Raises ``IntegrityError`` when the SSN is already taken.
        """

        employee = Employee(
            name=name,
            ssn=ssn,
            dob=dob,
            address=address,
            city=city,
            country=country,
            zip=zip,
            phone=phone,
            join_date=join_date,
            exit_date=exit_date,
        )
        self._session.add(employee)
        self._session.flush()
        return _employee_row(employee)

    def list_salaries(self, employee_id: int) -> list[SalaryRow]:
        statement = (
            select(EmployeeSalary)
            .where(EmployeeSalary.employee_id == employee_id)
            .order_by(EmployeeSalary.from_date.desc(), EmployeeSalary.id.desc())
        )
        return [_salary_row(salary) for salary in self._session.scalars(statement)]

    def get_current_salary(
        self,
        employee_id: int,
        *,
        for_update: bool = False,
    ) -> SalaryRow | None:
        statement = (
            select(EmployeeSalary)
            .where(
                EmployeeSalary.employee_id == employee_id,
                EmployeeSalary.to_date.is_(None),
            )
            .order_by(EmployeeSalary.id.desc())
            .limit(1)
        )
        if for_update:
            statement = statement.with_for_update()
        salary = self._session.scalars(statement).first()
        if salary is None:
            return None
        return _salary_row(salary)

    def current_salaries(self, employee_ids: Iterable[int]) -> dict[int, SalaryRow]:
        """Return the current salary of each employee that has one."""

        ids = list(employee_ids)
        if not ids:
            return {}
        statement = select(EmployeeSalary).where(
            EmployeeSalary.employee_id.in_(ids),
            EmployeeSalary.to_date.is_(None),
        )
        return {
            int(salary.employee_id): _salary_row(salary)
            for salary in self._session.scalars(statement)
        }

    def close_salary(self, salary_id: int, to_date: date) -> None:
        self._session.execute(
            update(EmployeeSalary)
            .where(EmployeeSalary.id == salary_id)
            .values(to_date=to_date)
        )

    def insert_salary(
        self,
        *,
        employee_id: int,
        from_date: date,
        title: str,
        salary: int,
        to_date: date | None = None,
    ) -> SalaryRow:
        record = EmployeeSalary(
            employee_id=employee_id,
            from_date=from_date,
            to_date=to_date,
            title=title,
            salary=salary,
        )
        self._session.add(record)
        self._session.flush()
        return _salary_row(record)

    def title_statistics(self) -> list[TitleStatisticsRow]:
        """Aggregate every salary record ever stored, grouped by title."""

        statement = (
            select(
                EmployeeSalary.title,
                func.min(EmployeeSalary.salary).label("min_salary"),
                func.max(EmployeeSalary.salary).label("max_salary"),
                func.count(distinct(EmployeeSalary.employee_id)).label("employee_count"),
            )
            .group_by(EmployeeSalary.title)
            .order_by(EmployeeSalary.title.asc())
        )
        rows: list[TitleStatisticsRow] = []
        for row in self._session.execute(statement).mappings():
            rows.append(
                TitleStatisticsRow(
                    title=str(row["title"]),
                    min_salary=int(row["min_salary"]),
                    max_salary=int(row["max_salary"]),
                    employee_count=int(row["employee_count"]),
                )
            )
        return rows
