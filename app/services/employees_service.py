"""Service logic for employee listings, hiring and salary changes."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from math import ceil
from typing import Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.logger import get_logger, timeit
from app.repositories import EmployeeRepository, EmployeeRow, SalaryRow, TitleStatisticsRow
from app.schemas.employees import NewEmployeeWithSalary, NewSalaryRecord

from .errors import EmployeeNotFoundError, SalaryPeriodError

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CurrentSalary:
    """Title and amount of the salary record that is still open."""

    title: str
    salary: int


@dataclass(frozen=True)
class EmployeeDetail:
    """Employee attributes annotated with the current salary, if any."""

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
    current_salary: CurrentSalary | None


@dataclass(frozen=True)
class EmployeePage:
    """Paginated collection of ``EmployeeDetail`` items."""

    items: list[EmployeeDetail]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 1
        return ceil(self.total / self.limit)


def _detail(row: EmployeeRow, current: SalaryRow | None) -> EmployeeDetail:
    return EmployeeDetail(
        id=row.id,
        name=row.name,
        ssn=row.ssn,
        dob=row.dob,
        address=row.address,
        city=row.city,
        country=row.country,
        zip=row.zip,
        phone=row.phone,
        join_date=row.join_date,
        exit_date=row.exit_date,
        current_salary=(
            CurrentSalary(title=current.title, salary=current.salary)
            if current is not None
            else None
        ),
    )


class EmployeeService:
    """Facade over ``EmployeeRepository`` owning transactions and paging rules."""

    def __init__(
        self,
        session: Session,
        repository: EmployeeRepository | None = None,
        *,
        max_page_size: int | None = None,
    ) -> None:
        self._session = session
        self._repository = repository or EmployeeRepository(session)
        if max_page_size is None:
            max_page_size = get_settings().pagination.max_page_size
        self._max_page_size = max_page_size

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Commit the enclosed statements together or not at all."""

        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def _normalize_paging(self, page: int, limit: int) -> tuple[int, int]:
        """Clamp both values into range: page to at least 1, limit to 1..max."""

        return max(page, 1), min(max(limit, 1), self._max_page_size)

    def list_employees(self, *, page: int, limit: int) -> EmployeePage:
        """Return one page of employees ordered by id, with the full count."""

        return self.search_employees(page=page, limit=limit)

    def search_employees(
        self,
        *,
        name: str | None = None,
        title: str | None = None,
        page: int,
        limit: int,
    ) -> EmployeePage:
        """Return employees whose name and current title contain the given text.

        The name filter runs in the database. The title filter runs on the
        fetched page, so with a title filter ``total`` counts the matches on
        this page only; without one it is the count of all name matches.
        """

        page, limit = self._normalize_paging(page, limit)
        offset = (page - 1) * limit

        rows = self._repository.fetch_employees(name=name, limit=limit, offset=offset)
        current = self._repository.current_salaries(row.id for row in rows)
        items = [_detail(row, current.get(row.id)) for row in rows]

        if title:
            needle = title.lower()
            items = [
                item
                for item in items
                if item.current_salary is not None
                and needle in item.current_salary.title.lower()
            ]
            total = len(items)
        else:
            total = self._repository.count_employees(name=name)

        LOGGER.debug(
            "Employee page fetched",
            extra={"name": name, "title": title, "page": page, "limit": limit, "total": total},
        )
        return EmployeePage(items=items, total=total, page=page, limit=limit)

    def get_employee(self, employee_id: int) -> EmployeeDetail:
        row = self._repository.get_employee(employee_id)
        if row is None:
            raise EmployeeNotFoundError(employee_id)
        return _detail(row, self._repository.get_current_salary(employee_id))

    def get_salary_history(self, employee_id: int) -> list[SalaryRow]:
        """Return every salary record of the employee, newest start date first."""

        return self._repository.list_salaries(employee_id)

    def get_current_salary(self, employee_id: int) -> SalaryRow | None:
        return self._repository.get_current_salary(employee_id)

    def create_employee(
        self, payload: NewEmployeeWithSalary
    ) -> tuple[EmployeeDetail, SalaryRow]:
        """Insert an employee and its initial salary record atomically.

        The initial record starts on the join date and stays open. A
        duplicate SSN raises ``IntegrityError`` and nothing is stored.
        """

        try:
            with self._transaction():
                employee = self._repository.insert_employee(
                    name=payload.name,
                    ssn=payload.ssn,
                    dob=payload.dob,
                    address=payload.address,
                    city=payload.city,
                    country=payload.country,
                    zip=payload.zip,
                    phone=payload.phone,
                    join_date=payload.join_date,
                    exit_date=payload.exit_date,
                )
                salary = self._repository.insert_salary(
                    employee_id=employee.id,
                    from_date=payload.join_date,
                    title=payload.title,
                    salary=payload.salary,
                )
        except IntegrityError:
            LOGGER.warning("Employee insert rejected by a store constraint")
            raise

        LOGGER.info("Created employee %s as %s", employee.id, salary.title)
        return _detail(employee, salary), salary

    def add_salary_record(self, employee_id: int, payload: NewSalaryRecord) -> SalaryRow:
        """Close the current salary record and open a new one in one transaction.

        The current record ends on the new record's start date. A start date
        earlier than the current record's start raises ``SalaryPeriodError``.
        """

        with self._transaction():
            if self._repository.get_employee(employee_id) is None:
                raise EmployeeNotFoundError(employee_id)

            current = self._repository.get_current_salary(employee_id, for_update=True)
            if current is not None:
                if payload.from_date < current.from_date:
                    raise SalaryPeriodError(
                        "fromDate must not be earlier than the current record's "
                        f"start date {current.from_date.isoformat()}"
                    )
                self._repository.close_salary(current.id, payload.from_date)

            record = self._repository.insert_salary(
                employee_id=employee_id,
                from_date=payload.from_date,
                title=payload.title,
                salary=payload.salary,
            )

        LOGGER.info(
            "Salary record %s opened for employee %s",
            record.id,
            employee_id,
            extra={"closed_record": current.id if current is not None else None},
        )
        return record

    def get_title_statistics(self) -> list[TitleStatisticsRow]:
        """Return min/max salary and distinct headcount per title, by title."""

        with timeit("Title statistics", logger=LOGGER, unit="titles") as timer:
            rows = self._repository.title_statistics()
            timer.set_total(len(rows))
        return rows
