"""Request and response payloads for the employee API."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.core.validation import (
    COUNTRIES,
    MAX_SALARY,
    MIN_SALARY,
    PHONE_PATTERN,
    SERVER_AGE_RANGE,
    SSN_PATTERN,
    ZIP_PATTERN,
    is_age_within,
    normalize_phone,
)


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _require_text(value: str, label: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{label} is required")
    return stripped


def _check_salary(value: int) -> int:
    if value < MIN_SALARY:
        raise ValueError(f"Salary must be at least ${MIN_SALARY:,}")
    if value > MAX_SALARY:
        raise ValueError(f"Salary must be at most ${MAX_SALARY:,}")
    return value


class NewEmployeeWithSalary(CamelModel):
    """Payload for hiring an employee together with the initial salary."""

    name: str
    ssn: str
    dob: date
    address: str
    city: str
    country: str
    zip: str
    phone: str
    join_date: date
    exit_date: date | None = None
    title: str
    salary: int

    @field_validator("name", "address", "city", "title")
    @classmethod
    def _non_empty(cls, value: str, info) -> str:
        return _require_text(value, info.field_name.capitalize())

    @field_validator("ssn")
    @classmethod
    def _ssn_format(cls, value: str) -> str:
        value = value.strip()
        if not SSN_PATTERN.match(value):
            raise ValueError("SSN must be in format XXX-XX-XXXX")
        return value

    @field_validator("dob")
    @classmethod
    def _age_range(cls, value: date) -> date:
        low, high = SERVER_AGE_RANGE
        if not is_age_within(value, SERVER_AGE_RANGE):
            raise ValueError(f"Employee must be between {low} and {high} years old")
        return value

    @field_validator("country")
    @classmethod
    def _known_country(cls, value: str) -> str:
        value = value.strip()
        if value not in COUNTRIES:
            raise ValueError("Please select a valid country")
        return value

    @field_validator("zip")
    @classmethod
    def _zip_format(cls, value: str) -> str:
        value = value.strip()
        if not ZIP_PATTERN.match(value):
            raise ValueError("ZIP code must be exactly 5 digits")
        return value

    @field_validator("phone")
    @classmethod
    def _phone_format(cls, value: str) -> str:
        value = normalize_phone(value)
        if not PHONE_PATTERN.match(value):
            raise ValueError("Phone must be in format XXX-XXX-XXXX")
        return value

    @field_validator("salary")
    @classmethod
    def _minimum_salary(cls, value: int) -> int:
        return _check_salary(value)

    @model_validator(mode="after")
    def _exit_after_join(self) -> "NewEmployeeWithSalary":
        if self.exit_date is not None and self.exit_date < self.join_date:
            raise ValueError("Exit date cannot be before the join date")
        return self


class NewSalaryRecord(CamelModel):
    """Payload for a promotion or raise; the new record is always current."""

    from_date: date
    title: str
    salary: int

    @field_validator("title")
    @classmethod
    def _non_empty_title(cls, value: str) -> str:
        return _require_text(value, "Title")

    @field_validator("salary")
    @classmethod
    def _minimum_salary(cls, value: int) -> int:
        return _check_salary(value)


class CurrentSalaryOut(CamelModel):
    title: str
    salary: int


class EmployeeOut(CamelModel):
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
    exit_date: date | None = None
    current_salary: CurrentSalaryOut | None = None


class SalaryRecordOut(CamelModel):
    id: int
    employee_id: int
    from_date: date
    to_date: date | None = None
    title: str
    salary: int


class EmployeeListResponse(CamelModel):
    employees: list[EmployeeOut]
    total: int


class EmployeeCreatedResponse(CamelModel):
    employee: EmployeeOut
    salary: SalaryRecordOut


class TitleStatisticsOut(CamelModel):
    title: str
    min_salary: int
    max_salary: int
    employee_count: int


class AgeRange(CamelModel):
    min: int
    max: int


class FormOptions(CamelModel):
    """Constraints a data-entry form applies before submitting an employee."""

    countries: list[str]
    job_titles: list[str]
    age_range: AgeRange
    server_age_range: AgeRange
    min_salary: int
    ssn_pattern: str
    phone_pattern: str
    zip_pattern: str
