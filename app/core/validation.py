"""Field rules shared by request schemas and the published form constraints."""
from __future__ import annotations

import re
from datetime import date

SSN_PATTERN = re.compile(r"^\d{3}-\d{2}-\d{4}$")
PHONE_PATTERN = re.compile(r"^\d{3}-\d{3}-\d{4}$")
DISPLAY_PHONE_PATTERN = re.compile(r"^\((\d{3})\) (\d{3})-(\d{4})$")
ZIP_PATTERN = re.compile(r"^\d{5}$")

MIN_SALARY = 20000
# Upper bound of the 32-bit salary column.
MAX_SALARY = 2**31 - 1
# Upper bound of the 64-bit id columns.
MAX_ID = 2**63 - 1

# Enforced by the API.
SERVER_AGE_RANGE: tuple[int, int] = (18, 100)
# Narrower range the data-entry form applies before submitting.
FORM_AGE_RANGE: tuple[int, int] = (22, 64)

COUNTRIES: tuple[str, ...] = (
    "United States",
    "Canada",
    "Mexico",
    "United Kingdom",
    "France",
    "Germany",
    "Italy",
    "Spain",
    "Portugal",
    "Netherlands",
    "Belgium",
    "Switzerland",
    "Austria",
    "Sweden",
    "Norway",
    "Denmark",
    "Finland",
    "Ireland",
    "Greece",
    "Poland",
    "Japan",
    "China",
    "South Korea",
    "India",
    "Australia",
    "New Zealand",
    "Brazil",
    "Argentina",
    "Chile",
    "South Africa",
)

# Suggested in the form; titles are free text in storage.
JOB_TITLES: tuple[str, ...] = (
    "Software Engineer",
    "Senior Software Engineer",
    "Product Manager",
    "HR Specialist",
    "HR Manager",
    "Marketing Coordinator",
    "Marketing Specialist",
    "Data Analyst",
    "Customer Service Representative",
    "Sales Representative",
    "Operations Manager",
    "Financial Analyst",
)


def calculate_age(dob: date, *, today: date | None = None) -> int:
    """Return completed years between ``dob`` and ``today``."""

    reference = today or date.today()
    age = reference.year - dob.year
    if (reference.month, reference.day) < (dob.month, dob.day):
        age -= 1
    return age


def is_age_within(
    dob: date,
    bounds: tuple[int, int] = SERVER_AGE_RANGE,
    *,
    today: date | None = None,
) -> bool:
    low, high = bounds
    return low <= calculate_age(dob, today=today) <= high


def normalize_phone(value: str) -> str:
    """Return ``value`` in the canonical ``DDD-DDD-DDDD`` form.

    The display form ``(DDD) DDD-DDDD`` is converted; anything else is
    returned stripped and left for the pattern check to reject.
    """

    candidate = value.strip()
    match = DISPLAY_PHONE_PATTERN.match(candidate)
    if match:
        return "-".join(match.groups())
    return candidate
