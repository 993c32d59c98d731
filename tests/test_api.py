"""End-to-end tests of the JSON API on an in-memory database."""
from __future__ import annotations

from fastapi.testclient import TestClient


def _create(client: TestClient, payload: dict) -> dict:
    response = client.post("/employees", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_then_fetch_employee(client: TestClient, employee_payload) -> None:
    created = _create(client, employee_payload())

    employee = created["employee"]
    salary = created["salary"]
    assert employee["id"] > 0
    assert salary["toDate"] is None
    assert salary["fromDate"] == "2020-03-01"
    assert salary["employeeId"] == employee["id"]

    response = client.get(f"/employees/{employee['id']}")

    assert response.status_code == 200
    body = response.json()
    for key in ("name", "ssn", "dob", "address", "city", "country", "zip", "phone", "joinDate"):
        assert body[key] == employee_payload()[key]
    assert body["exitDate"] is None
    assert body["currentSalary"] == {"title": "Software Engineer", "salary": 90000}


def test_missing_employee_returns_404(client: TestClient) -> None:
    response = client.get("/employees/4242")

    assert response.status_code == 404
    assert response.json() == {"detail": "Employee not found"}


def test_validation_failure_returns_field_message(client: TestClient, employee_payload) -> None:
    response = client.post("/employees", json=employee_payload(ssn="12-345-6789", salary=100))

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "ssn: SSN must be in format XXX-XX-XXXX" in detail
    assert "salary: Salary must be at least $20,000" in detail


def test_duplicate_ssn_is_a_generic_server_error(client: TestClient, employee_payload) -> None:
    _create(client, employee_payload())

    response = client.post("/employees", json=employee_payload(name="John Roe"))

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create employee"}
    assert client.get("/employees").json()["total"] == 1


def test_promotion_closes_previous_salary(client: TestClient, employee_payload) -> None:
    employee_id = _create(client, employee_payload())["employee"]["id"]

    response = client.post(
        f"/employees/{employee_id}/salaries",
        json={"fromDate": "2024-01-01", "title": "Senior Software Engineer", "salary": 120000},
    )

    assert response.status_code == 201
    new_record = response.json()
    assert new_record["toDate"] is None
    assert new_record["title"] == "Senior Software Engineer"

    history = client.get(f"/employees/{employee_id}/salaries").json()
    assert [record["id"] for record in history][0] == new_record["id"]
    assert history[1]["toDate"] == "2024-01-01"
    assert [record for record in history if record["toDate"] is None] == [new_record]

    current = client.get(f"/employees/{employee_id}").json()["currentSalary"]
    assert current == {"title": "Senior Software Engineer", "salary": 120000}


def test_salary_for_unknown_employee_returns_404(client: TestClient) -> None:
    response = client.post(
        "/employees/999/salaries",
        json={"fromDate": "2024-01-01", "title": "Lead", "salary": 120000},
    )

    assert response.status_code == 404


def test_salary_starting_before_current_record_is_rejected(client: TestClient, employee_payload) -> None:
    employee_id = _create(client, employee_payload())["employee"]["id"]

    response = client.post(
        f"/employees/{employee_id}/salaries",
        json={"fromDate": "2019-01-01", "title": "Lead", "salary": 120000},
    )

    assert response.status_code == 400
    assert len(client.get(f"/employees/{employee_id}/salaries").json()) == 1


def test_salary_history_of_unknown_employee_is_empty(client: TestClient) -> None:
    response = client.get("/employees/999/salaries")

    assert response.status_code == 200
    assert response.json() == []


def test_listing_pages_and_total(client: TestClient, employee_payload) -> None:
    for index in range(5):
        _create(client, employee_payload(name=f"Person {index}", ssn=f"100-00-000{index}"))

    first = client.get("/employees", params={"page": 1, "limit": 2}).json()
    last = client.get("/employees", params={"page": 3, "limit": 2}).json()
    beyond = client.get("/employees", params={"page": 9, "limit": 2}).json()

    assert [employee["name"] for employee in first["employees"]] == ["Person 0", "Person 1"]
    assert len(last["employees"]) == 1
    assert beyond["employees"] == []
    assert first["total"] == last["total"] == beyond["total"] == 5


def test_bad_paging_values_fall_back_to_defaults(client: TestClient, employee_payload) -> None:
    _create(client, employee_payload())

    response = client.get("/employees", params={"page": "abc", "limit": "-3"})

    assert response.status_code == 200
    assert response.json()["total"] == 1


def test_search_by_name_and_title(client: TestClient, employee_payload) -> None:
    _create(client, employee_payload(name="Jane Doe", ssn="111-11-1111", title="Data Analyst"))
    _create(client, employee_payload(name="Janet Roe", ssn="222-22-2222", title="Product Manager"))
    _create(client, employee_payload(name="Bob Smith", ssn="333-33-3333", title="Data Analyst"))

    by_name = client.get("/employees/search", params={"name": "JAN"}).json()
    by_both = client.get("/employees/search", params={"name": "jan", "title": "analyst"}).json()
    by_title = client.get("/employees/search", params={"title": "analyst"}).json()

    assert by_name["total"] == 2
    assert [employee["name"] for employee in by_both["employees"]] == ["Jane Doe"]
    assert by_both["total"] == 1
    assert by_title["total"] == 2


def test_title_statistics(client: TestClient, employee_payload) -> None:
    jane = _create(client, employee_payload(ssn="111-11-1111", salary=80000))["employee"]
    _create(client, employee_payload(name="Bob Smith", ssn="333-33-3333", salary=95000))
    client.post(
        f"/employees/{jane['id']}/salaries",
        json={"fromDate": "2023-01-01", "title": "Engineering Manager", "salary": 130000},
    )

    response = client.get("/titles")

    assert response.status_code == 200
    assert response.json() == [
        {"title": "Engineering Manager", "minSalary": 130000, "maxSalary": 130000, "employeeCount": 1},
        {"title": "Software Engineer", "minSalary": 80000, "maxSalary": 95000, "employeeCount": 2},
    ]


def test_form_options_publish_client_constraints(client: TestClient) -> None:
    options = client.get("/employees/form-options").json()

    assert len(options["countries"]) == 30
    assert options["ageRange"] == {"min": 22, "max": 64}
    assert options["serverAgeRange"] == {"min": 18, "max": 100}
    assert options["minSalary"] == 20000


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_salary_beyond_column_range_is_a_validation_error(client: TestClient, employee_payload) -> None:
    response = client.post("/employees", json=employee_payload(salary=10**20))

    assert response.status_code == 400
    assert "salary: Salary must be at most $2,147,483,647" in response.json()["detail"]
    assert client.get("/employees").json()["total"] == 0


def test_employee_id_beyond_column_range_is_rejected(client: TestClient) -> None:
    huge = 10**20
    salary = {"fromDate": "2024-01-01", "title": "Lead", "salary": 120000}

    responses = [
        client.get(f"/employees/{huge}"),
        client.get(f"/employees/{huge}/salaries"),
        client.post(f"/employees/{huge}/salaries", json=salary),
    ]

    for response in responses:
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Validation error: employee_id")


def test_largest_employee_id_is_simply_missing(client: TestClient) -> None:
    response = client.get(f"/employees/{2**63 - 1}")

    assert response.status_code == 404


def test_huge_page_falls_back_to_first_page(client: TestClient, employee_payload) -> None:
    _create(client, employee_payload())

    response = client.get("/employees", params={"page": 10**20, "limit": 10})

    assert response.status_code == 200
    assert len(response.json()["employees"]) == 1
