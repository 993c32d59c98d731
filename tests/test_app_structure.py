from fastapi import FastAPI
from starlette.datastructures import QueryParams

from app.core.config import DatabaseSettings, get_settings
from app.core.logger import get_logger, init_logging, log_context, shutdown_logging
from app.main import create_app
from app.web.errors import format_validation_errors
from app.web.utils.query_params import extract_pagination, extract_search_term


def test_create_app_registers_employee_routes(session_factory) -> None:
    app = create_app(session_factory)
    assert isinstance(app, FastAPI)
    paths = {route.path for route in app.routes}
    assert {
        "/employees",
        "/employees/search",
        "/employees/{employee_id}",
        "/employees/{employee_id}/salaries",
        "/titles",
    } <= paths


def test_get_settings_uses_default_configuration(monkeypatch) -> None:
    for name in (
        "DB_DRIVER",
        "DB_HOST",
        "DB_PORT",
        "DB_NAME",
        "SQLALCHEMY_ECHO",
        "DEFAULT_PAGE_SIZE",
        "MAX_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.database.driver == "sqlite"
    assert settings.database.sqlalchemy_url == "sqlite:///employees.db"
    assert settings.sqlalchemy_echo is False
    assert settings.pagination.default_page_size == 10
    assert settings.pagination.max_page_size == 100


def test_server_database_url_includes_credentials() -> None:
    database = DatabaseSettings(
        driver="mysql+pymysql",
        host="db",
        port=3307,
        user="hr",
        password="secret",
        name="employees",
    )

    assert database.sqlalchemy_url == "mysql+pymysql://hr:secret@db:3307/employees"
    assert DatabaseSettings(name=":memory:").sqlalchemy_url == "sqlite://"


def test_extract_pagination_clamps_limit() -> None:
    params = QueryParams("page=2&limit=500")

    pagination = extract_pagination(params, default_limit=10, max_limit=100)

    assert pagination.page == 2
    assert pagination.limit == 100


def test_extract_pagination_defaults_on_garbage() -> None:
    pagination = extract_pagination(
        QueryParams("page=zero&limit=0"), default_limit=10, max_limit=100
    )

    assert (pagination.page, pagination.limit) == (1, 10)


def test_extract_search_term_strips_blank_values() -> None:
    assert extract_search_term(QueryParams("name=%20%20"), key="name") is None
    assert extract_search_term(QueryParams("name=%20Jane%20"), key="name") == "Jane"
    assert extract_search_term(QueryParams(""), key="title") is None


def test_format_validation_errors_drops_location_prefix() -> None:
    message = format_validation_errors(
        [
            {"loc": ("body", "zip"), "msg": "Value error, ZIP code must be exactly 5 digits"},
            {"loc": ("body",), "msg": "Value error, Exit date cannot be before the join date"},
        ]
    )

    assert message == (
        "zip: ZIP code must be exactly 5 digits; "
        "Exit date cannot be before the join date"
    )


def test_extract_pagination_rejects_pages_past_the_offset_range() -> None:
    pagination = extract_pagination(
        QueryParams(f"page={10**20}&limit=50"), default_limit=10, max_limit=100
    )

    assert (pagination.page, pagination.limit) == (1, 50)


def test_init_logging_writes_request_context_to_file(tmp_path) -> None:
    init_logging(level="DEBUG", log_dir=tmp_path)
    try:
        with log_context.scoped(method="GET", path="/employees"):
            get_logger("employees.test").info("listing employees")
    finally:
        shutdown_logging()

    content = (tmp_path / "employees.log").read_text(encoding="utf-8")
    assert "employees.test | method=GET path=/employees listing employees" in content
