import pytest
from sqlalchemy import text

from app.core import startup_checks


def test_schema_check_passes_when_tables_match(engine, monkeypatch):
    monkeypatch.setattr(startup_checks, "IS_TEST", False)

    startup_checks.ensure_storefront_schema(engine=engine)


def test_schema_check_reports_missing_table_and_column(engine, monkeypatch):
    monkeypatch.setattr(startup_checks, "IS_TEST", False)
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE payment"))
        connection.execute(text("DROP TABLE staff"))
        connection.execute(
            text(
                "CREATE TABLE staff (staff_id INTEGER PRIMARY KEY, store_id INTEGER, address_id INTEGER, "
                "first_name TEXT, last_name TEXT, email TEXT, username TEXT, active BOOLEAN, last_update DATETIME)"
            )
        )

    with pytest.raises(RuntimeError) as exc_info:
        startup_checks.ensure_storefront_schema(engine=engine)

    message = str(exc_info.value)
    assert "payment" in message
    assert "staff.password" in message


def test_schema_check_is_skipped_in_test_environment(monkeypatch):
    monkeypatch.setattr(startup_checks, "IS_TEST", True)

    class ExplodingEngine:
        def connect(self):
            raise AssertionError("should not connect")

    startup_checks.ensure_storefront_schema(engine=ExplodingEngine())
