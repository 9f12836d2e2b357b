"""Shared test fixtures."""

from pathlib import Path

import pytest

from importdb import create_service
from userimport import ensure_schema
from userimport.schema import USER_TABLE

HEADER = "nombre,apellido,edad,email"


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def users_service(db_service):
    """SQLite service with an empty users table."""
    ensure_schema(db_service, USER_TABLE)
    return db_service


@pytest.fixture
def write_users_file(tmp_path):
    """Write a users file (header + given lines) and return its path."""

    def _write(lines: list[str], name: str = "users.csv", header: str = HEADER) -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def batch_insert_calls(db_service, monkeypatch):
    """Record the size of every batch_insert call made against db_service."""
    calls: list[int] = []
    original = db_service.batch_insert

    def spy(table, columns, rows):
        calls.append(len(rows))
        return original(table, columns, rows)

    monkeypatch.setattr(db_service, "batch_insert", spy)
    return calls


def count_users(service, table: str = USER_TABLE) -> int:
    with service.transaction():
        rows = service.execute(f"SELECT COUNT(*) AS cnt FROM {table}")
    return rows[0]["cnt"]
