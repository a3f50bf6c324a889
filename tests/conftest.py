"""Shared fixtures: a fresh SQLite database per test."""

import pytest

from clubwatch.database import connection, init_db


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Initialized database file, also installed as the default DB_PATH."""
    path = tmp_path / "clubwatch.db"
    monkeypatch.setattr(connection, "DB_PATH", path)
    init_db(path)
    return path
