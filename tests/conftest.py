"""Shared fixtures: database files built by sqlite3 and page images built byte by byte."""

import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest

from builders import USERS_SQL, build_leaf_page, encode_cell, schema_cell, write_database


@pytest.fixture
def users_db(tmp_path: Path) -> Path:
    """Page size 4096, table users on page 2 with three rows a, b, c."""
    cells = [encode_cell(i, [i, name]) for i, name in enumerate(["a", "b", "c"], start=1)]
    return write_database(
        tmp_path / "users.db",
        [schema_cell(1, "table", "users", 2, USERS_SQL)],
        [build_leaf_page(cells, 4096)],
    )


@pytest.fixture
def make_sqlite_db(tmp_path: Path) -> Callable[..., Path]:
    """Create a real database file with the sqlite3 module."""

    def _make(statements: list[str], name: str = "sample.db", page_size: int | None = None) -> Path:
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            if page_size is not None:
                conn.execute(f"PRAGMA page_size = {page_size}")
            for statement in statements:
                conn.execute(statement)
            conn.commit()
        finally:
            conn.close()
        return path

    return _make


@pytest.fixture
def sample_db(make_sqlite_db) -> Path:
    """Two small tables, an index and an AUTOINCREMENT table (creates sqlite_sequence)."""
    return make_sqlite_db(
        [
            "CREATE TABLE apples (id integer primary key autoincrement, name text, color text)",
            "CREATE TABLE oranges (id integer primary key, name text, description text)",
            "CREATE INDEX idx_apples_color ON apples (color)",
            "INSERT INTO apples (name, color) VALUES ('Granny Smith', 'Light Green')",
            "INSERT INTO apples (name, color) VALUES ('Fuji', 'Red')",
            "INSERT INTO apples (name, color) VALUES ('Honeycrisp', 'Blush Red')",
            "INSERT INTO apples (name, color) VALUES ('Golden Delicious', 'Yellow')",
            "INSERT INTO oranges (name, description) VALUES ('Mandarin', 'great for snacking')",
            "INSERT INTO oranges (name, description) VALUES ('Navel', NULL)",
        ]
    )
