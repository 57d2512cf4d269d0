"""Contract tests for cursor protocol compliance."""

from __future__ import annotations

import sqlite3

import pytest

from row_bind.adapters.dbapi import DBAPICursor, QuerySource
from row_bind.adapters.memory import RowsCursor, RowsSource
from row_bind.adapters.protocol import Cursor, CursorSource


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE t (id INTEGER, label TEXT, data BLOB, note TEXT)")
    conn.execute("INSERT INTO t VALUES (1, 'a', X'6869', NULL)")
    conn.execute("INSERT INTO t VALUES (2, 'b', NULL, 'n')")
    conn.commit()
    yield conn
    conn.close()


class TestDBAPICursor:
    def test_implements_protocols(self, connection: sqlite3.Connection) -> None:
        source = QuerySource(connection, "SELECT id FROM t")
        assert isinstance(source, CursorSource)
        assert isinstance(source.open_cursor(), Cursor)

    def test_lifecycle(self, connection: sqlite3.Connection) -> None:
        cursor = QuerySource(connection, "SELECT id, label, data, note FROM t ORDER BY id").open_cursor()
        assert cursor.column_names() == ["id", "label", "data", "note"]

        assert cursor.advance()
        assert [cursor.cell(i) for i in range(4)] == ["1", "a", "hi", None]
        assert cursor.advance()
        assert cursor.cell(3) == "n"
        assert not cursor.advance()

        cursor.close()
        cursor.close()
        assert cursor.closed

    def test_params(self, connection: sqlite3.Connection) -> None:
        cursor = QuerySource(connection, "SELECT label FROM t WHERE id = ?", (2,)).open_cursor()
        assert cursor.advance()
        assert cursor.cell(0) == "b"
        cursor.close()

    def test_cell_before_advance(self, connection: sqlite3.Connection) -> None:
        cursor = DBAPICursor(connection.execute("SELECT id FROM t"))
        with pytest.raises(IndexError):
            cursor.cell(0)
        cursor.close()

    def test_bad_query_closes_driver_cursor(self) -> None:
        conn = sqlite3.connect(":memory:")
        with pytest.raises(sqlite3.OperationalError):
            QuerySource(conn, "SELECT * FROM missing").open_cursor()
        conn.close()


class TestRowsCursor:
    def test_implements_protocols(self) -> None:
        source = RowsSource(["id"], [(1,)])
        assert isinstance(source, CursorSource)
        assert isinstance(source.open_cursor(), Cursor)

    def test_lifecycle(self) -> None:
        cursor = RowsCursor(["id", "name"], [(1, "Ada"), (2, None)])
        assert cursor.column_names() == ["id", "name"]
        assert cursor.advance()
        assert (cursor.cell(0), cursor.cell(1)) == ("1", "Ada")
        assert cursor.advance()
        assert cursor.cell(1) is None
        assert not cursor.advance()
        cursor.close()
        assert cursor.closed

    def test_each_open_restarts(self) -> None:
        source = RowsSource(["id"], [(1,), (2,)])
        first, second = source.open_cursor(), source.open_cursor()
        assert first.advance() and second.advance()
        assert first.cell(0) == second.cell(0) == "1"
        assert len(source.cursors) == 2
