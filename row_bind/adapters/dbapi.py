"""DB-API 2.0 (PEP 249) adapter.

Works with any driver cursor that exposes ``description`` and
``fetchone()``, e.g. stdlib ``sqlite3``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _cell_text(value: Any) -> str | None:
    """Render a driver value as cell text."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


class DBAPICursor:
    """Cursor adapter over a PEP 249 cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._row: Sequence[Any] | None = None
        self._closed = False

    def column_names(self) -> list[str]:
        if self._cursor.description is None:
            return []
        return [desc[0] for desc in self._cursor.description]

    def advance(self) -> bool:
        row = self._cursor.fetchone()
        if row is None:
            self._row = None
            return False
        # Mapping rows (e.g. psycopg dict_row) are read in column order
        if isinstance(row, Mapping):
            row = list(row.values())
        self._row = row
        return True

    def cell(self, index: int) -> str | None:
        if self._row is None:
            raise IndexError("Cursor is not positioned on a row")
        return _cell_text(self._row[index])

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._cursor.close()

    @property
    def closed(self) -> bool:
        return self._closed


class QuerySource:
    """Executes *sql* on *connection* each time a cursor is opened.

    Args:
        connection: A PEP 249 connection.
        sql: Query text in the driver's parameter style.
        params: Optional parameters passed to ``cursor.execute``.
    """

    def __init__(
        self,
        connection: Any,
        sql: str,
        params: Mapping[str, Any] | Sequence[Any] | None = None,
    ) -> None:
        self._connection = connection
        self._sql = sql
        self._params = params

    def open_cursor(self) -> DBAPICursor:
        cursor = self._connection.cursor()
        try:
            if self._params is None:
                cursor.execute(self._sql)
            else:
                cursor.execute(self._sql, self._params)
        except Exception:
            cursor.close()
            raise
        return DBAPICursor(cursor)
