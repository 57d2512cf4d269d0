"""In-memory row source, for rows that are already in hand."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any


class RowsCursor:
    """Cursor over an in-memory sequence of rows."""

    def __init__(self, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        self._columns = list(columns)
        self._rows = iter(rows)
        self._row: Sequence[Any] | None = None
        self.closed = False

    def column_names(self) -> list[str]:
        return list(self._columns)

    def advance(self) -> bool:
        if self.closed:
            raise RuntimeError("Cursor is closed")
        self._row = next(self._rows, None)
        return self._row is not None

    def cell(self, index: int) -> str | None:
        if self._row is None:
            raise IndexError("Cursor is not positioned on a row")
        value = self._row[index]
        return None if value is None else str(value)

    def close(self) -> None:
        self.closed = True


class RowsSource:
    """CursorSource over a fixed list of rows.

    Every opened cursor starts again from the first row. Opened cursors are
    kept in ``cursors`` so their state can be inspected.
    """

    def __init__(self, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        self._columns = list(columns)
        self._rows = [tuple(row) for row in rows]
        self.cursors: list[RowsCursor] = []

    def open_cursor(self) -> RowsCursor:
        cursor = RowsCursor(self._columns, self._rows)
        self.cursors.append(cursor)
        return cursor
