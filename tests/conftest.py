"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from row_bind.conversion.registry import ConverterRegistry
from row_bind.core.loader import RowLoader
from row_bind.mapping.accessor import AccessorResolver


class FakeCursor:
    """Cursor double that records how it was driven.

    Args:
        columns: Column names.
        rows: Row values, returned as text by cell().
        fail_on_advance: Raise on the advance call with this 0-based number.
        fail_on_close: Raise from close().
    """

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        fail_on_advance: int | None = None,
        fail_on_close: bool = False,
    ) -> None:
        self.columns = list(columns)
        self.rows = [tuple(row) for row in rows]
        self.fail_on_advance = fail_on_advance
        self.fail_on_close = fail_on_close
        self.advance_calls = 0
        self.close_calls = 0
        self.closed = False
        self._position = -1

    def column_names(self) -> list[str]:
        return list(self.columns)

    def advance(self) -> bool:
        if self.fail_on_advance is not None and self.advance_calls == self.fail_on_advance:
            self.advance_calls += 1
            raise OSError("connection reset")
        self.advance_calls += 1
        self._position += 1
        return self._position < len(self.rows)

    def cell(self, index: int) -> str | None:
        value = self.rows[self._position][index]
        return None if value is None else str(value)

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True
        if self.fail_on_close:
            raise OSError("close failed")


class FakeSource:
    """CursorSource double; every open_cursor() builds a new FakeCursor."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]] = (),
        fail_on_open: bool = False,
        **cursor_options: Any,
    ) -> None:
        self.columns = columns
        self.rows = rows
        self.fail_on_open = fail_on_open
        self.cursor_options = cursor_options
        self.cursors: list[FakeCursor] = []

    def open_cursor(self) -> FakeCursor:
        if self.fail_on_open:
            raise OSError("database unavailable")
        cursor = FakeCursor(self.columns, self.rows, **self.cursor_options)
        self.cursors.append(cursor)
        return cursor

    @property
    def cursor(self) -> FakeCursor:
        """The most recently opened cursor."""
        return self.cursors[-1]


@pytest.fixture
def make_source():
    """Factory for FakeSource instances.

    Usage:
        source = make_source(["id", "name"], [(1, "Ada")], fail_on_advance=1)
    """

    def _make(columns: Sequence[str], rows: Sequence[Sequence[Any]] = (), **options: Any) -> FakeSource:
        return FakeSource(columns, rows, **options)

    return _make


@pytest.fixture
def registry() -> ConverterRegistry:
    return ConverterRegistry()


@pytest.fixture
def resolver() -> AccessorResolver:
    return AccessorResolver()


@pytest.fixture
def loader(registry: ConverterRegistry, resolver: AccessorResolver) -> RowLoader:
    return RowLoader(registry=registry, resolver=resolver)
