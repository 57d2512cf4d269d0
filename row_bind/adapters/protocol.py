"""Cursor boundary protocols.

The binding engine never issues queries itself. It asks a CursorSource to
open a Cursor and pulls rows from it one at a time.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """Forward-only row cursor."""

    def column_names(self) -> Sequence[str]:
        """Column names in result order."""
        ...

    def advance(self) -> bool:
        """Move to the next row. Returns False when no rows remain."""
        ...

    def cell(self, index: int) -> str | None:
        """Text of the cell at *index* (0-based) in the current row, or None."""
        ...

    def close(self) -> None:
        """Release the cursor. Must be safe to call more than once."""
        ...


@runtime_checkable
class CursorSource(Protocol):
    """Executes a query and hands back an open cursor."""

    def open_cursor(self) -> Cursor:
        """Execute and return a cursor positioned before the first row."""
        ...
