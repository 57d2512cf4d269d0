"""Cursor adapters - connect drivers and in-memory rows to the binder."""

from __future__ import annotations

from row_bind.adapters.dbapi import DBAPICursor, QuerySource
from row_bind.adapters.memory import RowsCursor, RowsSource
from row_bind.adapters.protocol import Cursor, CursorSource

__all__ = [
    "Cursor",
    "CursorSource",
    "DBAPICursor",
    "QuerySource",
    "RowsCursor",
    "RowsSource",
]
