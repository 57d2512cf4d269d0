"""Result iterator states."""

from __future__ import annotations

from enum import Enum


class IteratorState(Enum):
    """Lifecycle of a ResultIterator over one cursor."""

    UNOPENED = "unopened"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"
