"""Mapping protocols.

KeyedRecord is the capability keyed_map looks for on each record.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

K = TypeVar("K", covariant=True)


@runtime_checkable
class KeyedRecord(Protocol[K]):
    """A record that can name its own map key."""

    def key(self) -> K:
        """Return the key this record is stored under."""
        ...
