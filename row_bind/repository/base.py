"""Repository base class.

Thin wrapper over RowLoader for DDD-oriented usage: one repository per
record type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from row_bind.adapters.protocol import CursorSource
from row_bind.core.iterator import LazyResult
from row_bind.core.loader import RowLoader

T = TypeVar("T")


class Repository(Generic[T]):
    """Base repository bound to a single record type.

    Subclasses define concrete data access methods that build a
    CursorSource and delegate to the loader.

    Args:
        loader: Loader used for binding.
        record_type: Record class every row is bound to.
        aliases: Column-name to member-name mapping applied to every query.
    """

    def __init__(
        self,
        loader: RowLoader,
        record_type: type[T],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self.loader = loader
        self.record_type = record_type
        self.aliases = aliases

    def fetch_one(self, source: CursorSource) -> T | None:
        return self.loader.first(self.record_type, source, aliases=self.aliases)

    def each(self, source: CursorSource) -> LazyResult[T]:
        return self.loader.each(self.record_type, source, aliases=self.aliases)

    def fetch_all(self, source: CursorSource) -> list[T]:
        return self.loader.to_list(self.record_type, source, aliases=self.aliases)

    def by_key(self, source: CursorSource, key: Any = None) -> dict[Any, T]:
        """Bind all rows into a dict keyed by ``key(record)`` or ``record.key()``."""
        return self.loader.keyed_map(self.record_type, {}, source, key=key, aliases=self.aliases)
