"""RowLoader - binds query results to record instances.

The loader owns a ConverterRegistry and an AccessorResolver. Both are
plain objects created per loader (or injected), so separate loaders never
share conversion rules or accessor caches.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any, TypeVar

from row_bind.adapters.protocol import CursorSource
from row_bind.conversion.registry import ConverterRegistry
from row_bind.conversion.rules import ConversionRule
from row_bind.core.config import BinderConfig, TemporalFormat
from row_bind.core.exceptions import MissingKeyError
from row_bind.core.iterator import LazyResult, ResultIterator
from row_bind.mapping.accessor import AccessorResolver
from row_bind.mapping.protocol import KeyedRecord

T = TypeVar("T")
C = TypeVar("C")
M = TypeVar("M", bound=MutableMapping[Any, Any])


class RowLoader:
    """Synchronous result binder.

    Args:
        config: Binder configuration. Defaults to ``BinderConfig()``.
        registry: Converter registry. Built from ``config.temporal_format``
            when omitted.
        resolver: Accessor cache. A fresh one is created when omitted.
    """

    def __init__(
        self,
        config: BinderConfig | None = None,
        registry: ConverterRegistry | None = None,
        resolver: AccessorResolver | None = None,
    ) -> None:
        self.config = config or BinderConfig()
        self._registry = registry or ConverterRegistry(self.config.temporal_format)
        self._resolver = resolver or AccessorResolver()

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    @property
    def resolver(self) -> AccessorResolver:
        return self._resolver

    # --- Results ---

    def each(
        self,
        record_type: type[T],
        source: CursorSource,
        *,
        aliases: Mapping[str, str] | None = None,
    ) -> LazyResult[T]:
        """Lazily bind every row of *source* to a new *record_type*.

        Nothing is executed until the result is iterated.
        """
        return LazyResult(
            record_type,
            source,
            self._resolver,
            self._registry,
            aliases=aliases,
            ignore_unknown=self.config.ignore_unknown_columns,
        )

    def iterate(
        self,
        record_type: type[T],
        source: CursorSource,
        *,
        aliases: Mapping[str, str] | None = None,
    ) -> ResultIterator[T]:
        """Open a single-pass iterator; use it as a context manager."""
        return self.each(record_type, source, aliases=aliases).iterator()

    def first(
        self,
        record_type: type[T],
        source: CursorSource,
        *,
        aliases: Mapping[str, str] | None = None,
    ) -> T | None:
        """Bind the first row, or return None if there are no rows.

        The cursor is always closed, whether or not a row was produced.
        """
        with self.iterate(record_type, source, aliases=aliases) as records:
            return records.next() if records.has_next() else None

    def collect(
        self,
        record_type: type[T],
        container: C,
        source: CursorSource,
        *,
        aliases: Mapping[str, str] | None = None,
    ) -> C:
        """Append every bound record to *container* and return it.

        Lists (``append``) and set-like containers (``add``) are supported.
        """
        add = getattr(container, "append", None) or getattr(container, "add", None)
        if add is None:
            raise TypeError(f"{type(container).__name__} has neither append() nor add()")
        with self.iterate(record_type, source, aliases=aliases) as records:
            for record in records:
                add(record)
        return container

    def to_list(
        self,
        record_type: type[T],
        source: CursorSource,
        *,
        aliases: Mapping[str, str] | None = None,
    ) -> list[T]:
        """Bind all rows into a new list."""
        return self.collect(record_type, [], source, aliases=aliases)

    def keyed_map(
        self,
        record_type: type[T],
        mapping: M,
        source: CursorSource,
        *,
        key: Callable[[T], Any] | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> M:
        """Store every bound record in *mapping* under its key.

        The key is ``key(record)`` when given, otherwise ``record.key()``.
        A later record with the same key replaces the earlier one.

        Raises:
            MissingKeyError: If no key function is given and a record has
                no ``key()`` method.
        """
        with self.iterate(record_type, source, aliases=aliases) as records:
            for record in records:
                mapping[self._key_of(record, key)] = record
        return mapping

    @staticmethod
    def _key_of(record: Any, key: Callable[[Any], Any] | None) -> Any:
        if key is not None:
            return key(record)
        if isinstance(record, KeyedRecord) and callable(record.key):
            return record.key()
        raise MissingKeyError(type(record))

    # --- Conversion ---

    def register_converter(self, target_type: Any, rule: ConversionRule) -> None:
        """Install or replace the conversion rule for *target_type*."""
        self._registry.register(target_type, rule)

    def unregister_converter(self, target_type: Any) -> None:
        """Remove the conversion rule for *target_type*, if any."""
        self._registry.unregister(target_type)

    def set_temporal_format(self, temporal_format: TemporalFormat) -> None:
        """Replace the temporal format used for date and datetime members."""
        self._registry.set_temporal_format(temporal_format)

    @contextmanager
    def temporal_format(self, temporal_format: TemporalFormat) -> Iterator[TemporalFormat]:
        """Override the temporal format for the current thread or task."""
        with self._registry.temporal_format(temporal_format) as active:
            yield active
