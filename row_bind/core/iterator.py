"""Lazy, single-pass iteration over a cursor.

ResultIterator owns one cursor from open to close. Rows are pulled one at
a time; binders are derived once from the cursor's columns before the first
row is read. Any failure closes the cursor before the error propagates.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import ExitStack, closing, contextmanager
from typing import Any, Generic, TypeVar

from row_bind.adapters.protocol import Cursor, CursorSource
from row_bind.conversion.registry import ConverterRegistry
from row_bind.core.enums import IteratorState
from row_bind.core.exceptions import CursorError, NoElementError
from row_bind.mapping.accessor import AccessorResolver
from row_bind.mapping.binder import derive_binders
from row_bind.mapping.materializer import RowMaterializer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResultIterator(Generic[T]):
    """Forward-only iterator producing one record per cursor row.

    States: UNOPENED -> POSITIONED -> EXHAUSTED -> CLOSED. CLOSED is
    terminal and reachable from every state. Each method is serialized on
    a per-iterator lock, but a has_next()/next() pair is not atomic: do not
    share one iterator between concurrent consumers.
    """

    def __init__(
        self,
        record_type: type[T],
        source: CursorSource,
        resolver: AccessorResolver,
        registry: ConverterRegistry,
        aliases: Mapping[str, str] | None = None,
        ignore_unknown: bool = False,
    ) -> None:
        self._record_type = record_type
        self._source = source
        self._resolver = resolver
        self._registry = registry
        self._aliases = aliases
        self._ignore_unknown = ignore_unknown
        self._state = IteratorState.UNOPENED
        self._positioned = False
        self._cursor: Cursor | None = None
        self._width = 0
        self._materializer: RowMaterializer[T] | None = None
        self._resources = ExitStack()
        self._lock = threading.RLock()

    @property
    def state(self) -> IteratorState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is IteratorState.CLOSED

    @contextmanager
    def _close_on_error(self) -> Iterator[None]:
        try:
            yield
        except BaseException:
            self.close()
            raise

    def _open(self) -> None:
        name = self._record_type.__name__
        try:
            cursor = self._source.open_cursor()
        except Exception as e:
            raise CursorError(f"Unable to open cursor for {name}: {e}") from e
        self._cursor = self._resources.enter_context(closing(cursor))
        logger.debug("Opened cursor for %s", name)

        try:
            columns = list(cursor.column_names())
        except Exception as e:
            raise CursorError(f"Unable to read column names for {name}: {e}") from e
        self._width = len(columns)
        binders = derive_binders(
            self._record_type,
            columns,
            self._resolver,
            self._registry,
            aliases=self._aliases,
            ignore_unknown=self._ignore_unknown,
        )
        self._materializer = RowMaterializer(self._record_type, binders)
        self._state = IteratorState.POSITIONED

    def _current_cursor(self) -> Cursor:
        if self._cursor is None:
            raise CursorError(f"Cursor for {self._record_type.__name__} is not open")
        return self._cursor

    def _advance(self) -> bool:
        cursor = self._current_cursor()
        try:
            return bool(cursor.advance())
        except Exception as e:
            raise CursorError(f"Unable to load next row from cursor: {e}") from e

    def _read_cells(self) -> list[Any]:
        cursor = self._current_cursor()
        try:
            return [cursor.cell(index) for index in range(self._width)]
        except Exception as e:
            raise CursorError(f"Unable to read row from cursor: {e}") from e

    def has_next(self) -> bool:
        """Return True if a row is available, advancing the cursor only if needed.

        Reaching the end of the rows closes the cursor.
        """
        with self._lock:
            if self._state is IteratorState.CLOSED:
                return False
            with self._close_on_error():
                if self._state is IteratorState.UNOPENED:
                    self._open()
                if not self._positioned:
                    self._positioned = self._advance()
                if not self._positioned:
                    self._state = IteratorState.EXHAUSTED
                    self.close()
                return self._positioned

    def next(self) -> T:
        """Materialize the row found by the last has_next().

        Raises:
            NoElementError: If no row is available.
        """
        with self._lock:
            materializer = self._materializer
            if not self._positioned or materializer is None:
                raise NoElementError()
            with self._close_on_error():
                self._positioned = False
                return materializer.map_one(self._read_cells())

    def close(self) -> None:
        """Close the cursor. Safe to call more than once."""
        with self._lock:
            if self._state is IteratorState.CLOSED:
                return
            self._state = IteratorState.CLOSED
            self._positioned = False
            try:
                self._resources.close()
            except Exception as e:
                raise CursorError(f"Unable to close cursor: {e}") from e
            finally:
                self._cursor = None
            logger.debug("Closed cursor for %s", self._record_type.__name__)

    def __iter__(self) -> ResultIterator[T]:
        return self

    def __next__(self) -> T:
        if self.has_next():
            return self.next()
        raise StopIteration

    def __enter__(self) -> ResultIterator[T]:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class LazyResult(Generic[T]):
    """Re-iterable view of a query's records.

    Every ``iter()`` opens a fresh cursor from the source; nothing is read
    until the first element is requested.
    """

    def __init__(
        self,
        record_type: type[T],
        source: CursorSource,
        resolver: AccessorResolver,
        registry: ConverterRegistry,
        aliases: Mapping[str, str] | None = None,
        ignore_unknown: bool = False,
    ) -> None:
        self._record_type = record_type
        self._source = source
        self._resolver = resolver
        self._registry = registry
        self._aliases = aliases
        self._ignore_unknown = ignore_unknown

    def iterator(self) -> ResultIterator[T]:
        """Create a new ResultIterator over a fresh cursor."""
        return ResultIterator(
            self._record_type,
            self._source,
            self._resolver,
            self._registry,
            aliases=self._aliases,
            ignore_unknown=self._ignore_unknown,
        )

    def __iter__(self) -> ResultIterator[T]:
        return self.iterator()
