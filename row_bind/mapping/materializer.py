"""Row materializer - builds one record instance per row.

Pydantic models are allocated with ``model_construct()``; dataclasses and
plain classes are called without arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from row_bind.core.exceptions import InstantiationError
from row_bind.mapping.accessor import is_pydantic_model
from row_bind.mapping.binder import FieldBinder

T = TypeVar("T")


def instantiate(record_type: type[T]) -> T:
    """Allocate a fresh, empty instance of *record_type*."""
    try:
        if is_pydantic_model(record_type):
            return record_type.model_construct()  # type: ignore[attr-defined, no-any-return]
        return record_type()
    except Exception as e:
        raise InstantiationError(record_type, f"{type(e).__name__}: {e}") from e


def materialize(record_type: type[T], binders: Sequence[FieldBinder], cells: Sequence[Any]) -> T:
    """Create a *record_type* instance and write every bound cell into it.

    A record that fails part-way is not rolled back; the caller drops it.
    """
    instance = instantiate(record_type)
    for binder in binders:
        binder.bind(instance, cells[binder.index])
    return instance


class RowMaterializer(Generic[T]):
    """Materializes rows for a fixed record type and binder list.

    Args:
        record_type: The class to construct for each row.
        binders: Binders derived for the row's column layout.
    """

    def __init__(self, record_type: type[T], binders: Sequence[FieldBinder]) -> None:
        self._record_type = record_type
        self._binders = tuple(binders)

    @property
    def record_type(self) -> type[T]:
        return self._record_type

    @property
    def binders(self) -> tuple[FieldBinder, ...]:
        return self._binders

    def map_one(self, cells: Sequence[Any]) -> T:
        """Map a single row of cells to a record."""
        return materialize(self._record_type, self._binders, cells)
