"""RowBind - bind query result rows to typed record instances."""

from __future__ import annotations

from row_bind.adapters.dbapi import DBAPICursor, QuerySource
from row_bind.adapters.memory import RowsSource
from row_bind.adapters.protocol import Cursor, CursorSource
from row_bind.conversion.registry import ConverterRegistry
from row_bind.core.config import BinderConfig, TemporalFormat
from row_bind.core.enums import IteratorState
from row_bind.core.exceptions import (
    ConstructionError,
    ConversionError,
    CursorError,
    FormatError,
    InstantiationError,
    MappingError,
    MissingKeyError,
    NoElementError,
    RowBindError,
    UnknownPropertyError,
    UnreadablePropertyError,
    UnresolvedTypeError,
    UnwritablePropertyError,
)
from row_bind.core.iterator import LazyResult, ResultIterator
from row_bind.core.loader import RowLoader
from row_bind.mapping.accessor import AccessorResolver
from row_bind.mapping.protocol import KeyedRecord
from row_bind.repository.base import Repository

__all__ = [
    # Loader
    "RowLoader",
    "LazyResult",
    "ResultIterator",
    "IteratorState",
    # Config
    "BinderConfig",
    "TemporalFormat",
    # Registries
    "ConverterRegistry",
    "AccessorResolver",
    # Cursors
    "Cursor",
    "CursorSource",
    "DBAPICursor",
    "QuerySource",
    "RowsSource",
    # Records
    "KeyedRecord",
    "Repository",
    # Exceptions
    "RowBindError",
    "ConversionError",
    "FormatError",
    "ConstructionError",
    "MappingError",
    "UnknownPropertyError",
    "UnwritablePropertyError",
    "UnreadablePropertyError",
    "UnresolvedTypeError",
    "InstantiationError",
    "MissingKeyError",
    "CursorError",
    "NoElementError",
]
