"""RowBind exception hierarchy.

All exceptions are RowBind-specific. Errors raised by a database driver
are wrapped in CursorError and chained, never exposed bare.
"""

from __future__ import annotations

from typing import Any


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", repr(tp))


class RowBindError(Exception):
    """Base exception for all RowBind errors."""


# --- Conversion ---


class ConversionError(RowBindError):
    """Raised when a raw cell value cannot become the declared type."""

    def __init__(
        self,
        target_type: Any,
        raw: Any,
        detail: str,
        property_name: str | None = None,
    ) -> None:
        self.target_type = target_type
        self.raw = raw
        self.detail = detail
        self.property_name = property_name
        super().__init__(self._format())

    def _format(self) -> str:
        where = f" for property '{self.property_name}'" if self.property_name else ""
        return (
            f"Cannot convert {self.raw!r} to {_type_name(self.target_type)}{where}: "
            f"{self.detail}"
        )

    def for_property(self, property_name: str) -> ConversionError:
        """Annotate this error in place with the property it was raised for.

        Subclasses may define their own ``__init__``; the instance is kept
        as is and only its message is rebuilt.
        """
        if hasattr(self, "detail"):
            self.property_name = property_name
            self.args = (self._format(),)
        else:
            message = str(self)
            self.property_name = property_name
            self.args = (f"Property '{property_name}': {message}",)
        return self


class FormatError(ConversionError):
    """Raised when temporal text does not match the active format."""


class ConstructionError(ConversionError):
    """Raised when the default rule cannot build a value from text."""


# --- Mapping ---


class MappingError(RowBindError):
    """Base for record mapping errors."""


class UnknownPropertyError(MappingError):
    """Raised when a column has no matching accessor on the record type."""

    def __init__(self, column: str, record_type: type) -> None:
        self.column = column
        self.record_type = record_type
        super().__init__(
            f"Column '{column}' has no matching property on {_type_name(record_type)}"
        )


class UnwritablePropertyError(MappingError):
    """Raised when a property has no write path."""

    def __init__(self, property_name: str, record_type: type) -> None:
        self.property_name = property_name
        self.record_type = record_type
        super().__init__(
            f"Property '{property_name}' of {_type_name(record_type)} is not writable"
        )


class UnreadablePropertyError(MappingError):
    """Raised when a property has no read path."""

    def __init__(self, property_name: str, record_type: type) -> None:
        self.property_name = property_name
        self.record_type = record_type
        super().__init__(
            f"Property '{property_name}' of {_type_name(record_type)} is not readable"
        )


class UnresolvedTypeError(MappingError):
    """Raised when a bound member's type annotation cannot be evaluated."""

    def __init__(self, property_name: str, annotation: str, record_type: type) -> None:
        self.property_name = property_name
        self.annotation = annotation
        self.record_type = record_type
        super().__init__(
            f"Cannot resolve type '{annotation}' of property '{property_name}' "
            f"on {_type_name(record_type)}"
        )


class InstantiationError(MappingError):
    """Raised when a record type cannot be constructed without arguments."""

    def __init__(self, record_type: type, detail: str) -> None:
        self.record_type = record_type
        super().__init__(
            f"Unable to instantiate record type '{_type_name(record_type)}': {detail}. "
            "Nested classes bound to an enclosing instance and constructors that "
            "require arguments cannot be created independently."
        )


class MissingKeyError(MappingError):
    """Raised by keyed_map when a record exposes no key."""

    def __init__(self, record_type: type) -> None:
        self.record_type = record_type
        super().__init__(
            f"{_type_name(record_type)} has no key() method and no key function was given"
        )


# --- Cursor ---


class CursorError(RowBindError):
    """Raised when the underlying cursor fails."""


class NoElementError(RowBindError, LookupError):
    """Raised when next() is called without an available row."""

    def __init__(self) -> None:
        super().__init__("No row available; call has_next() first")
