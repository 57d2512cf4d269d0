"""Field binders - one column paired with one accessor and one rule.

Binders are derived once per iteration from the cursor's column names,
before any row is materialized.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ForwardRef

from row_bind.conversion.registry import ConverterRegistry
from row_bind.conversion.rules import ConversionRule
from row_bind.core.exceptions import (
    ConversionError,
    UnknownPropertyError,
    UnresolvedTypeError,
    UnwritablePropertyError,
)
from row_bind.mapping.accessor import AccessorDescriptor, AccessorResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldBinder:
    """Writes one raw cell into one record member."""

    column: str
    index: int
    accessor: AccessorDescriptor
    rule: ConversionRule

    @property
    def property_name(self) -> str:
        return self.accessor.name

    def convert(self, raw: Any) -> Any:
        """Convert *raw* to the member's declared type."""
        target_type = self.accessor.declared_type
        try:
            return self.rule(target_type, raw)
        except ConversionError as e:
            e.for_property(self.property_name)
            raise
        except Exception as e:
            raise ConversionError(target_type, raw, str(e), self.property_name) from e

    def bind(self, instance: Any, raw: Any) -> None:
        """Convert *raw* and write it into *instance*."""
        if not self.accessor.writable:
            raise UnwritablePropertyError(self.property_name, type(instance))
        self.accessor.set(instance, self.convert(raw))


def derive_binders(
    record_type: type,
    columns: Sequence[str],
    resolver: AccessorResolver,
    registry: ConverterRegistry,
    aliases: Mapping[str, str] | None = None,
    ignore_unknown: bool = False,
) -> tuple[FieldBinder, ...]:
    """Pair every column with an accessor of *record_type* and its rule.

    Args:
        record_type: Target record class.
        columns: Column names in cursor order.
        resolver: Accessor cache used for lookups.
        registry: Converter registry used to pick each rule.
        aliases: Optional column-name to member-name mapping.
        ignore_unknown: Skip columns without a matching member instead of
            raising.

    Raises:
        UnknownPropertyError: If a column has no matching member.
        UnresolvedTypeError: If a matched member's annotation could not be
            evaluated.
    """
    binders: list[FieldBinder] = []
    for index, column in enumerate(columns):
        name = aliases.get(column, column) if aliases else column
        accessor = resolver.lookup(record_type, name)
        if accessor is None:
            if ignore_unknown:
                logger.debug("Skipping column '%s' unknown to %s", column, record_type.__name__)
                continue
            raise UnknownPropertyError(column, record_type)
        if isinstance(accessor.declared_type, ForwardRef):
            raise UnresolvedTypeError(
                accessor.name, accessor.declared_type.__forward_arg__, record_type
            )
        binders.append(
            FieldBinder(
                column=column,
                index=index,
                accessor=accessor,
                rule=registry.resolve(accessor.declared_type),
            )
        )

    logger.debug(
        "Derived %d binders for %s from columns %s",
        len(binders),
        record_type.__name__,
        list(columns),
    )
    return tuple(binders)
