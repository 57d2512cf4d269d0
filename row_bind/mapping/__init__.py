"""Mapping layer - write row cells into record instances."""

from __future__ import annotations

from row_bind.mapping.accessor import AccessorDescriptor, AccessorResolver, discover_accessors
from row_bind.mapping.binder import FieldBinder, derive_binders
from row_bind.mapping.materializer import RowMaterializer, instantiate, materialize
from row_bind.mapping.protocol import KeyedRecord

__all__ = [
    "AccessorDescriptor",
    "AccessorResolver",
    "discover_accessors",
    "FieldBinder",
    "derive_binders",
    "RowMaterializer",
    "instantiate",
    "materialize",
    "KeyedRecord",
]
