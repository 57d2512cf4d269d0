"""Accessor discovery and the per-record-type accessor cache.

Supports Pydantic models, dataclasses, and plain classes with annotated
attributes or properties.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, ForwardRef, get_origin, get_type_hints

from row_bind.conversion.rules import unwrap_optional
from row_bind.core.exceptions import UnreadablePropertyError, UnwritablePropertyError

logger = logging.getLogger(__name__)

Reader = Callable[[Any], Any]
Writer = Callable[[Any, Any], None]


@dataclass(frozen=True)
class AccessorDescriptor:
    """Read/write operations and declared type of one record member."""

    name: str
    declared_type: Any
    read: Reader | None = None
    write: Writer | None = None

    @property
    def readable(self) -> bool:
        return self.read is not None

    @property
    def writable(self) -> bool:
        return self.write is not None

    def get(self, instance: Any) -> Any:
        if self.read is None:
            raise UnreadablePropertyError(self.name, type(instance))
        return self.read(instance)

    def set(self, instance: Any, value: Any) -> None:
        if self.write is None:
            raise UnwritablePropertyError(self.name, type(instance))
        self.write(instance, value)


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _evaluate(annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, TypeError, SyntaxError):
        return ForwardRef(annotation)


def _resolve_each(obj: Any) -> dict[str, Any]:
    """Evaluate annotations one by one; unresolvable ones stay ForwardRefs."""
    hints: dict[str, Any] = {}
    if isinstance(obj, type):
        for klass in reversed(obj.__mro__):
            module = sys.modules.get(klass.__module__)
            globalns = dict(vars(module)) if module is not None else {}
            localns = dict(vars(klass))
            for name, annotation in inspect.get_annotations(klass).items():
                hints[name] = _evaluate(annotation, globalns, localns)
    else:
        globalns = getattr(obj, "__globals__", {})
        for name, annotation in inspect.get_annotations(obj).items():
            hints[name] = _evaluate(annotation, globalns, {})
    return hints


def _type_hints(obj: Any) -> dict[str, Any]:
    """get_type_hints, resolving entry by entry when some hint is unresolvable."""
    try:
        return get_type_hints(obj)
    except (NameError, TypeError) as e:
        hints = _resolve_each(obj)
        unresolved = sorted(name for name, hint in hints.items() if isinstance(hint, ForwardRef))
        logger.debug("Unresolved type hints on %r: %s (%s)", obj, unresolved, e)
        return hints


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _attribute_accessor(name: str, declared_type: Any, writable: bool = True) -> AccessorDescriptor:
    def read(instance: Any) -> Any:
        return getattr(instance, name)

    def write(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return AccessorDescriptor(
        name=name,
        declared_type=unwrap_optional(declared_type),
        read=read,
        write=write if writable else None,
    )


def _property_type(prop: property) -> Any:
    """Declared type of a property: getter return, else setter value annotation."""
    if prop.fget is not None:
        returns = _type_hints(prop.fget).get("return")
        if returns is not None:
            return returns
    if prop.fset is not None:
        params = [hint for name, hint in _type_hints(prop.fset).items() if name != "return"]
        if params:
            return params[-1]
    return Any


def _property_accessor(name: str, prop: property) -> AccessorDescriptor:
    return AccessorDescriptor(
        name=name,
        declared_type=unwrap_optional(_property_type(prop)),
        read=prop.fget,
        write=prop.fset,
    )


def _public_properties(record_type: type) -> dict[str, property]:
    """Public properties declared on the class and its bases; subclasses override.

    The walk stops below ``BaseModel`` for Pydantic models, so the model
    machinery's own properties are never exposed.
    """
    skipped: set[type] = {object}
    if is_pydantic_model(record_type):
        from pydantic import BaseModel

        skipped.update(BaseModel.__mro__)
    found: dict[str, property] = {}
    for klass in reversed(record_type.__mro__):
        if klass in skipped or klass.__module__ == "builtins":
            continue
        for name, member in vars(klass).items():
            if isinstance(member, property) and not name.startswith("_"):
                found[name] = member
    return found


def discover_accessors(record_type: type) -> dict[str, AccessorDescriptor]:
    """Discover the named members of *record_type*.

    Detection order:
    1. Pydantic BaseModel -> model_fields
    2. dataclass -> dataclass fields (read-only when frozen)
    3. Plain class -> annotated attributes, skipping private names and ClassVars

    Properties are added for every kind of class. A class attribute
    ``__row_bind_aliases__`` (column -> member) exposes members under extra
    names.
    """
    accessors: dict[str, AccessorDescriptor] = {}

    if is_pydantic_model(record_type):
        frozen = bool(record_type.model_config.get("frozen", False))  # type: ignore[attr-defined]
        for name, info in record_type.model_fields.items():  # type: ignore[attr-defined]
            accessors[name] = _attribute_accessor(name, info.annotation, writable=not frozen)
    elif dataclasses.is_dataclass(record_type):
        hints = _type_hints(record_type)
        frozen = record_type.__dataclass_params__.frozen  # type: ignore[attr-defined]
        for f in dataclasses.fields(record_type):
            accessors[f.name] = _attribute_accessor(f.name, hints.get(f.name, Any), writable=not frozen)
    else:
        for name, hint in _type_hints(record_type).items():
            if name.startswith("_") or _is_class_var(hint):
                continue
            accessors[name] = _attribute_accessor(name, hint)

    for name, prop in _public_properties(record_type).items():
        accessors[name] = _property_accessor(name, prop)

    aliases: Mapping[str, str] = getattr(record_type, "__row_bind_aliases__", None) or {}
    for column, member_name in aliases.items():
        if member_name in accessors:
            accessors[column] = accessors[member_name]

    return accessors


class AccessorResolver:
    """Caches discovered accessors per record type.

    Each record type is discovered at most once for the lifetime of the
    resolver; concurrent first lookups serialize on a lock and all callers
    receive the same read-only mapping. Record types are assumed not to
    change shape after first use.

    Args:
        discover: Discovery function, ``discover_accessors`` by default.
    """

    def __init__(
        self,
        discover: Callable[[type], Mapping[str, AccessorDescriptor]] = discover_accessors,
    ) -> None:
        self._discover = discover
        self._cache: dict[type, Mapping[str, AccessorDescriptor]] = {}
        self._lock = threading.Lock()

    def resolve(self, record_type: type) -> Mapping[str, AccessorDescriptor]:
        """Return the name -> accessor mapping for *record_type*."""
        accessors = self._cache.get(record_type)
        if accessors is not None:
            return accessors

        with self._lock:
            accessors = self._cache.get(record_type)
            if accessors is None:
                accessors = MappingProxyType(dict(self._discover(record_type)))
                self._cache[record_type] = accessors
                logger.debug(
                    "Discovered %d accessors on %s: %s",
                    len(accessors),
                    record_type.__name__,
                    sorted(accessors),
                )
        return accessors

    def lookup(self, record_type: type, name: str) -> AccessorDescriptor | None:
        """Look up one accessor by member (or alias) name."""
        return self.resolve(record_type).get(name)

    def is_cached(self, record_type: type) -> bool:
        """Check if *record_type* has already been discovered."""
        return record_type in self._cache
