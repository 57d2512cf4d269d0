"""TypeConverter registry - maps a target type to its conversion rule.

Resolution order:
    1. Enum subclasses always use the built-in enum rule.
    2. A rule registered for the exact type.
    3. The default rule: ``target_type(raw)``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime
from enum import Enum
from typing import Any

from row_bind.conversion.rules import (
    ConversionRule,
    DateRule,
    DatetimeRule,
    boolean_rule,
    default_rule,
    enum_rule,
    identity_rule,
    numeric_rule,
    unwrap_optional,
)
from row_bind.core.config import TemporalFormat

logger = logging.getLogger(__name__)


class ConverterRegistry:
    """Holds the conversion rules used to turn raw cells into typed values.

    Built-in rules for int, float, bool, datetime and date are installed at
    construction. Registration is expected to happen at start-up; concurrent
    registration while rows are being converted is not supported.

    Args:
        temporal_format: Format used by the datetime and date rules.
    """

    def __init__(self, temporal_format: TemporalFormat | None = None) -> None:
        self._rules: dict[Any, ConversionRule] = {}
        self._temporal_format = temporal_format or TemporalFormat()
        self._format_override: ContextVar[TemporalFormat | None] = ContextVar(
            f"row_bind_temporal_format_{id(self):x}", default=None
        )
        self._install_builtins()

    def _install_builtins(self) -> None:
        self._rules[int] = numeric_rule
        self._rules[float] = numeric_rule
        self._rules[bool] = boolean_rule
        self._rules[datetime] = DatetimeRule(self.active_temporal_format)
        self._rules[date] = DateRule(self.active_temporal_format)

    def register(self, target_type: Any, rule: ConversionRule) -> None:
        """Install or replace the rule for *target_type*."""
        logger.debug("Registering converter for %r", target_type)
        self._rules[target_type] = rule

    def unregister(self, target_type: Any) -> None:
        """Remove the rule for *target_type* if one is registered."""
        if self._rules.pop(target_type, None) is not None:
            logger.debug("Unregistered converter for %r", target_type)

    def has(self, target_type: Any) -> bool:
        """Check if an explicit rule is registered for *target_type*."""
        return target_type in self._rules

    def resolve(self, target_type: Any) -> ConversionRule:
        """Return the rule that converts raw cells into *target_type*."""
        target_type = unwrap_optional(target_type)
        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return enum_rule
        rule = self._rules.get(target_type)
        if rule is not None:
            return rule
        if target_type is Any or target_type is inspect.Parameter.empty:
            return identity_rule
        return default_rule

    def convert(self, target_type: Any, raw: Any) -> Any:
        """Convert *raw* into *target_type* through its resolved rule."""
        target_type = unwrap_optional(target_type)
        return self.resolve(target_type)(target_type, raw)

    # --- Temporal format ---

    def set_temporal_format(self, temporal_format: TemporalFormat) -> None:
        """Replace the registry-wide temporal format."""
        logger.debug("Temporal format set to %r", temporal_format)
        self._temporal_format = temporal_format

    def active_temporal_format(self) -> TemporalFormat:
        """The format in effect for the current thread or task."""
        override = self._format_override.get()
        return override if override is not None else self._temporal_format

    @contextmanager
    def temporal_format(self, temporal_format: TemporalFormat) -> Iterator[TemporalFormat]:
        """Override the temporal format for the current thread or task only."""
        token = self._format_override.set(temporal_format)
        try:
            yield temporal_format
        finally:
            self._format_override.reset(token)
