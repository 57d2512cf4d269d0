"""Conversion layer - turn raw cell text into typed values."""

from __future__ import annotations

from row_bind.conversion.registry import ConverterRegistry
from row_bind.conversion.rules import (
    ConversionRule,
    DateRule,
    DatetimeRule,
    boolean_rule,
    default_rule,
    enum_rule,
    identity_rule,
    numeric_rule,
)

__all__ = [
    "ConverterRegistry",
    "ConversionRule",
    "DatetimeRule",
    "DateRule",
    "numeric_rule",
    "boolean_rule",
    "enum_rule",
    "default_rule",
    "identity_rule",
]
