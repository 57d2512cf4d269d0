"""Built-in conversion rules.

A conversion rule is any callable ``rule(target_type, raw) -> value``. Rules
keep no state between calls; the temporal rules read the active format
through a provider supplied by the owning registry.
"""

from __future__ import annotations

import types
from collections.abc import Callable
from datetime import datetime
from typing import Any, Union, get_args, get_origin

from row_bind.core.config import TemporalFormat
from row_bind.core.exceptions import ConstructionError, ConversionError, FormatError

ConversionRule = Callable[[Any, Any], Any]

_UNCONVERTED = "unconverted data remains: "


def unwrap_optional(target_type: Any) -> Any:
    """Reduce ``X | None`` and ``Optional[X]`` to ``X``."""
    origin = get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def identity_rule(target_type: Any, raw: Any) -> Any:
    """Hand the raw value through unchanged (untyped members)."""
    return raw


def numeric_rule(target_type: Any, raw: Any) -> Any:
    """Parse a numeric literal. A missing value counts as zero."""
    text = "0" if raw is None else raw
    try:
        return target_type(text)
    except (TypeError, ValueError) as e:
        raise ConversionError(target_type, raw, "not a numeric literal") from e


def boolean_rule(target_type: Any, raw: Any) -> bool:
    """``"1"`` and ``"true"`` (any case) are True, any other text is False.

    Null is rejected rather than mapped, unlike every other rule.
    """
    if raw is None:
        raise ConversionError(target_type, raw, "null is not a boolean")
    text = str(raw)
    if text == "1":
        return True
    return text.lower() == "true"


def enum_rule(target_type: Any, raw: Any) -> Any:
    """Look an enumeration member up by name."""
    if raw is None:
        return None
    try:
        return target_type[str(raw)]
    except KeyError as e:
        raise ConversionError(target_type, raw, "no such enumeration member") from e


def default_rule(target_type: Any, raw: Any) -> Any:
    """Construct the target type from its single text argument."""
    if raw is None:
        return None
    try:
        return target_type(raw)
    except Exception as e:
        raise ConstructionError(
            target_type, raw, f"construction from text failed ({type(e).__name__}: {e})"
        ) from e


def parse_prefix(text: str, pattern: str) -> datetime:
    """Parse the leading part of *text* that matches *pattern*.

    Anything after the match is ignored, so ``"2024-03-01 10:00:00.0"``
    parses with ``"%Y-%m-%d %H:%M:%S"``.
    """
    try:
        return datetime.strptime(text, pattern)
    except ValueError as e:
        message = str(e)
        if not message.startswith(_UNCONVERTED):
            raise
        rest = message[len(_UNCONVERTED):]
        return datetime.strptime(text[: len(text) - len(rest)], pattern)


class DatetimeRule:
    """Parse a datetime with the active TemporalFormat; trailing text is ignored.

    Naive results are placed in the format's timezone.
    """

    def __init__(self, format_provider: Callable[[], TemporalFormat]) -> None:
        self._format_provider = format_provider

    def __call__(self, target_type: Any, raw: Any) -> datetime | None:
        if raw is None:
            return None
        fmt = self._format_provider()
        try:
            parsed = parse_prefix(str(raw), fmt.pattern)
        except ValueError as e:
            raise FormatError(target_type, raw, f"does not match '{fmt.pattern}'") from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=fmt.tzinfo)
        return parsed


class DateRule:
    """Parse a calendar date with the active TemporalFormat."""

    def __init__(self, format_provider: Callable[[], TemporalFormat]) -> None:
        self._format_provider = format_provider

    def __call__(self, target_type: Any, raw: Any) -> Any:
        if raw is None:
            return None
        fmt = self._format_provider()
        try:
            return parse_prefix(str(raw), fmt.date_pattern).date()
        except ValueError as e:
            raise FormatError(target_type, raw, f"does not match '{fmt.date_pattern}'") from e
