"""Unit tests for ConverterRegistry and the built-in rules."""

from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

import pytest

from row_bind.conversion.registry import ConverterRegistry
from row_bind.conversion.rules import (
    boolean_rule,
    default_rule,
    enum_rule,
    identity_rule,
    numeric_rule,
)
from row_bind.core.config import TemporalFormat
from row_bind.core.exceptions import ConstructionError, ConversionError, FormatError


class Color(Enum):
    RED = "r"
    GREEN = "g"


class Slug:
    def __init__(self, text: str) -> None:
        self.text = text


class NoTextConstructor:
    def __init__(self) -> None:
        pass


class TestResolution:
    def test_resolve_is_deterministic(self, registry: ConverterRegistry) -> None:
        assert registry.resolve(int) is registry.resolve(int)
        assert registry.resolve(Slug) is registry.resolve(Slug)

    def test_builtin_rules(self, registry: ConverterRegistry) -> None:
        assert registry.resolve(int) is numeric_rule
        assert registry.resolve(float) is numeric_rule
        assert registry.resolve(bool) is boolean_rule
        assert registry.resolve(Color) is enum_rule
        assert registry.resolve(Slug) is default_rule
        assert registry.resolve(Any) is identity_rule

    def test_register_replaces_rule(self, registry: ConverterRegistry) -> None:
        registry.register(Slug, lambda tp, raw: "first")
        registry.register(Slug, lambda tp, raw: "second")
        assert registry.convert(Slug, "x") == "second"

    def test_register_overrides_builtin(self, registry: ConverterRegistry) -> None:
        registry.register(int, lambda tp, raw: -1)
        assert registry.convert(int, "5") == -1

    def test_unregister_falls_back_to_default(self, registry: ConverterRegistry) -> None:
        registry.register(Slug, lambda tp, raw: "custom")
        registry.unregister(Slug)
        assert not registry.has(Slug)
        assert registry.resolve(Slug) is default_rule

    def test_unregister_missing_is_noop(self, registry: ConverterRegistry) -> None:
        registry.unregister(Slug)
        assert not registry.has(Slug)

    def test_enum_rule_wins_over_registration(self, registry: ConverterRegistry) -> None:
        registry.register(Color, lambda tp, raw: "ignored")
        assert registry.resolve(Color) is enum_rule
        assert registry.convert(Color, "RED") is Color.RED

    def test_optional_is_unwrapped(self, registry: ConverterRegistry) -> None:
        assert registry.convert(int | None, "3") == 3
        assert registry.convert(Optional[float], "2.5") == 2.5


class TestNumericRule:
    def test_int(self, registry: ConverterRegistry) -> None:
        assert registry.convert(int, "42") == 42

    def test_float(self, registry: ConverterRegistry) -> None:
        assert registry.convert(float, "1.5") == 1.5

    def test_null_is_zero(self, registry: ConverterRegistry) -> None:
        assert registry.convert(int, None) == 0
        assert registry.convert(float, None) == 0.0

    def test_invalid_literal(self, registry: ConverterRegistry) -> None:
        with pytest.raises(ConversionError, match="'abc'"):
            registry.convert(int, "abc")


class TestBooleanRule:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("TRUE", True), ("0", False), ("false", False), ("yes", False)],
    )
    def test_parsing(self, registry: ConverterRegistry, raw: str, expected: bool) -> None:
        assert registry.convert(bool, raw) is expected

    def test_null_is_rejected(self, registry: ConverterRegistry) -> None:
        with pytest.raises(ConversionError, match="null"):
            registry.convert(bool, None)


class TestEnumRule:
    def test_by_name(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Color, "GREEN") is Color.GREEN

    def test_null(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Color, None) is None

    def test_unknown_member(self, registry: ConverterRegistry) -> None:
        with pytest.raises(ConversionError):
            registry.convert(Color, "BLUE")


class TestTemporalRules:
    def test_datetime_default_format_is_utc(self, registry: ConverterRegistry) -> None:
        result = registry.convert(datetime, "2024-03-01 10:00:00")
        assert result == datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)
        assert result.utcoffset().total_seconds() == 0

    def test_datetime_ignores_trailing_text(self, registry: ConverterRegistry) -> None:
        result = registry.convert(datetime, "2024-03-01 10:00:00.0")
        assert result == datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_date_ignores_time_of_day(self, registry: ConverterRegistry) -> None:
        assert registry.convert(date, "2024-03-01 10:00:00") == date(2024, 3, 1)

    def test_datetime_unparsable(self, registry: ConverterRegistry) -> None:
        with pytest.raises(FormatError, match="not-a-date"):
            registry.convert(datetime, "not-a-date")

    def test_datetime_null(self, registry: ConverterRegistry) -> None:
        assert registry.convert(datetime, None) is None

    def test_date(self, registry: ConverterRegistry) -> None:
        assert registry.convert(date, "2024-03-01") == date(2024, 3, 1)

    def test_timezone_applied(self) -> None:
        registry = ConverterRegistry(TemporalFormat(timezone="Europe/Berlin"))
        result = registry.convert(datetime, "2024-03-01 10:00:00")
        assert result == datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)

    def test_set_temporal_format(self, registry: ConverterRegistry) -> None:
        registry.set_temporal_format(TemporalFormat(pattern="%d/%m/%Y %H:%M"))
        result = registry.convert(datetime, "01/03/2024 10:00")
        assert result == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        with pytest.raises(FormatError):
            registry.convert(datetime, "2024-03-01 10:00:00")

    def test_override_is_local_to_thread(self, registry: ConverterRegistry) -> None:
        seen: list[datetime] = []

        def convert_in_thread() -> None:
            seen.append(registry.convert(datetime, "2024-03-01 10:00:00"))

        with registry.temporal_format(TemporalFormat(pattern="%d/%m/%Y")):
            assert registry.convert(datetime, "01/03/2024") == datetime(
                2024, 3, 1, tzinfo=timezone.utc
            )
            worker = threading.Thread(target=convert_in_thread)
            worker.start()
            worker.join()

        assert seen == [datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)]
        assert registry.active_temporal_format() == TemporalFormat()


class TestDefaultRule:
    def test_decimal(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Decimal, "1.10") == Decimal("1.10")

    def test_str(self, registry: ConverterRegistry) -> None:
        assert registry.convert(str, "Ada") == "Ada"

    def test_text_constructor(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Slug, "hello").text == "hello"

    def test_null(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Slug, None) is None

    def test_missing_text_constructor(self, registry: ConverterRegistry) -> None:
        with pytest.raises(ConstructionError, match="NoTextConstructor"):
            registry.convert(NoTextConstructor, "x")

    def test_any_passes_through(self, registry: ConverterRegistry) -> None:
        assert registry.convert(Any, "raw") == "raw"
