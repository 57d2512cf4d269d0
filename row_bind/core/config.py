"""Binding configuration.

TemporalFormat and BinderConfig are Pydantic models for type-safe
configuration of a RowLoader and its converter registry.
"""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TemporalFormat(BaseModel):
    """Format descriptor used when parsing date and datetime cells.

    Patterns use ``datetime.strptime`` directives and match a prefix of the
    cell text. Parsed datetimes without an explicit offset are interpreted
    in ``timezone``.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = "%Y-%m-%d %H:%M:%S"
    date_pattern: str = "%Y-%m-%d"
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def tzinfo(self) -> tzinfo:
        return ZoneInfo(self.timezone)


class BinderConfig(BaseModel):
    """Configuration for a RowLoader."""

    temporal_format: TemporalFormat = Field(default_factory=TemporalFormat)
    ignore_unknown_columns: bool = False
