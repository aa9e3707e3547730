"""Parsing data models for easydate.

This module defines the data structures passed between the parser chain,
the timezone resolver and the moment builder:
- ParsedMoment: civil fields plus an optional timezone indicator
- ConversionMode: how a directive changes the timezone
- ResolutionOutcome: the resolver's decision
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from easydate.clock import CIVIL_FIELDS, CalendarClock, default_clock


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ConversionMode(Enum):
    """How the final timezone is applied to the parsed moment."""

    NONE = "none"                # Keep (or merely label) the parsed zone
    WALL_CLOCK = "wall_clock"    # Relabel: civil fields unchanged
    INSTANT = "instant"          # Convert: same absolute instant


# ---------------------------------------------------------------------------
# Core Data Structures
# ---------------------------------------------------------------------------


@dataclass
class ParsedMoment:
    """Result of one successful parse attempt.

    Fields are not validated here; the calendar rejects impossible dates at
    construction time.
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0
    timezone: Optional[str] = None      # Zone name, "+HHMM", "local" or "floating"
    strategy: Optional[str] = None      # Which parser produced this moment

    @classmethod
    def from_datetime(
        cls,
        value: datetime,
        *,
        strategy: Optional[str] = None,
        clock: CalendarClock = default_clock,
    ) -> "ParsedMoment":
        """Capture civil fields and zone label from a ``datetime``.

        A plain ``date`` is taken as midnight with no timezone.
        """
        if not isinstance(value, datetime):
            if not isinstance(value, date):
                raise TypeError(f"Expected datetime or date, got {type(value).__name__}")
            return cls(
                year=value.year,
                month=value.month,
                day=value.day,
                strategy=strategy,
            )
        timezone = None
        if value.tzinfo is not None:
            timezone = clock.zone_label(value.tzinfo, value)
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            nanosecond=value.microsecond * 1000,
            timezone=timezone,
            strategy=strategy,
        )

    def civil_fields(self) -> Dict[str, int]:
        """Return the civil date/time fields as a mapping."""
        return {name: getattr(self, name) for name in CIVIL_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and JSON output."""
        data: Dict[str, Any] = self.civil_fields()
        data["timezone"] = self.timezone
        data["strategy"] = self.strategy
        return data


@dataclass(frozen=True)
class ResolutionOutcome:
    """Final timezone and how to get there."""

    final_timezone: str
    conversion_mode: ConversionMode = ConversionMode.NONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and JSON output."""
        return {
            "final_timezone": self.final_timezone,
            "conversion_mode": self.conversion_mode.value,
        }
