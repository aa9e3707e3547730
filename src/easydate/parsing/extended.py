"""Extended "first/last UNIT of ..." phrases.

Handles phrases the individual engines do not understand, such as:
- "first day of last month"
- "last second of first month of last year"
- "end day of month of 2007-10-02"
- "last day of 2007"

Grammar (case-insensitive)::

    span := EDGE UNIT "of" span | UNIT "of" span | PERIOD | YEAR | EXPR
    EDGE := first | beginning | start | last | end
    UNIT := second | minute | hour | day | week | month | year
    PERIOD := (this | last | next | previous) UNIT
    YEAR := four digits
    EXPR := anything else, handed to the parser chain

Spans are worked out on floating (naive) datetimes; the zone parsed for
EXPR, if any, is carried through to the result.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from easydate.clock import CalendarClock, default_clock
from easydate.parsing.models import ParsedMoment

logger = logging.getLogger(__name__)

Attempt = Callable[[str], Optional[ParsedMoment]]


# ---------------------------------------------------------------------------
# Regular Expression Patterns
# ---------------------------------------------------------------------------

_UNITS = r"(second|minute|hour|day|week|month|year)s?"

EDGE_PATTERN = re.compile(
    r"^\s*(first|beginning|start|last|end)\s+" + _UNITS + r"\s+of\s+(.+?)\s*$",
    re.IGNORECASE,
)
UNIT_OF_PATTERN = re.compile(r"^\s*" + _UNITS + r"\s+of\s+(.+?)\s*$", re.IGNORECASE)
PERIOD_PATTERN = re.compile(r"^\s*(this|last|next|previous)\s+" + _UNITS + r"\s*$", re.IGNORECASE)
YEAR_PATTERN = re.compile(r"^\s*(\d{4})\s*$")

START_EDGES = frozenset({"first", "beginning", "start"})

PERIOD_STEPS = {
    "this": 0,
    "last": -1,
    "previous": -1,
    "next": 1,
}


def _step(unit: str, count: int = 1) -> relativedelta:
    return relativedelta(**{f"{unit}s": count})


@dataclass
class Span:
    """A stretch of civil time: a start and, unless it is a point, a unit."""

    start: datetime
    unit: Optional[str] = None
    timezone: Optional[str] = None

    def last_instant(self) -> datetime:
        """Last representable instant inside the span."""
        if self.unit is None:
            return self.start
        return self.start + _step(self.unit) - timedelta(microseconds=1)


def is_phrase(text: str) -> bool:
    """Check whether ``text`` uses the "UNIT of ..." grammar."""
    return bool(EDGE_PATTERN.match(text) or UNIT_OF_PATTERN.match(text))


class PhraseParser:
    """Resolve extended phrases, delegating plain expressions to ``attempt``."""

    def __init__(self, attempt: Attempt, clock: CalendarClock = default_clock) -> None:
        self.attempt = attempt
        self.clock = clock

    def parse(self, text: str, now: Optional[datetime] = None) -> Optional[ParsedMoment]:
        """Resolve a phrase to the start of its outermost span.

        Returns:
            ParsedMoment tagged with strategy "extended", or None when the
            innermost expression could not be parsed
        """
        span = self.resolve_span(text, now or datetime.now())
        if span is None:
            return None
        parsed = ParsedMoment.from_datetime(span.start, strategy="extended", clock=self.clock)
        parsed.timezone = span.timezone
        return parsed

    def resolve_span(self, text: str, now: datetime) -> Optional[Span]:
        match = EDGE_PATTERN.match(text)
        if match:
            edge, unit, rest = match.group(1).lower(), match.group(2).lower(), match.group(3)
            inner = self.resolve_span(rest, now)
            if inner is None:
                return None
            anchor = inner.start if edge in START_EDGES else inner.last_instant()
            return Span(self.clock.truncate(anchor, unit), unit, inner.timezone)

        match = UNIT_OF_PATTERN.match(text)
        if match:
            unit, rest = match.group(1).lower(), match.group(2)
            inner = self.resolve_span(rest, now)
            if inner is None:
                return None
            return Span(self.clock.truncate(inner.start, unit), unit, inner.timezone)

        match = PERIOD_PATTERN.match(text)
        if match:
            step, unit = PERIOD_STEPS[match.group(1).lower()], match.group(2).lower()
            start = self.clock.truncate(now.replace(tzinfo=None) + _step(unit, step), unit)
            return Span(start, unit)

        match = YEAR_PATTERN.match(text)
        if match:
            return Span(datetime(int(match.group(1)), 1, 1), "year")

        parsed = self.attempt(text)
        if parsed is None:
            logger.debug(f"Extended phrase component '{text}' could not be parsed")
            return None
        start = self.clock.construct(parsed.civil_fields())
        return Span(start, None, parsed.timezone)


__all__ = ["PhraseParser", "Span", "is_phrase"]
