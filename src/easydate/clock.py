"""Calendar arithmetic and timezone lookup for easydate.

Everything that needs civil-calendar rules or the timezone database goes
through ``CalendarClock``:

- Building a ``datetime`` from civil fields (validation is the calendar's job)
- Truncating to a coarser unit
- Instant-preserving conversion vs wall-clock-preserving relabelling
- Mapping zone labels ("America/New_York", "-0500", "local", "floating")
  to ``tzinfo`` objects and back

A floating moment is a naive ``datetime``. Named zones come from
``zoneinfo``; ``local`` and the UTC/offset detection for parser results come
from ``dateutil.tz``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import MO, relativedelta

from easydate.errors import ConstructionError, InvalidTimezoneError, TruncationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Zone labels
# ---------------------------------------------------------------------------

FLOATING = "floating"
LOCAL = "local"
UTC = "UTC"

CIVIL_FIELDS = ("year", "month", "day", "hour", "minute", "second", "nanosecond")
TRUNCATION_UNITS = ("year", "month", "week", "day", "hour", "minute", "second")

# Backward links that should be reported under their canonical name
ZONE_LINKS: Dict[str, str] = {
    "US/Alaska": "America/Anchorage",
    "US/Aleutian": "America/Adak",
    "US/Arizona": "America/Phoenix",
    "US/Central": "America/Chicago",
    "US/East-Indiana": "America/Indiana/Indianapolis",
    "US/Eastern": "America/New_York",
    "US/Hawaii": "Pacific/Honolulu",
    "US/Michigan": "America/Detroit",
    "US/Mountain": "America/Denver",
    "US/Pacific": "America/Los_Angeles",
    "Canada/Atlantic": "America/Halifax",
    "Canada/Central": "America/Winnipeg",
    "Canada/Eastern": "America/Toronto",
    "Canada/Mountain": "America/Edmonton",
    "Canada/Pacific": "America/Vancouver",
    "GB": "Europe/London",
    "Japan": "Asia/Tokyo",
    "Etc/UTC": UTC,
    "Etc/UCT": UTC,
    "Etc/Universal": UTC,
    "Etc/Zulu": UTC,
    "UCT": UTC,
    "Universal": UTC,
    "Zulu": UTC,
}

_MARKERS = {
    "floating": FLOATING,
    "local": LOCAL,
    "utc": UTC,
    "z": UTC,
}

_OFFSET_HOURS_ONLY = re.compile(r"^([+-])(\d{1,2})$")
_OFFSET_FULL = re.compile(r"^([+-])(\d{2}):?(\d{2})(?::?(\d{2}))?$")


def parse_offset(value: str) -> Optional[timedelta]:
    """Return the offset for "+HH", "-HHMM", "+HH:MM" or "+HHMMSS", else None."""
    match = _OFFSET_HOURS_ONLY.match(value) or _OFFSET_FULL.match(value)
    if not match:
        return None
    sign, hours, minutes, seconds = (match.groups() + (None, None))[:4]
    offset = timedelta(
        hours=int(hours),
        minutes=int(minutes or 0),
        seconds=int(seconds or 0),
    )
    if int(minutes or 0) > 59 or int(seconds or 0) > 59 or offset >= timedelta(hours=24):
        return None
    return -offset if sign == "-" else offset


def format_offset(offset: timedelta) -> str:
    """Format an offset as "+HHMM" (or "+HHMMSS" when seconds are present)."""
    sign = "-" if offset < timedelta(0) else "+"
    total = abs(int(offset.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if seconds:
        return f"{sign}{hours:02d}{minutes:02d}{seconds:02d}"
    return f"{sign}{hours:02d}{minutes:02d}"


# ---------------------------------------------------------------------------
# Calendar clock
# ---------------------------------------------------------------------------


class CalendarClock:
    """Calendar and timezone operations used by the resolver and builder.

    Zone arguments may be labels (``str``) or ``tzinfo`` instances. Labels
    are canonicalized before lookup, so ``"US/Pacific"`` and
    ``"America/Los_Angeles"`` produce the same zone.
    """

    # -- zone names -------------------------------------------------------

    def canonical_zone(self, name: str) -> str:
        """Return the canonical label for a zone name, offset or marker.

        Raises:
            InvalidTimezoneError: If ``name`` is not a string
        """
        if not isinstance(name, str):
            raise InvalidTimezoneError(name)
        stripped = name.strip()
        marker = _MARKERS.get(stripped.lower())
        if marker:
            return marker
        offset = parse_offset(stripped)
        if offset is not None:
            return UTC if offset == timedelta(0) else format_offset(offset)
        return ZONE_LINKS.get(stripped, stripped)

    def tzinfo_for(self, label: Any) -> Optional[tzinfo]:
        """Map a zone label to a ``tzinfo`` (``None`` for floating).

        Raises:
            InvalidTimezoneError: If the label is not a known zone
        """
        if label is None or isinstance(label, tzinfo):
            return label
        name = self.canonical_zone(label)
        if name == FLOATING:
            return None
        if name == LOCAL:
            return dateutil_tz.tzlocal()
        if name == UTC:
            return timezone.utc
        offset = parse_offset(name)
        if offset is not None:
            return timezone(offset)
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise InvalidTimezoneError(label) from exc

    def is_valid_zone_name(self, name: Any) -> bool:
        """Check whether ``name`` resolves to a zone (markers and offsets included)."""
        if not isinstance(name, str) or not name.strip():
            return False
        try:
            self.tzinfo_for(name)
        except InvalidTimezoneError:
            return False
        return True

    def zone_label(self, tz: Optional[tzinfo], moment: Optional[datetime] = None) -> str:
        """Inverse of ``tzinfo_for``: describe a ``tzinfo`` as a label.

        Zones without a name (fixed offsets, foreign ``tzinfo`` classes) are
        described by their offset at ``moment``.
        """
        if tz is None:
            return FLOATING
        if isinstance(tz, ZoneInfo) and tz.key:
            return self.canonical_zone(tz.key)
        if tz is timezone.utc or isinstance(tz, dateutil_tz.tzutc):
            return UTC
        if isinstance(tz, dateutil_tz.tzlocal):
            return LOCAL
        zone_name = getattr(tz, "zone", None)
        if isinstance(zone_name, str) and self.is_valid_zone_name(zone_name):
            return self.canonical_zone(zone_name)
        offset = tz.utcoffset(moment)
        if offset is None:
            raise InvalidTimezoneError(tz)
        return UTC if offset == timedelta(0) else format_offset(offset)

    # -- construction -----------------------------------------------------

    def construct(self, fields: Mapping[str, Any], zone: Any = FLOATING) -> datetime:
        """Build a ``datetime`` from civil fields in ``zone``.

        ``month`` and ``day`` default to 1, time fields to 0; ``year`` is
        mandatory. ``nanosecond`` is kept at microsecond precision.

        Raises:
            ConstructionError: If the fields do not form a valid date/time
            InvalidTimezoneError: If ``zone`` is not a known zone
        """
        values = dict(fields)
        if values.get("year") is None:
            raise ConstructionError("Mandatory field 'year' missing", fields=values)
        tz = self.tzinfo_for(zone)
        try:
            return datetime(
                int(values["year"]),
                int(values.get("month", 1)),
                int(values.get("day", 1)),
                int(values.get("hour", 0)),
                int(values.get("minute", 0)),
                int(values.get("second", 0)),
                int(values.get("nanosecond", 0)) // 1000,
                tzinfo=tz,
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise ConstructionError(f"Invalid date/time fields: {exc}", fields=values) from exc

    def truncate(self, moment: datetime, unit: str) -> datetime:
        """Truncate ``moment`` to the start of its ``unit``; weeks start on Monday.

        Raises:
            TruncationError: If ``unit`` is not a known unit
        """
        name = str(unit).strip().lower()
        if name not in TRUNCATION_UNITS:
            raise TruncationError(unit)
        if name == "week":
            moment = moment + relativedelta(weekday=MO(-1))
            name = "day"
        reset = {
            "month": 1,
            "day": 1,
            "hour": 0,
            "minute": 0,
            "second": 0,
            "microsecond": 0,
        }
        keep = ("year", "month", "day", "hour", "minute", "second")
        for field_name in keep[1:keep.index(name) + 1]:
            reset.pop(field_name)
        return moment.replace(fold=0, **reset)

    # -- zone changes -----------------------------------------------------

    def convert_zone(self, moment: datetime, zone: Any) -> datetime:
        """Re-express the same instant in ``zone``.

        A floating moment has no instant, so it only gets the label.
        Converting to floating keeps the wall clock and drops the zone.
        """
        target = self.tzinfo_for(zone)
        if moment.tzinfo is None:
            return moment.replace(tzinfo=target)
        if target is None:
            return moment.replace(tzinfo=None)
        return moment.astimezone(target)

    def relabel_zone(self, moment: datetime, zone: Any) -> datetime:
        """Attach ``zone`` without moving the wall clock."""
        return moment.replace(tzinfo=self.tzinfo_for(zone))


default_clock = CalendarClock()


__all__ = [
    "CIVIL_FIELDS",
    "FLOATING",
    "LOCAL",
    "TRUNCATION_UNITS",
    "UTC",
    "ZONE_LINKS",
    "CalendarClock",
    "default_clock",
    "format_offset",
    "parse_offset",
]
