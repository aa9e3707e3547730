"""Parser strategies wrapped behind one contract.

Each strategy takes the raw text and returns a ``ParsedMoment`` or ``None``.
Strategies are free to raise; the parser chain treats an exception exactly
like ``None``.

Strategies:
- ical: iCalendar / ISO 8601 timestamps (``dateutil.parser.isoparse``)
- dateparse: loose Unix-style date strings (``dateutil.parser.parse``)
- natural: free text such as "tomorrow" or "2 weeks ago" (``dateparser``)
- flexible: ``dateutil.parser.parse`` after pulling a trailing timezone
  token off the text, since the engine cannot read zone names itself
"""

from __future__ import annotations

import logging
import re
import warnings
from collections import OrderedDict
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone, tzinfo
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Protocol, Tuple, Union

import dateparser
from dateutil import parser as dateutil_parser

from easydate.clock import default_clock
from easydate.errors import InvalidTimezoneError
from easydate.parsing.models import ParsedMoment

logger = logging.getLogger(__name__)


class ParserStrategy(Protocol):
    """Contract every strategy satisfies."""

    def __call__(self, text: str) -> Optional[ParsedMoment]:
        """Parse ``text`` or return ``None``."""
        ...


@contextmanager
def silenced_warnings() -> Iterator[None]:
    """Suppress ``warnings`` output for the duration of one parse attempt."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        yield


# ---------------------------------------------------------------------------
# Regular Expression Patterns
# ---------------------------------------------------------------------------

# "TZID=America/New_York:20070101T120000"
ICAL_TZID_PATTERN = re.compile(r"^TZID=(?P<tzid>[^:;]+):(?P<value>\S+)$", re.IGNORECASE)

# Timezone-like word or signed offset at the very end of the text
TRAILING_ZONE_PATTERN = re.compile(r"\s+([A-Za-z][A-Za-z0-9/._]*)\s*$")
TRAILING_OFFSET_PATTERN = re.compile(r"\s+([-+]\d+)\s*$")

# am, a.m., am., pm, p.m., pm.
MERIDIEM_PATTERN = re.compile(r"^[ap]\.?m\.?$", re.IGNORECASE)

NATURAL_LANGUAGES = ["en"]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def parse_ical(text: str) -> Optional[ParsedMoment]:
    """Parse iCalendar (``20070101T120000Z``, ``TZID=...:...``) and ISO 8601 forms."""
    value = text.strip()
    tzid = None
    match = ICAL_TZID_PATTERN.match(value)
    if match:
        tzid = match.group("tzid")
        value = match.group("value")

    moment = dateutil_parser.isoparse(value)
    if tzid is None:
        return ParsedMoment.from_datetime(moment, strategy="ical")

    if not default_clock.is_valid_zone_name(tzid):
        raise InvalidTimezoneError(tzid)
    parsed = ParsedMoment.from_datetime(moment.replace(tzinfo=None), strategy="ical")
    parsed.timezone = default_clock.canonical_zone(tzid)
    return parsed


def token_zone(name: Optional[str], offset: Optional[int]) -> Optional[tzinfo]:
    """Resolve the zone token dateutil found in the text.

    Passed to ``dateutil.parser.parse`` as ``tzinfos`` so a token is never
    matched against the host's own zone names (which would yield ``tzlocal``
    and the host's DST rules). Numeric offsets become fixed offsets.

    Raises:
        InvalidTimezoneError: If the token names no known zone
    """
    if offset is not None:
        return timezone.utc if offset == 0 else timezone(timedelta(seconds=offset))
    if name is None:
        return None
    return default_clock.tzinfo_for(name)


def parse_with_zones(text: str) -> datetime:
    """``dateutil.parser.parse`` with zone tokens resolved by ``token_zone``."""
    return dateutil_parser.parse(text, tzinfos=token_zone)


def parse_dateparse(text: str) -> Optional[ParsedMoment]:
    """Parse Unix-style date strings.

    A zone name that cannot be resolved fails the attempt instead of quietly
    producing a zoneless or host-local result.
    """
    moment = parse_with_zones(text)
    return ParsedMoment.from_datetime(moment, strategy="dateparse")


def parse_natural(text: str) -> Optional[ParsedMoment]:
    """Parse free text with dateparser; ``None`` when it finds nothing."""
    moment = dateparser.parse(text, languages=NATURAL_LANGUAGES)
    if moment is None:
        return None
    return ParsedMoment.from_datetime(moment, strategy="natural")


def split_trailing_zone(text: str) -> Tuple[str, Optional[str]]:
    """Split a trailing timezone token off ``text``.

    Returns:
        ``(remainder, zone)``; ``zone`` is ``None`` when nothing zone-like
        trails the text or when the trailing word is a meridiem (AM/PM),
        in which case the text is returned whole.
    """
    match = TRAILING_ZONE_PATTERN.search(text)
    if match:
        token = match.group(1)
        if MERIDIEM_PATTERN.match(token):
            return text, None
        return text[:match.start()], token

    match = TRAILING_OFFSET_PATTERN.search(text)
    if match:
        return text[:match.start()], match.group(1)
    return text, None


def parse_flexible(text: str) -> Optional[ParsedMoment]:
    """Parse with dateutil after extracting a trailing zone hint.

    The civil fields come from the remainder; a genuine hint then labels
    them without moving the wall clock. An unknown hint fails the attempt.
    """
    remainder, zone = split_trailing_zone(text)
    moment = parse_with_zones(remainder)
    if zone is None:
        return ParsedMoment.from_datetime(moment, strategy="flexible")

    if not default_clock.is_valid_zone_name(zone):
        raise InvalidTimezoneError(zone)
    logger.debug(f"Flexible parser extracted zone hint '{zone}' from '{text}'")
    parsed = ParsedMoment.from_datetime(moment.replace(tzinfo=None), strategy="flexible")
    parsed.timezone = default_clock.canonical_zone(zone)
    return parsed


# ---------------------------------------------------------------------------
# Strategy table
# ---------------------------------------------------------------------------

PARSER_SOURCES: Mapping[str, ParserStrategy] = MappingProxyType(
    OrderedDict(
        [
            ("ical", parse_ical),
            ("dateparse", parse_dateparse),
            ("natural", parse_natural),
            ("flexible", parse_flexible),
        ]
    )
)

DEFAULT_PARSER_ORDER: Tuple[str, ...] = tuple(PARSER_SOURCES)

STRATEGY_NAMES = frozenset(PARSER_SOURCES)


def normalize_names(names: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """Normalize a single strategy name or a sequence of names to a lowercase tuple."""
    if names is None:
        return ()
    if isinstance(names, str):
        names = [names]
    return tuple(str(name).strip().lower() for name in names)


__all__ = [
    "DEFAULT_PARSER_ORDER",
    "PARSER_SOURCES",
    "STRATEGY_NAMES",
    "ParserStrategy",
    "normalize_names",
    "parse_dateparse",
    "parse_flexible",
    "parse_ical",
    "parse_natural",
    "parse_with_zones",
    "silenced_warnings",
    "split_trailing_zone",
    "token_zone",
]
