"""easydate: quick and easy ``datetime`` creation from messy input.

Tries several parsing engines in turn and takes explicit control of the
timezone at every step:

    >>> import easydate
    >>> easydate.parse("2007/01/01 23:22:01 US/Eastern", timezone="US/Pacific")
    datetime.datetime(2007, 1, 1, 20, 22, 1, tzinfo=zoneinfo.ZoneInfo(key='America/Los_Angeles'))

``parse_date``, ``parse_datetime``, ``date``, ``datetime``, ``new``,
``new_date`` and ``new_datetime`` are the same call.
"""

from easydate.errors import (
    ConstructionError,
    EasyDateError,
    InvalidTimezoneError,
    TruncationError,
)
from easydate.facade import DateParser, parse

__version__ = "0.7.0"

parse_date = parse
parse_datetime = parse
date = parse
datetime = parse
new = parse
new_date = parse
new_datetime = parse

__all__ = [
    "ConstructionError",
    "DateParser",
    "EasyDateError",
    "InvalidTimezoneError",
    "TruncationError",
    "date",
    "datetime",
    "new",
    "new_date",
    "new_datetime",
    "parse",
    "parse_date",
    "parse_datetime",
]
