"""Parsing layer: strategies, the fallback chain and extended phrases.

This package turns raw text into a ``ParsedMoment``:
- Strategy adapters around dateutil and dateparser
- ParserChain: ordered fallback across strategies
- PhraseParser: "first day of last month" style phrases
"""

from easydate.parsing.models import (
    ConversionMode,
    ParsedMoment,
    ResolutionOutcome,
)

from easydate.parsing.strategies import (
    DEFAULT_PARSER_ORDER,
    PARSER_SOURCES,
    STRATEGY_NAMES,
    ParserStrategy,
    normalize_names,
    silenced_warnings,
    split_trailing_zone,
)

from easydate.parsing.chain import ParserChain

from easydate.parsing.extended import PhraseParser, is_phrase

__all__ = [
    # Models
    "ConversionMode",
    "ParsedMoment",
    "ResolutionOutcome",
    # Strategies
    "DEFAULT_PARSER_ORDER",
    "PARSER_SOURCES",
    "STRATEGY_NAMES",
    "ParserStrategy",
    "normalize_names",
    "silenced_warnings",
    "split_trailing_zone",
    # Chain
    "ParserChain",
    # Extended phrases
    "PhraseParser",
    "is_phrase",
]
