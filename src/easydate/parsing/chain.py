"""Ordered fallback across parser strategies.

The chain hands the same, unmodified text to each strategy in turn and
returns the first ``ParsedMoment``. A strategy that raises or returns
``None`` just lets the next one try; exhausting the order returns ``None``
(no match), which is a normal outcome rather than an error.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence, Union

from easydate.parsing.models import ParsedMoment
from easydate.parsing.strategies import (
    DEFAULT_PARSER_ORDER,
    PARSER_SOURCES,
    ParserStrategy,
    normalize_names,
    silenced_warnings,
)

logger = logging.getLogger(__name__)

StrategyNames = Union[str, Iterable[str], None]


class ParserChain:
    """Try parser strategies in order until one succeeds.

    Example:
        >>> chain = ParserChain()
        >>> moment = chain.attempt("2007/01/01 23:22:01 US/Eastern", exclude="natural")
        >>> moment.timezone
        'America/New_York'
    """

    def __init__(
        self,
        sources: Mapping[str, ParserStrategy] = PARSER_SOURCES,
        default_order: Sequence[str] = DEFAULT_PARSER_ORDER,
    ) -> None:
        self.sources = {name.lower(): strategy for name, strategy in sources.items()}
        self.default_order = normalize_names(default_order)

    def attempt(
        self,
        text: str,
        order: StrategyNames = None,
        exclude: StrategyNames = None,
    ) -> Optional[ParsedMoment]:
        """Parse ``text`` with the first strategy that succeeds.

        Args:
            text: Raw input, passed unmodified to every strategy
            order: Strategy name or sequence of names (defaults to the chain's order)
            exclude: Strategy name or names to skip wherever they appear

        Returns:
            The first ParsedMoment produced, or None if every strategy failed
        """
        names = normalize_names(order) or self.default_order
        excluded = set(normalize_names(exclude))

        for name in names:
            if name in excluded:
                continue
            strategy = self.sources.get(name)
            if strategy is None:
                logger.warning(f"Unknown parser strategy '{name}', skipping")
                continue

            try:
                with silenced_warnings():
                    parsed = strategy(text)
            except Exception as e:
                logger.debug(f"Parser '{name}' failed on '{text}': {e}")
                continue

            if parsed is None:
                logger.debug(f"Parser '{name}' found nothing in '{text}'")
                continue

            if parsed.strategy is None:
                parsed.strategy = name
            logger.debug(f"Parser '{name}' matched '{text}'")
            return parsed

        logger.debug(f"No parser matched '{text}'")
        return None


__all__ = ["ParserChain", "StrategyNames"]
