"""
Price detector service for finding standalone prices in page text.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Optional, List, Iterator

from price_scanner.config import Settings, settings
from price_scanner.utils.money import normalized_price, COLLAPSE_WHITESPACE
from price_scanner.utils.candidates import PriceCandidate, create_price_candidate
from price_scanner.utils.filters import (
    filter_range_prices,
    dedupe_by_value,
    filter_savings_by_difference,
)

logger = logging.getLogger(__name__)

# Amount shapes shared by all price alternatives
GROUPED_OR_BARE = r'(?:[0-9]{1,3}(?:[.\s\u00a0][0-9]{3})+|[0-9]{1,4})'
CURRENCY_PREFIX = r'(?:zł|pln|€|\$|£)'
CURRENCY_SUFFIX_ANY = r'(?:zł|pln|€|\$|£|eur|usd|gbp)'


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


PRICE_PATTERNS = [
    PatternSpec(
        name='currency_prefix',
        pattern=rf'{CURRENCY_PREFIX}[\s\u00a0]*{GROUPED_OR_BARE}(?:[.,][0-9]{{1,2}})?',
        example='zł 248,86',
        notes='Currency marker before the amount, decimals optional',
    ),
    PatternSpec(
        name='decimal_suffix',
        pattern=rf'(?<![a-zA-Z]){GROUPED_OR_BARE}[.,][0-9]{{2}}[\s\u00a0]*{CURRENCY_SUFFIX_ANY}(?![0-9])',
        example='1.019,00 zł',
        notes='Two decimals then a symbol or ISO code; not glued to a word',
    ),
    PatternSpec(
        name='integer_suffix',
        pattern=rf'(?<![a-zA-Z]){GROUPED_OR_BARE}[\s\u00a0]*{CURRENCY_PREFIX}(?![0-9])',
        example='25 zł',
        notes='Whole amount then a symbol; codes are too noisy here',
    ),
]

# Alternatives are tried left to right at each position
PRICE_PATTERN = re.compile(
    '|'.join(spec.pattern for spec in PRICE_PATTERNS),
    re.IGNORECASE,
)

UNIT_TOKENS = (
    'kg', 'g', 'mg', 'l', 'ml', 'szt', 'm[²³23]?', 'cm', 'mm', 'op', 'opak',
    'pcs', 'pc', 'unit', 'each', 'ea', 'kaps', 'tabl', 'tab',
)
PER_UNIT_PATTERN = re.compile(
    r'(?:/\s*|za\s+)(?:' + '|'.join(UNIT_TOKENS) + r')\b',
    re.IGNORECASE,
)

NEGATIVE_PREFIXES = ('-', '\u2212')


class PriceDetector:
    """Service for extracting standalone prices from free text."""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    def extract_prices(self, text: Optional[str]) -> List[PriceCandidate]:
        """
        Find prices in text and drop the ones that are not standalone.

        Pipeline:
        1. Scan and admit candidates (parseable, not negative, not per-unit)
        2. Drop both ends of price ranges
        3. Keep the first candidate per value
        4. Drop a savings badge equal to the gap between two other prices

        Args:
            text: Free text, e.g. the visible text of a product page

        Returns:
            Candidates in text order
        """
        text_str = text or ''

        raw_prices = self.scan_raw_prices(text_str)
        filtered = filter_range_prices(
            raw_prices, text_str,
            min_prices=self.config.MIN_PRICES_FOR_RANGE,
        )
        unique = dedupe_by_value(filtered)
        result = filter_savings_by_difference(
            unique,
            min_prices=self.config.MIN_PRICES_FOR_SAVINGS,
            min_ratio=self.config.SAVINGS_MIN_RATIO,
            min_diff=self.config.SAVINGS_MIN_DIFF,
            tolerance_ratio=self.config.SAVINGS_TOLERANCE_RATIO,
            tolerance_min=self.config.SAVINGS_TOLERANCE_MIN,
        )

        logger.debug("Extracted prices", extra={
            "raw_count": len(raw_prices),
            "final_count": len(result),
        })
        return result

    def contains_price(self, text: Optional[str]) -> bool:
        """Pattern-only check, no admission or filtering."""
        return PRICE_PATTERN.search(text or '') is not None

    def scan_raw_prices(self, text_str: str) -> List[PriceCandidate]:
        return [
            candidate for candidate in self._iter_candidates(text_str)
            if candidate is not None
        ]

    def _iter_candidates(self, text_str: str) -> Iterator[Optional[PriceCandidate]]:
        for match in PRICE_PATTERN.finditer(text_str):
            if not match.group(0):
                continue
            yield self._build_candidate(text_str, match)

    def _build_candidate(self, text_str: str, match: re.Match) -> Optional[PriceCandidate]:
        match_str = match.group(0)
        start, end = match.span()

        value = normalized_price(match_str)
        if value is None:
            logger.debug("Skipping unparseable match", extra={"match": match_str})
            return None

        if self._is_negative_price(text_str, start):
            logger.debug("Skipping negative price", extra={"match": match_str, "position": start})
            return None

        if self._is_per_unit_price(text_str, end):
            logger.debug("Skipping per-unit price", extra={"match": match_str, "position": start})
            return None

        return create_price_candidate(match_str, value, (start, end))

    @staticmethod
    def _is_negative_price(text_str: str, match_index: int) -> bool:
        return match_index > 0 and text_str[match_index - 1] in NEGATIVE_PREFIXES

    def _is_per_unit_price(self, text_str: str, match_end: int) -> bool:
        window = text_str[match_end:match_end + self.config.UNIT_LOOKAHEAD_CHARS]
        text_after = COLLAPSE_WHITESPACE.sub(' ', window).lstrip()
        return PER_UNIT_PATTERN.match(text_after) is not None


default_detector = PriceDetector()
