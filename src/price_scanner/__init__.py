"""
Multi-currency price extraction from unstructured page text.

    >>> import price_scanner
    >>> price_scanner.parse("1.299,00 zł").model_dump()
    {'amount': 1299.0, 'currency': 'PLN', 'text': '1.299,00 zł'}
"""

from typing import Optional, List

from price_scanner.models.price import PriceResult
from price_scanner.services.consent import is_consent_node
from price_scanner.services.detector import PriceDetector, default_detector
from price_scanner.utils.candidates import PriceCandidate
from price_scanner.utils.money import (
    normalized_price,
    extract_currency,
    strip_price_mentions,
    price_regex_from_value,
)

__version__ = "0.1.0"
VERSION = __version__

__all__ = [
    'parse', 'scan', 'contains_price',
    'normalized_price', 'extract_currency', 'strip_price_mentions', 'price_regex_from_value',
    'PriceResult', 'PriceCandidate', 'PriceDetector', 'is_consent_node',
    'VERSION', '__version__',
]


def parse(text: Optional[str]) -> Optional[PriceResult]:
    """Return the first standalone price in text, or None."""
    prices = default_detector.extract_prices(text)
    if not prices:
        return None
    return _build_result(prices[0])


def scan(text: Optional[str]) -> List[PriceResult]:
    """Return every standalone price in text, each with its own currency."""
    return [_build_result(price) for price in default_detector.extract_prices(text)]


def contains_price(text: Optional[str]) -> bool:
    """Cheap check for anything price-shaped; no filtering."""
    return default_detector.contains_price(text)


def _build_result(price: PriceCandidate) -> PriceResult:
    return PriceResult(
        amount=price.value,
        currency=extract_currency(price.raw_text),
        text=price.raw_text,
    )
