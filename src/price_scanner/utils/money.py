"""
Price string normalization with multi-locale support.

Handles the separator conventions seen on scraped shop pages:
- Polish/European: 1.019,00 zł or 1 019,00 zł
- US/UK: $1,019.00
- Bare: 99.99, 1299

Also resolves currency markers to ISO codes and rebuilds a regex that
matches any rendering of a known amount, for erasing prices from text.
"""

from typing import Optional, Tuple, List, Iterable
import re

CURRENCY_MAP = {
    'zł': 'PLN', 'zl': 'PLN', 'pln': 'PLN',
    '€': 'EUR', 'eur': 'EUR',
    '$': 'USD', 'usd': 'USD',
    '£': 'GBP', 'gbp': 'GBP',
}

CURRENCY_REGEX = re.compile(r'(pln|usd|eur|gbp|zł|zl|€|\$|£)', re.IGNORECASE)
CURRENCY_SUFFIX = r'(?:zł|zl|pln|€|eur|\$|usd|£|gbp)'

NBSP = '\u00a0'
NON_NUMERIC = re.compile(r'[^0-9.,\s]')
WHITESPACE = re.compile(r'\s')
COLLAPSE_WHITESPACE = re.compile(r'\s+')
MULTIPLE_SPACES = re.compile(r'\s{2,}')

DECIMAL_PLACES = 2
THOUSANDS_GROUP_SIZE = 3


def normalized_price(value: Optional[str]) -> Optional[float]:
    """
    Parse a matched price string into a float.

    Args:
        value: Raw price text (e.g., "1.019,00 zł", "$1,019.00")

    Returns:
        Float amount or None if the text holds no parseable number

    Examples:
        >>> normalized_price("1.019,00 zł")
        1019.0
        >>> normalized_price("$1,019.00")
        1019.0
        >>> normalized_price("zł") is None
        True
    """
    if value is None:
        return None

    text = str(value).replace(NBSP, ' ').strip()
    if not text:
        return None

    cleaned = NON_NUMERIC.sub('', text)
    if not cleaned:
        return None

    cleaned = WHITESPACE.sub('', _normalize_separators(cleaned))
    if cleaned.endswith('.'):
        # "5." or "5," has no decimal digits
        return None

    try:
        return float(cleaned)
    except (ValueError, TypeError):
        return None


def _normalize_separators(cleaned: str) -> str:
    """
    Turn the decimal separator into a dot and drop thousands separators.

    - Both ',' and '.': whichever comes last is the decimal point
    - One ',' only: decimal comma
    - Several ',' only: last one is the decimal comma, rest are thousands
    - Otherwise: left as is
    """
    has_dot = '.' in cleaned
    comma_count = cleaned.count(',')

    if comma_count and has_dot:
        return _resolve_mixed_separators(cleaned)
    if comma_count == 1:
        return cleaned.replace(',', '.')
    if comma_count > 1:
        head, _, tail = cleaned.rpartition(',')
        return head.replace(',', '') + '.' + tail
    return cleaned


def _resolve_mixed_separators(cleaned: str) -> str:
    if cleaned.rindex(',') > cleaned.rindex('.'):
        # European: 1.234,56
        return cleaned.replace('.', '').replace(',', '.')
    # US: 1,234.56
    return cleaned.replace(',', '')


def extract_currency(value: Optional[str]) -> Optional[str]:
    """
    Return the ISO code of the first currency marker in the text.

    Examples:
        >>> extract_currency("£49.99")
        'GBP'
        >>> extract_currency("99.00 PLN")
        'PLN'
        >>> extract_currency("just text") is None
        True
    """
    if not value:
        return None

    match = CURRENCY_REGEX.search(str(value))
    if not match:
        return None

    marker = match.group(1)
    return CURRENCY_MAP.get(marker.lower(), marker.upper())


def strip_price_mentions(text: Optional[str], prices: Optional[Iterable[Optional[str]]]) -> str:
    """
    Remove known price strings from text.

    Each price is removed literally, then without spaces, then through a
    regex rebuilt from its numeric value so that other groupings and
    currency markers of the same amount disappear as well.

    Args:
        text: Text to clean
        prices: Price strings to remove; None and blank entries are skipped

    Returns:
        Text without the prices, whitespace collapsed
    """
    cleaned = (text or '').replace(NBSP, ' ')

    for price in prices or ():
        if price is None:
            continue

        normalized = str(price).replace(NBSP, ' ').strip()
        if not normalized:
            continue

        cleaned = cleaned.replace(normalized, '').replace(normalized.replace(' ', ''), '')

        price_value = normalized_price(price)
        if price_value is None:
            continue

        cleaned = price_regex_from_value(price_value).sub('', cleaned)

    return MULTIPLE_SPACES.sub(' ', cleaned).strip()


def price_regex_from_value(value: float) -> re.Pattern:
    """
    Build a regex matching any textual rendering of an amount.

    Thousands groups may be separated by a space or NBSP, the decimal
    separator may be ',' or '.', and a currency marker may follow.

    Examples:
        >>> bool(price_regex_from_value(1299.0).search("1 299,00 zł"))
        True
    """
    integer, decimals = split_price_parts(value)
    int_pattern = thousands_pattern(integer)
    return re.compile(
        rf'{int_pattern}[.,]{decimals}\s?{CURRENCY_SUFFIX}?',
        re.IGNORECASE,
    )


def split_price_parts(value: float) -> Tuple[str, str]:
    integer, _, decimals = f'{value:.{DECIMAL_PLACES}f}'.partition('.')
    return integer, decimals


def thousands_groups(integer: str) -> List[str]:
    """Split an integer string into right-aligned groups of up to three digits."""
    head = len(integer) % THOUSANDS_GROUP_SIZE or THOUSANDS_GROUP_SIZE
    groups = [integer[:head]]
    for start in range(head, len(integer), THOUSANDS_GROUP_SIZE):
        groups.append(integer[start:start + THOUSANDS_GROUP_SIZE])
    return groups


def thousands_pattern(integer: str) -> str:
    return r'[\s\u00a0]?'.join(re.escape(group) for group in thousands_groups(integer))
