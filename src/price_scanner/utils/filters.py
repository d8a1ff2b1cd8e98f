"""
Filter stages for price candidates.

Each stage takes the ordered candidate list and returns a new list.
Candidates are never edited, only kept or dropped, so stages compose
in any order without invalidating positions.

Pipeline order used by the detector:
    range -> dedup -> savings
"""

from itertools import combinations
from typing import List, Set
import logging
import re

from .candidates import PriceCandidate

__all__ = [
    'RANGE_SEPARATOR_PATTERN',
    'filter_range_prices', 'find_range_indices', 'is_range_between',
    'dedupe_by_value',
    'filter_savings_by_difference', 'has_savings_amount', 'matches_savings_pattern',
]

logger = logging.getLogger(__name__)

# En/em dash with optional spacing, or a hyphen with spaces on both sides
RANGE_SEPARATOR_PATTERN = re.compile(r'\s*[–—]\s*|\s+-\s+')


def filter_range_prices(
    candidates: List[PriceCandidate],
    text: str,
    min_prices: int = 2
) -> List[PriceCandidate]:
    """
    Drop both ends of every "10 zł – 20 zł" style range.

    Removal is by index so that equal-valued candidates outside a range
    are kept.
    """
    if len(candidates) < min_prices:
        return list(candidates)

    range_indices = find_range_indices(candidates, text)
    if range_indices:
        logger.debug("Dropping range endpoints", extra={
            "indices": sorted(range_indices),
            "values": [candidates[idx].value for idx in sorted(range_indices)],
        })

    return [
        candidate for idx, candidate in enumerate(candidates)
        if idx not in range_indices
    ]


def find_range_indices(candidates: List[PriceCandidate], text: str) -> Set[int]:
    indices: Set[int] = set()
    for idx in range(len(candidates) - 1):
        if is_range_between(candidates[idx], candidates[idx + 1], text):
            indices.add(idx)
            indices.add(idx + 1)
    return indices


def is_range_between(current: PriceCandidate, next_price: PriceCandidate, text: str) -> bool:
    """True when the text between two adjacent matches is a range separator."""
    start_pos = current.end
    end_pos = next_price.position
    if end_pos <= start_pos:
        return False

    return RANGE_SEPARATOR_PATTERN.search(text[start_pos:end_pos]) is not None


def dedupe_by_value(candidates: List[PriceCandidate]) -> List[PriceCandidate]:
    """Keep the first candidate for each distinct value, in order."""
    seen = set()
    unique = []
    for candidate in candidates:
        if candidate.value in seen:
            continue
        seen.add(candidate.value)
        unique.append(candidate)
    return unique


def filter_savings_by_difference(
    candidates: List[PriceCandidate],
    min_prices: int = 3,
    min_ratio: float = 0.1,
    min_diff: float = 0.01,
    tolerance_ratio: float = 0.02,
    tolerance_min: float = 1.0
) -> List[PriceCandidate]:
    """
    Drop a "you save X" badge matched as a standalone price.

    A shop page showing an old price, a new price and the saving yields
    three amounts where the smallest equals the gap between the other two.
    When any pair of the larger values differs by roughly the minimum,
    every candidate equal to the minimum is removed.

    Args:
        candidates: Deduplicated candidates
        min_prices: Filter only applies with at least this many candidates
        min_ratio: Gap must be at least min_ratio * minimum
        min_diff: Absolute floor for the gap
        tolerance_ratio: Allowed relative distance between gap and minimum
        tolerance_min: Absolute floor for that distance

    Returns:
        Candidates without the savings badge, or unchanged
    """
    if len(candidates) < min_prices:
        return list(candidates)

    values = [candidate.value for candidate in candidates]
    min_value = min(values)

    if not has_savings_amount(
        values, min_value,
        min_ratio=min_ratio,
        min_diff=min_diff,
        tolerance_ratio=tolerance_ratio,
        tolerance_min=tolerance_min,
    ):
        return list(candidates)

    logger.debug("Dropping savings badge", extra={"value": min_value})
    return [candidate for candidate in candidates if candidate.value != min_value]


def has_savings_amount(
    values: List[float],
    min_value: float,
    min_ratio: float = 0.1,
    min_diff: float = 0.01,
    tolerance_ratio: float = 0.02,
    tolerance_min: float = 1.0
) -> bool:
    for first, second in combinations(values, 2):
        if first == min_value or second == min_value:
            continue
        if matches_savings_pattern(
            abs(first - second), min_value,
            min_ratio=min_ratio,
            min_diff=min_diff,
            tolerance_ratio=tolerance_ratio,
            tolerance_min=tolerance_min,
        ):
            return True
    return False


def matches_savings_pattern(
    diff: float,
    min_value: float,
    min_ratio: float = 0.1,
    min_diff: float = 0.01,
    tolerance_ratio: float = 0.02,
    tolerance_min: float = 1.0
) -> bool:
    """
    Check whether a price gap looks like the minimum value.

    Examples:
        >>> matches_savings_pattern(100.0, 99.0)
        True
        >>> matches_savings_pattern(200.0, 150.0)
        False
    """
    if diff < max(min_value * min_ratio, min_diff):
        return False

    tolerance = max(min_value * tolerance_ratio, tolerance_min)
    return abs(min_value - diff) <= tolerance
