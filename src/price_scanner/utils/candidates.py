"""
Candidate dataclass for price extraction.

Each candidate is one pattern match that survived admission checks.
Filters include or drop candidates; they never edit them.
"""

from dataclasses import dataclass

from .money import COLLAPSE_WHITESPACE


@dataclass(frozen=True)
class PriceCandidate:
    """
    Candidate price found in text.

    - raw_text: Matched text, whitespace collapsed and trimmed
    - value: Normalized amount, computed once at scan time
    - position: Offset of the match start in the source text
    - end: Offset just past the match in the source text
    """
    raw_text: str
    value: float
    position: int
    end: int

    @property
    def match_span(self) -> tuple[int, int]:
        return (self.position, self.end)


def create_price_candidate(
    raw_text: str,
    value: float,
    match_span: tuple[int, int]
) -> PriceCandidate:
    """
    Create PriceCandidate from a pattern match.

    Args:
        raw_text: Matched text as it appears in the source
        value: Parsed amount
        match_span: Character span of match

    Returns:
        PriceCandidate with collapsed display text
    """
    start, end = match_span
    return PriceCandidate(
        raw_text=COLLAPSE_WHITESPACE.sub(' ', raw_text).strip(),
        value=value,
        position=start,
        end=end,
    )
