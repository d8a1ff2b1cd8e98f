"""
Pydantic models for extracted prices.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class PriceResult(BaseModel):
    """Price found in text, paired with the currency of its own match."""
    amount: float
    currency: Optional[str] = None  # ISO code: PLN, EUR, USD, GBP
    text: str

    model_config = ConfigDict(frozen=True)
