"""
Tests for the top-level parse/scan/contains_price API.
"""

import pytest
from pydantic import ValidationError

import price_scanner
from price_scanner import PriceResult


class TestParse:
    """First standalone price with its currency."""

    def test_polish_price(self):
        """Thousands dot, decimal comma, PLN."""
        result = price_scanner.parse("1.299,00 zł")
        assert result.model_dump() == {"amount": 1299.0, "currency": "PLN", "text": "1.299,00 zł"}

    def test_british_price(self):
        """Prefix pound sign resolves to GBP."""
        result = price_scanner.parse("£49.99")
        assert result == PriceResult(amount=49.99, currency="GBP", text="£49.99")

    def test_returns_none_without_price(self):
        """No price, blank or None text gives None."""
        assert price_scanner.parse("No price here") is None
        assert price_scanner.parse("") is None
        assert price_scanner.parse(None) is None

    def test_returns_only_first_price(self):
        """The earliest surviving price wins."""
        result = price_scanner.parse("Was £49.99 now £29.99")
        assert result.amount == pytest.approx(49.99)

    def test_result_is_immutable(self):
        """Results are frozen models."""
        result = price_scanner.parse("£49.99")
        with pytest.raises((ValidationError, TypeError)):
            result.amount = 1.0


class TestScan:
    """Every standalone price, each with its own currency."""

    def test_multiple_prices(self):
        """Old and new price both come back."""
        results = price_scanner.scan("Was £49.99 Now £29.99")
        assert len(results) == 2
        assert sorted(r.amount for r in results) == [29.99, 49.99]
        assert {r.currency for r in results} == {"GBP"}

    def test_returns_empty_list_without_price(self):
        """No price gives an empty list, not None."""
        assert price_scanner.scan("No price here") == []

    def test_mixed_currencies(self):
        """Each result carries its own currency."""
        results = price_scanner.scan("€99,00 or £85.00")
        assert len(results) == 2
        assert sorted(r.currency for r in results) == ["EUR", "GBP"]

    def test_currency_code_suffix(self):
        """ISO code after the amount."""
        results = price_scanner.scan("Price: 120.00 USD")
        assert [(r.amount, r.currency) for r in results] == [(120.0, "USD")]

    def test_discount_delta_excluded(self):
        """Minus-prefixed delta is not a price."""
        results = price_scanner.scan("449,00 zł -100,00 zł 349,00 zł")
        assert sorted(r.amount for r in results) == [349.0, 449.0]

    def test_is_idempotent(self):
        """Scanning twice gives equal results."""
        text = "Zaoszczędź 25,00 zł 100,00 zł 75,00 zł, €12,50"
        assert price_scanner.scan(text) == price_scanner.scan(text)

    @pytest.mark.parametrize("text", [
        "Cena: 1.019,00 zł, wcześniej 1 199,00 zł",
        "£150 £120 £30",
        "15,00 zł / 50cm 20,00 zł 30,00 zł/mb",
        "€1 234 i 99.00 PLN",
    ])
    def test_amount_matches_normalized_text(self, text):
        """Each amount equals the normalized display text."""
        for result in price_scanner.scan(text):
            assert price_scanner.normalized_price(result.text) == result.amount

    def test_no_duplicate_amounts(self):
        """One result per amount across currencies."""
        results = price_scanner.scan("99,00 zł 99.00 PLN €99,00 49,00 zł")
        amounts = [r.amount for r in results]
        assert len(amounts) == len(set(amounts))


class TestContainsPrice:
    """Pattern-only presence check."""

    def test_true_when_text_contains_price(self):
        """A plain price is found."""
        assert price_scanner.contains_price("Only 99,00 zł") is True

    def test_false_when_text_has_no_price(self):
        """Plain text has no price."""
        assert price_scanner.contains_price("No price here") is False


class TestStripPriceMentions:
    """Removing scanned prices from their source text."""

    def test_strips_scanned_prices(self):
        """Display texts from scan are all removed."""
        text = "Stara cena 1 019,00 zł, nowa 799,00 zł!"
        prices = [r.text for r in price_scanner.scan(text)]
        assert price_scanner.strip_price_mentions(text, prices) == "Stara cena , nowa !"


def test_has_version():
    """Version is exposed under both names."""
    assert price_scanner.VERSION == price_scanner.__version__
    assert price_scanner.VERSION
