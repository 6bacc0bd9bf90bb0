"""
Unit Tests for Down Payment Checker
"""

from decimal import Decimal

import pytest

from dealmaker.calculators.down_payment import DownPaymentChecker


class TestDownPaymentChecker:
    """Test required down payment and feasibility."""

    @pytest.fixture
    def checker(self):
        return DownPaymentChecker()

    def test_capital_covers_required_down(self, checker, make_ctx):
        """$400k × 20% = $80k required; buyer has $100k."""
        result = checker.check(make_ctx(ask=400000, down_pct=20, capital=100000))

        assert result.required_down == Decimal("80000")
        assert result.down_ok is True
        assert result.down_short == Decimal("0")

    def test_capital_short(self, checker, make_ctx):
        """$80k required; buyer has $30k → short $50k."""
        result = checker.check(make_ctx(ask=400000, down_pct=20, capital=30000))

        assert result.down_ok is False
        assert result.down_short == Decimal("50000")
        assert result.buyer_capital == Decimal("30000")

    def test_exact_capital_is_ok(self, checker, make_ctx):
        result = checker.check(make_ctx(ask=400000, down_pct=20, capital=80000))
        assert result.down_ok is True

    def test_unknown_capital(self, checker, make_ctx):
        result = checker.check(make_ctx(ask=400000, down_pct=20, capital=None))

        assert result.required_down == Decimal("80000")
        assert result.down_ok is None
        assert result.down_short is None

    def test_unknown_down_pct(self, checker, make_ctx):
        result = checker.check(make_ctx(ask=400000, down_pct=None, capital=50000))

        assert result.required_down is None
        assert result.down_ok is None
        assert result.buyer_capital == Decimal("50000")

    def test_unknown_ask(self, checker, make_ctx):
        result = checker.check(make_ctx(ask=None, down_pct=20, capital=50000))

        assert result.required_down is None
        assert result.down_pct_requested == Decimal("20")

    def test_required_down_rounds_to_cents(self, checker, make_ctx):
        """$123,456.78 × 12.5% = $15,432.0975 → $15,432.10"""
        result = checker.check(make_ctx(ask="123456.78", down_pct="12.5", capital=0))
        assert result.required_down == Decimal("15432.10")
