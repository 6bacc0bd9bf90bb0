"""
Unit Tests for Structure Selector

Bridge/balloon only when an open seller faces a significant shortfall.
"""

from decimal import Decimal

import pytest

from dealmaker.calculators.down_payment import DownPaymentChecker
from dealmaker.calculators.gap import GapAnalyzer
from dealmaker.calculators.structure import StructureSelector
from dealmaker.config import StrategyPolicy


class TestStructureSelector:
    """Test the structure decision table."""

    @pytest.fixture
    def policy(self):
        return StrategyPolicy()

    def _select(self, policy, ctx):
        down = DownPaymentChecker().check(ctx)
        gap = GapAnalyzer(policy).analyze(ctx)
        return StructureSelector(policy).select(ctx, down, gap)

    @pytest.mark.parametrize("considered", ["yes", "maybe"])
    def test_open_seller_with_large_shortfall_gets_bridge(self, policy, make_ctx, considered):
        """$80k required, $30k capital → $50k short = 12.5% of ask."""
        ctx = make_ctx(ask=400000, down_pct=20, capital=30000, considered=considered)
        assert self._select(policy, ctx) == "bridgeBalloon"

    def test_closed_seller_stays_amortizing(self, policy, make_ctx):
        ctx = make_ctx(ask=400000, down_pct=20, capital=30000, considered="no")
        assert self._select(policy, ctx) == "amortizing"

    def test_unknown_stance_stays_amortizing(self, policy, make_ctx):
        ctx = make_ctx(ask=400000, down_pct=20, capital=30000, considered=None)
        assert self._select(policy, ctx) == "amortizing"

    def test_small_shortfall_stays_amortizing(self, policy, make_ctx):
        """$30k short = 7.5% of ask, under the 10% threshold."""
        ctx = make_ctx(ask=400000, down_pct=20, capital=50000, considered="yes")
        assert self._select(policy, ctx) == "amortizing"

    def test_shortfall_at_threshold_stays_amortizing(self, policy, make_ctx):
        """$40k short = exactly 10%; ties go to amortizing."""
        ctx = make_ctx(ask=400000, down_pct=20, capital=40000, considered="yes")
        assert self._select(policy, ctx) == "amortizing"

    def test_down_ok_stays_amortizing(self, policy, make_ctx):
        ctx = make_ctx(ask=400000, down_pct=20, capital=90000, considered="yes", offer=200000)
        assert self._select(policy, ctx) == "amortizing"

    def test_far_gap_alone_does_not_force_bridge(self, policy, make_ctx):
        ctx = make_ctx(ask=400000, offer=200000, considered="yes")
        assert self._select(policy, ctx) == "amortizing"

    def test_unknown_capital_stays_amortizing(self, policy, make_ctx):
        ctx = make_ctx(ask=400000, down_pct=20, capital=None, considered="yes")
        assert self._select(policy, ctx) == "amortizing"

    def test_threshold_from_policy(self, make_ctx):
        policy = StrategyPolicy(bridge_shortfall_pct=Decimal("5"))
        ctx = make_ctx(ask=400000, down_pct=20, capital=50000, considered="yes")
        assert self._select(policy, ctx) == "bridgeBalloon"

    def test_shortfall_pct(self):
        from dealmaker.models import DownPaymentCheck

        down = DownPaymentCheck(down_short=Decimal("50000"))
        assert StructureSelector.shortfall_pct(down, Decimal("400000")) == Decimal("12.5")
        assert StructureSelector.shortfall_pct(down, None) == Decimal("0")
