"""
Unit Tests for Narrative Rendering

Tests verify money formatting, section order and the conditional clauses in
the proposed terms block.
"""

from decimal import Decimal

import pytest

from dealmaker import StrategyEngine, StrategyPolicy
from dealmaker.narrative import (
    NarrativeRenderer,
    format_money,
    format_pct,
    render_narrative,
    render_profit_split_summary,
)
from dealmaker.calculators.profit_split import ProfitSplitCalculator
from dealmaker.models import ProfitSplitInput

LATE_RULE = "Credit accrues only while the account is current; two or more late payments (>15 days) stop further accrual."


class TestFormatting:
    """Test the shared value formatters."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "N/A"),
            (0, "$0"),
            (400000, "$400,000"),
            (Decimal("13200.00"), "$13,200"),
            (Decimal("1234.5"), "$1,234.50"),
            (Decimal("1234.567"), "$1,234.57"),
            (-500, "-$500"),
        ],
    )
    def test_format_money(self, value, expected):
        assert format_money(value) == expected

    def test_format_money_beyond_context_precision(self):
        assert format_money(Decimal("1e27")) == "$1" + ",000" * 9
        assert format_money(Decimal("-1e30")) == "-$1" + ",000" * 10

    @pytest.mark.parametrize(
        "value, expected",
        [(None, "TBD"), (Decimal("33"), "33"), (Decimal("25.0"), "25"), (Decimal("12.5"), "12.5"), (Decimal("8.25"), "8.25")],
    )
    def test_format_pct(self, value, expected):
        assert format_pct(value) == expected


class TestDealNarrative:
    """Test the rendered deal narrative."""

    @pytest.fixture
    def engine(self):
        return StrategyEngine()

    def _render(self, engine, ctx):
        return engine.render(ctx, engine.compute(ctx))

    def test_section_order(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000, down_pct=20, capital=100000))

        headers = ["LISTING\n", "SELLER FINANCING\n", "\nBUYER\n", "FIT CHECK\n", "PROPOSED TERMS", "DESCRIPTION\n", "TASK\n"]
        positions = [text.index(h) for h in headers]
        assert positions == sorted(positions)

    def test_listing_values_use_money_format(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000))

        assert "Asking Price: $400,000" in text
        assert "SDE: N/A | Revenue: N/A | Profit: N/A" in text
        assert "Lease: N/A / mo" in text
        assert "Employees: N/A" in text

    def test_unknown_offer_line(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=None))
        assert "Buyer offer price not specified." in text

    def test_gap_line_under_ask(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=360000))
        assert "Buyer offer vs ask: ~10% under ask ($360,000 vs $400,000)." in text

    def test_gap_line_over_ask(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=410000))
        assert "~2.5% over ask" in text

    def test_capital_line_short(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000, down_pct=20, capital=50000))
        assert "Required down: $80,000. Buyer capital: $50,000 (short by ~$30,000)." in text

    def test_capital_line_unknown_down(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000))
        assert "Seller down % not specified." in text

    def test_amortizing_terms(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000, down_pct=20, capital=100000, rate=8))

        assert "PROPOSED TERMS: Standard Amortizing Seller Note" in text
        assert "• Cash down at close: 20% (~$80,000)" in text
        assert "• Seller note: ~$320,000 at 8%" in text
        assert "• Payments: amortizing over 4 years" in text
        assert "auto-extends" not in text
        assert "Down-Payment Credit" not in text

    def test_unknown_rate_is_tbd(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000, down_pct=20, capital=100000))
        assert "at TBD interest" in text

    def test_unknown_cash_is_tbd(self, engine, make_ctx):
        text = self._render(engine, make_ctx(offer=390000))
        assert "• Cash down at close: TBD (~N/A)" in text

    def test_bridge_terms_with_equity_credit(self, engine, make_ctx):
        ctx = make_ctx(offer=390000, down_pct=25, capital=50000, considered="yes", rate=8, term=5)
        text = self._render(engine, ctx)

        assert "Bridge-to-Bank Proposal (interest-only 24 months, then balloon/refi)" in text
        assert "• Payments: interest-only for 24 months, balloon at month 24 via bank refinance" in text
        assert "$2,084 from each monthly payment accrues as Buyer Equity Credit, up to $50,000." in text
        assert LATE_RULE in text
        assert (
            "If refinance isn't achieved by month 24, the note auto-extends 12 months at a step-up rate "
            "or converts to a 60-month amortization at the prevailing rate (buyer's option)."
        ) in text
        assert "amortizing over" not in text

    def test_bridge_without_equity_credit(self, engine, make_ctx):
        """Shortfall of 20% of ask is above the equity credit cap."""
        ctx = make_ctx(offer=390000, down_pct=30, capital=40000, considered="yes")
        text = self._render(engine, ctx)

        assert "Down-Payment Credit" not in text
        assert "auto-extends 12 months" in text

    def test_balloon_month_from_policy(self, make_ctx):
        engine = StrategyEngine(StrategyPolicy(balloon_at_month=18))
        ctx = make_ctx(offer=390000, down_pct=25, capital=50000, considered="yes")
        text = engine.render(ctx, engine.compute(ctx))

        assert "If refinance isn't achieved by month 18" in text

    def test_seller_financing_stance(self, engine, make_ctx):
        open_text = self._render(engine, make_ctx(considered="maybe", down_pct=20, rate="7.5"))
        closed_text = self._render(engine, make_ctx(considered="no"))

        assert "Seller is open to financing (maybe)." in open_text
        assert "Stated terms: 20% down | 7.5% interest | term TBD" in open_text
        assert "Seller financing preference: unspecified." in closed_text

    def test_unknown_stated_terms(self, engine, make_ctx):
        text = self._render(engine, make_ctx(considered="yes"))

        assert "Stated terms: TBD down | TBD interest | term TBD" in text
        assert "TBD%" not in text

    def test_late_payment_rule_from_policy(self, make_ctx):
        policy = StrategyPolicy(late_payment_grace_days=10, late_payment_limit=3)
        ctx = make_ctx(offer=390000, down_pct=25, capital=50000, considered="yes")
        strategy = StrategyEngine(policy).compute(ctx)

        expected = "three or more late payments (>10 days) stop further accrual."
        assert expected in render_narrative(ctx, strategy, policy)
        assert expected in StrategyEngine(policy).render(ctx, strategy)
        assert LATE_RULE in render_narrative(ctx, strategy)

    def test_huge_listing_values_render(self, engine, make_ctx):
        ctx = make_ctx(ask="1e27", offer="1e27", down_pct=20, capital=50000, considered="yes")
        text = self._render(engine, ctx)

        assert "Asking Price: $1" + ",000" * 9 in text

    def test_empty_description(self, engine, make_ctx):
        assert "No description provided." in self._render(engine, make_ctx())

    def test_module_function_matches_renderer(self, engine, make_ctx):
        ctx = make_ctx(offer=390000, down_pct=20, capital=100000)
        strategy = engine.compute(ctx)
        assert render_narrative(ctx, strategy) == NarrativeRenderer().render(ctx, strategy)


class TestProfitSplitSummary:
    """Test the subcontractor-style summary paragraph."""

    def test_reference_summary(self):
        split = ProfitSplitCalculator().calculate(
            ProfitSplitInput.from_dict({"valuation": 400000, "job_revenue": 50000, "job_cost": 10000, "buyer_split": 33})
        )
        text = render_profit_split_summary(split)

        assert "$13,200 (or 33%)" in text
        assert "$26,800 (or 67%)" in text
        assert "$400,000" in text
        assert "$40,000 profit will be split" in text
