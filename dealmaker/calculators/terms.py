"""
Term Recommender

Turns the chosen structure into concrete note terms: cash at close, note
principal, rate, amortization or bridge schedule, and the equity credit plan.
"""

from decimal import ROUND_CEILING, Decimal

from ..config import StrategyPolicy
from ..models import DealContext, DownPaymentCheck, RecommendedTerms
from .gap import quantize_pct


class TermRecommender:
    """Recommends note terms for a structure."""

    def __init__(self, policy: StrategyPolicy):
        self.policy = policy

    def recommend(self, ctx: DealContext, down: DownPaymentCheck, is_bridge: bool) -> RecommendedTerms:
        """
        Cash at close is the buyer's capital capped at the required down (and
        at the price). Excess capital is never recommended as extra down.
        """
        seller = ctx.seller
        ask = seller.asking_price
        financing = seller.seller_financing

        cash_down = self._cash_down_at_close(ask, down)
        cash_down_pct = None
        if cash_down is not None and ask is not None and ask > 0:
            cash_down_pct = quantize_pct(cash_down / ask * Decimal('100'))

        note_principal = None
        if ask is not None and cash_down is not None:
            note_principal = ask - cash_down

        if not is_bridge:
            return RecommendedTerms(
                cash_down_pct=cash_down_pct,
                cash_down_at_close=cash_down,
                note_principal=note_principal,
                interest_pct=financing.interest_rate_pct,
                term_years=financing.term_years or self.policy.default_amortization_years,
            )

        bridge_months = self.policy.bridge_months
        monthly, cap = self._equity_credit(ask, down, cash_down, bridge_months)

        return RecommendedTerms(
            cash_down_pct=cash_down_pct,
            cash_down_at_close=cash_down,
            note_principal=note_principal,
            interest_pct=financing.interest_rate_pct,
            bridge_months=bridge_months,
            balloon_at_month=self.policy.effective_balloon_month,
            equity_credit_monthly=monthly,
            equity_credit_cap=cap,
            extension_months=self.policy.extension_months,
            fallback_amortization_months=self._fallback_months(financing.term_years),
        )

    def _cash_down_at_close(self, ask: Decimal | None, down: DownPaymentCheck) -> Decimal | None:
        capital = down.buyer_capital
        if ask is None or capital is None:
            return None
        cash = min(capital, ask)
        if down.required_down is not None:
            cash = min(cash, down.required_down)
        return max(cash, Decimal('0'))

    def _equity_credit(
        self,
        ask: Decimal | None,
        down: DownPaymentCheck,
        cash_down: Decimal | None,
        bridge_months: int,
    ) -> tuple[Decimal | None, Decimal | None]:
        """
        Part of each bridge payment accrues toward the unpaid down payment.
        Only offered when the remaining shortfall is a modest share of the price.
        """
        if ask is None or ask <= 0 or down.required_down is None or cash_down is None:
            return None, None

        remaining = down.required_down - cash_down
        if remaining <= 0:
            return None, None
        if remaining / ask * Decimal('100') > self.policy.max_equity_credit_pct:
            return None, None

        monthly = (remaining / Decimal(bridge_months)).to_integral_value(rounding=ROUND_CEILING)
        return monthly, remaining

    def _fallback_months(self, term_years: Decimal | None) -> int:
        """Fallback amortization: at least the policy minimum, or the seller's term if longer."""
        minimum = self.policy.min_fallback_amortization_months
        if term_years is None or term_years <= 0:
            return minimum
        seller_months = int((term_years * 12).to_integral_value(rounding=ROUND_CEILING))
        return max(minimum, seller_months)
