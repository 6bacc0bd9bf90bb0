"""
Suggestion Builder

Short advisory lines for the UI and the drafting prompt.
"""

from ..config import StrategyPolicy
from ..models import (
    GAP_FAR,
    GAP_MODERATE,
    GAP_NEAR,
    DealContext,
    DownPaymentCheck,
    GapAnalysis,
    RecommendedTerms,
)
from ..narrative import format_money, format_pct

COVENANTS = "Include simple covenants: monthly P&L, DSCR target, refinance window, and fallback if refi fails."


class SuggestionBuilder:
    """Builds the ordered suggestion list."""

    def __init__(self, policy: StrategyPolicy):
        self.policy = policy

    def build(
        self,
        ctx: DealContext,
        gap: GapAnalysis,
        down: DownPaymentCheck,
        terms: RecommendedTerms,
        is_bridge: bool,
    ) -> tuple[str, ...]:
        """
        Order: price gap, down payment, missing inputs, cash at close,
        covenants (always last).
        """
        suggestions = []

        if gap.gap_bucket == GAP_NEAR:
            suggestions.append("Position as a fair offer and lean on speed and certainty of close.")
        elif gap.gap_bucket == GAP_MODERATE:
            suggestions.append(
                "Propose a midpoint or a sweetener: a slightly higher down payment or a 5% earnout to close the gap."
            )
        elif gap.gap_bucket == GAP_FAR:
            suggestions.append(
                "Frame as value-seeking: use structure (earnout or rent-to-own) to bridge price expectations."
            )
        elif gap.offer is None:
            suggestions.append("Confirm the buyer's target purchase price before presenting terms.")

        if down.down_ok is False:
            short = f"Buyer capital is short of the required down by ~{format_money(down.down_short)}."
            if is_bridge:
                suggestions.append(f"{short} Suggest a bridge-to-bank with a capped equity credit, or mix in bank term debt.")
            else:
                suggestions.append(f"{short} Mix in bank term debt or ask the seller to lower the down payment.")
        elif down.down_pct_requested is None:
            suggestions.append("Ask the seller for their required down payment percentage.")
        elif down.down_ok is None:
            suggestions.append("Confirm how much capital the buyer can commit at close.")

        if terms.interest_pct is None and ctx.seller.seller_financing.considered is not None:
            suggestions.append("Confirm the seller note interest rate; it is TBD until the seller states one.")

        if terms.cash_down_pct is not None and terms.cash_down_pct < self.policy.min_cash_at_close_pct:
            suggestions.append(
                f"Cash at close is under {format_pct(self.policy.min_cash_at_close_pct)}% of price; "
                "sellers usually expect real cash at close."
            )

        suggestions.append(COVENANTS)
        return tuple(suggestions)
