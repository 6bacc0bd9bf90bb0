"""
Gap Analyzer

Compares the buyer's intended offer with the seller's asking price.
"""

from decimal import Decimal

from ..config import StrategyPolicy
from ..models import GAP_FAR, GAP_MODERATE, GAP_NEAR, GAP_UNKNOWN, DealContext, GapAnalysis
from ..normalize import round_half_up


def quantize_pct(value: Decimal) -> Decimal:
    """Round a percentage to one decimal place."""
    return round_half_up(value, Decimal('0.1'))


class GapAnalyzer:
    """Computes the signed offer-vs-ask gap and its bucket."""

    def __init__(self, policy: StrategyPolicy):
        self.policy = policy

    def analyze(self, ctx: DealContext) -> GapAnalysis:
        """
        gap_pct = (offer - ask) / ask * 100

        Negative means the buyer is under ask. Both prices must be known and
        the ask positive, otherwise the gap is unknown.
        """
        ask = ctx.seller.asking_price
        offer = ctx.buyer.target_purchase_price

        if ask is None or offer is None or ask <= 0:
            return GapAnalysis(ask=ask, offer=offer)

        gap_pct = quantize_pct((offer - ask) / ask * Decimal('100'))
        return GapAnalysis(ask=ask, offer=offer, gap_pct=gap_pct, gap_bucket=self.bucket(gap_pct))

    def bucket(self, gap_pct: Decimal | None) -> str:
        if gap_pct is None:
            return GAP_UNKNOWN
        size = abs(gap_pct)
        if size <= self.policy.near_gap_pct:
            return GAP_NEAR
        if size <= self.policy.moderate_gap_pct:
            return GAP_MODERATE
        return GAP_FAR
