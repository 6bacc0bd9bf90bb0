"""
Profit Split Calculator

Subcontractor-style acquisition: the buyer works jobs for the business, keeps
a share of each job's profit as pay, and the seller's share is credited toward
the purchase price until ownership transfers.
"""

from decimal import ROUND_CEILING, Decimal

from ..models import ProfitSplit, ProfitSplitInput


class ProfitSplitCalculator:
    """Splits per-job profit between buyer and seller."""

    def calculate(self, data: ProfitSplitInput) -> ProfitSplit:
        """
        profit        = job_revenue - job_cost
        buyer_profit  = profit * buyer_split_pct / 100
        seller_profit = profit - buyer_profit
        """
        profit = data.job_revenue - data.job_cost
        buyer_profit = profit * data.buyer_split_pct / Decimal('100')
        seller_profit = profit - buyer_profit

        return ProfitSplit(
            valuation=data.valuation,
            job_revenue=data.job_revenue,
            job_cost=data.job_cost,
            profit=profit,
            buyer_split_pct=data.buyer_split_pct,
            seller_split_pct=Decimal('100') - data.buyer_split_pct,
            buyer_profit=buyer_profit,
            seller_profit=seller_profit,
            jobs_to_transfer=self.jobs_to_transfer(data.valuation, seller_profit),
        )

    @staticmethod
    def jobs_to_transfer(valuation: Decimal, seller_profit: Decimal) -> int | None:
        """Jobs of this size needed before the seller's credits cover the valuation."""
        if seller_profit <= 0:
            return None
        return int((valuation / seller_profit).to_integral_value(rounding=ROUND_CEILING))
