"""
Down Payment Checker

Determines whether the buyer's capital covers the seller's required down.
"""

from decimal import Decimal

from ..models import DealContext, DownPaymentCheck
from ..normalize import round_half_up


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places using half-up rounding."""
    return round_half_up(value, Decimal('0.01'))


class DownPaymentChecker:
    """Compares required down payment with available capital."""

    def check(self, ctx: DealContext) -> DownPaymentCheck:
        """
        required_down = ask * down_pct / 100

        down_ok and down_short need both the required down and the buyer's
        capital. Either one missing leaves them unknown.
        """
        ask = ctx.seller.asking_price
        down_pct = ctx.seller.seller_financing.down_payment_pct
        capital = ctx.buyer.available_capital

        if ask is None or down_pct is None:
            return DownPaymentCheck(down_pct_requested=down_pct, buyer_capital=capital)

        required_down = quantize_money(ask * down_pct / Decimal('100'))

        if capital is None:
            return DownPaymentCheck(
                down_pct_requested=down_pct,
                required_down=required_down,
            )

        down_ok = capital >= required_down
        return DownPaymentCheck(
            down_pct_requested=down_pct,
            required_down=required_down,
            buyer_capital=capital,
            down_ok=down_ok,
            down_short=Decimal('0') if down_ok else required_down - capital,
        )
