"""
Structure Selector

Chooses between a standard amortizing seller note and a bridge-to-bank
(interest-only, then balloon via refinance) proposal.
"""

from decimal import Decimal

from ..config import StrategyPolicy
from ..models import (
    STRUCTURE_AMORTIZING,
    STRUCTURE_BRIDGE_BALLOON,
    DealContext,
    DownPaymentCheck,
    GapAnalysis,
)


class StructureSelector:
    """Decision table over seller stance, down payment feasibility and gap."""

    def __init__(self, policy: StrategyPolicy):
        self.policy = policy

    def select(self, ctx: DealContext, down: DownPaymentCheck, gap: GapAnalysis) -> str:
        """
        | seller open | down_ok | shortfall > threshold | structure     |
        |-------------|---------|-----------------------|---------------|
        | yes/maybe   | False   | yes                   | bridgeBalloon |
        | yes/maybe   | False   | no                    | amortizing    |
        | yes/maybe   | True    | -                     | amortizing    |
        | any         | None    | -                     | amortizing    |
        | no / None   | any     | -                     | amortizing    |

        The gap bucket never forces a bridge on its own; it only shapes
        suggestions. Unknowns always fall back to amortizing.
        """
        if not ctx.seller.seller_financing.is_open:
            return STRUCTURE_AMORTIZING
        if down.down_ok is not False:
            return STRUCTURE_AMORTIZING
        if self.shortfall_pct(down, gap.ask) > self.policy.bridge_shortfall_pct:
            return STRUCTURE_BRIDGE_BALLOON
        return STRUCTURE_AMORTIZING

    @staticmethod
    def shortfall_pct(down: DownPaymentCheck, ask: Decimal | None) -> Decimal:
        """Down payment shortfall as a percentage of the asking price."""
        if not down.down_short or ask is None or ask <= 0:
            return Decimal('0')
        return down.down_short / ask * Decimal('100')
