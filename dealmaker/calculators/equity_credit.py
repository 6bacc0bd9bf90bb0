"""
Equity Credit Ledger

Tracks the buyer equity credit that accrues from bridge payments.
"""

from decimal import Decimal

from ..config import StrategyPolicy
from ..models import EquityCreditStatement


class EquityCreditLedger:
    """Accrues equity credit over a payment history."""

    def __init__(self, policy: StrategyPolicy):
        self.policy = policy

    def accrue(self, monthly: Decimal, cap: Decimal, days_late_history: list[int]) -> EquityCreditStatement:
        """
        Walk payments in order. Each payment credits `monthly` up to `cap`.

        Credit accrues only while the account is current: a payment more than
        `late_payment_grace_days` late counts as late, and once
        `late_payment_limit` late payments are on record no further credit
        accrues, starting with the payment that hit the limit.
        """
        accrued = Decimal('0')
        credited = 0
        late = 0
        suspended_at = None

        for number, days_late in enumerate(days_late_history, start=1):
            if days_late > self.policy.late_payment_grace_days:
                late += 1
            if suspended_at is None and late >= self.policy.late_payment_limit:
                suspended_at = number
            if suspended_at is not None:
                continue
            if accrued >= cap:
                continue

            accrued = min(cap, accrued + monthly)
            credited += 1

        return EquityCreditStatement(
            monthly=monthly,
            cap=cap,
            accrued=accrued,
            payments_credited=credited,
            late_payments=late,
            suspended=suspended_at is not None,
            suspended_at_payment=suspended_at,
        )
