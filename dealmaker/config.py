"""
Strategy Policy

Tunable thresholds and term constants used by the strategy calculators.
Defaults can be overridden from DEALMAKER_* environment variables or per
request.
"""

import os
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation

ENV_PREFIX = "DEALMAKER_"


@dataclass(frozen=True)
class StrategyPolicy:
    """Deal structuring policy constants."""

    # Gap buckets on abs(gap_pct)
    near_gap_pct: Decimal = Decimal("10")
    moderate_gap_pct: Decimal = Decimal("25")

    # Shortfall (as % of ask) above which an open seller gets a bridge proposal
    bridge_shortfall_pct: Decimal = Decimal("10")

    # Bridge / balloon terms
    bridge_months: int = 24
    balloon_at_month: int | None = None  # None = same as bridge_months
    extension_months: int = 12
    min_fallback_amortization_months: int = 36

    # Standard note
    default_amortization_years: Decimal = Decimal("4")

    # Equity credit: remaining shortfall must be at most this % of ask
    max_equity_credit_pct: Decimal = Decimal("15")
    late_payment_grace_days: int = 15
    late_payment_limit: int = 2

    # Advisory only, never forces cash above the buyer's capital
    min_cash_at_close_pct: Decimal = Decimal("5")

    def __post_init__(self):
        if self.near_gap_pct > self.moderate_gap_pct:
            raise ValueError(
                f"near_gap_pct cannot exceed moderate_gap_pct, got: {self.near_gap_pct} > {self.moderate_gap_pct}"
            )
        if self.late_payment_limit < 1:
            raise ValueError(f"late_payment_limit must be at least 1, got: {self.late_payment_limit}")

    @property
    def effective_balloon_month(self) -> int:
        return self.balloon_at_month if self.balloon_at_month is not None else self.bridge_months

    def with_overrides(self, overrides: dict | None) -> "StrategyPolicy":
        """Return a copy with the given fields replaced. Unknown keys raise ValueError."""
        if not overrides:
            return self
        known = {f.name: f for f in fields(self)}
        changes = {}
        for key, raw in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown policy field: {key}")
            changes[key] = _coerce(key, known[key].type, raw)
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ=None) -> "StrategyPolicy":
        """Build a policy from DEALMAKER_<FIELD> environment variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            value = environ.get(ENV_PREFIX + f.name.upper())
            if value not in (None, ""):
                overrides[f.name] = value
        return cls().with_overrides(overrides)


def _coerce(name: str, type_hint, raw):
    """Convert a raw override to the field's type."""
    allowed = getattr(type_hint, "__args__", (type_hint,))
    if raw is None:
        if type(None) in allowed:
            return None
        raise ValueError(f"{name} cannot be empty")
    if isinstance(raw, bool):
        raise ValueError(f"{name} must be a number, got: {raw!r}")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got: {raw!r}")
    if not value.is_finite():
        raise ValueError(f"{name} must be a finite number, got: {raw!r}")
    if int in allowed:
        if value != value.to_integral_value():
            raise ValueError(f"{name} must be a whole number, got: {raw!r}")
        coerced = int(value)
    else:
        coerced = value
    if coerced < 0:
        raise ValueError(f"{name} cannot be negative, got: {raw!r}")
    if name in ("bridge_months", "balloon_at_month") and coerced == 0:
        raise ValueError(f"{name} must be positive, got: {raw!r}")
    return coerced


# Default policy instance
DEFAULT_POLICY = StrategyPolicy()
