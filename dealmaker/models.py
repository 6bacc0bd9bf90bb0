"""
Domain Models for the Deal Maker Engine

These dataclasses provide type-safe representations of listings, buyers and
computed deal strategies. All monetary values use Decimal for precision.

None always means "not provided". A missing number is never turned into zero,
so every consumer has to decide what to do with an unknown value.
"""

from dataclasses import dataclass, field
from decimal import Decimal

# Seller financing stances as stored by the listing wizard
FINANCING_YES = "yes"
FINANCING_MAYBE = "maybe"
FINANCING_NO = "no"
FINANCING_STANCES = (FINANCING_YES, FINANCING_MAYBE, FINANCING_NO)

# Deal structures
STRUCTURE_AMORTIZING = "amortizing"
STRUCTURE_BRIDGE_BALLOON = "bridgeBalloon"

# Gap buckets
GAP_NEAR = "near"
GAP_MODERATE = "moderate"
GAP_FAR = "far"
GAP_UNKNOWN = "unknown"

# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class SellerFinancing:
    """Seller's stated financing terms."""

    considered: str | None = None  # 'yes' | 'maybe' | 'no' | None
    down_payment_pct: Decimal | None = None
    interest_rate_pct: Decimal | None = None
    term_years: Decimal | None = None

    @property
    def is_open(self) -> bool:
        """True when the seller said yes or maybe to carrying a note."""
        return self.considered in (FINANCING_YES, FINANCING_MAYBE)


@dataclass(frozen=True)
class SellerListing:
    """A seller listing normalized for deal structuring."""

    listing_id: str | int | None
    title: str
    industry: str | None = None
    location: str | None = None
    description: str = ""

    asking_price: Decimal | None = None
    sde: Decimal | None = None
    annual_revenue: Decimal | None = None
    annual_profit: Decimal | None = None
    monthly_lease: Decimal | None = None
    employees: Decimal | None = None

    includes_inventory: bool = False
    includes_building: bool = False
    financing_preference: str | None = None
    seller_financing: SellerFinancing = field(default_factory=SellerFinancing)

    owner_involvement: str | None = None
    training_offered: str | None = None
    reason_for_selling: str | None = None
    growth_potential: str | None = None
    competitive_edge: str | None = None
    images: tuple[str, ...] = ()

    city: str | None = None
    state: str | None = None
    hide_business_name: bool = False


# Numeric listing fields, in display order
LISTING_NUMERIC_FIELDS = (
    "asking_price",
    "sde",
    "annual_revenue",
    "annual_profit",
    "monthly_lease",
    "employees",
)


@dataclass(frozen=True)
class BuyerProfile:
    """A buyer profile normalized for deal structuring."""

    buyer_id: str | int | None = None
    available_capital: Decimal | None = None  # cash the buyer can put down
    target_purchase_price: Decimal | None = None  # buyer's intended offer
    preferred_financing: str | None = None


@dataclass(frozen=True)
class DealContext:
    """Seller and buyer paired for one strategy computation."""

    seller: SellerListing
    buyer: BuyerProfile


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class GapAnalysis:
    """Buyer offer compared to the seller's ask."""

    ask: Decimal | None = None
    offer: Decimal | None = None
    gap_pct: Decimal | None = None  # negative = under ask
    gap_bucket: str = GAP_UNKNOWN


@dataclass(frozen=True)
class DownPaymentCheck:
    """Required down payment compared to the buyer's capital."""

    down_pct_requested: Decimal | None = None
    required_down: Decimal | None = None
    buyer_capital: Decimal | None = None
    down_ok: bool | None = None
    down_short: Decimal | None = None


@dataclass(frozen=True)
class RecommendedTerms:
    """Proposed note terms. Bridge-only fields stay None on amortizing deals."""

    cash_down_pct: Decimal | None = None
    cash_down_at_close: Decimal | None = None
    note_principal: Decimal | None = None
    interest_pct: Decimal | None = None  # None renders as TBD
    term_years: Decimal | None = None

    bridge_months: int | None = None
    balloon_at_month: int | None = None
    equity_credit_monthly: Decimal | None = None
    equity_credit_cap: Decimal | None = None
    extension_months: int | None = None
    fallback_amortization_months: int | None = None

    @property
    def has_equity_credit(self) -> bool:
        return bool(self.equity_credit_monthly) and bool(self.equity_credit_cap)


@dataclass(frozen=True)
class DealStrategy:
    """Final output of strategy computation."""

    structure: str
    ask: Decimal | None
    offer: Decimal | None
    gap_pct: Decimal | None
    gap_bucket: str
    down_pct_requested: Decimal | None
    required_down: Decimal | None
    buyer_capital: Decimal | None
    down_ok: bool | None
    down_short: Decimal | None
    recommended: RecommendedTerms
    suggestions: tuple[str, ...] = ()

    @property
    def is_bridge(self) -> bool:
        return self.structure == STRUCTURE_BRIDGE_BALLOON


# =============================================================================
# PROFIT SPLIT / EQUITY CREDIT MODELS
# =============================================================================


@dataclass(frozen=True)
class ProfitSplitInput:
    """Subcontractor-style deal: the buyer works jobs and splits the profit."""

    valuation: Decimal
    job_revenue: Decimal
    job_cost: Decimal
    buyer_split_pct: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "ProfitSplitInput":
        return cls(
            valuation=Decimal(str(data["valuation"])),
            job_revenue=Decimal(str(data["job_revenue"])),
            job_cost=Decimal(str(data["job_cost"])),
            buyer_split_pct=Decimal(str(data["buyer_split"])),
        )


@dataclass(frozen=True)
class ProfitSplit:
    """Per-job profit split and the resulting ownership schedule."""

    valuation: Decimal
    job_revenue: Decimal
    job_cost: Decimal
    profit: Decimal
    buyer_split_pct: Decimal
    seller_split_pct: Decimal
    buyer_profit: Decimal
    seller_profit: Decimal
    jobs_to_transfer: int | None = None  # None when seller profit is not positive


@dataclass(frozen=True)
class EquityCreditStatement:
    """Equity credit accrued over a payment history."""

    monthly: Decimal
    cap: Decimal
    accrued: Decimal = Decimal("0")
    payments_credited: int = 0
    late_payments: int = 0
    suspended: bool = False
    suspended_at_payment: int | None = None  # 1-based payment number
