"""
Output Builder

Converts engine models into JSON-ready dictionaries for the API responses.
Unknown values stay None (null in JSON).
"""

from decimal import Decimal
from typing import Optional

from .models import (
    BuyerProfile,
    DealStrategy,
    EquityCreditStatement,
    ProfitSplit,
    RecommendedTerms,
    SellerListing,
)


def to_money(value: Optional[Decimal]) -> Optional[float]:
    """Convert Decimal to float with 2 decimal places."""
    if value is None:
        return None
    return round(float(value), 2)


def to_number(value: Optional[Decimal]) -> Optional[float]:
    """Convert Decimal percentages and counts to float."""
    if value is None:
        return None
    return float(value)


class OutputBuilder:
    """Builds the response sections."""

    def strategy(self, strategy: DealStrategy) -> dict:
        """Serialize a DealStrategy."""
        return {
            "structure": strategy.structure,
            "ask": to_money(strategy.ask),
            "offer": to_money(strategy.offer),
            "gap_pct": to_number(strategy.gap_pct),
            "gap_bucket": strategy.gap_bucket,
            "down_pct_requested": to_number(strategy.down_pct_requested),
            "required_down": to_money(strategy.required_down),
            "buyer_capital": to_money(strategy.buyer_capital),
            "down_ok": strategy.down_ok,
            "down_short": to_money(strategy.down_short),
            "recommended": self.recommended(strategy.recommended),
            "suggestions": list(strategy.suggestions),
        }

    def recommended(self, terms: RecommendedTerms) -> dict:
        return {
            "cash_down_pct": to_number(terms.cash_down_pct),
            "cash_down_at_close": to_money(terms.cash_down_at_close),
            "note_principal": to_money(terms.note_principal),
            "interest_pct": to_number(terms.interest_pct),
            "term_years": to_number(terms.term_years),
            "bridge_months": terms.bridge_months,
            "balloon_at_month": terms.balloon_at_month,
            "equity_credit_monthly": to_money(terms.equity_credit_monthly),
            "equity_credit_cap": to_money(terms.equity_credit_cap),
            "extension_months": terms.extension_months,
            "fallback_amortization_months": terms.fallback_amortization_months,
        }

    def listing(self, listing: SellerListing) -> dict:
        """Serialize a normalized listing."""
        sf = listing.seller_financing
        return {
            "listing_id": listing.listing_id,
            "title": listing.title,
            "industry": listing.industry,
            "location": listing.location,
            "description": listing.description,
            "asking_price": to_money(listing.asking_price),
            "sde": to_money(listing.sde),
            "annual_revenue": to_money(listing.annual_revenue),
            "annual_profit": to_money(listing.annual_profit),
            "monthly_lease": to_money(listing.monthly_lease),
            "employees": to_number(listing.employees),
            "includes_inventory": listing.includes_inventory,
            "includes_building": listing.includes_building,
            "financing_preference": listing.financing_preference,
            "seller_financing": {
                "considered": sf.considered,
                "down_payment_pct": to_number(sf.down_payment_pct),
                "interest_rate_pct": to_number(sf.interest_rate_pct),
                "term_years": to_number(sf.term_years),
            },
            "images": list(listing.images),
        }

    def buyer(self, buyer: BuyerProfile) -> dict:
        return {
            "buyer_id": buyer.buyer_id,
            "available_capital": to_money(buyer.available_capital),
            "target_purchase_price": to_money(buyer.target_purchase_price),
            "preferred_financing": buyer.preferred_financing,
        }

    def profit_split(self, split: ProfitSplit) -> dict:
        return {
            "valuation": to_money(split.valuation),
            "job_revenue": to_money(split.job_revenue),
            "job_cost": to_money(split.job_cost),
            "profit": to_money(split.profit),
            "buyer_split_pct": to_number(split.buyer_split_pct),
            "seller_split_pct": to_number(split.seller_split_pct),
            "buyer_profit": to_money(split.buyer_profit),
            "seller_profit": to_money(split.seller_profit),
            "jobs_to_transfer": split.jobs_to_transfer,
        }

    def equity_credit(self, statement: EquityCreditStatement) -> dict:
        return {
            "monthly": to_money(statement.monthly),
            "cap": to_money(statement.cap),
            "accrued": to_money(statement.accrued),
            "payments_credited": statement.payments_credited,
            "late_payments": statement.late_payments,
            "suspended": statement.suspended,
            "suspended_at_payment": statement.suspended_at_payment,
        }
