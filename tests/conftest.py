"""Shared fixtures for engine tests."""

from decimal import Decimal

import pytest

from dealmaker.models import BuyerProfile, DealContext, SellerFinancing, SellerListing


def _dec(value):
    return Decimal(str(value)) if value is not None else None


def make_context(
    ask=400000,
    offer=None,
    capital=None,
    down_pct=None,
    considered=None,
    rate=None,
    term=None,
) -> DealContext:
    """Build a DealContext directly from the numbers a test cares about."""
    seller = SellerListing(
        listing_id="L-1",
        title="Plumbing Business",
        industry="plumbing",
        location="Austin, TX",
        asking_price=_dec(ask),
        seller_financing=SellerFinancing(
            considered=considered,
            down_payment_pct=_dec(down_pct),
            interest_rate_pct=_dec(rate),
            term_years=_dec(term),
        ),
    )
    buyer = BuyerProfile(
        buyer_id="B-1",
        available_capital=_dec(capital),
        target_purchase_price=_dec(offer),
    )
    return DealContext(seller=seller, buyer=buyer)


@pytest.fixture
def make_ctx():
    return make_context
