"""
Row Normalization

Converts loosely typed seller and buyer rows (as stored by the marketplace,
with field names that drifted across schema revisions) into the strict
SellerListing / BuyerProfile models.

Normalization never fails on missing data. Anything absent or unparseable
becomes None.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from .models import (
    FINANCING_NO,
    FINANCING_STANCES,
    FINANCING_YES,
    BuyerProfile,
    DealContext,
    SellerFinancing,
    SellerListing,
)

DEFAULT_TITLE = "Business for Sale"

# Largest and smallest decimal exponent a raw number may carry. Values
# outside 1e-15 .. 1e16 are treated as unknown.
MAX_MAGNITUDE = 15


def to_number(value) -> Decimal | None:
    """
    Parse a finite number from a raw field value.

    Accepts ints, floats, Decimals and numeric strings with optional
    whitespace, thousands separators, a leading '$' or a trailing '%'.
    Returns None for blanks, booleans, NaN, infinities, magnitudes outside
    MAX_MAGNITUDE and anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith("-$"):
            text = "-" + text[2:]
        elif text.startswith("$"):
            text = text[1:]
        if text.endswith("%"):
            text = text[:-1]
        text = text.strip()
        if not text:
            return None
    else:
        return None

    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    if number and abs(number.adjusted()) > MAX_MAGNITUDE:
        return None
    return number


def round_half_up(value: Decimal, quantum: Decimal) -> Decimal:
    """
    Round to the quantum's exponent using half-up rounding.

    Precision is widened to fit the integer digits, so large values round
    instead of raising InvalidOperation.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - quantum.as_tuple().exponent + 2)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)


def first_number(row: Mapping, *names: str) -> Decimal | None:
    """Return the first candidate field that parses to a finite number."""
    for name in names:
        number = to_number(row.get(name))
        if number is not None:
            return number
    return None


def first_text(row: Mapping, *names: str) -> str | None:
    """Return the first candidate field holding a non-blank value, as text."""
    for name in names:
        value = row.get(name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def cap_word(text: str) -> str:
    return text[0].upper() + text[1:] if text else text


def _as_mapping(row) -> Mapping:
    if row is None:
        return {}
    if not isinstance(row, Mapping):
        raise TypeError(f"Expected a mapping, got: {type(row).__name__}")
    return row


def _financing_stance(value) -> str | None:
    if isinstance(value, bool):
        return FINANCING_YES if value else FINANCING_NO
    if not isinstance(value, str):
        return None
    stance = value.strip().lower()
    return stance if stance in FINANCING_STANCES else None


def _title(row: Mapping, industry: str | None) -> str:
    name = first_text(row, "business_name")
    if name and not row.get("hide_business_name"):
        return name
    if industry:
        return f"{cap_word(industry)} Business"
    return DEFAULT_TITLE


def _location(row: Mapping) -> str | None:
    explicit = first_text(row, "location")
    if explicit:
        return explicit
    parts = [first_text(row, "location_city"), first_text(row, "location_state")]
    joined = ", ".join(p for p in parts if p)
    return joined or None


def _description(row: Mapping) -> str:
    if row.get("description_choice") == "ai":
        return first_text(row, "ai_description") or ""
    return first_text(row, "business_description") or ""


def _images(value) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(url) for url in value if url)
    return ()


# ---------- SELLER ----------


def normalize_seller(row: Mapping | None) -> SellerListing:
    """Normalize a row from the sellers table."""
    row = _as_mapping(row)
    industry = first_text(row, "industry")

    financing = SellerFinancing(
        considered=_financing_stance(row.get("seller_financing_considered")),
        down_payment_pct=first_number(row, "down_payment"),
        interest_rate_pct=first_number(row, "interest_rate", "seller_financing_interest_rate"),
        term_years=first_number(row, "term_length"),
    )

    return SellerListing(
        listing_id=row.get("id"),
        title=_title(row, industry),
        industry=industry,
        location=_location(row),
        description=_description(row),
        asking_price=first_number(row, "asking_price"),
        sde=first_number(row, "sde"),
        annual_revenue=first_number(row, "annual_revenue"),
        annual_profit=first_number(row, "annual_profit"),
        monthly_lease=first_number(row, "monthly_lease"),
        employees=first_number(row, "employees"),
        includes_inventory=bool(row.get("includes_inventory")),
        includes_building=bool(row.get("includes_building")),
        financing_preference=first_text(row, "financing_type", "financing_preference"),
        seller_financing=financing,
        owner_involvement=first_text(row, "owner_involvement"),
        training_offered=first_text(row, "training_offered"),
        reason_for_selling=first_text(row, "reason_for_selling"),
        growth_potential=first_text(row, "growth_potential"),
        competitive_edge=first_text(row, "competitive_edge"),
        images=_images(row.get("image_urls")),
        city=first_text(row, "location_city"),
        state=first_text(row, "location_state"),
        hide_business_name=bool(row.get("hide_business_name")),
    )


# ---------- BUYER ----------


def normalize_buyer(row: Mapping | None) -> BuyerProfile:
    """Normalize a row from the buyers table."""
    row = _as_mapping(row)
    return BuyerProfile(
        buyer_id=row.get("id"),
        available_capital=first_number(row, "available_capital", "availableCapital", "capital"),
        target_purchase_price=first_number(
            row, "target_purchase_price", "purchase_price", "offer_price", "targetPrice"
        ),
        preferred_financing=first_text(row, "preferred_financing", "financing_preference"),
    )


# ---------- CONTEXT ----------


def to_deal_context(seller: SellerListing, buyer: BuyerProfile) -> DealContext:
    return DealContext(seller=seller, buyer=buyer)
