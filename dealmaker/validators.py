"""
Input Validation for the Deal Maker Engine

Two kinds of checks live here:

- missing_listing_fields() is advisory. It lists the listing fields that make
  the strategy useful and never raises; callers decide whether to proceed.
- RequestValidator checks HTTP payloads before processing begins and raises
  ValueError with clear messages for any constraint violations.
"""

from collections.abc import Mapping
from decimal import Decimal

from .models import SellerListing
from .normalize import to_number

MISSING_ASKING_PRICE = "asking_price"
MISSING_EARNINGS = "sde|annual_profit|annual_revenue"
MISSING_INDUSTRY = "industry"
MISSING_LOCATION = "location"
MISSING_FINANCING = "financing_preference|seller_financing.considered"


def missing_listing_fields(listing: SellerListing) -> list[str]:
    """Return the recommended listing fields that are missing, in a fixed order."""
    missing = []
    if listing.asking_price is None:
        missing.append(MISSING_ASKING_PRICE)
    if listing.sde is None and listing.annual_profit is None and listing.annual_revenue is None:
        missing.append(MISSING_EARNINGS)
    if not listing.industry:
        missing.append(MISSING_INDUSTRY)
    if not listing.location:
        missing.append(MISSING_LOCATION)
    if not listing.financing_preference and listing.seller_financing.considered is None:
        missing.append(MISSING_FINANCING)
    return missing


class RequestValidator:
    """Validates API payloads according to business rules."""

    def validate_deal_request(self, data) -> None:
        """A deal request needs a seller row; buyer row and policy are optional."""
        self._require_mapping(data, "request body")
        if "seller" not in data:
            raise ValueError("seller is required")
        self._require_mapping(data["seller"], "seller")
        if data.get("buyer") is not None:
            self._require_mapping(data["buyer"], "buyer")
        if data.get("policy") is not None:
            self._require_mapping(data["policy"], "policy")

    def validate_profit_split(self, data) -> None:
        """Raise ValueError if the profit split payload is unusable."""
        self._require_mapping(data, "request body")
        values = {}
        for key in ("valuation", "job_revenue", "job_cost", "buyer_split"):
            values[key] = self._require_number(data, key)

        if values["valuation"] <= 0:
            raise ValueError(f"valuation must be positive, got: {values['valuation']}")
        if values["job_revenue"] < 0:
            raise ValueError(f"job_revenue cannot be negative, got: {values['job_revenue']}")
        if values["job_cost"] < 0:
            raise ValueError(f"job_cost cannot be negative, got: {values['job_cost']}")
        if not (0 <= values["buyer_split"] <= 100):
            raise ValueError(f"buyer_split must be between 0 and 100, got: {values['buyer_split']}")

    def validate_equity_credit(self, data) -> None:
        """Raise ValueError if the equity credit payload is unusable."""
        self._require_mapping(data, "request body")
        monthly = self._require_number(data, "monthly")
        cap = self._require_number(data, "cap")
        if monthly < 0:
            raise ValueError(f"monthly cannot be negative, got: {monthly}")
        if cap < 0:
            raise ValueError(f"cap cannot be negative, got: {cap}")

        history = data.get("days_late", [])
        if not isinstance(history, list):
            raise ValueError("days_late must be a list of integers")
        for i, days in enumerate(history):
            if isinstance(days, bool) or not isinstance(days, int):
                raise ValueError(f"days_late[{i}] must be an integer, got: {days!r}")
            if days < 0:
                raise ValueError(f"days_late[{i}] cannot be negative, got: {days}")

    def _require_mapping(self, value, name: str) -> None:
        if not isinstance(value, Mapping):
            raise ValueError(f"{name} must be a JSON object")

    def _require_number(self, data: Mapping, key: str) -> Decimal:
        raw = data.get(key)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ValueError(f"{key} must be a number, got: {raw!r}")
        number = to_number(raw)
        if number is None:
            raise ValueError(f"{key} must be a finite number, got: {raw!r}")
        return number
