"""
DEAL MAKER ENGINE
Seller-financing deal structuring for business-for-sale listings
"""

from .config import StrategyPolicy
from .models import BuyerProfile, DealContext, DealStrategy, SellerListing
from .narrative import render_narrative, render_profit_split_summary
from .normalize import normalize_buyer, normalize_seller, to_deal_context
from .strategy import StrategyEngine, compute_strategy
from .validators import missing_listing_fields

__all__ = [
    'StrategyEngine',
    'StrategyPolicy',
    'SellerListing',
    'BuyerProfile',
    'DealContext',
    'DealStrategy',
    'normalize_seller',
    'normalize_buyer',
    'to_deal_context',
    'missing_listing_fields',
    'compute_strategy',
    'render_narrative',
    'render_profit_split_summary',
]
