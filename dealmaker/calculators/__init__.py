"""
Calculators Package

Provides all calculation components for deal structuring.
"""

from .down_payment import DownPaymentChecker
from .equity_credit import EquityCreditLedger
from .gap import GapAnalyzer
from .profit_split import ProfitSplitCalculator
from .structure import StructureSelector
from .suggestions import SuggestionBuilder
from .terms import TermRecommender

__all__ = [
    "GapAnalyzer",
    "DownPaymentChecker",
    "StructureSelector",
    "TermRecommender",
    "SuggestionBuilder",
    "EquityCreditLedger",
    "ProfitSplitCalculator",
]
