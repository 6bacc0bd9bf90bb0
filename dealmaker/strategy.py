"""
Strategy Engine - Main Orchestrator

Coordinates deal structuring through discrete, testable steps.
"""

import logging
from typing import Any, Dict

from .calculators import (
    DownPaymentChecker,
    EquityCreditLedger,
    GapAnalyzer,
    ProfitSplitCalculator,
    StructureSelector,
    SuggestionBuilder,
    TermRecommender,
)
from .config import DEFAULT_POLICY, StrategyPolicy
from .models import (
    STRUCTURE_BRIDGE_BALLOON,
    DealContext,
    DealStrategy,
    EquityCreditStatement,
    ProfitSplitInput,
)
from .narrative import NarrativeRenderer, render_profit_split_summary
from .normalize import normalize_buyer, normalize_seller, to_deal_context, to_number
from .output import OutputBuilder
from .validators import RequestValidator, missing_listing_fields

logger = logging.getLogger(__name__)


class StrategyEngine:
    """
    Main orchestrator for deal structuring.

    Implements a clear pipeline pattern:
    1. Gap Analysis
    2. Down Payment Feasibility
    3. Structure Selection
    4. Term Recommendation
    5. Suggestions

    The engine holds only its frozen policy, so one instance can serve any
    number of requests.
    """

    def __init__(self, policy: StrategyPolicy = DEFAULT_POLICY):
        self.policy = policy
        self.gap_analyzer = GapAnalyzer(policy)
        self.down_payment_checker = DownPaymentChecker()
        self.structure_selector = StructureSelector(policy)
        self.term_recommender = TermRecommender(policy)
        self.suggestion_builder = SuggestionBuilder(policy)
        self.equity_credit_ledger = EquityCreditLedger(policy)
        self.profit_split_calculator = ProfitSplitCalculator()
        self.narrative_renderer = NarrativeRenderer(policy)
        self.request_validator = RequestValidator()
        self.output_builder = OutputBuilder()

    def compute(self, ctx: DealContext) -> DealStrategy:
        """
        Compute a strategy for one seller/buyer pair.

        Never raises for a normalized context; anything that cannot be
        derived is left as None.
        """
        # Step 1: Compare offer with ask
        gap = self.gap_analyzer.analyze(ctx)

        # Step 2: Check the required down payment against capital
        down = self.down_payment_checker.check(ctx)

        # Step 3: Pick the structure
        structure = self.structure_selector.select(ctx, down, gap)
        is_bridge = structure == STRUCTURE_BRIDGE_BALLOON

        # Step 4: Recommend terms
        terms = self.term_recommender.recommend(ctx, down, is_bridge)

        # Step 5: Advisory suggestions
        suggestions = self.suggestion_builder.build(ctx, gap, down, terms, is_bridge)

        logger.debug(
            "Computed strategy for listing %s: %s (gap bucket %s)",
            ctx.seller.listing_id, structure, gap.gap_bucket,
        )

        return DealStrategy(
            structure=structure,
            ask=gap.ask,
            offer=gap.offer,
            gap_pct=gap.gap_pct,
            gap_bucket=gap.gap_bucket,
            down_pct_requested=down.down_pct_requested,
            required_down=down.required_down,
            buyer_capital=down.buyer_capital,
            down_ok=down.down_ok,
            down_short=down.down_short,
            recommended=terms,
            suggestions=suggestions,
        )

    def render(self, ctx: DealContext, strategy: DealStrategy) -> str:
        return self.narrative_renderer.render(ctx, strategy)

    # -------------------------------------------------------------------------
    # Dictionary entry points (API usage)
    # -------------------------------------------------------------------------

    def build_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Normalize raw seller/buyer rows, compute the strategy and render the
        narrative. An optional "policy" mapping overrides engine defaults for
        this request only.
        """
        self.request_validator.validate_deal_request(data)

        engine = self
        if data.get("policy"):
            engine = StrategyEngine(self.policy.with_overrides(data["policy"]))

        seller = normalize_seller(data["seller"])
        buyer = normalize_buyer(data.get("buyer"))
        ctx = to_deal_context(seller, buyer)

        strategy = engine.compute(ctx)
        return {
            "listing": self.output_builder.listing(seller),
            "buyer": self.output_builder.buyer(buyer),
            "missing_fields": missing_listing_fields(seller),
            "strategy": self.output_builder.strategy(strategy),
            "narrative": engine.render(ctx, strategy),
        }

    def profit_split_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.request_validator.validate_profit_split(data)
        split = self.profit_split_calculator.calculate(ProfitSplitInput.from_dict(data))
        result = self.output_builder.profit_split(split)
        result["summary"] = render_profit_split_summary(split)
        return result

    def equity_credit_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.request_validator.validate_equity_credit(data)
        statement = self.accrue_equity_credit(
            to_number(data["monthly"]), to_number(data["cap"]), data.get("days_late", []),
        )
        return self.output_builder.equity_credit(statement)

    def accrue_equity_credit(self, monthly, cap, days_late_history) -> EquityCreditStatement:
        return self.equity_credit_ledger.accrue(monthly, cap, days_late_history)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def compute_strategy(ctx: DealContext, policy: StrategyPolicy = DEFAULT_POLICY) -> DealStrategy:
    """Compute a DealStrategy for a seller/buyer pair."""
    return StrategyEngine(policy).compute(ctx)


def build_deal_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Process a raw deal request dict and return a response dict."""
    return StrategyEngine().build_from_dict(data)


def build_deal_from_json(json_input: str) -> str:
    """
    Process a deal request from a JSON string and return a JSON string.
    Errors are reported in the body rather than raised.
    """
    import json

    try:
        data = json.loads(json_input)
        return json.dumps(build_deal_from_dict(data), indent=2)

    except (ValueError, TypeError) as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        logger.exception("Deal processing failed")
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
