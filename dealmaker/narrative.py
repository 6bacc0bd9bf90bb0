"""
Narrative Rendering

Formats a DealStrategy and its DealContext into one text block, used as a
drafting prompt or a buyer-facing summary. The document is built from an
ordered list of section methods; each returns its own lines.

Every monetary value goes through format_money().
"""

from decimal import Decimal

from .config import DEFAULT_POLICY, StrategyPolicy
from .models import DealContext, DealStrategy, ProfitSplit
from .normalize import round_half_up

NOT_AVAILABLE = "N/A"
TBD = "TBD"

_COUNT_WORDS = {1: "one", 2: "two", 3: "three", 4: "four", 5: "five"}


def format_money(value) -> str:
    """Format a number as currency: $1,234 or $1,234.56; None as N/A."""
    if value is None:
        return NOT_AVAILABLE
    amount = round_half_up(Decimal(str(value)), Decimal('0.01'))
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if amount == amount.to_integral_value():
        return f"{sign}${amount:,.0f}"
    return f"{sign}${amount:,.2f}"


def format_pct(value) -> str:
    """Format a percentage without the % sign: 33, 12.5; None as TBD."""
    if value is None:
        return TBD
    number = Decimal(str(value))
    if number == number.to_integral_value():
        return f"{number:.0f}"
    return f"{number.normalize():f}"


def format_count(value) -> str:
    if value is None:
        return NOT_AVAILABLE
    return format_pct(value)


class NarrativeRenderer:
    """Renders the deal narrative section by section."""

    SECTIONS = (
        "listing_section",
        "seller_financing_section",
        "buyer_section",
        "fit_check_section",
        "proposed_terms_section",
        "description_section",
        "task_section",
    )

    def __init__(self, policy: StrategyPolicy = DEFAULT_POLICY):
        self.policy = policy

    def render(self, ctx: DealContext, strategy: DealStrategy) -> str:
        blocks = []
        for name in self.SECTIONS:
            lines = getattr(self, name)(ctx, strategy)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def listing_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        s = ctx.seller
        return [
            "LISTING",
            f"Title: {s.title}",
            f"Industry: {s.industry or NOT_AVAILABLE}",
            f"Location: {s.location or NOT_AVAILABLE}",
            f"Asking Price: {format_money(s.asking_price)}",
            f"SDE: {format_money(s.sde)} | Revenue: {format_money(s.annual_revenue)} | "
            f"Profit: {format_money(s.annual_profit)}",
            f"Lease: {format_money(s.monthly_lease)} / mo",
            f"Includes: {self._includes(s.includes_inventory, s.includes_building)}",
            f"Employees: {format_count(s.employees)}",
        ]

    def seller_financing_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        s = ctx.seller
        sf = s.seller_financing
        if not sf.is_open:
            return [
                "SELLER FINANCING",
                f"Seller financing preference: {s.financing_preference or 'unspecified'}.",
            ]
        term = f"{format_pct(sf.term_years)} years" if sf.term_years is not None else TBD
        return [
            "SELLER FINANCING",
            f"Seller is open to financing ({sf.considered}).",
            f"Stated terms: {self._pct_or_tbd(sf.down_payment_pct)} down | "
            f"{self._pct_or_tbd(sf.interest_rate_pct)} interest | term {term}",
        ]

    def buyer_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        b = ctx.buyer
        lines = [
            "BUYER",
            f"Available Capital: {format_money(b.available_capital)}",
            f"Target Purchase Price: {format_money(b.target_purchase_price)}",
        ]
        if b.preferred_financing:
            lines.append(f"Preferred Financing: {b.preferred_financing}")
        return lines

    def fit_check_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        lines = [
            "FIT CHECK",
            self._gap_line(strategy),
            self._capital_line(strategy),
            f"Strategy: {strategy.structure.upper()} | Gap bucket: {strategy.gap_bucket.upper()}",
        ]
        lines.extend(f"- {suggestion}" for suggestion in strategy.suggestions)
        return lines

    def proposed_terms_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        r = strategy.recommended
        if strategy.is_bridge:
            header = (
                f"PROPOSED TERMS: Bridge-to-Bank Proposal "
                f"(interest-only {r.bridge_months} months, then balloon/refi)"
            )
        else:
            header = "PROPOSED TERMS: Standard Amortizing Seller Note"

        rate = f"{format_pct(r.interest_pct)}%" if r.interest_pct is not None else f"{TBD} interest"
        lines = [
            header,
            f"• Cash down at close: {self._pct_or_tbd(r.cash_down_pct)} (~{format_money(r.cash_down_at_close)})",
            f"• Seller note: ~{format_money(r.note_principal)} at {rate}",
        ]

        if strategy.is_bridge:
            lines.append(self.bridge_payment_clause(strategy))
            if r.has_equity_credit:
                lines.append(self.equity_credit_clause(strategy))
            lines.append(self.fallback_clause(strategy))
        else:
            lines.append(self.amortization_clause(strategy))

        lines.extend([
            "• Security: standard lien/UCC and personal guarantee",
            "• Reporting: monthly P&L and DSCR target to support refinance readiness",
        ])
        return lines

    def description_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        return ["DESCRIPTION", ctx.seller.description or "No description provided."]

    def task_section(self, ctx: DealContext, strategy: DealStrategy) -> list[str]:
        return [
            "TASK",
            "You are an M&A deal maker drafting a concise, seller-friendly offer summary "
            "that also respects buyer constraints.",
            'Draft a short, confident, seller-friendly offer summary following the "PROPOSED TERMS".',
            "Keep it to ~150-220 words. Offer one optional variant (e.g., small earnout or slightly different down %).",
        ]

    # -------------------------------------------------------------------------
    # Clauses
    # -------------------------------------------------------------------------

    def bridge_payment_clause(self, strategy: DealStrategy) -> str:
        r = strategy.recommended
        return (
            f"• Payments: interest-only for {r.bridge_months} months, "
            f"balloon at month {r.balloon_at_month} via bank refinance"
        )

    def amortization_clause(self, strategy: DealStrategy) -> str:
        return f"• Payments: amortizing over {format_pct(strategy.recommended.term_years)} years"

    def equity_credit_clause(self, strategy: DealStrategy) -> str:
        r = strategy.recommended
        limit = _COUNT_WORDS.get(self.policy.late_payment_limit, str(self.policy.late_payment_limit))
        return " ".join([
            f"• Down-Payment Credit: During the bridge period, {format_money(r.equity_credit_monthly)} "
            f"from each monthly payment accrues as Buyer Equity Credit, up to {format_money(r.equity_credit_cap)}.",
            "The accrued credit reduces the balloon at refinance "
            "(or is applied to principal if the note converts to amortizing).",
            f"Credit accrues only while the account is current; {limit} or more late payments "
            f"(>{self.policy.late_payment_grace_days} days) stop further accrual.",
        ])

    def fallback_clause(self, strategy: DealStrategy) -> str:
        r = strategy.recommended
        return (
            f"• If refinance isn't achieved by month {r.balloon_at_month}, the note auto-extends "
            f"{r.extension_months} months at a step-up rate or converts to a "
            f"{r.fallback_amortization_months}-month amortization at the prevailing rate (buyer's option)."
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _gap_line(self, strategy: DealStrategy) -> str:
        if strategy.gap_pct is None:
            return "Buyer offer price not specified."
        prices = f"({format_money(strategy.offer)} vs {format_money(strategy.ask)})"
        if strategy.gap_pct == 0:
            return f"Buyer offer vs ask: at ask {prices}."
        direction = "under" if strategy.gap_pct < 0 else "over"
        return f"Buyer offer vs ask: ~{format_pct(abs(strategy.gap_pct))}% {direction} ask {prices}."

    def _capital_line(self, strategy: DealStrategy) -> str:
        if strategy.required_down is None:
            return "Seller down % not specified."
        line = f"Required down: {format_money(strategy.required_down)}. Buyer capital: {format_money(strategy.buyer_capital)}"
        if strategy.down_ok is False:
            line += f" (short by ~{format_money(strategy.down_short)})"
        return line + "."

    @staticmethod
    def _includes(inventory: bool, building: bool) -> str:
        parts = [label for label, flag in (("Inventory", inventory), ("Building", building)) if flag]
        return " + ".join(parts) if parts else "None"

    @staticmethod
    def _pct_or_tbd(value) -> str:
        return f"{format_pct(value)}%" if value is not None else TBD


def render_narrative(ctx: DealContext, strategy: DealStrategy, policy: StrategyPolicy = DEFAULT_POLICY) -> str:
    """
    Render the full deal narrative.

    Pass the policy the strategy was computed with; the bridge clauses
    quote its late-payment rule. StrategyEngine.render does this itself.
    """
    return NarrativeRenderer(policy).render(ctx, strategy)


def render_profit_split_summary(split: ProfitSplit) -> str:
    """Plain-language summary of a subcontractor-style profit split deal."""
    return (
        "Under this proposal, the seller will retain ownership and continue receiving client payments directly. "
        f"For each project, such as a {format_money(split.job_revenue)} job with "
        f"{format_money(split.job_cost)} in costs, the resulting {format_money(split.profit)} profit will be split. "
        f"The buyer will be paid {format_money(split.buyer_profit)} (or {format_pct(split.buyer_split_pct)}%) "
        f"as a subcontractor, and {format_money(split.seller_profit)} (or {format_pct(split.seller_split_pct)}%) "
        f"will be credited toward the agreed business purchase price of {format_money(split.valuation)}. "
        "Ownership will transfer once the full amount has been repaid."
    )
