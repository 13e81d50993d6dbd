"""
Old-regime optimizer — plain-English suggestions for unused deduction headroom.
Pure functions. No I/O.

Called by compare_regimes() in tax_engine.py via local import
(this module imports from tax_engine, so tax_engine must not import it at module level).
"""
from __future__ import annotations

from finportal.calculators.tax.schemas import RegimeResult, TaxInput
from finportal.calculators.tax.tax_engine import TaxRules

_SUGGESTION_MIN_SAVING = 1_000   # Suppress suggestions where tax saving < ₹1,000
_MAX_SUGGESTIONS = 3


def marginal_rate(
    taxable_income: float,
    slabs: list[tuple[float, float]],
    rebate_ceiling: float,
    cess_rate: float,
) -> float:
    """
    Cess-inclusive rate on the next rupee of taxable income.
    0 while the rebate still zeroes the tax.
    """
    if taxable_income <= rebate_ceiling:
        return 0.0
    prev_ceiling = 0.0
    for ceiling, rate in slabs:
        if prev_ceiling < taxable_income <= ceiling:
            return rate * (1 + cess_rate)
        prev_ceiling = ceiling
    return slabs[-1][1] * (1 + cess_rate)


def generate_old_suggestions(
    tax_input: TaxInput,
    old_result: RegimeResult,
    rules: TaxRules,
) -> list[str]:
    """
    Covers 80C, 80D, 80CCD(1B) and Section 24 headroom.
    Returns at most 3 suggestions, sorted by rupee saving descending.
    """
    effective_rate = marginal_rate(
        old_result.taxable_income, rules.old_slabs, rules.old_rebate_ceiling, rules.cess_rate,
    )
    if effective_rate == 0.0:
        return []

    bd = old_result.deduction_breakdown
    candidates: list[tuple[float, str]] = []   # (saving, suggestion_text)

    def _offer(headroom: float, text: str) -> None:
        saving = headroom * effective_rate
        if headroom > 0 and saving >= _SUGGESTION_MIN_SAVING:
            candidates.append((saving, text.format(headroom=headroom, saving=round(saving))))

    _offer(
        rules.cap_80c - bd.section_80c,
        "Invest ₹{headroom:,.0f} more in 80C instruments (PPF, ELSS, LIC) "
        "to save ₹{saving:,.0f} in the Old Regime.",
    )

    if tax_input.has_split_80d:
        _offer(
            rules.cap_80d_self - min(tax_input.section_80d_self or 0.0, rules.cap_80d_self),
            "Pay ₹{headroom:,.0f} more in health insurance (self/family) under Section 80D "
            "to save ₹{saving:,.0f} in the Old Regime.",
        )
        _offer(
            rules.cap_80d_parents - min(tax_input.section_80d_parents or 0.0, rules.cap_80d_parents),
            "Pay ₹{headroom:,.0f} more in parent health insurance under Section 80D "
            "to save ₹{saving:,.0f} in the Old Regime.",
        )
    else:
        _offer(
            rules.cap_80d_combined - bd.section_80d,
            "Health insurance premiums of up to ₹{headroom:,.0f} more (self and parents) "
            "under Section 80D would save ₹{saving:,.0f} in the Old Regime.",
        )

    _offer(
        rules.cap_80ccd_1b - bd.nps_80ccd_1b,
        "Contribute ₹{headroom:,.0f} more to NPS (Section 80CCD(1B)) "
        "to save ₹{saving:,.0f} in the Old Regime.",
    )
    _offer(
        rules.cap_24 - bd.section_24,
        "Home loan interest of up to ₹{headroom:,.0f} more can be claimed under "
        "Section 24 to save ₹{saving:,.0f} in the Old Regime.",
    )

    candidates.sort(key=lambda x: x[0], reverse=True)
    return [text for _, text in candidates[:_MAX_SUGGESTIONS]]
