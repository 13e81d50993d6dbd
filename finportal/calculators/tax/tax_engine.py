"""
Income tax engine — FY 2024-25 (AY 2025-26 filing), Old vs New regime.
Pure Python, deterministic. Same input → same output.

Rebate under Section 87A is modelled as a hard zero: at or below the rebate
ceiling the base tax is 0 regardless of the slab computation; one rupee above
it the full slab tax applies.
"""
from __future__ import annotations

from dataclasses import dataclass

from finportal.calculators.common.schemas import money
from finportal.calculators.tax.schemas import (
    DeductionBreakdown,
    RegimeResult,
    SlabBand,
    TaxConfig,
    TaxInput,
    TaxResult,
)

FINANCIAL_YEAR = "FY2024-25"

# ===========================================================================
# STANDARD DEDUCTION, CESS, REBATE
# ===========================================================================

OLD_STD_DEDUCTION = 50_000
NEW_STD_DEDUCTION = 75_000

CESS_PCT = 4                         # Health & education cess on post-rebate tax

OLD_REBATE_CEILING = 500_000
NEW_REBATE_CEILING = 700_000

# ===========================================================================
# OLD REGIME DEDUCTION CAPS (content-store keys on the right)
# ===========================================================================

CAP_80C = 150_000                    # section_80c
CAP_80D_COMBINED = 75_000            # single combined 80D claim
CAP_80D_SELF = 25_000                # section_80d_self
CAP_80D_PARENTS = 50_000             # section_80d_parents
CAP_24 = 200_000                     # section_24_home_loan_interest
CAP_80CCD_1B = 50_000                # nps_80ccd_1b

# ===========================================================================
# SLAB TABLES — list[tuple[ceiling, rate]]
# ===========================================================================

OLD_REGIME_SLABS: list[tuple[float, float]] = [
    (250_000,      0.00),
    (500_000,      0.05),
    (1_000_000,    0.20),
    (float("inf"), 0.30),
]

NEW_REGIME_SLABS: list[tuple[float, float]] = [
    (300_000,      0.00),
    (700_000,      0.05),
    (1_000_000,    0.10),
    (1_200_000,    0.15),
    (1_500_000,    0.20),
    (float("inf"), 0.30),
]


@dataclass(frozen=True)
class TaxRules:
    """Engine constants with content-store overrides applied."""
    old_std_deduction: float
    new_std_deduction: float
    cess_rate: float
    old_slabs: list[tuple[float, float]]
    new_slabs: list[tuple[float, float]]
    old_rebate_ceiling: float
    new_rebate_ceiling: float
    cap_80c: float
    cap_80d_combined: float
    cap_80d_self: float
    cap_80d_parents: float
    cap_24: float
    cap_80ccd_1b: float


def _bands_to_slabs(bands: list[SlabBand]) -> list[tuple[float, float]]:
    slabs = [
        (band.up_to if band.up_to is not None else float("inf"), band.rate_pct / 100)
        for band in bands
    ]
    return sorted(slabs, key=lambda slab: slab[0])


def resolve_rules(config: TaxConfig | None = None) -> TaxRules:
    config = config or TaxConfig()
    std = config.standard_deduction
    rebate = config.rebate_ceiling
    slabs = config.slabs

    def _pick(amounts, attr: str, default: float) -> float:
        value = getattr(amounts, attr) if amounts is not None else None
        return default if value is None else value

    old_bands = slabs.old if slabs is not None else None
    new_bands = slabs.new if slabs is not None else None

    return TaxRules(
        old_std_deduction=_pick(std, "old", OLD_STD_DEDUCTION),
        new_std_deduction=_pick(std, "new", NEW_STD_DEDUCTION),
        cess_rate=(CESS_PCT if config.cess_pct is None else config.cess_pct) / 100,
        old_slabs=_bands_to_slabs(old_bands) if old_bands else OLD_REGIME_SLABS,
        new_slabs=_bands_to_slabs(new_bands) if new_bands else NEW_REGIME_SLABS,
        old_rebate_ceiling=_pick(rebate, "old", OLD_REBATE_CEILING),
        new_rebate_ceiling=_pick(rebate, "new", NEW_REBATE_CEILING),
        cap_80c=config.deduction_cap("section_80c", CAP_80C),
        cap_80d_combined=config.deduction_cap("section_80d", CAP_80D_COMBINED),
        cap_80d_self=config.deduction_cap("section_80d_self", CAP_80D_SELF),
        cap_80d_parents=config.deduction_cap("section_80d_parents", CAP_80D_PARENTS),
        cap_24=config.deduction_cap("section_24_home_loan_interest", CAP_24),
        cap_80ccd_1b=config.deduction_cap("nps_80ccd_1b", CAP_80CCD_1B),
    )


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _calculate_slab_tax(taxable_income: float, slabs: list[tuple[float, float]]) -> float:
    """
    Apply progressive slab tax using a bracket-list pattern.
    Accumulates tax on each bracket, stops once taxable_income <= previous ceiling.
    """
    tax = 0.0
    prev_ceiling = 0.0
    for ceiling, rate in slabs:
        if taxable_income <= prev_ceiling:
            break
        slab_income = min(taxable_income, ceiling) - prev_ceiling
        tax += slab_income * rate
        prev_ceiling = ceiling
    return tax


def _apply_rebate(taxable_income: float, tax: float, ceiling: float) -> float:
    """Section 87A as a hard cut-off: nothing is payable at or below the ceiling."""
    if taxable_income <= ceiling:
        return 0.0
    return tax


def _calculate_80d(tax_input: TaxInput, rules: TaxRules) -> float:
    if tax_input.has_split_80d:
        self_ded = min(tax_input.section_80d_self or 0.0, rules.cap_80d_self)
        parent_ded = min(tax_input.section_80d_parents or 0.0, rules.cap_80d_parents)
        return self_ded + parent_ded
    return min(tax_input.section_80d, rules.cap_80d_combined)


def _regime_result(
    regime: str,
    gross_income: float,
    breakdown: DeductionBreakdown,
    slabs: list[tuple[float, float]],
    rebate_ceiling: float,
    cess_rate: float,
) -> RegimeResult:
    total_deductions = (
        breakdown.standard_deduction + breakdown.hra + breakdown.section_80c
        + breakdown.section_80d + breakdown.section_24 + breakdown.nps_80ccd_1b
    )
    taxable_income = max(0.0, gross_income - total_deductions)
    slab_tax = _calculate_slab_tax(taxable_income, slabs)
    base_tax = _apply_rebate(taxable_income, slab_tax, rebate_ceiling)
    cess = base_tax * cess_rate
    total_tax = base_tax + cess
    effective_rate = total_tax / gross_income * 100 if gross_income > 0 else 0.0

    return RegimeResult(
        regime=regime,
        gross_income=money(gross_income),
        total_deductions=money(total_deductions),
        taxable_income=money(taxable_income),
        base_tax=money(base_tax),
        cess=money(cess),
        total_tax=money(total_tax),
        effective_tax_rate_pct=money(effective_rate),
        deduction_breakdown=breakdown,
    )


# ===========================================================================
# REGIME CALCULATORS
# ===========================================================================

def calculate_old_regime(tax_input: TaxInput, rules: TaxRules | None = None) -> RegimeResult:
    """
    Deductions: std ₹50K, HRA (as claimed), 80C ≤ ₹1.5L, 80D, Section 24 ≤ ₹2L,
    80CCD(1B) ≤ ₹50K. Slabs 0/5/20/30%. Zero tax up to ₹5L taxable.
    """
    rules = rules or resolve_rules()
    breakdown = DeductionBreakdown(
        standard_deduction=float(rules.old_std_deduction),
        hra=tax_input.hra,
        section_80c=min(tax_input.section_80c, rules.cap_80c),
        section_80d=_calculate_80d(tax_input, rules),
        section_24=min(tax_input.section_24, rules.cap_24),
        nps_80ccd_1b=min(tax_input.nps_80ccd_1b, rules.cap_80ccd_1b),
    )
    return _regime_result(
        "old", tax_input.gross_income, breakdown,
        rules.old_slabs, rules.old_rebate_ceiling, rules.cess_rate,
    )


def calculate_new_regime(tax_input: TaxInput, rules: TaxRules | None = None) -> RegimeResult:
    """
    Standard deduction ₹75K only. Slabs 0/5/10/15/20/30%. Zero tax up to ₹7L taxable.
    """
    rules = rules or resolve_rules()
    breakdown = DeductionBreakdown(standard_deduction=float(rules.new_std_deduction))
    return _regime_result(
        "new", tax_input.gross_income, breakdown,
        rules.new_slabs, rules.new_rebate_ceiling, rules.cess_rate,
    )


# ===========================================================================
# COMPARE REGIMES — public API
# ===========================================================================

def compare_regimes(tax_input: TaxInput, config: TaxConfig | None = None) -> TaxResult:
    """
    Compute both regimes and recommend the one with the lower total tax.
    Ties go to the New regime (no investment proofs needed).

    Local import of optimizer: optimizer.py imports constants from this module.
    """
    from finportal.calculators.tax.optimizer import generate_old_suggestions

    rules = resolve_rules(config)
    old = calculate_old_regime(tax_input, rules)
    new = calculate_new_regime(tax_input, rules)

    recommended = "old" if old.total_tax < new.total_tax else "new"
    savings = abs(old.total_tax - new.total_tax)

    if savings == 0.0:
        rationale = (
            f"Both regimes result in the same tax (₹{old.total_tax:,.0f}). "
            "New Regime recommended as the simpler option with no investment proofs required."
        )
    elif recommended == "old":
        bd = old.deduction_breakdown
        key_deds: list[str] = []
        if bd.hra > 0:
            key_deds.append(f"HRA ₹{bd.hra:,.0f}")
        if bd.section_80c > 0:
            key_deds.append(f"80C ₹{bd.section_80c:,.0f}")
        if bd.section_24 > 0:
            key_deds.append(f"Section 24 ₹{bd.section_24:,.0f}")
        if bd.section_80d > 0:
            key_deds.append(f"80D ₹{bd.section_80d:,.0f}")
        top_deds = ", ".join(key_deds[:3]) if key_deds else "available deductions"
        rationale = (
            f"Old Regime saves ₹{savings:,.0f} over the New Regime. "
            f"Old Regime tax: ₹{old.total_tax:,.0f} vs New Regime tax: ₹{new.total_tax:,.0f}. "
            f"Key deductions: {top_deds}."
        )
    else:
        rationale = (
            f"New Regime saves ₹{savings:,.0f} over the Old Regime. "
            f"New Regime tax: ₹{new.total_tax:,.0f} vs Old Regime tax: ₹{old.total_tax:,.0f}. "
            f"Your Old Regime deductions (₹{old.total_deductions:,.0f}) "
            f"do not outweigh the lower New Regime slab rates."
        )

    return TaxResult(
        old_regime=old,
        new_regime=new,
        recommended_regime=recommended,
        savings=money(savings),
        rationale=rationale,
        old_regime_suggestions=generate_old_suggestions(tax_input, old, rules),
    )
