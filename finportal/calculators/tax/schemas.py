"""
schemas.py — income tax calculator data contracts (FY 2024-25).

Defines:
  - TaxInput            (gross income + old-regime deduction claims)
  - TaxConfig           (content-store overrides: slabs, std deduction, cess, caps)
  - DeductionBreakdown  (deductions actually applied, after caps)
  - RegimeResult        (full computation for one regime)
  - TaxResult           (old vs new comparison)

TaxConfig accepts the content store's INCOME_TAX entry as-is, e.g.
  {"standardDeduction": {"old": 50000, "new": 75000}, "cessPct": 4,
   "slabs": {"old": [{"upTo": 250000, "ratePct": 0}, ..., {"above": 1000000, "ratePct": 30}]},
   "deductionsOldRegime": [{"key": "section_80c", "max": 150000}, ...]}
Every field is optional; anything omitted falls back to the engine constants.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# TaxInput — user claims
# ---------------------------------------------------------------------------

class TaxInput(BaseModel):
    """
    Annual figures in INR. Deduction claims are raw amounts: the engine applies
    the statutory caps, so a ₹2L 80C claim is accepted and capped at ₹1.5L.

    80D can be given either as one combined amount (cap ₹75,000) or split into
    self/family (cap ₹25,000) and parents (cap ₹50,000). When either split
    field is present the split caps apply and section_80d is ignored.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: float = Field(..., ge=0)
    hra: float = Field(default=0, ge=0, description="HRA exemption already computed by the user.")
    section_80c: float = Field(default=0, ge=0)
    section_80d: float = Field(default=0, ge=0)
    section_80d_self: Optional[float] = Field(default=None, ge=0)
    section_80d_parents: Optional[float] = Field(default=None, ge=0)
    section_24: float = Field(default=0, ge=0, description="Home loan interest, self-occupied.")
    nps_80ccd_1b: float = Field(default=0, ge=0)

    @property
    def has_split_80d(self) -> bool:
        return self.section_80d_self is not None or self.section_80d_parents is not None


# ---------------------------------------------------------------------------
# TaxConfig — content-store overrides
# ---------------------------------------------------------------------------

class SlabBand(BaseModel):
    """One slab: either {upTo, ratePct} or the open-ended top {above, ratePct}."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    up_to: Optional[float] = Field(default=None, gt=0, alias="upTo")
    above: Optional[float] = Field(default=None, ge=0)
    rate_pct: float = Field(..., ge=0, le=100, alias="ratePct")

    @model_validator(mode="after")
    def validate_one_bound(self) -> "SlabBand":
        if (self.up_to is None) == (self.above is None):
            raise ValueError("slab band needs exactly one of 'upTo' or 'above'")
        return self


class RegimeSlabs(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    old: Optional[List[SlabBand]] = None
    new: Optional[List[SlabBand]] = None

    @model_validator(mode="after")
    def validate_open_top_band(self) -> "RegimeSlabs":
        for regime, bands in (("old", self.old), ("new", self.new)):
            if not bands:
                continue
            open_bands = sum(1 for band in bands if band.above is not None)
            if open_bands != 1:
                raise ValueError(
                    f"{regime} slabs need exactly one open-ended 'above' band, got {open_bands}"
                )
        return self


class RegimeAmounts(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    old: Optional[float] = Field(default=None, ge=0)
    new: Optional[float] = Field(default=None, ge=0)


class DeductionLimit(BaseModel):
    """An old-regime deduction field as described by the content store. max=None means uncapped."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str
    label: Optional[str] = None
    max: Optional[float] = Field(default=None, ge=0)


class TaxConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    fy: Optional[str] = None
    standard_deduction: Optional[RegimeAmounts] = Field(default=None, alias="standardDeduction")
    cess_pct: Optional[float] = Field(default=None, ge=0, le=100, alias="cessPct")
    slabs: Optional[RegimeSlabs] = None
    rebate_ceiling: Optional[RegimeAmounts] = Field(default=None, alias="rebateCeiling")
    deductions_old_regime: List[DeductionLimit] = Field(default_factory=list, alias="deductionsOldRegime")

    def deduction_cap(self, key: str, default: float) -> float:
        for limit in self.deductions_old_regime:
            if limit.key == key and limit.max is not None:
                return limit.max
        return default


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class DeductionBreakdown(BaseModel):
    """
    Deductions actually applied (after caps), not the raw claims.
    New regime: only standard_deduction is non-zero.
    """
    model_config = ConfigDict(extra="forbid")

    standard_deduction: float = 0
    hra: float = 0
    section_80c: float = 0
    section_80d: float = 0
    section_24: float = 0
    nps_80ccd_1b: float = 0


class RegimeResult(BaseModel):
    """
    Computation sequence:
      1. total_deductions = applicable capped deductions
      2. taxable_income   = max(0, gross_income - total_deductions)
      3. base_tax         = slab tax, forced to 0 at or below the rebate ceiling
      4. cess             = cess% of base_tax
      5. total_tax        = base_tax + cess
    """
    model_config = ConfigDict(extra="forbid")

    regime: Literal["old", "new"]
    gross_income: float
    total_deductions: float
    taxable_income: float
    base_tax: float
    cess: float
    total_tax: float
    effective_tax_rate_pct: float      # total_tax / gross_income
    deduction_breakdown: DeductionBreakdown


class TaxResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    old_regime: RegimeResult
    new_regime: RegimeResult
    recommended_regime: Literal["old", "new"]
    savings: float                     # abs(old total - new total)
    rationale: str
    old_regime_suggestions: List[str] = []


__all__ = [
    "TaxInput",
    "SlabBand",
    "RegimeSlabs",
    "RegimeAmounts",
    "DeductionLimit",
    "TaxConfig",
    "DeductionBreakdown",
    "RegimeResult",
    "TaxResult",
]
