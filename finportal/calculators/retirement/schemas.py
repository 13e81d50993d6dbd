"""
schemas.py — retirement calculator contracts (NPS, PF/EPF, Gratuity).

NPS return assumptions may be omitted from the input; they then come from
NpsConfig, which mirrors the content store's NPS calculator entry:
  {"assumptions": {"expectedAnnualReturnPct": 10, "annuityRatePct": 6},
   "outputs": {"annuityPct": 40, "lumpSumPct": 60}}
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _AgeSpan(BaseModel):
    """Shared current_age < retirement_age rule."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    current_age: int = Field(..., ge=0, le=100)
    retirement_age: int = Field(..., ge=1, le=100)

    @model_validator(mode="after")
    def validate_retirement_after_current(self):
        if self.retirement_age <= self.current_age:
            raise ValueError(
                f"retirement_age ({self.retirement_age}) must be greater than "
                f"current_age ({self.current_age})"
            )
        return self

    @property
    def years_to_retirement(self) -> int:
        return self.retirement_age - self.current_age


# ---------------------------------------------------------------------------
# NPS
# ---------------------------------------------------------------------------

class NpsInput(_AgeSpan):
    monthly_investment: float = Field(..., ge=0)
    expected_return_pct: Optional[float] = Field(default=None, ge=0, le=100)
    annuity_pct: Optional[float] = Field(
        default=None, ge=0, le=100,
        description="Share of the corpus used to buy an annuity at exit (40% minimum by regulation).",
    )
    annuity_return_pct: Optional[float] = Field(default=None, ge=0, le=100)


class NpsAssumptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    expected_annual_return_pct: float = Field(default=10, ge=0, alias="expectedAnnualReturnPct")
    annuity_rate_pct: float = Field(default=6, ge=0, alias="annuityRatePct")


class NpsOutputs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    annuity_pct: float = Field(default=40, ge=0, le=100, alias="annuityPct")


class NpsConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    assumptions: NpsAssumptions = NpsAssumptions()
    outputs: NpsOutputs = NpsOutputs()


class NpsYearRow(BaseModel):
    age: int
    corpus: float
    contribution: float
    interest: float


class NpsResult(BaseModel):
    total_contribution: float
    total_interest: float
    total_corpus: float
    annuity_amount: float
    lump_sum: float
    monthly_pension: float
    yearly: List[NpsYearRow] = []


# ---------------------------------------------------------------------------
# PF / EPF
# ---------------------------------------------------------------------------

class PfInput(_AgeSpan):
    basic_salary: float = Field(..., ge=0, description="Monthly basic + DA in INR.")
    current_balance: float = Field(default=0, ge=0)
    salary_increment_pct: float = Field(default=8, ge=0, le=100)
    interest_rate_pct: float = Field(default=8.15, ge=0, le=100)


class PfConfig(BaseModel):
    """
    EPF contribution split. The employer pays 12% too, but 8.33% of it is
    diverted to the pension scheme (EPS); only the remainder reaches the EPF balance.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    employee_contribution_pct: float = Field(default=12, ge=0, alias="employeeContributionPct")
    employer_epf_pct: float = Field(default=3.67, ge=0, alias="employerEpfPct")


class PfYearRow(BaseModel):
    age: int
    balance: float
    contribution: float     # cumulative employee + employer
    interest: float         # cumulative


class PfResult(BaseModel):
    total_corpus: float
    employee_contribution: float
    employer_contribution: float
    total_interest: float
    yearly: List[PfYearRow] = []


# ---------------------------------------------------------------------------
# Gratuity
# ---------------------------------------------------------------------------

class GratuityInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    basic_salary: float = Field(..., ge=0, description="Last drawn monthly basic + DA.")
    years_of_service: float = Field(..., ge=0)
    organization: Literal["covered", "not_covered"] = Field(
        default="covered",
        description="Whether the employer is covered under the Payment of Gratuity Act.",
    )


class GratuityResult(BaseModel):
    gratuity_amount: float
    is_eligible: bool
    divisor: int


__all__ = [
    "NpsInput", "NpsConfig", "NpsAssumptions", "NpsOutputs", "NpsYearRow", "NpsResult",
    "PfInput", "PfConfig", "PfYearRow", "PfResult",
    "GratuityInput", "GratuityResult",
]
