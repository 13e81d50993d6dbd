"""
schemas.py — loan calculator data contracts.

Defines:
  - LoanInput      (EMI, personal and housing loans)
  - GoldLoanInput  (collateral-driven loan amount)
  - LoanResult, GoldLoanResult
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finportal.calculators.common.schemas import AmortizationRow


class LoanInput(BaseModel):
    """
    Amortizing loan request.

    tenure is counted in tenure_unit; personal and housing loans always pass years.
    processing_fee_pct is informational: the fee is reported, never added to principal.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(..., gt=0, description="Loan amount in INR.")
    annual_rate_pct: float = Field(..., ge=0, le=100, description="Nominal annual interest rate, % p.a.")
    tenure: int = Field(..., gt=0)
    tenure_unit: Literal["years", "months"] = "years"
    processing_fee_pct: Optional[float] = Field(default=None, ge=0, le=100)

    @property
    def total_months(self) -> int:
        return self.tenure * 12 if self.tenure_unit == "years" else self.tenure


class LoanResult(BaseModel):
    emi: float
    total_interest: float
    total_payment: float
    total_months: int
    processing_fee: Optional[float] = None
    amortization: List[AmortizationRow] = []


class GoldLoanInput(BaseModel):
    """
    Gold loan request. ltv_pct is bounded to 25-75% by lender policy; the engine
    computes with whatever it is given.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    gold_weight_grams: float = Field(..., gt=0)
    purity_karat: float = Field(default=22, gt=0, le=24, description="24, 22, 18 ... ('22K' accepted).")
    gold_rate_per_gram: float = Field(..., gt=0, description="Market rate for 24K gold, INR per gram.")
    ltv_pct: float = Field(default=75, gt=0, le=100)
    annual_rate_pct: float = Field(..., ge=0, le=100)
    tenure_months: int = Field(..., gt=0)

    @field_validator("purity_karat", mode="before")
    @classmethod
    def parse_karat_label(cls, value):
        """Accept the portal's '22K' style labels."""
        if isinstance(value, str):
            return value.strip().upper().rstrip("K")
        return value


class GoldLoanResult(BaseModel):
    adjusted_rate_per_gram: float
    gold_value: float
    max_loan: float
    emi: float
    total_interest: float
    total_payment: float


__all__ = [
    "LoanInput",
    "LoanResult",
    "GoldLoanInput",
    "GoldLoanResult",
]
