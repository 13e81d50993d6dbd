"""
schemas.py — goal-planning contracts (SIP, Inflation, Marriage planning, SSY).
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# SIP
# ---------------------------------------------------------------------------

class SipInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_investment: float = Field(..., ge=0)
    duration_years: int = Field(..., gt=0)
    expected_return_pct: float = Field(..., ge=0, le=100)


class SipYearRow(BaseModel):
    year: int
    invested: float
    value: float
    returns: float


class SipResult(BaseModel):
    total_invested: float
    estimated_returns: float
    total_value: float
    yearly: List[SipYearRow] = []


# ---------------------------------------------------------------------------
# Inflation
# ---------------------------------------------------------------------------

class InflationInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    current_amount: float = Field(..., ge=0)
    years: int = Field(..., gt=0)
    inflation_rate_pct: float = Field(..., ge=0, le=100)


class InflationPoint(BaseModel):
    year: int
    future_value: float
    nominal_value: float


class InflationResult(BaseModel):
    future_value: float
    purchasing_power_loss: float
    series: List[InflationPoint] = []   # at most ~11 sampled points, year 0 first


# ---------------------------------------------------------------------------
# Marriage planning
# ---------------------------------------------------------------------------

class MarriageInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    current_cost: float = Field(..., ge=0, description="What the wedding would cost today.")
    child_age: int = Field(..., ge=0)
    marriage_age: int = Field(..., gt=0)
    inflation_pct: float = Field(default=6, ge=0, le=100)
    expected_return_pct: float = Field(default=12, ge=0, le=100)

    @model_validator(mode="after")
    def validate_marriage_after_child_age(self) -> "MarriageInput":
        if self.marriage_age <= self.child_age:
            raise ValueError(
                f"marriage_age ({self.marriage_age}) must be greater than "
                f"child_age ({self.child_age})"
            )
        return self


class MarriageResult(BaseModel):
    years_left: int
    future_cost: float
    monthly_sip: float
    lump_sum: float


# ---------------------------------------------------------------------------
# Sukanya Samriddhi Yojana
# ---------------------------------------------------------------------------

class SsyInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    yearly_deposit: float = Field(..., ge=0)
    girl_age: int = Field(default=1, ge=0)
    interest_rate_pct: float = Field(default=8.2, ge=0, le=100)
    start_year: Optional[int] = Field(
        default=None,
        description="Calendar year the account opens; enables calendar labels and maturity_year.",
    )


class SsyConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    deposit_years: int = Field(default=15, gt=0, alias="depositYears")
    maturity_years: int = Field(default=21, gt=0, alias="maturityYears")


class SsyYearRow(BaseModel):
    year: int                        # 1-based year since opening
    age: int
    calendar_year: Optional[int] = None
    balance: float
    deposit: float                   # cumulative
    interest: float                  # cumulative


class SsyResult(BaseModel):
    maturity_value: float
    total_deposit: float
    total_interest: float
    maturity_year: Optional[int] = None
    yearly: List[SsyYearRow] = []


__all__ = [
    "SipInput", "SipYearRow", "SipResult",
    "InflationInput", "InflationPoint", "InflationResult",
    "MarriageInput", "MarriageResult",
    "SsyInput", "SsyConfig", "SsyYearRow", "SsyResult",
]
