"""
schemas.py — shared Pydantic v2 contracts used by every calculator.

Defines:
  - CalculationInputError     (invalid input, names the offending field)
  - FallbackNotice            (degraded-result marker for unresolved lookups)
  - AmortizationRow           (one grouped row of a loan schedule)
  - CompoundGrowthInput / CompoundGrowthResult
  - ErrorDetail, ErrorBody, ErrorResponse  (HTTP error envelope)

Currency amounts are INR unless a model says otherwise. Engines compute in full
float precision; result models round to 2 decimals through money().
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MONEY_DECIMALS = 2


def money(value: float) -> float:
    """Round a currency amount for output. Collapses -0.0 to 0.0."""
    rounded = round(value, MONEY_DECIMALS)
    return rounded + 0.0


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CalculationInputError(ValueError):
    """
    Raised by the engine when an input makes the formula undefined
    (zero periods, negative rate, unknown currency code, ...).

    Pydantic's ValidationError covers structural checks on the input models;
    this covers calls made directly against the math primitives.
    """

    def __init__(self, field: str, issue: str) -> None:
        self.field = field
        self.issue = issue
        super().__init__(f"{field}: {issue}")

    def to_details(self) -> list[dict]:
        return [{"field": self.field, "issue": self.issue}]


class FallbackNotice(BaseModel):
    """A lookup key that was not found and the default used in its place."""
    model_config = ConfigDict(frozen=True)

    field: str                  # e.g. "cloud.region"
    requested: Optional[str]    # key the caller asked for
    used: float                 # value substituted
    reason: str


# ---------------------------------------------------------------------------
# Shared math records
# ---------------------------------------------------------------------------

class AmortizationRow(BaseModel):
    """
    One row of an amortization schedule.

    period is 1-based: the year number when grouped by year, the month number
    when grouped by month. The last yearly row may cover fewer than 12 months.
    """
    model_config = ConfigDict(frozen=True)

    period: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


class CompoundGrowthInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    periodic_contribution: float = Field(..., ge=0, description="Contribution per month.")
    annual_rate_pct: float = Field(..., ge=0, le=100)
    periods: int = Field(..., ge=1, description="Number of monthly periods.")
    starting_balance: float = Field(default=0, ge=0)


class CompoundGrowthResult(BaseModel):
    future_value: float
    total_contribution: float
    total_interest: float        # future_value - total_contribution - starting_balance


# ---------------------------------------------------------------------------
# Error response models — used by main.py and routes.py
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "transport.car_efficiency"
    issue: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str                     # VALIDATION_ERROR, NOT_FOUND, ...
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "MONEY_DECIMALS",
    "money",
    "CalculationInputError",
    "FallbackNotice",
    "AmortizationRow",
    "CompoundGrowthInput",
    "CompoundGrowthResult",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
