"""
Annuity math — EMI and amortization primitives shared by every loan calculator.
Pure functions, no I/O. Rates are periodic fractions (8.5% p.a. → 0.085/12).
"""
from __future__ import annotations

from typing import Literal

from finportal.calculators.common.schemas import (
    AmortizationRow,
    CalculationInputError,
    money,
)

MONTHS_PER_YEAR = 12


def monthly_rate_from_annual_pct(annual_rate_pct: float) -> float:
    """8.5 (% p.a.) → 0.0070833..."""
    return annual_rate_pct / MONTHS_PER_YEAR / 100


def compute_emi(principal: float, monthly_rate: float, total_months: int) -> float:
    """
    Equated monthly instalment: P·r·(1+r)^n / ((1+r)^n − 1).

    Zero rate degenerates to P / n. Non-positive principal yields 0.
    """
    if total_months < 1:
        raise CalculationInputError("total_months", "Loan tenure must be at least 1 month.")
    if monthly_rate < 0:
        raise CalculationInputError("monthly_rate", "Interest rate cannot be negative.")
    if principal <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / total_months

    growth = (1 + monthly_rate) ** total_months
    return principal * monthly_rate * growth / (growth - 1)


def compute_amortization_schedule(
    principal: float,
    monthly_rate: float,
    emi: float,
    total_months: int,
    group_by: Literal["year", "month"] = "year",
) -> list[AmortizationRow]:
    """
    Walk the loan month by month and aggregate into yearly or monthly rows.

    interest = balance × r, principal_paid = emi − interest, balance −= principal_paid.
    Remaining balance is clamped at 0 so float drift never shows a negative residue.
    """
    if total_months < 1:
        raise CalculationInputError("total_months", "Loan tenure must be at least 1 month.")
    if group_by not in ("year", "month"):
        raise CalculationInputError("group_by", f"Unsupported grouping '{group_by}'.")

    months_per_row = MONTHS_PER_YEAR if group_by == "year" else 1
    rows: list[AmortizationRow] = []
    balance = float(principal)
    row_interest = 0.0
    row_principal = 0.0

    for month in range(1, total_months + 1):
        interest = balance * monthly_rate
        principal_paid = emi - interest
        balance -= principal_paid
        row_interest += interest
        row_principal += principal_paid

        if month % months_per_row == 0 or month == total_months:
            rows.append(AmortizationRow(
                period=len(rows) + 1,
                principal_paid=money(row_principal),
                interest_paid=money(row_interest),
                remaining_balance=money(max(0.0, balance)),
            ))
            row_interest = 0.0
            row_principal = 0.0

    return rows
