"""
Compound growth math — future value of recurring and one-time amounts.

SIP, NPS and the marriage planner all use the annuity-due convention: each
period's contribution is invested at the START of the period, so it earns one
extra period of interest compared with an ordinary annuity.
"""
from __future__ import annotations

from finportal.calculators.common.annuity import monthly_rate_from_annual_pct
from finportal.calculators.common.schemas import (
    CalculationInputError,
    CompoundGrowthInput,
    CompoundGrowthResult,
    money,
)


def _check_periods(periods: int) -> None:
    if periods < 1:
        raise CalculationInputError("periods", "Number of periods must be at least 1.")


def _check_rate(rate: float, field: str = "rate") -> None:
    if rate < 0:
        raise CalculationInputError(field, "Rate cannot be negative.")


def future_value_of_annuity(periodic_payment: float, periodic_rate: float, periods: int) -> float:
    """FV = P × [((1+r)^n − 1) / r] × (1+r). Zero rate → P × n."""
    _check_periods(periods)
    _check_rate(periodic_rate, "periodic_rate")
    if periodic_rate == 0:
        return periodic_payment * periods
    return periodic_payment * (((1 + periodic_rate) ** periods - 1) / periodic_rate) * (1 + periodic_rate)


def required_periodic_payment(target_future_value: float, periodic_rate: float, periods: int) -> float:
    """Inverse of future_value_of_annuity: the payment P that reaches the target."""
    _check_periods(periods)
    _check_rate(periodic_rate, "periodic_rate")
    if periodic_rate == 0:
        return target_future_value / periods
    return (target_future_value * periodic_rate) / (
        ((1 + periodic_rate) ** periods - 1) * (1 + periodic_rate)
    )


def lump_sum_future_value(present_value: float, annual_rate: float, years: float) -> float:
    """FV = PV × (1 + rate)^years."""
    _check_rate(annual_rate, "annual_rate")
    return present_value * (1 + annual_rate) ** years


def present_value(future_value: float, annual_rate: float, years: float) -> float:
    """PV = FV / (1 + rate)^years."""
    _check_rate(annual_rate, "annual_rate")
    return future_value / (1 + annual_rate) ** years


def project_growth(growth: CompoundGrowthInput) -> CompoundGrowthResult:
    """Monthly contributions plus an optional opening balance, compounded monthly."""
    rate = monthly_rate_from_annual_pct(growth.annual_rate_pct)
    contributions_fv = future_value_of_annuity(growth.periodic_contribution, rate, growth.periods)
    balance_fv = growth.starting_balance * (1 + rate) ** growth.periods
    future_value = contributions_fv + balance_fv
    total_contribution = growth.periodic_contribution * growth.periods

    return CompoundGrowthResult(
        future_value=money(future_value),
        total_contribution=money(total_contribution),
        total_interest=money(future_value - total_contribution - growth.starting_balance),
    )
