"""
Goal calculators — SIP projection, inflation erosion, marriage fund and SSY maturity.
"""
from __future__ import annotations

from finportal.calculators.common.annuity import monthly_rate_from_annual_pct
from finportal.calculators.common.growth import (
    future_value_of_annuity,
    lump_sum_future_value,
    present_value,
    required_periodic_payment,
)
from finportal.calculators.common.schemas import money
from finportal.calculators.goals.schemas import (
    InflationInput,
    InflationPoint,
    InflationResult,
    MarriageInput,
    MarriageResult,
    SipInput,
    SipResult,
    SipYearRow,
    SsyConfig,
    SsyInput,
    SsyResult,
    SsyYearRow,
)

INFLATION_SERIES_POINTS = 10


def calculate_sip(sip: SipInput) -> SipResult:
    monthly_rate = monthly_rate_from_annual_pct(sip.expected_return_pct)
    months = sip.duration_years * 12

    total_value = future_value_of_annuity(sip.monthly_investment, monthly_rate, months)
    total_invested = sip.monthly_investment * months

    yearly: list[SipYearRow] = []
    for year in range(1, sip.duration_years + 1):
        elapsed = year * 12
        value = future_value_of_annuity(sip.monthly_investment, monthly_rate, elapsed)
        invested = sip.monthly_investment * elapsed
        yearly.append(SipYearRow(
            year=year,
            invested=money(invested),
            value=money(value),
            returns=money(value - invested),
        ))

    return SipResult(
        total_invested=money(total_invested),
        estimated_returns=money(total_value - total_invested),
        total_value=money(total_value),
        yearly=yearly,
    )


def calculate_inflation(inflation: InflationInput) -> InflationResult:
    """Future cost of today's amount; the series samples about ten points from year 0."""
    rate = inflation.inflation_rate_pct / 100
    future_value = lump_sum_future_value(inflation.current_amount, rate, inflation.years)

    step = max(1, inflation.years // INFLATION_SERIES_POINTS)
    series = [
        InflationPoint(
            year=year,
            future_value=money(lump_sum_future_value(inflation.current_amount, rate, year)),
            nominal_value=money(inflation.current_amount),
        )
        for year in range(0, inflation.years + 1, step)
    ]

    return InflationResult(
        future_value=money(future_value),
        purchasing_power_loss=money(future_value - inflation.current_amount),
        series=series,
    )


def calculate_marriage_plan(plan: MarriageInput) -> MarriageResult:
    """
    Inflate today's cost to the marriage year, then solve for the monthly SIP
    (annuity due at the expected return) and for the lump sum to invest today.
    The lump sum is discounted at the investment return, not at inflation.
    """
    years_left = plan.marriage_age - plan.child_age
    future_cost = lump_sum_future_value(plan.current_cost, plan.inflation_pct / 100, years_left)

    monthly_rate = monthly_rate_from_annual_pct(plan.expected_return_pct)
    monthly_sip = required_periodic_payment(future_cost, monthly_rate, years_left * 12)
    lump_sum = present_value(future_cost, plan.expected_return_pct / 100, years_left)

    return MarriageResult(
        years_left=years_left,
        future_cost=money(future_cost),
        monthly_sip=money(monthly_sip),
        lump_sum=money(lump_sum),
    )


def calculate_ssy(ssy: SsyInput, config: SsyConfig | None = None) -> SsyResult:
    """
    Deposits are made at the start of each of the first 15 years; interest
    compounds annually on the whole balance (including that year's deposit)
    until maturity 21 years after opening.
    """
    config = config or SsyConfig()
    rate = ssy.interest_rate_pct / 100

    balance = 0.0
    total_deposit = 0.0
    yearly: list[SsyYearRow] = []

    for year in range(1, config.maturity_years + 1):
        if year <= config.deposit_years:
            balance += ssy.yearly_deposit
            total_deposit += ssy.yearly_deposit
        balance += balance * rate

        yearly.append(SsyYearRow(
            year=year,
            age=ssy.girl_age + year,
            calendar_year=None if ssy.start_year is None else ssy.start_year + year,
            balance=money(balance),
            deposit=money(total_deposit),
            interest=money(balance - total_deposit),
        ))

    return SsyResult(
        maturity_value=money(balance),
        total_deposit=money(total_deposit),
        total_interest=money(balance - total_deposit),
        maturity_year=None if ssy.start_year is None else ssy.start_year + config.maturity_years,
        yearly=yearly,
    )
