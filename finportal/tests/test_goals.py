"""
Goal calculators — SIP, inflation, marriage planning, Sukanya Samriddhi Yojana.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from finportal.calculators.common.growth import future_value_of_annuity
from finportal.calculators.goals.engine import (
    calculate_inflation,
    calculate_marriage_plan,
    calculate_sip,
    calculate_ssy,
)
from finportal.calculators.goals.schemas import (
    InflationInput,
    MarriageInput,
    SipInput,
    SsyConfig,
    SsyInput,
)


# ===========================================================================
# SIP
# ===========================================================================

def test_sip_matches_annuity_due() -> None:
    result = calculate_sip(SipInput(monthly_investment=10_000, duration_years=10, expected_return_pct=12))
    expected = 10_000 * ((1.01 ** 120 - 1) / 0.01) * 1.01
    assert result.total_value == pytest.approx(expected, abs=0.01)
    assert result.total_invested == 1_200_000
    assert result.estimated_returns == pytest.approx(expected - 1_200_000, abs=0.01)


def test_sip_yearly_rows() -> None:
    result = calculate_sip(SipInput(monthly_investment=5_000, duration_years=5, expected_return_pct=10))
    assert [row.year for row in result.yearly] == [1, 2, 3, 4, 5]
    assert result.yearly[-1].value == result.total_value
    assert result.yearly[0].invested == 60_000


def test_zero_return_sip_has_no_gain() -> None:
    result = calculate_sip(SipInput(monthly_investment=1_000, duration_years=3, expected_return_pct=0))
    assert result.total_value == result.total_invested == 36_000
    assert result.estimated_returns == 0


def test_sip_zero_duration_rejected() -> None:
    with pytest.raises(ValidationError):
        SipInput(monthly_investment=1_000, duration_years=0, expected_return_pct=10)


# ===========================================================================
# Inflation
# ===========================================================================

def test_inflation_future_cost() -> None:
    result = calculate_inflation(InflationInput(current_amount=100_000, years=10, inflation_rate_pct=6))
    assert result.future_value == pytest.approx(179_084.77, abs=0.01)
    assert result.purchasing_power_loss == pytest.approx(79_084.77, abs=0.01)


def test_inflation_series_sampling() -> None:
    short = calculate_inflation(InflationInput(current_amount=1_000, years=10, inflation_rate_pct=5))
    assert [p.year for p in short.series] == list(range(0, 11))
    assert short.series[0].future_value == 1_000

    long = calculate_inflation(InflationInput(current_amount=1_000, years=25, inflation_rate_pct=5))
    assert [p.year for p in long.series] == list(range(0, 26, 2))


# ===========================================================================
# Marriage planning
# ===========================================================================

def test_marriage_plan_sip_reaches_future_cost() -> None:
    result = calculate_marriage_plan(MarriageInput(
        current_cost=1_000_000, child_age=5, marriage_age=25,
        inflation_pct=6, expected_return_pct=12,
    ))
    assert result.years_left == 20
    assert result.future_cost == pytest.approx(1_000_000 * 1.06 ** 20, abs=0.01)
    # Monthly SIP at 1%/month for 240 months reproduces the target (within SIP rounding)
    assert future_value_of_annuity(result.monthly_sip, 0.01, 240) == pytest.approx(
        result.future_cost, rel=1e-5,
    )
    assert result.lump_sum == pytest.approx(result.future_cost / 1.12 ** 20, abs=0.01)


def test_marriage_zero_return_sip_is_straight_line() -> None:
    result = calculate_marriage_plan(MarriageInput(
        current_cost=240_000, child_age=10, marriage_age=20,
        inflation_pct=0, expected_return_pct=0,
    ))
    assert result.monthly_sip == 2_000
    assert result.lump_sum == 240_000


@pytest.mark.parametrize("child_age,marriage_age", [(25, 25), (30, 22)])
def test_marriage_age_must_exceed_child_age(child_age: int, marriage_age: int) -> None:
    with pytest.raises(ValidationError, match="marriage_age"):
        MarriageInput(current_cost=1_000_000, child_age=child_age, marriage_age=marriage_age)


# ===========================================================================
# SSY
# ===========================================================================

def _ssy_closed_form(deposit: float, rate: float) -> float:
    """15 start-of-year deposits, then 6 growth-only years."""
    after_deposits = deposit * (1 + rate) * ((1 + rate) ** 15 - 1) / rate
    return after_deposits * (1 + rate) ** 6


def test_ssy_scenario_matches_closed_form() -> None:
    result = calculate_ssy(SsyInput(yearly_deposit=50_000, interest_rate_pct=8.2))
    assert result.total_deposit == 750_000
    assert result.maturity_value == pytest.approx(_ssy_closed_form(50_000, 0.082), abs=0.01)
    assert result.total_interest == pytest.approx(result.maturity_value - 750_000, abs=0.01)
    assert len(result.yearly) == 21


def test_ssy_deposits_stop_after_fifteen_years() -> None:
    result = calculate_ssy(SsyInput(yearly_deposit=10_000, girl_age=3))
    assert result.yearly[14].deposit == 150_000
    assert result.yearly[20].deposit == 150_000
    assert result.yearly[0].age == 4
    assert result.yearly[-1].age == 24


def test_ssy_calendar_years_from_caller() -> None:
    result = calculate_ssy(SsyInput(yearly_deposit=10_000, start_year=2025))
    assert result.maturity_year == 2046
    assert result.yearly[0].calendar_year == 2026
    assert result.yearly[-1].calendar_year == result.maturity_year


def test_ssy_without_start_year_has_no_calendar() -> None:
    result = calculate_ssy(SsyInput(yearly_deposit=10_000))
    assert result.maturity_year is None
    assert all(row.calendar_year is None for row in result.yearly)


def test_ssy_schedule_configurable() -> None:
    result = calculate_ssy(
        SsyInput(yearly_deposit=1_000, interest_rate_pct=0),
        SsyConfig.model_validate({"depositYears": 5, "maturityYears": 8}),
    )
    assert result.total_deposit == 5_000
    assert result.maturity_value == 5_000
    assert len(result.yearly) == 8
