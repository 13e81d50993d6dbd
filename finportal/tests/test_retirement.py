"""
Retirement calculators — NPS corpus split, EPF accrual, gratuity eligibility.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from finportal.calculators.retirement.engine import (
    calculate_gratuity,
    calculate_nps,
    calculate_pf,
)
from finportal.calculators.retirement.schemas import (
    GratuityInput,
    NpsConfig,
    NpsInput,
    PfConfig,
    PfInput,
)


# ===========================================================================
# NPS
# ===========================================================================

def test_nps_zero_return_corpus_is_contributions() -> None:
    result = calculate_nps(NpsInput(
        current_age=30, retirement_age=60, monthly_investment=5_000,
        expected_return_pct=0,
    ))
    assert result.total_corpus == 1_800_000
    assert result.total_interest == 0
    assert result.annuity_amount == 720_000         # 40% default
    assert result.lump_sum == 1_080_000
    assert result.monthly_pension == pytest.approx(3_600.0)   # 720000 × 6% / 12


def test_nps_split_sums_to_corpus() -> None:
    result = calculate_nps(NpsInput(current_age=25, retirement_age=60, monthly_investment=10_000))
    assert result.annuity_amount + result.lump_sum == pytest.approx(result.total_corpus, abs=0.02)
    assert result.total_interest == pytest.approx(
        result.total_corpus - result.total_contribution, abs=0.02,
    )


def test_nps_yearly_series_tracks_age() -> None:
    result = calculate_nps(NpsInput(current_age=40, retirement_age=60, monthly_investment=8_000))
    assert len(result.yearly) == 20
    assert result.yearly[0].age == 41
    assert result.yearly[-1].age == 60
    assert result.yearly[-1].corpus == result.total_corpus
    corpora = [row.corpus for row in result.yearly]
    assert corpora == sorted(corpora)


def test_nps_defaults_come_from_content_config() -> None:
    config = NpsConfig.model_validate({
        "assumptions": {"expectedAnnualReturnPct": 0, "annuityRatePct": 12},
        "outputs": {"annuityPct": 50, "lumpSumPct": 50},
    })
    result = calculate_nps(
        NpsInput(current_age=50, retirement_age=60, monthly_investment=1_000),
        config,
    )
    assert result.total_corpus == 120_000
    assert result.annuity_amount == 60_000
    assert result.monthly_pension == pytest.approx(600.0)


def test_nps_explicit_inputs_beat_config() -> None:
    config = NpsConfig.model_validate({"outputs": {"annuityPct": 80}})
    result = calculate_nps(
        NpsInput(current_age=50, retirement_age=60, monthly_investment=1_000,
                 expected_return_pct=0, annuity_pct=40),
        config,
    )
    assert result.annuity_amount == 48_000


@pytest.mark.parametrize("current,retirement", [(60, 60), (45, 40)])
def test_retirement_age_must_exceed_current_age(current: int, retirement: int) -> None:
    with pytest.raises(ValidationError, match="retirement_age"):
        NpsInput(current_age=current, retirement_age=retirement, monthly_investment=5_000)


# ===========================================================================
# PF / EPF
# ===========================================================================

def test_pf_year_one_worked_example() -> None:
    """
    basic ₹50,000/month, empty balance, 8.15%:
      employee = 50,000 × 12% × 12  = 72,000
      employer = 50,000 × 3.67% × 12 = 22,020
      interest = (0 + 94,020 / 2) × 8.15% = 3,831.315
    """
    result = calculate_pf(PfInput(
        current_age=30, retirement_age=31, basic_salary=50_000, interest_rate_pct=8.15,
    ))
    assert result.employee_contribution == pytest.approx(72_000)
    assert result.employer_contribution == pytest.approx(22_020)
    assert result.total_interest == pytest.approx(3_831.315, abs=0.01)
    assert result.total_corpus == pytest.approx(97_851.315, abs=0.01)


def test_pf_salary_increment_applies_from_year_two() -> None:
    result = calculate_pf(PfInput(
        current_age=30, retirement_age=32, basic_salary=10_000,
        salary_increment_pct=10, interest_rate_pct=0,
    ))
    # year 1: 15.67% of 10,000 × 12; year 2: 15.67% of 11,000 × 12
    assert result.total_corpus == pytest.approx(18_804 + 20_684.4, abs=0.01)
    assert [row.age for row in result.yearly] == [31, 32]


def test_pf_starting_balance_earns_interest() -> None:
    result = calculate_pf(PfInput(
        current_age=30, retirement_age=31, basic_salary=0,
        current_balance=100_000, interest_rate_pct=8,
    ))
    assert result.total_corpus == pytest.approx(108_000)


def test_pf_contribution_split_configurable() -> None:
    config = PfConfig.model_validate({"employeeContributionPct": 10, "employerEpfPct": 0})
    result = calculate_pf(
        PfInput(current_age=30, retirement_age=31, basic_salary=10_000, interest_rate_pct=0),
        config,
    )
    assert result.total_corpus == pytest.approx(12_000)
    assert result.employer_contribution == 0


# ===========================================================================
# Gratuity
# ===========================================================================

def test_gratuity_below_five_years_is_zero() -> None:
    result = calculate_gratuity(GratuityInput(basic_salary=50_000, years_of_service=4.99))
    assert result.is_eligible is False
    assert result.gratuity_amount == 0


def test_gratuity_at_five_years_uses_formula() -> None:
    result = calculate_gratuity(GratuityInput(basic_salary=50_000, years_of_service=5))
    assert result.is_eligible is True
    assert result.gratuity_amount == pytest.approx(50_000 * 15 * 5 / 26, abs=0.01)


@pytest.mark.parametrize(
    "organization,divisor,expected",
    [
        ("covered", 26, 288_461.54),
        ("not_covered", 30, 250_000.0),
    ],
)
def test_gratuity_divisor_by_coverage(organization: str, divisor: int, expected: float) -> None:
    result = calculate_gratuity(GratuityInput(
        basic_salary=50_000, years_of_service=10, organization=organization,
    ))
    assert result.divisor == divisor
    assert result.gratuity_amount == pytest.approx(expected, abs=0.01)
