"""
Loan calculators — EMI, personal, housing and gold loans.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from finportal.calculators.loans.engine import (
    calculate_emi,
    calculate_gold_loan,
    calculate_housing_loan,
    calculate_personal_loan,
)
from finportal.calculators.loans.schemas import GoldLoanInput, LoanInput


def test_emi_scenario_tenure_in_months() -> None:
    result = calculate_emi(LoanInput(
        principal=1_000_000, annual_rate_pct=8.5, tenure=120, tenure_unit="months",
    ))
    assert result.total_months == 120
    assert result.emi == pytest.approx(12_399.34, abs=1)
    assert result.total_payment == pytest.approx(result.emi * 120, abs=1)
    assert result.total_interest == pytest.approx(result.total_payment - 1_000_000, abs=0.01)
    assert result.amortization == []


def test_years_and_months_tenure_agree() -> None:
    years = calculate_emi(LoanInput(principal=500_000, annual_rate_pct=10, tenure=5))
    months = calculate_emi(LoanInput(
        principal=500_000, annual_rate_pct=10, tenure=60, tenure_unit="months",
    ))
    assert years == months


def test_personal_loan_matches_emi() -> None:
    loan = LoanInput(principal=300_000, annual_rate_pct=14, tenure=3)
    assert calculate_personal_loan(loan) == calculate_emi(loan)


def test_zero_rate_loan_has_no_interest() -> None:
    result = calculate_emi(LoanInput(principal=120_000, annual_rate_pct=0, tenure=1))
    assert result.emi == 10_000
    assert result.total_interest == 0


def test_housing_loan_yearly_schedule_and_fee() -> None:
    result = calculate_housing_loan(LoanInput(
        principal=5_000_000, annual_rate_pct=8.5, tenure=20,
    ))
    assert len(result.amortization) == 20
    assert result.amortization[-1].remaining_balance == pytest.approx(0, abs=1)
    assert sum(r.principal_paid for r in result.amortization) == pytest.approx(5_000_000, abs=1)
    # Default fee is 0.5% and is not added to the principal
    assert result.processing_fee == 25_000
    assert result.total_payment == pytest.approx(result.emi * 240, abs=2)


def test_housing_loan_custom_fee() -> None:
    result = calculate_housing_loan(LoanInput(
        principal=2_000_000, annual_rate_pct=9, tenure=15, processing_fee_pct=1,
    ))
    assert result.processing_fee == 20_000


def test_housing_interest_declines_year_on_year() -> None:
    rows = calculate_housing_loan(LoanInput(
        principal=3_000_000, annual_rate_pct=9, tenure=10,
    )).amortization
    interests = [r.interest_paid for r in rows]
    assert interests == sorted(interests, reverse=True)


def test_gold_loan_purity_and_ltv() -> None:
    result = calculate_gold_loan(GoldLoanInput(
        gold_weight_grams=100,
        purity_karat=22,
        gold_rate_per_gram=7_000,
        ltv_pct=75,
        annual_rate_pct=10,
        tenure_months=12,
    ))
    assert result.adjusted_rate_per_gram == pytest.approx(6_416.67, abs=0.01)
    assert result.gold_value == pytest.approx(641_666.67, abs=0.01)
    assert result.max_loan == pytest.approx(481_250.0, abs=0.01)
    assert result.total_payment == pytest.approx(result.emi * 12, abs=1)


def test_gold_loan_accepts_karat_label() -> None:
    loan = GoldLoanInput(
        gold_weight_grams=10, purity_karat="18K", gold_rate_per_gram=7_200,
        annual_rate_pct=9, tenure_months=6,
    )
    assert loan.purity_karat == 18
    assert calculate_gold_loan(loan).adjusted_rate_per_gram == pytest.approx(5_400.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(principal=0, annual_rate_pct=8, tenure=5),
        dict(principal=-1, annual_rate_pct=8, tenure=5),
        dict(principal=100_000, annual_rate_pct=-1, tenure=5),
        dict(principal=100_000, annual_rate_pct=8, tenure=0),
        dict(principal=100_000, annual_rate_pct=8, tenure=5, tenure_unit="weeks"),
    ],
)
def test_invalid_loan_inputs_rejected(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        LoanInput(**kwargs)


def test_gold_purity_above_24_rejected() -> None:
    with pytest.raises(ValidationError):
        GoldLoanInput(
            gold_weight_grams=10, purity_karat=25, gold_rate_per_gram=7_000,
            annual_rate_pct=9, tenure_months=6,
        )
