"""
Loan calculators — EMI, personal loan, housing loan and gold loan.
All four are thin wrappers around the shared annuity primitives.
"""
from __future__ import annotations

from finportal.calculators.common.annuity import (
    compute_amortization_schedule,
    compute_emi,
    monthly_rate_from_annual_pct,
)
from finportal.calculators.common.schemas import money
from finportal.calculators.loans.schemas import (
    GoldLoanInput,
    GoldLoanResult,
    LoanInput,
    LoanResult,
)

PURE_GOLD_KARAT = 24
DEFAULT_HOUSING_FEE_PCT = 0.5


def _repayment(principal: float, annual_rate_pct: float, total_months: int) -> tuple[float, float, float]:
    """Return (emi, total_payment, total_interest) in full precision."""
    emi = compute_emi(principal, monthly_rate_from_annual_pct(annual_rate_pct), total_months)
    total_payment = emi * total_months
    return emi, total_payment, total_payment - principal


def calculate_emi(loan: LoanInput) -> LoanResult:
    emi, total_payment, total_interest = _repayment(
        loan.principal, loan.annual_rate_pct, loan.total_months,
    )
    return LoanResult(
        emi=money(emi),
        total_interest=money(total_interest),
        total_payment=money(total_payment),
        total_months=loan.total_months,
    )


def calculate_personal_loan(loan: LoanInput) -> LoanResult:
    """Personal loans quote tenure in years; a months tenure is passed through unchanged."""
    return calculate_emi(loan)


def calculate_housing_loan(loan: LoanInput) -> LoanResult:
    """
    EMI plus a yearly amortization breakdown and the processing fee.
    The fee defaults to 0.5% of the loan amount when the caller does not supply one.
    """
    monthly_rate = monthly_rate_from_annual_pct(loan.annual_rate_pct)
    emi, total_payment, total_interest = _repayment(
        loan.principal, loan.annual_rate_pct, loan.total_months,
    )
    fee_pct = DEFAULT_HOUSING_FEE_PCT if loan.processing_fee_pct is None else loan.processing_fee_pct
    schedule = compute_amortization_schedule(
        loan.principal, monthly_rate, emi, loan.total_months, group_by="year",
    )
    return LoanResult(
        emi=money(emi),
        total_interest=money(total_interest),
        total_payment=money(total_payment),
        total_months=loan.total_months,
        processing_fee=money(loan.principal * fee_pct / 100),
        amortization=schedule,
    )


def calculate_gold_loan(loan: GoldLoanInput) -> GoldLoanResult:
    """
    Market rate is quoted for 24K; scale by purity, value the collateral,
    lend LTV% of it, then amortize that amount.
    """
    adjusted_rate = loan.gold_rate_per_gram * loan.purity_karat / PURE_GOLD_KARAT
    gold_value = loan.gold_weight_grams * adjusted_rate
    max_loan = gold_value * loan.ltv_pct / 100
    emi, total_payment, total_interest = _repayment(
        max_loan, loan.annual_rate_pct, loan.tenure_months,
    )
    return GoldLoanResult(
        adjusted_rate_per_gram=money(adjusted_rate),
        gold_value=money(gold_value),
        max_loan=money(max_loan),
        emi=money(emi),
        total_interest=money(total_interest),
        total_payment=money(total_payment),
    )
