"""
Retirement calculators — NPS corpus and pension, EPF accrual, gratuity.
"""
from __future__ import annotations

from finportal.calculators.common.annuity import monthly_rate_from_annual_pct
from finportal.calculators.common.growth import future_value_of_annuity
from finportal.calculators.common.schemas import money
from finportal.calculators.retirement.schemas import (
    GratuityInput,
    GratuityResult,
    NpsConfig,
    NpsInput,
    NpsResult,
    NpsYearRow,
    PfConfig,
    PfInput,
    PfResult,
    PfYearRow,
)

GRATUITY_MIN_YEARS = 5
GRATUITY_DAYS_PER_YEAR = 15
GRATUITY_DIVISOR_COVERED = 26        # working days in a month under the Act
GRATUITY_DIVISOR_NOT_COVERED = 30


def calculate_nps(nps: NpsInput, config: NpsConfig | None = None) -> NpsResult:
    """
    Corpus from monthly contributions (annuity due), split into an annuity
    purchase and a tax-free lump sum. Pension is a simple annual yield on the
    annuity amount, paid monthly.
    """
    config = config or NpsConfig()
    expected_return = (
        config.assumptions.expected_annual_return_pct
        if nps.expected_return_pct is None else nps.expected_return_pct
    )
    annuity_pct = config.outputs.annuity_pct if nps.annuity_pct is None else nps.annuity_pct
    annuity_return = (
        config.assumptions.annuity_rate_pct
        if nps.annuity_return_pct is None else nps.annuity_return_pct
    )

    months = nps.years_to_retirement * 12
    monthly_rate = monthly_rate_from_annual_pct(expected_return)

    total_corpus = future_value_of_annuity(nps.monthly_investment, monthly_rate, months)
    total_contribution = nps.monthly_investment * months
    annuity_amount = total_corpus * annuity_pct / 100
    lump_sum = total_corpus - annuity_amount
    monthly_pension = annuity_amount * (annuity_return / 100) / 12

    yearly: list[NpsYearRow] = []
    for year in range(1, nps.years_to_retirement + 1):
        elapsed = year * 12
        corpus = future_value_of_annuity(nps.monthly_investment, monthly_rate, elapsed)
        contribution = nps.monthly_investment * elapsed
        yearly.append(NpsYearRow(
            age=nps.current_age + year,
            corpus=money(corpus),
            contribution=money(contribution),
            interest=money(corpus - contribution),
        ))

    return NpsResult(
        total_contribution=money(total_contribution),
        total_interest=money(total_corpus - total_contribution),
        total_corpus=money(total_corpus),
        annuity_amount=money(annuity_amount),
        lump_sum=money(lump_sum),
        monthly_pension=money(monthly_pension),
        yearly=yearly,
    )


def calculate_pf(pf: PfInput, config: PfConfig | None = None) -> PfResult:
    """
    Year-by-year EPF simulation.

    Interest for a year is charged on the opening balance plus half of that
    year's contributions, approximating monthly credits without simulating
    each month. Basic salary then grows by the increment for the next year.
    """
    config = config or PfConfig()
    rate = pf.interest_rate_pct / 100

    balance = pf.current_balance
    basic = pf.basic_salary
    total_employee = 0.0
    total_employer = 0.0
    total_interest = 0.0
    yearly: list[PfYearRow] = []

    for year in range(1, pf.years_to_retirement + 1):
        employee = basic * config.employee_contribution_pct / 100 * 12
        employer = basic * config.employer_epf_pct / 100 * 12
        contribution = employee + employer
        interest = (balance + contribution / 2) * rate

        balance += contribution + interest
        total_employee += employee
        total_employer += employer
        total_interest += interest

        yearly.append(PfYearRow(
            age=pf.current_age + year,
            balance=money(balance),
            contribution=money(total_employee + total_employer),
            interest=money(total_interest),
        ))
        basic *= 1 + pf.salary_increment_pct / 100

    return PfResult(
        total_corpus=money(balance),
        employee_contribution=money(total_employee),
        employer_contribution=money(total_employer),
        total_interest=money(total_interest),
        yearly=yearly,
    )


def calculate_gratuity(gratuity: GratuityInput) -> GratuityResult:
    """(basic × 15 × years) / 26 under the Act, / 30 otherwise; 0 below 5 years of service."""
    divisor = (
        GRATUITY_DIVISOR_COVERED if gratuity.organization == "covered"
        else GRATUITY_DIVISOR_NOT_COVERED
    )
    is_eligible = gratuity.years_of_service >= GRATUITY_MIN_YEARS
    amount = 0.0
    if is_eligible:
        amount = gratuity.basic_salary * GRATUITY_DAYS_PER_YEAR * gratuity.years_of_service / divisor

    return GratuityResult(
        gratuity_amount=money(amount),
        is_eligible=is_eligible,
        divisor=divisor,
    )
