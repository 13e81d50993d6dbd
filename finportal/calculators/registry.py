"""
registry.py — single in-process entry point for every calculator.

Usage:
    from finportal.calculators.registry import calculate
    result = calculate("emi", {"principal": 1_000_000, "annual_rate_pct": 8.5, "tenure": 10})

inputs/config may be pydantic models or plain mappings. Config mappings may
use the content store's camelCase keys. Omitted config sections fall back to
each calculator's built-in defaults.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Type, Union

from pydantic import BaseModel

from finportal.calculators.carbon.engine import calculate_carbon_footprint
from finportal.calculators.carbon.schemas import CarbonConfig, CarbonFootprintInput
from finportal.calculators.cloud.engine import (
    calculate_aws_cost,
    calculate_azure_cost,
    calculate_gcp_cost,
)
from finportal.calculators.cloud.schemas import CloudPricingConfig, CloudUsageInput
from finportal.calculators.currency.engine import convert_currency
from finportal.calculators.currency.schemas import CurrencyInput
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
from finportal.calculators.loans.engine import (
    calculate_emi,
    calculate_gold_loan,
    calculate_housing_loan,
    calculate_personal_loan,
)
from finportal.calculators.loans.schemas import GoldLoanInput, LoanInput
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
from finportal.calculators.rewards.engine import compare_cards
from finportal.calculators.rewards.schemas import RewardsConfig, RewardsInput
from finportal.calculators.tax.schemas import TaxConfig, TaxInput
from finportal.calculators.tax.tax_engine import compare_regimes

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Mapping[str, Any]]


class UnknownCalculatorError(LookupError):
    """Raised when a calculator kind is not registered."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown calculator kind: {kind!r}")


@dataclass(frozen=True)
class Calculator:
    kind: str
    title: str
    input_model: Type[BaseModel]
    func: Callable[..., BaseModel]
    config_model: Optional[Type[BaseModel]] = None


_CALCULATORS: tuple[Calculator, ...] = (
    Calculator("emi", "EMI Calculator", LoanInput, calculate_emi),
    Calculator("personal_loan", "Personal Loan Calculator", LoanInput, calculate_personal_loan),
    Calculator("housing_loan", "Housing Loan Calculator", LoanInput, calculate_housing_loan),
    Calculator("gold_loan", "Gold Loan Calculator", GoldLoanInput, calculate_gold_loan),
    Calculator("nps", "NPS Calculator", NpsInput, calculate_nps, NpsConfig),
    Calculator("pf", "PF / EPF Calculator", PfInput, calculate_pf, PfConfig),
    Calculator("gratuity", "Gratuity Calculator", GratuityInput, calculate_gratuity),
    Calculator("sip", "SIP Calculator", SipInput, calculate_sip),
    Calculator("inflation", "Inflation Calculator", InflationInput, calculate_inflation),
    Calculator("marriage", "Marriage Planning Calculator", MarriageInput, calculate_marriage_plan),
    Calculator("ssy", "Sukanya Samriddhi Yojana Calculator", SsyInput, calculate_ssy, SsyConfig),
    Calculator(
        "income_tax", "Income Tax Calculator (Old vs New Regime)",
        TaxInput, compare_regimes, TaxConfig,
    ),
    Calculator("aws_cost", "AWS Cost Calculator", CloudUsageInput, calculate_aws_cost, CloudPricingConfig),
    Calculator("azure_cost", "Azure Cost Calculator", CloudUsageInput, calculate_azure_cost, CloudPricingConfig),
    Calculator("gcp_cost", "GCP Cost Calculator", CloudUsageInput, calculate_gcp_cost, CloudPricingConfig),
    Calculator(
        "carbon_footprint", "Carbon Footprint Calculator",
        CarbonFootprintInput, calculate_carbon_footprint, CarbonConfig,
    ),
    Calculator(
        "credit_card_rewards", "Credit Card Rewards Comparison",
        RewardsInput, compare_cards, RewardsConfig,
    ),
    Calculator("currency", "Currency Converter", CurrencyInput, convert_currency),
)

CALCULATORS: dict[str, Calculator] = {c.kind: c for c in _CALCULATORS}


def get_calculator(kind: str) -> Calculator:
    try:
        return CALCULATORS[kind]
    except KeyError:
        raise UnknownCalculatorError(kind) from None


def list_calculators() -> list[dict[str, Any]]:
    return [
        {"kind": c.kind, "title": c.title, "configurable": c.config_model is not None}
        for c in _CALCULATORS
    ]


def _coerce(model: Type[BaseModel], payload: Payload) -> BaseModel:
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    return model.model_validate(payload)


def calculate(kind: str, inputs: Payload, config: Optional[Payload] = None) -> BaseModel:
    """
    Validate inputs (and config, when the calculator takes one) and run the calculator.

    Raises:
      UnknownCalculatorError  — kind not registered
      ValidationError         — inputs/config fail model validation
      CalculationInputError   — engine-level input rejection
    """
    calculator = get_calculator(kind)
    model_input = _coerce(calculator.input_model, inputs)

    if calculator.config_model is None:
        if config:
            logger.debug("Calculator %s takes no config, ignoring it", kind)
        logger.debug("Dispatching %s", kind)
        return calculator.func(model_input)

    model_config = _coerce(calculator.config_model, config) if config is not None else None
    logger.debug("Dispatching %s (config=%s)", kind, "custom" if model_config else "default")
    return calculator.func(model_input, model_config)
