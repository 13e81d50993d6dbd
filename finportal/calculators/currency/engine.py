"""
Currency converter — static INR-pivot rates, no live market data.
"""
from __future__ import annotations

from finportal.calculators.common.schemas import CalculationInputError, money
from finportal.calculators.currency.schemas import CurrencyInput, CurrencyResult

PIVOT_CURRENCY = "INR"

# INR per 1 unit of the currency
INR_RATES: dict[str, float] = {
    "USD": 83.5,
    "EUR": 90.2,
    "GBP": 105.8,
    "AED": 22.7,
    "SGD": 62.1,
    "JPY": 0.55,
    "AUD": 55.4,
    "CAD": 61.8,
    "CHF": 94.2,
}

RATE_DECIMALS = 6


def _inr_per_unit(code: str, field: str) -> float:
    if code == PIVOT_CURRENCY:
        return 1.0
    try:
        return INR_RATES[code]
    except KeyError:
        raise CalculationInputError(field, f"unsupported currency code {code!r}") from None


def exchange_rate(from_currency: str, to_currency: str) -> float:
    """Units of to_currency per one from_currency, crossed through INR."""
    if from_currency == to_currency:
        # still reject unknown codes
        _inr_per_unit(from_currency, "from_currency")
        return 1.0
    return _inr_per_unit(from_currency, "from_currency") / _inr_per_unit(to_currency, "to_currency")


def convert_currency(conversion: CurrencyInput) -> CurrencyResult:
    rate = exchange_rate(conversion.from_currency, conversion.to_currency)
    return CurrencyResult(
        amount=conversion.amount,
        from_currency=conversion.from_currency,
        to_currency=conversion.to_currency,
        rate=round(rate, RATE_DECIMALS),
        converted_amount=money(conversion.amount * rate),
    )
