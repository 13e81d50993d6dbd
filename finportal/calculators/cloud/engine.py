"""
Cloud cost engine — monthly and annual INR estimates from flat USD unit rates.

Unknown instance types never fail the estimate: the provider's fallback
hourly rate is used, the result is flagged degraded and the substitution is
listed in result.fallbacks.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from finportal.calculators.cloud.pricing import (
    AWS_PRICING,
    AZURE_PRICING,
    GCP_PRICING,
    PRICING_BY_PROVIDER,
    ProviderPricing,
)
from finportal.calculators.cloud.schemas import (
    CloudCostResult,
    CloudLineItem,
    CloudPricingConfig,
    CloudUsageInput,
)
from finportal.calculators.common.schemas import FallbackNotice, money

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def _hourly_rate(
    table: dict[str, float],
    requested: str | None,
    default_type: str,
    fallback_rate: float,
    field: str,
    pricing: ProviderPricing,
    fallbacks: list[FallbackNotice],
) -> float:
    instance_type = requested or default_type
    if instance_type in table:
        return table[instance_type]
    logger.warning(
        "%s: unknown %s %r, using fallback rate $%.4f/h",
        pricing.provider, field, requested, fallback_rate,
    )
    fallbacks.append(FallbackNotice(
        field=field,
        requested=requested,
        used=fallback_rate,
        reason=f"unknown {pricing.provider} instance type",
    ))
    return fallback_rate


def apply_pricing_overrides(pricing: ProviderPricing, config: CloudPricingConfig | None) -> ProviderPricing:
    """Built-in provider table with any configured rates laid over it."""
    if config is None:
        return pricing
    scalar_overrides = {
        name: value
        for name, value in config.model_dump(
            exclude={"compute_hourly", "database_hourly", "usd_to_inr"}
        ).items()
        if value is not None
    }
    if config.usd_to_inr is not None:
        scalar_overrides["currency_rate"] = config.usd_to_inr
    return replace(
        pricing,
        compute_hourly={**pricing.compute_hourly, **config.compute_hourly},
        database_hourly={**pricing.database_hourly, **config.database_hourly},
        **scalar_overrides,
    )


def estimate_cloud_cost(
    provider: str,
    usage: CloudUsageInput,
    config: CloudPricingConfig | None = None,
) -> CloudCostResult:
    pricing = apply_pricing_overrides(PRICING_BY_PROVIDER[provider], config)
    fx = pricing.currency_rate
    fallbacks: list[FallbackNotice] = []

    compute_rate = _hourly_rate(
        pricing.compute_hourly, usage.compute.instance_type,
        pricing.default_compute_type, pricing.compute_fallback_hourly,
        "compute.instance_type", pricing, fallbacks,
    )
    compute_usd = usage.compute.instances * compute_rate * usage.compute.hours

    storage_usd = (
        usage.storage.gb * pricing.storage_per_gb
        + usage.storage.requests / pricing.storage_requests_unit * pricing.storage_per_request_unit
    )

    database_rate = _hourly_rate(
        pricing.database_hourly, usage.database.instance_type,
        pricing.default_database_type, pricing.database_fallback_hourly,
        "database.instance_type", pricing, fallbacks,
    )
    database_usd = (
        usage.database.instances * database_rate * usage.database.hours
        + usage.database.storage_gb * pricing.database_storage_per_gb
    )

    transfer_usd = usage.data_transfer_gb * pricing.transfer_per_gb

    functions_usd = (
        usage.functions.invocations / 1_000_000 * pricing.functions_per_million
        + usage.functions.gb_seconds * pricing.functions_per_gb_second
    )

    monthly_inr = {
        "compute": compute_usd * fx,
        "storage": storage_usd * fx,
        "database": database_usd * fx,
        "data_transfer": transfer_usd * fx,
        "functions": functions_usd * fx,
    }
    total_monthly = sum(monthly_inr.values())

    return CloudCostResult(
        provider=pricing.provider,
        usd_to_inr=fx,
        line_items=[
            CloudLineItem(service=service, label=pricing.labels[service], monthly_cost=money(cost))
            for service, cost in monthly_inr.items()
        ],
        total_monthly=money(total_monthly),
        total_annual=money(total_monthly * MONTHS_PER_YEAR),
        degraded=bool(fallbacks),
        fallbacks=fallbacks,
    )


def calculate_aws_cost(usage: CloudUsageInput, config: CloudPricingConfig | None = None) -> CloudCostResult:
    return estimate_cloud_cost(AWS_PRICING.provider, usage, config)


def calculate_azure_cost(usage: CloudUsageInput, config: CloudPricingConfig | None = None) -> CloudCostResult:
    return estimate_cloud_cost(AZURE_PRICING.provider, usage, config)


def calculate_gcp_cost(usage: CloudUsageInput, config: CloudPricingConfig | None = None) -> CloudCostResult:
    return estimate_cloud_cost(GCP_PRICING.provider, usage, config)
