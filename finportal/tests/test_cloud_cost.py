"""
Cloud cost estimator — AWS, Azure, GCP static unit rates, INR output.
"""
from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from finportal.calculators.cloud.engine import (
    calculate_aws_cost,
    calculate_azure_cost,
    calculate_gcp_cost,
)
from finportal.calculators.cloud.pricing import USD_TO_INR
from finportal.calculators.cloud.schemas import (
    CloudPricingConfig,
    CloudUsageInput,
    ComputeUsage,
)


def _aws_reference_usage() -> CloudUsageInput:
    return CloudUsageInput.model_validate({
        "compute": {"instances": 2, "instance_type": "t3.medium", "hours": 730},
        "storage": {"gb": 100, "requests": 100_000},
        "database": {"instances": 1, "instance_type": "db.t3.medium", "hours": 730, "storage_gb": 100},
        "data_transfer_gb": 100,
        "functions": {"invocations": 1_000_000, "gb_seconds": 100_000},
    })


def test_aws_reference_estimate() -> None:
    """
    compute   2 × 0.0416 × 730           = 60.736
    storage   100 × 0.023 + 100 × 0.0004 =  2.34
    database  0.068 × 730 + 100 × 0.115  = 61.14
    transfer  100 × 0.09                 =  9.00
    functions 0.20 + 100,000 × 0.0000166667 = 1.86667
    total USD 135.08267 × 83
    """
    result = calculate_aws_cost(_aws_reference_usage())
    items = {item.service: item for item in result.line_items}

    assert result.provider == "aws"
    assert result.currency == "INR"
    assert result.usd_to_inr == USD_TO_INR
    assert items["compute"].monthly_cost == pytest.approx(5_041.09, abs=0.01)
    assert items["compute"].label == "EC2 Compute"
    assert items["storage"].monthly_cost == pytest.approx(194.22, abs=0.01)
    assert items["database"].monthly_cost == pytest.approx(5_074.62, abs=0.01)
    assert items["data_transfer"].monthly_cost == pytest.approx(747.0, abs=0.01)
    assert items["functions"].monthly_cost == pytest.approx(154.93, abs=0.01)
    assert result.total_monthly == pytest.approx(11_211.86, abs=0.01)
    assert result.total_annual == pytest.approx(134_542.34, abs=0.01)
    assert result.degraded is False
    assert result.fallbacks == []


def test_line_items_sum_to_total() -> None:
    result = calculate_aws_cost(_aws_reference_usage())
    assert sum(i.monthly_cost for i in result.line_items) == pytest.approx(result.total_monthly, abs=0.05)


def test_empty_usage_costs_nothing() -> None:
    for calculate in (calculate_aws_cost, calculate_azure_cost, calculate_gcp_cost):
        result = calculate(CloudUsageInput())
        assert result.total_monthly == 0
        assert result.degraded is False


def test_unknown_instance_type_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    usage = CloudUsageInput(compute=ComputeUsage(instances=1, instance_type="x9.enormous", hours=100))
    with caplog.at_level(logging.WARNING):
        result = calculate_aws_cost(usage)

    assert result.degraded is True
    assert len(result.fallbacks) == 1
    notice = result.fallbacks[0]
    assert notice.field == "compute.instance_type"
    assert notice.requested == "x9.enormous"
    assert notice.used == 0.0416
    assert result.line_items[0].monthly_cost == pytest.approx(0.0416 * 100 * 83, abs=0.01)
    assert "x9.enormous" in caplog.text


def test_unknown_database_tier_falls_back() -> None:
    usage = CloudUsageInput.model_validate({"database": {"instances": 1, "instance_type": "S9", "hours": 10}})
    result = calculate_azure_cost(usage)
    assert result.degraded is True
    assert result.fallbacks[0].field == "database.instance_type"
    assert result.fallbacks[0].used == 0.060


def test_azure_default_vm_is_b2s() -> None:
    result = calculate_azure_cost(CloudUsageInput(compute=ComputeUsage(instances=1)))
    # 0.0416 × 730 × 83
    assert result.line_items[0].label == "Virtual Machines"
    assert result.total_monthly == pytest.approx(2_520.54, abs=0.01)


def test_gcp_functions_per_million() -> None:
    result = calculate_gcp_cost(CloudUsageInput.model_validate({"functions": {"invocations": 2_000_000}}))
    assert result.total_monthly == pytest.approx(66.4, abs=0.01)


def test_gb_seconds_priced_per_gb_second() -> None:
    result = calculate_gcp_cost(CloudUsageInput.model_validate({"functions": {"gb_seconds": 400_000}}))
    # 400,000 × 0.0000025 = 1.00 USD
    assert result.total_monthly == pytest.approx(83.0, abs=0.01)


@pytest.mark.parametrize(
    "payload",
    [
        {"compute": {"instances": 1, "hours": 745}},
        {"compute": {"instances": -1}},
        {"data_transfer_gb": -5},
        {"storage": {"gb": 10, "tier": "cold"}},
    ],
)
def test_invalid_usage_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        CloudUsageInput.model_validate(payload)


def test_hourly_rate_override_from_config() -> None:
    config = CloudPricingConfig.model_validate({"computeHourly": {"t3.medium": 1.0}})
    usage = CloudUsageInput(compute=ComputeUsage(instances=1, instance_type="t3.medium", hours=100))
    result = calculate_aws_cost(usage, config)
    # 1 × 1.0 × 100 × 83
    assert result.line_items[0].monthly_cost == pytest.approx(8_300.0, abs=0.01)
    assert result.degraded is False


def test_config_adds_instance_type_and_unit_rates() -> None:
    config = CloudPricingConfig.model_validate({
        "computeHourly": {"e2-custom": 0.5},
        "transferPerGb": 0.2,
        "usdToInr": 80,
    })
    usage = CloudUsageInput.model_validate({
        "compute": {"instances": 1, "instance_type": "e2-custom", "hours": 10},
        "data_transfer_gb": 10,
    })
    result = calculate_gcp_cost(usage, config)
    items = {item.service: item.monthly_cost for item in result.line_items}
    assert result.usd_to_inr == 80
    assert result.degraded is False
    assert items["compute"] == pytest.approx(400.0, abs=0.01)         # 0.5 × 10 × 80
    assert items["data_transfer"] == pytest.approx(160.0, abs=0.01)   # 10 × 0.2 × 80


def test_database_override_leaves_other_rates_builtin() -> None:
    config = CloudPricingConfig.model_validate({"databaseHourly": {"db.t3.medium": 0.1}})
    result = calculate_aws_cost(_aws_reference_usage(), config)
    items = {item.service: item.monthly_cost for item in result.line_items}
    # (0.1 × 730 + 100 × 0.115) × 83
    assert items["database"] == pytest.approx(7_013.5, abs=0.01)
    assert items["compute"] == pytest.approx(5_041.09, abs=0.01)
    assert result.usd_to_inr == USD_TO_INR


def test_negative_hourly_override_rejected() -> None:
    with pytest.raises(ValidationError):
        CloudPricingConfig.model_validate({"computeHourly": {"t3.micro": -0.01}})
