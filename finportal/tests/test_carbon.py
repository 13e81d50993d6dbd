"""
Carbon footprint — emission factors, cloud energy, tree offsets, region fallback.
"""
from __future__ import annotations

import logging

import pytest

from finportal.calculators.carbon.engine import (
    DEFAULT_CARBON_INTENSITY,
    calculate_carbon_footprint,
    trees_to_offset,
)
from finportal.calculators.carbon.schemas import CarbonConfig, CarbonFootprintInput


def _footprint(payload: dict, config: CarbonConfig | None = None):
    return calculate_carbon_footprint(CarbonFootprintInput.model_validate(payload), config)


def test_petrol_car_scenario() -> None:
    # 1000 km / 15 km/l × 2.31 kg/l × 12 months
    result = _footprint({"transport": {"car_km": 1_000, "fuel_type": "petrol", "car_efficiency": 15}})
    assert result.breakdown.transport == pytest.approx(1_848.0, abs=0.01)
    assert result.total_annual_co2 == pytest.approx(1_848.0, abs=0.01)
    assert result.total_annual_co2_tons == pytest.approx(1.848)
    assert result.trees_needed == 93
    assert result.carbon_intensity_used is None


def test_trees_round_up() -> None:
    assert trees_to_offset(2_216.8) == 111
    assert trees_to_offset(20.0) == 1
    assert trees_to_offset(20.01) == 2
    assert trees_to_offset(0) == 0


def test_zero_inputs_need_no_trees() -> None:
    result = _footprint({})
    assert result.total_annual_co2 == 0
    assert result.trees_needed == 0
    assert result.degraded is False


@pytest.mark.parametrize(
    "payload,section,expected",
    [
        ({"energy": {"electricity_kwh": 300}}, "energy", 2_952.0),
        ({"energy": {"lpg_cylinders": 1}}, "energy", 255.6),
        ({"lifestyle": {"meat_meals_per_week": 7}}, "lifestyle", 1_274.0),
        ({"lifestyle": {"shopping_amount": 5_000}}, "lifestyle", 60.0),
        ({"transport": {"flight_hours": 10}}, "transport", 900.0),
        ({"transport": {"car_km": 500, "fuel_type": "diesel", "car_efficiency": 20}}, "transport", 804.0),
    ],
)
def test_single_source_emissions(payload: dict, section: str, expected: float) -> None:
    result = _footprint(payload)
    assert getattr(result.breakdown, section) == pytest.approx(expected, abs=0.01)


def test_cloud_emissions_scale_with_pue_and_region() -> None:
    # 2 × 0.10 kWh × 730 h × 12 × 0.40 kg/kWh × 1.5
    result = _footprint({"cloud": {"region": "us-east-1", "instance_size": "medium", "compute_instances": 2}})
    assert result.breakdown.cloud == pytest.approx(1_051.2, abs=0.01)
    assert result.carbon_intensity_used == 0.40


def test_unknown_region_uses_default_intensity(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = _footprint({"cloud": {"region": "mars-north-1", "instance_size": "small", "compute_instances": 1}})

    assert result.carbon_intensity_used == DEFAULT_CARBON_INTENSITY
    assert result.degraded is True
    assert result.fallbacks[0].field == "cloud.region"
    # 0.05 × 730 × 12 × 0.82 × 1.5
    assert result.breakdown.cloud == pytest.approx(538.74, abs=0.01)
    assert "mars-north-1" in caplog.text


def test_content_store_region_beats_builtin_table() -> None:
    config = CarbonConfig.model_validate({
        "cloudRegions": [
            {"regionCode": "us-east-1", "regionName": "N. Virginia", "provider": "aws", "carbonIntensity": 0.2},
        ],
    })
    result = _footprint({"cloud": {"region": "us-east-1", "compute_instances": 1}}, config)
    assert result.carbon_intensity_used == 0.2
    assert result.degraded is False


def test_explicit_intensity_beats_everything() -> None:
    config = CarbonConfig.model_validate({"cloudRegions": [{"regionCode": "us-east-1", "carbonIntensity": 0.2}]})
    result = _footprint(
        {"cloud": {"region": "us-east-1", "compute_instances": 1, "carbon_intensity": 0.6}},
        config,
    )
    assert result.carbon_intensity_used == 0.6


def test_unknown_instance_size_is_degraded() -> None:
    result = _footprint({"cloud": {"region": "eu-west-1", "instance_size": "gigantic", "compute_instances": 1}})
    assert result.degraded is True
    assert [f.field for f in result.fallbacks] == ["cloud.instance_size"]


def test_tree_absorption_configurable() -> None:
    config = CarbonConfig.model_validate({"co2PerTreePerYear": 10})
    result = _footprint({"energy": {"electricity_kwh": 100}}, config)
    # 100 × 0.82 × 12 = 984 → 98.4 trees
    assert result.trees_needed == 99


def test_unknown_fuel_rejected() -> None:
    with pytest.raises(ValueError):
        CarbonFootprintInput.model_validate({"transport": {"car_km": 10, "fuel_type": "hydrogen"}})


def test_emission_factor_override_replaces_builtin() -> None:
    config = CarbonConfig.model_validate({"emissionFactors": {"petrol": 3.0}})
    result = _footprint(
        {
            "transport": {"car_km": 1_000, "fuel_type": "petrol", "car_efficiency": 15},
            "energy": {"electricity_kwh": 100},
        },
        config,
    )
    # 1000 / 15 × 3.0 × 12; electricity keeps the built-in 0.82
    assert result.breakdown.transport == pytest.approx(2_400.0, abs=0.01)
    assert result.breakdown.energy == pytest.approx(984.0, abs=0.01)


def test_emission_factor_camel_case_keys() -> None:
    config = CarbonConfig.model_validate({"emissionFactors": {"publicTransport": 0.1, "meatMeal": 5}})
    assert config.emission_factors == {"public_transport": 0.1, "meat_meal": 5}
    result = _footprint(
        {"transport": {"public_transport_km": 100}, "lifestyle": {"meat_meals_per_week": 1}},
        config,
    )
    assert result.breakdown.transport == pytest.approx(120.0, abs=0.01)    # 100 × 0.1 × 12
    assert result.breakdown.lifestyle == pytest.approx(260.0, abs=0.01)    # 1 × 5 × 52


def test_negative_emission_factor_rejected() -> None:
    with pytest.raises(ValueError, match="diesel"):
        CarbonConfig.model_validate({"emissionFactors": {"diesel": -1}})
