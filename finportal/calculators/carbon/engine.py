"""
Carbon footprint engine — additive emission-factor model.

Annual kg CO₂ = transport + energy + lifestyle + cloud. Cloud energy is
scaled by the data-centre PUE and the grid intensity of the region.
"""
from __future__ import annotations

import logging
import math

from finportal.calculators.carbon.schemas import (
    CarbonBreakdown,
    CarbonConfig,
    CarbonFootprintInput,
    CarbonFootprintResult,
    CloudFootprintUsage,
)
from finportal.calculators.common.schemas import FallbackNotice, money

logger = logging.getLogger(__name__)

# kg CO₂ per unit
EMISSION_FACTORS: dict[str, float] = {
    "petrol": 2.31,          # per litre
    "diesel": 2.68,          # per litre
    "cng": 1.5,              # per kg
    "lpg": 1.5,              # per kg of LPG
    "electricity": 0.82,     # per kWh, India grid
    "public_transport": 0.05,  # per km
    "bike": 0.12,            # per km
    "flight": 90.0,          # per flight hour
    "meat_meal": 3.5,        # per meal
    "shopping": 0.001,       # per INR
}

LPG_CYLINDER_KG = 14.2
CO2_PER_TREE_PER_YEAR = 20.0

# kg CO₂ per kWh by region code
REGION_CARBON_INTENSITY: dict[str, float] = {
    "ap-south-1": 0.82,
    "ap-southeast-1": 0.50,
    "us-east-1": 0.40,
    "us-west-2": 0.30,
    "eu-west-1": 0.30,
    "central-india": 0.82,
    "east-us": 0.40,
    "west-europe": 0.30,
    "asia-south1": 0.82,
    "us-central1": 0.40,
    "europe-west1": 0.30,
}
DEFAULT_CARBON_INTENSITY = 0.82

# kWh drawn per instance-hour
INSTANCE_POWER_KWH: dict[str, float] = {
    "small": 0.05,
    "medium": 0.10,
    "large": 0.20,
    "xlarge": 0.40,
}
DEFAULT_INSTANCE_POWER_KWH = 0.10

STORAGE_KWH_PER_GB_MONTH = 0.0001
TRANSFER_KWH_PER_GB = 0.0005

MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52


def _transport_co2(data: CarbonFootprintInput, factors: dict[str, float]) -> float:
    t = data.transport
    litres = t.car_km / t.car_efficiency
    return (
        litres * factors[t.fuel_type] * MONTHS_PER_YEAR
        + t.bike_km * factors["bike"] * MONTHS_PER_YEAR
        + t.public_transport_km * factors["public_transport"] * MONTHS_PER_YEAR
        + t.flight_hours * factors["flight"]
    )


def _energy_co2(data: CarbonFootprintInput, factors: dict[str, float]) -> float:
    e = data.energy
    return (
        e.electricity_kwh * factors["electricity"] * MONTHS_PER_YEAR
        + e.lpg_cylinders * LPG_CYLINDER_KG * factors["lpg"] * MONTHS_PER_YEAR
        + e.cng_kg * factors["cng"] * MONTHS_PER_YEAR
    )


def _lifestyle_co2(data: CarbonFootprintInput, factors: dict[str, float]) -> float:
    life = data.lifestyle
    return (
        life.meat_meals_per_week * factors["meat_meal"] * WEEKS_PER_YEAR
        + life.shopping_amount * factors["shopping"] * MONTHS_PER_YEAR
    )


def resolve_carbon_intensity(
    cloud: CloudFootprintUsage,
    config: CarbonConfig,
    fallbacks: list[FallbackNotice],
) -> float:
    """Explicit input, then the content-store region list, then the built-in table, then 0.82."""
    if cloud.carbon_intensity is not None:
        return cloud.carbon_intensity
    for region in config.cloud_regions:
        if region.region_code == cloud.region:
            return region.carbon_intensity
    if cloud.region in REGION_CARBON_INTENSITY:
        return REGION_CARBON_INTENSITY[cloud.region]

    logger.warning(
        "Unknown cloud region %r, using default carbon intensity %.2f kg/kWh",
        cloud.region, DEFAULT_CARBON_INTENSITY,
    )
    fallbacks.append(FallbackNotice(
        field="cloud.region",
        requested=cloud.region,
        used=DEFAULT_CARBON_INTENSITY,
        reason="region not found in content-store or built-in intensity tables",
    ))
    return DEFAULT_CARBON_INTENSITY


def _instance_power(cloud: CloudFootprintUsage, fallbacks: list[FallbackNotice]) -> float:
    if cloud.instance_size in INSTANCE_POWER_KWH:
        return INSTANCE_POWER_KWH[cloud.instance_size]
    logger.warning(
        "Unknown instance size %r, using %.2f kWh/h",
        cloud.instance_size, DEFAULT_INSTANCE_POWER_KWH,
    )
    fallbacks.append(FallbackNotice(
        field="cloud.instance_size",
        requested=cloud.instance_size,
        used=DEFAULT_INSTANCE_POWER_KWH,
        reason="unknown instance size",
    ))
    return DEFAULT_INSTANCE_POWER_KWH


def _cloud_co2(
    cloud: CloudFootprintUsage,
    intensity: float,
    pue: float,
    fallbacks: list[FallbackNotice],
) -> float:
    power = _instance_power(cloud, fallbacks)
    monthly_kwh = (
        cloud.compute_instances * power * cloud.compute_hours
        + cloud.database_instances * power * cloud.database_hours
        + cloud.storage_gb * STORAGE_KWH_PER_GB_MONTH
        + cloud.data_transfer_gb * TRANSFER_KWH_PER_GB
    )
    return monthly_kwh * MONTHS_PER_YEAR * intensity * pue


def trees_to_offset(total_annual_co2: float, co2_per_tree: float = CO2_PER_TREE_PER_YEAR) -> int:
    if total_annual_co2 <= 0:
        return 0
    return math.ceil(total_annual_co2 / co2_per_tree)


def calculate_carbon_footprint(
    data: CarbonFootprintInput,
    config: CarbonConfig | None = None,
) -> CarbonFootprintResult:
    config = config or CarbonConfig()
    fallbacks: list[FallbackNotice] = []
    factors = {**EMISSION_FACTORS, **config.emission_factors}

    transport = _transport_co2(data, factors)
    energy = _energy_co2(data, factors)
    lifestyle = _lifestyle_co2(data, factors)

    cloud = 0.0
    intensity = None
    if data.cloud is not None:
        intensity = resolve_carbon_intensity(data.cloud, config, fallbacks)
        cloud = _cloud_co2(data.cloud, intensity, data.pue, fallbacks)

    total = transport + energy + lifestyle + cloud
    co2_per_tree = config.co2_per_tree_per_year or CO2_PER_TREE_PER_YEAR

    return CarbonFootprintResult(
        breakdown=CarbonBreakdown(
            transport=money(transport),
            energy=money(energy),
            lifestyle=money(lifestyle),
            cloud=money(cloud),
        ),
        total_annual_co2=money(total),
        total_annual_co2_tons=round(total / 1000, 3),
        trees_needed=trees_to_offset(total, co2_per_tree),
        carbon_intensity_used=intensity,
        degraded=bool(fallbacks),
        fallbacks=fallbacks,
    )
