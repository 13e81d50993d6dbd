"""
schemas.py — carbon footprint contracts.

All usage figures are monthly except flight hours (per year) and meat meals
(per week). Results are annual kg CO₂.
"""
from __future__ import annotations

import re
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finportal.calculators.common.schemas import FallbackNotice

DEFAULT_PUE = 1.5


class TransportUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    car_km: float = Field(default=0, ge=0)
    fuel_type: Literal["petrol", "diesel", "cng"] = "petrol"
    car_efficiency: float = Field(default=15, gt=0, description="km per litre (or per kg for CNG).")
    bike_km: float = Field(default=0, ge=0)
    public_transport_km: float = Field(default=0, ge=0)
    flight_hours: float = Field(default=0, ge=0, description="Hours flown per year.")


class EnergyUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    electricity_kwh: float = Field(default=0, ge=0)
    lpg_cylinders: float = Field(default=0, ge=0)
    cng_kg: float = Field(default=0, ge=0)


class LifestyleUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    meat_meals_per_week: float = Field(default=0, ge=0)
    shopping_amount: float = Field(default=0, ge=0, description="INR spent per month.")


class CloudFootprintUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    region: str = "ap-south-1"
    instance_size: str = "medium"
    compute_instances: int = Field(default=0, ge=0)
    compute_hours: float = Field(default=730, ge=0, le=744)
    database_instances: int = Field(default=0, ge=0)
    database_hours: float = Field(default=730, ge=0, le=744)
    storage_gb: float = Field(default=0, ge=0)
    data_transfer_gb: float = Field(default=0, ge=0)
    carbon_intensity: Optional[float] = Field(
        default=None, ge=0, description="kg CO₂/kWh; overrides any region lookup.",
    )


class CarbonFootprintInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    transport: TransportUsage = TransportUsage()
    energy: EnergyUsage = EnergyUsage()
    lifestyle: LifestyleUsage = LifestyleUsage()
    cloud: Optional[CloudFootprintUsage] = None
    pue: float = Field(default=DEFAULT_PUE, ge=1)


class CloudRegion(BaseModel):
    """A cloud region entry as published by the content store."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    region_code: str = Field(..., alias="regionCode")
    region_name: Optional[str] = Field(default=None, alias="regionName")
    provider: Optional[str] = None
    carbon_intensity: float = Field(..., ge=0, alias="carbonIntensity")


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class CarbonConfig(BaseModel):
    """
    Content-store CARBON_FOOTPRINT overrides. emissionFactors is a partial
    table: keys it omits keep the built-in factor. camelCase keys
    (publicTransport, meatMeal) are accepted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    cloud_regions: List[CloudRegion] = Field(default_factory=list, alias="cloudRegions")
    co2_per_tree_per_year: Optional[float] = Field(default=None, gt=0, alias="co2PerTreePerYear")
    emission_factors: Dict[str, float] = Field(default_factory=dict, alias="emissionFactors")

    @field_validator("emission_factors", mode="before")
    @classmethod
    def normalise_factor_keys(cls, v):
        if not isinstance(v, dict):
            return v
        return {_CAMEL_BOUNDARY.sub("_", str(key)).lower(): value for key, value in v.items()}

    @field_validator("emission_factors")
    @classmethod
    def factors_not_negative(cls, v: Dict[str, float]) -> Dict[str, float]:
        negative = sorted(key for key, value in v.items() if value < 0)
        if negative:
            raise ValueError(f"emission factors must be >= 0: {', '.join(negative)}")
        return v


class CarbonBreakdown(BaseModel):
    transport: float
    energy: float
    lifestyle: float
    cloud: float


class CarbonFootprintResult(BaseModel):
    breakdown: CarbonBreakdown
    total_annual_co2: float                  # kg
    total_annual_co2_tons: float
    trees_needed: int
    carbon_intensity_used: Optional[float] = None   # None when no cloud block
    degraded: bool = False
    fallbacks: List[FallbackNotice] = []


__all__ = [
    "DEFAULT_PUE",
    "TransportUsage",
    "EnergyUsage",
    "LifestyleUsage",
    "CloudFootprintUsage",
    "CarbonFootprintInput",
    "CloudRegion",
    "CarbonConfig",
    "CarbonBreakdown",
    "CarbonFootprintResult",
]
