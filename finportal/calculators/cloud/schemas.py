"""
schemas.py — cloud cost estimator contracts (AWS, Azure, GCP).

One usage model serves all three providers; the provider's own names
(EC2/VM/Compute Engine, S3/Blob/Cloud Storage, ...) are only labels on the
result line items.
"""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finportal.calculators.common.schemas import FallbackNotice

HOURS_PER_MONTH = 730
MAX_HOURS_PER_MONTH = 744            # 31 days × 24

Provider = Literal["aws", "azure", "gcp"]


class ComputeUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    instances: int = Field(default=0, ge=0)
    instance_type: Optional[str] = Field(default=None, description="None means the provider default.")
    hours: float = Field(default=HOURS_PER_MONTH, ge=0, le=MAX_HOURS_PER_MONTH)


class StorageUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    gb: float = Field(default=0, ge=0)
    requests: float = Field(default=0, ge=0, description="Requests / transactions / operations per month.")


class DatabaseUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    instances: int = Field(default=0, ge=0)
    instance_type: Optional[str] = None
    hours: float = Field(default=HOURS_PER_MONTH, ge=0, le=MAX_HOURS_PER_MONTH)
    storage_gb: float = Field(default=0, ge=0)


class FunctionUsage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    invocations: float = Field(default=0, ge=0)
    gb_seconds: float = Field(default=0, ge=0)


class CloudUsageInput(BaseModel):
    """Monthly usage. Every block defaults to zero usage."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    compute: ComputeUsage = ComputeUsage()
    storage: StorageUsage = StorageUsage()
    database: DatabaseUsage = DatabaseUsage()
    data_transfer_gb: float = Field(default=0, ge=0)
    functions: FunctionUsage = FunctionUsage()


class CloudPricingConfig(BaseModel):
    """
    Price-table overrides, USD. Hourly tables are merged over the provider's
    built-in table; every other field replaces the built-in unit rate.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    compute_hourly: Dict[str, float] = Field(default_factory=dict, alias="computeHourly")
    database_hourly: Dict[str, float] = Field(default_factory=dict, alias="databaseHourly")
    storage_per_gb: Optional[float] = Field(default=None, ge=0, alias="storagePerGb")
    storage_per_request_unit: Optional[float] = Field(default=None, ge=0, alias="storagePerRequestUnit")
    database_storage_per_gb: Optional[float] = Field(default=None, ge=0, alias="databaseStoragePerGb")
    transfer_per_gb: Optional[float] = Field(default=None, ge=0, alias="transferPerGb")
    functions_per_million: Optional[float] = Field(default=None, ge=0, alias="functionsPerMillion")
    functions_per_gb_second: Optional[float] = Field(default=None, ge=0, alias="functionsPerGbSecond")
    usd_to_inr: Optional[float] = Field(default=None, gt=0, alias="usdToInr")

    @field_validator("compute_hourly", "database_hourly")
    @classmethod
    def rates_not_negative(cls, v: Dict[str, float]) -> Dict[str, float]:
        negative = sorted(name for name, rate in v.items() if rate < 0)
        if negative:
            raise ValueError(f"hourly rates must be >= 0: {', '.join(negative)}")
        return v


class CloudLineItem(BaseModel):
    service: Literal["compute", "storage", "database", "data_transfer", "functions"]
    label: str                       # provider's product name, e.g. "EC2 Compute"
    monthly_cost: float


class CloudCostResult(BaseModel):
    provider: Provider
    currency: str = "INR"
    usd_to_inr: float
    line_items: List[CloudLineItem]
    total_monthly: float
    total_annual: float              # total_monthly × 12
    degraded: bool = False
    fallbacks: List[FallbackNotice] = []


__all__ = [
    "HOURS_PER_MONTH",
    "Provider",
    "ComputeUsage",
    "StorageUsage",
    "DatabaseUsage",
    "FunctionUsage",
    "CloudUsageInput",
    "CloudPricingConfig",
    "CloudLineItem",
    "CloudCostResult",
]
