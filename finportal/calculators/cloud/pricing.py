"""
Static on-demand price tables, USD, one region per provider.
Approximations for planning, not live prices.
"""
from __future__ import annotations

from dataclasses import dataclass, field

USD_TO_INR = 83.0


@dataclass(frozen=True)
class ProviderPricing:
    provider: str
    labels: dict[str, str]
    compute_hourly: dict[str, float]
    default_compute_type: str
    compute_fallback_hourly: float
    database_hourly: dict[str, float]
    default_database_type: str
    database_fallback_hourly: float
    storage_per_gb: float
    storage_requests_unit: int           # requests priced per this many
    storage_per_request_unit: float
    database_storage_per_gb: float
    transfer_per_gb: float
    functions_per_million: float
    functions_per_gb_second: float
    currency_rate: float = field(default=USD_TO_INR)


AWS_PRICING = ProviderPricing(
    provider="aws",
    labels={
        "compute": "EC2 Compute",
        "storage": "S3 Storage",
        "database": "RDS Database",
        "data_transfer": "Data Transfer",
        "functions": "Lambda",
    },
    compute_hourly={
        "t3.micro": 0.0104,
        "t3.small": 0.0208,
        "t3.medium": 0.0416,
        "t3.large": 0.0832,
        "m5.large": 0.096,
        "m5.xlarge": 0.192,
        "c5.large": 0.085,
        "c5.xlarge": 0.17,
    },
    default_compute_type="t3.medium",
    compute_fallback_hourly=0.0416,
    database_hourly={
        "db.t3.micro": 0.017,
        "db.t3.small": 0.034,
        "db.t3.medium": 0.068,
        "db.t3.large": 0.136,
        "db.m5.large": 0.171,
        "db.m5.xlarge": 0.342,
    },
    default_database_type="db.t3.medium",
    database_fallback_hourly=0.068,
    storage_per_gb=0.023,
    storage_requests_unit=1_000,
    storage_per_request_unit=0.0004,
    database_storage_per_gb=0.115,
    transfer_per_gb=0.09,
    functions_per_million=0.20,
    functions_per_gb_second=0.0000166667,
)

AZURE_PRICING = ProviderPricing(
    provider="azure",
    labels={
        "compute": "Virtual Machines",
        "storage": "Blob Storage",
        "database": "SQL Database",
        "data_transfer": "Data Transfer",
        "functions": "Azure Functions",
    },
    compute_hourly={
        "Standard_B1s": 0.0104,
        "Standard_B1ms": 0.0208,
        "Standard_B2s": 0.0416,
        "Standard_B2ms": 0.0832,
        "Standard_D2s_v3": 0.096,
        "Standard_D4s_v3": 0.192,
        "Standard_F2s_v2": 0.085,
        "Standard_F4s_v2": 0.17,
    },
    default_compute_type="Standard_B2s",
    compute_fallback_hourly=0.0416,
    database_hourly={
        "S0": 0.015,
        "S1": 0.030,
        "S2": 0.060,
        "S3": 0.120,
        "P1": 0.465,
        "P2": 0.930,
    },
    default_database_type="S2",
    database_fallback_hourly=0.060,
    storage_per_gb=0.018,
    storage_requests_unit=10_000,
    storage_per_request_unit=0.004,
    database_storage_per_gb=0.115,
    transfer_per_gb=0.087,
    functions_per_million=0.20,
    functions_per_gb_second=0.000016,
)

GCP_PRICING = ProviderPricing(
    provider="gcp",
    labels={
        "compute": "Compute Engine",
        "storage": "Cloud Storage",
        "database": "Cloud SQL",
        "data_transfer": "Data Transfer",
        "functions": "Cloud Functions",
    },
    compute_hourly={
        "f1-micro": 0.0076,
        "g1-small": 0.0257,
        "n1-standard-1": 0.0475,
        "n1-standard-2": 0.0950,
        "n1-standard-4": 0.19,
        "n1-highmem-2": 0.1184,
        "n1-highmem-4": 0.2368,
    },
    default_compute_type="n1-standard-1",
    compute_fallback_hourly=0.0475,
    database_hourly={
        "db-f1-micro": 0.015,
        "db-g1-small": 0.030,
        "db-n1-standard-1": 0.060,
        "db-n1-standard-2": 0.120,
        "db-n1-standard-4": 0.240,
    },
    default_database_type="db-n1-standard-1",
    database_fallback_hourly=0.060,
    storage_per_gb=0.020,
    storage_requests_unit=10_000,
    storage_per_request_unit=0.005,
    database_storage_per_gb=0.17,
    transfer_per_gb=0.12,
    functions_per_million=0.40,
    functions_per_gb_second=0.0000025,
)

PRICING_BY_PROVIDER: dict[str, ProviderPricing] = {
    p.provider: p for p in (AWS_PRICING, AZURE_PRICING, GCP_PRICING)
}
