"""
config.py — FinPortal service settings, read from the environment or `.env`.

    from finportal.config import settings

Variables are prefixed FINPORTAL_ (FINPORTAL_DEBUG=true, FINPORTAL_CORS_ORIGINS=...).
Calculator configuration (slabs, price tables, ...) is not a setting: it
arrives per request as typed models.
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FINPORTAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Comma-separated frontend origins allowed by CORS
    cors_origins: str = "http://localhost:5173,http://localhost:8080"

    debug: bool = False
    app_version: str = "0.1.0"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
