"""
schemas.py — currency converter contracts.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CurrencyInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(..., ge=0)
    from_currency: str = Field(default="INR", min_length=3, max_length=3)
    to_currency: str = Field(default="USD", min_length=3, max_length=3)

    @field_validator("from_currency", "to_currency", mode="before")
    @classmethod
    def normalise_code(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class CurrencyResult(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    rate: float                      # units of to_currency per 1 from_currency
    converted_amount: float


__all__ = ["CurrencyInput", "CurrencyResult"]
