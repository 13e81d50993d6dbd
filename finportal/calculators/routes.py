"""
Calculator HTTP routes — GET  /api/calculators
                          POST /api/calculate/{kind}

Thin async wrappers around the synchronous registry. Validation errors and
engine input errors propagate to the handlers registered in main.py.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from finportal.calculators.common.schemas import ErrorResponse
from finportal.calculators.registry import (
    UnknownCalculatorError,
    calculate,
    list_calculators,
)

router = APIRouter(prefix="/api", tags=["calculators"])
logger = logging.getLogger(__name__)


class CalculateRequest(BaseModel):
    """
    inputs: user-facing values for the calculator (snake_case).
    config: optional content-store configuration (camelCase accepted).
    """
    model_config = ConfigDict(extra="forbid")

    inputs: Dict[str, Any] = Field(default_factory=dict)
    config: Optional[Dict[str, Any]] = None


@router.get("/calculators")
async def get_calculators() -> dict:
    return {"calculators": list_calculators()}


@router.post(
    "/calculate/{kind}",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown calculator kind"},
        422: {"model": ErrorResponse, "description": "Invalid inputs or config"},
    },
)
async def run_calculator(kind: str, request: CalculateRequest) -> JSONResponse:
    """
    Run one calculator.

    Returns:
      200: the calculator's result model
      404: NOT_FOUND if kind is not registered
      422: VALIDATION_ERROR with one detail per offending field
    """
    try:
        result = calculate(kind, request.inputs, request.config)
    except UnknownCalculatorError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    logger.info("Calculated %s", kind)
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))
