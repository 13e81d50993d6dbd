"""
main.py — FinPortal calculation API.

Run: uvicorn finportal.main:app --reload --port 8000

Every error leaves the service in one envelope:
    {"error": {"code": "...", "message": "...", "details": [{"field": ..., "issue": ...}]}}
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from finportal.calculators.common.schemas import (
    CalculationInputError,
    ErrorBody,
    ErrorDetail,
    ErrorResponse,
)
from finportal.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

# HTTP status → envelope code
STATUS_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Calculators hold no resources; nothing to open or close.
    logger.info(
        "FinPortal v%s up (debug=%s, cors=%s)",
        settings.app_version, settings.debug, settings.cors_origins_list,
    )
    yield
    logger.info("FinPortal stopped")


app = FastAPI(
    title="FinPortal Calculation API",
    version=settings.app_version,
    description=(
        "Deterministic financial calculators: loans, retirement, goals, "
        "income tax (Old vs New regime), cloud cost, carbon footprint, "
        "credit-card rewards and currency conversion."
    ),
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Envelope helpers
# ---------------------------------------------------------------------------
def error_response(
    status_code: int,
    message: str,
    details: Optional[list[ErrorDetail]] = None,
) -> JSONResponse:
    envelope = ErrorResponse(error=ErrorBody(
        code=STATUS_CODES.get(status_code, f"HTTP_{status_code}"),
        message=message,
        details=details or [],
    ))
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))


def _field_details(errors: Iterable[dict[str, Any]], drop: tuple[str, ...] = ()) -> list[ErrorDetail]:
    """pydantic error list → one ErrorDetail per violation, loc joined with dots."""
    details = []
    for error in errors:
        path = ".".join(str(part) for part in error["loc"] if part not in drop)
        details.append(ErrorDetail(field=path or None, issue=error["msg"]))
    return details


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """The {inputs, config} envelope itself is malformed."""
    return error_response(422, "Request validation failed", _field_details(exc.errors(), drop=("body",)))


@app.exception_handler(ValidationError)
async def on_model_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Calculator inputs or config rejected by their model; all violations reported together."""
    return error_response(422, f"Invalid {exc.title} payload", _field_details(exc.errors()))


@app.exception_handler(CalculationInputError)
async def on_calculation_input_error(request: Request, exc: CalculationInputError) -> JSONResponse:
    details = [ErrorDetail(**d) for d in exc.to_details()]
    return error_response(422, str(exc), details)


@app.exception_handler(ValueError)
async def on_value_error(request: Request, exc: ValueError) -> JSONResponse:
    return error_response(422, str(exc))


@app.exception_handler(StarletteHTTPException)
async def on_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def on_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort. The traceback is only logged; the client sees the exception
    type and message only when DEBUG is on.
    """
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=True)
    if not settings.debug:
        return error_response(500, "An unexpected error occurred")
    return error_response(
        500,
        "An unexpected error occurred (debug details included)",
        [ErrorDetail(issue=f"{type(exc).__name__}: {exc}")],
    )


@app.get("/api/health", tags=["System"])
async def health_check() -> dict:
    return {
        "status": "ok",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Routers are mounted after the handlers so their errors use the envelope.
from finportal.calculators.routes import router as calculators_router  # noqa: E402

app.include_router(calculators_router)
