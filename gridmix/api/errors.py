"""Exception handlers mapping service errors to HTTP responses."""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gridmix.exceptions import (
    DataInconsistencyError,
    FetchError,
    InvalidArgumentError,
)
from gridmix.schemas.energy import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status: int, error: str, message: str) -> JSONResponse:
    """Build a JSON error response with the standard body."""
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status,
        error=error,
        message=message,
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", by_alias=True),
    )


async def handle_invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.warning("Validation error: %s", exc)
    return error_response(400, "Validation Failed", str(exc))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = ", ".join(
        f"Invalid value {err.get('input')!r} for parameter '{err['loc'][-1]}'"
        for err in exc.errors()
    )
    logger.warning("Type mismatch: %s", message)
    return error_response(400, "Invalid Parameter", message)


async def handle_fetch_error(request: Request, exc: FetchError) -> JSONResponse:
    logger.error("External API error: %s", exc)
    return error_response(503, "External API Unavailable", str(exc))


async def handle_data_inconsistency(request: Request, exc: DataInconsistencyError) -> JSONResponse:
    logger.error("Inconsistent upstream data: %s", exc)
    return error_response(502, "Inconsistent Upstream Data", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to an application."""
    app.add_exception_handler(InvalidArgumentError, handle_invalid_argument)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(FetchError, handle_fetch_error)
    app.add_exception_handler(DataInconsistencyError, handle_data_inconsistency)
