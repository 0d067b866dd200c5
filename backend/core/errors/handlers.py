"""FastAPI exception handlers.

Every failure leaving the API uses the AppError JSON envelope, whether it
started as an AppErrorException, an HTTPException, a request validation
error or an unhandled exception.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .boundaries import ValidationErrorMapper
from .types import AppError, ErrorCode, ErrorContext

log = get_logger("errors.handlers")

_validation_mapper = ValidationErrorMapper("request_validation")


class AppErrorException(Exception):
    """Raise an AppError from code that does not return Results."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def result_to_response(error: AppError, status_code: int | None = None) -> JSONResponse:
    """Convert AppError to a JSONResponse, logging it on the way out."""
    status_code = status_code or error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        error_code_num=error.code.value,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    error = exc.error.with_context(
        request_id=request.headers.get("X-Request-ID"),
        correlation_id=request.headers.get("X-Correlation-ID"),
    )
    return result_to_response(error)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    status_code = exc.status_code
    code_map = {
        400: ErrorCode.E2000_VALIDATION_GENERIC,
        404: ErrorCode.E4010_NOT_FOUND,
        409: ErrorCode.E5002_STATE_CONFLICT,
        422: ErrorCode.E2000_VALIDATION_GENERIC,
    }
    code = code_map.get(status_code, ErrorCode.E9001_UNEXPECTED_ERROR)

    error = AppError(
        code=code,
        message=str(exc.detail) if exc.detail else f"HTTP {status_code}",
        context=ErrorContext(origin="http"),
    ).with_context(correlation_id=request.headers.get("X-Correlation-ID"))

    return result_to_response(error, status_code=status_code)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Pydantic body/query errors become a single 400 with per-field details."""
    details = _validation_mapper.map_pydantic_errors(list(exc.errors()))
    first = details[0] if details else None

    error = AppError(
        code=first.code if first else ErrorCode.E2000_VALIDATION_GENERIC,
        message="Request validation failed",
        context=ErrorContext(origin="request_validation"),
        metadata={"errors": [{"message": d.message, **d.metadata} for d in details]},
    ).with_context(
        correlation_id=request.headers.get("X-Correlation-ID"),
        request_id=request.headers.get("X-Request-ID"),
    )
    return result_to_response(error)


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all: generic 500, full traceback in the logs."""
    error = AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message="An unexpected error occurred",
        context=ErrorContext(origin="unhandled"),
        cause=exc,
    ).with_context(correlation_id=request.headers.get("X-Correlation-ID"))

    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        correlation_id=error.context.correlation_id,
    )
    return result_to_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the app."""
    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_result(result) -> None:
    """Raise if the Result is Err, otherwise return.

    Usage:
        result = await load_dictionary(db, dictionary_id)
        raise_result(result)
        dictionary = result.unwrap()
    """
    if result.is_err():
        raise AppErrorException(result.unwrap_err())
