"""Error mapping at module boundaries.

The database layer and the request-validation layer each translate their
native exceptions into AppError here, so callers only ever see AppError.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from .types import AppError, ErrorCode, ErrorContext, Err, Ok, Result
from .builders import (
    db_connection_failed,
    duplicate_key,
    foreign_key_violation,
    internal_error,
    transaction_failed,
)

T = TypeVar("T")


class ErrorMapper(ABC, Generic[T]):
    """Base for boundary mappers."""

    @abstractmethod
    def map_error(self, error: AppError) -> AppError:
        pass

    def map_result(self, result: Result[T, AppError]) -> Result[T, AppError]:
        match result:
            case Ok(_):
                return result
            case Err(e):
                return Err(self.map_error(e))


class DatabaseErrorMapper(ErrorMapper[T]):
    """Maps SQLAlchemy exceptions to database error codes."""

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_error(self, error: AppError) -> AppError:
        if 4000 <= error.code.value < 5000:
            return error
        return error.with_context(origin=self.origin)

    def map_exception(self, exc: Exception) -> AppError:
        if isinstance(exc, IntegrityError):
            return self._map_integrity_error(exc)
        if isinstance(exc, OperationalError):
            return self._map_operational_error(exc)
        if isinstance(exc, SQLAlchemyError):
            return transaction_failed(str(exc), origin=self.origin).error

        return internal_error(
            f"Database error: {exc}",
            origin=self.origin,
            cause=exc,
        ).error

    def _map_integrity_error(self, exc: IntegrityError) -> AppError:
        message = str(exc.orig) if exc.orig else str(exc)
        lowered = message.lower()

        if "unique constraint" in lowered or "duplicate key" in lowered:
            return duplicate_key("record", "unknown", "unknown", origin=self.origin).error
        if "foreign key" in lowered:
            return foreign_key_violation("record", "unknown", origin=self.origin).error

        return AppError(
            code=ErrorCode.E4013_CHECK_CONSTRAINT,
            message=f"Constraint violation: {message}",
            context=ErrorContext(origin=self.origin),
            cause=exc,
        )

    def _map_operational_error(self, exc: OperationalError) -> AppError:
        message = str(exc.orig) if exc.orig else str(exc)
        if "unable to open" in message.lower() or "connect" in message.lower():
            return db_connection_failed(message, origin=self.origin).error
        return transaction_failed(message, origin=self.origin).error


class ValidationErrorMapper(ErrorMapper[T]):
    """Maps pydantic request errors to validation error codes."""

    def __init__(self, origin: str = "validation"):
        self.origin = origin

    def map_error(self, error: AppError) -> AppError:
        if 2000 <= error.code.value < 3000:
            return error
        return error.with_context(origin=self.origin)

    def map_pydantic_errors(self, errors: list[dict]) -> list[AppError]:
        result = []
        for err in errors:
            field = ".".join(str(loc) for loc in err.get("loc", []))
            msg = err.get("msg", "Validation error")
            err_type = err.get("type", "value_error")

            code = ErrorCode.E2000_VALIDATION_GENERIC
            if err_type == "missing":
                code = ErrorCode.E2001_REQUIRED_FIELD_MISSING
            elif err_type == "json_invalid":
                code = ErrorCode.E2021_INVALID_JSON
            elif err_type.endswith("_type") or "type_error" in err_type:
                code = ErrorCode.E2004_INVALID_TYPE
            elif err_type in ("literal_error", "enum") or "value_error" in err_type:
                code = ErrorCode.E2002_INVALID_FORMAT

            result.append(AppError(
                code=code,
                message=f"{field}: {msg}",
                context=ErrorContext(origin=self.origin),
                metadata={"field": field, "error_type": err_type},
            ))
        return result


def map_errors(mapper: DatabaseErrorMapper):
    """Decorator mapping errors at an async function boundary.

    Usage:
        @map_db_errors("dictionary_repository")
        async def load_dictionary(session, dictionary_id) -> Result[..., AppError]:
            ...
    """
    def decorator(fn: Callable[..., Awaitable[Result[T, AppError]]]):
        async def wrapper(*args, **kwargs) -> Result[T, AppError]:
            try:
                result = await fn(*args, **kwargs)
            except SQLAlchemyError as e:
                return Err(mapper.map_exception(e))
            return mapper.map_result(result)
        wrapper.__name__ = fn.__name__
        wrapper.__doc__ = fn.__doc__
        return wrapper
    return decorator


def map_db_errors(origin: str = "database"):
    return map_errors(DatabaseErrorMapper(origin))
