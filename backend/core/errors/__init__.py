"""Result-based error handling.

Components:
- Result[T, E]: ``Ok(value)`` or ``Err(AppError)``
- AppError: typed error with code, message, metadata and context
- ErrorCode: error code taxonomy mapped to HTTP statuses
- builders: one constructor per failure kind

Usage:
    from core.errors import Ok, Result, AppError, not_found

    async def load_dictionary(db, dictionary_id) -> Result[UserDictionary, AppError]:
        row = await db.get(UserDictionary, dictionary_id)
        if row is None:
            return not_found("Dictionary", dictionary_id, origin="dictionaries")
        return Ok(row)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    validation_error,
    required_field,
    invalid_format,
    invalid_choice,
    db_error,
    not_found,
    duplicate_key,
    foreign_key_violation,
    db_connection_failed,
    transaction_failed,
    file_read_error,
    file_write_error,
    internal_error,
)

from .boundaries import (
    ErrorMapper,
    DatabaseErrorMapper,
    ValidationErrorMapper,
    map_errors,
    map_db_errors,
)

from .handlers import (
    AppErrorException,
    register_error_handlers,
    result_to_response,
    raise_result,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "validation_error",
    "required_field",
    "invalid_format",
    "invalid_choice",
    "db_error",
    "not_found",
    "duplicate_key",
    "foreign_key_violation",
    "db_connection_failed",
    "transaction_failed",
    "file_read_error",
    "file_write_error",
    "internal_error",
    "ErrorMapper",
    "DatabaseErrorMapper",
    "ValidationErrorMapper",
    "map_errors",
    "map_db_errors",
    "AppErrorException",
    "register_error_handlers",
    "result_to_response",
    "raise_result",
]
