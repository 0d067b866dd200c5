"""Error builders.

Ergonomic constructors returning ``Err(AppError)`` with the right code.
"""
from pathlib import Path
from uuid import UUID

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    value: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, "value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def required_field(field: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Required field '{field}' is missing",
        code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        field=field,
        origin=origin,
    )


def invalid_format(
    field: str, expected: str, got: str | None = None, origin: str = ""
) -> Err[AppError]:
    msg = f"Invalid value for '{field}': expected {expected}"
    if got:
        msg += f", got '{got}'"
    return validation_error(
        msg,
        code=ErrorCode.E2002_INVALID_FORMAT,
        field=field,
        value=got,
        expected=expected,
        origin=origin,
    )


def invalid_choice(
    field: str, value: str, choices, origin: str = ""
) -> Err[AppError]:
    """Value outside a closed vocabulary (article, case, mode, ...)."""
    return invalid_format(
        field,
        "one of " + ", ".join(sorted(choices)),
        got=str(value),
        origin=origin,
    )


# =============================================================================
# Database Errors (E4xxx)
# =============================================================================

def db_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E4000_DATABASE_GENERIC,
    table: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create database error."""
    meta = {"table": table, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def not_found(
    entity: str,
    id: str | UUID | None = None,
    origin: str = "",
) -> Err[AppError]:
    msg = f"{entity} not found"
    if id:
        msg += f": {id}"
    return db_error(
        msg,
        code=ErrorCode.E4010_NOT_FOUND,
        entity=entity,
        entity_id=str(id) if id else None,
        origin=origin,
    )


def duplicate_key(
    entity: str, field: str, value: str, origin: str = ""
) -> Err[AppError]:
    return db_error(
        f"{entity} with {field}='{value}' already exists",
        code=ErrorCode.E4011_DUPLICATE_KEY,
        entity=entity,
        field=field,
        value=value,
        origin=origin,
    )


def foreign_key_violation(
    entity: str, reference: str, origin: str = ""
) -> Err[AppError]:
    return db_error(
        f"Referenced {reference} does not exist for {entity}",
        code=ErrorCode.E4012_FOREIGN_KEY_VIOLATION,
        entity=entity,
        reference=reference,
        origin=origin,
    )


def db_connection_failed(reason: str = "", origin: str = "") -> Err[AppError]:
    msg = "Database connection failed"
    if reason:
        msg += f": {reason}"
    return db_error(msg, code=ErrorCode.E4001_CONNECTION_FAILED, origin=origin)


def transaction_failed(reason: str = "", origin: str = "") -> Err[AppError]:
    msg = "Database transaction failed"
    if reason:
        msg += f": {reason}"
    return db_error(msg, code=ErrorCode.E4003_TRANSACTION_FAILED, origin=origin)


# =============================================================================
# Resource Errors (E6xxx)
# =============================================================================

def file_read_error(path: Path | str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6002_FILE_READ_ERROR,
        message=f"Could not read {path}: {cause}",
        context=ErrorContext(origin=origin),
        metadata={"path": str(path)},
        cause=cause,
    ))


def file_write_error(path: Path | str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6003_FILE_WRITE_ERROR,
        message=f"Could not write {path}: {cause}",
        context=ErrorContext(origin=origin),
        metadata={"path": str(path)},
        cause=cause,
    ))


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def internal_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create internal/unexpected error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=cause,
    ))
