"""Monadic Error Handling System

Type-safe error handling for boundary operations, inspired by Haskell's
Either monad and Rust's Result type.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction

Usage:
    from core.errors import Ok, Err, Result, AppError, file_not_found

    def read_lexicon(path: Path) -> Result[dict, AppError]:
        if not path.exists():
            return file_not_found(path, origin="lexicon")
        return Ok(yaml.safe_load(path.read_text()))

    match read_lexicon(path):
        case Ok(data):
            print(f"Loaded {len(data)} sections")
        case Err(error):
            log.error(error.message, code=error.code.name)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
    require,
)

from .builders import (
    # Validation (E2xxx)
    validation_error,
    invalid_format,
    invalid_json,
    # Resource (E6xxx)
    resource_error,
    file_not_found,
    file_read_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "require",
    "validation_error",
    "invalid_format",
    "invalid_json",
    "resource_error",
    "file_not_found",
    "file_read_error",
]
