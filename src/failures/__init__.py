"""
Failure records handed to dead-letter sinks
"""

from .failure_record import (
    INVALID_FIELD,
    MISSING_FIELD,
    SCHEMA_VERSION,
    FailureRecord,
    FailureRecordBuilder,
    FailureRecordValidationError,
    FieldValidationResult,
    FieldViolation,
    InvalidFieldError,
    MissingFieldError,
    format_timestamp,
)

__all__ = [
    "INVALID_FIELD",
    "MISSING_FIELD",
    "SCHEMA_VERSION",
    "FailureRecord",
    "FailureRecordBuilder",
    "FailureRecordValidationError",
    "FieldValidationResult",
    "FieldViolation",
    "InvalidFieldError",
    "MissingFieldError",
    "format_timestamp",
]
