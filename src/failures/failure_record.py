"""
Failure records for records a plugin could not process

A FailureRecord captures the failed payload together with the identity of the
plugin and pipeline that gave up on it, so a dead-letter sink can keep it for
inspection or replay.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

SCHEMA_VERSION = "1"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", re.ASCII)

MISSING_FIELD = "missing_field"
INVALID_FIELD = "invalid_field"

IDENTITY_FIELDS = ("plugin_id", "plugin_name", "pipeline_name")


@dataclass
class FieldViolation:
    """Single failure record field that did not pass validation"""

    field: str
    error_type: str  # MISSING_FIELD or INVALID_FIELD
    message: str


@dataclass
class FieldValidationResult:
    """Result of validating failure record fields"""

    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.violations) == 0

    def get_error_summary(self) -> str:
        """Get summary of field violations"""
        if self.is_valid:
            return "No validation errors"
        return "; ".join(v.message for v in self.violations)


class FailureRecordValidationError(ValueError):
    """Raised when a failure record is built from invalid fields"""

    def __init__(self, result: FieldValidationResult):
        super().__init__(result.get_error_summary())
        self.violations = result.violations


class MissingFieldError(FailureRecordValidationError):
    """A required failure record field is None"""


class InvalidFieldError(FailureRecordValidationError):
    """A required failure record field is empty"""


def validate_fields(
    plugin_id: Optional[str],
    plugin_name: Optional[str],
    pipeline_name: Optional[str],
    failed_data: Any,
) -> FieldValidationResult:
    """
    Validate failure record fields without raising

    Identity fields must be present and non-blank, failed data must be
    present. Every violation is reported, in field order.
    """
    result = FieldValidationResult()
    values = dict(
        plugin_id=plugin_id, plugin_name=plugin_name, pipeline_name=pipeline_name
    )

    for name in IDENTITY_FIELDS:
        value = values[name]
        if value is None:
            result.violations.append(
                FieldViolation(name, MISSING_FIELD, f"{name} cannot be None")
            )
        elif not str(value).strip():
            result.violations.append(
                FieldViolation(name, INVALID_FIELD, f"{name} cannot be empty")
            )

    if failed_data is None:
        result.violations.append(
            FieldViolation("failed_data", MISSING_FIELD, "failed_data cannot be None")
        )

    return result


def raise_for_result(result: FieldValidationResult):
    """Raise the typed error matching the first violation, if any"""
    if result.is_valid:
        return

    if result.violations[0].error_type == MISSING_FIELD:
        raise MissingFieldError(result)
    raise InvalidFieldError(result)


def format_timestamp(moment: datetime) -> str:
    """
    Format a moment as yyyy-MM-ddTHH:mm:ss.SSSZ

    The trailing Z is literal, the moment is rendered as given without any
    conversion to UTC.
    """
    return f"{moment.strftime(TIMESTAMP_FORMAT)}.{moment.microsecond // 1000:03d}Z"


def is_valid_timestamp(timestamp: Any) -> bool:
    """Check a timestamp has the yyyy-MM-ddTHH:mm:ss.SSSZ shape and a real date"""
    if not isinstance(timestamp, str) or not TIMESTAMP_PATTERN.fullmatch(timestamp):
        return False
    try:
        datetime.strptime(timestamp[:19], TIMESTAMP_FORMAT)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class FailureRecord:
    """
    Immutable capture of a record that a plugin failed to process

    Records compare by value but are unhashable, since failed data is
    usually a dict.
    """

    plugin_id: str
    plugin_name: str
    pipeline_name: str
    failed_data: Any
    timestamp: str
    schema_version: str = field(default=SCHEMA_VERSION, init=False)

    __hash__ = None

    def __post_init__(self):
        result = validate_fields(
            self.plugin_id, self.plugin_name, self.pipeline_name, self.failed_data
        )
        if self.timestamp is None:
            result.violations.append(
                FieldViolation("timestamp", MISSING_FIELD, "timestamp cannot be None")
            )
        elif not is_valid_timestamp(self.timestamp):
            result.violations.append(
                FieldViolation(
                    "timestamp",
                    INVALID_FIELD,
                    f"timestamp '{self.timestamp}' is not yyyy-MM-ddTHH:mm:ss.SSSZ",
                )
            )
        raise_for_result(result)

    @classmethod
    def builder(cls, clock: Optional[Callable[[], datetime]] = None) -> "FailureRecordBuilder":
        return FailureRecordBuilder(clock)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "plugin_id": self.plugin_id,
            "plugin_name": self.plugin_name,
            "pipeline_name": self.pipeline_name,
            "failed_data": self.failed_data,
            "timestamp": self.timestamp,
            "schema_version": self.schema_version,
        }

    def __str__(self) -> str:
        return (
            f"FailureRecord{{plugin_id='{self.plugin_id}', "
            f"plugin_name='{self.plugin_name}', "
            f"pipeline_name='{self.pipeline_name}', "
            f"failed_data={self.failed_data}, "
            f"timestamp='{self.timestamp}', "
            f"schema_version='{self.schema_version}'}}"
        )


class FailureRecordBuilder:
    """
    Collects failure record fields and builds a validated FailureRecord

    Example:
        record = (
            FailureRecord.builder()
            .with_plugin_id("convert-1")
            .with_plugin_name("field_mapping")
            .with_pipeline_name("telemetry-pipeline")
            .with_failed_data({"speed": "fast"})
            .build()
        )
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or datetime.now
        self.plugin_id: Optional[str] = None
        self.plugin_name: Optional[str] = None
        self.pipeline_name: Optional[str] = None
        self.failed_data: Any = None

    def with_plugin_id(self, plugin_id: str) -> "FailureRecordBuilder":
        self.plugin_id = plugin_id
        return self

    def with_plugin_name(self, plugin_name: str) -> "FailureRecordBuilder":
        self.plugin_name = plugin_name
        return self

    def with_pipeline_name(self, pipeline_name: str) -> "FailureRecordBuilder":
        self.pipeline_name = pipeline_name
        return self

    def with_failed_data(self, failed_data: Any) -> "FailureRecordBuilder":
        self.failed_data = failed_data
        return self

    def validate(self) -> FieldValidationResult:
        """Validate the collected fields without building"""
        return validate_fields(
            self.plugin_id, self.plugin_name, self.pipeline_name, self.failed_data
        )

    def build(self) -> FailureRecord:
        """
        Build the failure record, stamping the current time

        Raises:
            MissingFieldError: If a required field is None
            InvalidFieldError: If an identity field is empty
        """
        raise_for_result(self.validate())

        return FailureRecord(
            plugin_id=self.plugin_id,
            plugin_name=self.plugin_name,
            pipeline_name=self.pipeline_name,
            failed_data=self.failed_data,
            timestamp=format_timestamp(self.clock()),
        )
