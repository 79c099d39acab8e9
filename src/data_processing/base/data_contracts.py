"""
Data contracts for input/output validation of record batches
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple, Type, Union

import pandas as pd

from config.logging import get_logger


class ValidationLevel(Enum):
    """Validation strictness level"""

    STRICT = "strict"  # Fail on any validation error
    WARNING = "warning"  # Log warnings but continue


@dataclass
class ValidationError:
    """Individual validation error details"""

    field: str
    error_type: str
    message: str
    severity: ValidationLevel
    actual_value: Any = None
    expected_value: Any = None


@dataclass
class ValidationResult:
    """Result of data validation"""

    is_valid: bool
    errors: List[ValidationError]
    warnings: List[ValidationError]
    metadata: Dict[str, Any]

    @property
    def has_errors(self) -> bool:
        """Check if validation has any errors"""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if validation has any warnings"""
        return len(self.warnings) > 0

    def get_error_summary(self) -> str:
        """Get summary of validation errors"""
        if not self.has_errors:
            return "No validation errors"

        error_counts = {}
        for error in self.errors:
            error_counts[error.error_type] = error_counts.get(error.error_type, 0) + 1

        return f"Validation errors: {dict(error_counts)}"


def to_records(data: Union[pd.DataFrame, List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Normalize a record batch to a list of dicts"""
    if isinstance(data, pd.DataFrame):
        return data.to_dict(orient="records")
    return list(data)


class DataContract(ABC):
    """
    Abstract base class for data contracts
    Defines the interface for validating record batches
    """

    def __init__(
        self, name: str, validation_level: ValidationLevel = ValidationLevel.STRICT
    ):
        self.name = name
        self.validation_level = validation_level
        self.logger = get_logger(f"data_contracts.{name}")

    @abstractmethod
    def validate_schema(self, data: Any) -> ValidationResult:
        """Validate data schema (container type, record structure)"""
        pass

    @abstractmethod
    def validate_content(self, data: Any) -> ValidationResult:
        """Validate data content (field values)"""
        pass

    def validate(self, data: Any) -> ValidationResult:
        """
        Complete validation: schema + content

        Args:
            data: Data to validate

        Returns:
            ValidationResult with combined schema and content validation
        """
        self.logger.debug("Starting validation for %s", self.name)

        # Schema validation first
        schema_result = self.validate_schema(data)

        # Content validation only if schema passes or validation level allows
        content_result = None
        if schema_result.is_valid or self.validation_level != ValidationLevel.STRICT:
            content_result = self.validate_content(data)

        # Combine results
        all_errors = schema_result.errors.copy()
        all_warnings = schema_result.warnings.copy()

        if content_result:
            all_errors.extend(content_result.errors)
            all_warnings.extend(content_result.warnings)

        is_valid = self._determine_validity(all_errors, all_warnings)

        combined_metadata = {
            "schema_validation": schema_result.metadata,
            "content_validation": content_result.metadata if content_result else {},
            "validation_level": self.validation_level.value,
            "data_type": type(data).__name__,
        }

        result = ValidationResult(
            is_valid=is_valid,
            errors=all_errors,
            warnings=all_warnings,
            metadata=combined_metadata,
        )

        self._log_validation_result(result)
        return result

    def _determine_validity(
        self, errors: List[ValidationError], warnings: List[ValidationError]
    ) -> bool:
        """Determine if data is valid based on validation level"""
        if self.validation_level == ValidationLevel.STRICT:
            return len(errors) == 0

        critical_errors = [e for e in errors if e.severity == ValidationLevel.STRICT]
        return len(critical_errors) == 0

    def _log_validation_result(self, result: ValidationResult):
        """Log validation results"""
        if result.is_valid:
            if result.has_warnings:
                self.logger.warning(
                    "%s validation passed with %d warnings",
                    self.name,
                    len(result.warnings),
                )
            else:
                self.logger.debug("%s validation passed", self.name)
        else:
            self.logger.error(
                "%s validation failed: %s", self.name, result.get_error_summary()
            )

    def create_validation_error(
        self,
        field: str,
        error_type: str,
        message: str,
        severity: ValidationLevel = None,
        actual_value: Any = None,
        expected_value: Any = None,
    ) -> ValidationError:
        """Helper method to create validation errors"""
        return ValidationError(
            field=field,
            error_type=error_type,
            message=message,
            severity=severity or self.validation_level,
            actual_value=actual_value,
            expected_value=expected_value,
        )


class RecordInputContract(DataContract):
    """
    Contract for validating processor input
    Accepts a list of dict records or a DataFrame of records
    """

    def __init__(
        self,
        name: str,
        validation_level: ValidationLevel = ValidationLevel.STRICT,
    ):
        super().__init__(name, validation_level)

    def validate_schema(self, data: Any) -> ValidationResult:
        """Validate the batch container and record structure"""
        errors = []
        warnings = []
        metadata = {}

        if isinstance(data, pd.DataFrame):
            metadata["record_count"] = len(data)
            metadata["columns"] = list(data.columns)

        elif isinstance(data, list):
            metadata["record_count"] = len(data)

            for index, record in enumerate(data):
                if not isinstance(record, dict):
                    errors.append(
                        self.create_validation_error(
                            field=f"records[{index}]",
                            error_type="invalid_record",
                            message=f"Expected dict record, got {type(record).__name__}",
                            severity=ValidationLevel.STRICT,
                            actual_value=type(record).__name__,
                        )
                    )

        else:
            errors.append(
                self.create_validation_error(
                    field="data_type",
                    error_type="invalid_type",
                    message=f"Expected DataFrame or list of records, got {type(data)}",
                    severity=ValidationLevel.STRICT,
                )
            )

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            metadata=metadata,
        )

    def validate_content(self, data: Any) -> ValidationResult:
        """Warn on empty batches"""
        warnings = []

        if len(data) == 0:
            warnings.append(
                self.create_validation_error(
                    field="data",
                    error_type="empty_data",
                    message="Record batch is empty",
                    severity=ValidationLevel.WARNING,
                )
            )

        return ValidationResult(
            is_valid=True,
            errors=[],
            warnings=warnings,
            metadata={},
        )


class RecordOutputContract(DataContract):
    """
    Contract for validating processor output
    Checks that typed fields hold values of their declared Python type
    """

    def __init__(
        self,
        name: str,
        field_types: Dict[str, Union[Type, Tuple[Type, ...]]] = None,
        validation_level: ValidationLevel = ValidationLevel.STRICT,
    ):
        super().__init__(name, validation_level)
        self.field_types = field_types or {}

    def validate_schema(self, data: Any) -> ValidationResult:
        """Validate the output container"""
        errors = []

        if not isinstance(data, (pd.DataFrame, list)):
            errors.append(
                self.create_validation_error(
                    field="data_type",
                    error_type="invalid_type",
                    message=f"Expected DataFrame or list of records, got {type(data)}",
                    severity=ValidationLevel.STRICT,
                )
            )

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=[],
            metadata={"output_record_count": len(data) if not errors else None},
        )

    def validate_content(self, data: Any) -> ValidationResult:
        """Validate typed field values"""
        errors = []
        # DataFrames hold numpy scalars, so only record lists are type-checked
        records = data if isinstance(data, list) else []

        for index, record in enumerate(records):
            for field_name, expected_type in self.field_types.items():
                if field_name not in record:
                    continue
                value = record[field_name]
                if not isinstance(value, expected_type):
                    errors.append(
                        self.create_validation_error(
                            field=f"records[{index}].{field_name}",
                            error_type="wrong_type",
                            message=f"Field '{field_name}' has type {type(value).__name__}",
                            severity=ValidationLevel.STRICT,
                            actual_value=type(value).__name__,
                            expected_value=expected_type,
                        )
                    )

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=[],
            metadata={"typed_fields": list(self.field_types.keys())},
        )
