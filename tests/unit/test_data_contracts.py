"""
Unit tests for record batch contracts
"""

import pandas as pd

from src.data_processing.base import (
    RecordInputContract,
    RecordOutputContract,
    ValidationLevel,
)


def test_input_contract_accepts_records_and_dataframes():
    contract = RecordInputContract("input")

    assert contract.validate([{"speed": "1"}]).is_valid
    assert contract.validate(pd.DataFrame({"speed": ["1"]})).is_valid


def test_input_contract_rejects_non_dict_records():
    result = RecordInputContract("input").validate([{"speed": "1"}, "speed=2"])

    assert not result.is_valid
    assert result.errors[0].field == "records[1]"
    assert result.errors[0].error_type == "invalid_record"


def test_strict_contract_skips_content_after_schema_failure():
    result = RecordInputContract("input").validate(42)

    assert not result.is_valid
    assert result.metadata["content_validation"] == {}


def test_warning_contract_still_fails_on_strict_errors():
    contract = RecordOutputContract(
        "output", {"speed": float}, validation_level=ValidationLevel.WARNING
    )

    result = contract.validate([{"speed": "fast"}])

    assert not result.is_valid
    assert result.errors[0].error_type == "wrong_type"
    assert result.metadata["validation_level"] == "warning"


def test_warning_level_errors_do_not_invalidate():
    contract = RecordInputContract("input", ValidationLevel.WARNING)
    error = contract.create_validation_error("data", "odd", "odd batch")

    assert error.severity is ValidationLevel.WARNING
    assert contract._determine_validity([error], [])
    assert not RecordInputContract("input")._determine_validity([error], [])


def test_empty_batch_is_a_warning():
    result = RecordInputContract("input").validate([])

    assert result.is_valid
    assert result.has_warnings
    assert result.warnings[0].error_type == "empty_data"
