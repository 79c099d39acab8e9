"""
Unit tests for the field mapping processor
"""

import logging

import pandas as pd
import pytest

from config.settings import pipeline_config
from src.data_processing import FieldMappingProcessor, ProcessingContext, ProcessorException
from src.type_conversion import UnsupportedConversionError

PIPELINE_NAME = "telemetry-test"


@pytest.fixture
def context():
    return ProcessingContext(pipeline_name=PIPELINE_NAME)


@pytest.fixture
def processor():
    return FieldMappingProcessor(
        {"speed": "double", "gear": "integer", "drs": "boolean"}, plugin_id="mapper-1"
    )


def test_converts_mapped_fields(processor, context):
    records = [
        {"speed": "312.5", "gear": "8", "drs": "true", "driver": "VER"},
        {"speed": 298, "gear": 7.0, "drs": False, "driver": "LEC"},
    ]

    output, context = processor.process(records, context)

    assert output == [
        {"speed": 312.5, "gear": 8, "drs": True, "driver": "VER"},
        {"speed": 298.0, "gear": 7, "drs": False, "driver": "LEC"},
    ]
    assert context.failure_records == []
    assert context.metadata.records_processed == 2


def test_unmapped_and_absent_fields_are_untouched(processor, context):
    output, _ = processor.process([{"driver": "HAM", "lap": "12"}], context)

    assert output == [{"driver": "HAM", "lap": "12"}]


def test_input_records_are_not_modified(processor, context):
    records = [{"speed": "1.5"}]

    processor.process(records, context)

    assert records == [{"speed": "1.5"}]


def test_failed_records_go_to_dead_letter(processor, context):
    sunk = []
    context.dead_letter_sink = sunk.append
    bad_text = {"speed": "fast", "driver": "VER"}
    bad_type = {"speed": None, "driver": "LEC"}

    output, context = processor.process(
        [bad_text, {"speed": "1.0"}, bad_type], context
    )

    assert output == [{"speed": 1.0}]
    assert [r.failed_data for r in context.failure_records] == [bad_text, bad_type]
    assert sunk == context.failure_records
    assert context.metadata.records_failed == 2
    assert processor.total_failed_records == 2

    failure = context.failure_records[0]
    assert failure.plugin_id == "mapper-1"
    assert failure.plugin_name == "field_mapping"
    assert failure.pipeline_name == PIPELINE_NAME
    assert failure.schema_version == "1"


def test_disabled_dead_letter_drops_failed_records(processor, context, monkeypatch, caplog):
    monkeypatch.setattr(pipeline_config, "dead_letter_enabled", False)
    sunk = []
    context.dead_letter_sink = sunk.append

    with caplog.at_level(logging.WARNING, logger="dead_letter"):
        output, context = processor.process([{"speed": "fast"}, {"speed": "2"}], context)

    assert output == [{"speed": 2.0}]
    assert context.failure_records == []
    assert sunk == []
    assert context.metadata.records_failed == 1
    assert "dropping failed record from field_mapping" in caplog.text


def test_dataframe_input_gives_dataframe_output(context):
    processor = FieldMappingProcessor({"speed": "double"})
    data = pd.DataFrame({"speed": ["1.5", "fast", "3"], "driver": ["VER", "LEC", "HAM"]})

    output, context = processor.process(data, context)

    assert isinstance(output, pd.DataFrame)
    assert list(output.columns) == ["speed", "driver"]
    assert output["speed"].tolist() == [1.5, 3.0]
    assert output["driver"].tolist() == ["VER", "HAM"]
    assert context.failure_records[0].failed_data == {"speed": "fast", "driver": "LEC"}


def test_invalid_input_raises(processor, context):
    with pytest.raises(ProcessorException):
        processor.process("not records", context)

    assert processor.total_errors == 1
    assert context.errors


def test_empty_batch_warns(processor, context):
    output, context = processor.process([], context)

    assert output == []
    assert any("empty" in w for w in context.warnings)


def test_unknown_declared_type_fails_fast():
    with pytest.raises(UnsupportedConversionError):
        FieldMappingProcessor({"speed": "decimal"})


def test_validate_config(processor):
    assert processor.validate_config({"field_mappings": {"a": "float", "b": "int"}})
    assert not processor.validate_config({"field_mappings": {"a": "complex"}})


def test_descriptor(processor):
    descriptor = processor.descriptor

    assert descriptor.plugin_id == "mapper-1"
    assert descriptor.plugin_name == "field_mapping"
    assert descriptor.pipeline_version == "2.1"


def test_get_mapped_fields(processor):
    assert processor.get_mapped_fields() == ["speed", "gear", "drs"]
