"""
Field mapping processor
Coerces configured record fields into their declared types
"""

from typing import Any, Dict, List, Optional

import pandas as pd

from config.settings import pipeline_config
from src.type_conversion import (
    ConversionError,
    TargetType,
    TypeConverter,
)
from ..base.base_processor import BaseProcessor, ProcessingContext
from ..base.data_contracts import (
    RecordInputContract,
    RecordOutputContract,
    ValidationLevel,
    to_records,
)

# Python types a converted field must hold, per declared type
PYTHON_TYPES = {
    TargetType.INTEGER: int,
    TargetType.DOUBLE: float,
    TargetType.BOOLEAN: bool,
    TargetType.STRING: str,
}


class FieldMappingProcessor(BaseProcessor):
    """
    Field Mapping Processor

    Converts record field values to the types declared in configuration

    Input: list of dict records or a DataFrame of records
    Output: same shape as the input, without the records that failed

    A record whose field cannot be converted is captured as a FailureRecord
    and sent to the dead-letter path of the processing context.
    """

    def __init__(
        self,
        field_mappings: Optional[Dict[str, str]] = None,
        plugin_id: Optional[str] = None,
        pipeline_version: Optional[str] = None,
    ):
        super().__init__("field_mapping", "1.0.0", plugin_id, pipeline_version)

        if field_mappings is None:
            field_mappings = pipeline_config.field_mappings

        # Fails fast on unknown type names
        self.target_types: Dict[str, TargetType] = {
            field_name: TargetType.from_name(type_name)
            for field_name, type_name in field_mappings.items()
        }
        self.converters: Dict[str, TypeConverter] = {
            field_name: target_type.converter
            for field_name, target_type in self.target_types.items()
        }

        # Set up validation contracts
        self.set_input_contract(
            RecordInputContract("field_mapping_input", ValidationLevel.STRICT)
        )
        self.set_output_contract(
            RecordOutputContract(
                "field_mapping_output",
                field_types={
                    field_name: PYTHON_TYPES[target_type]
                    for field_name, target_type in self.target_types.items()
                },
            )
        )

    def _process_data(self, data: Any, context: ProcessingContext) -> Any:
        """
        Core field mapping logic

        Args:
            data: Record list or DataFrame
            context: Processing context

        Returns:
            Converted records, as a DataFrame when the input was one
        """
        records = to_records(data)
        self.logger.info(
            "Mapping %d fields on %d records", len(self.converters), len(records)
        )

        converted = []
        for record in records:
            try:
                converted.append(self._convert_record(record))
            except ConversionError as e:
                self.logger.warning("Record failed field mapping: %s", str(e))
                self.fail_record(record, context)

        context.metadata.add_custom_metric("records_converted", len(converted))
        context.metadata.add_custom_metric(
            "records_dead_lettered", len(records) - len(converted)
        )

        if isinstance(data, pd.DataFrame):
            return pd.DataFrame(converted, columns=data.columns)
        return converted

    def _convert_record(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Convert the mapped fields of one record, leaving others untouched"""
        result = dict(record)
        for field_name, converter in self.converters.items():
            if field_name in result:
                result[field_name] = converter.convert(result[field_name])
        return result

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Check that every declared field type is supported"""
        try:
            for type_name in config.get("field_mappings", {}).values():
                TargetType.from_name(type_name)
        except ConversionError:
            return False
        return True

    def get_mapped_fields(self) -> List[str]:
        return list(self.converters.keys())
