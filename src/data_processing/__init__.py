"""
Record Processing Layer
Processors that transform record batches and route failures to dead letters
"""

from .base.base_processor import BaseProcessor, ProcessorException
from .base.data_contracts import DataContract, RecordInputContract, RecordOutputContract
from .base.processing_context import ProcessingContext, ProcessingMetadata
from .core.field_mapping_processor import FieldMappingProcessor

__all__ = [
    "BaseProcessor",
    "ProcessorException",
    "DataContract",
    "RecordInputContract",
    "RecordOutputContract",
    "ProcessingContext",
    "ProcessingMetadata",
    "FieldMappingProcessor",
]
