"""
Base classes and foundational components for record processing
"""

from .base_processor import BaseProcessor, ProcessorException
from .data_contracts import (
    DataContract,
    RecordInputContract,
    RecordOutputContract,
    ValidationLevel,
    ValidationResult,
)
from .processing_context import ProcessingContext, ProcessingMetadata

__all__ = [
    "BaseProcessor",
    "ProcessorException",
    "DataContract",
    "RecordInputContract",
    "RecordOutputContract",
    "ValidationLevel",
    "ValidationResult",
    "ProcessingContext",
    "ProcessingMetadata",
]
