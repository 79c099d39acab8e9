"""
Record pipelines
Run record batches through version-gated processors
"""

from .processing_pipeline import (
    ErrorMode,
    PipelineException,
    PipelineResult,
    ProcessingPipeline,
)

__all__ = [
    "ErrorMode",
    "PipelineException",
    "PipelineResult",
    "ProcessingPipeline",
]
