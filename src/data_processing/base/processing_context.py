"""
Processing context and metadata management
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime
import uuid

from config.logging import get_logger
from config.settings import pipeline_config
from src.failures import FailureRecord

DeadLetterSink = Callable[[FailureRecord], None]


@dataclass
class ProcessingMetadata:
    """Metadata about processing operation"""

    # Processing identification
    processing_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    processor_name: str = ""
    processor_version: str = "1.0.0"

    # Timing information
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    # Data information
    records_in: Optional[int] = None
    records_processed: Optional[int] = None
    records_failed: int = 0

    # Quality metrics
    validation_passed: bool = True
    warnings_count: int = 0
    errors_count: int = 0

    # Custom metrics (processor-specific)
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    def start_processing(self):
        """Mark start of processing"""
        self.start_time = datetime.now()

    def end_processing(self):
        """Mark end of processing and calculate duration"""
        self.end_time = datetime.now()
        if self.start_time:
            self.duration_seconds = (self.end_time - self.start_time).total_seconds()

    def add_custom_metric(self, key: str, value: Any):
        """Add a custom metric"""
        self.custom_metrics[key] = value


@dataclass
class ProcessingContext:
    """
    Context object that carries information through processing pipeline
    Contains metadata, state and the dead-letter path
    """

    # Processing metadata
    metadata: ProcessingMetadata = field(default_factory=ProcessingMetadata)

    pipeline_name: str = field(default_factory=lambda: pipeline_config.pipeline_name)

    # Receives every failure record; None keeps them on the context only
    dead_letter_sink: Optional[DeadLetterSink] = None

    # Processing state
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failure_records: List[FailureRecord] = field(default_factory=list)

    def __post_init__(self):
        self.logger = get_logger("processing_context")
        self.dead_letter_logger = get_logger("dead_letter")

    def add_error(self, error_message: str):
        """Add an error to the context"""
        self.errors.append(error_message)
        self.metadata.errors_count = len(self.errors)
        self.logger.error(error_message)

    def add_warning(self, warning_message: str):
        """Add a warning to the context"""
        self.warnings.append(warning_message)
        self.metadata.warnings_count = len(self.warnings)
        self.logger.warning(warning_message)

    def send_to_dead_letter(self, record: FailureRecord):
        """Hand a failure record to the dead-letter path"""
        self.metadata.records_failed += 1

        if not pipeline_config.dead_letter_enabled:
            self.dead_letter_logger.warning(
                "Dead-letter routing disabled, dropping failed record from %s",
                record.plugin_name,
            )
            return

        self.failure_records.append(record)
        self.dead_letter_logger.info("Dead-letter record: %s", record)

        if self.dead_letter_sink is not None:
            self.dead_letter_sink(record)

    def create_child_context(self, processor_name: str) -> "ProcessingContext":
        """
        Create a child context for sub-processing
        Inherits parent context but has its own metadata
        """
        child_metadata = ProcessingMetadata(
            processor_name=processor_name, processing_id=str(uuid.uuid4())
        )

        child_context = ProcessingContext(
            metadata=child_metadata,
            pipeline_name=self.pipeline_name,
            dead_letter_sink=self.dead_letter_sink,
        )

        return child_context

    def merge_child_context(self, child_context: "ProcessingContext"):
        """Merge child context results back into parent"""
        # Merge errors, warnings and failures
        self.errors.extend(child_context.errors)
        self.warnings.extend(child_context.warnings)
        self.failure_records.extend(child_context.failure_records)

        # Update metadata counts
        self.metadata.errors_count = len(self.errors)
        self.metadata.warnings_count = len(self.warnings)
        self.metadata.records_failed += child_context.metadata.records_failed

        # Merge custom metrics
        for key, value in child_context.metadata.custom_metrics.items():
            self.metadata.custom_metrics[
                f"{child_context.metadata.processor_name}_{key}"
            ] = value

