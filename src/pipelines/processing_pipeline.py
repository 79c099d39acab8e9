"""
Record processing pipeline
Runs record batches through version-gated plugin processors
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from config.logging import get_logger
from config.settings import pipeline_config
from src.data_processing.base.base_processor import BaseProcessor
from src.data_processing.base.processing_context import (
    DeadLetterSink,
    ProcessingContext,
)
from src.failures import FailureRecord
from src.plugins import PluginActivator
from src.utils.decorators import log_operation


class ErrorMode(Enum):
    """Error handling modes for pipeline execution"""

    STRICT = "strict"  # Stop on first processor error
    CONTINUE = "continue"  # Log error, skip the failed processor's output


class PipelineException(Exception):
    """Custom exception for pipeline errors"""

    def __init__(
        self, message: str, pipeline_name: str = "", context: Dict[str, Any] = None
    ):
        super().__init__(message)
        self.pipeline_name = pipeline_name
        self.context = context or {}


class PipelineResult:
    """Result of pipeline execution"""

    def __init__(self, pipeline_id: str):
        self.pipeline_id = pipeline_id
        self.start_time = datetime.now()
        self.end_time: Optional[datetime] = None
        self.duration_seconds: Optional[float] = None

        self.status = "running"
        self.total_items = 0
        self.processed_items = 0
        self.failed_items = 0

        self.output: Any = None
        self.processor_results: Dict[str, List[Dict]] = {}
        self.failure_records: List[FailureRecord] = []
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def complete(self, status: str = "completed"):
        """Mark pipeline as complete"""
        self.end_time = datetime.now()
        self.duration_seconds = (self.end_time - self.start_time).total_seconds()
        self.status = status

    def add_processor_result(self, processor_name: str, result: Dict):
        """Add result from a processor"""
        if processor_name not in self.processor_results:
            self.processor_results[processor_name] = []
        self.processor_results[processor_name].append(result)

    def add_error(self, error_message: str):
        """Add an error"""
        self.errors.append(error_message)

    def add_warning(self, warning_message: str):
        """Add a warning"""
        self.warnings.append(warning_message)

    def get_summary(self) -> Dict[str, Any]:
        """Get pipeline execution summary"""
        return {
            "pipeline_id": self.pipeline_id,
            "status": self.status,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_seconds": self.duration_seconds,
            "total_items": self.total_items,
            "processed_items": self.processed_items,
            "failed_items": self.failed_items,
            "success_rate": (self.processed_items / max(self.total_items, 1)) * 100,
            "errors_count": len(self.errors),
            "warnings_count": len(self.warnings),
            "processors_run": list(self.processor_results.keys()),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            **self.get_summary(),
            "processor_results": self.processor_results,
            "failure_records": [r.to_dict() for r in self.failure_records],
            "errors": self.errors,
            "warnings": self.warnings,
        }


class BasePipeline(ABC):
    """
    Abstract base class for record pipelines

    Provides common functionality:
    - Pipeline lifecycle management
    - Error handling
    - Result aggregation
    """

    def __init__(self, name: str, version: str = "1.0.0"):
        self.name = name
        self.version = version
        self.pipeline_id = str(uuid.uuid4())[:8]
        self.logger = get_logger(f"pipeline.{name}")

        self.result: Optional[PipelineResult] = None

    @abstractmethod
    def _execute_pipeline(self, **kwargs) -> PipelineResult:
        """
        Execute the pipeline - must be implemented by subclasses

        Returns:
            PipelineResult with execution details
        """
        pass

    def run(self, **kwargs) -> PipelineResult:
        """
        Run the pipeline with full error handling and monitoring

        Returns:
            PipelineResult with execution summary
        """

        # Create pipeline result tracker
        run_id = (
            f"{self.name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{self.pipeline_id}"
        )
        self.result = PipelineResult(run_id)

        self.logger.info("Starting pipeline: %s (ID: %s)", self.name, run_id)

        try:
            self.result = self._execute_pipeline(**kwargs)

            if self.result.status == "running":
                self.result.complete("completed")

            self.logger.info("Pipeline completed: %s", self.result.status)

            if self.result.failed_items > 0:
                self.logger.warning("Failed items: %s", self.result.failed_items)

            return self.result

        except PipelineException as e:
            # Already names the failing step, re-raise as is
            self.result.complete("failed")
            self.result.add_error(f"Pipeline execution failed: {str(e)}")

            self.logger.error("Pipeline failed: %s", str(e))
            raise

        except Exception as e:
            self.result.complete("failed")
            self.result.add_error(f"Pipeline execution failed: {str(e)}")

            self.logger.error("Pipeline failed: %s", str(e))
            raise PipelineException(
                f"Pipeline {self.name} failed", self.name, self.result.to_dict()
            ) from e

    def __str__(self) -> str:
        return f"{self.name} v{self.version}"

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(name='{self.name}', version='{self.version}')>"
        )


class ProcessingPipeline(BasePipeline):
    """
    Record Processing Pipeline

    Pipeline Flow:
    1. Register processors, each gated by the plugin activator
    2. Feed the record batch through every active processor in order
    3. Collect failure records emitted along the way
    """

    def __init__(
        self,
        name: Optional[str] = None,
        error_mode: ErrorMode = ErrorMode.CONTINUE,
        activator: Optional[PluginActivator] = None,
        dead_letter_sink: Optional[DeadLetterSink] = None,
    ):
        super().__init__(name or pipeline_config.pipeline_name, "1.0.0")

        self.error_mode = error_mode
        self.activator = activator or PluginActivator()
        self.dead_letter_sink = dead_letter_sink
        self.processors: Dict[str, BaseProcessor] = {}

    def register(self, processor: BaseProcessor) -> BaseProcessor:
        """
        Activate a processor and add it to the pipeline

        Raises:
            PluginActivationError: If the processor's version is rejected
        """
        self.activator.activate(processor.descriptor)
        self.processors[processor.plugin_id] = processor
        self.logger.info("Registered processor: %s", processor)
        return processor

    @log_operation
    def process_records(self, records: Any) -> PipelineResult:
        """Run a record batch (list of dicts or DataFrame) through the pipeline"""
        return self.run(records=records)

    def _execute_pipeline(self, **kwargs) -> PipelineResult:
        """Execute the processing pipeline"""

        if "records" not in kwargs:
            raise ValueError("Must provide records")

        data = kwargs["records"]
        self.result.total_items = len(data)

        context = ProcessingContext(
            pipeline_name=self.name, dead_letter_sink=self.dead_letter_sink
        )

        for plugin_id, processor in self.processors.items():
            child_context = context.create_child_context(processor.name)
            try:
                self.logger.info("Running %s processor...", plugin_id)
                output, child_context = processor.process(data, child_context)
                data = output

                self.result.add_processor_result(
                    plugin_id,
                    {
                        "status": "success",
                        "duration": child_context.metadata.duration_seconds,
                        "records": len(output),
                        "records_failed": child_context.metadata.records_failed,
                    },
                )

            except Exception as e:
                error_msg = f"{plugin_id} failed: {str(e)}"
                self.logger.error(error_msg)

                self.result.add_processor_result(
                    plugin_id, {"status": "failed", "error": str(e)}
                )

                if self.error_mode == ErrorMode.STRICT:
                    raise PipelineException(error_msg, self.name) from e
                self.result.add_warning(error_msg)

            finally:
                context.merge_child_context(child_context)

        self.result.output = data
        self.result.processed_items = len(data)
        self.result.failed_items = context.metadata.records_failed
        self.result.failure_records = list(context.failure_records)
        self.result.errors.extend(context.errors)

        return self.result
