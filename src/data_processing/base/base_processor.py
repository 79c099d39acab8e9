"""
Abstract base class for all record processors
Defines the interface and common functionality
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
import pandas as pd

from config.logging import get_logger
from src.failures import FailureRecord
from src.plugins import PluginDescriptor
from src.versioning import CURRENT_VERSION
from .data_contracts import DataContract, ValidationResult
from .processing_context import ProcessingContext


class ProcessorException(Exception):
    """Custom exception for processor errors"""

    def __init__(
        self,
        message: str,
        processor_name: str = "",
        context: ProcessingContext = None,
    ):
        super().__init__(message)
        self.processor_name = processor_name
        self.context = context


class BaseProcessor(ABC):
    """
    Abstract base class for all record processors

    Provides common functionality:
    - Plugin identity and declared pipeline version
    - Input/output validation
    - Logging and error handling
    - Dead-letter hand-off for failed records
    """

    def __init__(
        self,
        name: str,
        version: str = "1.0.0",
        plugin_id: Optional[str] = None,
        pipeline_version: Optional[str] = None,
    ):
        self.name = name
        self.version = version
        self.plugin_id = plugin_id or name
        self.pipeline_version = pipeline_version or str(CURRENT_VERSION)
        self.logger = get_logger(f"data_processing.{name}")

        # Contracts - to be defined by subclasses
        self.input_contract: Optional[DataContract] = None
        self.output_contract: Optional[DataContract] = None

        # Processing statistics
        self.total_processed = 0
        self.total_errors = 0
        self.total_failed_records = 0

    @property
    def descriptor(self) -> PluginDescriptor:
        """Plugin identity used by the activation gate"""
        return PluginDescriptor(self.plugin_id, self.name, self.pipeline_version)

    @abstractmethod
    def _process_data(self, data: Any, context: ProcessingContext) -> Any:
        """
        Core processing logic - must be implemented by subclasses

        Args:
            data: Input data to process
            context: Processing context with metadata and configuration

        Returns:
            Processed data
        """
        pass

    def process(
        self, data: Any, context: Optional[ProcessingContext] = None
    ) -> Tuple[Any, ProcessingContext]:
        """
        Main processing method with full validation and error handling

        Args:
            data: Input data to process
            context: Optional processing context (creates new one if None)

        Returns:
            Tuple of (processed_data, updated_context)
        """
        # Initialize context if not provided
        if context is None:
            context = ProcessingContext()

        # Set up metadata
        context.metadata.processor_name = self.name
        context.metadata.processor_version = self.version
        context.metadata.start_processing()

        try:
            self.logger.info("Starting processing with %s", self.name)

            # Input validation
            if self.input_contract:
                self.logger.debug("Validating input data")
                input_validation = self.input_contract.validate(data)
                self._handle_validation_result(input_validation, context, "input")

                if not input_validation.is_valid:
                    raise ProcessorException(
                        f"Input validation failed: {input_validation.get_error_summary()}",
                        self.name,
                        context,
                    )

            if isinstance(data, (pd.DataFrame, list)):
                context.metadata.records_in = len(data)

            # Core processing
            self.logger.debug("Executing core processing logic")
            failed_before = context.metadata.records_failed
            processed_data = self._process_data(data, context)
            self.total_failed_records += context.metadata.records_failed - failed_before

            # Track processing statistics
            if isinstance(processed_data, (pd.DataFrame, list)):
                context.metadata.records_processed = len(processed_data)

            # Output validation
            if self.output_contract:
                self.logger.debug("Validating output data")
                output_validation = self.output_contract.validate(processed_data)
                self._handle_validation_result(output_validation, context, "output")

                if not output_validation.is_valid:
                    raise ProcessorException(
                        f"Output validation failed: {output_validation.get_error_summary()}",
                        self.name,
                        context,
                    )

            # Success - update metadata
            context.metadata.end_processing()
            context.metadata.validation_passed = True

            self.total_processed += 1

            self.logger.info(
                "Processing completed successfully in %.2f s",
                context.metadata.duration_seconds,
            )

            return processed_data, context

        except ProcessorException:
            # Re-raise processor exceptions
            context.metadata.end_processing()
            context.metadata.validation_passed = False
            self.total_errors += 1
            raise

        except Exception as e:
            # Wrap other exceptions
            context.metadata.end_processing()
            context.metadata.validation_passed = False
            self.total_errors += 1

            error_message = f"Processing failed in {self.name}: {str(e)}"
            context.add_error(error_message)

            raise ProcessorException(error_message, self.name, context) from e

    def fail_record(self, record: Any, context: ProcessingContext) -> FailureRecord:
        """Build a failure record for a record this processor gave up on"""
        failure = (
            FailureRecord.builder()
            .with_plugin_id(self.plugin_id)
            .with_plugin_name(self.name)
            .with_pipeline_name(context.pipeline_name)
            .with_failed_data(record)
            .build()
        )
        context.send_to_dead_letter(failure)
        return failure

    def _handle_validation_result(
        self, result: ValidationResult, context: ProcessingContext, stage: str
    ):
        """Handle validation results by updating context"""

        # Add errors to context
        for error in result.errors:
            context.add_error(f"{stage} validation - {error.field}: {error.message}")

        # Add warnings to context
        for warning in result.warnings:
            context.add_warning(
                f"{stage} validation - {warning.field}: {warning.message}"
            )

        # Add validation metadata
        context.metadata.add_custom_metric(
            f"{stage}_validation_metadata", result.metadata
        )

    def set_input_contract(self, contract: DataContract):
        """Set the input validation contract"""
        self.input_contract = contract
        self.logger.debug("Input contract set: %s", contract.name)

    def set_output_contract(self, contract: DataContract):
        """Set the output validation contract"""
        self.output_contract = contract
        self.logger.debug("Output contract set: %s", contract.name)

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate processor configuration
        Override in subclasses for specific validation needs
        """
        return True

    def __str__(self) -> str:
        return f"{self.name} v{self.version}"

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(name='{self.name}', version='{self.version}')>"
        )
