"""
Run a batch of JSON records through the field mapping pipeline
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.logging import setup_logging, get_logger
from config.settings import pipeline_config
from src.data_processing import FieldMappingProcessor
from src.failures import FailureRecord
from src.pipelines import ErrorMode, ProcessingPipeline


def print_failure(record: FailureRecord):
    """Dead-letter sink that writes failure records to stdout as JSON lines"""
    print(json.dumps(record.to_dict(), default=str))


def main():
    """Map record fields to their declared types"""

    parser = argparse.ArgumentParser(
        description="Coerce record fields and report dead-letter records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Examples:
            # Use FIELD_MAPPINGS from the environment
            python scripts/data/run_field_mapping.py records.json

            # Declare mappings on the command line, stop on processor errors
            python scripts/data/run_field_mapping.py records.json --mapping speed:double --strict
        """,
    )
    parser.add_argument("input", type=Path, help="JSON file holding a list of records")
    parser.add_argument(
        "--mapping",
        action="append",
        default=[],
        help='Field mapping "field:type" (repeatable, overrides FIELD_MAPPINGS)',
    )
    parser.add_argument(
        "--strict", action="store_true", help="Abort on the first processor error"
    )
    args = parser.parse_args()

    setup_logging()
    logger = get_logger("field_mapping_script")

    field_mappings = pipeline_config.field_mappings
    if args.mapping:
        field_mappings = dict(entry.split(":", 1) for entry in args.mapping)

    with open(args.input, "r", encoding="utf-8") as f:
        records = json.load(f)

    pipeline = ProcessingPipeline(
        error_mode=ErrorMode.STRICT if args.strict else ErrorMode.CONTINUE,
        dead_letter_sink=print_failure,
    )
    pipeline.register(FieldMappingProcessor(field_mappings))

    result = pipeline.process_records(records)

    summary = result.get_summary()
    logger.info(
        "Mapped %d of %d records, %d dead-lettered",
        summary["processed_items"],
        summary["total_items"],
        summary["failed_items"],
    )


if __name__ == "__main__":
    main()
