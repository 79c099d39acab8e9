"""
Decorators for logging operations
"""

import functools
import time
from typing import Callable

from config.logging import get_logger


def log_operation(func: Callable) -> Callable:
    """
    Full operation logging decorator.

    Purpose: Complete operation tracking with start/success/failure logging.
    Use case: Pipeline runs and other operations worth tracing end to end.

    Example:
        @log_operation
        def process_records(records):
            # ... code

    Output:
    - "Starting process_records"
    - "Completed process_records in 0.12 seconds" (success)
    - "Failed process_records after 0.05 seconds: Invalid records" (failure)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.time()

        # Log operation start
        logger.info("Starting %s", func.__name__)

        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.info("Completed %s in %.2f seconds", func.__name__, execution_time)
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                "Failed %s after %.2f seconds: %s",
                func.__name__,
                execution_time,
                str(e),
            )
            raise

    return wrapper
