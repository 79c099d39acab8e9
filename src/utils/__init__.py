"""Utility functions for record processing"""

from .decorators import log_operation

__all__ = [
    "log_operation",
]
