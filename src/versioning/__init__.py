"""
Pipeline version parsing and compatibility checks
"""

from .pipeline_version import (
    CURRENT_VERSION,
    MalformedVersionError,
    PipelineVersion,
    compatible_with,
    current_version,
    parse,
)

__all__ = [
    "CURRENT_VERSION",
    "MalformedVersionError",
    "PipelineVersion",
    "compatible_with",
    "current_version",
    "parse",
]
