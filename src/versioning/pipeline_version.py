"""
Pipeline version identifiers and the plugin compatibility rule
"""

import re
from dataclasses import dataclass
from typing import Optional

CURRENT_VERSION_STRING = "2.1"

# One or two dot-separated non-negative integers, e.g. "2" or "2.1"
VERSION_PATTERN = re.compile(r"((\d+)(\.(\d+))?)", re.ASCII)
MAJOR_VERSION_GROUP = 2
MINOR_VERSION_GROUP = 4


class MalformedVersionError(ValueError):
    """Raised when version text does not match the version pattern"""

    def __init__(self, version_text):
        super().__init__(f"Invalid pipeline version provided: {version_text!r}")
        self.version_text = version_text


@dataclass(frozen=True)
class PipelineVersion:
    """
    Version of the pipeline API a plugin is built against

    A shorthand version carries only a major number ("2"), a full version
    carries both major and minor ("2.1").
    """

    major: int
    minor: Optional[int] = None

    @classmethod
    def parse(cls, version_text: str) -> "PipelineVersion":
        """
        Parse version text into a PipelineVersion

        Args:
            version_text: Text of the form "<major>" or "<major>.<minor>"

        Returns:
            Parsed PipelineVersion

        Raises:
            MalformedVersionError: If the text is not a valid version
        """
        if not isinstance(version_text, str):
            raise MalformedVersionError(version_text)

        result = VERSION_PATTERN.fullmatch(version_text)
        if result is None:
            raise MalformedVersionError(version_text)

        major = int(result.group(MAJOR_VERSION_GROUP))
        potential_minor = result.group(MINOR_VERSION_GROUP)
        minor = int(potential_minor) if potential_minor is not None else None

        return cls(major, minor)

    @property
    def is_shorthand(self) -> bool:
        return self.minor is None

    def compatible_with(self, other: "PipelineVersion") -> bool:
        """
        Check whether another version is compatible with this one

        Equal versions are compatible, and a shorthand version is compatible
        with any full version sharing its major number.
        """
        if self.major != other.major:
            return False

        if self.minor is not None and other.minor is not None:
            return self.minor == other.minor

        return True

    def __str__(self) -> str:
        if self.minor is None:
            return f"{self.major}"

        return f"{self.major}.{self.minor}"


CURRENT_VERSION = PipelineVersion.parse(CURRENT_VERSION_STRING)


def current_version() -> PipelineVersion:
    """Get the version of the running pipeline"""
    return CURRENT_VERSION


def parse(version_text: str) -> PipelineVersion:
    """Parse version text, see PipelineVersion.parse"""
    return PipelineVersion.parse(version_text)


def compatible_with(first: PipelineVersion, second: PipelineVersion) -> bool:
    """Check whether two versions are compatible, see PipelineVersion.compatible_with"""
    return first.compatible_with(second)
