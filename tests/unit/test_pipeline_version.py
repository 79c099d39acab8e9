"""
Unit tests for pipeline version parsing and compatibility
"""

import pytest

from src.versioning import (
    CURRENT_VERSION,
    MalformedVersionError,
    PipelineVersion,
    compatible_with,
    current_version,
    parse,
)


@pytest.mark.parametrize("version_text", ["2", "2.1", "0", "0.0", "10.25"])
def test_round_trip(version_text):
    """Rendering a parsed version gives back the original text"""
    assert str(parse(version_text)) == version_text


def test_parse_full_version():
    version = parse("2.1")

    assert version.major == 2
    assert version.minor == 1
    assert not version.is_shorthand


def test_parse_shorthand_version():
    version = parse("3")

    assert version.major == 3
    assert version.minor is None
    assert version.is_shorthand


@pytest.mark.parametrize(
    "version_text",
    ["2.1.0", "-1", "", "a.b", "2.", ".1", " 2.1", "2.1 ", "2.1\n", "v2", "2.x", "٢"],
)
def test_malformed_versions_are_rejected(version_text):
    with pytest.raises(MalformedVersionError):
        parse(version_text)


def test_non_string_version_is_rejected():
    with pytest.raises(MalformedVersionError):
        parse(None)


def test_malformed_version_is_a_value_error():
    """Callers that only catch ValueError still see malformed versions"""
    with pytest.raises(ValueError) as exc_info:
        parse("2.1.0")

    assert exc_info.value.version_text == "2.1.0"
    assert "2.1.0" in str(exc_info.value)


@pytest.mark.parametrize(
    "first,second,expected",
    [
        (PipelineVersion(2, 1), PipelineVersion(2), True),
        (PipelineVersion(2, 1), PipelineVersion(2, 2), False),
        (PipelineVersion(2), PipelineVersion(3), False),
        (PipelineVersion(2), PipelineVersion(2), True),
        (PipelineVersion(2, 1), PipelineVersion(2, 1), True),
        (PipelineVersion(2, 1), PipelineVersion(3, 1), False),
    ],
)
def test_compatibility_table(first, second, expected):
    assert compatible_with(first, second) is expected
    # The relation is symmetric
    assert compatible_with(second, first) is expected


def test_equality_considers_minor():
    assert parse("2.1") == PipelineVersion(2, 1)
    assert parse("2") == PipelineVersion(2)
    assert parse("2") != parse("2.0")


def test_versions_are_immutable():
    version = parse("2.1")

    with pytest.raises(AttributeError):
        version.major = 3


def test_current_version():
    assert current_version() == PipelineVersion(2, 1)
    assert current_version() is CURRENT_VERSION
    assert current_version() is current_version()
    assert str(current_version()) == "2.1"
