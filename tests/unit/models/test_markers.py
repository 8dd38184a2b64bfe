"""Tests for marker models."""

import pytest
from pydantic import ValidationError

from case_builder.models.markers import (
    CaseSourceMarker,
    PropertyMarker,
    TestCaseMarker,
    TimeoutMarker,
)
from case_builder.testing.factories import (
    CaseSourceMarkerFactory,
    ExpectedExceptionMarkerFactory,
    PropertyMarkerFactory,
    TestCaseMarkerFactory,
)


def test_markers_are_frozen() -> None:
    """Markers cannot be modified once declared."""
    marker = TestCaseMarkerFactory.build()

    with pytest.raises(ValidationError):
        marker.arguments = (3,)  # type: ignore[misc]


def test_case_marker_keeps_arbitrary_arguments() -> None:
    """Arguments of any type are stored as given."""
    sentinel = object()

    marker = TestCaseMarker(arguments=(sentinel, [1, 2], None))

    assert marker.arguments[0] is sentinel
    assert marker.arguments[1] == [1, 2]
    assert marker.arguments[2] is None


def test_case_marker_defaults_to_no_arguments() -> None:
    """An argument-less case marker holds an empty tuple."""
    assert TestCaseMarker().arguments == ()


def test_case_source_marker_defaults_to_fixture() -> None:
    """Without a source type the fixture is used."""
    marker = CaseSourceMarkerFactory.build(source_name="values")

    assert marker.source_type is None
    assert marker == CaseSourceMarker(source_name="values")


def test_case_source_marker_rejects_non_type() -> None:
    """source_type must be a class."""
    with pytest.raises(ValidationError):
        CaseSourceMarker(source_name="values", source_type="Source")  # type: ignore[arg-type]


def test_expected_exception_factory_builds_valid_marker() -> None:
    """The factory produces a ValueError expectation."""
    marker = ExpectedExceptionMarkerFactory.build(message="boom", match="contains")

    assert marker.exception_type is ValueError
    assert marker.message == "boom"
    assert marker.match == "contains"


def test_property_marker_requires_name() -> None:
    """Property names cannot be empty."""
    with pytest.raises(ValidationError):
        PropertyMarker(name="", value=1)


def test_property_marker_factory() -> None:
    """The factory produces a named property."""
    marker = PropertyMarkerFactory.build(name="category")

    assert marker.name == "category"
    assert marker.value == "smoke"


def test_timeout_marker_is_a_timeout_property() -> None:
    """TimeoutMarker is named 'timeout' and coerces to float."""
    marker = TimeoutMarker(value=3)

    assert marker.name == "timeout"
    assert marker.value == 3.0
    assert isinstance(marker, PropertyMarker)
