"""Decide whether a fixture method is a test."""

from case_builder.models.markers import CaseSourceMarker, TestCaseMarker, TestMarker
from case_builder.models.test import TestMethod

TEST_MARKERS = (TestMarker, TestCaseMarker, CaseSourceMarker)


def is_test_method(method: TestMethod) -> bool:
    """Check if a method is declared as a test, including inherited declarations."""
    return any(
        method.markers(marker_type, inherit=True) for marker_type in TEST_MARKERS
    )
