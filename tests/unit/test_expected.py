"""Tests for the expected-exception processor."""

import pytest

from case_builder.expected import ExpectedExceptionProcessor
from case_builder.models.markers import ExpectedExceptionMarker
from case_builder.testing.factories import (
    ExceptionOutcomeFactory,
    ExpectedExceptionMarkerFactory,
)


class CustomError(ValueError):
    pass


def processor(marker: ExpectedExceptionMarker) -> ExpectedExceptionProcessor:
    return ExpectedExceptionProcessor(test_name="Fixture.check", marker=marker)


def test_completion_without_exception_fails() -> None:
    """Returning normally fails when an exception was expected."""
    outcome = processor(ExpectedExceptionMarkerFactory.build()).on_completed()

    assert outcome == ExceptionOutcomeFactory.build(
        passed=False, message="ValueError was expected"
    )


def test_any_exception_expected() -> None:
    """BaseException as the expected type accepts any exception."""
    handler = processor(ExpectedExceptionMarker())

    assert handler.expects_any_exception
    assert handler.on_exception(RuntimeError("boom")).passed
    assert handler.on_completed().message == "An exception was expected"


def test_matching_exception_type_passes() -> None:
    """Raising exactly the expected type passes."""
    outcome = processor(ExpectedExceptionMarkerFactory.build()).on_exception(
        ValueError("bad")
    )

    assert outcome.passed
    assert outcome.message is None


def test_subclass_of_expected_type_fails() -> None:
    """The exception type must match exactly."""
    outcome = processor(ExpectedExceptionMarkerFactory.build()).on_exception(
        CustomError("bad")
    )

    assert not outcome.passed
    assert outcome.message is not None
    assert outcome.message.startswith("An unexpected exception type was thrown")
    assert "Expected: ValueError" in outcome.message
    assert "CustomError: bad" in outcome.message


@pytest.mark.parametrize(
    ("match", "expected", "actual", "passed"),
    [
        ("exact", "bad value", "bad value", True),
        ("exact", "bad", "bad value", False),
        ("contains", "value", "a bad value", True),
        ("contains", "good", "a bad value", False),
        ("regex", r"^bad \w+$", "bad value", True),
        ("regex", r"^\d+$", "bad value", False),
        ("starts_with", "bad", "bad value", True),
        ("starts_with", "value", "bad value", False),
    ],
)
def test_message_matching(match: str, expected: str, actual: str, passed: bool) -> None:
    """The exception message is compared according to the match type."""
    marker = ExpectedExceptionMarkerFactory.build(message=expected, match=match)

    outcome = processor(marker).on_exception(ValueError(actual))

    assert outcome.passed is passed
    if not passed:
        assert outcome.message is not None
        assert f"Expected: {expected}" in outcome.message
        assert f" but was: {actual}" in outcome.message


def test_user_message_is_prepended() -> None:
    """A user message prefixes every failure message."""
    marker = ExpectedExceptionMarkerFactory.build(user_message="parsing must fail")

    outcome = processor(marker).on_completed()

    assert outcome.message == "parsing must fail\nValueError was expected"


def test_non_builtin_types_are_qualified() -> None:
    """Exceptions outside builtins are named with their module."""
    marker = ExpectedExceptionMarker(exception_type=CustomError)

    assert processor(marker).expected_name == f"{__name__}.CustomError"
