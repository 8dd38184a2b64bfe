"""Expected-exception handling for tests declared with ``@expected_exception``.

The processor only interprets outcomes; running the test and catching the
exception is left to the runner.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from case_builder.models.markers import ExpectedExceptionMarker, MatchType

log = logging.getLogger(__name__)

MESSAGE_MISMATCH_TEXT: Mapping[MatchType, str] = {
    "exact": "The exception message text was incorrect",
    "contains": "The exception message text did not contain the expected string",
    "regex": "The exception message text did not match the expected pattern",
    "starts_with": "The exception message text did not start with the expected string",
}


@dataclass(frozen=True, kw_only=True)
class ExceptionOutcome:
    """Verdict on a test run under an expected-exception declaration."""

    passed: bool
    message: str | None = None


def _type_name(exception_type: type[BaseException]) -> str:
    if exception_type.__module__ == "builtins":
        return exception_type.__qualname__
    return f"{exception_type.__module__}.{exception_type.__qualname__}"


@dataclass(frozen=True, kw_only=True)
class ExpectedExceptionProcessor:
    """Decides pass/fail for a test that is expected to raise."""

    test_name: str
    marker: ExpectedExceptionMarker

    @property
    def expects_any_exception(self) -> bool:
        return self.marker.exception_type is BaseException

    @property
    def expected_name(self) -> str:
        if self.expects_any_exception:
            return "An exception"
        return _type_name(self.marker.exception_type)

    def on_completed(self) -> ExceptionOutcome:
        """Outcome when the test body returned without raising."""
        return self._failure(f"{self.expected_name} was expected")

    def on_exception(self, exception: BaseException) -> ExceptionOutcome:
        """Outcome when the test body raised ``exception``."""
        actual_type = type(exception)
        if (
            not self.expects_any_exception
            and actual_type is not self.marker.exception_type
        ):
            return self._failure(
                "An unexpected exception type was thrown\n"
                f"Expected: {self.expected_name}\n"
                f" but was: {_type_name(actual_type)}: {exception}"
            )

        expected_message = self.marker.message
        actual_message = str(exception)
        if expected_message is not None and not self.message_matches(actual_message):
            return self._failure(
                f"{MESSAGE_MISMATCH_TEXT[self.marker.match]}\n"
                f"Expected: {expected_message}\n"
                f" but was: {actual_message}"
            )

        log.debug(
            "Test %s raised expected %s", self.test_name, _type_name(actual_type)
        )
        return ExceptionOutcome(passed=True)

    def message_matches(self, actual: str) -> bool:
        expected = self.marker.message
        if expected is None:
            return True

        if self.marker.match == "contains":
            return expected in actual
        if self.marker.match == "regex":
            return re.search(expected, actual) is not None
        if self.marker.match == "starts_with":
            return actual.startswith(expected)
        return actual == expected

    def _failure(self, message: str) -> ExceptionOutcome:
        if self.marker.user_message:
            message = f"{self.marker.user_message}\n{message}"
        log.debug("Test %s failed expected-exception check: %s", self.test_name, message)
        return ExceptionOutcome(passed=False, message=message)
