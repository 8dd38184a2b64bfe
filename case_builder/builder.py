"""Build executable tests from test methods."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from case_builder.classifier import is_test_method
from case_builder.config import BuilderConfig
from case_builder.expander import expand
from case_builder.expected import ExpectedExceptionProcessor
from case_builder.models.markers import (
    ExpectedExceptionMarker,
    PropertyMarker,
    TestMarker,
)
from case_builder.models.test import (
    ArgumentSet,
    Properties,
    Test,
    TestGroup,
    TestMethod,
    TestUnit,
    format_case_name,
)
from case_builder.validation import validate_signature

log = logging.getLogger(__name__)


def collect_properties(method: TestMethod) -> Properties:
    """Gather the common metadata declared on a method as (name, values) pairs."""
    properties: dict[str, list[Any]] = {}
    for test_marker in method.markers(TestMarker):
        if test_marker.description is not None:
            properties.setdefault("description", []).append(test_marker.description)
    for marker in method.markers(PropertyMarker):
        properties.setdefault(marker.name, []).append(marker.value)
    return tuple((name, tuple(values)) for name, values in properties.items())


@dataclass(frozen=True, kw_only=True)
class TestCaseBuilder:
    """Turns candidate fixture methods into tests."""

    __test__ = False

    config: BuilderConfig = field(default_factory=BuilderConfig)

    def is_test_method(self, method: TestMethod) -> bool:
        return is_test_method(method)

    def expand(self, method: TestMethod) -> list[ArgumentSet]:
        return expand(method, self.config)

    def build(
        self, method: TestMethod, arguments: Sequence[Any] | None = None
    ) -> TestUnit:
        """Build a single test unit, marking it not runnable on a bad signature.

        Common metadata and the expected-exception processor are only
        attached to runnable units.
        """
        argument_set = tuple(arguments) if arguments is not None else None

        if (reason := validate_signature(method, argument_set)) is not None:
            log.debug("%s is not runnable: %s", method.full_name, reason)
            return TestUnit(
                method=method,
                arguments=argument_set,
                run_state="not_runnable",
                reason=reason,
            )

        processor = None
        if expected := method.markers(ExpectedExceptionMarker):
            processor = ExpectedExceptionProcessor(
                test_name=(
                    f"{method.fixture.__qualname__}."
                    f"{format_case_name(method.name, argument_set)}"
                ),
                marker=expected[0],
            )

        return TestUnit(
            method=method,
            arguments=argument_set,
            exception_processor=processor,
            properties=collect_properties(method),
        )

    def assemble(self, method: TestMethod) -> Test:
        """Build the test for a method: a single unit, or a group of cases.

        Any argument set makes a group, even a lone one; its children keep
        expansion order.
        """
        argument_sets = self.expand(method)

        if not argument_sets:
            return self.build(method)

        return TestGroup(
            method=method,
            children=tuple(
                self.build(method, arguments) for arguments in argument_sets
            ),
        )


default_builder = TestCaseBuilder()


def build(method: TestMethod, arguments: Sequence[Any] | None = None) -> TestUnit:
    """Build a single test unit with the default configuration."""
    return default_builder.build(method, arguments)


def assemble(method: TestMethod) -> Test:
    """Build the test for a method with the default configuration."""
    return default_builder.assemble(method)
