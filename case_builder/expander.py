"""Expand a test method into the argument sets it should be run with."""

import logging
from typing import Any

from case_builder.config import BuilderConfig
from case_builder.models.markers import CaseSourceMarker, TestCaseMarker
from case_builder.models.test import ArgumentSet, CaseData, TestMethod
from case_builder.sources import CaseSourceError, resolve_source_member

log = logging.getLogger(__name__)


def to_argument_set(element: Any, parameter_count: int) -> ArgumentSet:
    """Convert one enumerated source element into an argument set.

    CaseData is used verbatim. A list or tuple whose length equals the
    parameter count is used as-is. Anything else, strings included, becomes
    a single argument.
    """
    if isinstance(element, CaseData):
        return element.arguments
    if isinstance(element, (list, tuple)) and len(element) == parameter_count:
        return tuple(element)
    return (element,)


def source_argument_sets(
    method: TestMethod,
    marker: CaseSourceMarker,
    config: BuilderConfig,
) -> list[ArgumentSet]:
    """Argument sets contributed by one case source declaration.

    A source name that does not resolve to exactly one member contributes
    nothing, unless the configuration asks for strict sources.
    """
    source_type = marker.source_type
    if source_type is None:
        source_type = method.fixture
    member = resolve_source_member(source_type, marker.source_name)
    if member is None:
        if config.strict_sources:
            raise CaseSourceError(
                f"Case source {marker.source_name!r} for {method.full_name} "
                f"does not resolve to exactly one member of "
                f"{source_type.__qualname__}"
            )
        log.debug(
            "Skipping unresolved case source %r for %s",
            marker.source_name,
            method.full_name,
        )
        return []

    values = member.values(
        source_type, construct=config.construct_sources == "always"
    )
    parameter_count = method.parameter_count
    return [to_argument_set(value, parameter_count) for value in values]


def expand(
    method: TestMethod, config: BuilderConfig | None = None
) -> list[ArgumentSet]:
    """Return the argument sets for a test method, inline cases first.

    An empty list means the method is an ordinary, non-parameterized test.
    """
    config = config or BuilderConfig()

    argument_sets: list[ArgumentSet] = [
        marker.arguments for marker in method.markers(TestCaseMarker)
    ]
    for marker in method.markers(CaseSourceMarker):
        argument_sets.extend(source_argument_sets(method, marker, config))

    log.debug("Expanded %s into %d case(s)", method.full_name, len(argument_sets))
    return argument_sets
