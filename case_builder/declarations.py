"""Decorators that attach declarative test metadata to functions.

Markers are stored on the underlying function in a tuple, in the order the
decorators appear in source (top to bottom). Decorators can be stacked above
``staticmethod``/``classmethod`` as well as below them.
"""

from collections.abc import Callable, Sequence
from typing import Any

from case_builder.models.markers import (
    CaseSourceMarker,
    ExpectedExceptionMarker,
    Marker,
    MatchType,
    PropertyMarker,
    TestCaseMarker,
    TestMarker,
    TimeoutMarker,
)

MARKERS_ATTRIBUTE = "__case_builder_markers__"


def unwrap_function(member: Any) -> Any:
    """Return the function behind a staticmethod, classmethod or bound method."""
    return getattr(member, "__func__", member)


def get_markers[M: Marker](function: Any, marker_type: type[M]) -> Sequence[M]:
    """Return the markers of the given type declared on a function."""
    markers: Sequence[Marker] = getattr(
        unwrap_function(function), MARKERS_ATTRIBUTE, ()
    )
    return [marker for marker in markers if isinstance(marker, marker_type)]


def attach_marker[F](marker: Marker) -> Callable[[F], F]:
    """Build a decorator that records a marker on the decorated function."""

    def decorator(function: F) -> F:
        target = unwrap_function(function)
        existing: tuple[Marker, ...] = getattr(target, MARKERS_ATTRIBUTE, ())
        # Decorators run bottom-up; prepend to keep source order.
        setattr(target, MARKERS_ATTRIBUTE, (marker, *existing))
        return function

    return decorator


def test[F](function: F | None = None, /, *, description: str | None = None) -> Any:
    """Mark a function as a test.

    Usable bare (``@test``) or with arguments (``@test(description="...")``).
    """
    decorator: Callable[[F], F] = attach_marker(TestMarker(description=description))
    if function is None:
        return decorator
    return decorator(function)


test.__test__ = False  # type: ignore[attr-defined]


def case[F](*arguments: Any) -> Callable[[F], F]:
    """Declare one inline argument set for a parameterized test."""
    return attach_marker(TestCaseMarker(arguments=arguments))


def case_source[F](
    source_name: str, source_type: type | None = None
) -> Callable[[F], F]:
    """Declare a member that enumerates argument sets for a test.

    Args:
        source_name: Name of a field, property or zero-argument method
        source_type: Type declaring the member; defaults to the fixture

    """
    return attach_marker(
        CaseSourceMarker(source_name=source_name, source_type=source_type)
    )


def expected_exception[F](
    exception_type: type[BaseException] = BaseException,
    *,
    message: str | None = None,
    match: MatchType = "exact",
    user_message: str | None = None,
) -> Callable[[F], F]:
    """Declare that the test passes only when it raises ``exception_type``."""
    return attach_marker(
        ExpectedExceptionMarker(
            exception_type=exception_type,
            message=message,
            match=match,
            user_message=user_message,
        )
    )


def description[F](text: str) -> Callable[[F], F]:
    """Attach a description to a test."""
    return attach_marker(PropertyMarker(name="description", value=text))


def category[F](*names: str) -> Callable[[F], F]:
    """Attach one or more categories to a test."""

    def decorator(function: F) -> F:
        for name in reversed(names):
            function = attach_marker(PropertyMarker(name="category", value=name))(
                function
            )
        return function

    return decorator


def timeout[F](seconds: float) -> Callable[[F], F]:
    """Attach an execution timeout, in seconds, to a test."""
    return attach_marker(TimeoutMarker(value=seconds))


def metadata[F](name: str, value: Any) -> Callable[[F], F]:
    """Attach an arbitrary named property to a test."""
    return attach_marker(PropertyMarker(name=name, value=value))
