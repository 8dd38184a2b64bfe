"""Models for the declarative metadata attached to test methods."""

from typing import Any, Literal

from pydantic import Field

from case_builder.models.base import Model

type MatchType = Literal["exact", "contains", "regex", "starts_with"]


class Marker(Model):
    """Base for every declaration a decorator can attach to a function."""


class TestMarker(Marker):
    """Plain test declaration."""

    __test__ = False

    description: str | None = Field(
        default=None, description="Human-readable description of the test"
    )


class TestCaseMarker(Marker):
    """Inline case data: one argument set for a parameterized test."""

    __test__ = False

    arguments: tuple[Any, ...] = Field(
        default=(), description="Positional arguments for one invocation"
    )


class CaseSourceMarker(Marker):
    """Reference to a member that enumerates argument sets."""

    source_name: str = Field(
        ..., min_length=1, description="Field, property or method name"
    )
    source_type: type | None = Field(
        default=None,
        description="Type declaring the member (None means the fixture itself)",
    )


class ExpectedExceptionMarker(Marker):
    """Declares that the test is expected to raise."""

    exception_type: type[BaseException] = Field(
        default=BaseException,
        description="Exception type expected (BaseException accepts any exception)",
    )
    message: str | None = Field(
        default=None, description="Expected exception message, if checked"
    )
    match: MatchType = Field(
        default="exact", description="How message is compared to the actual one"
    )
    user_message: str | None = Field(
        default=None, description="Prefix for failure messages"
    )


class PropertyMarker(Marker):
    """Common metadata copied onto runnable tests (category, description...)."""

    name: str = Field(..., min_length=1, description="Property key")
    value: Any = Field(..., description="Property value")


class TimeoutMarker(PropertyMarker):
    """Execution timeout in seconds."""

    name: Literal["timeout"] = "timeout"
    value: float = Field(..., gt=0, description="Timeout in seconds")
