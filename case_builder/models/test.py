"""Models for test methods and the executable tests built from them."""

import inspect
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Literal

from case_builder.declarations import get_markers, unwrap_function
from case_builder.expected import ExpectedExceptionProcessor
from case_builder.models.markers import Marker

type ArgumentSet = tuple[Any, ...]
type RunState = Literal["runnable", "not_runnable"]
type MethodKind = Literal["instance", "static", "class"]
type Properties = tuple[tuple[str, tuple[Any, ...]], ...]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True, kw_only=True)
class TestMethod:
    """A candidate test method, identified by its fixture and name.

    The method is looked up statically on the fixture, so properties and
    descriptors are never triggered and inherited methods resolve to the
    base class declaration.
    """

    __test__ = False

    fixture: type
    name: str

    def __post_init__(self) -> None:
        if not callable(self.function):
            raise TypeError(f"{self.full_name} is not a method")

    @cached_property
    def declared(self) -> Any:
        """Member as declared on the class (may be a staticmethod/classmethod)."""
        return inspect.getattr_static(self.fixture, self.name)

    @property
    def function(self) -> Any:
        return unwrap_function(self.declared)

    @property
    def kind(self) -> MethodKind:
        if isinstance(self.declared, staticmethod):
            return "static"
        if isinstance(self.declared, classmethod):
            return "class"
        return "instance"

    @property
    def full_name(self) -> str:
        return f"{self.fixture.__qualname__}.{self.name}"

    @cached_property
    def signature(self) -> inspect.Signature:
        return inspect.signature(self.function)

    @property
    def parameters(self) -> Sequence[inspect.Parameter]:
        """Positional parameters, without the bound ``self``/``cls``.

        Argument sets are passed by position, so variadics and keyword-only
        parameters are not counted.
        """
        parameters = list(self.signature.parameters.values())
        if self.kind != "static" and parameters and parameters[0].kind in _POSITIONAL:
            parameters = parameters[1:]
        return [p for p in parameters if p.kind in _POSITIONAL]

    @property
    def required_keywords(self) -> Sequence[inspect.Parameter]:
        """Keyword-only parameters without a default."""
        return [
            p
            for p in self.signature.parameters.values()
            if p.kind is inspect.Parameter.KEYWORD_ONLY
            and p.default is inspect.Parameter.empty
        ]

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    @property
    def return_annotation(self) -> Any:
        return self.signature.return_annotation

    def markers[M: Marker](
        self, marker_type: type[M], *, inherit: bool = False
    ) -> Sequence[M]:
        """Return markers declared on the method.

        With ``inherit`` the same-named declarations of every class in the
        fixture's MRO are searched too, most derived first.
        """
        if not inherit:
            return get_markers(self.function, marker_type)

        found: list[M] = []
        for klass in self.fixture.__mro__:
            if self.name in vars(klass):
                found.extend(get_markers(vars(klass)[self.name], marker_type))
        return found


class CaseData:
    """Explicit argument set yielded by a case source.

    Used verbatim, so a single list argument can be passed to a
    one-parameter test without being unpacked.
    """

    __slots__ = ("arguments",)

    def __init__(self, *arguments: Any) -> None:
        self.arguments: ArgumentSet = arguments

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CaseData):
            return NotImplemented
        return self.arguments == other.arguments

    def __hash__(self) -> int:
        return hash(self.arguments)

    def __repr__(self) -> str:
        return f"CaseData{self.arguments!r}"


def format_case_name(method_name: str, arguments: ArgumentSet | None) -> str:
    """Name a single case after its method and arguments."""
    if arguments is None:
        return method_name
    return f"{method_name}({', '.join(repr(arg) for arg in arguments)})"


@dataclass(frozen=True, kw_only=True)
class TestUnit:
    """A single executable test.

    ``arguments`` is None for a no-argument invocation. The run state is
    decided before construction and never changes afterwards. ``properties``
    holds ``(name, values)`` pairs in declaration order.
    """

    __test__ = False

    method: TestMethod
    arguments: ArgumentSet | None = None
    run_state: RunState = "runnable"
    reason: str | None = None
    exception_processor: ExpectedExceptionProcessor | None = None
    properties: Properties = ()

    def get_property(self, name: str) -> tuple[Any, ...]:
        return dict(self.properties).get(name, ())

    @property
    def name(self) -> str:
        return format_case_name(self.method.name, self.arguments)

    @property
    def full_name(self) -> str:
        return f"{self.method.fixture.__qualname__}.{self.name}"

    @property
    def is_runnable(self) -> bool:
        return self.run_state == "runnable"


@dataclass(frozen=True, kw_only=True)
class TestGroup:
    """Ordered cases expanded from one parameterized method."""

    __test__ = False

    method: TestMethod
    children: tuple[TestUnit, ...]

    @property
    def name(self) -> str:
        return self.method.name

    @property
    def full_name(self) -> str:
        return self.method.full_name


type Test = TestUnit | TestGroup


def iter_leaves(test: Test) -> Iterator[TestUnit]:
    """Yield the individually reportable units of a test, in order."""
    if isinstance(test, TestGroup):
        yield from test.children
    else:
        yield test
