"""Resolve and read case sources: members that enumerate argument sets.

A case source is a field, property or zero-argument method found on a source
type. Lookup covers class attributes (static members), properties, methods
and annotation-only instance fields, and expands private ``__name`` lookups
to the name-mangled attribute of every class in the MRO.
"""

import inspect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Literal

log = logging.getLogger(__name__)

type MemberKind = Literal["field", "property", "method"]


class CaseSourceError(Exception):
    """Raised when a case source cannot be resolved, constructed or read."""


@dataclass(frozen=True, kw_only=True)
class SourceMember:
    """A single member resolved on a source type."""

    owner: type
    attribute: str
    kind: MemberKind
    static: bool

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__qualname__}.{self.attribute}"

    def values(self, source_type: type, *, construct: bool = False) -> Sequence[Any]:
        """Read the member and enumerate its values.

        The source type is constructed with no arguments when the member is
        an instance member, or always when ``construct`` is set.

        Raises:
            CaseSourceError: If construction, reading or enumeration fails,
                or the value is not iterable

        """
        target: Any = source_type
        if construct or not self.static:
            target = construct_source(source_type)

        try:
            value = getattr(target, self.attribute)
            if self.kind == "method":
                value = value()
        except Exception as exc:
            raise CaseSourceError(
                f"Cannot read case source {self.qualified_name}: {exc}"
            ) from exc

        if not isinstance(value, Iterable):
            raise CaseSourceError(
                f"Case source {self.qualified_name} returned "
                f"{type(value).__name__}, which is not iterable"
            )

        try:
            return list(value)
        except Exception as exc:
            raise CaseSourceError(
                f"Cannot enumerate case source {self.qualified_name}: {exc}"
            ) from exc


def construct_source(source_type: type) -> Any:
    """Create a source instance using its zero-argument constructor."""
    try:
        return source_type()
    except Exception as exc:
        raise CaseSourceError(
            f"Cannot construct case source type {source_type.__qualname__}: {exc}"
        ) from exc


def _classify(owner: type, attribute: str, raw: Any) -> SourceMember:
    """Build a SourceMember from a raw class ``__dict__`` entry."""
    if isinstance(raw, (staticmethod, classmethod)):
        return SourceMember(owner=owner, attribute=attribute, kind="method", static=True)
    if isinstance(raw, (property, cached_property)):
        return SourceMember(
            owner=owner, attribute=attribute, kind="property", static=False
        )
    if inspect.isfunction(raw):
        return SourceMember(owner=owner, attribute=attribute, kind="method", static=False)
    return SourceMember(owner=owner, attribute=attribute, kind="field", static=True)


def _find_declared(klass: type, attribute: str) -> SourceMember | None:
    """Find an attribute declared directly on a class."""
    namespace = vars(klass)
    if attribute in namespace:
        return _classify(klass, attribute, namespace[attribute])
    if attribute in inspect.get_annotations(klass):
        # Annotation without a class value: an instance field.
        return SourceMember(owner=klass, attribute=attribute, kind="field", static=False)
    return None


def _is_private(name: str) -> bool:
    return name.startswith("__") and not name.endswith("__")


def resolve_source_members(source_type: type, name: str) -> Sequence[SourceMember]:
    """Return every member of ``source_type`` matching ``name``.

    A public name resolves to at most one member (the most derived
    declaration). A private name can resolve to several, one per class in
    the MRO that declares it.
    """
    classes = [klass for klass in source_type.__mro__ if klass is not object]

    if _is_private(name):
        members: list[SourceMember] = []
        for klass in classes:
            mangled = f"_{klass.__name__.lstrip('_')}{name}"
            if (member := _find_declared(klass, mangled)) is not None:
                members.append(member)
        return members

    for klass in classes:
        if (member := _find_declared(klass, name)) is not None:
            return [member]
    return []


def resolve_source_member(source_type: type, name: str) -> SourceMember | None:
    """Resolve ``name`` to exactly one member, or None if missing or ambiguous."""
    members = resolve_source_members(source_type, name)
    if len(members) != 1:
        log.debug(
            "Case source %r on %s matched %d member(s)",
            name,
            source_type.__qualname__,
            len(members),
        )
        return None
    return members[0]
