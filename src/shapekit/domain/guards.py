"""Probe-driven narrowing guards.

A probe inspects a candidate and returns the narrowed evidence, or ABSENT
when the candidate does not belong to the narrower shape. The guard's truth
value is derived from the probe, never authored alongside it, so the boolean
check and the narrowing it implies cannot drift apart.

INVARIANT: A guard compares probe output against ABSENT by identity.
Falsy evidence (``0``, ``""``, ``None``, ``False``) is still a match.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Literal, TypeGuard, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Absent(Enum):
    """Sentinel type for "no match". Its only member is :data:`ABSENT`."""

    ABSENT = "ABSENT"

    def __bool__(self) -> bool:
        msg = "ABSENT has no truth value; compare with 'is ABSENT'"
        raise TypeError(msg)

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Literal[Absent.ABSENT] = Absent.ABSENT

type Probe[A, B] = Callable[[A], B | Literal[Absent.ABSENT]]


@dataclass(frozen=True, slots=True)
class Guard(Generic[T, U]):
    """Predicate derived from a probe. Build with :func:`guard_from`.

    Each call re-invokes the probe; nothing is cached. Exceptions raised
    by the probe propagate to the caller unchanged.
    """

    probe: Callable[[T], U | Literal[Absent.ABSENT]]

    def __call__(self, candidate: T) -> TypeGuard[U]:
        return self.probe(candidate) is not ABSENT

    def narrow(self, candidate: T) -> U | Literal[Absent.ABSENT]:
        """Return the probe's evidence for *candidate* (or ABSENT)."""
        return self.probe(candidate)

    def select(self, candidates: Iterable[T]) -> list[U]:
        """Evidence for every matching candidate, in input order."""
        matched: list[U] = []
        for candidate in candidates:
            evidence = self.probe(candidate)
            if evidence is not ABSENT:
                matched.append(evidence)
        return matched


def guard_from(probe: Callable[[T], U | Literal[Absent.ABSENT]]) -> Guard[T, U]:
    """Turn *probe* into a reusable narrowing predicate.

    ``guard_from(p)(c)`` is true exactly when ``p(c) is not ABSENT``.
    """
    if not callable(probe):
        msg = f"probe must be callable, got {type(probe).__name__}"
        raise TypeError(msg)
    return Guard(probe)


# ---------------------------------------------------------------------------
# Probe builders
# ---------------------------------------------------------------------------

_MISSING = object()


def _read_field(candidate: object, field: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(field, _MISSING)
    return getattr(candidate, field, _MISSING)


def discriminant_probe(field: str, *values: Any) -> Probe[Any, Any]:
    """Probe matching candidates whose *field* equals one of *values*.

    Mappings are read by key, other objects by attribute. The evidence
    is the candidate itself.
    """
    if not values:
        msg = "discriminant_probe requires at least one value"
        raise ValueError(msg)

    def probe(candidate: Any) -> Any:
        found = _read_field(candidate, field)
        if found is _MISSING:
            return ABSENT
        for value in values:
            if found == value and isinstance(found, bool) == isinstance(value, bool):
                return candidate
        return ABSENT

    probe.__name__ = f"{field}_in_{'_'.join(str(v) for v in values)}"
    return probe


def instance_probe(*types: type) -> Probe[Any, Any]:
    """Probe matching instances of any of *types*."""
    if not types:
        msg = "instance_probe requires at least one type"
        raise ValueError(msg)

    def probe(candidate: Any) -> Any:
        return candidate if isinstance(candidate, types) else ABSENT

    probe.__name__ = f"instance_of_{'_'.join(t.__name__ for t in types)}"
    return probe


def first_match(*probes: Probe[Any, Any]) -> Probe[Any, Any]:
    """Probe returning the evidence of the first probe that matches."""

    def probe(candidate: Any) -> Any:
        for inner in probes:
            evidence = inner(candidate)
            if evidence is not ABSENT:
                return evidence
        return ABSENT

    probe.__name__ = "first_match"
    return probe
