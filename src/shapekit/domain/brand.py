"""Opaque branded values.

A BrandedValue pairs a raw value with a nominal tag. Two values with the
same underlying type but different tags are never interchangeable: the only
way in is :func:`brand`, the only way out is :func:`unbrand`.

INVARIANT: No implicit conversion exists between a raw value and a
BrandedValue, or between BrandedValues of different tags.
"""

from __future__ import annotations

from collections.abc import Hashable
from enum import Enum
from typing import Any, Generic, NoReturn, TypeGuard, TypeVar

from shapekit.domain.errors import MutationRejected, NotBranded, TagMismatch

V = TypeVar("V")
Tag = TypeVar("Tag", bound=Hashable)

# Construction token; BrandedValue.__new__ refuses anything else.
_MINT = object()


class AnyTag(Enum):
    """Default for tag checks: accept a value branded with any tag.

    ``None`` is a legal tag, so it cannot double as "do not check".
    """

    ANY_TAG = "ANY_TAG"

    def __repr__(self) -> str:
        return "ANY_TAG"


ANY_TAG = AnyTag.ANY_TAG


class BrandedValue(Generic[V, Tag]):
    """Immutable ``(raw, tag)`` handle. Create with :func:`brand`."""

    __slots__ = ("_raw", "_tag")

    _raw: V
    _tag: Tag

    def __new__(cls, token: object, raw: V, tag: Tag) -> BrandedValue[V, Tag]:
        if token is not _MINT:
            msg = "BrandedValue cannot be constructed directly; use brand()"
            raise TypeError(msg)
        self = super().__new__(cls)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_tag", tag)
        return self

    @property
    def tag(self) -> Tag:
        return self._tag

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise MutationRejected(
            f"BrandedValue is immutable; cannot set {name!r}", node="BrandedValue", attr=name
        )

    def __delattr__(self, name: str) -> NoReturn:
        raise MutationRejected(
            f"BrandedValue is immutable; cannot delete {name!r}", node="BrandedValue", attr=name
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BrandedValue):
            return NotImplemented
        return self._tag == other._tag and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((BrandedValue, self._tag, self._raw))

    def __repr__(self) -> str:
        return f"BrandedValue(tag={self._tag!r}, raw={self._raw!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (brand, (self._raw, self._tag))


def brand[T, K: Hashable](value: T, tag: K) -> BrandedValue[T, K]:
    """Wrap *value* with the nominal *tag*. Always succeeds."""
    return BrandedValue(_MINT, value, tag)


def unbrand[T](b: BrandedValue[T, Any], tag: Hashable = ANY_TAG) -> T:
    """Return the raw value held by *b*.

    Raises:
        NotBranded: *b* is not a BrandedValue.
        TagMismatch: *tag* is not ``ANY_TAG`` and differs from the tag of *b*.
    """
    if not isinstance(b, BrandedValue):
        raise NotBranded(
            f"Expected a BrandedValue, got {type(b).__name__}", received=type(b).__name__
        )
    if tag is not ANY_TAG and b._tag != tag:
        raise TagMismatch(
            f"Expected tag {tag!r}, got {b._tag!r}", expected=tag, actual=b._tag
        )
    return b._raw


def tag_of(b: BrandedValue[Any, Tag]) -> Tag:
    """Return the tag of *b*."""
    if not isinstance(b, BrandedValue):
        raise NotBranded(
            f"Expected a BrandedValue, got {type(b).__name__}", received=type(b).__name__
        )
    return b._tag


def is_branded(value: object, tag: Hashable = ANY_TAG) -> TypeGuard[BrandedValue[Any, Any]]:
    """Check whether *value* is branded (with *tag*, when given)."""
    if not isinstance(value, BrandedValue):
        return False
    return tag is ANY_TAG or value._tag == tag


class Brand(Generic[V]):
    """Factory bound to a single tag.

    Usage::

        UserId = Brand[int]("UserId")
        uid = UserId(42)
        UserId.unwrap(uid)  # 42
    """

    __slots__ = ("name",)

    def __init__(self, name: Hashable) -> None:
        self.name = name

    def __call__(self, value: V) -> BrandedValue[V, Any]:
        return brand(value, self.name)

    def unwrap(self, b: BrandedValue[V, Any]) -> V:
        return unbrand(b, self.name)

    def is_instance(self, value: object) -> TypeGuard[BrandedValue[V, Any]]:
        return is_branded(value, self.name)

    def __repr__(self) -> str:
        return f"Brand({self.name!r})"
