"""Structural transforms over plain mappings and sequences.

All functions here are pure: inputs are never mutated and every call
returns a fresh ``dict``.

Key policy shared by :func:`pairs_to_map` and :func:`key_by_discriminant`:
keys must be ``str``, ``int``, finite ``float`` (``bool`` excluded), or an
``Enum`` member, which stands in for a symbol.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum, StrEnum
from typing import Any

from shapekit.domain.errors import (
    DuplicateDiscriminant,
    InvalidKey,
    MalformedPair,
    MissingDiscriminant,
)


class DuplicatePolicy(StrEnum):
    """How :func:`key_by_discriminant` resolves two items with one discriminant."""

    LAST_WINS = "last_wins"
    ERROR = "error"


def is_valid_key(key: object) -> bool:
    """Check whether *key* is a permitted map key."""
    if isinstance(key, bool):
        return False
    if isinstance(key, Enum):
        return True
    if isinstance(key, str | int):
        return True
    if isinstance(key, float):
        return math.isfinite(key)
    return False


def _check_key(key: object, **context: Any) -> None:
    if not is_valid_key(key):
        raise InvalidKey(
            f"Invalid key {key!r} of type {type(key).__name__}; "
            "expected str, int, finite float or Enum member",
            key=repr(key),
            key_type=type(key).__name__,
            **context,
        )


def _require_mapping(obj: object, op: str) -> Mapping[Any, Any]:
    if not isinstance(obj, Mapping):
        msg = f"{op} expects a mapping, got {type(obj).__name__}"
        raise TypeError(msg)
    return obj


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def filter_by_value[K, V](obj: Mapping[K, V], predicate: Callable[[V], bool]) -> dict[K, V]:
    """Keep only the pairs of *obj* whose value satisfies *predicate*.

    Output keys follow input order.

    Examples:
        >>> filter_by_value({"a": 1, "b": "x", "c": 2}, lambda v: isinstance(v, int))
        {'a': 1, 'c': 2}
    """
    source = _require_mapping(obj, "filter_by_value")
    return {key: value for key, value in source.items() if predicate(value)}


def omit_by_value[K, V](obj: Mapping[K, V], predicate: Callable[[V], bool]) -> dict[K, V]:
    """Drop the pairs of *obj* whose value satisfies *predicate*."""
    source = _require_mapping(obj, "omit_by_value")
    return {key: value for key, value in source.items() if not predicate(value)}


# ---------------------------------------------------------------------------
# Union merging
# ---------------------------------------------------------------------------


def _same_alternative(a: object, b: object) -> bool:
    # Type-sensitive so that 1, 1.0 and True stay distinct alternatives.
    if type(a) is not type(b):
        return False
    try:
        return bool(a == b)
    except Exception:
        return a is b


def merge_union(shapes: Iterable[Mapping[Any, Any]]) -> dict[Any, tuple[Any, ...]]:
    """Merge alternative shapes of the same slot into one shape.

    The result's keys are the union of all input keys. Each key maps to the
    tuple of distinct values contributed by the inputs that define it, in
    first-seen order. A key missing from an input contributes nothing for
    that input; disagreeing values are all kept, never overwritten.

    Examples:
        >>> merge_union([{"a": 1, "c": "x"}, {"a": "s", "b": True}])
        {'a': (1, 's'), 'c': ('x',), 'b': (True,)}
    """
    merged: dict[Any, list[Any]] = {}
    for index, shape in enumerate(shapes):
        if not isinstance(shape, Mapping):
            msg = f"merge_union expects mappings, got {type(shape).__name__} at index {index}"
            raise TypeError(msg)
        for key, value in shape.items():
            alternatives = merged.setdefault(key, [])
            if not any(_same_alternative(value, seen) for seen in alternatives):
                alternatives.append(value)
    return {key: tuple(values) for key, values in merged.items()}


def admits(merged: Mapping[Any, tuple[Any, ...]], key: Any, value: Any) -> bool:
    """Check whether slot *key* of a merged shape accepts *value*."""
    alternatives = merged.get(key)
    if alternatives is None:
        return False
    return any(_same_alternative(value, seen) for seen in alternatives)


# ---------------------------------------------------------------------------
# Keyed construction
# ---------------------------------------------------------------------------


def pairs_to_map(pairs: Iterable[Sequence[Any]]) -> dict[Any, Any]:
    """Build a mapping from explicit ``(key, value)`` pairs.

    When a key repeats, the last occurrence wins (the key keeps its first
    position, as with successive dict assignment).

    Raises:
        MalformedPair: an entry is not a two-item sequence.
        InvalidKey: a key is not a permitted key type.
    """
    result: dict[Any, Any] = {}
    for index, pair in enumerate(pairs):
        if isinstance(pair, str | bytes) or not isinstance(pair, Sequence) or len(pair) != 2:
            raise MalformedPair(
                f"Entry {index} is not a (key, value) pair: {pair!r}",
                index=index,
            )
        key, value = pair
        _check_key(key, index=index)
        result[key] = value
    return result


_MISSING = object()


def read_discriminant(item: object, field: str) -> Any:
    """Read *field* from *item*: by key for mappings, by attribute otherwise."""
    if isinstance(item, Mapping):
        return item.get(field, _MISSING)
    return getattr(item, field, _MISSING)


def key_by_discriminant(
    items: Iterable[Any],
    field: str,
    *,
    on_duplicate: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
) -> dict[Any, Any]:
    """Key each item of a variant set by the value of its discriminant *field*.

    Args:
        items: Variant members, either mappings or objects.
        field: Name of the discriminant key or attribute.
        on_duplicate: ``LAST_WINS`` keeps the later item (consistent with
            :func:`pairs_to_map`); ``ERROR`` fails fast.

    Raises:
        MissingDiscriminant: an item does not carry *field*.
        InvalidKey: a discriminant value is not a permitted key type.
        DuplicateDiscriminant: two items share a value under ``ERROR``.
    """
    keyed, _ = key_by_discriminant_tracked(items, field, on_duplicate=on_duplicate)
    return keyed


def key_by_discriminant_tracked(
    items: Iterable[Any],
    field: str,
    *,
    on_duplicate: DuplicatePolicy = DuplicatePolicy.LAST_WINS,
) -> tuple[dict[Any, Any], list[Any]]:
    """Same as :func:`key_by_discriminant`, also reporting overwrites.

    Returns ``(keyed, overwritten)`` where *overwritten* lists each
    discriminant value that replaced an earlier item, once, in the order
    the first overwrite happened. *items* is consumed in a single pass.
    """
    policy = DuplicatePolicy(on_duplicate)
    keyed: dict[Any, Any] = {}
    overwritten: dict[Any, None] = {}
    for index, item in enumerate(items):
        value = read_discriminant(item, field)
        if value is _MISSING:
            raise MissingDiscriminant(
                f"Item {index} has no discriminant field {field!r}",
                index=index,
                field=field,
            )
        _check_key(value, index=index, field=field)
        if value in keyed:
            if policy is DuplicatePolicy.ERROR:
                raise DuplicateDiscriminant(
                    f"Duplicate discriminant {field}={value!r} at index {index}",
                    index=index,
                    field=field,
                    value=value,
                )
            overwritten[value] = None
        keyed[value] = item
    return keyed, list(overwritten)
