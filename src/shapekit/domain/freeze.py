"""Deep immutability for nested mapping / sequence graphs.

:func:`deep_freeze` copies a value graph into read-only nodes:

- mappings become :class:`FrozenDict`
- lists and tuples become :class:`FrozenList`
- sets become ``frozenset``, ``bytearray`` becomes ``bytes``
- primitives, immutable stdlib values (numbers, dates, UUIDs, pure paths)
  and callables are returned unchanged (callables are opaque)
- BrandedValue leaves are re-branded around their frozen raw value

Every mutator on a frozen node raises :class:`MutationRejected`.

INVARIANT: Each source node is frozen exactly once per call. Shared and
cyclic references map to the same frozen node, tracked by ``id()`` in a
memo local to the call.
"""

from __future__ import annotations

import datetime
import numbers
import reprlib
import uuid
from collections.abc import Iterator, Mapping, Sequence, Set
from enum import Enum
from pathlib import PurePath
from types import MappingProxyType
from typing import Any, NoReturn

from shapekit.domain.brand import BrandedValue, brand, unbrand
from shapekit.domain.errors import MutationRejected, UnfreezableValue

_PRIMITIVES = (
    type(None),
    numbers.Number,
    str,
    bytes,
    Enum,
    frozenset,
    range,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    PurePath,
)


def _reject(node: object, operation: str) -> NoReturn:
    raise MutationRejected(
        f"{type(node).__name__} is read-only; {operation}() is not allowed",
        node=type(node).__name__,
        operation=operation,
    )


def _restore(plain: Any) -> Any:
    # Content was accepted by a previous freeze, so opaque leaves are allowed.
    return deep_freeze(plain, strict=False)


class FrozenDict(Mapping[Any, Any]):
    """Read-only mapping node produced by :func:`deep_freeze`.

    Nodes are immutable, so ``copy.copy`` and ``copy.deepcopy`` return the
    node itself; pickling round-trips through :func:`thaw`.
    """

    __slots__ = ("_data",)

    _data: Mapping[Any, Any]

    def __init__(self) -> None:
        object.__setattr__(self, "_data", {})

    def _seal(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(self._data))

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._data) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        return f"FrozenDict({dict(self._data)!r})"

    def __copy__(self) -> FrozenDict:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> FrozenDict:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (thaw(self),))

    def __setitem__(self, key: Any, value: Any) -> NoReturn:
        _reject(self, "__setitem__")

    def __delitem__(self, key: Any) -> NoReturn:
        _reject(self, "__delitem__")

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        _reject(self, "__setattr__")

    def __delattr__(self, name: str) -> NoReturn:
        _reject(self, "__delattr__")

    def __ior__(self, other: Any) -> NoReturn:
        _reject(self, "__ior__")

    def update(self, *args: Any, **kwargs: Any) -> NoReturn:
        _reject(self, "update")

    def setdefault(self, key: Any, default: Any = None) -> NoReturn:
        _reject(self, "setdefault")

    def pop(self, key: Any, *default: Any) -> NoReturn:
        _reject(self, "pop")

    def popitem(self) -> NoReturn:
        _reject(self, "popitem")

    def clear(self) -> NoReturn:
        _reject(self, "clear")


class FrozenList(Sequence[Any]):
    """Read-only sequence node produced by :func:`deep_freeze`."""

    __slots__ = ("_items",)

    _items: Sequence[Any]

    def __init__(self) -> None:
        object.__setattr__(self, "_items", [])

    def _seal(self) -> None:
        object.__setattr__(self, "_items", tuple(self._items))

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            # Slices share the already-frozen children.
            sliced = FrozenList()
            object.__setattr__(sliced, "_items", tuple(self._items[index]))
            return sliced
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrozenList):
            return list(self._items) == list(other._items)
        if isinstance(other, list | tuple):
            return list(self._items) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        return f"FrozenList({list(self._items)!r})"

    def __copy__(self) -> FrozenList:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> FrozenList:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (thaw(self),))

    def __setitem__(self, index: Any, value: Any) -> NoReturn:
        _reject(self, "__setitem__")

    def __delitem__(self, index: Any) -> NoReturn:
        _reject(self, "__delitem__")

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        _reject(self, "__setattr__")

    def __delattr__(self, name: str) -> NoReturn:
        _reject(self, "__delattr__")

    def __iadd__(self, other: Any) -> NoReturn:
        _reject(self, "__iadd__")

    def __imul__(self, other: Any) -> NoReturn:
        _reject(self, "__imul__")

    def append(self, value: Any) -> NoReturn:
        _reject(self, "append")

    def extend(self, values: Any) -> NoReturn:
        _reject(self, "extend")

    def insert(self, index: int, value: Any) -> NoReturn:
        _reject(self, "insert")

    def pop(self, index: int = -1) -> NoReturn:
        _reject(self, "pop")

    def remove(self, value: Any) -> NoReturn:
        _reject(self, "remove")

    def clear(self) -> NoReturn:
        _reject(self, "clear")

    def sort(self, *args: Any, **kwargs: Any) -> NoReturn:
        _reject(self, "sort")

    def reverse(self) -> NoReturn:
        _reject(self, "reverse")


def is_frozen(value: object) -> bool:
    """Check whether *value* is a frozen graph node."""
    return isinstance(value, FrozenDict | FrozenList)


class _Freezer:
    """Single-use traversal state for one :func:`deep_freeze` call."""

    def __init__(self, *, strict: bool) -> None:
        self.strict = strict
        # Sources are kept alive alongside their frozen node so ids stay unique.
        self.memo: dict[int, tuple[Any, Any]] = {}
        self.pending: list[tuple[Any, Any]] = []

    def node(self, value: Any) -> Any:
        """Frozen counterpart of *value*; containers are filled later."""
        if isinstance(value, _PRIMITIVES) or is_frozen(value):
            return value
        if isinstance(value, Mapping | list | tuple | Set | bytearray | BrandedValue):
            cached = self.memo.get(id(value))
            if cached is not None:
                return cached[1]
            return self._shell(value)
        if callable(value):
            return value
        if self.strict:
            raise UnfreezableValue(
                f"Cannot freeze value of type {type(value).__name__}",
                value_type=type(value).__name__,
            )
        return value

    def _shell(self, value: Any) -> Any:
        frozen: Any
        if isinstance(value, Mapping):
            frozen = FrozenDict()
            self.pending.append((value, frozen))
        elif isinstance(value, list | tuple):
            frozen = FrozenList()
            self.pending.append((value, frozen))
        elif isinstance(value, bytearray):
            frozen = bytes(value)
        elif isinstance(value, BrandedValue):
            frozen = brand(self.node(unbrand(value)), value.tag)
        else:
            frozen = frozenset(value)
        self.memo[id(value)] = (value, frozen)
        return frozen

    def run(self, value: Any) -> Any:
        root = self.node(value)
        while self.pending:
            source, frozen = self.pending.pop()
            if isinstance(frozen, FrozenDict):
                data = frozen._data
                for key, child in source.items():
                    data[key] = self.node(child)  # type: ignore[index]
            else:
                items = frozen._items
                for child in source:
                    items.append(self.node(child))  # type: ignore[attr-defined]
            frozen._seal()
        return root


def deep_freeze(value: Any, *, strict: bool = True) -> Any:
    """Return a read-only deep copy of *value*.

    Args:
        value: Any nested graph of mappings, lists, tuples and sets.
        strict: When True, objects that are neither containers, primitives
            nor callables raise :class:`UnfreezableValue`. When False they
            are passed through as opaque leaves.

    The input is never mutated, and later mutation of the input is not
    visible through the frozen result. Errors are raised before any frozen
    node is returned.
    """
    return _Freezer(strict=strict).run(value)


def thaw(value: Any) -> Any:
    """Return a mutable deep copy of a frozen graph.

    FrozenDict becomes ``dict`` and FrozenList becomes ``list``; shared and
    cyclic references are preserved. Non-frozen values pass through.
    """
    memo: dict[int, Any] = {}
    pending: list[tuple[Any, Any]] = []

    def node(item: Any) -> Any:
        if isinstance(item, BrandedValue):
            return brand(node(unbrand(item)), item.tag)
        if not is_frozen(item):
            return item
        cached = memo.get(id(item))
        if cached is not None:
            return cached
        fresh: Any = {} if isinstance(item, FrozenDict) else []
        memo[id(item)] = fresh
        pending.append((item, fresh))
        return fresh

    root = node(value)
    while pending:
        source, fresh = pending.pop()
        if isinstance(fresh, dict):
            for key, child in source.items():
                fresh[key] = node(child)
        else:
            fresh.extend(node(child) for child in source)
    return root
