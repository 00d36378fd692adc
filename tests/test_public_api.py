"""End-to-end checks through the top-level ``shapekit`` namespace."""

from typing import Any

import pytest

import shapekit
from shapekit import (
    ABSENT,
    MutationRejected,
    admits,
    brand,
    deep_freeze,
    filter_by_value,
    guard_from,
    key_by_discriminant,
    merge_union,
    pairs_to_map,
    unbrand,
)


def test_all_exports_resolve() -> None:
    for name in shapekit.__all__:
        assert hasattr(shapekit, name), name


def test_version() -> None:
    assert shapekit.__version__ == "0.1.0"


def test_reference_properties() -> None:
    assert unbrand(brand("v", "T")) == "v"

    guard = guard_from(lambda c: c if c == 0 else ABSENT)
    assert guard(0) and not guard(1)

    source = {"a": 1, "b": "x"}
    assert filter_by_value(source, lambda v: isinstance(v, int)) == {"a": 1}

    assert pairs_to_map([("a", 1), ("a", 2)]) == {"a": 2}

    assert key_by_discriminant([{"kind": "apple"}, {"kind": "banana"}], "kind") == {
        "apple": {"kind": "apple"},
        "banana": {"kind": "banana"},
    }

    merged = merge_union([{"a": 1, "c": "x"}, {"a": "s", "b": True}])
    assert admits(merged, "a", 1) and admits(merged, "a", "s")
    assert admits(merged, "b", True) and admits(merged, "c", "x")


def test_cyclic_freeze() -> None:
    a: dict[str, Any] = {}
    b: dict[str, Any] = {"a": a}
    a["b"] = b
    frozen = deep_freeze(a)
    assert frozen["b"]["a"] is frozen
    with pytest.raises(MutationRejected):
        frozen["b"]["x"] = 1
