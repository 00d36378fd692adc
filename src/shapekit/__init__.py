"""Structural narrowing and transformation toolkit.

Pure, synchronous helpers for branded values, probe-driven guards,
structural mapping transforms, and deep immutability.
"""

from shapekit.domain.brand import (
    ANY_TAG,
    AnyTag,
    Brand,
    BrandedValue,
    brand,
    is_branded,
    tag_of,
    unbrand,
)
from shapekit.domain.errors import (
    DuplicateDiscriminant,
    ErrorCode,
    InvalidKey,
    MalformedPair,
    MissingDiscriminant,
    MutationRejected,
    NotBranded,
    ShapekitError,
    TagMismatch,
    UnfreezableValue,
)
from shapekit.domain.freeze import FrozenDict, FrozenList, deep_freeze, is_frozen, thaw
from shapekit.domain.guards import (
    ABSENT,
    Absent,
    Guard,
    discriminant_probe,
    first_match,
    guard_from,
    instance_probe,
)
from shapekit.domain.transforms import (
    DuplicatePolicy,
    admits,
    filter_by_value,
    key_by_discriminant,
    key_by_discriminant_tracked,
    merge_union,
    omit_by_value,
    pairs_to_map,
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "ANY_TAG",
    "Absent",
    "AnyTag",
    "Brand",
    "BrandedValue",
    "DuplicateDiscriminant",
    "DuplicatePolicy",
    "ErrorCode",
    "FrozenDict",
    "FrozenList",
    "Guard",
    "InvalidKey",
    "MalformedPair",
    "MissingDiscriminant",
    "MutationRejected",
    "NotBranded",
    "ShapekitError",
    "TagMismatch",
    "UnfreezableValue",
    "admits",
    "brand",
    "deep_freeze",
    "discriminant_probe",
    "filter_by_value",
    "first_match",
    "guard_from",
    "instance_probe",
    "is_branded",
    "is_frozen",
    "key_by_discriminant",
    "key_by_discriminant_tracked",
    "merge_union",
    "omit_by_value",
    "pairs_to_map",
    "tag_of",
    "thaw",
    "unbrand",
]
