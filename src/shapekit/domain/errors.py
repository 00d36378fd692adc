"""Error taxonomy for the toolkit.

Every error carries a stable ``code`` and a ``detail`` payload, and also
subclasses the builtin exception it refines so callers may catch either.

INVARIANT: Errors are raised synchronously at the offending call.
Exceptions raised by caller-supplied probes are never wrapped here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable machine-readable error codes."""

    INVALID_KEY = "INVALID_KEY"
    MALFORMED_PAIR = "MALFORMED_PAIR"
    MISSING_DISCRIMINANT = "MISSING_DISCRIMINANT"
    DUPLICATE_DISCRIMINANT = "DUPLICATE_DISCRIMINANT"
    MUTATION_REJECTED = "MUTATION_REJECTED"
    UNFREEZABLE_VALUE = "UNFREEZABLE_VALUE"
    NOT_BRANDED = "NOT_BRANDED"
    TAG_MISMATCH = "TAG_MISMATCH"


class ShapekitError(Exception):
    """Base class for all toolkit errors."""

    code: ErrorCode

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Structured payload, suitable for log events."""
        return {"code": str(self.code), "message": self.message, "detail": self.detail}


class InvalidKey(ShapekitError, TypeError):
    code = ErrorCode.INVALID_KEY


class MalformedPair(ShapekitError, ValueError):
    code = ErrorCode.MALFORMED_PAIR


class MissingDiscriminant(ShapekitError, KeyError):
    code = ErrorCode.MISSING_DISCRIMINANT


class DuplicateDiscriminant(ShapekitError, ValueError):
    code = ErrorCode.DUPLICATE_DISCRIMINANT


class MutationRejected(ShapekitError, TypeError):
    """A write was attempted through a read-only reference."""

    code = ErrorCode.MUTATION_REJECTED


class UnfreezableValue(ShapekitError, TypeError):
    code = ErrorCode.UNFREEZABLE_VALUE


class NotBranded(ShapekitError, TypeError):
    code = ErrorCode.NOT_BRANDED


class TagMismatch(ShapekitError, ValueError):
    code = ErrorCode.TAG_MISMATCH
