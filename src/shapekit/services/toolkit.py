"""Toolkit: settings-bound facade over the pure domain operations.

The domain functions take every policy as an explicit argument. Toolkit
fills those arguments from :class:`ShapekitSettings` and emits structured
log events; it adds no behaviour of its own.

INVARIANT: Toolkit never swallows domain errors. Failures are logged
with their error code and re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Literal

import structlog

from shapekit.config.settings import ShapekitSettings
from shapekit.domain import brand as _brand
from shapekit.domain import freeze as _freeze
from shapekit.domain import guards as _guards
from shapekit.domain import transforms as _transforms
from shapekit.domain.errors import ShapekitError
from shapekit.domain.transforms import DuplicatePolicy

logger = structlog.get_logger(__name__)


class Toolkit:
    """Entry point for applications that configure shapekit via settings.

    Usage::

        kit = Toolkit(ShapekitSettings.load())
        by_kind = kit.key_by_discriminant(items, "kind")
        frozen = kit.deep_freeze(payload)
    """

    def __init__(self, settings: ShapekitSettings | None = None) -> None:
        self._settings = settings if settings is not None else ShapekitSettings()

    @property
    def settings(self) -> ShapekitSettings:
        return self._settings

    @contextmanager
    def _reported(self, op: str) -> Iterator[None]:
        try:
            yield
        except ShapekitError as exc:
            logger.warning("operation_failed", op=op, **exc.to_dict())
            raise

    # --- Brand ---

    def brand(self, value: Any, tag: Hashable) -> _brand.BrandedValue[Any, Any]:
        return _brand.brand(value, tag)

    def unbrand(self, b: _brand.BrandedValue[Any, Any], tag: Hashable = _brand.ANY_TAG) -> Any:
        with self._reported("unbrand"):
            return _brand.unbrand(b, tag)

    # --- Guards ---

    def guard_from(
        self, probe: Callable[[Any], Any | Literal[_guards.Absent.ABSENT]]
    ) -> _guards.Guard[Any, Any]:
        return _guards.guard_from(probe)

    # --- Structural transforms ---

    def filter_by_value(
        self, obj: Mapping[Any, Any], predicate: Callable[[Any], bool]
    ) -> dict[Any, Any]:
        result = _transforms.filter_by_value(obj, predicate)
        logger.debug("filtered_by_value", kept=len(result), dropped=len(obj) - len(result))
        return result

    def merge_union(self, shapes: Iterable[Mapping[Any, Any]]) -> dict[Any, tuple[Any, ...]]:
        return _transforms.merge_union(shapes)

    def pairs_to_map(self, pairs: Iterable[Sequence[Any]]) -> dict[Any, Any]:
        with self._reported("pairs_to_map"):
            return _transforms.pairs_to_map(pairs)

    def key_by_discriminant(
        self,
        items: Iterable[Any],
        field: str,
        *,
        on_duplicate: DuplicatePolicy | None = None,
    ) -> dict[Any, Any]:
        """Key *items* by *field* using the configured duplicate policy.

        An explicit *on_duplicate* overrides ``transforms.duplicate_policy``.
        """
        policy = on_duplicate or self._settings.transforms.duplicate_policy
        with self._reported("key_by_discriminant"):
            keyed, overwritten = _transforms.key_by_discriminant_tracked(
                items, field, on_duplicate=policy
            )
        if overwritten:
            logger.debug(
                "discriminant_overwritten",
                field=field,
                values=[repr(v) for v in overwritten],
            )
        logger.debug("keyed_by_discriminant", field=field, policy=str(policy), keys=len(keyed))
        return keyed

    # --- Deep freeze ---

    def deep_freeze(self, value: Any, *, strict: bool | None = None) -> Any:
        """Freeze *value*; *strict* defaults to ``freeze.strict``."""
        effective = self._settings.freeze.strict if strict is None else strict
        with self._reported("deep_freeze"):
            frozen = _freeze.deep_freeze(value, strict=effective)
        logger.debug("graph_frozen", root=type(frozen).__name__, strict=effective)
        return frozen

    def thaw(self, value: Any) -> Any:
        return _freeze.thaw(value)
