"""Shared pytest fixtures for shapekit tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest

from shapekit.config.settings import ShapekitSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SHAPEKIT_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("SHAPEKIT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_logging() -> Generator[None]:
    """Restore root and ``shapekit`` logger state after a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("shapekit")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def settings(tmp_path: Path) -> ShapekitSettings:
    """Default settings, discovered from an empty temp directory."""
    return ShapekitSettings.load(start=tmp_path)


@dataclass(frozen=True)
class Circle:
    kind: str
    radius: float


@dataclass(frozen=True)
class Square:
    kind: str
    side: float


@pytest.fixture
def shapes() -> list[object]:
    """A small variant set of attribute-style members."""
    return [Circle("circle", 1.0), Square("square", 2.0)]
