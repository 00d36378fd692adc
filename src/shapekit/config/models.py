"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, the config file only contains
overrides. An empty file (or no file) yields the defaults below. The
sections are assembled into :class:`~shapekit.config.settings.ShapekitSettings`.
"""

from __future__ import annotations

from pydantic import BaseModel

from shapekit.domain.transforms import DuplicatePolicy


class TransformsConfig(BaseModel):
    """[transforms] section."""

    model_config = {"frozen": True}

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WINS


class FreezeConfig(BaseModel):
    """[freeze] section."""

    model_config = {"frozen": True}

    strict: bool = True


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False

