"""Tests for ShapekitSettings: unified settings with TOML source."""

from pathlib import Path

import pytest

from shapekit.config.discovery import CONFIG_FILENAME, PYPROJECT_FILENAME, ConfigError
from shapekit.config.settings import ShapekitSettings
from shapekit.domain.transforms import DuplicatePolicy


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = ShapekitSettings.load(start=tmp_path)
        assert settings.config_path is None
        assert settings.transforms.duplicate_policy is DuplicatePolicy.LAST_WINS
        assert settings.freeze.strict is True
        assert settings.logging.verbose is False

    def test_frozen(self, settings: ShapekitSettings) -> None:
        with pytest.raises(Exception):
            settings.config_path = Path("x")  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / CONFIG_FILENAME
        toml.write_text('[transforms]\nduplicate_policy = "error"\n[logging]\nlog_json = true\n')
        settings = ShapekitSettings.load(start=tmp_path)
        assert settings.transforms.duplicate_policy is DuplicatePolicy.ERROR
        assert settings.logging.log_json is True
        assert settings.freeze.strict is True  # default preserved
        assert settings.config_path == toml

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "kit.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[freeze]\nstrict = false\n")
        settings = ShapekitSettings.load(config_path=custom)
        assert settings.freeze.strict is False
        assert settings.config_path == custom

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("not = [valid")
        with pytest.raises(ConfigError):
            ShapekitSettings.load(start=tmp_path)


class TestPyprojectSource:
    def test_loads_tool_table(self, tmp_path: Path) -> None:
        pyproject = tmp_path / PYPROJECT_FILENAME
        pyproject.write_text(
            '[project]\nname = "app"\n\n'
            '[tool.shapekit.transforms]\nduplicate_policy = "error"\n'
        )
        settings = ShapekitSettings.load(start=tmp_path)
        assert settings.config_path == pyproject
        assert settings.transforms.duplicate_policy is DuplicatePolicy.ERROR
        assert settings.freeze.strict is True

    def test_explicit_pyproject_path(self, tmp_path: Path) -> None:
        pyproject = tmp_path / PYPROJECT_FILENAME
        pyproject.write_text("[tool.shapekit.freeze]\nstrict = false\n")
        settings = ShapekitSettings.load(config_path=pyproject)
        assert settings.freeze.strict is False

    def test_pyproject_without_table_uses_defaults(self, tmp_path: Path) -> None:
        pyproject = tmp_path / PYPROJECT_FILENAME
        pyproject.write_text('[project]\nname = "app"\n')
        settings = ShapekitSettings.load(config_path=pyproject)
        assert settings.transforms.duplicate_policy is DuplicatePolicy.LAST_WINS


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[freeze]\nstrict = true\n")
        monkeypatch.setenv("SHAPEKIT_FREEZE__STRICT", "false")
        settings = ShapekitSettings.load(start=tmp_path)
        assert settings.freeze.strict is False

    def test_overrides_beat_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPEKIT_TRANSFORMS__DUPLICATE_POLICY", "error")
        settings = ShapekitSettings.load(
            start=tmp_path, transforms={"duplicate_policy": "last_wins"}
        )
        assert settings.transforms.duplicate_policy is DuplicatePolicy.LAST_WINS

    def test_env_without_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHAPEKIT_TRANSFORMS__DUPLICATE_POLICY", "error")
        settings = ShapekitSettings.load(start=tmp_path)
        assert settings.transforms.duplicate_policy is DuplicatePolicy.ERROR
