# tests/unit/core/test_config.py
"""Tests for MapSettings validation and YAML/environment loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from graphfold.contracts.enums import EdgeMode
from graphfold.core.config import LocalSettings, MapSettings, load_settings


class TestMapSettings:
    def test_defaults(self) -> None:
        settings = MapSettings()

        assert settings.mode == EdgeMode.OUT
        assert settings.unreachable is False
        assert settings.local == LocalSettings(radius=1, mode=EdgeMode.ALL, min_distance=0, workers=1)
        assert settings.logging.level == "INFO"

    def test_mode_accepts_strings(self) -> None:
        assert MapSettings(mode="in").mode == EdgeMode.IN  # type: ignore[arg-type]

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MapSettings(mode="sideways")  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            MapSettings(depth=3)  # type: ignore[call-arg]

    def test_settings_are_frozen(self) -> None:
        settings = MapSettings()

        with pytest.raises(ValidationError):
            settings.unreachable = True  # type: ignore[misc]


class TestLocalSettings:
    @pytest.mark.parametrize("field", ["radius", "min_distance"])
    def test_negative_distances_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            LocalSettings(**{field: -1})

    def test_zero_workers_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LocalSettings(workers=0)

    def test_min_distance_cannot_exceed_radius(self) -> None:
        with pytest.raises(ValidationError, match="cannot exceed radius"):
            LocalSettings(radius=1, min_distance=2)


class TestLoadSettings:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_loads_nested_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "graphfold.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "mode": "all",
                    "unreachable": True,
                    "local": {"radius": 2, "min_distance": 1, "workers": 3},
                    "logging": {"level": "DEBUG"},
                }
            ),
            encoding="utf-8",
        )

        settings = load_settings(config_path)

        assert settings.mode == EdgeMode.ALL
        assert settings.unreachable is True
        assert settings.local.radius == 2
        assert settings.local.min_distance == 1
        assert settings.local.workers == 3
        assert settings.logging.level == "DEBUG"

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_path = tmp_path / "graphfold.yaml"
        config_path.write_text(yaml.safe_dump({"unreachable": False}), encoding="utf-8")
        monkeypatch.setenv("GRAPHFOLD_UNREACHABLE", "true")

        settings = load_settings(config_path)

        assert settings.unreachable is True

    def test_invalid_file_values_raise_validation_error(self, tmp_path: Path) -> None:
        config_path = tmp_path / "graphfold.yaml"
        config_path.write_text(yaml.safe_dump({"local": {"radius": -3}}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_settings(config_path)
