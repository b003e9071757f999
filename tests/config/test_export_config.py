# File: tests/config/test_export_config.py
"""Tests for export configuration and category filters."""

import os

import pytest

from src.shared_coord_exporter.config.export_config import (
    EARTH_RADIUS_M,
    FLOW_EXPORT_FILENAME,
    ExportConfig,
    export_categories,
)
from src.shared_coord_exporter.core.mep_model import HostCategory


class TestExportCategories:
    """Category filter depends on the skip option."""

    def test_without_skip_includes_fittings(self):
        categories = export_categories(skip_accessories=False)
        assert HostCategory.PIPE_FITTING in categories
        assert HostCategory.PIPE_ACCESSORY in categories
        assert HostCategory.PIPE_CURVES in categories

    def test_with_skip_excludes_fittings(self):
        categories = export_categories(skip_accessories=True)
        assert categories == [
            HostCategory.PIPE_CURVES,
            HostCategory.MECHANICAL_EQUIPMENT,
            HostCategory.PLUMBING_FIXTURES,
        ]


class TestExportConfig:
    """Defaults, environment overrides and validation."""

    def test_defaults(self):
        config = ExportConfig()
        assert config.earth_radius_m == EARTH_RADIUS_M
        assert config.legacy_columns is False
        assert config.flow_path.endswith(FLOW_EXPORT_FILENAME)
        assert os.path.basename(config.output_dir) == "Desktop"

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCE_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("SCE_EARTH_RADIUS_M", "6371000")
        monkeypatch.setenv("SCE_LEGACY_COLUMNS", "yes")
        monkeypatch.setenv("SCE_DEBUG", "0")

        config = ExportConfig.from_env()

        assert config.output_dir == str(tmp_path)
        assert config.earth_radius_m == 6371000.0
        assert config.legacy_columns is True
        assert config.debug is False
        assert config.properties_path == os.path.join(str(tmp_path), "Element_Properties_Matrix.csv")

    def test_from_env_rejects_bad_radius(self, monkeypatch):
        monkeypatch.setenv("SCE_EARTH_RADIUS_M", "round")
        with pytest.raises(ValueError):
            ExportConfig.from_env()

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("nan"), float("inf")])
    def test_validate_rejects_bad_radius(self, tmp_path, radius):
        with pytest.raises(ValueError):
            ExportConfig(output_dir=str(tmp_path), earth_radius_m=radius).validate()

    def test_validate_rejects_nan_radius_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCE_EARTH_RADIUS_M", "nan")
        monkeypatch.setenv("SCE_OUTPUT_DIR", str(tmp_path))
        with pytest.raises(ValueError):
            ExportConfig.from_env().validate()

    def test_validate_accepts_defaults(self, tmp_path):
        ExportConfig(output_dir=str(tmp_path)).validate()
