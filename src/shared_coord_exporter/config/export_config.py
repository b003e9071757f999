# File: src/shared_coord_exporter/config/export_config.py
"""
Export configuration.

Defines the constants shared by the commands (file names, earth radius,
category filters) and ExportConfig, which carries the per-run settings.
Settings can be overridden from environment variables so the same scripts
work on machines without a Desktop folder or with a different output share.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from typing import List

from src.shared_coord_exporter.core.mep_model import HostCategory

logger = logging.getLogger(__name__)


# ==============================
# Constants
# ==============================

EARTH_RADIUS_M = 6378137.0  # WGS84 equatorial radius

FLOW_EXPORT_FILENAME = "MEP_Geo_Saudi_Corrected.csv"
PROPERTIES_EXPORT_FILENAME = "Element_Properties_Matrix.csv"

# Categories that always get rows in the flow export
BASE_EXPORT_CATEGORIES: List[HostCategory] = [
    HostCategory.PIPE_CURVES,
    HostCategory.MECHANICAL_EQUIPMENT,
    HostCategory.PLUMBING_FIXTURES,
]

# Fittings and accessories; transparent to connectivity when skipping
PASS_THROUGH_CATEGORIES: List[HostCategory] = [
    HostCategory.PIPE_FITTING,
    HostCategory.PIPE_ACCESSORY,
]


def export_categories(skip_accessories: bool) -> List[HostCategory]:
    """
    Categories collected for the flow export.

    Fittings and accessories get rows of their own only when they are not
    being skipped by the connectivity resolver.

    Args:
        skip_accessories: Whether pass-through parts are skipped

    Returns:
        List of HostCategory values to collect
    """
    categories = list(BASE_EXPORT_CATEGORIES)
    if not skip_accessories:
        categories.extend(PASS_THROUGH_CATEGORIES)
    return categories


def _default_output_dir() -> str:
    return os.path.join(os.path.expanduser("~"), "Desktop")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ExportConfig:
    """
    Settings for one export run.

    Attributes:
        output_dir: Directory receiving the CSV files
        flow_filename: File name of the flow-aware coordinate export
        properties_filename: File name of the property matrix export
        earth_radius_m: Sphere radius for the lat/lon approximation
        legacy_columns: Write the single Connected_UniqueIDs column instead
            of the per-category In/Out columns
        log_dir: Directory for log files
        debug: Enable DEBUG logging
    """
    output_dir: str = field(default_factory=_default_output_dir)
    flow_filename: str = FLOW_EXPORT_FILENAME
    properties_filename: str = PROPERTIES_EXPORT_FILENAME
    earth_radius_m: float = EARTH_RADIUS_M
    legacy_columns: bool = False
    log_dir: str = "logs"
    debug: bool = False

    @property
    def flow_path(self) -> str:
        """Full path of the flow export CSV."""
        return os.path.join(self.output_dir, self.flow_filename)

    @property
    def properties_path(self) -> str:
        """Full path of the property matrix CSV."""
        return os.path.join(self.output_dir, self.properties_filename)

    @classmethod
    def from_env(cls) -> "ExportConfig":
        """
        Build a config from environment variables.

        Reads SCE_OUTPUT_DIR, SCE_EARTH_RADIUS_M, SCE_LEGACY_COLUMNS,
        SCE_LOG_DIR and SCE_DEBUG; unset variables keep their defaults.

        Returns:
            ExportConfig instance

        Raises:
            ValueError: If SCE_EARTH_RADIUS_M is not a number
        """
        config = cls()

        output_dir = os.environ.get("SCE_OUTPUT_DIR")
        if output_dir:
            config.output_dir = output_dir

        radius = os.environ.get("SCE_EARTH_RADIUS_M")
        if radius:
            try:
                config.earth_radius_m = float(radius)
            except ValueError:
                raise ValueError(f"SCE_EARTH_RADIUS_M is not a number: {radius}")

        log_dir = os.environ.get("SCE_LOG_DIR")
        if log_dir:
            config.log_dir = log_dir

        config.legacy_columns = _env_flag("SCE_LEGACY_COLUMNS", config.legacy_columns)
        config.debug = _env_flag("SCE_DEBUG", config.debug)
        return config

    def validate(self) -> None:
        """
        Validate critical configuration values.

        Raises:
            ValueError: If the earth radius is not a positive finite number
        """
        if not math.isfinite(self.earth_radius_m) or self.earth_radius_m <= 0:
            raise ValueError(f"earth_radius_m must be positive and finite, got {self.earth_radius_m}")

        if self.earth_radius_m != EARTH_RADIUS_M:
            logger.warning(
                f"Using non-default earth radius {self.earth_radius_m} m "
                f"(default {EARTH_RADIUS_M} m)"
            )

        if not os.path.isdir(self.output_dir):
            logger.warning(f"Output directory does not exist yet: {self.output_dir}")
