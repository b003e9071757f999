# File: src/shared_coord_exporter/config/__init__.py
"""Export settings and category filters."""

from .export_config import (
    EARTH_RADIUS_M,
    FLOW_EXPORT_FILENAME,
    PROPERTIES_EXPORT_FILENAME,
    BASE_EXPORT_CATEGORIES,
    PASS_THROUGH_CATEGORIES,
    export_categories,
    ExportConfig,
)

__all__ = [
    "EARTH_RADIUS_M",
    "FLOW_EXPORT_FILENAME",
    "PROPERTIES_EXPORT_FILENAME",
    "BASE_EXPORT_CATEGORIES",
    "PASS_THROUGH_CATEGORIES",
    "export_categories",
    "ExportConfig",
]
