# File: src/shared_coord_exporter/core/__init__.py
"""
Core module.

Host-neutral data model and error types shared by the resolvers, the
exporters and the commands.
"""

from .mep_model import (
    FlowDirection,
    HostCategory,
    ElementKind,
    EquipmentCategory,
    Point3,
    LocationCurve,
    LocationPoint,
    HostElement,
)
from .errors import (
    ExporterError,
    ElementExtractionError,
    ExportWriteError,
    ElementNotFoundError,
    MissingPrerequisiteError,
    SnapshotFormatError,
)

__all__ = [
    # Model
    "FlowDirection",
    "HostCategory",
    "ElementKind",
    "EquipmentCategory",
    "Point3",
    "LocationCurve",
    "LocationPoint",
    "HostElement",
    # Errors
    "ExporterError",
    "ElementExtractionError",
    "ExportWriteError",
    "ElementNotFoundError",
    "MissingPrerequisiteError",
    "SnapshotFormatError",
]
