# File: src/shared_coord_exporter/utils/__init__.py
"""Logging and unit helpers."""

from .logging_config import ExporterLogger, configure_logging, get_logger
from .units import (
    LengthUnit,
    INTERNAL_UNIT,
    convert_from_internal,
    convert_to_internal,
    feet_to_meters,
)

__all__ = [
    "ExporterLogger",
    "configure_logging",
    "get_logger",
    "LengthUnit",
    "INTERNAL_UNIT",
    "convert_from_internal",
    "convert_to_internal",
    "feet_to_meters",
]
