# File: src/shared_coord_exporter/geo/__init__.py
"""Shared-coordinate and approximate lat/lon projection."""

from .projection import Transform, SiteLocation, GeoPoint, project

__all__ = [
    "Transform",
    "SiteLocation",
    "GeoPoint",
    "project",
]
