# File: src/shared_coord_exporter/revit/__init__.py
"""
Revit adapters.

host_reader converts Revit API objects into the host-neutral model and
builds the connector graph. document (imported explicitly, Revit only)
implements the command host interfaces.
"""

from .host_reader import (
    GraphBuildResult,
    build_connector_graph,
    read_host_element,
    read_connector_set,
    read_parameters,
    read_site_location,
    read_transform,
)

__all__ = [
    "GraphBuildResult",
    "build_connector_graph",
    "read_host_element",
    "read_connector_set",
    "read_parameters",
    "read_site_location",
    "read_transform",
]
