# File: src/shared_coord_exporter/mep/__init__.py
"""
MEP (Mechanical, Electrical, Plumbing) network analysis.

Submodules:
    connectivity: Connector graph, equipment classification and
        flow-side connectivity resolution

Example:
    >>> from src.shared_coord_exporter.mep import ConnectorGraph, resolve_connectivity
    >>> graph = ConnectorGraph.from_json(snapshot_json)
    >>> result = resolve_connectivity(graph, "pump-uid", skip_accessories=True)
"""

from .connectivity import (
    ConnectorGraph,
    ConnectivityResult,
    classify_element,
    resolve_through,
    resolve_connectivity,
    resolve_connected_ids,
)

__all__ = [
    "ConnectorGraph",
    "ConnectivityResult",
    "classify_element",
    "resolve_through",
    "resolve_connectivity",
    "resolve_connected_ids",
]
