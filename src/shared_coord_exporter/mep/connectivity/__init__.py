# File: src/shared_coord_exporter/mep/connectivity/__init__.py
"""
Connectivity module.

Resolves, for each element, which equipment it is connected to upstream
and downstream through the connector graph.

Components:
- ConnectorGraph: Arena of elements and connectors for one export run
- classify_element: Equipment classification from kind and family name
- resolve_through: Single-hop resolution across fittings/accessories
- resolve_connectivity: Per-category inlet/outlet sets for one element
"""

from .connector_graph import ConnectorGraph, GraphConnector
from .classifier import (
    EQUIPMENT_RULES,
    classify_element,
    classify_family_name,
    is_pass_through,
)
from .pass_through import resolve_through
from .flow_resolver import (
    FlowBucket,
    ConnectivityResult,
    ConnectivityBuilder,
    resolve_connectivity,
    resolve_connected_ids,
)

__all__ = [
    "ConnectorGraph",
    "GraphConnector",
    "EQUIPMENT_RULES",
    "classify_element",
    "classify_family_name",
    "is_pass_through",
    "resolve_through",
    "FlowBucket",
    "ConnectivityResult",
    "ConnectivityBuilder",
    "resolve_connectivity",
    "resolve_connected_ids",
]
