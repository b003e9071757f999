# File: src/shared_coord_exporter/revit/host_reader.py
"""
Readers that turn Revit API objects into the host-neutral model.

Every attribute is read through getattr chains so the same code works on
live Revit objects, Rhino.Inside proxies and plain test doubles. It handles:
- Category/Family/Location None checks
- ElementId.Value (Revit 2024+) and ElementId.IntegerValue (older versions)
- Pipe ConnectorManager vs. FamilyInstance MEPModel.ConnectorManager
- Parameter values by StorageType

build_connector_graph() walks outward from the collected elements through
each connector's AllRefs so that fittings, accessories and equipment
outside the category filter still end up in the graph.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Any, Iterable, Optional, Tuple
import logging

from src.shared_coord_exporter.core.errors import ElementExtractionError
from src.shared_coord_exporter.core.mep_model import (
    ElementKind,
    FlowDirection,
    HostCategory,
    HostElement,
    LocationCurve,
    LocationPoint,
    Point3,
)
from src.shared_coord_exporter.export.property_matrix import ElementProperties
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph

logger = logging.getLogger(__name__)

UNKNOWN_ID = "<unknown>"


# =============================================================================
# Primitive readers
# =============================================================================

def read_id_value(element_id: Any) -> Optional[int]:
    """
    Integer value of a Revit ElementId.

    Args:
        element_id: ElementId (or None)

    Returns:
        Integer id, or None if it cannot be read
    """
    if element_id is None:
        return None
    for attr in ("Value", "IntegerValue"):
        value = getattr(element_id, attr, None)
        if value is not None:
            return int(value)
    return None


def read_xyz(xyz: Any) -> Point3:
    """Convert a Revit XYZ to Point3."""
    return Point3(
        float(getattr(xyz, 'X')),
        float(getattr(xyz, 'Y')),
        float(getattr(xyz, 'Z')),
    )


def read_unique_id(element: Any) -> str:
    unique_id = getattr(element, 'UniqueId', None)
    return str(unique_id) if unique_id else UNKNOWN_ID


def read_family_name(element: Any) -> Optional[str]:
    """Traverse element.Symbol.Family.Name safely."""
    symbol = getattr(element, 'Symbol', None)
    if symbol is None:
        return None

    family = getattr(symbol, 'Family', None)
    if family is None:
        return None

    family_name = getattr(family, 'Name', None)
    if family_name is None:
        return None
    return str(family_name)


def _read_category(element: Any) -> Tuple[HostCategory, str]:
    category = getattr(element, 'Category', None)
    if category is None:
        return (HostCategory.OTHER, "")

    name = getattr(category, 'Name', None)
    builtin_id = read_id_value(getattr(category, 'Id', None))
    return (HostCategory.from_builtin_id(builtin_id), str(name) if name else "")


def _read_kind(element: Any, category: HostCategory) -> ElementKind:
    if type(element).__name__ == "Pipe" or category == HostCategory.PIPE_CURVES:
        return ElementKind.PIPE
    if getattr(element, 'Symbol', None) is not None:
        return ElementKind.FAMILY_INSTANCE
    return ElementKind.OTHER


def read_location(element: Any):
    """
    Read a curve or point location.

    Returns:
        LocationCurve, LocationPoint or None when the element has no
        supported location

    Raises:
        ElementExtractionError: If the location exists but its geometry
            cannot be read
    """
    location = getattr(element, 'Location', None)
    if location is None:
        return None

    try:
        curve = getattr(location, 'Curve', None)
        if curve is not None:
            return LocationCurve(
                start=read_xyz(curve.GetEndPoint(0)),
                end=read_xyz(curve.GetEndPoint(1)),
            )

        point = getattr(location, 'Point', None)
        if point is not None:
            return LocationPoint(point=read_xyz(point))
    except Exception as e:
        raise ElementExtractionError(read_unique_id(element), f"unreadable location: {e}")

    return None


def read_host_element(element: Any) -> HostElement:
    """
    Snapshot a Revit element.

    Args:
        element: Revit Element

    Returns:
        HostElement

    Raises:
        ElementExtractionError: If the element has no UniqueId or its
            location cannot be read
    """
    unique_id = read_unique_id(element)
    if unique_id == UNKNOWN_ID:
        raise ElementExtractionError(UNKNOWN_ID, "element has no UniqueId")

    category, category_name = _read_category(element)
    kind = _read_kind(element, category)
    name = getattr(element, 'Name', None)

    return HostElement(
        unique_id=unique_id,
        name=str(name) if name is not None else "",
        category=category,
        category_name=category_name,
        kind=kind,
        family_name=read_family_name(element) if kind == ElementKind.FAMILY_INSTANCE else None,
        location=read_location(element),
        element_id=read_id_value(getattr(element, 'Id', None)),
    )


def read_connector_set(element: Any, kind: Optional[ElementKind] = None) -> Optional[List[Any]]:
    """
    Connectors of a pipe or MEP family instance.

    Args:
        element: Revit Element
        kind: Already-determined kind, read from the element if omitted

    Returns:
        List of Revit connectors, or None when the element has no
        ConnectorManager (non-MEP families, system elements)
    """
    if kind is None:
        kind = _read_kind(element, _read_category(element)[0])

    conn_manager = None
    if kind == ElementKind.PIPE:
        conn_manager = getattr(element, 'ConnectorManager', None)
    elif kind == ElementKind.FAMILY_INSTANCE:
        mep_model = getattr(element, 'MEPModel', None)
        if mep_model is not None:
            conn_manager = getattr(mep_model, 'ConnectorManager', None)

    if conn_manager is None:
        return None

    connector_set = getattr(conn_manager, 'Connectors', None)
    if connector_set is None:
        return None
    return list(connector_set)


def connector_node_id(owner_unique_id: str, connector: Any) -> str:
    """Graph id of a Revit connector: "<owner UniqueId>:<connector Id>"."""
    return f"{owner_unique_id}:{getattr(connector, 'Id', 0)}"


def read_flow_direction(connector: Any) -> FlowDirection:
    direction = getattr(connector, 'Direction', None)
    return FlowDirection.from_string(str(direction) if direction is not None else None)


def read_transform(transform: Any) -> Transform:
    """Convert a Revit Transform to Transform."""
    return Transform(
        origin=read_xyz(transform.Origin),
        basis_x=read_xyz(transform.BasisX),
        basis_y=read_xyz(transform.BasisY),
        basis_z=read_xyz(transform.BasisZ),
    )


def read_site_location(site: Any) -> SiteLocation:
    """Convert a Revit SiteLocation (radians) to SiteLocation."""
    return SiteLocation(
        latitude=float(getattr(site, 'Latitude')),
        longitude=float(getattr(site, 'Longitude')),
    )


# =============================================================================
# Parameters
# =============================================================================

def read_parameter_value(parameter: Any) -> str:
    """
    Display value of a Revit parameter by storage type.

    String -> AsString, Double -> AsValueString, Integer -> AsInteger,
    ElementId -> id value. Anything else, or a None value, is "".
    """
    storage = str(getattr(parameter, 'StorageType', "")).rsplit(".", 1)[-1]

    if storage == "String":
        value = parameter.AsString()
    elif storage == "Double":
        value = parameter.AsValueString()
    elif storage == "Integer":
        value = parameter.AsInteger()
    elif storage == "ElementId":
        value = read_id_value(parameter.AsElementId())
    else:
        value = None

    return "" if value is None else str(value)


def read_parameters(element: Any) -> ElementProperties:
    """
    Read all named parameters of an element.

    Args:
        element: Revit Element

    Returns:
        ElementProperties; later parameters with the same name win
    """
    category, category_name = _read_category(element)
    name = getattr(element, 'Name', None)

    values: Dict[str, str] = {}
    for parameter in getattr(element, 'Parameters', None) or []:
        definition = getattr(parameter, 'Definition', None)
        if definition is None:
            continue
        values[str(definition.Name)] = read_parameter_value(parameter)

    return ElementProperties(
        element_id=read_id_value(getattr(element, 'Id', None)),
        unique_id=read_unique_id(element),
        category_name=category_name,
        name=str(name) if name is not None else "",
        values=values,
    )


# =============================================================================
# Graph construction
# =============================================================================

@dataclass
class GraphBuildResult:
    """
    Connector graph plus bookkeeping from one build.

    Attributes:
        graph: The connector graph
        root_ids: Unique ids of the collected elements, in collector order
            (elements that failed to read are included when their id is known)
        failures: Unique id -> reason for elements that could not be read
    """
    graph: ConnectorGraph
    root_ids: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)


@dataclass
class _ConnectorSnapshot:
    """Direction and references of one connector, read while its owner is read."""
    node_id: str
    direction: FlowDirection
    refs: List[Tuple[Any, str, str, FlowDirection]] = field(default_factory=list)


def _snapshot_connectors(unique_id: str, connectors: Optional[List[Any]]) -> List[_ConnectorSnapshot]:
    """
    Read every connector's direction and AllRefs up front.

    Each ref is captured as (owner, owner unique id, ref node id, ref direction).
    Refs without an owner are dropped.
    """
    snapshots = []
    for conn in connectors or []:
        snapshot = _ConnectorSnapshot(
            node_id=connector_node_id(unique_id, conn),
            direction=read_flow_direction(conn),
        )
        for ref in getattr(conn, 'AllRefs', None) or []:
            owner = getattr(ref, 'Owner', None)
            if owner is None:
                continue
            owner_id = read_unique_id(owner)
            snapshot.refs.append(
                (owner, owner_id, connector_node_id(owner_id, ref), read_flow_direction(ref))
            )
        snapshots.append(snapshot)
    return snapshots


def build_connector_graph(elements: Iterable[Any]) -> GraphBuildResult:
    """
    Build the connector graph reachable from the collected elements.

    Phase 1 walks breadth-first through AllRefs, reading each element once
    together with its connector directions and references. Any exception
    while reading an element records it in failures and leaves it out of
    the graph. Phase 2 adds element nodes with their connectors in host
    order. Phase 3 adds references; a referenced connector that its owner
    did not enumerate (for example a system's logical connector) is added
    on demand. Phases 2 and 3 only use what phase 1 read.

    Args:
        elements: Collected Revit elements

    Returns:
        GraphBuildResult
    """
    result = GraphBuildResult(graph=ConnectorGraph())
    graph = result.graph

    read: Dict[str, Tuple[HostElement, bool, List[_ConnectorSnapshot]]] = {}
    queue = deque()
    seen = set()

    for element in elements:
        unique_id = read_unique_id(element)
        result.root_ids.append(unique_id)
        if unique_id not in seen:
            seen.add(unique_id)
            queue.append(element)

    while queue:
        element = queue.popleft()
        unique_id = read_unique_id(element)
        try:
            snapshot = read_host_element(element)
            connectors = read_connector_set(element, snapshot.kind)
            connector_snapshots = _snapshot_connectors(unique_id, connectors)
        except Exception as e:
            reason = e.reason if isinstance(e, ElementExtractionError) else str(e)
            logger.warning(f"Failed to read element {unique_id}: {reason}")
            result.failures[unique_id] = reason
            continue

        read[unique_id] = (snapshot, connectors is not None, connector_snapshots)

        for conn in connector_snapshots:
            for owner, owner_id, _, _ in conn.refs:
                if owner_id not in seen:
                    seen.add(owner_id)
                    queue.append(owner)

    for unique_id, (snapshot, has_manager, connector_snapshots) in read.items():
        graph.add_element(snapshot, has_connector_manager=has_manager)
        for conn in connector_snapshots:
            graph.add_connector(unique_id, conn.direction, connector_id=conn.node_id)

    for unique_id, (_, _, connector_snapshots) in read.items():
        for conn in connector_snapshots:
            for _, owner_id, to_id, to_direction in conn.refs:
                if not graph.has_element(owner_id):
                    continue
                if to_id not in graph.graph:
                    graph.add_connector(owner_id, to_direction, connector_id=to_id)
                graph.add_reference(conn.node_id, to_id)

    logger.info(
        f"Connector graph: {len(graph)} elements from {len(result.root_ids)} collected, "
        f"{len(result.failures)} unreadable"
    )
    return result
