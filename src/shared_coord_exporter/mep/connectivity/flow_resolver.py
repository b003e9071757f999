# File: src/shared_coord_exporter/mep/connectivity/flow_resolver.py
"""
Flow connectivity resolution.

For one source element, determines which tracked equipment (pipes, valves,
pumps, tanks, flow meters, chillers) it is joined to on its inlet and outlet
sides. The steps per connector reference are:

1. Skip references back to the source element itself
2. Optionally replace a fitting/accessory by the element across it
3. Classify the target; unclassified targets are dropped
4. Bucket the target id by the source connector's direction. Connectors
   with unknown or bidirectional flow count on both sides.

Results are immutable: ConnectivityBuilder accumulates ids and build()
returns a frozen ConnectivityResult with de-duplicated, first-seen-ordered
id tuples.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Tuple, Optional, Mapping
from types import MappingProxyType
import logging

from src.shared_coord_exporter.core.mep_model import EquipmentCategory, FlowDirection
from src.shared_coord_exporter.mep.connectivity.classifier import (
    classify_element,
    is_pass_through,
)
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph
from src.shared_coord_exporter.mep.connectivity.pass_through import resolve_through

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowBucket:
    """
    Connected element ids for one equipment category.

    Attributes:
        inlet: Ids connected on the inlet side, distinct, first-seen order
        outlet: Ids connected on the outlet side, distinct, first-seen order
    """
    inlet: Tuple[str, ...] = ()
    outlet: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.inlet and not self.outlet


@dataclass(frozen=True)
class ConnectivityResult:
    """
    Per-category inlet/outlet connectivity of one source element.

    Attributes:
        source_id: Unique id of the element the result belongs to
        buckets: Read-only mapping with one FlowBucket per EquipmentCategory
    """
    source_id: str
    buckets: Mapping[EquipmentCategory, FlowBucket] = field(
        default_factory=lambda: MappingProxyType(
            {category: FlowBucket() for category in EquipmentCategory}
        )
    )

    def inlet(self, category: EquipmentCategory) -> Tuple[str, ...]:
        return self.buckets[category].inlet

    def outlet(self, category: EquipmentCategory) -> Tuple[str, ...]:
        return self.buckets[category].outlet

    @property
    def is_empty(self) -> bool:
        """True when no category has any connection."""
        return all(bucket.is_empty for bucket in self.buckets.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary keyed by CSV column stem."""
        return {
            "source_id": self.source_id,
            "buckets": {
                category.value: {
                    "in": list(bucket.inlet),
                    "out": list(bucket.outlet),
                }
                for category, bucket in self.buckets.items()
            },
        }


class ConnectivityBuilder:
    """
    Accumulates connections for one source element.

    Ids are de-duplicated as they are added; build() freezes the result.
    A builder is used for one resolution only and is not shared.
    """

    def __init__(self, source_id: str):
        self._source_id = source_id
        self._inlet: Dict[EquipmentCategory, List[str]] = {c: [] for c in EquipmentCategory}
        self._outlet: Dict[EquipmentCategory, List[str]] = {c: [] for c in EquipmentCategory}

    def add(
        self,
        category: EquipmentCategory,
        direction: FlowDirection,
        target_id: str
    ) -> None:
        """
        Record a connection.

        Args:
            category: Equipment category of the target
            direction: Direction of the source connector
            target_id: Unique id of the connected element
        """
        if direction in (FlowDirection.IN, FlowDirection.BIDIRECTIONAL):
            self._append(self._inlet[category], target_id)
        if direction in (FlowDirection.OUT, FlowDirection.BIDIRECTIONAL):
            self._append(self._outlet[category], target_id)

    @staticmethod
    def _append(ids: List[str], target_id: str) -> None:
        if target_id not in ids:
            ids.append(target_id)

    def build(self) -> ConnectivityResult:
        buckets = {
            category: FlowBucket(
                inlet=tuple(self._inlet[category]),
                outlet=tuple(self._outlet[category]),
            )
            for category in EquipmentCategory
        }
        return ConnectivityResult(
            source_id=self._source_id,
            buckets=MappingProxyType(buckets),
        )


def resolve_connectivity(
    graph: ConnectorGraph,
    element_id: str,
    skip_accessories: bool
) -> ConnectivityResult:
    """
    Resolve the equipment an element is connected to, by flow side.

    Args:
        graph: Connector graph of the export run
        element_id: Unique id of the source element
        skip_accessories: Look through fittings/accessories (one hop)

    Returns:
        ConnectivityResult with one bucket per EquipmentCategory; all
        buckets are empty when the element has no connectors

    Raises:
        KeyError: If the element is not in the graph
    """
    builder = ConnectivityBuilder(element_id)

    connectors = graph.connectors(element_id)
    if not connectors:
        return builder.build()

    for conn in connectors:
        for ref in graph.references(conn.id):
            if ref.owner_id == element_id:
                continue

            target_id: Optional[str] = ref.owner_id

            if skip_accessories and is_pass_through(graph.element(target_id)):
                target_id = resolve_through(graph, target_id, element_id)
                if target_id is None:
                    continue

            category = classify_element(graph.element(target_id))
            if category is None:
                logger.debug(f"{element_id}: {target_id} is not tracked equipment")
                continue

            builder.add(category, conn.direction, target_id)

    return builder.build()


def resolve_connected_ids(graph: ConnectorGraph, element_id: str) -> Tuple[str, ...]:
    """
    Distinct owners of all connector references of an element.

    Used by the legacy single-column export: no classification, no
    pass-through skipping, only the self-reference guard.

    Args:
        graph: Connector graph of the export run
        element_id: Unique id of the source element

    Returns:
        Tuple of unique ids in first-seen order
    """
    connected: List[str] = []
    for conn in graph.connectors(element_id) or []:
        for ref in graph.references(conn.id):
            if ref.owner_id != element_id and ref.owner_id not in connected:
                connected.append(ref.owner_id)
    return tuple(connected)
