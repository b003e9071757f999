# File: src/shared_coord_exporter/mep/connectivity/connector_graph.py
"""
In-memory connector graph for one export run.

The host answers "which connectors does this element own" and "what is this
connector joined to" through live object lookups. ConnectorGraph copies that
structure once into a networkx DiGraph so every resolver works on plain data:

- Element nodes (kind="element") hold the HostElement snapshot
- Connector nodes (kind="connector") hold the owner id and flow direction
- "owns" edges run element -> connector
- "ref" edges run connector -> connector, one per entry in the host's
  AllRefs set, in the order the host reported them

Successor iteration on a DiGraph follows insertion order, so "first
reference" lookups match the host's enumeration order.
"""

from dataclasses import dataclass
from typing import Dict, List, Any, Iterator, Optional
import json
import logging

import networkx as nx

from src.shared_coord_exporter.core.mep_model import FlowDirection, HostElement
from src.shared_coord_exporter.core.errors import SnapshotFormatError

logger = logging.getLogger(__name__)

ELEMENT_NODE = "element"
CONNECTOR_NODE = "connector"
OWNS_EDGE = "owns"
REF_EDGE = "ref"


@dataclass(frozen=True)
class GraphConnector:
    """
    A connector node as seen by the resolvers.

    Attributes:
        id: Connector node id (unique within the graph)
        owner_id: Unique id of the owning element
        direction: Flow direction of the connector
    """
    id: str
    owner_id: str
    direction: FlowDirection


class ConnectorGraph:
    """
    Arena of elements and connectors keyed by stable identifiers.

    Example:
        >>> graph = ConnectorGraph()
        >>> graph.add_element(pump)
        >>> graph.add_element(pipe)
        >>> c1 = graph.add_connector(pump.unique_id, FlowDirection.OUT)
        >>> c2 = graph.add_connector(pipe.unique_id)
        >>> graph.connect(c1, c2)
        >>> [c.owner_id for c in graph.references(c1)]
        ['pipe-uid']
    """

    def __init__(self):
        """Initialize an empty graph."""
        self._graph: nx.DiGraph = nx.DiGraph()
        self._connector_counter: Dict[str, int] = {}

    @property
    def graph(self) -> nx.DiGraph:
        """Underlying networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return len(self.element_ids())

    def __contains__(self, unique_id: str) -> bool:
        return self.has_element(unique_id)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_element(self, element: HostElement, has_connector_manager: bool = True) -> None:
        """
        Add an element node.

        Re-adding an id replaces the stored snapshot but keeps its connectors.

        Args:
            element: Element snapshot
            has_connector_manager: False for elements that cannot own
                connectors at all (non-MEP families)
        """
        self._graph.add_node(
            element.unique_id,
            kind=ELEMENT_NODE,
            element=element,
            has_connector_manager=has_connector_manager,
        )

    def add_connector(
        self,
        owner_id: str,
        direction: FlowDirection = FlowDirection.BIDIRECTIONAL,
        connector_id: Optional[str] = None
    ) -> str:
        """
        Add a connector owned by an existing element.

        Args:
            owner_id: Unique id of the owning element
            direction: Flow direction of the connector
            connector_id: Explicit node id; generated as "<owner>:<n>" if omitted

        Returns:
            The connector node id

        Raises:
            KeyError: If the owner is not in the graph
            ValueError: If the connector id is already used
        """
        if not self.has_element(owner_id):
            raise KeyError(f"Unknown owner element: {owner_id}")

        if connector_id is None:
            index = self._connector_counter.get(owner_id, 0)
            connector_id = f"{owner_id}:{index}"
            while connector_id in self._graph:
                index += 1
                connector_id = f"{owner_id}:{index}"
            self._connector_counter[owner_id] = index + 1

        if connector_id in self._graph:
            raise ValueError(f"Duplicate connector id: {connector_id}")

        self._graph.add_node(
            connector_id,
            kind=CONNECTOR_NODE,
            owner_id=owner_id,
            direction=direction,
        )
        self._graph.add_edge(owner_id, connector_id, kind=OWNS_EDGE)
        return connector_id

    def add_reference(self, from_connector: str, to_connector: str) -> None:
        """
        Record that from_connector lists to_connector among its references.

        Args:
            from_connector: Connector whose reference set is extended
            to_connector: Referenced connector

        Raises:
            KeyError: If either connector is unknown
        """
        for connector_id in (from_connector, to_connector):
            if not self._is_connector(connector_id):
                raise KeyError(f"Unknown connector: {connector_id}")
        self._graph.add_edge(from_connector, to_connector, kind=REF_EDGE)

    def connect(self, connector_a: str, connector_b: str) -> None:
        """Join two connectors in both directions."""
        self.add_reference(connector_a, connector_b)
        self.add_reference(connector_b, connector_a)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_element(self, unique_id: str) -> bool:
        node = self._graph.nodes.get(unique_id)
        return node is not None and node.get("kind") == ELEMENT_NODE

    def element(self, unique_id: str) -> HostElement:
        """
        Get an element snapshot.

        Raises:
            KeyError: If the element is not in the graph
        """
        if not self.has_element(unique_id):
            raise KeyError(f"Unknown element: {unique_id}")
        return self._graph.nodes[unique_id]["element"]

    def element_ids(self) -> List[str]:
        """Element ids in insertion order."""
        return [
            node for node, kind in self._graph.nodes(data="kind")
            if kind == ELEMENT_NODE
        ]

    def elements(self) -> Iterator[HostElement]:
        for unique_id in self.element_ids():
            yield self._graph.nodes[unique_id]["element"]

    def connectors(self, unique_id: str) -> Optional[List[GraphConnector]]:
        """
        Connector set of an element.

        Args:
            unique_id: Element unique id

        Returns:
            Connectors in insertion order, an empty list when the element
            owns none, or None when the element has no connector manager

        Raises:
            KeyError: If the element is not in the graph
        """
        if not self.has_element(unique_id):
            raise KeyError(f"Unknown element: {unique_id}")
        if not self._graph.nodes[unique_id].get("has_connector_manager", True):
            return None
        return [
            self._connector(node)
            for node in self._graph.successors(unique_id)
            if self._graph.edges[unique_id, node].get("kind") == OWNS_EDGE
        ]

    def references(self, connector_id: str) -> List[GraphConnector]:
        """
        Connectors joined to a connector (the host's AllRefs).

        Raises:
            KeyError: If the connector is unknown
        """
        if not self._is_connector(connector_id):
            raise KeyError(f"Unknown connector: {connector_id}")
        return [
            self._connector(node)
            for node in self._graph.successors(connector_id)
            if self._graph.edges[connector_id, node].get("kind") == REF_EDGE
        ]

    def owner_of(self, connector_id: str) -> str:
        if not self._is_connector(connector_id):
            raise KeyError(f"Unknown connector: {connector_id}")
        return self._graph.nodes[connector_id]["owner_id"]

    def _is_connector(self, node_id: str) -> bool:
        node = self._graph.nodes.get(node_id)
        return node is not None and node.get("kind") == CONNECTOR_NODE

    def _connector(self, node_id: str) -> GraphConnector:
        data = self._graph.nodes[node_id]
        return GraphConnector(
            id=node_id,
            owner_id=data["owner_id"],
            direction=data["direction"],
        )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the graph to a JSON-compatible dictionary.

        Returns:
            {"elements": [{...element fields, "has_connector_manager": bool,
            "connectors": [{"id", "direction", "refs": [...]}]}]}
        """
        elements = []
        for unique_id in self.element_ids():
            data = self.element(unique_id).to_dict()
            node = self._graph.nodes[unique_id]
            data["has_connector_manager"] = node.get("has_connector_manager", True)
            data["connectors"] = [
                {
                    "id": conn.id,
                    "direction": conn.direction.value,
                    "refs": [ref.id for ref in self.references(conn.id)],
                }
                for conn in (self.connectors(unique_id) or [])
            ]
            elements.append(data)
        return {"elements": elements}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectorGraph":
        """
        Rebuild a graph from a dictionary produced by to_dict().

        Connectors are created first and references resolved afterwards, so
        references may point forward to elements listed later.

        Args:
            data: Snapshot dictionary

        Returns:
            ConnectorGraph instance

        Raises:
            SnapshotFormatError: On missing fields, duplicate connector ids
                or references to unknown connectors
        """
        graph = cls()
        pending_refs = []

        try:
            for element_data in data.get("elements", []):
                element = HostElement.from_dict(element_data)
                graph.add_element(
                    element,
                    has_connector_manager=element_data.get("has_connector_manager", True),
                )
                for conn_data in element_data.get("connectors", []):
                    connector_id = graph.add_connector(
                        element.unique_id,
                        FlowDirection.from_string(conn_data.get("direction")),
                        connector_id=conn_data.get("id"),
                    )
                    for ref in conn_data.get("refs", []):
                        pending_refs.append((connector_id, ref))
        except (KeyError, ValueError, TypeError) as e:
            raise SnapshotFormatError(str(e))

        for from_id, to_id in pending_refs:
            try:
                graph.add_reference(from_id, to_id)
            except KeyError:
                raise SnapshotFormatError(
                    f"connector {from_id} references unknown connector {to_id}"
                )

        logger.debug(f"Loaded connector graph with {len(graph)} elements")
        return graph

    @classmethod
    def from_json(cls, json_str: str) -> "ConnectorGraph":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(str(e))
        return cls.from_dict(data)
