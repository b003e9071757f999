# File: src/shared_coord_exporter/mep/connectivity/pass_through.py
"""
Resolution across pass-through parts (pipe fittings and accessories).

Given a fitting reached from a source element, find the element on the
other side of it. Resolution is a single hop: if the far side is another
fitting, that fitting is returned as-is and is not skipped in turn.
"""

from typing import Optional
import logging

from src.shared_coord_exporter.mep.connectivity.classifier import is_pass_through
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph

logger = logging.getLogger(__name__)


def resolve_through(
    graph: ConnectorGraph,
    accessory_id: str,
    source_id: str
) -> Optional[str]:
    """
    Find the next element across a fitting or accessory.

    Walks the accessory's connectors and their references in order and
    returns the first referenced owner that is neither the accessory nor
    the source.

    Args:
        graph: Connector graph of the export run
        accessory_id: Unique id of the fitting/accessory
        source_id: Unique id of the element the traversal started from

    Returns:
        Unique id of the element across the accessory, or None when the
        accessory is not a pass-through part, has no connector manager,
        has no connectors, or only leads back to itself or the source
    """
    if not graph.has_element(accessory_id):
        logger.debug(f"Pass-through target {accessory_id} is not in the graph")
        return None

    if not is_pass_through(graph.element(accessory_id)):
        logger.debug(f"Element {accessory_id} is not a fitting or accessory")
        return None

    connectors = graph.connectors(accessory_id)
    if not connectors:
        logger.debug(f"Accessory {accessory_id} has no connectors")
        return None

    for conn in connectors:
        for ref in graph.references(conn.id):
            if ref.owner_id == accessory_id or ref.owner_id == source_id:
                continue
            return ref.owner_id

    logger.debug(f"Accessory {accessory_id} is a dead end from {source_id}")
    return None
