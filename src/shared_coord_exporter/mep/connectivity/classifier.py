# File: src/shared_coord_exporter/mep/connectivity/classifier.py
"""
Equipment classification from element structure and family names.

Pipes are recognized structurally. Family instances are classified by
case-insensitive substring matching of the family name against an ordered
keyword table; the first matching keyword wins. Adding an equipment class
means adding a row to EQUIPMENT_RULES (and a member to EquipmentCategory).
"""

from typing import List, Optional, Tuple
import logging

from src.shared_coord_exporter.core.mep_model import (
    ElementKind,
    EquipmentCategory,
    HostElement,
)
from src.shared_coord_exporter.config.export_config import PASS_THROUGH_CATEGORIES

logger = logging.getLogger(__name__)


# Priority-ordered keyword rules for family name classification.
# First match wins: "Flow Control Valve" is a valve, not a flow meter.
EQUIPMENT_RULES: List[Tuple[str, EquipmentCategory]] = [
    ("valve", EquipmentCategory.VALVE),
    ("pump", EquipmentCategory.PUMP),
    ("tank", EquipmentCategory.TANK),
    ("flow", EquipmentCategory.FLOW_METER),
    ("chiller", EquipmentCategory.CHILLER),
]


def classify_family_name(
    family_name: Optional[str],
    rules: Optional[List[Tuple[str, EquipmentCategory]]] = None
) -> Optional[EquipmentCategory]:
    """Classify a family name using keyword matching.

    Args:
        family_name: Host family name, may be None.
        rules: Keyword table to use instead of EQUIPMENT_RULES.

    Returns:
        The category of the first matching keyword, or None.
    """
    if not family_name:
        return None

    name_lower = str(family_name).lower()
    for keyword, category in (rules if rules is not None else EQUIPMENT_RULES):
        if keyword in name_lower:
            return category
    return None


def classify_element(element: Optional[HostElement]) -> Optional[EquipmentCategory]:
    """Map an element to its equipment category.

    Pipe primitives are always PIPE. Family instances are classified from
    their family name. Anything else, including elements with no family
    metadata, is unclassified.

    Args:
        element: Element snapshot, may be None.

    Returns:
        EquipmentCategory or None when the element is not tracked.
    """
    if element is None:
        return None

    if element.kind == ElementKind.PIPE:
        return EquipmentCategory.PIPE

    if element.kind == ElementKind.FAMILY_INSTANCE:
        return classify_family_name(element.family_name)

    return None


def is_pass_through(element: Optional[HostElement]) -> bool:
    """Whether an element is a pipe fitting or pipe accessory."""
    if element is None:
        return False
    return element.category in PASS_THROUGH_CATEGORIES
