# File: src/shared_coord_exporter/export/csv_rows.py
"""
CSV row formatting for the coordinate exports.

Rows are joined with plain commas and never quoted. Free-text fields have
their commas replaced with semicolons instead, which keeps one record per
line at the cost of altering names that contain commas.

Column layout (flow-aware variant):
    UniqueID,Category,Name,PointLabel,Easting_M,Northing_M,Elevation_M,
    Latitude,Longitude,Altitude_M, then <Category>_IN,<Category>_OUT for
    every EquipmentCategory in declaration order.

The legacy variant replaces the In/Out columns by a single
Connected_UniqueIDs column.
"""

from dataclasses import dataclass
from typing import List, Iterable, Optional

from src.shared_coord_exporter.core.mep_model import EquipmentCategory, HostElement, Point3
from src.shared_coord_exporter.geo.projection import GeoPoint
from src.shared_coord_exporter.mep.connectivity.flow_resolver import ConnectivityResult

# ============================================================================
# Headers
# ============================================================================

POINT_COLUMNS: List[str] = [
    "UniqueID",
    "Category",
    "Name",
    "PointLabel",
    "Easting_M",
    "Northing_M",
    "Elevation_M",
    "Latitude",
    "Longitude",
    "Altitude_M",
]

FLOW_COLUMNS: List[str] = [
    f"{category.value}_{side}"
    for category in EquipmentCategory
    for side in ("IN", "OUT")
]

FLOW_HEADER: List[str] = POINT_COLUMNS + FLOW_COLUMNS
LEGACY_HEADER: List[str] = POINT_COLUMNS + ["Connected_UniqueIDs"]

ID_SEPARATOR = "|"
LEGACY_EMPTY = "None"

METER_DECIMALS = 4
DEGREE_DECIMALS = 8


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class PointRecord:
    """
    Geometric payload of one exported row.

    Attributes:
        label: "Start", "End" or "Location"
        local_point: Point in internal units and local coordinates
        geo: Projected shared coordinates and lat/lon
    """
    label: str
    local_point: Point3
    geo: GeoPoint


# ============================================================================
# Field Formatting
# ============================================================================

def sanitize_text(value: Optional[str]) -> str:
    """Replace commas with semicolons; None becomes an empty string."""
    if value is None:
        return ""
    return str(value).replace(",", ";")


def format_meters(value: float) -> str:
    return f"{value:.{METER_DECIMALS}f}"


def format_degrees(value: float) -> str:
    return f"{value:.{DEGREE_DECIMALS}f}"


def join_ids(ids: Iterable[str]) -> str:
    """Pipe-separated id list, empty string when there are none."""
    return ID_SEPARATOR.join(ids)


def header_line(legacy: bool = False) -> str:
    return ",".join(LEGACY_HEADER if legacy else FLOW_HEADER)


def _point_fields(element: HostElement, record: PointRecord) -> List[str]:
    geo = record.geo
    return [
        element.unique_id,
        sanitize_text(element.category_name),
        sanitize_text(element.name),
        record.label,
        format_meters(geo.easting_m),
        format_meters(geo.northing_m),
        format_meters(geo.elevation_m),
        format_degrees(geo.latitude_deg),
        format_degrees(geo.longitude_deg),
        format_meters(geo.elevation_m),
    ]


# ============================================================================
# Rows
# ============================================================================

def format_flow_row(
    element: HostElement,
    record: PointRecord,
    connectivity: ConnectivityResult
) -> str:
    """
    Format one row of the flow-aware export.

    Args:
        element: Element the point belongs to
        record: Labelled, projected point
        connectivity: Resolved connectivity of the element

    Returns:
        CSV line without trailing newline
    """
    fields = _point_fields(element, record)
    for category in EquipmentCategory:
        fields.append(join_ids(connectivity.inlet(category)))
        fields.append(join_ids(connectivity.outlet(category)))
    return ",".join(fields)


def format_legacy_row(
    element: HostElement,
    record: PointRecord,
    connected_ids: Iterable[str]
) -> str:
    """
    Format one row of the legacy single-column export.

    Args:
        element: Element the point belongs to
        record: Labelled, projected point
        connected_ids: Unique ids of all connected elements

    Returns:
        CSV line without trailing newline
    """
    fields = _point_fields(element, record)
    fields.append(join_ids(connected_ids) or LEGACY_EMPTY)
    return ",".join(fields)
