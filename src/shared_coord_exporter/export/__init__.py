# File: src/shared_coord_exporter/export/__init__.py
"""
CSV exports.

- csv_rows: Headers and row formatting for the coordinate exports
- flow_export: Batch flow-aware export with per-element outcomes
- property_matrix: Parameter matrix of visible elements
"""

from .csv_rows import (
    FLOW_HEADER,
    LEGACY_HEADER,
    PointRecord,
    sanitize_text,
    format_flow_row,
    format_legacy_row,
    header_line,
)
from .flow_export import (
    OutcomeStatus,
    ElementOutcome,
    ExportSummary,
    FlowExporter,
    extract_points,
)
from .property_matrix import (
    ElementProperties,
    collect_headers,
    write_property_matrix,
    export_property_matrix,
)

__all__ = [
    "FLOW_HEADER",
    "LEGACY_HEADER",
    "PointRecord",
    "sanitize_text",
    "format_flow_row",
    "format_legacy_row",
    "header_line",
    "OutcomeStatus",
    "ElementOutcome",
    "ExportSummary",
    "FlowExporter",
    "extract_points",
    "ElementProperties",
    "collect_headers",
    "write_property_matrix",
    "export_property_matrix",
]
