# File: src/shared_coord_exporter/export/flow_export.py
"""
Flow-aware coordinate export.

Writes one CSV row per exported point (pipe start/end, equipment location)
with shared coordinates, approximate lat/lon and the element's resolved
connectivity.

Key Features:
1. Partial-failure isolation
   - Each element is formatted completely before any of its rows are written
   - A failing element is recorded as skipped and the run continues
2. Run summary
   - ExportSummary lists an outcome per element (exported or skipped with a
     reason) and the number of rows written
3. Scoped file handling
   - export_to_file() opens the output in a with-block so the file is closed
     on every exit path; I/O errors become ExportWriteError
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Iterable, Optional, TextIO, Tuple
import logging
import os

from src.shared_coord_exporter.config.export_config import ExportConfig
from src.shared_coord_exporter.core.errors import ElementExtractionError, ExportWriteError
from src.shared_coord_exporter.core.mep_model import HostElement, Point3
from src.shared_coord_exporter.export.csv_rows import (
    PointRecord,
    format_flow_row,
    format_legacy_row,
    header_line,
)
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform, project
from src.shared_coord_exporter.mep.connectivity.connector_graph import ConnectorGraph
from src.shared_coord_exporter.mep.connectivity.flow_resolver import (
    resolve_connected_ids,
    resolve_connectivity,
)

logger = logging.getLogger(__name__)

# The host's text writer emits a UTF-8 byte order mark
CSV_ENCODING = "utf-8-sig"


class OutcomeStatus(Enum):
    """Result of exporting one element."""
    EXPORTED = "exported"
    SKIPPED = "skipped"


@dataclass
class ElementOutcome:
    """
    Export outcome of one element.

    Attributes:
        unique_id: Element unique id
        status: EXPORTED or SKIPPED
        rows: Number of rows written for the element
        reason: Why the element was skipped, None when exported
    """
    unique_id: str
    status: OutcomeStatus
    rows: int = 0
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unique_id": self.unique_id,
            "status": self.status.value,
            "rows": self.rows,
            "reason": self.reason,
        }


@dataclass
class ExportSummary:
    """
    Summary of one export run.

    Attributes:
        outcomes: One outcome per element, in processing order
        skip_accessories: Whether fittings/accessories were looked through
        legacy_columns: Whether the legacy column layout was written
    """
    outcomes: List[ElementOutcome] = field(default_factory=list)
    skip_accessories: bool = False
    legacy_columns: bool = False

    @property
    def rows_written(self) -> int:
        return sum(outcome.rows for outcome in self.outcomes)

    @property
    def exported_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.EXPORTED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.SKIPPED)

    @property
    def skipped(self) -> List[ElementOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.SKIPPED]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging or JSON output."""
        return {
            "rows_written": self.rows_written,
            "exported_count": self.exported_count,
            "skipped_count": self.skipped_count,
            "skip_accessories": self.skip_accessories,
            "legacy_columns": self.legacy_columns,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


def extract_points(element: HostElement) -> List[Tuple[str, Point3]]:
    """
    Labelled points of an element.

    Args:
        element: Element snapshot

    Returns:
        List of (label, Point3) tuples; empty when the element has no location

    Raises:
        ElementExtractionError: If the location is present but unusable
    """
    try:
        points = element.labelled_points()
    except Exception as e:
        raise ElementExtractionError(element.unique_id, f"unreadable location: {e}")

    for label, point in points:
        if not isinstance(point, Point3):
            raise ElementExtractionError(
                element.unique_id, f"location point '{label}' is missing"
            )
    return points


class FlowExporter:
    """
    Exports elements of a connector graph to the flow-aware CSV layout.

    Example:
        >>> exporter = FlowExporter(graph, transform, site, ExportConfig())
        >>> summary = exporter.export_to_file(ids, config.flow_path, skip_accessories=True)
        >>> summary.skipped_count
        0
    """

    def __init__(
        self,
        graph: ConnectorGraph,
        shared_transform: Transform,
        site: SiteLocation,
        config: Optional[ExportConfig] = None,
        read_failures: Optional[Dict[str, str]] = None
    ):
        """
        Args:
            graph: Connector graph holding the elements to export
            shared_transform: Internal-to-shared coordinate transform
            site: Project site location
            config: Export settings, defaults from ExportConfig()
            read_failures: Unique id -> reason for elements that could not
                be read into the graph; those are reported with that reason
        """
        self.graph = graph
        self.shared_transform = shared_transform
        self.site = site
        self.config = config or ExportConfig()
        self.read_failures = dict(read_failures or {})

    def format_element(self, unique_id: str, skip_accessories: bool) -> List[str]:
        """
        Format all rows of one element.

        Args:
            unique_id: Element unique id
            skip_accessories: Look through fittings/accessories

        Returns:
            CSV lines for the element (possibly empty)

        Raises:
            ElementExtractionError: If any part of the element cannot be read
        """
        if unique_id in self.read_failures:
            raise ElementExtractionError(unique_id, self.read_failures[unique_id])

        try:
            element = self.graph.element(unique_id)
        except KeyError:
            raise ElementExtractionError(unique_id, "element is not in the connector graph")

        points = extract_points(element)
        if not points:
            logger.debug(f"Element {unique_id} has no location, no rows")
            return []

        try:
            if self.config.legacy_columns:
                connected = resolve_connected_ids(self.graph, unique_id)
            else:
                connectivity = resolve_connectivity(self.graph, unique_id, skip_accessories)

            lines = []
            for label, point in points:
                record = PointRecord(
                    label=label,
                    local_point=point,
                    geo=project(
                        point,
                        self.shared_transform,
                        self.site,
                        earth_radius_m=self.config.earth_radius_m,
                    ),
                )
                if self.config.legacy_columns:
                    lines.append(format_legacy_row(element, record, connected))
                else:
                    lines.append(format_flow_row(element, record, connectivity))
        except ElementExtractionError:
            raise
        except Exception as e:
            raise ElementExtractionError(unique_id, str(e))

        return lines

    def export(
        self,
        element_ids: Iterable[str],
        stream: TextIO,
        skip_accessories: bool = False
    ) -> ExportSummary:
        """
        Write the header and every element's rows to a text stream.

        Args:
            element_ids: Unique ids of the elements to export, in order
            stream: Writable text stream
            skip_accessories: Look through fittings/accessories

        Returns:
            ExportSummary of the run
        """
        summary = ExportSummary(
            skip_accessories=skip_accessories,
            legacy_columns=self.config.legacy_columns,
        )

        stream.write(header_line(self.config.legacy_columns) + "\n")

        for unique_id in element_ids:
            try:
                lines = self.format_element(unique_id, skip_accessories)
            except ElementExtractionError as e:
                logger.warning(f"Skipping element {unique_id}: {e.reason}")
                summary.outcomes.append(ElementOutcome(
                    unique_id=unique_id,
                    status=OutcomeStatus.SKIPPED,
                    reason=e.reason,
                ))
                continue

            for line in lines:
                stream.write(line + "\n")
            summary.outcomes.append(ElementOutcome(
                unique_id=unique_id,
                status=OutcomeStatus.EXPORTED,
                rows=len(lines),
            ))

        logger.info(
            f"Exported {summary.rows_written} rows for {summary.exported_count} elements, "
            f"skipped {summary.skipped_count}"
        )
        return summary

    def export_to_file(
        self,
        element_ids: Iterable[str],
        path: str,
        skip_accessories: bool = False
    ) -> ExportSummary:
        """
        Export to a CSV file, replacing any existing file.

        Args:
            element_ids: Unique ids of the elements to export
            path: Output file path
            skip_accessories: Look through fittings/accessories

        Returns:
            ExportSummary of the run

        Raises:
            ExportWriteError: If the file cannot be created or written
        """
        try:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(path, "w", encoding=CSV_ENCODING, newline="") as stream:
                summary = self.export(element_ids, stream, skip_accessories)
        except OSError as e:
            logger.error(f"Export to {path} failed: {e}")
            raise ExportWriteError(path, str(e))

        logger.info(f"Flow export written to {path}")
        return summary
