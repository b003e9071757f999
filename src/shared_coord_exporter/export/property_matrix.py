# File: src/shared_coord_exporter/export/property_matrix.py
"""
Element property matrix export.

One row per element, one column per parameter name seen on any element.
Columns are the sorted union of all parameter names, so every element's
parameters line up and missing ones stay blank.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Iterable, Optional, TextIO
import logging
import os

from src.shared_coord_exporter.core.errors import ExportWriteError
from src.shared_coord_exporter.export.csv_rows import sanitize_text
from src.shared_coord_exporter.export.flow_export import CSV_ENCODING

logger = logging.getLogger(__name__)

MATRIX_ID_COLUMNS: List[str] = ["ElementId", "UniqueId", "Category", "Name"]


@dataclass
class ElementProperties:
    """
    Parameter values of one element.

    Attributes:
        element_id: Integer host element id
        unique_id: Element unique id
        category_name: Category display name (may be empty)
        name: Element name
        values: Parameter name -> display value
    """
    element_id: Optional[int]
    unique_id: str
    category_name: str = ""
    name: str = ""
    values: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element_id": self.element_id,
            "unique_id": self.unique_id,
            "category_name": self.category_name,
            "name": self.name,
            "values": dict(self.values),
        }


def collect_headers(records: Iterable[ElementProperties]) -> List[str]:
    """Sorted union of parameter names across all records."""
    names = set()
    for record in records:
        names.update(record.values.keys())
    return sorted(names)


def write_property_matrix(records: List[ElementProperties], stream: TextIO) -> int:
    """
    Write the property matrix to a text stream.

    Args:
        records: Element property records, written in order
        stream: Writable text stream

    Returns:
        Number of data rows written
    """
    headers = collect_headers(records)

    stream.write(",".join(MATRIX_ID_COLUMNS + [sanitize_text(h) for h in headers]) + "\n")

    for record in records:
        fields = [
            "" if record.element_id is None else str(record.element_id),
            record.unique_id,
            sanitize_text(record.category_name),
            sanitize_text(record.name),
        ]
        fields.extend(sanitize_text(record.values.get(h, "")) for h in headers)
        stream.write(",".join(fields) + "\n")

    logger.info(f"Property matrix: {len(records)} elements, {len(headers)} parameters")
    return len(records)


def export_property_matrix(records: List[ElementProperties], path: str) -> int:
    """
    Write the property matrix to a CSV file.

    Args:
        records: Element property records
        path: Output file path

    Returns:
        Number of data rows written

    Raises:
        ExportWriteError: If the file cannot be created or written
    """
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding=CSV_ENCODING, newline="") as stream:
            return write_property_matrix(records, stream)
    except OSError as e:
        logger.error(f"Property export to {path} failed: {e}")
        raise ExportWriteError(path, str(e))
