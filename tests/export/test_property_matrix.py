# File: tests/export/test_property_matrix.py
"""Tests for the element property matrix export."""

import io

import pytest

from src.shared_coord_exporter.core.errors import ExportWriteError
from src.shared_coord_exporter.export.property_matrix import (
    ElementProperties,
    collect_headers,
    export_property_matrix,
    write_property_matrix,
)


@pytest.fixture
def records():
    return [
        ElementProperties(
            element_id=101,
            unique_id="u-101",
            category_name="Pipes",
            name="Pipe, Supply",
            values={"Length": "3000 mm", "Diameter": "50 mm"},
        ),
        ElementProperties(
            element_id=102,
            unique_id="u-102",
            category_name="Mechanical Equipment",
            name="Pump",
            values={"Mark": "P-1, duty", "Comments": ""},
        ),
    ]


def test_collect_headers_sorted_union(records):
    assert collect_headers(records) == ["Comments", "Diameter", "Length", "Mark"]


def test_matrix_layout(records):
    stream = io.StringIO()
    count = write_property_matrix(records, stream)

    lines = stream.getvalue().splitlines()
    assert count == 2
    assert lines[0] == "ElementId,UniqueId,Category,Name,Comments,Diameter,Length,Mark"
    assert lines[1] == "101,u-101,Pipes,Pipe; Supply,,50 mm,3000 mm,"
    assert lines[2] == "102,u-102,Mechanical Equipment,Pump,,,,P-1; duty"


def test_missing_element_id(records):
    records[0].element_id = None
    stream = io.StringIO()
    write_property_matrix(records[:1], stream)
    assert stream.getvalue().splitlines()[1].startswith(",u-101,")


def test_empty_input():
    stream = io.StringIO()
    assert write_property_matrix([], stream) == 0
    assert stream.getvalue() == "ElementId,UniqueId,Category,Name\n"


def test_export_to_file(records, tmp_path):
    path = tmp_path / "matrix.csv"
    assert export_property_matrix(records, str(path)) == 2
    assert path.read_bytes().startswith(b"\xef\xbb\xbf")


def test_export_unwritable(records, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ExportWriteError):
        export_property_matrix(records, str(blocker / "matrix.csv"))
