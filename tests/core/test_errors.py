# File: tests/core/test_errors.py
"""Tests for exporter exception types."""

from src.shared_coord_exporter.core.errors import (
    ElementExtractionError,
    ElementNotFoundError,
    ExporterError,
    ExportWriteError,
    MissingPrerequisiteError,
    SnapshotFormatError,
)


class TestExporterErrors:
    """Detail text, codes and hierarchy."""

    def test_extraction_error_keeps_reason(self):
        error = ElementExtractionError("abc", "no location")
        assert error.unique_id == "abc"
        assert error.reason == "no location"
        assert "abc" in error.detail
        assert error.internal_code == "element_extraction_failed"

    def test_write_error(self):
        error = ExportWriteError("/tmp/out.csv", "permission denied")
        assert error.path == "/tmp/out.csv"
        assert "permission denied" in str(error)

    def test_all_derive_from_base(self):
        for error in (
            ElementExtractionError("a", "b"),
            ExportWriteError("p", "d"),
            ElementNotFoundError("u"),
            MissingPrerequisiteError("project base point"),
            SnapshotFormatError("bad"),
        ):
            assert isinstance(error, ExporterError)

    def test_to_dict(self):
        error = ExporterError("boom", internal_code="x", extra={"n": 1})
        assert error.to_dict() == {"detail": "boom", "code": "x", "extra": {"n": 1}}

    def test_to_dict_without_extra(self):
        assert "extra" not in MissingPrerequisiteError("thing").to_dict()
