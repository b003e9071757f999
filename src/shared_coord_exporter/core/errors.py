# File: src/shared_coord_exporter/core/errors.py
"""
Exception types for the exporter commands.

Per-element failures (ElementExtractionError) are caught by the batch
exporter and recorded as skips. Everything else propagates to the command
layer, which turns it into a single error dialog.
"""

from typing import Optional, Dict, Any


class ExporterError(Exception):
    """
    Base class for exporter exceptions.

    Carries a human-readable detail plus a machine-readable code so the
    command layer and the run summary can report failures uniformly.
    """
    def __init__(
        self,
        detail: str,
        internal_code: str = "exporter_error",
        extra: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the error.

        Args:
            detail: Human-readable error message
            internal_code: Machine-readable error code
            extra: Optional additional error context
        """
        self.detail = detail
        self.internal_code = internal_code
        self.extra = extra or {}
        super().__init__(detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and summaries."""
        result = {
            "detail": self.detail,
            "code": self.internal_code,
        }
        if self.extra:
            result["extra"] = self.extra
        return result


class ElementExtractionError(ExporterError):
    """Raised when points or connectivity cannot be read for one element."""
    def __init__(
        self,
        unique_id: str,
        reason: str,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.unique_id = unique_id
        self.reason = reason
        super().__init__(
            detail=f"Could not extract element '{unique_id}': {reason}",
            internal_code="element_extraction_failed",
            extra=extra
        )


class ExportWriteError(ExporterError):
    """Raised when the output file cannot be opened or written."""
    def __init__(
        self,
        path: str,
        detail: str,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.path = path
        super().__init__(
            detail=f"Could not write '{path}': {detail}",
            internal_code="export_write_failed",
            extra=extra
        )


class ElementNotFoundError(ExporterError):
    """Raised when no element matches a unique id."""
    def __init__(self, unique_id: str):
        self.unique_id = unique_id
        super().__init__(
            detail=f"Element with unique id '{unique_id}' not found",
            internal_code="element_not_found"
        )


class MissingPrerequisiteError(ExporterError):
    """Raised when a command needs a model object the document lacks."""
    def __init__(self, what: str):
        self.what = what
        super().__init__(
            detail=f"Required model object not found: {what}",
            internal_code="missing_prerequisite"
        )


class SnapshotFormatError(ExporterError):
    """Raised when a serialized connector graph cannot be parsed."""
    def __init__(self, detail: str):
        super().__init__(
            detail=f"Invalid graph snapshot: {detail}",
            internal_code="snapshot_format"
        )
