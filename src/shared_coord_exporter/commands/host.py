# File: src/shared_coord_exporter/commands/host.py
"""
Host interfaces used by the commands.

The commands only talk to the BIM host through HostUI (dialogs) and
HostDocument (model queries and edits). The Revit implementations live in
revit.document; tests use in-memory fakes.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Any, Optional

from src.shared_coord_exporter.core.mep_model import HostCategory, Point3
from src.shared_coord_exporter.export.property_matrix import ElementProperties
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform
from src.shared_coord_exporter.revit.host_reader import GraphBuildResult


class CommandResult(Enum):
    """Result reported back to the host for one command invocation."""
    SUCCEEDED = "Succeeded"
    CANCELLED = "Cancelled"
    FAILED = "Failed"

    def __str__(self) -> str:
        return self.value


class HostUI(ABC):
    """Dialogs shown by the commands."""

    @abstractmethod
    def confirm_flow_export(self) -> Optional[bool]:
        """
        Ask whether to skip fittings and accessories.

        Returns:
            True/False for the checkbox state when confirmed, None when the
            user cancelled
        """

    @abstractmethod
    def prompt(self, message: str, title: str, default: str = "") -> Optional[str]:
        """Text input box. Returns None or "" when the user cancelled."""

    @abstractmethod
    def show_message(self, title: str, message: str) -> None:
        """Informational dialog."""

    @abstractmethod
    def show_error(self, title: str, message: str) -> None:
        """Blocking error dialog."""


class HostDocument(ABC):
    """The open BIM document."""

    @abstractmethod
    def flow_export_graph(self, categories: List[HostCategory]) -> GraphBuildResult:
        """
        Collect non-type elements of the given categories and build their
        connector graph.

        Args:
            categories: Categories to collect

        Returns:
            GraphBuildResult whose root_ids are the collected elements
        """

    @abstractmethod
    def shared_transform(self) -> Transform:
        """Transform from internal to shared coordinates of the active location."""

    @abstractmethod
    def site_location(self) -> SiteLocation:
        """Project site location."""

    @abstractmethod
    def visible_element_properties(self) -> List[ElementProperties]:
        """Parameter values of all non-type elements visible in the active view."""

    @abstractmethod
    def find_by_unique_id(self, unique_id: str) -> Optional[Any]:
        """Element with the given UniqueId, or None."""

    @abstractmethod
    def select_and_show(self, element: Any) -> None:
        """Replace the selection with the element and zoom to it."""

    @abstractmethod
    def project_base_point(self) -> Optional[Point3]:
        """Position of the project base point, None when there is none."""

    @abstractmethod
    def model_element_ids(self) -> List[Any]:
        """Ids of all non-type elements in model categories."""

    @abstractmethod
    def rotate_elements(
        self,
        element_ids: List[Any],
        origin: Point3,
        angle_rad: float,
        transaction_name: str
    ) -> None:
        """
        Rotate elements about the vertical axis through origin in one
        transaction. The transaction is rolled back if rotation fails.
        """
