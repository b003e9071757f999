# File: src/shared_coord_exporter/revit/document.py
"""
Revit implementations of HostDocument and HostUI.

All Revit API calls of the commands are isolated here so that the commands,
resolvers and exporters stay testable without a Revit environment. The
Revit imports are conditional; constructing RevitDocument or RevitUI
outside Revit raises RuntimeError.

Usage (inside Revit via pyRevit or RevitPythonShell only):
    from src.shared_coord_exporter.revit.document import RevitDocument, RevitUI

    document = RevitDocument(__revit__.ActiveUIDocument)
    result = ExportSharedCoordsCommand().execute(RevitUI(), document)
"""

import logging
from typing import List, Any, Optional

from src.shared_coord_exporter.commands.host import HostDocument, HostUI
from src.shared_coord_exporter.core.mep_model import HostCategory, Point3
from src.shared_coord_exporter.export.property_matrix import ElementProperties
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform
from src.shared_coord_exporter.revit.host_reader import (
    GraphBuildResult,
    build_connector_graph,
    read_parameters,
    read_site_location,
    read_transform,
    read_unique_id,
    read_xyz,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Conditional Revit Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR: Optional[str] = None

try:
    import clr
    clr.AddReference("RevitAPI")
    clr.AddReference("RevitAPIUI")
    clr.AddReference("Microsoft.VisualBasic")
    from Autodesk.Revit import DB
    from Autodesk.Revit.UI import (
        TaskDialog,
        TaskDialogCommonButtons,
        TaskDialogResult,
    )
    from Microsoft.VisualBasic import Interaction
    from System.Collections.Generic import List as NetList
    REVIT_AVAILABLE = True
except ImportError as e:
    REVIT_ERROR = str(e)


def _require_revit() -> None:
    if not REVIT_AVAILABLE:
        raise RuntimeError(f"Revit API not available: {REVIT_ERROR}")


def _to_xyz(point: Point3):
    return DB.XYZ(point.x, point.y, point.z)


# =============================================================================
# Document
# =============================================================================

class RevitDocument(HostDocument):
    """HostDocument backed by a Revit UIDocument."""

    def __init__(self, uidoc: Any):
        _require_revit()
        self.uidoc = uidoc
        self.doc = uidoc.Document

    def flow_export_graph(self, categories: List[HostCategory]) -> GraphBuildResult:
        builtin = NetList[DB.BuiltInCategory]()
        for category in categories:
            builtin.Add(getattr(DB.BuiltInCategory, category.value))

        collector = (
            DB.FilteredElementCollector(self.doc)
            .WherePasses(DB.ElementMulticategoryFilter(builtin))
            .WhereElementIsNotElementType()
        )
        elements = list(collector)
        logger.info(f"Collected {len(elements)} elements for flow export")
        return build_connector_graph(elements)

    def shared_transform(self) -> Transform:
        return read_transform(self.doc.ActiveProjectLocation.GetTransform())

    def site_location(self) -> SiteLocation:
        return read_site_location(self.doc.SiteLocation)

    def visible_element_properties(self) -> List[ElementProperties]:
        collector = (
            DB.FilteredElementCollector(self.doc, self.doc.ActiveView.Id)
            .WhereElementIsNotElementType()
        )
        records = []
        for element in collector:
            try:
                records.append(read_parameters(element))
            except Exception as e:
                logger.warning(f"Skipping parameters of {read_unique_id(element)}: {e}")
        logger.info(f"Read parameters of {len(records)} visible elements")
        return records

    def find_by_unique_id(self, unique_id: str) -> Optional[Any]:
        return self.doc.GetElement(unique_id)

    def select_and_show(self, element: Any) -> None:
        ids = NetList[DB.ElementId]()
        ids.Add(element.Id)
        self.uidoc.Selection.SetElementIds(ids)
        self.uidoc.ShowElements(element.Id)

    def project_base_point(self) -> Optional[Point3]:
        base_point = (
            DB.FilteredElementCollector(self.doc)
            .OfCategory(DB.BuiltInCategory.OST_ProjectBasePoint)
            .WhereElementIsNotElementType()
            .FirstElement()
        )
        if base_point is None:
            return None
        return read_xyz(base_point.Position)

    def model_element_ids(self) -> List[Any]:
        collector = DB.FilteredElementCollector(self.doc).WhereElementIsNotElementType()
        return [
            element.Id for element in collector
            if element.Category is not None
            and element.Category.CategoryType == DB.CategoryType.Model
        ]

    def rotate_elements(
        self,
        element_ids: List[Any],
        origin: Point3,
        angle_rad: float,
        transaction_name: str
    ) -> None:
        ids = NetList[DB.ElementId]()
        for element_id in element_ids:
            ids.Add(element_id)

        center = _to_xyz(origin)
        axis = DB.Line.CreateBound(center, center.Add(DB.XYZ.BasisZ))

        transaction = DB.Transaction(self.doc, transaction_name)
        transaction.Start()
        try:
            DB.ElementTransformUtils.RotateElements(self.doc, ids, axis, angle_rad)
            transaction.Commit()
        except Exception:
            transaction.RollBack()
            raise


# =============================================================================
# UI
# =============================================================================

class RevitUI(HostUI):
    """HostUI backed by TaskDialog and the VisualBasic InputBox."""

    def __init__(self):
        _require_revit()

    def confirm_flow_export(self) -> Optional[bool]:
        dialog = TaskDialog("Export Options")
        dialog.MainInstruction = "Flow Export"
        dialog.MainContent = (
            "Export pipes, equipment and fixtures with shared coordinates "
            "and flow connectivity."
        )
        dialog.VerificationText = "Skip accessories and fittings (look through them)"
        dialog.CommonButtons = TaskDialogCommonButtons.Ok | TaskDialogCommonButtons.Cancel
        if dialog.Show() != TaskDialogResult.Ok:
            return None
        return bool(dialog.WasVerificationChecked())

    def prompt(self, message: str, title: str, default: str = "") -> Optional[str]:
        return Interaction.InputBox(message, title, default)

    def show_message(self, title: str, message: str) -> None:
        TaskDialog.Show(title, message)

    def show_error(self, title: str, message: str) -> None:
        TaskDialog.Show(title, message)
