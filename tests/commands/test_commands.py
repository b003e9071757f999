# File: tests/commands/test_commands.py
"""Tests for the host commands using in-memory UI and document fakes."""

import math

import pytest

from src.shared_coord_exporter.commands import (
    CommandResult,
    ExportAllPropertiesCommand,
    ExportSharedCoordsCommand,
    HostDocument,
    HostUI,
    RotateModelCommand,
    SelectByUniqueIdCommand,
    parse_rotation_angle,
)
from src.shared_coord_exporter.config.export_config import ExportConfig
from src.shared_coord_exporter.core.mep_model import HostCategory, Point3
from src.shared_coord_exporter.export.csv_rows import FLOW_HEADER
from src.shared_coord_exporter.export.property_matrix import ElementProperties
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform
from src.shared_coord_exporter.revit.host_reader import GraphBuildResult


# ============================================================================
# Fakes
# ============================================================================

class FakeUI(HostUI):
    def __init__(self, skip_choice=False, answers=None):
        self.skip_choice = skip_choice
        self.answers = list(answers or [])
        self.prompts = []
        self.messages = []
        self.errors = []

    def confirm_flow_export(self):
        return self.skip_choice

    def prompt(self, message, title, default=""):
        self.prompts.append((message, title, default))
        return self.answers.pop(0) if self.answers else None

    def show_message(self, title, message):
        self.messages.append((title, message))

    def show_error(self, title, message):
        self.errors.append((title, message))


class FakeDocument(HostDocument):
    def __init__(self, build=None, base_point=Point3(0.0, 0.0, 0.0), elements=None):
        self.build = build
        self.base_point = base_point
        self.elements = elements or {}
        self.requested_categories = None
        self.selected = None
        self.rotations = []

    def flow_export_graph(self, categories):
        self.requested_categories = list(categories)
        return self.build

    def shared_transform(self):
        return Transform.identity()

    def site_location(self):
        return SiteLocation.from_degrees(24.7, 46.7)

    def visible_element_properties(self):
        return [
            ElementProperties(element_id=1, unique_id="a", name="A", values={"Mark": "1"}),
        ]

    def find_by_unique_id(self, unique_id):
        return self.elements.get(unique_id)

    def select_and_show(self, element):
        self.selected = element

    def project_base_point(self):
        return self.base_point

    def model_element_ids(self):
        return [1, 2, 3]

    def rotate_elements(self, element_ids, origin, angle_rad, transaction_name):
        self.rotations.append((list(element_ids), origin, angle_rad, transaction_name))


# ============================================================================
# parse_rotation_angle
# ============================================================================

@pytest.mark.parametrize(
    "text,expected",
    [
        ("45", 45.0),
        (" -12.5 ", -12.5),
        ("0", 0.0),
        ("", None),
        ("   ", None),
        (None, None),
        ("ninety", None),
        ("nan", None),
        ("inf", None),
    ],
)
def test_parse_rotation_angle(text, expected):
    assert parse_rotation_angle(text) == expected


# ============================================================================
# Export commands
# ============================================================================

class TestExportSharedCoordsCommand:
    """Tests for the flow export command."""

    def test_cancelled(self, tmp_path):
        ui = FakeUI(skip_choice=None)
        document = FakeDocument()
        command = ExportSharedCoordsCommand(ExportConfig(output_dir=str(tmp_path)))

        assert command.execute(ui, document) == CommandResult.CANCELLED
        assert document.requested_categories is None
        assert not (tmp_path / "MEP_Geo_Saudi_Corrected.csv").exists()

    def test_exports_and_reports(self, pump_pipe_tank_graph, tmp_path):
        build = GraphBuildResult(
            graph=pump_pipe_tank_graph,
            root_ids=["pump-1", "pipe-1", "lost", "tank-1"],
            failures={"lost": "connector manager unavailable"},
        )
        ui = FakeUI(skip_choice=True)
        document = FakeDocument(build=build)
        command = ExportSharedCoordsCommand(ExportConfig(output_dir=str(tmp_path)))

        result = command.execute(ui, document)

        assert result == CommandResult.SUCCEEDED
        assert ui.messages == [("Export Complete", "Flow-aware connections exported.")]
        assert HostCategory.PIPE_FITTING not in document.requested_categories

        lines = (tmp_path / "MEP_Geo_Saudi_Corrected.csv").read_text(encoding="utf-8-sig").splitlines()
        assert lines[0] == ",".join(FLOW_HEADER)
        assert len(lines) == 5
        assert command.last_summary.skipped_count == 1

    def test_includes_fittings_without_skip(self, pump_pipe_tank_graph, tmp_path):
        document = FakeDocument(build=GraphBuildResult(graph=pump_pipe_tank_graph))
        command = ExportSharedCoordsCommand(ExportConfig(output_dir=str(tmp_path)))

        command.execute(FakeUI(skip_choice=False), document)

        assert HostCategory.PIPE_FITTING in document.requested_categories
        assert HostCategory.PIPE_ACCESSORY in document.requested_categories

    def test_write_failure_shows_error(self, pump_pipe_tank_graph, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        ui = FakeUI(skip_choice=False)
        document = FakeDocument(build=GraphBuildResult(graph=pump_pipe_tank_graph, root_ids=["pump-1"]))
        command = ExportSharedCoordsCommand(ExportConfig(output_dir=str(blocker / "out")))

        assert command.execute(ui, document) == CommandResult.FAILED
        assert len(ui.errors) == 1
        assert ui.messages == []

    def test_host_failure_shows_single_error(self, pump_pipe_tank_graph, tmp_path):
        class UnlocatedDocument(FakeDocument):
            def shared_transform(self):
                raise RuntimeError("project location is not available")

        ui = FakeUI(skip_choice=False)
        document = UnlocatedDocument(build=GraphBuildResult(graph=pump_pipe_tank_graph))
        command = ExportSharedCoordsCommand(ExportConfig(output_dir=str(tmp_path)))

        assert command.execute(ui, document) == CommandResult.FAILED
        assert ui.errors == [("Export Failed", "project location is not available")]
        assert ui.messages == []
        assert not (tmp_path / "MEP_Geo_Saudi_Corrected.csv").exists()


class TestExportAllPropertiesCommand:

    def test_writes_matrix(self, tmp_path):
        ui = FakeUI()
        command = ExportAllPropertiesCommand(ExportConfig(output_dir=str(tmp_path)))

        assert command.execute(ui, FakeDocument()) == CommandResult.SUCCEEDED
        assert ui.messages == [("Done", "Clean matrix exported (no repetition).")]
        text = (tmp_path / "Element_Properties_Matrix.csv").read_text(encoding="utf-8-sig")
        assert text.splitlines() == ["ElementId,UniqueId,Category,Name,Mark", "1,a,,A,1"]

    def test_host_failure_shows_single_error(self, tmp_path):
        class ClosedViewDocument(FakeDocument):
            def visible_element_properties(self):
                raise RuntimeError("active view is not a graphical view")

        ui = FakeUI()
        command = ExportAllPropertiesCommand(ExportConfig(output_dir=str(tmp_path)))

        assert command.execute(ui, ClosedViewDocument()) == CommandResult.FAILED
        assert ui.errors == [("Export Failed", "active view is not a graphical view")]
        assert ui.messages == []


# ============================================================================
# Model commands
# ============================================================================

class TestSelectByUniqueIdCommand:

    def test_blank_input_cancels(self):
        ui = FakeUI(answers=["  "])
        assert SelectByUniqueIdCommand().execute(ui, FakeDocument()) == CommandResult.CANCELLED

    def test_not_found(self):
        ui = FakeUI(answers=["missing"])
        assert SelectByUniqueIdCommand().execute(ui, FakeDocument()) == CommandResult.FAILED
        assert ui.messages == [("Result", "Element not found")]

    def test_selects_element(self):
        element = object()
        ui = FakeUI(answers=["abc-123"])
        document = FakeDocument(elements={"abc-123": element})

        assert SelectByUniqueIdCommand().execute(ui, document) == CommandResult.SUCCEEDED
        assert document.selected is element


class TestRotateModelCommand:

    def test_rotates_about_base_point(self):
        ui = FakeUI(answers=["90"])
        document = FakeDocument(base_point=Point3(5.0, 6.0, 0.0))

        assert RotateModelCommand().execute(ui, document) == CommandResult.SUCCEEDED

        ids, origin, angle, name = document.rotations[0]
        assert ids == [1, 2, 3]
        assert origin == Point3(5.0, 6.0, 0.0)
        assert angle == pytest.approx(math.pi / 2)
        assert name == "Rotate Model"
        assert ui.messages == [("Rotate Model", "Model rotated by 90°")]
        assert ui.prompts[0][2] == "0"

    def test_invalid_angle_cancels(self):
        document = FakeDocument()
        ui = FakeUI(answers=["abc"])
        assert RotateModelCommand().execute(ui, document) == CommandResult.CANCELLED
        assert document.rotations == []

    def test_missing_base_point_fails(self):
        document = FakeDocument(base_point=None)
        ui = FakeUI(answers=["15"])
        assert RotateModelCommand().execute(ui, document) == CommandResult.FAILED
        assert document.rotations == []
        assert len(ui.errors) == 1
