# File: src/shared_coord_exporter/commands/export_commands.py
"""
Export commands.

- ExportSharedCoordsCommand: flow-aware coordinate CSV of pipes, equipment
  and fixtures (plus fittings/accessories unless they are skipped)
- ExportAllPropertiesCommand: parameter matrix of the elements visible in
  the active view
"""

from typing import Optional
import logging

from src.shared_coord_exporter.commands.host import CommandResult, HostDocument, HostUI
from src.shared_coord_exporter.config.export_config import ExportConfig, export_categories
from src.shared_coord_exporter.core.errors import ExporterError
from src.shared_coord_exporter.export.flow_export import ExportSummary, FlowExporter
from src.shared_coord_exporter.export.property_matrix import export_property_matrix

logger = logging.getLogger(__name__)

FLOW_EXPORT_DONE = "Flow-aware connections exported."
PROPERTIES_EXPORT_DONE = "Clean matrix exported (no repetition)."


class ExportSharedCoordsCommand:
    """
    Export pipe endpoints and equipment locations with shared coordinates,
    lat/lon and flow connectivity.

    Example:
        >>> command = ExportSharedCoordsCommand(ExportConfig.from_env())
        >>> command.execute(ui, document)
        <CommandResult.SUCCEEDED: 'Succeeded'>
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()
        self.last_summary: Optional[ExportSummary] = None

    def execute(self, ui: HostUI, document: HostDocument) -> CommandResult:
        skip_accessories = ui.confirm_flow_export()
        if skip_accessories is None:
            logger.info("Flow export cancelled")
            return CommandResult.CANCELLED

        try:
            self.config.validate()
            build = document.flow_export_graph(export_categories(skip_accessories))
            exporter = FlowExporter(
                build.graph,
                document.shared_transform(),
                document.site_location(),
                self.config,
                read_failures=build.failures,
            )
            self.last_summary = exporter.export_to_file(
                build.root_ids, self.config.flow_path, skip_accessories
            )
        except (ExporterError, ValueError) as e:
            message = e.detail if isinstance(e, ExporterError) else str(e)
            logger.error(f"Flow export failed: {message}")
            ui.show_error("Export Failed", message)
            return CommandResult.FAILED
        except Exception as e:
            logger.error(f"Flow export failed unexpectedly: {e}", exc_info=True)
            ui.show_error("Export Failed", str(e))
            return CommandResult.FAILED

        if self.last_summary.skipped_count:
            logger.warning(f"{self.last_summary.skipped_count} elements were skipped")

        ui.show_message("Export Complete", FLOW_EXPORT_DONE)
        return CommandResult.SUCCEEDED


class ExportAllPropertiesCommand:
    """Export every parameter of the visible elements as one matrix."""

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()

    def execute(self, ui: HostUI, document: HostDocument) -> CommandResult:
        try:
            records = document.visible_element_properties()
            export_property_matrix(records, self.config.properties_path)
        except ExporterError as e:
            logger.error(f"Property export failed: {e.detail}")
            ui.show_error("Export Failed", e.detail)
            return CommandResult.FAILED
        except Exception as e:
            logger.error(f"Property export failed unexpectedly: {e}", exc_info=True)
            ui.show_error("Export Failed", str(e))
            return CommandResult.FAILED

        ui.show_message("Done", PROPERTIES_EXPORT_DONE)
        return CommandResult.SUCCEEDED
