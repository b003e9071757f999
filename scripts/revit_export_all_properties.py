# File: scripts/revit_export_all_properties.py
"""Element Properties Matrix command for Revit.

Export every parameter of the elements visible in the active view as one
CSV matrix (one row per element, one column per parameter name).

Environment:
    Revit 2022+
    pyRevit or RevitPythonShell (CPython 3 engine)

Dependencies:
    - RevitAPI / RevitAPIUI: Document access and dialogs
    - shared_coord_exporter.commands: Command logic

Configuration (environment variables):
    SCE_OUTPUT_DIR, SCE_EARTH_RADIUS_M, SCE_LEGACY_COLUMNS, SCE_LOG_DIR, SCE_DEBUG
"""

# =============================================================================
# Imports
# =============================================================================

import os
import sys

# Project path: repository root, two levels up from this script
PROJECT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_PATH not in sys.path:
    sys.path.insert(0, PROJECT_PATH)

from src.shared_coord_exporter.commands import ExportAllPropertiesCommand
from src.shared_coord_exporter.config import ExportConfig
from src.shared_coord_exporter.revit.document import RevitDocument, RevitUI
from src.shared_coord_exporter.utils import configure_logging, get_logger

# =============================================================================
# Execution
# =============================================================================

def main():
    config = ExportConfig.from_env()
    log_file = configure_logging(debug_mode=config.debug, log_dir=config.log_dir)
    logger = get_logger("export_all_properties")
    logger.info(f"Logging to {log_file}")

    command = ExportAllPropertiesCommand(config)
    result = command.execute(RevitUI(), RevitDocument(__revit__.ActiveUIDocument))
    logger.info(f"Element Properties Matrix: {result}")
    return result


if __name__ == "__main__":
    main()
