# File: scripts/revit_select_by_unique_id.py
"""Select By UniqueId command for Revit.

Prompt for an element UniqueId, then select the element and zoom to it.

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

from src.shared_coord_exporter.commands import SelectByUniqueIdCommand
from src.shared_coord_exporter.config import ExportConfig
from src.shared_coord_exporter.revit.document import RevitDocument, RevitUI
from src.shared_coord_exporter.utils import configure_logging, get_logger

# =============================================================================
# Execution
# =============================================================================

def main():
    config = ExportConfig.from_env()
    log_file = configure_logging(debug_mode=config.debug, log_dir=config.log_dir)
    logger = get_logger("select_by_unique_id")
    logger.info(f"Logging to {log_file}")

    command = SelectByUniqueIdCommand()
    result = command.execute(RevitUI(), RevitDocument(__revit__.ActiveUIDocument))
    logger.info(f"Select By UniqueId: {result}")
    return result


if __name__ == "__main__":
    main()
