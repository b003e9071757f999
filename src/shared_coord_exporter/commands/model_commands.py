# File: src/shared_coord_exporter/commands/model_commands.py
"""
Model utility commands.

- SelectByUniqueIdCommand: select and zoom to an element by its UniqueId
- RotateModelCommand: rotate all model elements about the project base point
"""

import logging
import math
from typing import Optional

from src.shared_coord_exporter.commands.host import CommandResult, HostDocument, HostUI
from src.shared_coord_exporter.core.errors import (
    ElementNotFoundError,
    ExporterError,
    MissingPrerequisiteError,
)

logger = logging.getLogger(__name__)

ROTATE_PROMPT = "Enter rotation angle in degrees (positive = CCW, negative = CW)"
ROTATE_TITLE = "Rotate Model"
SELECT_PROMPT = "Enter Element UUID (UniqueId)"
SELECT_TITLE = "Select Element"


def parse_rotation_angle(text: Optional[str]) -> Optional[float]:
    """
    Parse the rotation angle typed by the user.

    Args:
        text: Raw input, may be None when the dialog was cancelled

    Returns:
        Angle in degrees, or None when the input is empty, not a number,
        or not finite
    """
    if text is None or not text.strip():
        return None
    try:
        angle = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(angle):
        return None
    return angle


class SelectByUniqueIdCommand:
    """Select an element by UniqueId and bring it into view."""

    def execute(self, ui: HostUI, document: HostDocument) -> CommandResult:
        unique_id = ui.prompt(SELECT_PROMPT, SELECT_TITLE)
        if unique_id is None or not unique_id.strip():
            return CommandResult.CANCELLED
        unique_id = unique_id.strip()

        element = document.find_by_unique_id(unique_id)
        if element is None:
            logger.info(ElementNotFoundError(unique_id).detail)
            ui.show_message("Result", "Element not found")
            return CommandResult.FAILED

        document.select_and_show(element)
        logger.info(f"Selected element {unique_id}")
        return CommandResult.SUCCEEDED


class RotateModelCommand:
    """
    Rotate every model-category element about the vertical axis through the
    project base point.

    Positive angles rotate counter-clockwise in plan.
    """

    TRANSACTION_NAME = "Rotate Model"

    def execute(self, ui: HostUI, document: HostDocument) -> CommandResult:
        angle_deg = parse_rotation_angle(ui.prompt(ROTATE_PROMPT, ROTATE_TITLE, "0"))
        if angle_deg is None:
            logger.info("Rotation cancelled or angle not a number")
            return CommandResult.CANCELLED

        try:
            origin = document.project_base_point()
            if origin is None:
                raise MissingPrerequisiteError("project base point")

            element_ids = document.model_element_ids()
            logger.info(
                f"Rotating {len(element_ids)} elements by {angle_deg:g} degrees "
                f"about ({origin.x}, {origin.y})"
            )
            document.rotate_elements(
                element_ids, origin, math.radians(angle_deg), self.TRANSACTION_NAME
            )
        except ExporterError as e:
            logger.error(f"Rotation failed: {e.detail}")
            ui.show_error(ROTATE_TITLE, e.detail)
            return CommandResult.FAILED

        ui.show_message(ROTATE_TITLE, f"Model rotated by {angle_deg:g}°")
        return CommandResult.SUCCEEDED
