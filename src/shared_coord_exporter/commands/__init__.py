# File: src/shared_coord_exporter/commands/__init__.py
"""
Host commands.

Each command has an execute(ui, document) method returning a CommandResult.
"""

from .host import CommandResult, HostUI, HostDocument
from .export_commands import ExportSharedCoordsCommand, ExportAllPropertiesCommand
from .model_commands import (
    SelectByUniqueIdCommand,
    RotateModelCommand,
    parse_rotation_angle,
)

__all__ = [
    "CommandResult",
    "HostUI",
    "HostDocument",
    "ExportSharedCoordsCommand",
    "ExportAllPropertiesCommand",
    "SelectByUniqueIdCommand",
    "RotateModelCommand",
    "parse_rotation_angle",
]
