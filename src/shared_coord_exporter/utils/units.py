# File: src/shared_coord_exporter/utils/units.py

"""
Length unit conversion for values read from the host.

The host stores every length in decimal feet (its internal unit). Exported
coordinates are written in meters, so everything passes through
convert_from_internal().
"""

from enum import Enum
from typing import Union, Dict


class LengthUnit(Enum):
    """
    Supported length units.
    """
    FEET = "feet"
    INCHES = "inches"
    METERS = "meters"
    MILLIMETERS = "millimeters"


# Host internal length unit
INTERNAL_UNIT = LengthUnit.FEET

# Size of one internal unit (foot) expressed in each unit
_PER_FOOT: Dict[LengthUnit, float] = {
    LengthUnit.FEET: 1.0,
    LengthUnit.INCHES: 12.0,
    LengthUnit.METERS: 0.3048,
    LengthUnit.MILLIMETERS: 304.8,
}


def _as_unit(unit: Union[LengthUnit, str]) -> LengthUnit:
    if isinstance(unit, LengthUnit):
        return unit
    if isinstance(unit, str):
        try:
            return LengthUnit(unit.lower())
        except ValueError:
            raise ValueError(f"Unsupported unit: {unit}")
    raise ValueError(f"Units must be LengthUnit enum or string, got {type(unit)}")


def convert_from_internal(value: float, target_unit: Union[LengthUnit, str]) -> float:
    """
    Converts a value from host internal units (feet) to the target unit.

    Args:
        value: Length in internal units
        target_unit: Unit to convert to (LengthUnit or its string value)

    Returns:
        The value in the target unit

    Raises:
        ValueError: If the unit is not supported
    """
    return value * _PER_FOOT[_as_unit(target_unit)]


def convert_to_internal(value: float, current_unit: Union[LengthUnit, str]) -> float:
    """
    Converts a value in the given unit to host internal units (feet).

    Args:
        value: Length in current_unit
        current_unit: Unit of the value (LengthUnit or its string value)

    Returns:
        The value in feet

    Raises:
        ValueError: If the unit is not supported
    """
    return value / _PER_FOOT[_as_unit(current_unit)]


def feet_to_meters(feet: float) -> float:
    return feet * _PER_FOOT[LengthUnit.METERS]
