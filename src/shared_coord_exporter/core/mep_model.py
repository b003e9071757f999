# File: src/shared_coord_exporter/core/mep_model.py
"""
Host-neutral model of the MEP elements read from the BIM host.

This module defines the core types the connectivity and export code works on:
- FlowDirection: Connector flow direction (In, Out, Bidirectional)
- HostCategory: The host built-in categories the exporter filters on
- ElementKind: Structural kind of an element (pipe primitive, family instance)
- EquipmentCategory: Closed set of logical equipment classes used in the CSV
- Point3, LocationCurve, LocationPoint: Element locations in internal units
- HostElement: Read-only snapshot of one host element

The host document owns the real elements; these types are copies taken once
per export run so the resolvers never touch the host model directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Any, Tuple, Optional, Union


class FlowDirection(Enum):
    """
    Flow direction of a connector.

    Attributes:
        IN: Flow enters the owning element through this connector
        OUT: Flow leaves the owning element through this connector
        BIDIRECTIONAL: Undirected or unknown flow
    """
    IN = "In"
    OUT = "Out"
    BIDIRECTIONAL = "Bidirectional"

    def __str__(self) -> str:
        """Return the string value for display."""
        return self.value

    @classmethod
    def from_string(cls, value: Optional[str]) -> "FlowDirection":
        """
        Create FlowDirection from host text.

        Accepts plain values ("In", "out") and qualified enum text such as
        "FlowDirectionType.In". Anything that is not clearly In or Out is
        treated as bidirectional.

        Args:
            value: Direction text, or None

        Returns:
            Corresponding FlowDirection member
        """
        if value is None:
            return cls.BIDIRECTIONAL

        text = str(value).strip().rsplit(".", 1)[-1].lower()
        if text == "in":
            return cls.IN
        if text == "out":
            return cls.OUT
        return cls.BIDIRECTIONAL


class HostCategory(Enum):
    """
    Host built-in categories relevant to the exporter.

    Values are the host's built-in category names; `builtin_id` gives the
    numeric id the host stores on `Category.Id`.
    """
    PIPE_CURVES = "OST_PipeCurves"
    PIPE_FITTING = "OST_PipeFitting"
    PIPE_ACCESSORY = "OST_PipeAccessory"
    MECHANICAL_EQUIPMENT = "OST_MechanicalEquipment"
    PLUMBING_FIXTURES = "OST_PlumbingFixtures"
    PROJECT_BASE_POINT = "OST_ProjectBasePoint"
    OTHER = "Other"

    @property
    def builtin_id(self) -> Optional[int]:
        """Numeric built-in category id, None for OTHER."""
        return _BUILTIN_IDS.get(self)

    @classmethod
    def from_builtin_id(cls, value: Optional[int]) -> "HostCategory":
        """
        Map a numeric built-in category id to a HostCategory.

        Args:
            value: Integer category id (negative for built-in categories)

        Returns:
            Matching HostCategory, or OTHER for unknown or missing ids
        """
        if value is None:
            return cls.OTHER
        for member, builtin_id in _BUILTIN_IDS.items():
            if builtin_id == int(value):
                return member
        return cls.OTHER

    @classmethod
    def from_string(cls, value: Optional[str]) -> "HostCategory":
        """
        Create HostCategory from its built-in name.

        Args:
            value: Built-in name such as "OST_PipeFitting"

        Returns:
            Matching HostCategory, or OTHER when the name is unknown
        """
        if not value:
            return cls.OTHER
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        return cls.OTHER


_BUILTIN_IDS: Dict[HostCategory, int] = {
    HostCategory.PIPE_CURVES: -2008044,
    HostCategory.PIPE_FITTING: -2008049,
    HostCategory.PIPE_ACCESSORY: -2008055,
    HostCategory.MECHANICAL_EQUIPMENT: -2001140,
    HostCategory.PLUMBING_FIXTURES: -2001160,
    HostCategory.PROJECT_BASE_POINT: -2001271,
}


class ElementKind(Enum):
    """Structural kind of a host element."""
    PIPE = "pipe"
    FAMILY_INSTANCE = "family_instance"
    OTHER = "other"


class EquipmentCategory(Enum):
    """
    Logical equipment classes tracked in the flow export.

    Values are the CSV column stems; declaration order is column order.
    """
    PIPE = "Pipe"
    VALVE = "Valve"
    PUMP = "Pump"
    TANK = "Tank"
    FLOW_METER = "FlowMeter"
    CHILLER = "Chiller"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Point3:
    """A 3D point in host internal units (decimal feet)."""
    x: float
    y: float
    z: float

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point3":
        return cls(float(data["x"]), float(data["y"]), float(data["z"]))


@dataclass(frozen=True)
class LocationCurve:
    """Curve-driven location (pipes) with two endpoints."""
    start: Point3
    end: Point3

    def labelled_points(self) -> List[Tuple[str, Point3]]:
        return [("Start", self.start), ("End", self.end)]


@dataclass(frozen=True)
class LocationPoint:
    """Point-driven location (equipment, fittings, fixtures)."""
    point: Point3

    def labelled_points(self) -> List[Tuple[str, Point3]]:
        return [("Location", self.point)]


Location = Union[LocationCurve, LocationPoint]


@dataclass
class HostElement:
    """
    Read-only snapshot of a host element.

    Attributes:
        unique_id: Stable unique identifier (host UniqueId string)
        name: Display name
        category: Built-in category used for filtering and pass-through checks
        category_name: Category display name written to the CSV
        kind: Structural kind used by the equipment classifier
        family_name: Family name for family instances, None otherwise
        location: Curve or point location, None when the element has none
        element_id: Integer host ElementId, if known
    """
    unique_id: str
    name: str = ""
    category: HostCategory = HostCategory.OTHER
    category_name: str = ""
    kind: ElementKind = ElementKind.OTHER
    family_name: Optional[str] = None
    location: Optional[Location] = None
    element_id: Optional[int] = None

    def labelled_points(self) -> List[Tuple[str, Point3]]:
        """
        Points exported for this element.

        Returns:
            ("Start", p), ("End", p) for curves, ("Location", p) for points,
            empty list when the element has no location
        """
        if self.location is None:
            return []
        return self.location.labelled_points()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the element
        """
        result: Dict[str, Any] = {
            "unique_id": self.unique_id,
            "name": self.name,
            "category": self.category.value,
            "category_name": self.category_name,
            "kind": self.kind.value,
            "family_name": self.family_name,
            "element_id": self.element_id,
        }
        if isinstance(self.location, LocationCurve):
            result["location"] = {
                "type": "curve",
                "start": self.location.start.to_dict(),
                "end": self.location.end.to_dict(),
            }
        elif isinstance(self.location, LocationPoint):
            result["location"] = {
                "type": "point",
                "point": self.location.point.to_dict(),
            }
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostElement":
        """
        Create HostElement from dictionary.

        Args:
            data: Dictionary with element data

        Returns:
            HostElement instance

        Raises:
            KeyError: If unique_id or location coordinates are missing
            ValueError: If the location type is not "curve" or "point"
        """
        location: Optional[Location] = None
        loc = data.get("location")
        if loc:
            loc_type = loc.get("type")
            if loc_type == "curve":
                location = LocationCurve(
                    start=Point3.from_dict(loc["start"]),
                    end=Point3.from_dict(loc["end"]),
                )
            elif loc_type == "point":
                location = LocationPoint(point=Point3.from_dict(loc["point"]))
            else:
                raise ValueError(f"Unknown location type: {loc_type}")

        return cls(
            unique_id=data["unique_id"],
            name=data.get("name", ""),
            category=HostCategory.from_string(data.get("category")),
            category_name=data.get("category_name", ""),
            kind=ElementKind(data.get("kind", ElementKind.OTHER.value)),
            family_name=data.get("family_name"),
            location=location,
            element_id=data.get("element_id"),
        )
