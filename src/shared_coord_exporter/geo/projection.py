# File: src/shared_coord_exporter/geo/projection.py
"""
Shared-coordinate and approximate geographic projection of model points.

Two results are produced per point:
- Easting/northing/elevation in meters, from the project's local-to-shared
  coordinate transform
- Latitude/longitude in degrees, from the site anchor plus a planar
  small-angle offset of the *local* point:

      lat = lat0 + north / R
      lon = lon0 + east / (R * cos(lat0))

The lat/lon formula is an equirectangular approximation on a sphere of
radius R. It is adequate for site-sized extents and is not geodesic; it also
ignores any rotation between project north and true north.
"""

from dataclasses import dataclass
from typing import Callable, Dict
import math

from src.shared_coord_exporter.core.mep_model import Point3
from src.shared_coord_exporter.config.export_config import EARTH_RADIUS_M
from src.shared_coord_exporter.utils.units import feet_to_meters


@dataclass(frozen=True)
class Transform:
    """
    Affine transform given by an origin and three basis vectors.

    Matches the host's Transform: of_point(p) = origin + p.x*bx + p.y*by + p.z*bz.
    """
    origin: Point3 = Point3(0.0, 0.0, 0.0)
    basis_x: Point3 = Point3(1.0, 0.0, 0.0)
    basis_y: Point3 = Point3(0.0, 1.0, 0.0)
    basis_z: Point3 = Point3(0.0, 0.0, 1.0)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def from_rotation_z(cls, angle_rad: float, origin: Point3 = Point3(0.0, 0.0, 0.0)) -> "Transform":
        """
        Rotation about the vertical axis followed by a translation.

        Args:
            angle_rad: Counter-clockwise rotation in radians
            origin: Translation applied after the rotation
        """
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls(
            origin=origin,
            basis_x=Point3(c, s, 0.0),
            basis_y=Point3(-s, c, 0.0),
            basis_z=Point3(0.0, 0.0, 1.0),
        )

    def of_point(self, point: Point3) -> Point3:
        """Apply the transform to a point."""
        o, bx, by, bz = self.origin, self.basis_x, self.basis_y, self.basis_z
        return Point3(
            o.x + point.x * bx.x + point.y * by.x + point.z * bz.x,
            o.y + point.x * bx.y + point.y * by.y + point.z * bz.y,
            o.z + point.x * bx.z + point.y * by.z + point.z * bz.z,
        )


@dataclass(frozen=True)
class SiteLocation:
    """
    Site anchor of the project's local origin.

    Attributes:
        latitude: Latitude in radians
        longitude: Longitude in radians
    """
    latitude: float
    longitude: float

    @classmethod
    def from_degrees(cls, latitude_deg: float, longitude_deg: float) -> "SiteLocation":
        return cls(math.radians(latitude_deg), math.radians(longitude_deg))

    @property
    def latitude_deg(self) -> float:
        return self.latitude * (180.0 / math.pi)

    @property
    def longitude_deg(self) -> float:
        return self.longitude * (180.0 / math.pi)


@dataclass(frozen=True)
class GeoPoint:
    """
    Projected position of one model point.

    Attributes:
        easting_m: Shared-coordinate X in meters
        northing_m: Shared-coordinate Y in meters
        elevation_m: Shared-coordinate Z in meters
        latitude_deg: Approximate latitude in degrees
        longitude_deg: Approximate longitude in degrees
    """
    easting_m: float
    northing_m: float
    elevation_m: float
    latitude_deg: float
    longitude_deg: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "easting_m": self.easting_m,
            "northing_m": self.northing_m,
            "elevation_m": self.elevation_m,
            "latitude_deg": self.latitude_deg,
            "longitude_deg": self.longitude_deg,
        }


def project(
    local_point: Point3,
    shared_transform: Transform,
    site: SiteLocation,
    earth_radius_m: float = EARTH_RADIUS_M,
    to_meters: Callable[[float], float] = feet_to_meters
) -> GeoPoint:
    """
    Project a local model point to shared coordinates and lat/lon.

    Args:
        local_point: Point in internal units and local coordinates
        shared_transform: Local-to-shared coordinate transform
        site: Site anchor (radians)
        earth_radius_m: Sphere radius used for the lat/lon offset
        to_meters: Converter from internal length units to meters

    Returns:
        GeoPoint with meter coordinates and approximate lat/lon

    Raises:
        ValueError: If earth_radius_m is not a positive finite number
    """
    if not math.isfinite(earth_radius_m) or earth_radius_m <= 0:
        raise ValueError(f"earth_radius_m must be positive and finite, got {earth_radius_m}")

    shared = shared_transform.of_point(local_point)

    east_local_m = to_meters(local_point.x)
    north_local_m = to_meters(local_point.y)

    lat_offset = north_local_m / earth_radius_m
    lon_offset = east_local_m / (earth_radius_m * math.cos(site.latitude))

    return GeoPoint(
        easting_m=to_meters(shared.x),
        northing_m=to_meters(shared.y),
        elevation_m=to_meters(shared.z),
        latitude_deg=(site.latitude + lat_offset) * (180.0 / math.pi),
        longitude_deg=(site.longitude + lon_offset) * (180.0 / math.pi),
    )
