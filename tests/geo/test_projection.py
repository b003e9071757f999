# File: tests/geo/test_projection.py
"""Tests for shared-coordinate and lat/lon projection."""

import math

import pytest

from src.shared_coord_exporter.config.export_config import EARTH_RADIUS_M
from src.shared_coord_exporter.core.mep_model import Point3
from src.shared_coord_exporter.geo.projection import SiteLocation, Transform, project

RIYADH = SiteLocation.from_degrees(24.7136, 46.6753)


class TestTransform:
    """Tests for the affine transform."""

    def test_identity(self):
        assert Transform.identity().of_point(Point3(1, 2, 3)) == Point3(1, 2, 3)

    def test_translation(self):
        transform = Transform(origin=Point3(100.0, 200.0, 10.0))
        assert transform.of_point(Point3(1.0, 2.0, 3.0)) == Point3(101.0, 202.0, 13.0)

    def test_rotation_z(self):
        transform = Transform.from_rotation_z(math.pi / 2)
        result = transform.of_point(Point3(1.0, 0.0, 5.0))
        assert result.x == pytest.approx(0.0, abs=1e-12)
        assert result.y == pytest.approx(1.0)
        assert result.z == pytest.approx(5.0)


class TestSiteLocation:

    def test_degrees_round_trip(self):
        assert RIYADH.latitude_deg == pytest.approx(24.7136)
        assert RIYADH.longitude_deg == pytest.approx(46.6753)


class TestProject:
    """Tests for project()."""

    def test_origin_maps_to_site_anchor(self):
        geo = project(Point3(0.0, 0.0, 0.0), Transform.identity(), RIYADH)
        assert geo.latitude_deg == pytest.approx(RIYADH.latitude_deg, abs=1e-12)
        assert geo.longitude_deg == pytest.approx(RIYADH.longitude_deg, abs=1e-12)

    def test_origin_ignores_shared_transform(self):
        """Lat/lon offsets use local coordinates, not shared ones."""
        transform = Transform(origin=Point3(5000.0, -3000.0, 20.0))
        geo = project(Point3(0.0, 0.0, 0.0), transform, RIYADH)
        assert geo.latitude_deg == pytest.approx(RIYADH.latitude_deg, abs=1e-12)
        assert geo.longitude_deg == pytest.approx(RIYADH.longitude_deg, abs=1e-12)

    def test_meter_coordinates(self):
        transform = Transform(origin=Point3(1000.0, 2000.0, 10.0))
        geo = project(Point3(10.0, 20.0, 0.0), transform, RIYADH)
        assert geo.easting_m == pytest.approx(1010.0 * 0.3048)
        assert geo.northing_m == pytest.approx(2020.0 * 0.3048)
        assert geo.elevation_m == pytest.approx(10.0 * 0.3048)

    def test_north_offset(self):
        feet = 1000.0
        geo = project(Point3(0.0, feet, 0.0), Transform.identity(), RIYADH)
        expected = RIYADH.latitude_deg + math.degrees(feet * 0.3048 / EARTH_RADIUS_M)
        assert geo.latitude_deg == pytest.approx(expected)
        assert geo.longitude_deg == pytest.approx(RIYADH.longitude_deg)

    def test_east_offset_scales_with_latitude(self):
        feet = 1000.0
        geo = project(Point3(feet, 0.0, 0.0), Transform.identity(), RIYADH)
        expected = RIYADH.longitude_deg + math.degrees(
            feet * 0.3048 / (EARTH_RADIUS_M * math.cos(RIYADH.latitude))
        )
        assert geo.longitude_deg == pytest.approx(expected)

    def test_custom_radius(self):
        small = project(Point3(0.0, 1000.0, 0.0), Transform.identity(), RIYADH, earth_radius_m=1000.0)
        large = project(Point3(0.0, 1000.0, 0.0), Transform.identity(), RIYADH)
        assert small.latitude_deg > large.latitude_deg

    @pytest.mark.parametrize("radius", [0.0, -6378137.0, float("nan"), float("inf")])
    def test_rejects_bad_radius(self, radius):
        with pytest.raises(ValueError):
            project(Point3(0.0, 0.0, 0.0), Transform.identity(), RIYADH, earth_radius_m=radius)
