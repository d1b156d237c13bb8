from unittest import TestCase

import numpy as np

from geoanchor.constructs.anchor import Hemisphere
from geoanchor.constructs.coordinate import AbsoluteCoordinate, GeographicCoordinate
from geoanchor.transforms.projection import ProjectionInterface, UtmProjection

STOLTENPARK = GeographicCoordinate(longitude=10.028691, latitude=53.551218)


class TestUtmProjection(TestCase):
    def setUp(self):
        self.projection = UtmProjection(32, Hemisphere.NORTHERN)

    def test_crs(self):
        self.assertEqual(self.projection.crs.to_epsg(), 32632)
        self.assertEqual(UtmProjection(33, "southern").crs.to_epsg(), 32733)

    def test_central_meridian_on_equator(self):
        """The origin of a northern zone sits at 500 km false easting on the equator"""
        p = self.projection.geographic_to_projected(9.0, 0.0)

        self.assertAlmostEqual(p.east, 500000.0, places=3)
        self.assertAlmostEqual(p.north, 0.0, places=3)
        self.assertEqual(p.height, 0.0)

    def test_round_trip(self):
        p = self.projection.geographic_to_projected(
            STOLTENPARK.longitude, STOLTENPARK.latitude
        )
        result = self.projection.projected_to_geographic(p)

        self.assertIsInstance(result, GeographicCoordinate)
        self.assertAlmostEqual(result.longitude, STOLTENPARK.longitude, places=9)
        self.assertAlmostEqual(result.latitude, STOLTENPARK.latitude, places=9)

    def test_height_is_ignored(self):
        a = self.projection.projected_to_geographic(AbsoluteCoordinate(567475, 5932475, 0))
        b = self.projection.projected_to_geographic(AbsoluteCoordinate(567475, 5932475, 500))

        self.assertEqual(a, b)

    def test_array_matches_scalar(self):
        lon = np.array([10.0, 10.028691, 9.5])
        lat = np.array([53.5, 53.551218, 54.0])

        east, north = self.projection.geographic_to_projected_array(lon, lat)

        for i in range(len(lon)):
            p = self.projection.geographic_to_projected(lon[i], lat[i])
            self.assertAlmostEqual(east[i], p.east, places=6)
            self.assertAlmostEqual(north[i], p.north, places=6)

    def test_default_array_implementation(self):
        """Projections without a vectorised version fall back to one point at a time"""

        class OffsetProjection(ProjectionInterface):
            @property
            def crs(self):
                return None

            def projected_to_geographic(self, p):
                return GeographicCoordinate(p.east - 1000, p.north - 1000)

            def geographic_to_projected(self, lon, lat):
                return AbsoluteCoordinate(lon + 1000, lat + 1000)

        east, north = OffsetProjection().geographic_to_projected_array(
            np.array([1.0, 2.0]), np.array([3.0, 4.0])
        )

        np.testing.assert_array_equal(east, [1001.0, 1002.0])
        np.testing.assert_array_equal(north, [1003.0, 1004.0])

    def test_invalid_zone(self):
        with self.assertRaises(ValueError):
            UtmProjection(0)
