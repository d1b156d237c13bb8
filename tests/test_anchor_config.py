from unittest import TestCase

from geoanchor.constructs.anchor import (
    DEFAULT_ANCHOR,
    AnchorConfig,
    Hemisphere,
)
from geoanchor.constructs.coordinate import AbsoluteCoordinate
from geoanchor.utils.crs import utm_crs, utm_zone_for
from tests import get_test_dir


class TestAnchorConfig(TestCase):
    def test_defaults(self):
        """The default configuration is anchored in Hamburg, zone 32 north"""
        config = AnchorConfig()

        self.assertEqual(config.anchor, AbsoluteCoordinate(567475, 5932475, 0))
        self.assertEqual(config.utm_zone, 32)
        self.assertEqual(config.hemisphere, Hemisphere.NORTHERN)
        self.assertTrue(config.is_northern)
        self.assertEqual(config.utm_crs.to_epsg(), 32632)

    def test_create_parses_values(self):
        config = AnchorConfig.create((500000, 100), utm_zone=33, hemisphere="Southern")

        self.assertEqual(config.anchor, AbsoluteCoordinate(500000.0, 100.0, 0.0))
        self.assertEqual(config.hemisphere, Hemisphere.SOUTHERN)
        self.assertFalse(config.is_northern)
        self.assertEqual(config.utm_crs.to_epsg(), 32733)

    def test_create_rejects_invalid_zone(self):
        with self.assertRaises(ValueError):
            AnchorConfig.create(DEFAULT_ANCHOR, utm_zone=0)
        with self.assertRaises(ValueError):
            AnchorConfig.create(DEFAULT_ANCHOR, utm_zone=61)
        with self.assertRaises(TypeError):
            AnchorConfig.create(DEFAULT_ANCHOR, utm_zone=32.5)

    def test_create_rejects_invalid_hemisphere(self):
        with self.assertRaises(ValueError):
            AnchorConfig.create(DEFAULT_ANCHOR, hemisphere="eastern")

    def test_create_rejects_invalid_anchor(self):
        with self.assertRaises(ValueError):
            AnchorConfig.create((1.0,))

    def test_utm_crs_is_memoized(self):
        self.assertIs(AnchorConfig().utm_crs, AnchorConfig().utm_crs)

    def test_json_round_trip(self):
        config = AnchorConfig.create((500000, 7500000, 12.5), 33, Hemisphere.SOUTHERN)

        self.assertEqual(AnchorConfig.from_json(config.to_json()), config)

    def test_from_json_requires_anchor(self):
        with self.assertRaises(ValueError):
            AnchorConfig.from_json({"utm_zone": 32})

    def test_from_file(self):
        config = AnchorConfig.from_file(get_test_dir() / "test_assets" / "anchor_config.json")

        self.assertEqual(config.anchor, AbsoluteCoordinate(500000.0, 7500000.0, 12.5))
        self.assertEqual(config.utm_zone, 33)
        self.assertEqual(config.hemisphere, Hemisphere.SOUTHERN)

    def test_from_file_missing(self):
        with self.assertRaises(FileNotFoundError):
            AnchorConfig.from_file(get_test_dir() / "test_assets" / "missing.json")

    def test_from_file_wrong_type(self):
        with self.assertRaises(TypeError):
            AnchorConfig.from_file(get_test_dir() / "test_assets" / "anchor_config.csv")

    def test_from_lat_lon(self):
        """Anchoring on Hamburg picks zone 32 north and lands near the default anchor"""
        config = AnchorConfig.from_lat_lon(lon=10.028691, lat=53.551218, height=3.0)

        self.assertEqual(config.utm_zone, 32)
        self.assertEqual(config.hemisphere, Hemisphere.NORTHERN)
        self.assertEqual(config.anchor.height, 3.0)
        self.assertLess(abs(config.anchor.east - DEFAULT_ANCHOR.east), 5000)
        self.assertLess(abs(config.anchor.north - DEFAULT_ANCHOR.north), 5000)

    def test_from_lat_lon_southern(self):
        config = AnchorConfig.from_lat_lon(lon=151.2093, lat=-33.8688)

        self.assertEqual(config.utm_zone, 56)
        self.assertEqual(config.hemisphere, Hemisphere.SOUTHERN)
        self.assertGreater(config.anchor.north, 0)

    def test_from_lat_lon_forced_zone(self):
        config = AnchorConfig.from_lat_lon(lon=12.01, lat=53.5, utm_zone=32)

        self.assertEqual(config.utm_zone, 32)
        self.assertGreater(config.anchor.east, 600000)


class TestUtmHelpers(TestCase):
    def test_utm_crs(self):
        self.assertEqual(utm_crs(32).to_epsg(), 32632)
        self.assertEqual(utm_crs(1, northern=False).to_epsg(), 32701)
        self.assertEqual(utm_crs(60).to_epsg(), 32660)

    def test_utm_crs_invalid_zone(self):
        with self.assertRaises(ValueError):
            utm_crs(61)

    def test_utm_zone_for_regular_zones(self):
        self.assertEqual(utm_zone_for(10.028691, 53.551218), 32)
        self.assertEqual(utm_zone_for(-74.0060, 40.7128), 18)
        self.assertEqual(utm_zone_for(-180.0, 0.0), 1)
        self.assertEqual(utm_zone_for(180.0, 0.0), 60)

    def test_utm_zone_for_norway(self):
        self.assertEqual(utm_zone_for(5.3, 60.4), 32)
        self.assertEqual(utm_zone_for(2.5, 60.4), 31)

    def test_utm_zone_for_svalbard(self):
        self.assertEqual(utm_zone_for(5.0, 78.0), 31)
        self.assertEqual(utm_zone_for(15.6, 78.2), 33)
        self.assertEqual(utm_zone_for(25.0, 78.0), 35)
        self.assertEqual(utm_zone_for(35.0, 78.0), 37)

    def test_utm_zone_for_out_of_bounds(self):
        with self.assertRaises(ValueError):
            utm_zone_for(10.0, 85.0)
        with self.assertRaises(ValueError):
            utm_zone_for(190.0, 10.0)
