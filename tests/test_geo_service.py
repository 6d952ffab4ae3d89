from __future__ import annotations

import unittest

from storefront.services.geo_service import haversine_km


class GeoServiceTests(unittest.TestCase):
    def test_same_point_is_zero(self) -> None:
        self.assertEqual(haversine_km(41.33, 19.82, 41.33, 19.82), 0.0)

    def test_distance_is_symmetric(self) -> None:
        there = haversine_km(41.33, 19.82, 41.35, 19.80)
        back = haversine_km(41.35, 19.80, 41.33, 19.82)
        self.assertAlmostEqual(there, back, places=9)

    def test_one_degree_of_latitude(self) -> None:
        self.assertAlmostEqual(haversine_km(0, 0, 1, 0), 111.19, places=1)

    def test_tirana_fixture(self) -> None:
        self.assertAlmostEqual(haversine_km(41.33, 19.82, 41.35, 19.80), 2.78, places=1)


if __name__ == '__main__':
    unittest.main()
