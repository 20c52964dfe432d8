"""
Tests for nearest-object picking and map cell mapping.

Run with:
    python -m pytest tests/test_spatial.py -v
"""

import unittest

from orbit_tracker.propagator import StateVector
from orbit_tracker.spatial import area_to_lon_lat, lon_lat_to_area, nearest


def state(lon, lat):
    return StateVector(position=(lon, lat, 500.0), velocity=(0.0, 7.6, 0.0))


class TestNearest(unittest.TestCase):

    def test_empty(self):
        self.assertIsNone(nearest([], 0.0, 0.0))

    def test_single_object_always_wins(self):
        states = [state(120.0, -45.0)]
        for lon, lat in [(0.0, 0.0), (-180.0, 90.0), (120.0, -45.0), (179.0, -89.0)]:
            self.assertEqual(nearest(states, lon, lat), 0)

    def test_picks_closest(self):
        states = [state(0.0, 0.0), state(50.0, 10.0), state(-100.0, 40.0)]
        self.assertEqual(nearest(states, 48.0, 12.0), 1)
        self.assertEqual(nearest(states, -90.0, 30.0), 2)
        self.assertEqual(nearest(states, 1.0, -1.0), 0)

    def test_tie_goes_to_first(self):
        states = [state(10.0, 0.0), state(-10.0, 0.0), state(0.0, 10.0)]
        self.assertEqual(nearest(states, 0.0, 0.0), 0)

    def test_planar_distance_ignores_wrap(self):
        # 179 and -179 are close on the globe but far apart in degree space
        states = [state(-179.0, 0.0), state(150.0, 0.0)]
        self.assertEqual(nearest(states, 179.0, 0.0), 1)

    def test_failed_states_are_skipped(self):
        states = [None, state(5.0, 5.0), None]
        self.assertEqual(nearest(states, 0.0, 0.0), 1)
        self.assertIsNone(nearest([None, None], 0.0, 0.0))


class TestAreaMapping(unittest.TestCase):

    def test_corners(self):
        self.assertEqual(area_to_lon_lat(179, 89, 180, 90), (180.0, -90.0))
        lon, lat = area_to_lon_lat(0, 0, 180, 90)
        self.assertAlmostEqual(lon, -178.0)
        self.assertAlmostEqual(lat, 88.0)

    def test_inverse(self):
        width, height = 120, 40
        for x, y in [(0, 0), (59, 19), (119, 39), (30, 5)]:
            lon, lat = area_to_lon_lat(x, y, width, height)
            self.assertEqual(lon_lat_to_area(lon, lat, width, height), (x, y))


if __name__ == "__main__":
    unittest.main()
