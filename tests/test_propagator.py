"""
Tests for the SGP4 propagator adapter.

Run with:
    python -m pytest tests/test_propagator.py -v
"""

import math
import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from element_fixtures import EPOCH, iss_record, ninety_minute_record
from orbit_tracker.elements import OrbitalElementSet
from orbit_tracker.errors import ElementsError, PropagationError
from orbit_tracker.frames import apply_range_policy
from orbit_tracker.propagator import StateVector, TrackedObject


class TestTrackedObjectConstruction(unittest.TestCase):

    def test_valid_elements(self):
        obj = TrackedObject(OrbitalElementSet.model_validate(iss_record()))
        self.assertEqual(obj.norad_id, 25544)
        self.assertEqual(obj.name, "ISS (ZARYA)")
        self.assertEqual(obj.epoch, EPOCH)

    def test_zero_mean_motion_fails_at_construction(self):
        elements = OrbitalElementSet.model_validate(iss_record(MEAN_MOTION=0.0))
        with self.assertRaises(ElementsError) as ctx:
            TrackedObject(elements)
        self.assertEqual(ctx.exception.norad_id, 25544)

    def test_negative_mean_motion_fails(self):
        elements = OrbitalElementSet.model_validate(iss_record(MEAN_MOTION=-1.0))
        with self.assertRaises(ElementsError):
            TrackedObject(elements)

    def test_hyperbolic_eccentricity_fails(self):
        elements = OrbitalElementSet.model_validate(iss_record(ECCENTRICITY=1.2))
        with self.assertRaises(ElementsError):
            TrackedObject(elements)

    def test_orbital_period(self):
        obj = TrackedObject(OrbitalElementSet.model_validate(ninety_minute_record()))
        self.assertEqual(obj.orbital_period, timedelta(minutes=90))


class TestPredict(unittest.TestCase):

    def setUp(self):
        self.obj = TrackedObject(OrbitalElementSet.model_validate(iss_record()))

    def test_state_in_range(self):
        for minutes in range(0, 24 * 60, 17):
            state = self.obj.predict(EPOCH + timedelta(minutes=minutes))
            self.assertTrue(-180.0 <= state.longitude <= 180.0)
            self.assertTrue(-90.0 <= state.latitude <= 90.0)
            # ISS altitude band
            self.assertTrue(300.0 < state.altitude < 500.0, state.altitude)
            self.assertTrue(7.0 < state.speed < 8.0, state.speed)

    def test_latitude_bounded_by_inclination(self):
        for minutes in range(0, 180, 3):
            state = self.obj.predict(EPOCH + timedelta(minutes=minutes))
            self.assertLessEqual(abs(state.latitude), 52.0)

    def test_before_epoch(self):
        self.assertAlmostEqual(
            self.obj.minutes_since_epoch(EPOCH - timedelta(hours=2)), -120.0
        )
        state = self.obj.predict(EPOCH - timedelta(hours=2))
        self.assertIsInstance(state, StateVector)

    def test_predict_is_pure(self):
        t = EPOCH + timedelta(minutes=42)
        self.assertEqual(self.obj.predict(t), self.obj.predict(t))

    def test_naive_time_is_utc(self):
        naive = (EPOCH + timedelta(minutes=30)).replace(tzinfo=None)
        self.assertAlmostEqual(self.obj.minutes_since_epoch(naive), 30.0)
        self.assertEqual(self.obj.predict(naive), self.obj.predict(EPOCH + timedelta(minutes=30)))

    def test_sgp4_error_code_raises_propagation_error(self):
        nan = float("nan")
        self.obj.satrec = MagicMock(jdsatepoch=2460601.0, jdsatepochF=0.0)
        self.obj.satrec.sgp4.return_value = (6, (nan, nan, nan), (nan, nan, nan))

        with self.assertRaises(PropagationError) as ctx:
            self.obj.predict(EPOCH + timedelta(days=30))

        self.assertEqual(ctx.exception.code, 6)
        self.assertEqual(ctx.exception.norad_id, 25544)
        self.assertIn("decayed", str(ctx.exception))


class TestStateVector(unittest.TestCase):

    def test_accessors(self):
        state = StateVector(position=(10.0, -20.0, 400.0), velocity=(3.0, 4.0, 0.0))
        self.assertEqual(state.longitude, 10.0)
        self.assertEqual(state.latitude, -20.0)
        self.assertEqual(state.altitude, 400.0)
        self.assertAlmostEqual(state.speed, 5.0)


class TestRangePolicy(unittest.TestCase):

    def test_clamp(self):
        self.assertEqual(apply_range_policy(180.0000001, -90.5, "clamp"), (180.0, -90.0))
        self.assertEqual(apply_range_policy(12.0, 34.0, "clamp"), (12.0, 34.0))

    def test_clamp_rejects_nan(self):
        with self.assertRaises(PropagationError):
            apply_range_policy(math.nan, 0.0, "clamp")
        with self.assertRaises(PropagationError):
            apply_range_policy(10.0, math.nan)

    def test_error(self):
        with self.assertRaises(PropagationError):
            apply_range_policy(0.0, 91.0, "error")
        self.assertEqual(apply_range_policy(-180.0, 90.0, "error"), (-180.0, 90.0))

    def test_assert(self):
        with self.assertRaises(AssertionError):
            apply_range_policy(181.0, 0.0, "assert")

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            apply_range_policy(0.0, 0.0, "ignore")

    def test_nan_is_out_of_range(self):
        with self.assertRaises(PropagationError):
            apply_range_policy(math.nan, 0.0, "error")


if __name__ == "__main__":
    unittest.main()
