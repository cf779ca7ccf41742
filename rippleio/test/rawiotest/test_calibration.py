"""
Tests of rippleio.rawio.calibration
"""

import unittest

import numpy as np

from rippleio.core.exceptions import DegenerateCalibrationError
from rippleio.rawio.calibration import compute_gain_offset, to_physical


class TestCalibration(unittest.TestCase):
    def test_extrema_map_to_analog_extrema(self):
        for digital_min, digital_max, analog_min, analog_max in [
            (-32767, 32767, -8191, 8191),
            (-32768, 32767, -5000, 5000),
            (5977, -14281, 5977, 18487),
            (0, 1000, 100, 200),
        ]:
            gain, offset = compute_gain_offset(digital_min, digital_max, analog_min, analog_max)
            physical = to_physical(np.array([digital_min, digital_max]), gain, offset)
            np.testing.assert_allclose(physical, [analog_min, analog_max])

    def test_values(self):
        gain, offset = compute_gain_offset(-1000, 1000, -250, 250)
        self.assertEqual(gain, 0.25)
        self.assertEqual(offset, 0.0)

    def test_degenerate(self):
        with self.assertRaises(DegenerateCalibrationError):
            compute_gain_offset(10, 10, -5, 5)

    def test_per_column_and_raw_untouched(self):
        raw = np.array([[1, 10], [2, 20]], dtype="int16")
        physical = to_physical(raw, [1.0, 0.5], [0.0, 1.0])
        np.testing.assert_array_equal(physical, [[1.0, 6.0], [2.0, 11.0]])
        self.assertEqual(physical.dtype, np.dtype("float64"))
        np.testing.assert_array_equal(raw, [[1, 10], [2, 20]])
        self.assertEqual(raw.dtype, np.dtype("int16"))


if __name__ == "__main__":
    unittest.main()
