"""
Linear conversion of digital sample values to physical units.

The gain and offset of a channel come from the digital and analog extrema of
its extended header::

    gain = (analog_max - analog_min) / (digital_max - digital_min)
    offset = analog_max - gain * digital_max
    physical = gain * digital + offset
"""

import numpy as np

from rippleio.core.exceptions import DegenerateCalibrationError


def compute_gain_offset(digital_min, digital_max, analog_min, analog_max):
    if digital_max == digital_min:
        raise DegenerateCalibrationError(
            f"digital_min and digital_max are both {digital_min}, gain is undefined"
        )
    gain = (analog_max - analog_min) / (digital_max - digital_min)
    offset = analog_max - gain * digital_max
    return float(gain), float(offset)


def to_physical(raw, gain, offset):
    """
    Return a new float64 array ``gain * raw + offset``.

    ``gain`` and ``offset`` are scalars or one value per column of ``raw``.
    ``raw`` is left untouched.
    """
    gain = np.asarray(gain, dtype="float64")
    offset = np.asarray(offset, dtype="float64")
    physical = np.array(raw, dtype="float64")
    physical *= gain
    physical += offset
    return physical
