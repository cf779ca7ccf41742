"""
Tests of the rippleio.core.nxfile module.
"""

import dataclasses
import datetime
import unittest

import numpy as np

from rippleio.core.nxfile import NxHeader, NxChannelHeader, NxPacket, NxFile


def fake_channel_header(id=1, units="uV", gain=0.25, offset=0.0):
    return NxChannelHeader(
        id=id,
        label=f"chan{id}",
        frontend_id=0,
        frontend_pin=id,
        digital_min=-1000,
        digital_max=1000,
        analog_min=-250,
        analog_max=250,
        units=units,
        highpass_freq=0.3,
        highpass_order=1,
        highpass_type="Butterworth",
        lowpass_freq=7500.0,
        lowpass_order=3,
        lowpass_type="Butterworth",
        gain=gain,
        offset=offset,
    )


def fake_nx_file(units=("uV", "uV")):
    header = NxHeader(
        version=(2, 3),
        label="30 kS/s",
        comments="",
        timestamp=0,
        sampling_frequency=30000.0,
        utc_time=datetime.datetime(2024, 1, 2, 3, 4, 5),
        num_channels=len(units),
        clock_frequency=30000,
    )
    channel_headers = tuple(fake_channel_header(i + 1, u) for i, u in enumerate(units))
    packets = (
        NxPacket(0, np.zeros((3, len(units)))),
        NxPacket(60000, np.ones((2, len(units)))),
    )
    return NxFile(header, channel_headers, packets)


class TestNxPacket(unittest.TestCase):
    def test_equality(self):
        data = np.arange(6, dtype="int16").reshape(3, 2)
        self.assertEqual(NxPacket(5, data), NxPacket(5, data.copy()))
        self.assertNotEqual(NxPacket(5, data), NxPacket(6, data))
        self.assertNotEqual(NxPacket(5, data), NxPacket(5, data.astype("float64")))
        self.assertNotEqual(NxPacket(5, data), NxPacket(5, data + 1))

    def test_read_only(self):
        data = np.zeros((2, 1))
        packet = NxPacket(0, data)
        with self.assertRaises(ValueError):
            packet.data[0, 0] = 1.0
        with self.assertRaises(dataclasses.FrozenInstanceError):
            packet.timestamp = 1
        # the array given by the caller keeps its flags
        self.assertTrue(data.flags.writeable)

    def test_num_samples(self):
        self.assertEqual(NxPacket(0, np.zeros((7, 3))).num_samples, 7)


class TestNxFile(unittest.TestCase):
    def test_sampling_rate(self):
        nx_file = fake_nx_file()
        self.assertEqual(float(nx_file.sampling_rate.rescale("Hz").magnitude), 30000.0)

    def test_packet_t_start(self):
        nx_file = fake_nx_file()
        self.assertEqual(float(nx_file.get_packet_t_start(0).rescale("s").magnitude), 0.0)
        self.assertEqual(float(nx_file.get_packet_t_start(1).rescale("s").magnitude), 2.0)

    def test_analogsignal(self):
        nx_file = fake_nx_file()
        sig = nx_file.get_analogsignal(1)
        self.assertEqual(sig.dimensionality.string, "uV")
        np.testing.assert_array_equal(sig.magnitude, np.ones((2, 2)))

    def test_analogsignal_mixed_units(self):
        nx_file = fake_nx_file(units=("uV", "mV"))
        with self.assertRaises(ValueError):
            nx_file.get_analogsignal(0)

    def test_quantity_units(self):
        self.assertEqual(fake_channel_header(units="mV").quantity_units.dimensionality.string, "mV")

    def test_equality(self):
        self.assertEqual(fake_nx_file(), fake_nx_file())


if __name__ == "__main__":
    unittest.main()
