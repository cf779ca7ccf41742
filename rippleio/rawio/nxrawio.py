"""
Module for reading continuous data files of Ripple (Trellis) recordings.

This IO supports reading only.
This IO is able to read:
  * nf1, ..., nf9 files: filtered continuous data stored as float32
  * ns1, ..., ns9 files: continuous data stored as int16 (Blackrock
    compatible, file ids NEURALSG, NEURALCD and BRSMPGRP)

Both formats share the layout:
  * basic header, 314 bytes
  * one 66 bytes extended header per channel
  * data packets up to the end of file: marker (1), timestamp, number of
    samples, samples

Differences between the formats:
  * NFx has a 200 bytes comment followed by a 52 bytes application name and
    the processor timestamp, NSx has a 256 bytes comment
  * channel headers start with "FC" in NFx and "CC" in NSx
  * NFx samples are float32 written channel after channel, NSx samples are
    int16 written sample after sample
  * packet timestamps are 64 bits in BRSMPGRP files, 32 bits otherwise

The filter frequencies are stored in mHz and returned in Hz.
"""

import datetime

import numpy as np

from rippleio.core.exceptions import (
    BadMagicError,
    BadChannelMagicError,
    UnexpectedPacketTypeError,
    UnknownFilterTypeError,
)
from rippleio.core.nxfile import NxHeader, NxChannelHeader, NxPacket, NxFile

from .baserawio import BaseRawIO
from .calibration import compute_gain_offset, to_physical
from .structfile import nullstring


# 0 = None, 1 = Butterworth, 2 = Chebyshev
FILTER_TYPES = ("none", "Butterworth", "Chebyshev")

# only one kind of packet exists in continuous files
DATA_PACKET_MARKER = 1


def read_utc_time(f):
    """
    Read the 8 uint16 time origin fields: year, month, day of week, day,
    hour, minute, second, millisecond. The day of week is ignored.
    """
    year, month, _dow, day, hour, minute, second, ms = f.read_f("8H")
    return datetime.datetime(year, month, day, hour, minute, second, ms * 1000)


def filter_type(code):
    if not 0 <= code < len(FILTER_TYPES):
        raise UnknownFilterTypeError(f"Unknown filter type code {code}")
    return FILTER_TYPES[code]


class BaseNxRawIO(BaseRawIO):
    """
    Shared reading of the NFx and NSx files. Subclasses define the
    format differences as class attributes and `_read_samples()`.

    Parameters
    ----------
    filename: str | Path | file object
        The file to read. A binary file object must be positioned at the
        start of the file and is left open.
    apply_gain: bool, default: True
        If True the samples are converted to the channel units and returned as
        float64, otherwise raw samples are returned.
    """

    # file id -> number of bits of the packet timestamps
    file_ids = {}
    channel_magic = b""
    comment_size = 0
    # application name and processor timestamp follow the comment
    has_application = False
    sample_dtype = None

    def __init__(self, filename=None, apply_gain=True):
        BaseRawIO.__init__(self, filename=filename)
        self.apply_gain = apply_gain

    def _reset(self):
        BaseRawIO._reset(self)
        self.channel_headers = None

    def _parse_header(self, f):
        file_id = f.read_exact(8)
        if file_id not in self.file_ids:
            raise BadMagicError(
                f"{self.source_name()}: file id {file_id!r} is not one of {[k.decode() for k in self.file_ids]}"
            )
        self._timestamp_bits = self.file_ids[file_id]

        ver_major, ver_minor = f.read_f("BB")
        self._header_size = f.read_uint(32)
        label = nullstring(f.read_exact(16))
        comments = nullstring(f.read_exact(self.comment_size))
        processor_timestamp = 0
        if self.has_application:
            app = nullstring(f.read_exact(52))
            if len(app) > 0:
                comments = f"{comments}; Application = {app}"
            processor_timestamp = f.read_uint(32)
        sampling_period, clock_frequency = f.read_f("II")
        utc_time = read_utc_time(f)
        num_channels = f.read_uint(32)

        self.header = NxHeader(
            version=(ver_major, ver_minor),
            label=label,
            comments=comments,
            timestamp=processor_timestamp,
            sampling_frequency=clock_frequency / sampling_period,
            utc_time=utc_time,
            num_channels=num_channels,
            clock_frequency=clock_frequency,
            header_size=self._header_size,
            file_id=file_id.decode(),
        )

        self.channel_headers = tuple(self._read_channel_header(f) for _ in range(num_channels))
        self._gains = np.array([ch.gain for ch in self.channel_headers], dtype="float64")
        self._offsets = np.array([ch.offset for ch in self.channel_headers], dtype="float64")
        self.logger.debug(f"{self.source_name()}: {num_channels} channels at {self.header.sampling_frequency} Hz")

    def _read_channel_header(self, f):
        channel_magic = f.read_exact(2)
        if channel_magic != self.channel_magic:
            raise BadChannelMagicError(
                f"Channel header starts with {channel_magic!r} instead of {self.channel_magic!r}"
            )

        id = f.read_uint(16)
        label = nullstring(f.read_exact(16))
        frontend_id, frontend_pin = f.read_f("BB")
        digital_min, digital_max, analog_min, analog_max = f.read_f("4h")
        units = nullstring(f.read_exact(16))
        highpass_freq, highpass_order, highpass_type = f.read_f("IIH")  # mHz
        lowpass_freq, lowpass_order, lowpass_type = f.read_f("IIH")  # mHz

        gain, offset = compute_gain_offset(digital_min, digital_max, analog_min, analog_max)

        return NxChannelHeader(
            id=id,
            label=label,
            frontend_id=frontend_id,
            frontend_pin=frontend_pin,
            digital_min=digital_min,
            digital_max=digital_max,
            analog_min=analog_min,
            analog_max=analog_max,
            units=units,
            highpass_freq=highpass_freq / 1000,
            highpass_order=highpass_order,
            highpass_type=filter_type(highpass_type),
            lowpass_freq=lowpass_freq / 1000,
            lowpass_order=lowpass_order,
            lowpass_type=filter_type(lowpass_type),
            gain=gain,
            offset=offset,
        )

    def _parse_packet(self, f):
        marker = f.read_uint(8)
        if marker != DATA_PACKET_MARKER:
            raise UnexpectedPacketTypeError(
                f"Data packet marker is {marker} at offset {f.tell() - 1}, expected {DATA_PACKET_MARKER}"
            )
        timestamp = f.read_uint(self._timestamp_bits)
        num_points = f.read_uint(32)

        data = self._read_samples(f, num_points, self.header.num_channels)
        if self.apply_gain:
            data = to_physical(data, self._gains, self._offsets)

        return NxPacket(timestamp, data)

    def _read_samples(self, f, num_points, num_channels):
        """Return the samples of one packet as (num_points, num_channels)."""
        raise NotImplementedError

    def _make_container(self, packets):
        return NxFile(self.header, self.channel_headers, packets)


class NFxRawIO(BaseNxRawIO):
    """
    Class for reading NFx files (filtered continuous data, float32 samples).

    Examples
    --------
    >>> from rippleio.rawio import NFxRawIO
    >>> nfx_file = NFxRawIO("datafile0001.nf3", apply_gain=False).read()
    >>> nfx_file.header.sampling_frequency
    2000.0
    """

    name = "NFxRawIO"
    extensions = ["nf" + str(_) for _ in range(1, 10)]

    file_ids = {b"NEUCDFLT": 32}
    channel_magic = b"FC"
    comment_size = 200
    has_application = True
    sample_dtype = "float32"

    def _read_samples(self, f, num_points, num_channels):
        # stored channel after channel
        data = f.read_array(self.sample_dtype, num_points * num_channels)
        return np.ascontiguousarray(data.reshape(num_channels, num_points).T)


class NSxRawIO(BaseNxRawIO):
    """
    Class for reading NSx files (continuous data, int16 samples).

    Examples
    --------
    >>> from rippleio.rawio import NSxRawIO
    >>> nsx_file = NSxRawIO("datafile0001.ns5").read()
    >>> nsx_file.channel_headers[0].units
    'uV'
    """

    name = "NSxRawIO"
    extensions = ["ns" + str(_) for _ in range(1, 10)]

    file_ids = {b"NEURALSG": 32, b"NEURALCD": 32, b"BRSMPGRP": 64}
    channel_magic = b"CC"
    comment_size = 256
    has_application = False
    sample_dtype = "int16"

    def _read_samples(self, f, num_points, num_channels):
        # stored sample after sample
        data = f.read_array(self.sample_dtype, num_points * num_channels)
        return data.reshape(num_points, num_channels)
