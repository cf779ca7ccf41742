"""
This module defines the containers returned when reading continuous
(NFx and NSx) files:

  * :class:`NxHeader`: the file header
  * :class:`NxChannelHeader`: one per channel, in declaration order
  * :class:`NxPacket`: one per data packet, in file order
  * :class:`NxFile`: the three above together

All of them are immutable.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

import numpy as np
import quantities as pq


@dataclass(frozen=True)
class NxHeader:
    """
    Basic header of a NFx or NSx file.

    For NFx files the application name, when present, is appended to
    ``comments``. NSx files have no processor timestamp and ``timestamp`` is 0.
    """

    version: tuple[int, int]
    label: str
    comments: str
    timestamp: int
    sampling_frequency: float
    utc_time: datetime.datetime
    num_channels: int
    clock_frequency: int = 0
    header_size: int = 0
    file_id: str = ""


@dataclass(frozen=True)
class NxChannelHeader:
    """
    Extended header of one channel.

    Filter corner frequencies are in Hz, filter types are one of
    ``"none"``, ``"Butterworth"`` or ``"Chebyshev"``.
    ``gain`` and ``offset`` convert digital values to ``units``.
    """

    id: int
    label: str
    frontend_id: int
    frontend_pin: int
    digital_min: int
    digital_max: int
    analog_min: int
    analog_max: int
    units: str
    highpass_freq: float
    highpass_order: int
    highpass_type: str
    lowpass_freq: float
    lowpass_order: int
    lowpass_type: str
    gain: float
    offset: float

    @property
    def quantity_units(self):
        return pq.Quantity(1, self.units).units


@dataclass(frozen=True, eq=False)
class NxPacket:
    """
    Individual data packet (potentially multiple per file).

    ``timestamp`` is the offset of the packet in ticks of the processor clock
    and ``data`` is a 2D array of shape (samples, channels). The array is
    read-only.
    """

    timestamp: int
    data: np.ndarray

    def __post_init__(self):
        data = np.asarray(self.data).view()
        data.flags.writeable = False
        object.__setattr__(self, "data", data)

    def __eq__(self, other):
        if not isinstance(other, NxPacket):
            return NotImplemented
        return (
            self.timestamp == other.timestamp
            and self.data.dtype == other.data.dtype
            and np.array_equal(self.data, other.data)
        )

    __hash__ = None

    @property
    def num_samples(self):
        return self.data.shape[0]


@dataclass(frozen=True)
class NxFile:
    """
    Content of a NFx or NSx file: the file header, a tuple of
    :class:`NxChannelHeader` and a tuple of :class:`NxPacket`.
    """

    header: NxHeader
    channel_headers: tuple[NxChannelHeader, ...]
    data_packets: tuple[NxPacket, ...]

    @property
    def sampling_rate(self):
        return self.header.sampling_frequency * pq.Hz

    def get_packet_t_start(self, packet_index=0):
        """
        Start time of a packet in seconds, from its timestamp and the
        processor clock frequency.
        """
        timestamp = self.data_packets[packet_index].timestamp
        return pq.Quantity(timestamp / self.header.clock_frequency, "s")

    def get_analogsignal(self, packet_index=0):
        """
        Return the data of one packet as a :class:`quantities.Quantity` in
        the channel units.

        Only meaningful for data read with gain applied. All channels must
        share the same units.
        """
        units = {ch.units for ch in self.channel_headers}
        if len(units) != 1:
            raise ValueError(f"Channels do not share the same units: {sorted(units)}")
        return pq.Quantity(self.data_packets[packet_index].data, units.pop())
