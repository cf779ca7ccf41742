"""
This module defines the containers returned when reading NEV (event) files.

:class:`NevFile` holds a :class:`NevHeader` and the tuple of decoded packets.
Only digital input packets (:class:`DigitalInputPacket`) and digital label
extended headers (:class:`DigitalLabelHeader`) are modelled.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np
import quantities as pq


# bit position of each named flag of the header flags word
HEADER_FLAG_BITS = MappingProxyType(
    {
        "waveform_16bit": 0,
    }
)

# bit position of each named flag of the digital input reason byte
DIGITAL_REASON_BITS = MappingProxyType(
    {
        "parallel": 0,
        "sma1": 1,
        "sma2": 2,
        "sma3": 3,
        "sma4": 4,
        "periodic": 6,
        "serial": 7,
    }
)


def is_set(flag, pos):
    """
    Checks if bit is set at the given position for flag.
    """
    return flag & (1 << pos) > 0


@dataclass(frozen=True)
class NevHeaderFlags:
    waveform_16bit: bool

    @classmethod
    def from_word(cls, word):
        return cls(**{name: is_set(word, pos) for name, pos in HEADER_FLAG_BITS.items()})


@dataclass(frozen=True)
class DigitalInputReason:
    """Why the digital input packet was inserted in the stream."""

    parallel: bool
    sma1: bool
    sma2: bool
    sma3: bool
    sma4: bool
    periodic: bool
    serial: bool

    @classmethod
    def from_byte(cls, byte):
        return cls(**{name: is_set(byte, pos) for name, pos in DIGITAL_REASON_BITS.items()})


@dataclass(frozen=True)
class DigitalLabelHeader:
    """``DIGLABEL`` extended header: name and mode of the digital input."""

    label: str
    mode: str


@dataclass(frozen=True)
class NevHeader:
    version: tuple[int, int]
    flags: NevHeaderFlags
    header_size: int
    packet_size: int
    clock_frequency: int
    sample_frequency: int
    utc_time: datetime.datetime
    application: str
    comment: str
    timestamp: int
    extended_headers: tuple = ()
    file_id: str = ""


@dataclass(frozen=True)
class DigitalInputPacket:
    """
    Digital input event: the parallel port value and the four SMA inputs
    at ``timestamp`` (ticks of the NEV clock).
    """

    timestamp: int
    reason: DigitalInputReason
    parallel: int
    sma1: int
    sma2: int
    sma3: int
    sma4: int

    @property
    def sma(self):
        return (self.sma1, self.sma2, self.sma3, self.sma4)


@dataclass(frozen=True)
class NevFile:
    header: NevHeader
    packets: tuple

    @property
    def digital_labels(self):
        return tuple(h for h in self.header.extended_headers if isinstance(h, DigitalLabelHeader))

    def get_digital_events(self, kind="parallel"):
        """
        Times and values of the digital input packets inserted for one reason.

        Parameters
        ----------
        kind: str, default: "parallel"
            One of the reason names: "parallel", "serial", "periodic",
            "sma1", "sma2", "sma3", "sma4".

        Returns
        -------
        times: quantities.Quantity
            Packet times in seconds.
        values: np.ndarray
            The parallel value for "parallel", "serial" and "periodic",
            the matching SMA value otherwise.
        """
        if kind not in DIGITAL_REASON_BITS:
            raise ValueError(f"Unknown digital event kind {kind!r}, expected one of {list(DIGITAL_REASON_BITS)}")
        field = kind if kind.startswith("sma") else "parallel"
        dtype = "int16" if kind.startswith("sma") else "uint16"

        selected = [
            p for p in self.packets if isinstance(p, DigitalInputPacket) and getattr(p.reason, kind)
        ]
        timestamps = np.array([p.timestamp for p in selected], dtype="uint64")
        values = np.array([getattr(p, field) for p in selected], dtype=dtype)
        times = pq.Quantity(timestamps / float(self.header.clock_frequency), "s")
        return times, values
