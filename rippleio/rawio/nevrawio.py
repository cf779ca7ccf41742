"""
Module for reading event (.nev) files of Ripple (Trellis) recordings.

This IO supports reading only.

Layout of the file:
  * basic header, 336 bytes
  * `nb_ext_headers` extended headers of 32 bytes: an 8 bytes tag and a
    24 bytes slot whose content depends on the tag
  * fixed size data packets up to the end of file: timestamp (uint32),
    packet id (uint16) and a payload up to `bytes_in_data_packets`

Extended headers and packets are decoded through one dispatch table each.
Only the digital label extended header (DIGLABEL) and the digital input
packet (id 0) are decoded. Other tags and packet ids are skipped and
reported in the log, they are expected in files written by newer firmware.

The declared packet size must hold at least the packet header (6 bytes), and
18 bytes as soon as a digital input packet is met.
"""

from collections import Counter
from types import MappingProxyType

from rippleio.core.exceptions import BadMagicError, HeaderSizeMismatchError, UnknownDigitalModeError
from rippleio.core.nevfile import (
    NevHeader,
    NevHeaderFlags,
    DigitalLabelHeader,
    DigitalInputReason,
    DigitalInputPacket,
    NevFile,
)

from .baserawio import BaseRawIO
from .nxrawio import read_utc_time
from .structfile import nullstring


EXT_HEADER_TAG_SIZE = 8
EXT_HEADER_SLOT_SIZE = 24

# timestamp (uint32) and packet id (uint16)
PACKET_HEADER_SIZE = 6
DIGITAL_INPUT_PACKET_SIZE = 18

DIGITAL_LABEL_MODES = MappingProxyType({0: "serial", 1: "parallel"})

# tags described by the file specification that are not decoded
UNMODELLED_EXT_HEADER_TAGS = frozenset(
    [
        b"NEUEVWAV",
        b"NEUEVLBL",
        b"NEUEVFLT",
        b"ARRAYNME",
        b"ECOMMENT",
        b"CCOMMENT",
        b"MAPFILE\x00",
        b"VIDEOSYN",
        b"TRACKOBJ",
        b"NSASEXEV",
    ]
)


def read_digital_label(f):
    label = nullstring(f.read_exact(16))
    code = f.read_uint(8)
    if code not in DIGITAL_LABEL_MODES:
        raise UnknownDigitalModeError(f"Unknown digital label mode {code}")
    f.skip(7)
    return DigitalLabelHeader(label=label, mode=DIGITAL_LABEL_MODES[code])


def read_digital_input(f, timestamp, packet_size):
    if packet_size < DIGITAL_INPUT_PACKET_SIZE:
        raise HeaderSizeMismatchError(
            f"Data packets of {packet_size} bytes are smaller than a digital input packet"
        )
    reason = DigitalInputReason.from_byte(f.read_uint(8))
    f.skip(1)  # reserved
    parallel = f.read_uint(16)
    sma1, sma2, sma3, sma4 = f.read_f("4h")
    f.skip(packet_size - DIGITAL_INPUT_PACKET_SIZE)
    return DigitalInputPacket(
        timestamp=timestamp,
        reason=reason,
        parallel=parallel,
        sma1=sma1,
        sma2=sma2,
        sma3=sma3,
        sma4=sma4,
    )


# tag -> reader of the 24 bytes slot
EXT_HEADER_READERS = MappingProxyType(
    {
        b"DIGLABEL": read_digital_label,
    }
)

# packet id -> reader of the packet payload
PACKET_READERS = MappingProxyType(
    {
        0: read_digital_input,
    }
)


class NEVRawIO(BaseRawIO):
    """
    Class for reading Ripple .nev event files.

    Parameters
    ----------
    filename: str | Path | file object
        The file to read. A binary file object must be positioned at the
        start of the file and is left open.

    Examples
    --------
    >>> from rippleio.rawio import NEVRawIO
    >>> nev_file = NEVRawIO("datafile0001.nev").read()
    >>> times, values = nev_file.get_digital_events("parallel")
    """

    name = "NEVRawIO"
    extensions = ["nev"]

    file_ids = (b"NEURALEV",)

    def _reset(self):
        BaseRawIO._reset(self)
        self._packet_size = None
        self._skipped_packets = Counter()

    def _parse_header(self, f):
        file_id = f.read_exact(8)
        if file_id not in self.file_ids:
            raise BadMagicError(f"{self.source_name()}: file id {file_id!r} is not NEURALEV")

        ver_major, ver_minor, flags = f.read_f("BBH")
        self._header_size, packet_size = f.read_f("II")
        clock_frequency, sample_frequency = f.read_f("II")
        utc_time = read_utc_time(f)
        application = nullstring(f.read_exact(32))
        comment = nullstring(f.read_exact(252))
        timestamp = f.read_uint(32)
        nb_ext_headers = f.read_uint(32)

        if packet_size < PACKET_HEADER_SIZE:
            raise HeaderSizeMismatchError(f"Data packets of {packet_size} bytes can not hold a packet header")
        self._packet_size = packet_size

        extended_headers = []
        for _ in range(nb_ext_headers):
            ext_header = self._read_ext_header(f)
            if ext_header is not None:
                extended_headers.append(ext_header)

        self.header = NevHeader(
            version=(ver_major, ver_minor),
            flags=NevHeaderFlags.from_word(flags),
            header_size=self._header_size,
            packet_size=packet_size,
            clock_frequency=clock_frequency,
            sample_frequency=sample_frequency,
            utc_time=utc_time,
            application=application,
            comment=comment,
            timestamp=timestamp,
            extended_headers=tuple(extended_headers),
            file_id=file_id.decode(),
        )
        self.logger.debug(
            f"{self.source_name()}: {len(extended_headers)} of {nb_ext_headers} extended headers decoded"
        )

    def _read_ext_header(self, f):
        tag = f.read_exact(EXT_HEADER_TAG_SIZE)
        reader = EXT_HEADER_READERS.get(tag)
        if reader is not None:
            return reader(f)

        if tag in UNMODELLED_EXT_HEADER_TAGS:
            tag_name = tag.rstrip(b"\x00").decode()
            self.logger.debug(f"Skipping {tag_name} extended header")
        else:
            self.logger.warning(f"Skipping unknown extended header {tag!r} at offset {f.tell() - EXT_HEADER_TAG_SIZE}")
        f.skip(EXT_HEADER_SLOT_SIZE)
        return None

    def _parse_packet(self, f):
        timestamp, packet_id = f.read_f("IH")
        reader = PACKET_READERS.get(packet_id)
        if reader is not None:
            return reader(f, timestamp, self._packet_size)

        self._skipped_packets[packet_id] += 1
        f.skip(self._packet_size - PACKET_HEADER_SIZE)
        return None

    def _end_of_packets(self):
        for packet_id, count in sorted(self._skipped_packets.items()):
            self.logger.warning(f"{self.source_name()}: skipped {count} packets of unknown id {packet_id}")

    def _make_container(self, packets):
        return NevFile(self.header, packets)
