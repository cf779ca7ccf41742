"""
Sequential little-endian reading of the fixed layout fields found in
Ripple files.
"""

import io
import os
import struct

import numpy as np

from rippleio.core.exceptions import TruncatedInputError, MalformedStringError


_uint_formats = {8: "B", 16: "H", 32: "I", 64: "Q"}


class StructFile(io.BufferedReader):
    """
    A container for the file buffer with some added convenience functions for
    reading Ripple files.

    Every read consumes exactly the number of bytes the field needs or raises
    :class:`TruncatedInputError`. Byte order is always little-endian.
    """

    byte_order = "<"

    def read_exact(self, size):
        # a corrupt size field must not allocate the declared buffer
        if size > io.DEFAULT_BUFFER_SIZE:
            available = self.remaining()
            if size > available:
                raise TruncatedInputError(
                    f"Expected {size} bytes at offset {self.tell()}, only {available} available"
                )
        buf = self.read(size)
        if len(buf) != size:
            raise TruncatedInputError(
                f"Expected {size} bytes at offset {self.tell() - len(buf)}, only {len(buf)} available"
            )
        return buf

    def read_f(self, fmt):
        fmt = self.byte_order + fmt
        return struct.unpack(fmt, self.read_exact(struct.calcsize(fmt)))

    def read_uint(self, nbits):
        (value,) = self.read_f(_uint_formats[nbits])
        return value

    def read_int16(self):
        (value,) = self.read_f("h")
        return value

    def read_float32(self):
        (value,) = self.read_f("f")
        return value

    def read_array(self, dtype, count):
        dtype = np.dtype(dtype).newbyteorder(self.byte_order)
        return np.frombuffer(self.read_exact(dtype.itemsize * count), dtype=dtype, count=count)

    def skip(self, size):
        self.read_exact(size)

    def at_eof(self):
        return len(self.peek(1)) == 0

    def remaining(self):
        """Number of bytes left between the current position and the end of file."""
        position = self.tell()
        try:
            size = os.fstat(self.fileno()).st_size
        except OSError:
            size = self.seek(0, io.SEEK_END)
            self.seek(position)
        return max(size - position, 0)


def nullstring(buf):
    """
    Trim a fixed size ``unsigned char`` buffer to its null termination and
    decode it.
    """
    end = buf.find(b"\x00")
    if end < 0:
        raise MalformedStringError(f"No null terminator in {len(buf)} bytes text field {bytes(buf[:32])!r}")
    return buf[:end].decode("utf-8", errors="replace")
