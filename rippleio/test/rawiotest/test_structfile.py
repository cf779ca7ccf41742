"""
Tests of rippleio.rawio.structfile
"""

import io
import struct
import tempfile
import unittest
from pathlib import Path

import numpy as np

from rippleio.core.exceptions import TruncatedInputError, MalformedStringError
from rippleio.rawio.structfile import StructFile, nullstring


def make_structfile(content):
    return StructFile(io.BytesIO(content))


class TestStructFile(unittest.TestCase):
    def test_read_uint(self):
        content = struct.pack("<BHIQ", 0xAB, 0xABCD, 0xDEADBEEF, 2**40 + 7)
        f = make_structfile(content)
        self.assertEqual(f.read_uint(8), 0xAB)
        self.assertEqual(f.read_uint(16), 0xABCD)
        self.assertEqual(f.read_uint(32), 0xDEADBEEF)
        self.assertEqual(f.read_uint(64), 2**40 + 7)
        self.assertTrue(f.at_eof())

    def test_read_signed_and_float(self):
        f = make_structfile(struct.pack("<hf", -14281, 0.5))
        self.assertEqual(f.read_int16(), -14281)
        self.assertEqual(f.read_float32(), 0.5)

    def test_little_endian(self):
        f = make_structfile(b"\x01\x00")
        self.assertEqual(f.read_uint(16), 1)

    def test_read_f(self):
        f = make_structfile(struct.pack("<IIH", 100, 2, 1))
        self.assertEqual(f.read_f("IIH"), (100, 2, 1))

    def test_read_array(self):
        values = np.arange(6, dtype="<i2") - 3
        f = make_structfile(values.tobytes())
        arr = f.read_array("int16", 6)
        np.testing.assert_array_equal(arr, values)
        self.assertEqual(arr.dtype, np.dtype("int16"))

    def test_truncated(self):
        f = make_structfile(b"\x01\x02\x03")
        with self.assertRaises(TruncatedInputError):
            f.read_uint(32)

        f = make_structfile(b"\x01\x02\x03")
        with self.assertRaises(TruncatedInputError):
            f.read_array("float32", 1)

        f = make_structfile(b"\x01\x02\x03")
        with self.assertRaises(TruncatedInputError):
            f.skip(4)

    def test_truncated_is_eof_error(self):
        f = make_structfile(b"")
        with self.assertRaises(EOFError):
            f.read_exact(1)

    def test_remaining(self):
        f = make_structfile(b"\x00" * 10)
        f.skip(4)
        self.assertEqual(f.remaining(), 6)
        self.assertEqual(f.read_exact(6), b"\x00" * 6)
        self.assertEqual(f.remaining(), 0)

    def test_oversized_read(self):
        f = make_structfile(b"\x00" * 16)
        with self.assertRaises(TruncatedInputError):
            f.read_array("int16", 0xFFFFFFFF)
        # the position is left untouched
        self.assertEqual(f.remaining(), 16)

    def test_oversized_read_from_disk(self):
        with tempfile.TemporaryDirectory() as dirname:
            filename = Path(dirname) / "small.bin"
            filename.write_bytes(b"\x00" * 16)
            with StructFile(io.FileIO(filename, "rb")) as f:
                with self.assertRaises(TruncatedInputError):
                    f.skip(2**40)
                self.assertEqual(f.remaining(), 16)

    def test_at_eof(self):
        f = make_structfile(b"\x00\x00")
        self.assertFalse(f.at_eof())
        f.skip(2)
        self.assertTrue(f.at_eof())


class TestNullString(unittest.TestCase):
    def test_trim(self):
        self.assertEqual(nullstring(b"uV\x00\x00junk\x00"), "uV")
        self.assertEqual(nullstring(b"\x00" * 16), "")

    def test_no_terminator(self):
        with self.assertRaises(MalformedStringError):
            nullstring(b"abcdefgh")


if __name__ == "__main__":
    unittest.main()
