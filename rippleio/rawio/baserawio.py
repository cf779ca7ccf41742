"""
baserawio
======

Classes
-------

BaseRawIO
abstract class which should be overridden to write a RawIO.

All Ripple files share the same layout:
  * a fixed size basic header
  * a fixed number of fixed size extended headers (one per channel for
    continuous files, tagged records for event files)
  * a stream of packets up to the end of the file

A RawIO reads the file in a single sequential pass:
  * `_parse_header()` reads the basic and extended headers and must
    fill `self._header_size` with the size declared by the file
  * the position after the headers is checked against that size
  * `_parse_packet()` is called until the end of the file and returns
    one packet or None for packets that are skipped
  * `_make_container()` assembles the immutable result

The file is opened at the start of `read()` and closed on every exit path.
Every call to `read()` starts from a clean state, so a reader can be
used more than once on the same file.
"""

import contextlib
import io
import logging
import os
from pathlib import Path

from rippleio import logging_handler
from rippleio.core.exceptions import HeaderSizeMismatchError

from .structfile import StructFile


@contextlib.contextmanager
def open_source(source):
    """
    Yield a :class:`StructFile` reading ``source``.

    A path is opened and closed here, a binary file object given by the
    caller is left open.
    """
    if isinstance(source, (str, os.PathLike)):
        with StructFile(io.FileIO(source, "rb")) as f:
            yield f
    else:
        f = StructFile(source)
        try:
            yield f
        finally:
            f.detach()


class BaseRawIO:
    """
    Base class of the Ripple readers.

    Subclasses set `name` and `extensions` and implement `_parse_header()`,
    `_parse_packet()` and `_make_container()`. Per-decode state is cleared
    by `_reset()`, which subclasses extend when they keep their own.
    """

    name = "BaseRawIO"
    extensions = []

    def __init__(self, filename=None, **kargs):
        # create a logger for the IO class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # Create a logger for 'rippleio' and add a handler to it if it doesn't have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

        self.filename = filename
        self._reset()

    def read(self):
        """
        Decode the whole file and return its container.
        """
        self._reset()
        self._check_extension()
        with open_source(self.filename) as f:
            start = f.tell()
            self._parse_header(f)
            position = f.tell() - start
            if position != self._header_size:
                raise HeaderSizeMismatchError(
                    f"Headers end at byte {position} but the file declares {self._header_size} bytes of headers"
                )

            packets = []
            while not f.at_eof():
                packet = self._parse_packet(f)
                if packet is not None:
                    packets.append(packet)
            self._end_of_packets()

        self.logger.debug(f"{self.source_name()}: {len(packets)} packets")
        return self._make_container(tuple(packets))

    def source_name(self):
        """Return fancy name of file source"""
        return self._source_name()

    def __repr__(self):
        txt = f"{self.__class__.__name__}: {self.source_name()}\n"
        if self.header is not None:
            for k, v in vars(self.header).items():
                if k == "extended_headers":
                    v = f"{len(v)} records"
                txt += f"{k}: {v}\n"
        return txt

    def _check_extension(self):
        if not isinstance(self.filename, (str, os.PathLike)):
            return
        ext = Path(self.filename).suffix[1:].lower()
        if ext not in self.extensions:
            self.logger.warning(
                f"Attempting to load {self.filename} with {self.__class__.__name__}, but suffix does not match!"
            )

    def _source_name(self):
        if isinstance(self.filename, (str, os.PathLike)):
            return str(self.filename)
        return getattr(self.filename, "name", repr(self.filename))

    def _reset(self):
        self.header = None
        self._header_size = None

    def _end_of_packets(self):
        pass

    ##################
    # Functions to be implemented in IO below here

    def _parse_header(self, f):
        raise NotImplementedError

    def _parse_packet(self, f):
        raise NotImplementedError

    def _make_container(self, packets):
        raise NotImplementedError
