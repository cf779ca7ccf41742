"""
Entry points reading a whole file in one call.

Each function builds a new reader, so calls share no state and can run
concurrently on distinct files.
"""

from rippleio.rawio import NFxRawIO, NSxRawIO, NEVRawIO, get_rawio


def read_nfx(filename, apply_gain=True):
    """
    Read the NFx file `filename` and return a :class:`rippleio.core.NxFile`.
    """
    return NFxRawIO(filename, apply_gain=apply_gain).read()


def read_nsx(filename, apply_gain=True):
    """
    Read the NSx file `filename` and return a :class:`rippleio.core.NxFile`.
    """
    return NSxRawIO(filename, apply_gain=apply_gain).read()


def read_nev(filename):
    """
    Read the NEV file `filename` and return a :class:`rippleio.core.NevFile`.
    """
    return NEVRawIO(filename).read()


def read(filename, **kargs):
    """
    Read `filename` with the reader matching its suffix.

    Extra keyword arguments are given to the reader, for instance
    ``apply_gain`` for continuous files.
    """
    rawio = get_rawio(filename)
    if rawio is None:
        raise ValueError(f"No reader for {filename}, suffix is not supported")
    return rawio(filename, **kargs).read()
