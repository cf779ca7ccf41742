"""
:mod:`rippleio.rawio` provides classes for reading Ripple files with a
low-level API: one reader per file format, each returning an immutable
container.

:attr:`rippleio.rawio.rawiolist` provides a list of the rawio classes.

Functions:

.. autofunction:: rippleio.rawio.get_rawio


Classes:

* :attr:`NFxRawIO`
* :attr:`NSxRawIO`
* :attr:`NEVRawIO`


.. autoclass:: rippleio.rawio.NFxRawIO

    .. autoattribute:: extensions

.. autoclass:: rippleio.rawio.NSxRawIO

    .. autoattribute:: extensions

.. autoclass:: rippleio.rawio.NEVRawIO

    .. autoattribute:: extensions

"""

from pathlib import Path

from rippleio.rawio.nxrawio import NFxRawIO, NSxRawIO
from rippleio.rawio.nevrawio import NEVRawIO

rawiolist = [
    NFxRawIO,
    NSxRawIO,
    NEVRawIO,
]


def get_rawio(filename):
    """
    Return a rippleio.rawio class guess from file extension.

    Parameters
    ----------
    filename : str | Path
        The filename to check for file suffixes that can be read by rippleio.
        The file does not need to exist.

    Returns
    -------
    rawio: rippleio.RawIO | None
        The RawIO class reading this suffix or None.
    """
    ext = Path(filename).suffix[1:].lower()
    for rawio in rawiolist:
        if ext in rawio.extensions:
            return rawio
    return None
