"""
:mod:`rippleio.core` provides the containers returned by the readers and the
exceptions raised by them.

Classes:

.. autoclass:: NxHeader
.. autoclass:: NxChannelHeader
.. autoclass:: NxPacket
.. autoclass:: NxFile

.. autoclass:: NevHeader
.. autoclass:: NevHeaderFlags
.. autoclass:: DigitalLabelHeader
.. autoclass:: DigitalInputReason
.. autoclass:: DigitalInputPacket
.. autoclass:: NevFile

"""

from rippleio.core.exceptions import (
    RippleReadError,
    BadMagicError,
    BadChannelMagicError,
    HeaderSizeMismatchError,
    UnexpectedPacketTypeError,
    TruncatedInputError,
    DegenerateCalibrationError,
    MalformedStringError,
    UnknownCodeError,
    UnknownFilterTypeError,
    UnknownDigitalModeError,
)

from rippleio.core.nxfile import NxHeader, NxChannelHeader, NxPacket, NxFile
from rippleio.core.nevfile import (
    NevHeader,
    NevHeaderFlags,
    DigitalLabelHeader,
    DigitalInputReason,
    DigitalInputPacket,
    NevFile,
)
