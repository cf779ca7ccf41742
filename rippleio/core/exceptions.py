"""
Exceptions raised while decoding Ripple files.

Every decode failure is fatal: the reader aborts and no partial container is
returned. Unknown extended-header tags and unknown event packet ids are not
errors, they are logged and skipped by the readers.
"""


class RippleReadError(IOError):
    """Base class of all the errors raised while reading a file."""


class BadMagicError(RippleReadError):
    """The file identifier is not one of the identifiers of the format."""


class BadChannelMagicError(RippleReadError):
    """A channel header does not start with the channel identifier."""


class HeaderSizeMismatchError(RippleReadError):
    """
    The headers did not end at the byte offset the file declares.

    This means the field layout assumed for the file version is wrong.
    """


class UnexpectedPacketTypeError(RippleReadError):
    """A continuous data packet does not start with the packet marker."""


class TruncatedInputError(RippleReadError, EOFError):
    """Fewer bytes remain in the file than the field being read requires."""


class DegenerateCalibrationError(RippleReadError, ZeroDivisionError):
    """digital_min equals digital_max, gain can not be computed."""


class MalformedStringError(RippleReadError):
    """A fixed size text field holds no null terminator."""


class UnknownCodeError(RippleReadError):
    """An enumerated field holds a code with no known meaning."""


class UnknownFilterTypeError(UnknownCodeError):
    pass


class UnknownDigitalModeError(UnknownCodeError):
    pass
