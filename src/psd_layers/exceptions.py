"""
Exceptions raised while decoding a document.
"""

from enum import Enum


class FormatErrorKind(Enum):
    """
    Classification of :py:class:`FormatError`.
    """

    BAD_MAGIC = "bad magic"
    UNSUPPORTED_VERSION = "unsupported version"
    UNSUPPORTED_COLOR_MODE_OR_DEPTH = "unsupported color mode or depth"
    CORRUPT_RLE = "corrupt RLE data"
    UNEXPECTED_END_OF_STREAM = "unexpected end of stream"
    INVALID_LAYER_BOUNDS = "invalid layer bounds"


class FormatError(ValueError):
    """
    The byte stream is not a valid, supported PSD document.

    Failures of the underlying file object surface as :py:exc:`OSError`
    instead, so the two can be told apart.

    .. py:attribute:: kind

        See :py:class:`FormatErrorKind`.
    """

    def __init__(self, kind: FormatErrorKind, message: str = "") -> None:
        self.kind = kind
        super().__init__(message or kind.value)

    def __repr__(self) -> str:
        return "FormatError(%s, %r)" % (self.kind.name, str(self))
