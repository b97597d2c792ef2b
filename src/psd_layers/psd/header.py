"""
File header structure.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_layers.constants import PSD_SIGNATURE, ColorMode
from psd_layers.exceptions import FormatError, FormatErrorKind
from psd_layers.psd.base import BaseElement
from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FileHeader")


@define(repr=True, frozen=True)
class FileHeader(BaseElement):
    """
    Header section of the PSD file.

    Example::

        from psd_layers.psd.header import FileHeader

        header = FileHeader.frombytes(data)
        header.check_supported()

    .. py:attribute:: version

        Version number. Only PSD version 1 is supported.

    .. py:attribute:: channels

        The number of channels in the image, including any user-defined alpha
        channel.

    .. py:attribute:: height

        The height of the image in pixels.

    .. py:attribute:: width

        The width of the image in pixels.

    .. py:attribute:: depth

        The number of bits per channel.

    .. py:attribute:: color_mode

        The color mode of the file. See
        :py:class:`~psd_layers.constants.ColorMode`
    """

    _FORMAT = "HIIHH"

    version: int = 1
    channels: int = 3
    height: int = 64
    width: int = 64
    depth: int = 8
    color_mode: ColorMode = field(default=ColorMode.RGB, converter=ColorMode)

    @classmethod
    def read(cls: type[T], reader: StreamReader, *args: Any, **kwargs: Any) -> T:
        signature = reader.read_tag()
        if signature != PSD_SIGNATURE:
            raise FormatError(
                FormatErrorKind.BAD_MAGIC, "This is not a PSD file: %r" % signature
            )
        version = reader.read_uint16()
        if version != 1:
            raise FormatError(
                FormatErrorKind.UNSUPPORTED_VERSION,
                "Unsupported PSD version (%d)" % version,
            )
        reader.skip(6)  # Reserved.
        self = cls(version, *reader.read_fmt(cls._FORMAT))
        if not 1 <= self.channels <= 56:
            logger.warning("Channel count out of range: %d" % self.channels)
        logger.debug("read %s" % self)
        return self

    def check_supported(self) -> None:
        """
        Raise :py:class:`~psd_layers.exceptions.FormatError` unless this is an
        8-bit RGB document.
        """
        if self.color_mode != ColorMode.RGB:
            raise FormatError(
                FormatErrorKind.UNSUPPORTED_COLOR_MODE_OR_DEPTH,
                "Unsupported color mode: %s" % self.color_mode,
            )
        if self.depth != 8:
            raise FormatError(
                FormatErrorKind.UNSUPPORTED_COLOR_MODE_OR_DEPTH,
                "Unsupported bit depth: %d" % self.depth,
            )
