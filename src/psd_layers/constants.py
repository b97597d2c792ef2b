"""
Various constants for psd_layers
"""

import logging
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)


class ColorMode(IntEnum):
    """
    Color mode.

    Only :py:attr:`RGB` documents are decoded; the other modes are reported
    for information before the decoder rejects the file.
    """

    BITMAP = 0
    GRAYSCALE = 1
    INDEXED = 2
    RGB = 3
    CMYK = 4
    MULTICHANNEL = 7
    DUOTONE = 8
    LAB = 9
    UNKNOWN = -1

    @classmethod
    def _missing_(cls, value):
        logger.warning("Unknown color mode: %r" % value)
        return cls.UNKNOWN

    def __str__(self) -> str:
        return _COLOR_MODE_NAMES[self]


_COLOR_MODE_NAMES = {
    ColorMode.BITMAP: "Bitmap",
    ColorMode.GRAYSCALE: "Greyscale",
    ColorMode.INDEXED: "Indexed",
    ColorMode.RGB: "RGB",
    ColorMode.CMYK: "CMYK",
    ColorMode.MULTICHANNEL: "Multichannel",
    ColorMode.DUOTONE: "Duotone",
    ColorMode.LAB: "Lab",
    ColorMode.UNKNOWN: "unknown",
}


class ChannelID(IntEnum):
    """
    Channel types.
    """

    RED = 0
    GREEN = 1
    BLUE = 2
    TRANSPARENCY_MASK = -1
    USER_LAYER_MASK = -2
    REAL_USER_LAYER_MASK = -3


class BlendMode(Enum):
    """
    Blend modes, keyed by the 4-byte tag stored in each layer record.
    """

    NORMAL = b"norm"
    DARKEN = b"dark"
    LIGHTEN = b"lite"
    HUE = b"hue "
    SATURATION = b"sat "
    COLOR = b"colr"
    LUMINOSITY = b"lum "
    MULTIPLY = b"mul "
    SCREEN = b"scrn"
    DISSOLVE = b"diss"
    OVERLAY = b"over"
    HARD_LIGHT = b"hLit"
    SOFT_LIGHT = b"sLit"
    DIFFERENCE = b"diff"
    UNKNOWN = b"\x00\x00\x00\x00"

    @classmethod
    def _missing_(cls, value):
        logger.warning("Unknown blend mode: %r" % value)
        return cls.UNKNOWN


class Compression(IntEnum):
    """
    Compression flag of channel data. Anything but :py:attr:`RLE` is read
    as raw bytes.
    """

    RAW = 0
    RLE = 1
    ZIP = 2
    ZIP_WITH_PREDICTION = 3


#: Signature at the start of every document.
PSD_SIGNATURE = b"8BPS"

#: Signature preceding the blend mode key of every layer record.
BLEND_SIGNATURE = b"8BIM"
