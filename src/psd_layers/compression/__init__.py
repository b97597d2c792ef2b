"""
Channel plane decoding.

A channel plane is stored either raw (``width * height`` bytes) or as PackBits
RLE: a table of 16-bit byte counts, one per scanline, followed by the encoded
scanlines. The byte counts are taken from the stream, and every scanline must
decode to exactly ``width`` bytes.

Key functions:

- :py:func:`read_compression`: read the 16-bit compression flag
- :py:func:`read_byte_counts`: read an RLE scanline length table
- :py:func:`decode_rle`: decode RLE scanlines from the stream
- :py:func:`read_plane`: read one raw or RLE plane
- :py:func:`read_channel`: read a compression flag followed by one plane

Example usage::

    from psd_layers.compression import read_channel

    plane = read_channel(reader, width, height)
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from psd_layers.compression import rle
from psd_layers.constants import Compression

if TYPE_CHECKING:
    from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)


def read_compression(reader: "StreamReader") -> Compression:
    """Read the compression flag. Unknown values are treated as raw data."""
    value = reader.read_uint16()
    if value == Compression.RLE:
        return Compression.RLE
    if value != Compression.RAW:
        logger.debug("Compression %d is read as raw data" % value)
    return Compression.RAW


def read_byte_counts(reader: "StreamReader", count: int) -> tuple[int, ...]:
    """Read `count` big-endian 16-bit scanline lengths."""
    if count <= 0:
        return ()
    return reader.read_fmt("%dH" % count)


def decode_rle(reader: "StreamReader", byte_counts: Sequence[int], width: int) -> bytes:
    """
    Read and decode one encoded scanline per entry of `byte_counts`.

    :param reader: stream positioned at the first encoded scanline.
    :param byte_counts: encoded length of each scanline.
    :param width: decoded length of each scanline.
    :return: decoded plane bytes.
    """
    return b"".join(
        rle.decode(reader.read_bytes(count), width) for count in byte_counts
    )


def read_plane(
    reader: "StreamReader",
    compression: Compression,
    width: int,
    height: int,
    byte_counts: Optional[Sequence[int]] = None,
) -> bytes:
    """
    Read a single plane of `width` x `height` bytes.

    :param compression: see :py:class:`~psd_layers.constants.Compression`.
    :param byte_counts: scanline lengths when they were read ahead of the
        plane, as in the merged image data. When `None`, RLE planes read
        their own table first.
    :return: raw plane bytes.
    """
    if compression == Compression.RLE:
        if byte_counts is None:
            byte_counts = read_byte_counts(reader, height)
        return decode_rle(reader, byte_counts, width)
    return reader.read_bytes(width * height)


def read_channel(reader: "StreamReader", width: int, height: int) -> bytes:
    """Read a compression flag followed by a single plane."""
    compression = read_compression(reader)
    return read_plane(reader, compression, width, height)
