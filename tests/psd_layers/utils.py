"""
Builders of synthetic PSD byte streams.

The library only reads documents, so test fixtures are assembled here from
struct-packed sections.
"""

import struct
from typing import Optional, Sequence

from psd_layers.constants import ChannelID

RED, GREEN, BLUE, ALPHA = (
    ChannelID.RED,
    ChannelID.GREEN,
    ChannelID.BLUE,
    ChannelID.TRANSPARENCY_MASK,
)


def packbits(data: bytes) -> bytes:
    """PackBits encoder, runs of three or more equal bytes become repeats."""
    result = bytearray()
    i = 0
    n = len(data)
    while i < n:
        run = 1
        while i + run < n and data[i + run] == data[i] and run < 128:
            run += 1
        if run >= 3:
            result.append(257 - run)
            result.append(data[i])
            i += run
            continue

        start = i
        while i < n and i - start < 128:
            if i + 2 < n and data[i] == data[i + 1] == data[i + 2]:
                break
            i += 1
        if i == start:
            i += 1
        result.append(i - start - 1)
        result.extend(data[start:i])
    return bytes(result)


def make_header(
    width: int,
    height: int,
    channels: int = 3,
    depth: int = 8,
    color_mode: int = 3,
    signature: bytes = b"8BPS",
    version: int = 1,
) -> bytes:
    return struct.pack(
        ">4sH6xHIIHH", signature, version, channels, height, width, depth, color_mode
    )


def encode_plane(plane: bytes, width: int, height: int, rle: bool = False) -> bytes:
    """Compression flag, then the raw plane or its RLE table and scanlines."""
    if not rle:
        return struct.pack(">H", 0) + plane
    lines = [packbits(plane[i * width : (i + 1) * width]) for i in range(height)]
    return (
        struct.pack(">H", 1)
        + struct.pack(">%dH" % height, *[len(line) for line in lines])
        + b"".join(lines)
    )


def make_layer(
    bbox: tuple[int, int, int, int],
    channels: Sequence[tuple[int, bytes]],
    blend_key: bytes = b"norm",
    opacity: int = 255,
    flags: int = 0,
    extra: bytes = b"",
    signature: bytes = b"8BIM",
    declared_sizes: Optional[Sequence[int]] = None,
) -> tuple[bytes, bytes]:
    """
    Build a layer record and its channel image data.

    :param bbox: (left, top, right, bottom) tuple.
    :param channels: (channel id, encoded channel data) pairs.
    :param declared_sizes: channel lengths written to the record instead of
        the real ones.
    :return: (record bytes, channel data bytes) tuple.
    """
    left, top, right, bottom = bbox
    record = struct.pack(">4iH", top, left, bottom, right, len(channels))
    if declared_sizes is None:
        declared_sizes = [len(data) for _, data in channels]
    for (channel_id, _), size in zip(channels, declared_sizes):
        record += struct.pack(">hI", channel_id, size)
    record += signature + blend_key + struct.pack(">BBBx", opacity, 0, flags)
    record += struct.pack(">I", len(extra)) + extra
    return record, b"".join(data for _, data in channels)


def solid_layer(
    bbox: tuple[int, int, int, int],
    color: tuple[int, ...],
    rle: bool = False,
    **kwargs,
) -> tuple[bytes, bytes]:
    """Layer filled with one RGB or RGBA color."""
    left, top, right, bottom = bbox
    width, height = right - left, bottom - top
    ids = (RED, GREEN, BLUE, ALPHA)[: len(color)]
    channels = [
        (channel_id, encode_plane(bytes([value]) * (width * height), width, height, rle))
        for channel_id, value in zip(ids, color)
    ]
    return make_layer(bbox, channels, **kwargs)


def make_layer_info(
    layers: Sequence[tuple[bytes, bytes]], count: Optional[int] = None
) -> bytes:
    """Layer count, every record, then every channel image data block."""
    body = struct.pack(">h", len(layers) if count is None else count)
    body += b"".join(record for record, _ in layers)
    return body + b"".join(data for _, data in layers)


def make_layer_and_mask(
    layer_info: Optional[bytes] = None, global_mask: bytes = b""
) -> bytes:
    if layer_info is None:
        return struct.pack(">I", 0)
    section = (
        struct.pack(">i", len(layer_info))
        + layer_info
        + struct.pack(">I", len(global_mask))
        + global_mask
    )
    return struct.pack(">I", len(section)) + section


def make_image_data(
    planes: Sequence[bytes], width: int, height: int, rle: bool = False
) -> bytes:
    """Merged image data, the RLE table of every plane comes first."""
    if not rle:
        return struct.pack(">H", 0) + b"".join(planes)
    lines = [
        packbits(plane[i * width : (i + 1) * width])
        for plane in planes
        for i in range(height)
    ]
    return (
        struct.pack(">H", 1)
        + struct.pack(">%dH" % len(lines), *[len(line) for line in lines])
        + b"".join(lines)
    )


def make_psd(
    width: int,
    height: int,
    layers: Optional[Sequence[tuple[bytes, bytes]]] = None,
    image_data: bytes = b"",
    layer_and_mask: Optional[bytes] = None,
    color_mode_data: bytes = b"",
    image_resources: bytes = b"",
    **kwargs,
) -> bytes:
    """
    Assemble a complete document.

    :param layers: pairs from :py:func:`make_layer`, bottom first. Ignored
        when `layer_and_mask` is given.
    :param kwargs: header fields, see :py:func:`make_header`.
    """
    if layer_and_mask is None:
        layer_and_mask = make_layer_and_mask(
            make_layer_info(layers) if layers else None
        )
    return (
        make_header(width, height, **kwargs)
        + struct.pack(">I", len(color_mode_data))
        + color_mode_data
        + struct.pack(">I", len(image_resources))
        + image_resources
        + layer_and_mask
        + image_data
    )
