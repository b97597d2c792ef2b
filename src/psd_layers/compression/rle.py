"""
PackBits RLE decoder for a single scanline.

Each control byte is read as a signed value ``n``:

- ``0 <= n <= 127``: copy the next ``n + 1`` bytes literally.
- ``-128 <= n <= -1``: repeat the next byte ``1 - n`` times.

Example::

    from psd_layers.compression.rle import decode

    decode(b"\\x02\\xaa\\xbb\\xcc", 3)  # b"\\xaa\\xbb\\xcc"
    decode(b"\\xfe\\x7f", 3)  # b"\\x7f\\x7f\\x7f"
"""

from psd_layers.exceptions import FormatError, FormatErrorKind


def decode(data: bytes, size: int) -> bytes:
    """decode(data, size) -> bytes

    Decode one encoded scanline into exactly `size` bytes.
    """

    i = 0
    length = len(data)
    result = bytearray()

    while i < length:
        i, bit = i + 1, data[i]
        if bit > 127:
            count = 257 - bit
            if i >= length:
                raise FormatError(
                    FormatErrorKind.CORRUPT_RLE, "Repeat run past end of line"
                )
            result.extend(data[i : i + 1] * count)
            i += 1
        else:
            count = bit + 1
            if i + count > length:
                raise FormatError(
                    FormatErrorKind.CORRUPT_RLE, "Literal run past end of line"
                )
            result.extend(data[i : i + count])
            i += count
        if len(result) > size:
            raise FormatError(
                FormatErrorKind.CORRUPT_RLE,
                "Expected %d bytes but decoded at least %d bytes" % (size, len(result)),
            )

    if len(result) != size:
        raise FormatError(
            FormatErrorKind.CORRUPT_RLE,
            "Expected %d bytes but decoded %d bytes" % (size, len(result)),
        )
    return bytes(result)
