"""
Sequential big-endian reader over a binary file-like object.

Every read either returns exactly the requested amount of data or raises
:py:class:`~psd_layers.exceptions.FormatError` with
:py:attr:`~psd_layers.exceptions.FormatErrorKind.UNEXPECTED_END_OF_STREAM`.
The reader never seeks, so non-seekable sources such as pipes work too.
"""

import logging
import struct
from typing import Any, BinaryIO

from psd_layers.exceptions import FormatError, FormatErrorKind

logger = logging.getLogger(__name__)

#: Upper bound of a single read from the underlying file object, so that
#: untrusted lengths never allocate more than what the source delivers.
CHUNK_SIZE = 1024 * 1024


class StreamReader:
    """
    Forward-only reader of big-endian primitives.

    Example::

        with open('example.psd', 'rb') as f:
            reader = StreamReader(f)
            signature = reader.read_tag()
            version = reader.read_uint16()
    """

    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._position = 0

    def tell(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    def read_bytes(self, size: int) -> bytes:
        """
        Read exactly `size` bytes, looping on short reads.
        """
        if size < 0:
            raise ValueError("Negative read size %d" % size)
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._fp.read(min(remaining, CHUNK_SIZE))
            if not chunk:
                raise FormatError(
                    FormatErrorKind.UNEXPECTED_END_OF_STREAM,
                    "Expected %d bytes but the stream ended after %d, at offset %d"
                    % (size, size - remaining, self._position),
                )
            chunks.append(chunk)
            remaining -= len(chunk)
            self._position += len(chunk)
        return b"".join(chunks)

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_fmt(self, fmt: str) -> tuple[Any, ...]:
        """
        Reads data according to the big-endian struct format ``fmt``.
        """
        fmt = ">" + fmt
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))

    def read_int16(self) -> int:
        return self.read_fmt("h")[0]

    def read_uint16(self) -> int:
        return self.read_fmt("H")[0]

    def read_int32(self) -> int:
        return self.read_fmt("i")[0]

    def read_uint32(self) -> int:
        return self.read_fmt("I")[0]

    def read_tag(self, size: int = 4) -> bytes:
        """Read a fixed-size signature or key as raw bytes."""
        return self.read_bytes(size)

    def read_fixed_string(self, size: int) -> str:
        """
        Read an ASCII string of exactly `size` bytes, one character per byte.
        """
        return self.read_bytes(size).decode("latin-1")

    def skip(self, size: int) -> None:
        """
        Discard exactly `size` bytes.
        """
        if size < 0:
            raise ValueError("Negative skip size %d" % size)
        while size > 0:
            chunk = min(size, CHUNK_SIZE)
            self.read_bytes(chunk)
            size -= chunk
