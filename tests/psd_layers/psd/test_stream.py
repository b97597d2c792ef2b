import io

import pytest

from psd_layers.exceptions import FormatError, FormatErrorKind
from psd_layers.psd.stream import CHUNK_SIZE, StreamReader


class ShortReads(io.RawIOBase):
    """File object returning at most one byte per read."""

    def __init__(self, data: bytes) -> None:
        self._data = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        return self._data.read(min(size, 1))


def test_read_primitives() -> None:
    reader = StreamReader(
        io.BytesIO(b"8BIM\xff\xfe\x00\x02\xff\xff\xff\xfe\x00\x00\x00\x03\x7fab")
    )
    assert reader.read_tag() == b"8BIM"
    assert reader.read_int16() == -2
    assert reader.read_uint16() == 2
    assert reader.read_int32() == -2
    assert reader.read_uint32() == 3
    assert reader.read_byte() == 0x7F
    assert reader.read_fixed_string(2) == "ab"
    assert reader.tell() == 19


def test_short_reads_are_completed() -> None:
    reader = StreamReader(ShortReads(b"\x00\x01\x02\x03\x04"))
    assert reader.read_bytes(4) == b"\x00\x01\x02\x03"
    assert reader.tell() == 4


@pytest.mark.parametrize(
    "method, args",
    [
        ("read_bytes", (5,)),
        ("read_uint32", ()),
        ("read_tag", ()),
        ("skip", (10,)),
    ],
)
def test_unexpected_end_of_stream(method: str, args: tuple) -> None:
    reader = StreamReader(io.BytesIO(b"\x00\x01\x02"))
    with pytest.raises(FormatError) as excinfo:
        getattr(reader, method)(*args)
    assert excinfo.value.kind == FormatErrorKind.UNEXPECTED_END_OF_STREAM


def test_huge_length_fails_without_allocating() -> None:
    reader = StreamReader(io.BytesIO(b"\x00" * 16))
    with pytest.raises(FormatError) as excinfo:
        reader.read_bytes(0xFFFFFFFF)
    assert excinfo.value.kind == FormatErrorKind.UNEXPECTED_END_OF_STREAM


def test_skip_across_chunks() -> None:
    reader = StreamReader(io.BytesIO(b"\x00" * (CHUNK_SIZE + 10) + b"\x2a"))
    reader.skip(CHUNK_SIZE + 10)
    assert reader.read_byte() == 42


def test_negative_size() -> None:
    reader = StreamReader(io.BytesIO(b"\x00"))
    with pytest.raises(ValueError):
        reader.read_bytes(-1)
    with pytest.raises(ValueError):
        reader.skip(-1)


def test_empty_read() -> None:
    reader = StreamReader(io.BytesIO(b""))
    assert reader.read_bytes(0) == b""
    assert reader.tell() == 0
