import io
import struct

import pytest

from psd_layers.constants import BlendMode, ChannelID
from psd_layers.exceptions import FormatError, FormatErrorKind
from psd_layers.psd.layer_and_mask import (
    ChannelInfo,
    ChannelPlanes,
    LayerAndMaskInformation,
    LayerInfo,
    LayerRecord,
)
from psd_layers.psd.stream import StreamReader

from ..utils import (
    ALPHA,
    BLUE,
    GREEN,
    RED,
    encode_plane,
    make_layer,
    make_layer_and_mask,
    make_layer_info,
    solid_layer,
)


def test_channel_info() -> None:
    info = ChannelInfo.frombytes(b"\xff\xff\x00\x00\x00\x12")
    assert info.id == ChannelID.TRANSPARENCY_MASK
    assert info.length == 18


def test_layer_record() -> None:
    record, _ = solid_layer(
        (2, 1, 5, 3), (1, 2, 3), blend_key=b"mul ", opacity=128, flags=2,
        extra=b"\x00" * 12,
    )
    layer_record = LayerRecord.frombytes(record)
    assert layer_record.bbox == (2, 1, 5, 3)
    assert layer_record.width == 3
    assert layer_record.height == 2
    assert [info.id for info in layer_record.channel_info] == [0, 1, 2]
    assert layer_record.blend_mode == BlendMode.MULTIPLY
    assert layer_record.opacity == 128
    assert not layer_record.visible


@pytest.mark.parametrize(
    "key, expected",
    [
        (b"norm", BlendMode.NORMAL),
        (b"dark", BlendMode.DARKEN),
        (b"lite", BlendMode.LIGHTEN),
        (b"hue ", BlendMode.HUE),
        (b"sat ", BlendMode.SATURATION),
        (b"colr", BlendMode.COLOR),
        (b"lum ", BlendMode.LUMINOSITY),
        (b"mul ", BlendMode.MULTIPLY),
        (b"scrn", BlendMode.SCREEN),
        (b"diss", BlendMode.DISSOLVE),
        (b"over", BlendMode.OVERLAY),
        (b"hLit", BlendMode.HARD_LIGHT),
        (b"sLit", BlendMode.SOFT_LIGHT),
        (b"diff", BlendMode.DIFFERENCE),
        (b"fsub", BlendMode.UNKNOWN),
        (b"\xde\xad\xbe\xef", BlendMode.UNKNOWN),
    ],
)
def test_layer_record_blend_mode(key: bytes, expected: BlendMode) -> None:
    record, _ = solid_layer((0, 0, 1, 1), (0, 0, 0), blend_key=key)
    assert LayerRecord.frombytes(record).blend_mode == expected


def test_layer_record_bad_signature() -> None:
    record, _ = solid_layer((0, 0, 1, 1), (0, 0, 0), signature=b"8B64")
    with pytest.raises(FormatError) as excinfo:
        LayerRecord.frombytes(record)
    assert excinfo.value.kind == FormatErrorKind.BAD_MAGIC


@pytest.mark.parametrize("bbox", [(0, 5, 4, 2), (5, 0, 2, 4)])
def test_layer_record_invalid_bounds(bbox: tuple) -> None:
    record, _ = make_layer(bbox, [])
    with pytest.raises(FormatError) as excinfo:
        LayerRecord.frombytes(record)
    assert excinfo.value.kind == FormatErrorKind.INVALID_LAYER_BOUNDS


@pytest.mark.parametrize("rle", [False, True])
def test_channel_planes(rle: bool) -> None:
    record, data = solid_layer((0, 0, 3, 2), (10, 20, 30, 40), rle=rle)
    planes = ChannelPlanes.frombytes(data, LayerRecord.frombytes(record))
    assert planes.red == b"\x0a" * 6
    assert planes.green == b"\x14" * 6
    assert planes.blue == b"\x1e" * 6
    assert planes.alpha == b"\x28" * 6


def test_channel_planes_discard_unknown_channel() -> None:
    record, data = make_layer(
        (0, 0, 2, 2),
        [
            (ChannelID.USER_LAYER_MASK, encode_plane(b"\xff" * 4, 2, 2)),
            (RED, encode_plane(b"\x01" * 4, 2, 2)),
            (
                ChannelID.REAL_USER_LAYER_MASK,
                encode_plane(b"\x80" * 4, 2, 2, rle=True),
            ),
            (BLUE, encode_plane(b"\x03" * 4, 2, 2, rle=True)),
        ],
    )
    planes = ChannelPlanes.frombytes(data, LayerRecord.frombytes(record))
    assert planes.red == b"\x01" * 4
    assert planes.green is None
    assert planes.blue == b"\x03" * 4
    assert planes.alpha is None


@pytest.mark.parametrize("declared_size", [0, 1, 1000])
def test_channel_planes_ignore_declared_size(declared_size: int) -> None:
    channels = [
        (RED, encode_plane(b"\x0a\x0b", 2, 1)),
        (3, encode_plane(b"\x99\x99", 2, 1)),
        (GREEN, encode_plane(b"\x0c\x0d", 2, 1, rle=True)),
        (BLUE, encode_plane(b"\x0e\x0f", 2, 1)),
    ]
    record, data = make_layer(
        (0, 0, 2, 1), channels, declared_sizes=[declared_size] * len(channels)
    )
    layer_record = LayerRecord.frombytes(record)
    assert [info.length for info in layer_record.channel_info] == [declared_size] * 4
    planes = ChannelPlanes.frombytes(data, layer_record)
    assert planes.red == b"\x0a\x0b"
    assert planes.green == b"\x0c\x0d"
    assert planes.blue == b"\x0e\x0f"


def test_channel_planes_channel_order() -> None:
    record, data = make_layer(
        (0, 0, 1, 1),
        [
            (ALPHA, encode_plane(b"\x04", 1, 1)),
            (GREEN, encode_plane(b"\x02", 1, 1)),
        ],
    )
    planes = ChannelPlanes.frombytes(data, LayerRecord.frombytes(record))
    assert planes.alpha == b"\x04"
    assert planes.green == b"\x02"


def test_channel_planes_corrupt_rle() -> None:
    # Second scanline decodes to 3 bytes instead of 2.
    data = b"\x00\x01\x00\x02\x00\x02\xff\x01\xfe\x02"
    record, _ = make_layer((0, 0, 2, 2), [(RED, data)])
    with pytest.raises(FormatError) as excinfo:
        ChannelPlanes.frombytes(data, LayerRecord.frombytes(record))
    assert excinfo.value.kind == FormatErrorKind.CORRUPT_RLE


def test_layer_info() -> None:
    layers = [
        solid_layer((0, 0, 2, 2), (255, 0, 0)),
        solid_layer((1, 1, 2, 3), (0, 255, 0, 128), rle=True),
    ]
    body = make_layer_info(layers)
    layer_info = LayerInfo.frombytes(body, len(body))
    assert layer_info.layer_count == 2
    assert len(layer_info.layer_records) == 2
    assert len(layer_info.channel_image_data) == 2
    assert layer_info.channel_image_data[1].alpha == b"\x80\x80"


def test_layer_info_negative_count() -> None:
    body = make_layer_info([solid_layer((0, 0, 1, 1), (1, 2, 3))], count=-1)
    layer_info = LayerInfo.frombytes(body, len(body))
    assert layer_info.layer_count == -1
    assert len(layer_info.layer_records) == 1


def test_layer_info_ends_after_channel_data() -> None:
    body = make_layer_info([solid_layer((0, 0, 1, 1), (1, 2, 3))])
    reader = StreamReader(io.BytesIO(body + b"\x00\x00\x00\x2a"))
    layer_info = LayerInfo.read(reader, len(body) + 100)
    assert layer_info.layer_count == 1
    assert reader.tell() == len(body)
    assert reader.read_uint32() == 42


def test_layer_and_mask_empty() -> None:
    info = LayerAndMaskInformation.frombytes(b"\x00\x00\x00\x00")
    assert info.length == 0
    assert info.layer_info is None


def test_layer_and_mask_no_layer_info() -> None:
    data = struct.pack(">Ii", 8, 0) + b"\x00\x00\x00\x00"
    info = LayerAndMaskInformation.frombytes(data)
    assert info.length == 8
    assert info.layer_info is None


def test_layer_and_mask_zero_layers() -> None:
    data = make_layer_and_mask(make_layer_info([]), global_mask=b"\x00" * 6)
    info = LayerAndMaskInformation.frombytes(data)
    assert info.layer_info is None


def test_layer_and_mask() -> None:
    data = make_layer_and_mask(
        make_layer_info([solid_layer((0, 0, 1, 1), (1, 2, 3))]),
        global_mask=b"\x00" * 14,
    )
    info = LayerAndMaskInformation.frombytes(data)
    assert info.layer_info is not None
    assert info.layer_info.layer_records[0].bbox == (0, 0, 1, 1)


def test_layer_and_mask_truncated() -> None:
    data = make_layer_and_mask(
        make_layer_info([solid_layer((0, 0, 4, 4), (1, 2, 3))])
    )
    with pytest.raises(FormatError) as excinfo:
        LayerAndMaskInformation.frombytes(data[:-20])
    assert excinfo.value.kind == FormatErrorKind.UNEXPECTED_END_OF_STREAM
