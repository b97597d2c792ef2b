"""
Layer and mask data structures.

This module reads the "Layer and Mask Information" section of PSD files:

- :py:class:`LayerAndMaskInformation`: top-level container
- :py:class:`LayerInfo`: layer records and their channel image data
- :py:class:`LayerRecord`: single layer metadata (bounds, blend mode, etc.)
- :py:class:`ChannelInfo`: channel id and declared length within a record
- :py:class:`ChannelPlanes`: decoded red, green, blue and alpha planes

Only the fields needed to build pixel layers are interpreted. Layer names,
masks, blending ranges and tagged blocks live in the "extra data" of each
record and are skipped by their declared length, as is the global layer mask
info. Declared channel lengths are kept for information only: every channel,
including the ones never interpreted, is decoded to find its real extent.

Example of reading layer metadata::

    from psd_layers.psd import PSD

    with open('file.psd', 'rb') as f:
        psd = PSD.read(StreamReader(f))

    layer_info = psd.layer_and_mask_information.layer_info
    for record in layer_info.layer_records:
        print(record.bbox, record.blend_mode, record.opacity)
"""

import logging
from typing import Any, Optional, TypeVar

from attrs import define, field

from psd_layers.compression import read_channel
from psd_layers.constants import BLEND_SIGNATURE, BlendMode, ChannelID
from psd_layers.exceptions import FormatError, FormatErrorKind
from psd_layers.psd.base import BaseElement
from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T_LayerAndMaskInformation = TypeVar(
    "T_LayerAndMaskInformation", bound="LayerAndMaskInformation"
)
T_LayerInfo = TypeVar("T_LayerInfo", bound="LayerInfo")
T_ChannelInfo = TypeVar("T_ChannelInfo", bound="ChannelInfo")
T_LayerRecord = TypeVar("T_LayerRecord", bound="LayerRecord")
T_ChannelPlanes = TypeVar("T_ChannelPlanes", bound="ChannelPlanes")

#: Channel id to :py:class:`ChannelPlanes` attribute.
CHANNEL_SLOTS = {
    ChannelID.RED: "red",
    ChannelID.GREEN: "green",
    ChannelID.BLUE: "blue",
    ChannelID.TRANSPARENCY_MASK: "alpha",
}

#: Layer flag bit that hides the layer.
FLAG_HIDDEN = 2


@define(repr=False)
class LayerAndMaskInformation(BaseElement):
    """
    Layer and mask information section.

    .. py:attribute:: length

        Declared length of the section. Zero when the document has no layer
        section at all.

    .. py:attribute:: layer_info

        See :py:class:`.LayerInfo`. `None` when the section holds no layers,
        in which case pixels come from the merged image data.
    """

    length: int = 0
    layer_info: Optional["LayerInfo"] = None

    @classmethod
    def read(
        cls: type[T_LayerAndMaskInformation],
        reader: StreamReader,
        *args: Any,
        **kwargs: Any,
    ) -> T_LayerAndMaskInformation:
        length = reader.read_uint32()
        logger.debug("reading layer and mask info, len=%d" % length)
        if length == 0:
            return cls(length)

        start_pos = reader.tell()
        layer_info_length = reader.read_int32()
        if layer_info_length <= 0:
            logger.debug("no layer info, skipping %d bytes" % (length - 4))
            reader.skip(max(0, length - 4))
            return cls(length)

        layer_info = LayerInfo.read(reader, layer_info_length)
        if not layer_info.layer_records:
            logger.debug("layer info declares no layers")
            _skip_to(reader, start_pos + length, "layer and mask info")
            return cls(length)

        global_mask_length = reader.read_uint32()
        logger.debug("skipping global layer mask info, len=%d" % global_mask_length)
        reader.skip(global_mask_length)
        return cls(length, layer_info)


@define(repr=False)
class LayerInfo(BaseElement):
    """
    High-level organization of the layer information.

    .. py:attribute:: layer_count

        Layer count. If it is a negative number, its absolute value is the
        number of layers and the first alpha channel contains the transparency
        data for the merged result.

    .. py:attribute:: layer_records

        Tuple of :py:class:`.LayerRecord`, bottom layer first.

    .. py:attribute:: channel_image_data

        Tuple of :py:class:`.ChannelPlanes` in the order of `layer_records`.
    """

    layer_count: int = 0
    layer_records: tuple["LayerRecord", ...] = ()
    channel_image_data: tuple["ChannelPlanes", ...] = ()

    @classmethod
    def read(
        cls: type[T_LayerInfo], reader: StreamReader, length: int, **kwargs: Any
    ) -> T_LayerInfo:
        """
        Read the layer info body whose declared `length` has already been
        consumed. The body ends after the last channel plane, `length` is
        only logged.
        """
        logger.debug("reading layer info, len=%d" % length)
        start_pos = reader.tell()
        layer_count = reader.read_int16()
        layer_records = tuple(
            LayerRecord.read(reader) for _ in range(abs(layer_count))
        )
        logger.debug("  read layer records, len=%d" % (reader.tell() - start_pos))
        channel_image_data = tuple(
            ChannelPlanes.read(reader, record) for record in layer_records
        )
        return cls(layer_count, layer_records, channel_image_data)


@define(repr=True, frozen=True)
class ChannelInfo(BaseElement):
    """
    Channel information.

    .. py:attribute:: id

        Channel ID: 0 = red, 1 = green, 2 = blue, -1 = transparency mask.
        Other values, such as the user supplied layer mask, are kept as
        plain integers; their planes are decoded and discarded.

    .. py:attribute:: length

        Declared length of the corresponding channel data. Not trusted, the
        real length comes from decoding the channel.
    """

    id: int = ChannelID.RED
    length: int = 0

    @classmethod
    def read(
        cls: type[T_ChannelInfo], reader: StreamReader, *args: Any, **kwargs: Any
    ) -> T_ChannelInfo:
        channel_id, length = reader.read_fmt("hI")
        return cls(id=channel_id, length=length)


@define(repr=True, frozen=True)
class LayerRecord(BaseElement):
    """
    Layer record.

    .. py:attribute:: top

        Top position.

    .. py:attribute:: left

        Left position.

    .. py:attribute:: bottom

        Bottom position.

    .. py:attribute:: right

        Right position.

    .. py:attribute:: channel_info

        Tuple of :py:class:`.ChannelInfo`.

    .. py:attribute:: blend_mode

        Blend mode, see :py:class:`~psd_layers.constants.BlendMode`.

    .. py:attribute:: opacity

        Opacity, 0 = transparent, 255 = opaque.

    .. py:attribute:: flags

        Raw flag bits. Bit value 2 hides the layer.
    """

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0
    channel_info: tuple[ChannelInfo, ...] = ()
    blend_mode: BlendMode = field(default=BlendMode.NORMAL, converter=BlendMode)
    opacity: int = 255
    flags: int = 0

    @classmethod
    def read(
        cls: type[T_LayerRecord], reader: StreamReader, *args: Any, **kwargs: Any
    ) -> T_LayerRecord:
        top, left, bottom, right, num_channels = reader.read_fmt("4iH")
        channel_info = tuple(ChannelInfo.read(reader) for _ in range(num_channels))

        signature = reader.read_tag()
        if signature != BLEND_SIGNATURE:
            raise FormatError(
                FormatErrorKind.BAD_MAGIC,
                "Invalid blend mode signature: %r" % signature,
            )
        blend_mode = BlendMode(reader.read_tag())
        opacity, _clipping, flags = reader.read_fmt("BBBx")

        # Mask data, blending ranges, name and tagged blocks.
        extra_length = reader.read_uint32()
        reader.skip(extra_length)

        self = cls(
            top, left, bottom, right, channel_info, blend_mode, opacity, flags
        )
        if self.width < 0 or self.height < 0:
            raise FormatError(
                FormatErrorKind.INVALID_LAYER_BOUNDS,
                "Invalid layer bounds: %r" % (self.bbox,),
            )
        logger.debug("  read %s" % self)
        return self

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple."""
        return self.left, self.top, self.right, self.bottom

    @property
    def visible(self) -> bool:
        return not (self.flags & FLAG_HIDDEN)


@define(repr=False, frozen=True)
class ChannelPlanes(BaseElement):
    """
    Decoded planes of a single layer. Each plane is `bytes` of
    ``width * height`` or `None` when the layer has no such channel.
    """

    red: Optional[bytes] = None
    green: Optional[bytes] = None
    blue: Optional[bytes] = None
    alpha: Optional[bytes] = None

    @classmethod
    def read(
        cls: type[T_ChannelPlanes],
        reader: StreamReader,
        record: LayerRecord,
        **kwargs: Any,
    ) -> T_ChannelPlanes:
        """
        Read the channel image data of `record`, in channel order.

        Channels other than red, green, blue and alpha are decoded the same
        way and dropped.
        """
        planes = {}
        for info in record.channel_info:
            plane = read_channel(reader, record.width, record.height)
            slot = CHANNEL_SLOTS.get(info.id)  # type: ignore[call-overload]
            if slot is None:
                logger.debug("  discarding channel %d" % info.id)
                continue
            planes[slot] = plane
        return cls(**planes)

    def __repr__(self) -> str:
        return "ChannelPlanes(%s)" % ", ".join(
            "%s=%s" % (name, "None" if value is None else "len=%d" % len(value))
            for name, value in (
                ("red", self.red),
                ("green", self.green),
                ("blue", self.blue),
                ("alpha", self.alpha),
            )
        )


def _skip_to(reader: StreamReader, end_pos: int, name: str) -> None:
    """Skip what remains of a block with declared end `end_pos`."""
    remaining = end_pos - reader.tell()
    if remaining < 0:
        logger.warning(
            "%s is broken: current position=%d, expected=%d"
            % (name, reader.tell(), end_pos)
        )
    elif remaining:
        logger.debug("skipping %d bytes to the end of %s" % (remaining, name))
        reader.skip(remaining)
