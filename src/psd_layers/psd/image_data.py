"""
Image data section structure.

:py:class:`ImageData` corresponds to the last section of the PSD file where a
composited image is stored. When the file does not contain layers, this is
the only place pixels are saved.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_layers.compression import read_byte_counts, read_compression, read_plane
from psd_layers.constants import ChannelID, Compression
from psd_layers.psd.base import BaseElement
from psd_layers.psd.header import FileHeader
from psd_layers.psd.layer_and_mask import CHANNEL_SLOTS, ChannelPlanes
from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ImageData")

#: Channel order of the merged image data.
MERGED_CHANNEL_IDS = (
    ChannelID.RED,
    ChannelID.GREEN,
    ChannelID.BLUE,
    ChannelID.TRANSPARENCY_MASK,
)


@define(repr=False)
class ImageData(BaseElement):
    """
    Merged channel image data.

    .. py:attribute:: compression

        See :py:class:`~psd_layers.constants.Compression`.

    .. py:attribute:: planes

        See :py:class:`~psd_layers.psd.layer_and_mask.ChannelPlanes`.
    """

    compression: Compression = Compression.RAW
    planes: ChannelPlanes = field(factory=ChannelPlanes)

    @classmethod
    def read(
        cls: type[T],
        reader: StreamReader,
        header: FileHeader,
        **kwargs: Any,
    ) -> T:
        """
        Read the first four channels of the merged image.

        :param header: See :py:class:`~psd_layers.psd.header.FileHeader`.
        """
        start_pos = reader.tell()
        width, height = header.width, header.height
        channel_ids = MERGED_CHANNEL_IDS[: min(header.channels, 4)]

        compression = read_compression(reader)
        byte_counts: tuple[int, ...] = ()
        if compression == Compression.RLE:
            # One group of `height` line lengths per decoded channel.
            byte_counts = read_byte_counts(reader, height * len(channel_ids))

        planes = {}
        for index, channel_id in enumerate(channel_ids):
            row_counts = None
            if compression == Compression.RLE:
                row_counts = byte_counts[index * height : (index + 1) * height]
            planes[CHANNEL_SLOTS[channel_id]] = read_plane(
                reader, compression, width, height, row_counts
            )
        logger.debug("  read image data, len=%d" % (reader.tell() - start_pos))
        return cls(compression, ChannelPlanes(**planes))
