"""
PSD document structure module.

This module contains the main PSD class that walks the low-level binary
structure of a PSD file.
"""

import logging
from typing import Any, Optional, TypeVar

from attrs import define, field

from psd_layers.psd.base import BaseElement
from psd_layers.psd.header import FileHeader
from psd_layers.psd.image_data import ImageData
from psd_layers.psd.layer_and_mask import LayerAndMaskInformation, LayerInfo
from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PSD")


@define(repr=False)
class PSD(BaseElement):
    """
    Low-level PSD file structure that resembles the specification_.

    .. _specification: https://www.adobe.com/devnet-apps/photoshop/fileformatashtml/

    Example::

        from psd_layers.psd import PSD
        from psd_layers.psd.stream import StreamReader

        with open(input_file, 'rb') as f:
            psd = PSD.read(StreamReader(f))

    .. py:attribute:: header

        See :py:class:`.FileHeader`.

    .. py:attribute:: layer_and_mask_information

        See :py:class:`.LayerAndMaskInformation`.

    .. py:attribute:: image_data

        See :py:class:`.ImageData`. Only read when there are no layers.
    """

    header: FileHeader = field(factory=FileHeader)
    layer_and_mask_information: LayerAndMaskInformation = field(
        factory=LayerAndMaskInformation
    )
    image_data: Optional[ImageData] = None

    @classmethod
    def read(cls: type[T], reader: StreamReader, *args: Any, **kwargs: Any) -> T:
        header = FileHeader.read(reader)
        _skip_section(reader, "color mode data")
        _skip_section(reader, "image resources")
        header.check_supported()

        layer_and_mask_information = LayerAndMaskInformation.read(reader)
        image_data = None
        if layer_and_mask_information.layer_info is None:
            image_data = ImageData.read(reader, header)
        return cls(header, layer_and_mask_information, image_data)

    @property
    def layer_info(self) -> Optional[LayerInfo]:
        return self.layer_and_mask_information.layer_info


def _skip_section(reader: StreamReader, name: str) -> None:
    length = reader.read_uint32()
    logger.debug("skipping %s, len=%d" % (name, length))
    reader.skip(length)
