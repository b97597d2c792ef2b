"""
Decoded image module.

This module provides :py:class:`DecodedImage`, the primary entry point of
psd-layers. It decodes a complete PSD document into a stack of
:py:class:`~psd_layers.api.layers.Layer` objects and flattens them on
request.

Example usage::

    from psd_layers import DecodedImage

    image = DecodedImage.open('document.psd')
    print(f"Size: {image.width}x{image.height}, {len(image)} layers")

    for layer in image:
        print(layer)

    image.composite().save('output.png')
"""

import io
import logging
import os
from typing import BinaryIO, Iterator, Optional, TypeVar, Union

import numpy as np
from PIL import Image

from psd_layers.api import pil_io
from psd_layers.api.layers import Layer
from psd_layers.api.protocols import CompositingService
from psd_layers.composite import flatten as flatten_image
from psd_layers.constants import BlendMode, ColorMode
from psd_layers.psd.document import PSD
from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DecodedImage")


class DecodedImage:
    """
    Decoded 8-bit RGB PSD document.

    The low-level data structure is accessible at
    :py:attr:`DecodedImage._record`.

    Layers are ordered bottom to top: ``image[0]`` is painted first and
    ``image[-1]`` last.

    Example::

        from psd_layers import DecodedImage

        image = DecodedImage.open('example.psd')
        composite = image.composite()

        for layer in image:
            layer_image = layer.topil()
    """

    def __init__(self, data: PSD):
        if not isinstance(data, PSD):
            raise TypeError(f"Expected PSD instance, got {type(data).__name__}")
        self._record = data
        self._layers = self._init()

    @classmethod
    def open(cls: type[T], fp: Union[BinaryIO, str, bytes, os.PathLike]) -> T:
        """
        Open and decode a PSD document.

        A file opened from a path is closed before returning, on success and
        on failure alike. A file-like object is left open for the caller.

        :param fp: filename or file-like object.
        :return: A :py:class:`~psd_layers.api.psd_image.DecodedImage` object.
        :raise FormatError: when the document is invalid or unsupported.
        """
        if isinstance(fp, (str, bytes, os.PathLike)):
            with open(fp, "rb") as f:
                self = cls(PSD.read(StreamReader(f)))
        else:
            self = cls(PSD.read(StreamReader(fp)))
        return self

    @classmethod
    def frombytes(cls: type[T], data: bytes) -> T:
        """Decode a PSD document held in memory."""
        with io.BytesIO(data) as f:
            return cls.open(f)

    def _init(self) -> tuple[Layer, ...]:
        layer_info = self._record.layer_info
        if layer_info is None:
            image_data = self._record.image_data
            assert image_data is not None
            logger.debug("no layers, using the merged image data")
            return (
                Layer.from_planes(
                    self.width,
                    self.height,
                    image_data.planes,
                    x=0,
                    y=0,
                    opacity=1.0,
                    blend_mode=BlendMode.NORMAL,
                    visible=True,
                ),
            )

        layers = [
            Layer.from_record(record, planes)
            for record, planes in zip(
                layer_info.layer_records, layer_info.channel_image_data
            )
        ]
        # Offsets are relative to the original position of the first layer.
        dx, dy = -layers[0].x, -layers[0].y
        return tuple(layer.moved(dx, dy) for layer in layers)

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Layers, bottom first."""
        return self._layers

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    @property
    def color_mode(self) -> ColorMode:
        """
        Document color mode, see :py:class:`~psd_layers.constants.ColorMode`.
        """
        return self._record.header.color_mode

    @property
    def channels(self) -> int:
        """Number of color channels, including alpha."""
        return self._record.header.channels

    @property
    def width(self) -> int:
        """Document width."""
        return self._record.header.width

    @property
    def height(self) -> int:
        """Document height."""
        return self._record.header.height

    @property
    def depth(self) -> int:
        """Pixel depth bits."""
        return self._record.header.depth

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @property
    def viewbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple of the canvas."""
        return 0, 0, self.width, self.height

    def flatten(self, compositor: Optional[CompositingService] = None) -> np.ndarray:
        """
        Paint the visible layers bottom to top.

        :param compositor: See :py:class:`~psd_layers.api.protocols.CompositingService`.
            Defaults to :py:class:`~psd_layers.composite.BlendCompositor`.
        :return: RGBA `uint8` array of shape (height, width, 4).
        """
        return flatten_image(self, compositor)

    def composite(self, compositor: Optional[CompositingService] = None) -> Image.Image:
        """
        Flatten the document to a PIL image in RGBA mode.

        :param compositor: See :py:meth:`flatten`.
        """
        return pil_io.convert_array_to_pil(self.flatten(compositor))

    def __repr__(self) -> str:
        return "%s(mode=%s size=%dx%d depth=%d channels=%d layers=%d)" % (
            self.__class__.__name__,
            self.color_mode,
            self.width,
            self.height,
            self.depth,
            self.channels,
            len(self),
        )
