"""
Layer module.

A :py:class:`Layer` is an immutable, positioned RGBA pixel buffer carrying
the opacity, blend mode and visibility read from its layer record.
"""

import logging
from typing import Any, Optional, TypeVar

import numpy as np
from attrs import define, evolve, field
from PIL import Image

from psd_layers.api import numpy_io, pil_io
from psd_layers.constants import BlendMode
from psd_layers.psd.layer_and_mask import ChannelPlanes, LayerRecord

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Layer")


def _check_opacity(instance: Any, attribute: Any, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError("Opacity must be in [0, 1], got %r" % value)


@define(frozen=True, eq=False, repr=False)
class Layer:
    """
    Pixel layer.

    Example::

        from psd_layers import DecodedImage

        image = DecodedImage.open('example.psd')
        for layer in image:
            print(layer.bbox, layer.blend_mode, layer.opacity)
            layer.topil().save('layer.png')

    .. py:attribute:: pixels

        Read-only `uint8` array of shape (height, width, 4) in RGBA order.

    .. py:attribute:: x

        Horizontal offset of the top-left corner.

    .. py:attribute:: y

        Vertical offset of the top-left corner.

    .. py:attribute:: opacity

        Opacity in [0, 1].

    .. py:attribute:: blend_mode

        See :py:class:`~psd_layers.constants.BlendMode`.

    .. py:attribute:: visible

        Visibility.
    """

    pixels: np.ndarray
    x: int = 0
    y: int = 0
    opacity: float = field(default=1.0, converter=float, validator=_check_opacity)
    blend_mode: BlendMode = field(default=BlendMode.NORMAL, converter=BlendMode)
    visible: bool = True

    @classmethod
    def from_planes(
        cls: type[T],
        width: int,
        height: int,
        planes: Optional[ChannelPlanes] = None,
        **kwargs: Any,
    ) -> T:
        """
        Create a layer by merging decoded channel planes.

        :param width: width of the layer bounding box.
        :param height: height of the layer bounding box.
        :param planes: See :py:class:`~psd_layers.psd.ChannelPlanes`.
        :param kwargs: other attributes of the layer.
        """
        planes = planes or ChannelPlanes()
        pixels = numpy_io.merge_planes(
            width, height, planes.red, planes.green, planes.blue, planes.alpha
        )
        return cls(pixels, **kwargs)

    @classmethod
    def from_record(cls: type[T], record: LayerRecord, planes: ChannelPlanes) -> T:
        """
        Create a layer from a layer record and its channel planes.
        """
        return cls.from_planes(
            record.width,
            record.height,
            planes,
            x=record.left,
            y=record.top,
            opacity=record.opacity / 255.0,
            blend_mode=record.blend_mode,
            visible=record.visible,
        )

    def moved(self: T, dx: int, dy: int) -> T:
        """Return a copy of the layer offset by (`dx`, `dy`)."""
        return evolve(self, x=self.x + dx, y=self.y + dy)

    @property
    def width(self) -> int:
        """Width of the pixel buffer."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Height of the pixel buffer."""
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple."""
        return self.left, self.top, self.right, self.bottom

    def is_visible(self) -> bool:
        return self.visible

    def numpy(self) -> np.ndarray:
        """
        Get the pixels as a `float32` array in [0, 1].

        :return: array of shape (height, width, 4).
        """
        return numpy_io.to_float(self.pixels)

    def topil(self) -> Image.Image:
        """
        Get the pixels as a PIL image in RGBA mode.
        """
        return pil_io.convert_array_to_pil(self.pixels)

    def __repr__(self) -> str:
        return "%s(x=%d, y=%d, size=%dx%d, blend_mode=%s, opacity=%.3g%s)" % (
            self.__class__.__name__,
            self.x,
            self.y,
            self.width,
            self.height,
            self.blend_mode.name,
            self.opacity,
            "" if self.visible else ", hidden",
        )
