import logging
from typing import TYPE_CHECKING, Optional

import numpy as np

from psd_layers.api import numpy_io
from psd_layers.api.layers import Layer
from psd_layers.api.protocols import CompositeOperation, CompositingService
from psd_layers.composite import utils
from psd_layers.composite.blend import BLEND_FUNC, normal
from psd_layers.constants import BlendMode

if TYPE_CHECKING:
    from psd_layers.api.psd_image import DecodedImage

logger = logging.getLogger(__name__)


class BlendCompositor:
    """
    Default compositing service.

    The operation draws the source over the backdrop following the separable
    and non-separable blending of the PDF reference::

        αs = source alpha * opacity
        αr = αs + αb * (1 - αs)
        Cr = ((1 - αs) * αb * Cb + αs * ((1 - αb) * Cs + αb * B(Cb, Cs))) / αr

    Blend modes without an implementation, such as
    :py:attr:`~psd_layers.constants.BlendMode.UNKNOWN`, are drawn as normal.
    """

    def get_composite(
        self, blend_mode: BlendMode, opacity: float
    ) -> CompositeOperation:
        blend_fn = BLEND_FUNC.get(blend_mode, normal)
        if blend_mode not in BLEND_FUNC:
            logger.debug("Blend mode %s is drawn as normal", blend_mode)

        def _apply_source(backdrop: np.ndarray, source: np.ndarray) -> np.ndarray:
            color_b, alpha_b = backdrop[:, :, :3], backdrop[:, :, 3:4]
            color_s, alpha_s = source[:, :, :3], source[:, :, 3:4] * opacity

            alpha_r = utils.union(alpha_b, alpha_s)
            color_t = (1.0 - alpha_s) * alpha_b * color_b + alpha_s * (
                (1.0 - alpha_b) * color_s + alpha_b * blend_fn(color_b, color_s)
            )
            color_r = utils.clip(utils.divide(color_t, alpha_r))
            return np.concatenate((color_r, alpha_r), axis=2)

        return _apply_source


def paint(
    layer: Layer, target: np.ndarray, compositor: CompositingService
) -> None:
    """
    Draw `layer` at its offset onto `target`, clipped to the target.

    :param layer: See :py:class:`~psd_layers.api.layers.Layer`.
    :param target: RGBA `uint8` array of shape (height, width, 4), modified in
        place.
    :param compositor: See
        :py:class:`~psd_layers.api.protocols.CompositingService`.
    """
    if layer.opacity == 0:
        return

    height, width = target.shape[:2]
    left, top, right, bottom = utils.intersect(layer.bbox, (0, 0, width, height))
    if left == right or top == bottom:
        logger.debug("%r is outside of the target" % layer)
        return

    operation = compositor.get_composite(layer.blend_mode, layer.opacity)
    source = layer.pixels[
        top - layer.y : bottom - layer.y, left - layer.x : right - layer.x
    ]
    backdrop = target[top:bottom, left:right]
    result = operation(numpy_io.to_float(backdrop), numpy_io.to_float(source))
    target[top:bottom, left:right] = numpy_io.to_uint8(result)


def flatten(
    image: "DecodedImage", compositor: Optional[CompositingService] = None
) -> np.ndarray:
    """
    Paint the visible layers of `image` bottom to top.

    The result is sized to the first layer, or to the canvas when there are
    no layers.

    :param image: See :py:class:`~psd_layers.api.psd_image.DecodedImage`.
    :param compositor: Defaults to :py:class:`BlendCompositor`.
    :return: RGBA `uint8` array of shape (height, width, 4).
    """
    compositor = compositor or BlendCompositor()
    if len(image):
        width, height = image[0].size
    else:
        width, height = image.size
    target = np.zeros((height, width, 4), dtype=np.uint8)

    for layer in image:
        if not layer.is_visible():
            continue
        paint(layer, target, compositor)
    return target

