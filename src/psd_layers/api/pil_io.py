"""
PIL IO module.
"""

import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def convert_array_to_pil(array: np.ndarray) -> Image.Image:
    """Convert an RGBA `uint8` array of shape (height, width, 4) to PIL."""
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError("Expected an RGBA array, got shape %r" % (array.shape,))
    return Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
