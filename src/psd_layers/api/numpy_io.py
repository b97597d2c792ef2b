import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

#: Pixel used for layers with an empty bounding box.
EMPTY_PIXEL = (255, 255, 255, 0)


def merge_planes(
    width: int,
    height: int,
    red: Optional[bytes] = None,
    green: Optional[bytes] = None,
    blue: Optional[bytes] = None,
    alpha: Optional[bytes] = None,
) -> np.ndarray:
    """
    Merge channel planes into a read-only RGBA array.

    Missing color planes are filled with 0 and a missing alpha plane with
    255. A layer with zero width or height gets a single transparent pixel.

    :return: `uint8` array of shape (height, width, 4).
    """
    if width == 0 or height == 0:
        array = np.array([[EMPTY_PIXEL]], dtype=np.uint8)
    else:
        array = np.empty((height, width, 4), dtype=np.uint8)
        for index, (plane, fill) in enumerate(
            ((red, 0), (green, 0), (blue, 0), (alpha, 255))
        ):
            if plane is None:
                array[:, :, index] = fill
            else:
                array[:, :, index] = _parse_plane(plane, width, height)
    array.flags.writeable = False
    return array


def _parse_plane(plane: bytes, width: int, height: int) -> np.ndarray:
    return np.frombuffer(plane, dtype=np.uint8, count=width * height).reshape(
        (height, width)
    )


def to_float(array: np.ndarray) -> np.ndarray:
    """Convert `uint8` samples to `float32` in [0, 1]."""
    return array.astype(np.float32) / 255.0


def to_uint8(array: np.ndarray) -> np.ndarray:
    """Convert `float32` samples in [0, 1] to `uint8`."""
    return np.rint(np.clip(array, 0.0, 1.0) * 255.0).astype(np.uint8)
