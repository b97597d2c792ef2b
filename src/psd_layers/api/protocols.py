"""
Protocol definitions for the compositing service.

The layer model only selects a blend mode and an opacity; the per-pixel
arithmetic is provided by an object implementing
:py:class:`CompositingService`. The default implementation is
:py:class:`~psd_layers.composite.BlendCompositor`.
"""

from typing import Callable, Protocol

import numpy as np

from psd_layers.constants import BlendMode

#: Compositing operation. Receives backdrop and source RGBA `float32` arrays
#: in [0, 1] of equal shape and returns the resulting RGBA array.
CompositeOperation = Callable[[np.ndarray, np.ndarray], np.ndarray]


class CompositingService(Protocol):
    """
    Protocol defining the compositing service interface.
    """

    def get_composite(
        self, blend_mode: BlendMode, opacity: float
    ) -> CompositeOperation:
        """Return the operation drawing a source with `blend_mode` and `opacity`."""
        ...
