"""
Composite module for layer painting and blending.

Key modules:

- :py:mod:`psd_layers.composite.composite`: ``paint``, ``flatten`` and the
  default :py:class:`~psd_layers.composite.composite.BlendCompositor`
- :py:mod:`psd_layers.composite.blend`: Blend mode implementations

Example usage::

    from psd_layers import DecodedImage
    from psd_layers.composite import BlendCompositor, flatten

    image = DecodedImage.open('document.psd')
    array = flatten(image, BlendCompositor())
"""

from psd_layers.api.protocols import CompositingService
from psd_layers.composite.composite import BlendCompositor, flatten, paint

__all__ = ["BlendCompositor", "CompositingService", "flatten", "paint"]
