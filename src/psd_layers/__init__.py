"""
psd-layers: Python package for decoding the layers of Adobe Photoshop PSD files.

This package decodes 8-bit RGB PSD documents into a stack of positioned RGBA
layers and flattens the stack into a single image.

Basic usage::

    from psd_layers import DecodedImage

    # Open and decode a PSD file
    image = DecodedImage.open('example.psd')

    # Iterate through layers, bottom first
    for layer in image:
        print(layer.bbox, layer.blend_mode)

    # Export to PNG
    image.composite().save('output.png')

Architecture:

- :py:mod:`psd_layers.psd`: Low-level binary structure parsing
- :py:mod:`psd_layers.api`: High-level user-facing API (primary interface)
- :py:mod:`psd_layers.composite`: Layer painting and blending
- :py:mod:`psd_layers.compression`: Image compression codecs (RLE)

Advanced users can access low-level structures via the ``_record`` attribute.
"""

from psd_layers.api.layers import Layer
from psd_layers.api.psd_image import DecodedImage
from psd_layers.exceptions import FormatError, FormatErrorKind
from psd_layers.version import __version__

__all__ = ["DecodedImage", "Layer", "FormatError", "FormatErrorKind", "__version__"]
