"""
Low-level API that translates binary data to Python structure.

All the data structure in this subpackage inherits from
:py:class:`~psd_layers.psd.base.BaseElement` and is read through a
:py:class:`~psd_layers.psd.stream.StreamReader`.
"""

from .document import PSD as PSD
from .header import FileHeader as FileHeader
from .layer_and_mask import (
    ChannelPlanes as ChannelPlanes,
    LayerAndMaskInformation as LayerAndMaskInformation,
    LayerInfo as LayerInfo,
    LayerRecord as LayerRecord,
)
from .stream import StreamReader as StreamReader

__all__ = [
    "PSD",
    "FileHeader",
    "LayerAndMaskInformation",
    "LayerInfo",
    "LayerRecord",
    "ChannelPlanes",
    "StreamReader",
]
