"""
Base data structures intended for inheritance.

All the data objects in the :py:mod:`psd_layers.psd` subpackage inherit from
:py:class:`BaseElement` and get attrs_ decoration to have data fields.

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import io
import logging
from typing import Any, TypeVar

from psd_layers.psd.stream import StreamReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base element of the PSD structures.

    .. py:classmethod:: read(cls, reader)

        Read the element from a :py:class:`~psd_layers.psd.stream.StreamReader`.

    .. py:classmethod:: frombytes(self, data, *args, **kwargs)

        Read the element from bytes.
    """

    @classmethod
    def read(cls: type[T], reader: StreamReader, *args: Any, **kwargs: Any) -> T:
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: bytes, *args: Any, **kwargs: Any) -> T:
        with io.BytesIO(data) as f:
            return cls.read(StreamReader(f), *args, **kwargs)
