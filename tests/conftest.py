"""Pytest configuration for psd-layers tests."""

import logging
from typing import Iterator

import pytest

from tests.psd_layers.utils import make_psd, solid_layer


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> Iterator[None]:
    """Run every test with the decoder logging at debug level."""
    with caplog.at_level(logging.DEBUG, logger="psd_layers"):
        yield


@pytest.fixture
def two_layer_psd() -> bytes:
    """Opaque red 4x4 layer at (0, 0) under an opaque blue 2x2 layer at (1, 1)."""
    return make_psd(
        4,
        4,
        layers=[
            solid_layer((0, 0, 4, 4), (255, 0, 0)),
            solid_layer((1, 1, 3, 3), (0, 0, 255)),
        ],
    )
