"""
High-level API for decoded PSD documents.

This subpackage wraps the low-level :py:mod:`psd_layers.psd` structures with
convenient objects.

Key modules:

- :py:mod:`psd_layers.api.psd_image`: Main DecodedImage class
- :py:mod:`psd_layers.api.layers`: Positioned RGBA layer
- :py:mod:`psd_layers.api.protocols`: Compositing service interface
- :py:mod:`psd_layers.api.numpy_io`: Plane merge and numpy conversion
- :py:mod:`psd_layers.api.pil_io`: PIL conversion
"""
