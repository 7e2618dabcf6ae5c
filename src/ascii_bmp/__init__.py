"""ASCII BMP - Print 24-bit BMP images as ASCII art."""

__version__ = "0.1.0"

"""
The command line entry point is wrapped lazily so that running
``python -m ascii_bmp.bmp_to_ascii`` does not find the module already
imported in ``sys.modules``.
"""

from .errors import (
    AllocationError,
    BmpAsciiError,
    ConfigurationError,
    ImageIOError,
    InvalidFormatError,
    TruncatedDataError,
)


def main(*args, **kwargs):
    from .bmp_to_ascii import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "AllocationError",
    "BmpAsciiError",
    "ConfigurationError",
    "ImageIOError",
    "InvalidFormatError",
    "TruncatedDataError",
    "main",
]
