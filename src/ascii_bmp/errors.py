"""Exceptions raised while decoding and rendering BMP images."""


class BmpAsciiError(Exception):
    """Base class for every failure the pipeline reports."""

    exit_code = 1
    operation = "ascii-bmp"


class InvalidFormatError(BmpAsciiError, ValueError):
    """Signature mismatch, degenerate dimensions or an unsupported BMP variant."""

    exit_code = 3
    operation = "parse"


class ImageIOError(BmpAsciiError, OSError):
    """The source could not be read or the output could not be written."""

    exit_code = 4
    operation = "io"


class TruncatedDataError(BmpAsciiError):
    """Fewer bytes were available than the header promised."""

    exit_code = 5
    operation = "decode"


class AllocationError(BmpAsciiError, MemoryError):
    exit_code = 6
    operation = "allocate"


class ConfigurationError(BmpAsciiError, ValueError):
    exit_code = 7
    operation = "configure"
