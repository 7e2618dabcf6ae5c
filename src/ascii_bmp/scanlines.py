"""Pixel array decoding: bottom-up 24-bit scanlines to a luminance grid."""

import logging
from dataclasses import dataclass

import numpy as np

from .bmp_header import BYTES_PER_PIXEL, ImageHeader
from .errors import (
    AllocationError,
    ImageIOError,
    InvalidFormatError,
    TruncatedDataError,
)

LOG = logging.getLogger(__name__)


def pixel_to_gray(first: int, second: int, third: int) -> int:
    """Unweighted mean of the three channels, truncated toward zero."""
    return (first + second + third) // 3


@dataclass(frozen=True, eq=False)
class LuminanceGrid:
    """Row-major luminance samples, row 0 being the top of the image."""

    width: int
    height: int
    pixels: np.ndarray  # flat uint8, width * height

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidFormatError(
                f"grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.pixels.ndim != 1 or self.pixels.size != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} samples, got {self.pixels.size}"
            )

    def index(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"({row}, {col}) outside {self.width}x{self.height} grid")
        return row * self.width + col

    def at(self, row: int, col: int) -> int:
        return int(self.pixels[self.index(row, col)])

    def as_array(self) -> np.ndarray:
        """Read-only (height, width) view over the flat buffer."""
        view = self.pixels.reshape(self.height, self.width)
        view.flags.writeable = False
        return view

    @classmethod
    def from_rows(cls, rows) -> "LuminanceGrid":
        arr = np.asarray(rows, dtype=np.uint8)
        if arr.ndim != 2:
            raise ValueError("rows must form a rectangular 2-D sequence")
        h, w = arr.shape
        return cls(width=w, height=h, pixels=arr.reshape(-1).copy())


def _check_decodable(header: ImageHeader) -> None:
    if header.width <= 0 or header.height <= 0:
        raise InvalidFormatError(
            f"degenerate image size {header.width}x{header.height}"
        )
    if header.bits_per_pixel != 24:
        raise InvalidFormatError(
            f"{header.bits_per_pixel}-bit images are not supported (24-bit only)"
        )
    if header.compression != 0:
        raise InvalidFormatError(
            f"compressed BMP (method {header.compression}) is not supported"
        )


def gray_row(row_bytes: bytes, usable_bytes: int) -> np.ndarray:
    """Reduce the pixel triples in the first ``usable_bytes`` of a scanline."""
    width = usable_bytes // BYTES_PER_PIXEL
    triples = np.frombuffer(row_bytes, dtype=np.uint8, count=usable_bytes)
    sums = triples.reshape(width, BYTES_PER_PIXEL).sum(axis=1, dtype=np.uint16)
    return (sums // 3).astype(np.uint8)


def decode_scanlines(path: str, header: ImageHeader) -> LuminanceGrid:
    """Stream the pixel array of ``path`` into a :class:`LuminanceGrid`.

    BMP stores the bottom scanline first, so file row ``i`` lands on visual
    row ``height - 1 - i``. Padding bytes at the end of every row are read
    and discarded.
    """
    _check_decodable(header)
    width, height, stride = header.width, header.height, header.row_stride
    usable = header.usable_row_bytes

    try:
        pixels = np.empty(width * height, dtype=np.uint8)
    except (MemoryError, ValueError) as e:
        raise AllocationError(
            f"cannot allocate a {width}x{height} luminance grid: {e}"
        ) from e

    try:
        with open(path, "rb") as f:
            f.seek(header.pixel_offset)
            for file_row in range(height):
                row_bytes = f.read(stride)
                if len(row_bytes) < stride:
                    raise TruncatedDataError(
                        f"{path}: scanline {file_row} has {len(row_bytes)} bytes, "
                        f"expected {stride}"
                    )
                start = (height - 1 - file_row) * width
                pixels[start : start + width] = gray_row(row_bytes, usable)
    except OSError as e:
        raise ImageIOError(f"cannot read pixel data of {path}: {e.strerror or e}") from e

    LOG.debug("Decoded %dx%d luminance grid from %s", width, height, path)
    return LuminanceGrid(width=width, height=height, pixels=pixels)
