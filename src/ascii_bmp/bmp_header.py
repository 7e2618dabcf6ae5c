"""Fixed 54-byte BMP header (BITMAPFILEHEADER + BITMAPINFOHEADER) parsing."""

import logging
from dataclasses import dataclass

from .errors import ImageIOError, InvalidFormatError, TruncatedDataError

LOG = logging.getLogger(__name__)

BMP_SIGNATURE = b"BM"
BMP_HEADER_SIZE = 54
BYTES_PER_PIXEL = 3

# Field offsets inside the header
BMP_H_FILE_SIZE = 0x02
BMP_H_OFFSET = 0x0A
BMP_H_WIDTH = 0x12
BMP_H_HEIGHT = 0x16
BMP_H_BPP = 0x1C
BMP_H_COMPRESSION = 0x1E
BMP_H_RAW_SIZE = 0x22


# -----------------------------
# Byte decoding
# -----------------------------
def _field(buffer: bytes, offset: int, num_bytes: int) -> bytes:
    if not 1 <= num_bytes <= 4:
        raise ValueError(f"num_bytes must be 1..4, got {num_bytes}")
    if offset < 0 or offset + num_bytes > len(buffer):
        raise ValueError(
            f"cannot read {num_bytes} bytes at offset {offset} "
            f"from a {len(buffer)}-byte buffer"
        )
    return bytes(buffer[offset : offset + num_bytes])


def read_uint(buffer: bytes, offset: int, num_bytes: int) -> int:
    """Little-endian unsigned integer of ``num_bytes`` (1..4) at ``offset``."""
    return int.from_bytes(_field(buffer, offset, num_bytes), "little")


def read_int(buffer: bytes, offset: int, num_bytes: int = 4) -> int:
    """Signed variant of :func:`read_uint`, used for width and height."""
    return int.from_bytes(_field(buffer, offset, num_bytes), "little", signed=True)


# -----------------------------
# Row geometry
# -----------------------------
def row_stride_for(width: int) -> int:
    # Rows are zero padded up to a multiple of 4 bytes
    return (width * BYTES_PER_PIXEL + 3) // 4 * 4


def row_padding_for(width: int) -> int:
    return row_stride_for(width) - width * BYTES_PER_PIXEL


@dataclass(frozen=True)
class ImageHeader:
    file_size: int
    pixel_offset: int
    width: int
    height: int
    raw_size: int
    row_padding: int
    row_stride: int
    bits_per_pixel: int = 24
    compression: int = 0

    @property
    def usable_row_bytes(self) -> int:
        return self.row_stride - self.row_padding


def parse_header(header: bytes) -> ImageHeader:
    """Validate the signature and extract the header fields.

    Raises InvalidFormatError when the buffer does not start with ``BM`` and
    TruncatedDataError when fewer than 54 bytes are supplied. Width and height
    are returned as stored; non-positive values are left for the decoder to
    reject.
    """
    if len(header) < BMP_HEADER_SIZE:
        raise TruncatedDataError(
            f"header is {len(header)} bytes, expected {BMP_HEADER_SIZE}"
        )
    if bytes(header[0:2]) != BMP_SIGNATURE:
        raise InvalidFormatError(
            f"bad signature {bytes(header[0:2])!r}, expected {BMP_SIGNATURE!r}"
        )

    width = read_int(header, BMP_H_WIDTH)
    stride = row_stride_for(max(width, 0))

    return ImageHeader(
        file_size=read_uint(header, BMP_H_FILE_SIZE, 4),
        pixel_offset=read_uint(header, BMP_H_OFFSET, 4),
        width=width,
        height=read_int(header, BMP_H_HEIGHT),
        raw_size=read_uint(header, BMP_H_RAW_SIZE, 4),
        row_padding=stride - max(width, 0) * BYTES_PER_PIXEL,
        row_stride=stride,
        bits_per_pixel=read_uint(header, BMP_H_BPP, 2),
        compression=read_uint(header, BMP_H_COMPRESSION, 4),
    )


def read_header(path: str) -> ImageHeader:
    """Read the first 54 bytes of ``path`` and parse them."""
    try:
        with open(path, "rb") as f:
            raw = f.read(BMP_HEADER_SIZE)
    except OSError as e:
        raise ImageIOError(f"cannot read header of {path}: {e.strerror or e}") from e

    try:
        header = parse_header(raw)
    except InvalidFormatError as e:
        raise InvalidFormatError(f"{path} is not a BMP file ({e})") from e
    except TruncatedDataError as e:
        raise TruncatedDataError(f"{path}: {e}") from e

    LOG.debug(
        "Header %s: %dx%d offset=%d stride=%d padding=%d bpp=%d",
        path,
        header.width,
        header.height,
        header.pixel_offset,
        header.row_stride,
        header.row_padding,
        header.bits_per_pixel,
    )
    return header


def format_header_info(header: ImageHeader) -> str:
    """Human readable summary printed by ``--info``."""
    return (
        "-----------------------------------\n"
        "Image info:\n"
        f" -      file size: {header.file_size} B\n"
        f" -    image width: {header.width} pixels\n"
        f" -   image height: {header.height} pixels\n"
        f" -   padded bytes: {header.row_padding} B\n"
        f" -   image header: {header.pixel_offset} B\n"
        f" -  raw data size: {header.raw_size} B\n"
        f" - bits per pixel: {header.bits_per_pixel}\n"
        "-----------------------------------"
    )
