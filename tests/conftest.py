"""Shared fixtures: hand-built 24-bit BMP files."""

import struct

import pytest


def bmp_bytes(
    rows,
    *,
    signature=b"BM",
    pixel_offset=54,
    bits_per_pixel=24,
    compression=0,
    padding_byte=b"\x00",
    width=None,
    height=None,
    file_size=None,
    raw_size=None,
):
    """Encode ``rows`` (top to bottom, lists of (r, g, b)) as a BMP file.

    Scanlines are written bottom-up in BGR order and padded to 4 bytes.
    """
    h = len(rows)
    w = len(rows[0]) if rows else 0
    stride = (w * 3 + 3) // 4 * 4
    pad = padding_byte * (stride - w * 3)

    pixel_data = b"".join(
        b"".join(bytes((b, g, r)) for r, g, b in row) + pad for row in reversed(rows)
    )
    gap = b"\x00" * (pixel_offset - 54)

    header = struct.pack(
        "<2sIHHIIiiHHIIiiII",
        signature,
        file_size if file_size is not None else pixel_offset + len(pixel_data),
        0,
        0,
        pixel_offset,
        40,
        width if width is not None else w,
        height if height is not None else h,
        1,
        bits_per_pixel,
        compression,
        raw_size if raw_size is not None else len(pixel_data),
        2835,
        2835,
        0,
        0,
    )
    assert len(header) == 54
    return header + gap + pixel_data


@pytest.fixture
def write_bmp(tmp_path):
    """Write a BMP built by :func:`bmp_bytes` and return its path."""

    def _write(rows, name="image.bmp", **kwargs):
        path = tmp_path / name
        path.write_bytes(bmp_bytes(rows, **kwargs))
        return str(path)

    return _write


@pytest.fixture
def primaries_2x2():
    # red green / blue white
    return [
        [(255, 0, 0), (0, 255, 0)],
        [(0, 0, 255), (255, 255, 255)],
    ]
