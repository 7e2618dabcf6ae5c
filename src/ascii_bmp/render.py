"""Tile averaging and output sinks (console text or an HTML document)."""

import enum
import html
import logging
import sys
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO

import numpy as np

from .errors import ConfigurationError, ImageIOError
from .glyphs import SUPPORTED_BIT_DEPTHS, map_to_glyph
from .scanlines import LuminanceGrid

LOG = logging.getLogger(__name__)

DEFAULT_SIZE_LEVEL = 6
DEFAULT_BIT_DEPTH = 4
MIN_SIZE_LEVEL, MAX_SIZE_LEVEL = 1, 10

# Html file related
HTML_F_FAMILY = "font-family: Courier, 'Courier New', monospace;"
HTML_F_SIZE = "font-size: xx-small;"
HTML_F_WEIGHT = "font-weight: bold;"
HTML_W_SPACE = "white-space: pre;"


# -----------------------------
# Configuration
# -----------------------------
class OutputMode(enum.Enum):
    PLAIN = "plain"
    HTML = "html"


def size_level_to_tile_width(level: int) -> int:
    """Level 10 is one pixel per glyph; every level below adds two pixels."""
    if not MIN_SIZE_LEVEL <= level <= MAX_SIZE_LEVEL:
        raise ConfigurationError(
            f"size level must be {MIN_SIZE_LEVEL}..{MAX_SIZE_LEVEL}, got {level}"
        )
    if level == MAX_SIZE_LEVEL:
        return 1
    return (MAX_SIZE_LEVEL - level) * 2


@dataclass(frozen=True)
class RenderConfig:
    tile_width: int = size_level_to_tile_width(DEFAULT_SIZE_LEVEL)
    invert: bool = False
    bit_depth: int = DEFAULT_BIT_DEPTH
    output_mode: OutputMode = OutputMode.PLAIN

    def __post_init__(self):
        if self.tile_width < 1:
            raise ConfigurationError(f"tile width must be >= 1, got {self.tile_width}")
        if self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ConfigurationError(
                f"{self.bit_depth}-bit graphic not supported "
                f"(choose one of {', '.join(map(str, SUPPORTED_BIT_DEPTHS))})"
            )

    @property
    def tile_height(self) -> int:
        # Glyphs are roughly twice as tall as they are wide
        return self.tile_width * 2

    @classmethod
    def from_levels(
        cls,
        size_level: Optional[int] = None,
        bit_depth: Optional[int] = None,
        invert: bool = False,
        html_mode: bool = False,
    ) -> "RenderConfig":
        """Build a config from user levels, falling back to the defaults.

        Out-of-range values are replaced (size -> 6, bit depth -> 4) and a
        warning is logged instead of failing.
        """
        if size_level is None:
            size_level = DEFAULT_SIZE_LEVEL
        elif not MIN_SIZE_LEVEL <= size_level <= MAX_SIZE_LEVEL:
            LOG.warning(
                "size must be %d..%d (got %d); using %d",
                MIN_SIZE_LEVEL,
                MAX_SIZE_LEVEL,
                size_level,
                DEFAULT_SIZE_LEVEL,
            )
            size_level = DEFAULT_SIZE_LEVEL

        if bit_depth is None:
            bit_depth = DEFAULT_BIT_DEPTH
        elif bit_depth not in SUPPORTED_BIT_DEPTHS:
            LOG.warning(
                "bit graphic must be one of %s (got %d); using %d",
                ", ".join(map(str, SUPPORTED_BIT_DEPTHS)),
                bit_depth,
                DEFAULT_BIT_DEPTH,
            )
            bit_depth = DEFAULT_BIT_DEPTH

        return cls(
            tile_width=size_level_to_tile_width(size_level),
            invert=invert,
            bit_depth=bit_depth,
            output_mode=OutputMode.HTML if html_mode else OutputMode.PLAIN,
        )


# -----------------------------
# Sinks
# -----------------------------
class Sink:
    """Receives rendered lines; ``finalize`` is called once after the last."""

    def write_line(self, line: str) -> None:
        raise NotImplementedError

    def finalize(self) -> None:
        raise NotImplementedError


class ConsoleSink(Sink):
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write_line(self, line: str) -> None:
        self.stream.write(line + "\n")

    def finalize(self) -> None:
        self.stream.flush()


class TextFileSink(Sink):
    """Plain text written to ``path`` in one pass on finalize."""

    def __init__(self, path: str):
        self.path = path
        self.lines: List[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    def document(self) -> str:
        return "".join(ln + "\n" for ln in self.lines)

    def finalize(self) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as out:
                out.write(self.document())
        except OSError as e:
            raise ImageIOError(f"cannot write {self.path}: {e.strerror or e}") from e
        LOG.debug("Wrote %d lines to %s", len(self.lines), self.path)


class HtmlSink(TextFileSink):
    """Lines wrapped in a monospace ``<div>``.

    The whole document is produced at finalize time, so a render that fails
    midway never leaves a half-written envelope on disk.
    """

    def __init__(self, path: str, title: Optional[str] = None):
        super().__init__(path)
        self.title = title if title is not None else "ASCII Image"

    def header(self) -> str:
        return (
            "<!DOCTYPE html>\n<html>\n<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{html.escape(self.title)}</title>\n"
            "</head>\n<body>\n"
            '<div style="'
            + HTML_W_SPACE
            + HTML_F_FAMILY
            + HTML_F_SIZE
            + HTML_F_WEIGHT
            + '">\n'
        )

    @staticmethod
    def footer() -> str:
        return "</div>\n</body>\n</html>\n"

    def document(self) -> str:
        body = "".join(html.escape(ln, quote=False) + "\n" for ln in self.lines)
        return self.header() + body + self.footer()


def html_output_path(input_path: str) -> str:
    return input_path + ".html"


def make_sink(
    config: RenderConfig, input_path: str, output_path: Optional[str] = None
) -> Sink:
    if config.output_mode is OutputMode.HTML:
        return HtmlSink(output_path or html_output_path(input_path), title=input_path)
    if output_path:
        return TextFileSink(output_path)
    return ConsoleSink()


# -----------------------------
# Rendering
# -----------------------------
def tile_means(grid: LuminanceGrid, tile_width: int, tile_height: int) -> np.ndarray:
    """Mean luminance of every whole tile, shape (bands, columns).

    Trailing rows and columns that do not fill a whole tile are dropped.
    """
    bands = grid.height // tile_height
    cols = grid.width // tile_width
    arr = grid.as_array()[: bands * tile_height, : cols * tile_width]
    tiles = arr.reshape(bands, tile_height, cols, tile_width)
    sums = tiles.sum(axis=(1, 3), dtype=np.uint64)
    return sums // (tile_width * tile_height)


def render_lines(grid: LuminanceGrid, config: RenderConfig) -> Iterator[str]:
    means = tile_means(grid, config.tile_width, config.tile_height)
    for band in means:
        yield "".join(
            map_to_glyph(int(v), config.bit_depth, config.invert) for v in band
        )


def render(grid: LuminanceGrid, config: RenderConfig, sink: Sink) -> int:
    """Emit one line per band of tiles to ``sink`` and finalize it.

    Returns the number of lines written.
    """
    LOG.debug(
        "Rendering %dx%d grid with %dx%d tiles, %d-bit, invert=%s",
        grid.width,
        grid.height,
        config.tile_width,
        config.tile_height,
        config.bit_depth,
        config.invert,
    )
    count = 0
    for line in render_lines(grid, config):
        sink.write_line(line)
        count += 1
    sink.finalize()
    LOG.debug("Rendered %d lines", count)
    return count
