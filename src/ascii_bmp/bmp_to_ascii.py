#!/usr/bin/env python3
"""Print a 24-bit .bmp image as ASCII characters (console or .html file)."""

import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence

from .bmp_header import format_header_info, read_header
from .errors import BmpAsciiError, ImageIOError
from .render import (
    DEFAULT_BIT_DEPTH,
    DEFAULT_SIZE_LEVEL,
    OutputMode,
    RenderConfig,
    make_sink,
    render,
)
from .scanlines import decode_scanlines

LOG = logging.getLogger("ascii_bmp")


def setup_logging(debug: bool, log_path: str | None = None) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    LOG.setLevel(logging.DEBUG if log_path else level)

    fmt = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(fmt)
    handlers.append(sh)

    for old in LOG.handlers:
        old.close()
    LOG.handlers[:] = handlers
    LOG.propagate = False  # prevent double logging via root logger

    if log_path:
        try:
            fh = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as e:
            raise ImageIOError(
                f"cannot open log file {log_path}: {e.strerror or e}"
            ) from e
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        LOG.addHandler(fh)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ascii-bmp",
        description="Convert a 24-bit .bmp image to an ASCII image. "
        "The image is printed on standard output unless --html is given.",
    )
    ap.add_argument("input", help="Input .bmp image path")
    ap.add_argument(
        "-b",
        "--bit-graphic",
        type=int,
        default=DEFAULT_BIT_DEPTH,
        help="Bit colour option: 1 (two glyphs) .. 4 (sixteen glyphs)",
    )
    ap.add_argument(
        "-s",
        "--size",
        type=int,
        default=DEFAULT_SIZE_LEVEL,
        help="Size option [1-10]; 10 maps one pixel to one character",
    )
    ap.add_argument(
        "-i", "--invert", action="store_true", help="Invert ASCII colours"
    )
    ap.add_argument(
        "--html",
        action="store_true",
        help="Write the image to <input>.html instead of the console",
    )
    ap.add_argument(
        "--info", action="store_true", help="Print image header info and exit"
    )
    ap.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: stdout, or <input>.html with --html)",
    )
    ap.add_argument("--debug", action="store_true", help="Verbose logging")
    ap.add_argument("--log", default=None, help="Also log to this file")
    return ap


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run(args: argparse.Namespace) -> int:
    # Resolve the configuration before touching the file
    config = RenderConfig.from_levels(
        size_level=args.size,
        bit_depth=args.bit_graphic,
        invert=args.invert,
        html_mode=args.html,
    )
    LOG.debug("Config: %s", config)

    header = read_header(args.input)
    if args.info:
        print(format_header_info(header))
        return 0

    grid = decode_scanlines(args.input, header)
    sink = make_sink(config, args.input, args.output)
    render(grid, config, sink)

    if config.output_mode is OutputMode.HTML:
        print(f"ASCII image written to {sink.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    t0 = time.perf_counter()
    try:
        setup_logging(args.debug, args.log)
        LOG.debug("Starting: input=%s", args.input)
        code = run(args)
    except BmpAsciiError as e:
        LOG.error("%s failed: %s", e.operation, e)
        return e.exit_code

    LOG.debug("Done in %.3fs", time.perf_counter() - t0)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
