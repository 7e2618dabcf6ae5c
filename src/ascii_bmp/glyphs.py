"""Luminance to glyph lookup."""

from types import MappingProxyType

from .errors import ConfigurationError

# -----------------------------
# Glyph ramps (dark -> light)
# -----------------------------
GLYPH_RAMPS = MappingProxyType(
    {
        1: "# ",
        2: "#6+ ",
        3: "#&$21:- ",
        4: "##&8$62I1|:+-.  ",
    }
)

SUPPORTED_BIT_DEPTHS = tuple(sorted(GLYPH_RAMPS))


def ramp_for(bit_depth: int) -> str:
    try:
        return GLYPH_RAMPS[bit_depth]
    except KeyError:
        raise ConfigurationError(
            f"{bit_depth}-bit graphic not supported "
            f"(choose one of {', '.join(map(str, SUPPORTED_BIT_DEPTHS))})"
        ) from None


def map_to_glyph(luminance: int, bit_depth: int, invert: bool = False) -> str:
    """Pick the ramp character for a 0..255 luminance value.

    The bucket is ``luminance // (256 // len(ramp))``, clamped to the last
    ramp entry. With ``invert`` the luminance is mirrored first.
    """
    ramp = ramp_for(bit_depth)
    if not 0 <= luminance <= 255:
        raise ValueError(f"luminance must be 0..255, got {luminance}")
    if invert:
        luminance = 255 - luminance
    bucket = min(luminance // (256 // len(ramp)), len(ramp) - 1)
    return ramp[bucket]
