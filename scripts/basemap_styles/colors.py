"""
Colour math for density choropleths and the bathymetry ramp.

Hex <-> RGB <-> HSL conversions work in floating point throughout and only
quantize to 8-bit hex at the end, so chained adjustments do not band.
Rounding is half-up to match the renderer's own colour parsing.

HSL values use the CSS ranges: hue in degrees [0, 360), saturation and
lightness in percent [0, 100].
"""

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .theme import DensityColorRange, DensityColors


# Darkened outline = fill channels scaled by this factor
DARKEN_FACTOR = 0.75

# Bathymetry ramp checkpoints, shallow to deep (metres)
BATHYMETRY_DEPTHS = np.array([0, 200, 1000, 2000, 4000, 6000, 10000])

# HSL lightness / saturation multipliers at each checkpoint
BATHYMETRY_LIGHTNESS = np.array([1.80, 1.50, 1.20, 1.00, 0.75, 0.50, 0.30])
BATHYMETRY_SATURATION = np.array([1.30, 1.35, 1.40, 1.45, 1.50, 1.55, 1.60])

# Clamp ranges for derived ramp colours (percent)
LIGHTNESS_RANGE = (5.0, 100.0)
SATURATION_RANGE = (0.0, 100.0)


def _round_half_up(values: NDArray[np.float64]) -> NDArray[np.int64]:
    return np.floor(values + 0.5).astype(np.int64)


def hex_to_rgb(hex_color: str) -> NDArray[np.float64]:
    """Parse "#rrggbb" or "#rgb" into an (r, g, b) array of 0-255 floats."""
    digits = hex_color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"Not a hex colour: {hex_color!r}")
    try:
        channels = [int(digits[i:i + 2], 16) for i in (0, 2, 4)]
    except ValueError:
        raise ValueError(f"Not a hex colour: {hex_color!r}") from None
    return np.array(channels, dtype=np.float64)


def rgb_to_hex(rgb: NDArray[np.float64]) -> str:
    """Quantize 0-255 floats to a lowercase "#rrggbb" string."""
    channels = np.clip(_round_half_up(np.asarray(rgb, dtype=np.float64)), 0, 255)
    return "#" + "".join(f"{int(c):02x}" for c in channels)


def darken(hex_color: str, factor: float = DARKEN_FACTOR) -> str:
    """Scale each RGB channel by `factor` (0.75 darkens by a quarter).

    >>> darken("#ecda9a")
    '#b1a474'
    """
    return rgb_to_hex(hex_to_rgb(hex_color) * factor)


def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Convert a hex colour to (hue degrees, saturation %, lightness %)."""
    r, g, b = hex_to_rgb(hex_color) / 255.0
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    hue = saturation = 0.0

    if high != low:
        d = high - low
        saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            hue = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / d + 2) / 6
        else:
            hue = ((r - g) / d + 4) / 6

    return float(hue * 360), float(saturation * 100), float(lightness * 100)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert (hue degrees, saturation %, lightness %) to "#rrggbb"."""
    h = hue / 360
    s = saturation / 100
    l = lightness / 100

    if s == 0:
        rgb = np.array([l, l, l])
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        rgb = np.array([
            _hue_to_channel(p, q, h + 1 / 3),
            _hue_to_channel(p, q, h),
            _hue_to_channel(p, q, h - 1 / 3),
        ])
    return rgb_to_hex(rgb * 255)


def bathymetry_ramp(base_color: str) -> list[str]:
    """Seven depth colours (shallow to deep) derived from one water colour.

    Keeps the hue, scales lightness down and saturation up with depth.
    """
    hue, saturation, lightness = hex_to_hsl(base_color)
    lightnesses = np.clip(lightness * BATHYMETRY_LIGHTNESS, *LIGHTNESS_RANGE)
    saturations = np.clip(saturation * BATHYMETRY_SATURATION, *SATURATION_RANGE)
    return [
        hsl_to_hex(hue, float(s), float(l))
        for s, l in zip(saturations, lightnesses)
    ]


def sort_density_ranges(ranges: Sequence[DensityColorRange]) -> list[DensityColorRange]:
    """Ranges in ascending threshold order; the first of equal thresholds wins."""
    ordered = sorted(ranges, key=lambda r: r.threshold)
    unique: list[DensityColorRange] = []
    for color_range in ordered:
        if unique and color_range.threshold == unique[-1].threshold:
            continue
        unique.append(color_range)
    return unique


def density_outline_color(fill_color: str, outline_color: Optional[str] = None) -> str:
    """Explicit outline colour, or the fill darkened by a quarter."""
    return outline_color or darken(fill_color)


def density_stops(density_colors: DensityColors, outline: bool = False) -> tuple[str, list[tuple[float, str]]]:
    """(colour below the first threshold, [(threshold, colour), ...]) for a step."""
    ranges = sort_density_ranges(density_colors.ranges)
    if outline:
        default = density_outline_color(
            density_colors.default_fill_color, density_colors.default_outline_color
        )
        pairs = [(r.threshold, density_outline_color(r.fill_color, r.outline_color)) for r in ranges]
    else:
        default = density_colors.default_fill_color
        pairs = [(r.threshold, r.fill_color) for r in ranges]
    return default, pairs
