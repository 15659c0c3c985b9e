"""
Draw highway shield sprites from a theme's shield colours.

Creates:
- Interstate shield (two-tone body with a notched top)
- US highway shield
- State highway shield

The shields are appended below whatever the sprite sheet already holds:
- basemap.png / basemap.json
- basemap@2x.png / basemap@2x.json

Running it again replaces the previous shield entries instead of stacking
a second copy underneath.
"""

import json
import math
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from .theme import ShieldStyle, Theme

SHEET_NAME = "basemap"

# Shapes are drawn this many times larger, then downsampled for smooth edges
SUPERSAMPLE = 4

DEFAULT_UPPER_BACKGROUND = "#2a3444"
DEFAULT_BACKGROUND = "#1e2530"
DEFAULT_STROKE = "#4a5a6a"

Point = Tuple[float, float]

# Outlines in unit coordinates, clockwise from the top left
INTERSTATE_OUTLINE: List[Point] = [
    (0.15, 0.02), (0.32, 0.07), (0.5, 0.03), (0.68, 0.07), (0.85, 0.02),
    (0.95, 0.18), (0.99, 0.4), (0.96, 0.62), (0.85, 0.8), (0.5, 0.98),
    (0.15, 0.8), (0.04, 0.62), (0.01, 0.4), (0.05, 0.18),
]
# Upper band ends here
INTERSTATE_DIVIDER = 0.24

US_HIGHWAY_OUTLINE: List[Point] = [
    (0.1, 0.17), (0.3, 0.1), (0.5, 0.04), (0.7, 0.1), (0.9, 0.17),
    (0.85, 0.38), (0.91, 0.62), (0.84, 0.82), (0.5, 0.96), (0.16, 0.82),
    (0.09, 0.62), (0.15, 0.38),
]

# (logical size in px, default stroke width)
SHIELD_SHAPES: Dict[str, Tuple[int, float]] = {
    "interstate": (28, 2),
    "us_highway": (26, 3),
    "state_highway": (34, 2),
}


def _rgba(color: str) -> Tuple[int, int, int, int]:
    rgba = ImageColor.getcolor(color, "RGBA")
    return tuple(rgba)


def _polygon_mask(points: Sequence[Point], size: int) -> np.ndarray:
    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).polygon([(x * size, y * size) for x, y in points], fill=255)
    return np.array(mask) > 127


def _draw_outline(img: Image.Image, points: Sequence[Point], color: str, width: float) -> None:
    size = img.size[0]
    scaled = [(x * size, y * size) for x, y in points]
    ImageDraw.Draw(img).line(
        scaled + scaled[:1],
        fill=_rgba(color),
        width=max(1, int(round(width))),
        joint="curve",
    )


def _interstate(style: ShieldStyle, size: int, stroke_width: float) -> Image.Image:
    mask = _polygon_mask(INTERSTATE_OUTLINE, size)
    upper_rows = (np.arange(size) < INTERSTATE_DIVIDER * size)[:, np.newaxis]

    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[mask & upper_rows] = _rgba(style.upper_background or DEFAULT_UPPER_BACKGROUND)
    pixels[mask & ~upper_rows] = _rgba(style.lower_background or DEFAULT_BACKGROUND)

    img = Image.fromarray(pixels, "RGBA")
    _draw_outline(img, INTERSTATE_OUTLINE, style.stroke_color or DEFAULT_STROKE, stroke_width)
    return img


def _us_highway(style: ShieldStyle, size: int, stroke_width: float) -> Image.Image:
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    ImageDraw.Draw(img).polygon(
        [(x * size, y * size) for x, y in US_HIGHWAY_OUTLINE],
        fill=_rgba(style.background or DEFAULT_BACKGROUND),
    )
    _draw_outline(img, US_HIGHWAY_OUTLINE, style.stroke_color or DEFAULT_STROKE, stroke_width)
    return img


def _state_highway(style: ShieldStyle, size: int, stroke_width: float) -> Image.Image:
    """Rounded square, wide enough for three-digit route numbers."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    inset = size * 0.12
    ImageDraw.Draw(img).rounded_rectangle(
        (inset, inset, size - inset, size - inset),
        radius=size * 0.18,
        fill=_rgba(style.background or DEFAULT_BACKGROUND),
        outline=_rgba(style.stroke_color or DEFAULT_STROKE),
        width=max(1, int(round(stroke_width))),
    )
    return img


_DRAWERS = {
    "interstate": _interstate,
    "us_highway": _us_highway,
    "state_highway": _state_highway,
}


def render_shield(kind: str, style: ShieldStyle, pixel_ratio: int = 1) -> Image.Image:
    """
    Draw one shield at its physical size for `pixel_ratio`.

    Args:
        kind: interstate, us_highway or state_highway
        style: Shield colours and stroke width
        pixel_ratio: 1 for normal, 2 for @2x high-DPI

    Returns:
        RGBA image of size (logical size * pixel_ratio) squared
    """
    if kind not in SHIELD_SHAPES:
        raise ValueError(f"Unknown shield kind: {kind!r}")
    logical_size, default_stroke = SHIELD_SHAPES[kind]
    physical = logical_size * pixel_ratio
    stroke = style.stroke_width if style.stroke_width is not None else default_stroke

    # Stroke widths are in the 100-unit design space of the shield outline
    scale = physical * SUPERSAMPLE
    big = _DRAWERS[kind](style, scale, stroke * scale / 100)
    return big.resize((physical, physical), Image.Resampling.LANCZOS)


def theme_shields(theme: Theme) -> List[Tuple[str, str, ShieldStyle]]:
    """(kind, sprite name, style) for each enabled shield the theme draws."""
    if theme.shields is None:
        raise ValueError(f"Theme {theme.name!r} has no shields configured")
    if not theme.shields.enabled:
        raise ValueError(f"Theme {theme.name!r} has shields disabled")
    styles = [(kind, getattr(theme.shields, kind)) for kind in SHIELD_SHAPES]
    enabled = [(kind, style.sprite, style) for kind, style in styles if style.enabled]
    if not enabled:
        raise ValueError(f"Theme {theme.name!r} has no shields enabled")
    return enabled


def _content_bottom(index: dict, pixel_ratio: int) -> int:
    """Lowest occupied row of the sheet in physical pixels."""
    max_y = 0.0
    for sprite in index.values():
        ratio = sprite.get("pixelRatio", 1)
        max_y = max(max_y, (sprite["y"] + sprite["height"]) / ratio)
    return math.ceil(max_y * pixel_ratio)


def add_shields_to_sheet(sprites_dir: Path, shields: List[Tuple[str, str, ShieldStyle]],
                         pixel_ratio: int = 1, verbose: bool = False) -> Tuple[Path, Path]:
    """
    Append shields to one sprite sheet resolution.

    Args:
        sprites_dir: Directory holding basemap[@2x].png/json
        shields: (kind, sprite name, style) tuples
        pixel_ratio: 1 or 2
        verbose: Print placement of each shield

    Returns:
        (png path, json path)
    """
    suffix = "" if pixel_ratio == 1 else f"@{pixel_ratio}x"
    json_path = sprites_dir / f"{SHEET_NAME}{suffix}.json"
    png_path = sprites_dir / f"{SHEET_NAME}{suffix}.png"

    index = {}
    if json_path.exists():
        with open(json_path, encoding="utf-8") as f:
            index = json.load(f)

    for _, name, _ in shields:
        if index.pop(name, None) is not None and verbose:
            print(f"  Removing existing {name} entry")

    top = _content_bottom(index, pixel_ratio)
    images = [(name, render_shield(kind, style, pixel_ratio)) for kind, name, style in shields]

    base: Optional[Image.Image] = None
    if png_path.exists():
        with Image.open(png_path) as existing:
            base = existing.convert("RGBA")
        # Drop rows left over from an earlier shield pass
        if base.height > top:
            base = base.crop((0, 0, base.width, top))

    width = max([img.width for _, img in images] + ([base.width] if base else []))
    height = top + sum(img.height for _, img in images)
    sheet = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    if base is not None:
        sheet.paste(base, (0, 0))

    y = top
    for name, img in images:
        sheet.paste(img, (0, y))
        index[name] = {
            "width": img.width,
            "height": img.height,
            "x": 0,
            "y": y,
            "pixelRatio": pixel_ratio,
        }
        if verbose:
            print(f"  Added {name}: {img.width}x{img.height} at y={y}")
        y += img.height

    sprites_dir.mkdir(parents=True, exist_ok=True)
    sheet.save(png_path)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(index, f, indent=2)

    return png_path, json_path


def build_shields(theme: Theme, sprites_dir: Path, verbose: bool = False) -> List[Path]:
    """Add the theme's shields to both the 1x and 2x sprite sheets."""
    shields = theme_shields(theme)
    written: List[Path] = []
    for pixel_ratio in (1, 2):
        if verbose:
            print(f"\nBuilding {pixel_ratio}x sprite sheet...")
        written.extend(add_shields_to_sheet(sprites_dir, shields, pixel_ratio, verbose))
    return written
