"""
Write generated styles and browser map config to disk.

Usage:
    from basemap_styles.build import build_all, write_style

    write_style(get_theme("monochrome"), StyleUrls.local(), Path("style.json"), verbose=True)
    build_all(Path("dist/styles"), StyleUrls.production())
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .composition import create_basemap_style
from .presets import THEMES
from .sources import StyleUrls
from .theme import Theme, resolve_min_zoom, resolve_view


def write_style(theme: Theme, urls: Optional[StyleUrls], output_path: Path,
                verbose: bool = False) -> Dict[str, Any]:
    """
    Generate the style for `theme` and write it as JSON.

    Args:
        theme: Theme to compile
        urls: Endpoint set (local URLs when None)
        output_path: Path to write the style to
        verbose: Print a layer table

    Returns:
        Complete style dictionary
    """
    style = create_basemap_style(theme, urls)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(style, f, indent=2)
        f.write("\n")

    if verbose:
        layers = style["layers"]
        print(f"\nStyle layers ({len(layers)} total):")
        for layer in layers:
            min_zoom = layer.get("minzoom", 0)
            max_zoom = layer.get("maxzoom", 24)
            source = layer.get("source", "-")
            print(f"  {layer['id']:45} z{min_zoom}-{max_zoom:<4}  ({source})")

    return style


def build_all(output_dir: Path, urls: Optional[StyleUrls] = None,
              verbose: bool = False) -> List[Path]:
    """Write one style file per preset into `output_dir`."""
    print("\n" + "=" * 60)
    print("GENERATING ALL PRESET STYLES")
    print("=" * 60)

    written = []
    for name, theme in THEMES.items():
        output_path = output_dir / f"{name}.json"
        style = write_style(theme, urls, output_path, verbose=verbose)
        print(f"  ✓ {name:12} → {output_path.name} ({len(style['layers'])} layers)")
        written.append(output_path)

    print(f"\nGenerated {len(written)} style files")
    return written


def render_map_config(theme: Theme) -> str:
    """Browser globals read by the map page before it creates the map."""
    min_zoom = resolve_min_zoom(theme)
    view = resolve_view(theme)
    lines = [
        "// Generated by basemap_styles. Do not edit by hand.",
        f"window.mapProjection = {json.dumps(theme.settings.projection)};",
        "window.mapMinZoom = "
        f"{{ mercator: {json.dumps(min_zoom.mercator)}, globe: {json.dumps(min_zoom.globe)} }};",
        f"window.mapCenter = {json.dumps(list(view.center))};",
        f"window.mapZoom = {json.dumps(view.zoom)};",
        f"window.mapPitch = {json.dumps(view.pitch)};",
        f"window.mapBearing = {json.dumps(view.bearing)};",
    ]

    starfield = theme.starfield
    if starfield is not None:
        glow = starfield.glow_colors
        lines += [
            "window.starfieldConfig = {",
            "  glowColors: {",
            f"    inner: {json.dumps(glow.inner)},",
            f"    middle: {json.dumps(glow.middle)},",
            f"    outer: {json.dumps(glow.outer)},",
            f"    fade: {json.dumps(glow.fade)}",
            "  },",
            f"  starCount: {json.dumps(starfield.star_count)},",
            f"  glowIntensity: {json.dumps(starfield.glow_intensity)},",
            f"  glowSizeMultiplier: {json.dumps(starfield.glow_size_multiplier)},",
            f"  glowBlurMultiplier: {json.dumps(starfield.glow_blur_multiplier)}",
            "};",
        ]
    return "\n".join(lines) + "\n"


def write_map_config(theme: Theme, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_map_config(theme), encoding="utf-8")
    return output_path
