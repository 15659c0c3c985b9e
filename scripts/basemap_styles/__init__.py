"""
Basemap Style Compiler

Turns a declarative theme (colours, fonts, widths, opacities and optional
feature domains) into a complete MapLibre GL style document:
- Land, water, boundaries and the road network from world and US tiles
- Optional bathymetry, contours, ice, hillshade, graticule and aeroways
- Road, water, place and POI labels plus highway shields
- Incorporated-place polygons coloured by population density at runtime

Usage:
    # Write one preset's style
    python -m basemap_styles.cli build --preset monochrome -o monochrome.json

    # From Python
    from basemap_styles import StyleUrls, create_basemap_style, get_theme
    style = create_basemap_style(get_theme("parchment"), StyleUrls.production())
"""

from .composition import create_all_layers, create_basemap_style
from .expressions import Expr, Get, Labels, Literal, Op, to_json
from .layer import Layer
from .presets import THEMES, get_theme, list_themes
from .sources import StyleUrls
from .theme import Theme

__version__ = "0.1.0"

__all__ = [
    "Expr",
    "Get",
    "Labels",
    "Layer",
    "Literal",
    "Op",
    "StyleUrls",
    "THEMES",
    "Theme",
    "create_all_layers",
    "create_basemap_style",
    "get_theme",
    "list_themes",
    "to_json",
]
