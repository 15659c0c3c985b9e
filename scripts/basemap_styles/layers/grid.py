"""
Latitude/longitude graticule lines and coordinate labels.

The world-grid source has one source-layer, "graticules", of LineStrings
with properties:
    kind   "parallel" (latitude) or "meridian" (longitude)
    step   interval in degrees as a string ("1", "5", "10", "30")
    value  coordinate in degrees
"""

from typing import List, Optional

from ..expressions import (
    abs_,
    all_,
    case_expr,
    concat,
    eq,
    get,
    gt,
    lt,
    range_expr,
    to_string,
    zoom_fade_expr,
)
from ..layer import Layer
from ..theme import GridConfig, GridLine, Theme, ValueRange, domain_enabled, resolve_label_fonts

# Opacity at the grid min zoom, as a fraction of the configured opacity
OPACITY_FADE_FACTOR = 0.7
LABEL_SPACING = 300
DEFAULT_WIDTH = ValueRange(0.5, 1.0)
DEFAULT_LABEL_SIZE = ValueRange(10, 12)

HEMISPHERES = {"parallel": ("N", "S"), "meridian": ("E", "W")}


def _format_step(interval: float) -> str:
    return str(int(interval)) if float(interval).is_integer() else str(interval)


def coordinate_label(kind: str):
    """Label text like "30°N" built from the feature value."""
    positive, negative = HEMISPHERES[kind]
    value = get("value")
    hemisphere = case_expr([(gt(value, 0), positive), (lt(value, 0), negative)], "")
    return concat(to_string(abs_(value)), "°", hemisphere)


def _grid_line_layers(theme: Theme, grid: GridConfig, kind: str,
                      line: Optional[GridLine]) -> List[Layer]:
    if line is None:
        return []

    name = "latitude" if kind == "parallel" else "longitude"
    conditions = [eq(get("kind"), kind)]
    if line.interval:
        conditions.append(eq(get("step"), _format_step(line.interval)))
    line_filter = all_(*conditions)

    layers = [
        Layer(
            id=f"grid-{name}",
            type="line",
            source="world-grid",
            source_layer="graticules",
            minzoom=grid.min_zoom,
            maxzoom=grid.max_zoom + 1,
            filter=line_filter,
            paint={
                "line-color": line.color,
                "line-width": range_expr(line.width, grid.min_zoom, grid.max_zoom, DEFAULT_WIDTH),
                "line-opacity": zoom_fade_expr(
                    grid.min_zoom, grid.max_zoom, line.opacity * OPACITY_FADE_FACTOR, line.opacity
                ),
            },
        ),
    ]

    label = line.label
    if label is not None and label.enabled:
        label_min_zoom = label.min_zoom if label.min_zoom is not None else grid.min_zoom
        layers.append(Layer(
            id=f"grid-{name}-label",
            type="symbol",
            source="world-grid",
            source_layer="graticules",
            minzoom=label_min_zoom,
            maxzoom=grid.max_zoom + 1,
            filter=line_filter,
            layout={
                "text-field": coordinate_label(kind),
                "text-font": resolve_label_fonts(theme).grid,
                "text-size": range_expr(label.size, label_min_zoom, grid.max_zoom, DEFAULT_LABEL_SIZE),
                "symbol-placement": "line",
                "text-rotation-alignment": "map",
                "text-pitch-alignment": "viewport",
                "symbol-spacing": LABEL_SPACING,
            },
            paint={
                "text-color": label.color or line.color,
                "text-opacity": zoom_fade_expr(
                    label_min_zoom, grid.max_zoom, label.opacity * OPACITY_FADE_FACTOR, label.opacity
                ),
                "text-halo-color": "#000000",
                "text-halo-width": 1,
                "text-halo-blur": 0.5,
            },
        ))
    return layers


def create_grid_layers(theme: Theme) -> List[Layer]:
    """Create latitude then longitude lines, each followed by its labels."""
    if not domain_enabled(theme, "grid"):
        return []
    grid = theme.grid
    return (_grid_line_layers(theme, grid, "parallel", grid.latitude)
            + _grid_line_layers(theme, grid, "meridian", grid.longitude))
