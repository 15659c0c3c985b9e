"""Water polygons and waterway lines."""

from typing import List

from ..expressions import water_fill_color, waterway_line_color, zoom_stops_expr
from ..layer import Layer
from ..theme import Theme, resolve_water

# Fill opacity of water polygons when not transparent
WATER_OPACITY = 0.85


def _opacities(theme: Theme) -> tuple[float, float]:
    config = resolve_water(theme)
    fill = 0 if config.transparent else WATER_OPACITY
    line = 0 if config.transparent_waterway else 1.0
    return fill, line


def _water_fill(theme: Theme, layer_id: str, source: str, **zooms: float) -> Layer:
    opacity, _ = _opacities(theme)
    return Layer(
        id=layer_id,
        type="fill",
        source=source,
        source_layer="water",
        paint={"fill-color": water_fill_color(theme), "fill-opacity": opacity},
        **zooms,
    )


def _waterway_line(theme: Theme, layer_id: str, source: str,
                   widths: dict[float, float], **zooms: float) -> Layer:
    _, opacity = _opacities(theme)
    return Layer(
        id=layer_id,
        type="line",
        source=source,
        source_layer="waterway",
        paint={
            "line-color": waterway_line_color(theme),
            "line-opacity": opacity,
            "line-width": zoom_stops_expr(theme.widths.water_line, widths),
        },
        **zooms,
    )


def create_water_layers(theme: Theme) -> List[Layer]:
    """Create world water fills and waterways (low and mid detail)."""
    return [
        _water_fill(theme, "water-world", "world_low", minzoom=0, maxzoom=6.5),
        _water_fill(theme, "water-world-mid", "world_mid", minzoom=6),
        _waterway_line(theme, "waterway-world", "world_low", {0: 0.1, 6: 0.4},
                       minzoom=0, maxzoom=6.5),
        _waterway_line(theme, "waterway-world-mid", "world_mid", {6: 0.4, 10: 0.8},
                       minzoom=6),
    ]


def create_region_water_layers(theme: Theme) -> List[Layer]:
    """Create high-detail regional water fills and waterways."""
    return [
        _water_fill(theme, "water-us", "us_high", minzoom=6),
        _waterway_line(theme, "waterway-us", "us_high", {6: 0.2, 12: 0.6, 15: 1.0},
                       minzoom=6),
    ]
