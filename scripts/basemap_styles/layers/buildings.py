"""Building footprints coloured by height."""

from typing import List, Optional

from ..expressions import building_fill_color, interpolate_linear, zoom
from ..layer import Layer
from ..theme import Theme, resolve_buildings


def building_layer(theme: Theme, layer_id: str, minzoom: float) -> Optional[Layer]:
    """One building fill layer, or None when buildings are off.

    With a buildings max_zoom the layer holds its opacity up to max_zoom and
    fades out over the following zoom level.
    """
    config = resolve_buildings(theme)
    if not config.enabled:
        return None

    opacity = theme.opacities.building
    maxzoom = None
    fill_opacity = opacity
    if config.max_zoom is not None:
        maxzoom = config.max_zoom + 1
        if minzoom >= maxzoom:
            return None
        stops = [(minzoom, opacity)] if minzoom < config.max_zoom else []
        stops += [(config.max_zoom, opacity), (maxzoom, 0.0)]
        fill_opacity = interpolate_linear(zoom(), stops)

    return Layer(
        id=layer_id,
        type="fill",
        source="us_high",
        source_layer="building",
        minzoom=minzoom,
        maxzoom=maxzoom,
        paint={
            "fill-color": building_fill_color(theme, config.height_colors_min_zoom),
            "fill-outline-color": theme.colors.building.outline,
            "fill-opacity": fill_opacity,
        },
    )


def create_building_layers(theme: Theme) -> List[Layer]:
    """Create the regional building layer starting at the buildings min zoom."""
    layer = building_layer(theme, "building", resolve_buildings(theme).min_zoom)
    return [layer] if layer else []


def create_overlay_building_layers(theme: Theme) -> List[Layer]:
    """Create the high-zoom building layer drawn over regional land."""
    layer = building_layer(theme, "building-us", 13)
    return [layer] if layer else []
