"""Terrain hillshading from the raster-dem source."""

from typing import List

from ..expressions import zoom_fade_expr
from ..layer import Layer
from ..theme import Theme, domain_enabled


def create_hillshade_layers(theme: Theme) -> List[Layer]:
    """Create the hillshade layer.

    Hillshade layers have no opacity property, so the theme opacity scales
    the exaggeration instead. With a max_zoom the exaggeration fades to 0
    over the next zoom level.
    """
    if not domain_enabled(theme, "hillshade"):
        return []

    hs = theme.hillshade
    exaggeration = hs.exaggeration * hs.opacity
    maxzoom = None
    if hs.max_zoom is not None:
        exaggeration = zoom_fade_expr(hs.min_zoom, hs.max_zoom, exaggeration, exaggeration)
        maxzoom = hs.max_zoom + 1

    return [
        Layer(
            id="hillshade",
            type="hillshade",
            source="world-hillshade",
            minzoom=hs.min_zoom,
            maxzoom=maxzoom,
            paint={
                "hillshade-illumination-direction": hs.illumination_direction,
                "hillshade-illumination-anchor": hs.illumination_anchor,
                "hillshade-exaggeration": exaggeration,
                "hillshade-shadow-color": hs.shadow_color,
                "hillshade-highlight-color": hs.highlight_color,
                "hillshade-accent-color": hs.accent_color,
            },
        ),
    ]
