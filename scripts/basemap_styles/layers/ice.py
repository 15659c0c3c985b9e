"""Glaciers, ice shelves and the ice edge from Natural Earth."""

from typing import List

from ..expressions import all_, zoom_fade_expr
from ..layer import Layer
from ..theme import IceConfig, Theme, domain_enabled


def _fade(ice: IceConfig, opacity: float):
    ratio = ice.opacity.min / ice.opacity.max
    return zoom_fade_expr(ice.min_zoom, ice.max_zoom, opacity * ratio, opacity)


def create_ice_layers(theme: Theme) -> List[Layer]:
    """Create ice fills, their hidden outlines and the ice edge line."""
    if not domain_enabled(theme, "ice"):
        return []

    ice = theme.ice
    zooms = {"minzoom": ice.min_zoom, "maxzoom": ice.max_zoom + 1}
    layers = []

    for layer_id, source_layer, fill in (
        ("ice-glaciated", "glaciated", ice.glaciated),
        ("ice-shelves", "ice_shelves", ice.ice_shelves),
    ):
        opacity = fill.opacity if fill.opacity is not None else ice.opacity.max
        layers.append(Layer(
            id=layer_id,
            type="fill",
            source="ne-ice",
            source_layer=source_layer,
            filter=all_(),
            paint={
                "fill-color": fill.color,
                "fill-opacity": _fade(ice, opacity),
                "fill-antialias": False,
            },
            **zooms,
        ))
        # Zero-width outline in the fill colour keeps polygon seams invisible
        layers.append(Layer(
            id=f"{layer_id}-outline",
            type="line",
            source="ne-ice",
            source_layer=source_layer,
            paint={
                "line-color": fill.color,
                "line-width": 0,
                "line-opacity": _fade(ice, opacity),
            },
            **zooms,
        ))

    edge = ice.ice_edge
    if edge is not None and edge.enabled:
        layers.append(Layer(
            id="ice-edge",
            type="line",
            source="ne-ice",
            source_layer="ice_edge",
            filter=all_(),
            paint={
                "line-color": edge.color,
                "line-width": edge.width,
                "line-opacity": _fade(ice, edge.opacity),
            },
            **zooms,
        ))
    else:
        layers.append(Layer(
            id="ice-edge-hidden",
            type="line",
            source="ne-ice",
            source_layer="ice_edge",
            paint={"line-opacity": 0, "line-width": 0},
            **zooms,
        ))

    return layers
