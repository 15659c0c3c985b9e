"""
Road, path and railway lines.

Three groups, drawn at different points of the layer stack:

- world: major roads from the low/mid world sources
- region: tunnels, casings, paths, bridges, railway and buildings
- region overlay: casings and fills of surface roads, alleys, parking
  aisles, unclassified ways and finally bridges, so bridges occlude
  everything crossing under them

Surface roads use two passes, a wider casing line first and the road
fill on top of it.
"""

from typing import Any, List, Optional

from ..expressions import (
    FILTERS,
    NORMAL_ROAD_CLASSES,
    all_,
    bridge_color_expr,
    in_classes,
    interpolate_linear,
    not_,
    not_brunnel,
    road_color_expr,
    road_color_with_tertiary_expr,
    road_width_for_theme,
    tunnel_color_expr,
    zoom,
    zoom_width_expr,
)
from ..layer import Layer
from ..theme import Theme
from .buildings import create_building_layers, create_overlay_building_layers

ROUND_LINE = {"line-cap": "round", "line-join": "round"}


def _variant_casing(theme: Theme, variant: str) -> Optional[str]:
    """Casing colour from the tunnel or bridge table, if it sets one."""
    table = getattr(theme.colors.road, variant)
    return table.casing if table is not None else None


def _bridge_casing_layers(theme: Theme, layer_id: str, width: Any) -> List[Layer]:
    """Casing under bridges, only drawn when the bridge table sets a casing colour."""
    color = _variant_casing(theme, "bridge")
    if color is None:
        return []
    return [_transportation_line(layer_id, "us_high", FILTERS["bridge"],
                                 {"line-color": color, "line-width": width})]


def _transportation_line(layer_id: str, source: str, filter: Any, paint: dict,
                         minzoom: float = 6, layout: Any = ROUND_LINE, **zooms: float) -> Layer:
    return Layer(
        id=layer_id,
        type="line",
        source=source,
        source_layer="transportation",
        minzoom=minzoom,
        filter=filter,
        layout=dict(layout) if layout else {},
        paint=paint,
        **zooms,
    )


def create_world_road_layers(theme: Theme) -> List[Layer]:
    """Create major roads from the world sources."""
    color = road_color_expr(theme)
    return [
        _transportation_line(
            "road-world", "world_low", FILTERS["major_road"],
            {"line-color": color,
             "line-width": interpolate_linear(zoom(), [(0, 0.2), (6, 0.6)])},
            minzoom=0, maxzoom=6.5,
        ),
        _transportation_line(
            "road-world-mid", "world_mid", FILTERS["major_road"],
            {"line-color": color,
             "line-width": interpolate_linear(zoom(), [(6, 0.6), (10, 1.0)])},
        ),
    ]


def create_region_road_layers(theme: Theme) -> List[Layer]:
    """Create regional tunnels, casings, paths, bridges, railway and buildings."""
    c = theme.colors
    w = theme.widths

    casing_width = road_width_for_theme(theme, w.road_casing)
    tunnel_width = road_width_for_theme(theme, w.tunnel_road or w.road)
    bridge_width = road_width_for_theme(theme, w.bridge_road or w.road)

    layers = [
        _transportation_line(
            "road-tunnel-casing", "us_high", FILTERS["tunnel"],
            {"line-color": (c.road.tunnel_casing or _variant_casing(theme, "tunnel")
                            or c.road.casing),
             "line-width": casing_width,
             "line-opacity": theme.opacities.tunnel},
        ),
        _transportation_line(
            "road-tunnel", "us_high", FILTERS["tunnel"],
            {"line-color": tunnel_color_expr(theme),
             "line-width": tunnel_width,
             "line-dasharray": [2, 2]},
        ),
        _transportation_line(
            "road-casing", "us_high", FILTERS["normal_road"],
            {"line-color": c.road.casing, "line-width": casing_width},
        ),
        _transportation_line(
            "paths", "us_high", FILTERS["path"],
            {"line-color": c.path, "line-width": zoom_width_expr(w.path, 0.5)},
        ),
    ] + _bridge_casing_layers(theme, "road-bridge-casing", casing_width) + [
        _transportation_line(
            "road-bridge", "us_high", FILTERS["bridge"],
            {"line-color": bridge_color_expr(theme), "line-width": bridge_width},
        ),
        _transportation_line(
            "railway", "us_high", FILTERS["railway"],
            {"line-color": c.railway, "line-width": zoom_width_expr(w.railway, 0.5)},
            layout=None,
        ),
    ]
    return layers + create_building_layers(theme)


def create_region_overlay_road_layers(theme: Theme) -> List[Layer]:
    """Create regional surface roads drawn over land, with bridges last."""
    c = theme.colors
    w = theme.widths
    road_color = road_color_with_tertiary_expr(theme)

    other_filter = all_(*not_brunnel(), not_(in_classes(NORMAL_ROAD_CLASSES)))

    return create_overlay_building_layers(theme) + [
        _transportation_line(
            "road-casing-us", "us_high", FILTERS["normal_road"],
            {"line-color": c.road.casing,
             "line-width": road_width_for_theme(theme, w.road_casing)},
        ),
        _transportation_line(
            "road-us", "us_high", FILTERS["normal_road"],
            {"line-color": road_color,
             "line-width": road_width_for_theme(theme, w.road)},
        ),
        _transportation_line(
            "road-alley", "us_high", FILTERS["alley"],
            {"line-color": c.road.service,
             "line-width": interpolate_linear(zoom(), [(14, 0.3), (15, 0.6), (18, 1.2)])},
            minzoom=14,
        ),
        _transportation_line(
            "road-parking-aisle", "us_high", FILTERS["parking_aisle"],
            {"line-color": c.road.parking_aisle or c.road.service,
             "line-width": interpolate_linear(zoom(), [(15, 0.2), (16, 0.4), (18, 0.8)])},
            minzoom=15,
        ),
        _transportation_line(
            "road-other", "us_high", other_filter,
            {"line-color": c.road.other,
             "line-width": interpolate_linear(zoom(), [(14, 0.3), (15, 0.5)])},
            minzoom=14,
        ),
    ] + _bridge_casing_layers(theme, "road-bridge-casing-us",
                             road_width_for_theme(theme, w.road_casing)) + [
        _transportation_line(
            "road-bridge-us", "us_high", FILTERS["bridge"],
            {"line-color": bridge_color_expr(theme),
             "line-width": road_width_for_theme(theme, w.bridge_road or w.road)},
        ),
    ]
