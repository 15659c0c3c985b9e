"""Country, maritime and state boundary lines."""

from typing import Any, List

from ..expressions import FILTERS, zoom_stops_expr, zoom_width_expr
from ..layer import Layer
from ..theme import Theme, evaluate_stops, normalize_zoom_stops, resolve_boundary


def _country_opacity(theme: Theme) -> Any:
    opacity = theme.opacities.boundary.country
    if isinstance(opacity, (int, float)):
        return opacity
    return zoom_width_expr(opacity, 0.8)


def _line(layer_id: str, source: str, filter_name: str, color: str,
          width: Any, opacity: Any, **zooms: float) -> Layer:
    return Layer(
        id=layer_id,
        type="line",
        source=source,
        source_layer="boundary",
        filter=FILTERS[filter_name],
        paint={"line-color": color, "line-width": width, "line-opacity": opacity},
        **zooms,
    )


def create_boundary_layers(theme: Theme) -> List[Layer]:
    """Create world boundaries (low and mid detail) for the enabled kinds."""
    config = resolve_boundary(theme)
    c = theme.colors.boundary
    w = theme.widths.boundary
    o = theme.opacities.boundary
    layers = []

    country_low = zoom_stops_expr(w.country, {0: 0.4, 6: 1.2})
    country_mid = zoom_stops_expr(w.country, {6: 1.2, 10: 2.0})

    if config.country:
        layers += [
            _line("boundary-country-world", "world_low", "country_boundary", c.country,
                  country_low, _country_opacity(theme), minzoom=0, maxzoom=6.5),
            _line("boundary-country-world-mid", "world_mid", "country_boundary", c.country,
                  country_mid, _country_opacity(theme), minzoom=6),
        ]

    if config.maritime:
        layers += [
            _line("boundary-maritime-world", "world_low", "maritime_boundary", c.country,
                  country_low, o.maritime, minzoom=0, maxzoom=6.5),
            _line("boundary-maritime-world-mid", "world_mid", "maritime_boundary", c.country,
                  country_mid, o.maritime, minzoom=6),
        ]

    if config.state:
        layers += [
            _line("boundary-state-world", "world_low", "state_boundary", c.state,
                  zoom_stops_expr(w.state, {0: 0.2, 6: 0.8}), o.state,
                  minzoom=3, maxzoom=6.5),
            _line("boundary-state-world-mid", "world_mid", "state_boundary", c.state,
                  zoom_stops_expr(w.state, {6: 0.8, 10: 1.2}), o.state, minzoom=6),
        ]

    return layers


def create_region_boundary_layers(theme: Theme) -> List[Layer]:
    """Create high-detail regional boundaries for the enabled kinds."""
    config = resolve_boundary(theme)
    c = theme.colors.boundary
    w = theme.widths.boundary
    o = theme.opacities.boundary
    layers = []

    country_width = zoom_stops_expr(w.country, {6: 1.2, 10: 2.0, 15: 2.5})
    # Region layers only start at z6, so stop-based opacity is evaluated at z10
    if isinstance(o.country, (int, float)):
        country_opacity = o.country
    else:
        stops = normalize_zoom_stops(o.country)
        country_opacity = evaluate_stops(stops, 10) if stops else 0.8

    if config.country:
        layers.append(_line("boundary-country-us", "us_high", "country_boundary", c.country,
                            country_width, country_opacity, minzoom=6))
    if config.maritime:
        layers.append(_line("boundary-maritime-us", "us_high", "maritime_boundary", c.country,
                            country_width, o.maritime, minzoom=6))
    if config.state:
        state_width = zoom_stops_expr(w.state, {6: 0.3, 8: 0.8, 12: 1.2, 15: 1.5})
        layers.append(_line("boundary-state-us", "us_high", "state_boundary", c.state,
                            state_width, o.state, minzoom=6))

    return layers
