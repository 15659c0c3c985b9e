"""
Incorporated-place polygons coloured by population density.

Density and population are not in the tiles. The page loads them per
place (keyed by GEOID) and writes them into feature-state as
pop_density_sqmi and pop_total. Until that happens, or for places with no
data, the theme's flat fill and outline colours are used.
"""

from typing import List

from ..colors import density_stops
from ..expressions import (
    add,
    all_,
    case_expr,
    feature_state,
    has,
    interpolate_linear,
    mul,
    ne,
    step_expr,
    zoom,
    zoom_stops_expr,
)
from ..layer import Layer
from ..theme import DensityColorRange, DensityColors, Theme, domain_enabled

PLACES_SOURCE = "places-source"

# Density classes (people / sq mi) used when the theme has none
DEFAULT_DENSITY_COLORS = DensityColors(
    default_fill_color="#ecda9a",
    ranges=(
        DensityColorRange(100, "#efc47e"),
        DensityColorRange(300, "#f3ad6a"),
        DensityColorRange(1000, "#f7945d"),
        DensityColorRange(2000, "#f97b57"),
        DensityColorRange(5000, "#f66356"),
        DensityColorRange(10000, "#ee4d5a"),
    ),
)

# Extra opacity multiplier by total population
POPULATION_BOOST = ((0, 0), (10000, 0.05), (50000, 0.1), (100000, 0.15), (500000, 0.2))

# Fill fades in between these zooms as areas replace point markers
CROSSFADE_ZOOMS = (5, 6.5)


def density_step_expr(density_colors: DensityColors, outline: bool = False):
    """Step over pop_density_sqmi with thresholds in ascending order.

    Without any ranges every place gets the default colour.
    """
    default, pairs = density_stops(density_colors, outline)
    if not pairs:
        return default
    return step_expr(feature_state("pop_density_sqmi"), default, pairs)


def density_color_expr(density_colors: DensityColors, fallback: str, outline: bool = False):
    """Density colour when the feature has density state, else `fallback`."""
    return case_expr(
        [(ne(feature_state("pop_density_sqmi"), None), density_step_expr(density_colors, outline))],
        fallback,
    )


def fill_opacity_expr(opacity: float):
    """Theme opacity * (1 + population boost), faded in over the crossfade zooms.

    Zoom has to be the top-level interpolation input, so the crossfade is
    the outer interpolate and the boosted opacity its upper stop. Linear
    interpolation from 0 makes that equal to multiplying by the crossfade.
    """
    population = feature_state("pop_total")
    boost = case_expr(
        [(ne(population, None), interpolate_linear(population, POPULATION_BOOST))],
        0,
    )
    start, end = CROSSFADE_ZOOMS
    return interpolate_linear(zoom(), [(start, 0), (end, mul(opacity, add(1.0, boost)))])


def create_places_layers(theme: Theme) -> List[Layer]:
    """Create places fill and outline layers."""
    if not domain_enabled(theme, "places"):
        return []

    places = theme.places
    density_colors = places.density_colors or DEFAULT_DENSITY_COLORS
    places_filter = all_(has("GEOID"))

    return [
        Layer(
            id="places-fill",
            type="fill",
            source=PLACES_SOURCE,
            source_layer="places",
            minzoom=places.min_zoom,
            filter=places_filter,
            paint={
                "fill-color": density_color_expr(density_colors, places.fill.color),
                "fill-opacity": fill_opacity_expr(places.fill.opacity),
                "fill-antialias": False,
            },
        ),
        Layer(
            id="places-outline",
            type="line",
            source=PLACES_SOURCE,
            source_layer="places",
            minzoom=places.min_zoom,
            filter=places_filter,
            paint={
                "line-color": density_color_expr(density_colors, places.outline.color, outline=True),
                "line-width": zoom_stops_expr(places.outline.width, {5: 0.5, 10: 1.0, 15: 1.5}),
                "line-opacity": places.outline.opacity,
            },
        ),
    ]
