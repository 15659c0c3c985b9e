"""
Ocean depth bands from Natural Earth bathymetry.

The ne-bathy source has twelve source-layers, one per depth band. They are
drawn deepest first so every shallower band lands on top of the deeper
ones beneath it. Each band gets a fixed opacity from its depth (shallow
bands most opaque) and the whole stack fades out one zoom past max_zoom.
"""

from typing import List

from ..colors import BATHYMETRY_DEPTHS, bathymetry_ramp
from ..expressions import case_expr, ge, get, has, interpolate_linear, mul, zoom_fade_expr
from ..layer import Layer
from ..theme import BATHYMETRY_BANDS, BathymetryConfig, Theme, domain_enabled

# (source-layer, depth in metres), deepest first
BATHYMETRY_LAYERS = (
    ("ne_10m_bathymetry_A_10000", 10000),
    ("ne_10m_bathymetry_B_9000", 9000),
    ("ne_10m_bathymetry_C_8000", 8000),
    ("ne_10m_bathymetry_D_7000", 7000),
    ("ne_10m_bathymetry_E_6000", 6000),
    ("ne_10m_bathymetry_F_5000", 5000),
    ("ne_10m_bathymetry_G_4000", 4000),
    ("ne_10m_bathymetry_H_3000", 3000),
    ("ne_10m_bathymetry_I_2000", 2000),
    ("ne_10m_bathymetry_J_1000", 1000),
    ("ne_10m_bathymetry_K_200", 200),
    ("ne_10m_bathymetry_L_0", 0),
)

# Band opacity as a fraction of opacity.max, shallow to deep
DEPTH_OPACITY_FACTORS = (1.0, 0.95, 0.85, 0.70, 0.55, 0.40, 0.25)


def depth_colors(theme: Theme) -> list[str]:
    """Seven band colours, shallow to deep."""
    bathy = theme.bathymetry
    water = theme.colors.water.fill
    if bathy.colors:
        return [bathy.colors.get(band) or water for band in BATHYMETRY_BANDS]
    return bathymetry_ramp(water)


def depth_opacities(bathy: BathymetryConfig) -> list[float]:
    """Seven band opacities, shallow to deep."""
    custom = bathy.depth_opacities or {}
    ramp = []
    for band, factor in zip(BATHYMETRY_BANDS, DEPTH_OPACITY_FACTORS):
        value = custom.get(band)
        ramp.append(value if value is not None else bathy.opacity.max * factor)
    return ramp


def opacity_for_depth(depth: float, ramp: list[float]) -> float:
    """Opacity of the first checkpoint at or below which `depth` falls."""
    for checkpoint, opacity in zip(BATHYMETRY_DEPTHS[:-1], ramp):
        if depth <= checkpoint:
            return opacity
    return ramp[-1]


def create_bathymetry_layers(theme: Theme) -> List[Layer]:
    """Create one depth-band fill per source-layer, deepest first."""
    if not domain_enabled(theme, "bathymetry"):
        return []

    bathy = theme.bathymetry
    colors = depth_colors(theme)
    ramp = depth_opacities(bathy)
    ratio = bathy.opacity.min / bathy.opacity.max

    # Depth may be stored negative; missing depth reads as the surface
    depth = case_expr(
        [(has("depth"), case_expr([(ge(get("depth"), 0), get("depth"))], mul(get("depth"), -1)))],
        0,
    )
    fill_color = interpolate_linear(
        depth, [(int(d), color) for d, color in zip(BATHYMETRY_DEPTHS, colors)]
    )

    layers = []
    for source_layer, band_depth in BATHYMETRY_LAYERS:
        opacity = opacity_for_depth(band_depth, ramp)
        layers.append(Layer(
            id=f"bathymetry-fill-{source_layer}",
            type="fill",
            source="ne-bathy",
            source_layer=source_layer,
            minzoom=bathy.min_zoom,
            maxzoom=bathy.max_zoom + 1,
            paint={
                "fill-color": fill_color,
                "fill-opacity": zoom_fade_expr(
                    bathy.min_zoom, bathy.max_zoom, opacity * ratio, opacity
                ),
            },
        ))
    return layers
