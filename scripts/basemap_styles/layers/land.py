"""
Landcover and landuse fills.

World layers switch from the low-detail source to the mid-detail source
at z6, with a half-zoom overlap (the low layer runs to z6.5) so there is
no gap while mid tiles load. The region layers sit on top from z6.
"""

from typing import Any, List

from ..expressions import get, landcover_fill_color, landuse_fill_color, ne
from ..layer import Layer
from ..theme import Theme, domain_enabled, resolve_land


def _landcover_filter(theme: Theme) -> Any:
    # Ice polygons get their own layers when ice is on
    if domain_enabled(theme, "ice"):
        return ne(get("class"), "ice")
    return True


def _opacities(theme: Theme) -> tuple[float, float]:
    o = theme.opacities
    landcover = 0 if resolve_land(theme, "land").transparent else o.landcover
    landuse = 0 if resolve_land(theme, "landuse").transparent else o.landuse
    return landcover, landuse


def _landcover_layer(theme: Theme, layer_id: str, source: str, **zooms: float) -> Layer:
    fill = landcover_fill_color(theme)
    opacity, _ = _opacities(theme)
    return Layer(
        id=layer_id,
        type="fill",
        source=source,
        source_layer="landcover",
        filter=_landcover_filter(theme),
        paint={
            "fill-color": fill,
            "fill-opacity": opacity,
            "fill-outline-color": fill,
        },
        **zooms,
    )


def _landuse_layer(theme: Theme, layer_id: str, source: str, **zooms: float) -> Layer:
    _, opacity = _opacities(theme)
    return Layer(
        id=layer_id,
        type="fill",
        source=source,
        source_layer="landuse",
        paint={
            "fill-color": landuse_fill_color(theme),
            "fill-opacity": opacity,
        },
        **zooms,
    )


def create_landcover_layers(theme: Theme) -> List[Layer]:
    """Create world landcover and landuse fills (low and mid detail)."""
    return [
        _landcover_layer(theme, "landcover-world", "world_low", minzoom=0, maxzoom=6.5),
        _landcover_layer(theme, "landcover-world-mid", "world_mid", minzoom=6),
        _landuse_layer(theme, "landuse-world", "world_low", minzoom=0, maxzoom=6.5),
        _landuse_layer(theme, "landuse-world-mid", "world_mid", minzoom=6),
    ]


def create_region_land_layers(theme: Theme) -> List[Layer]:
    """Create high-detail regional landcover and landuse fills."""
    return [
        _landcover_layer(theme, "landcover-us", "us_high", minzoom=6),
        _landuse_layer(theme, "landuse-us", "us_high", minzoom=6),
    ]
