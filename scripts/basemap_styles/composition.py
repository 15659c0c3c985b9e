"""
Assemble a complete MapLibre style document from a theme.

Layers are concatenated in one fixed back-to-front order. Later layers
occlude earlier ones, so the order below is part of the output contract:
background and hillshade at the bottom, then land, water and the ocean
overlays, boundaries, ice and the graticule, the road network, and finally
every symbol layer with POIs on top.

Usage:
    from basemap_styles import StyleUrls, create_basemap_style, get_theme

    style = create_basemap_style(get_theme("monochrome"), StyleUrls.local())
"""

from collections import Counter
from typing import List, Optional

from .labels import (
    create_basemap_water_label_layers,
    create_highway_shield_layers,
    create_place_label_layers,
    create_poi_layers,
    create_road_label_layers,
    create_waterway_label_layers,
    create_world_labels_water_layers,
)
from .layer import Layer
from .layers import (
    create_aeroway_layers,
    create_background_layers,
    create_bathymetry_layers,
    create_boundary_layers,
    create_contour_layers,
    create_grid_layers,
    create_hillshade_layers,
    create_ice_layers,
    create_landcover_layers,
    create_places_layers,
    create_region_boundary_layers,
    create_region_land_layers,
    create_region_overlay_road_layers,
    create_region_road_layers,
    create_region_water_layers,
    create_water_layers,
    create_world_road_layers,
)
from .layers.places import PLACES_SOURCE
from .sources import StyleUrls, create_basemap_sources, create_global_sources, create_places_source
from .theme import Theme, domain_enabled, resolve_boundary, resolve_view

STYLE_VERSION = 8
GENERATOR = "basemap_styles"


def create_all_layers(theme: Theme) -> List[Layer]:
    """Every layer of the basemap, back to front."""
    # Under water, coastlines hide the boundary lines
    hide_over_water = resolve_boundary(theme).hide_over_water

    layers: List[Layer] = []
    layers += create_background_layers(theme)
    layers += create_hillshade_layers(theme)
    layers += create_landcover_layers(theme)
    if hide_over_water:
        layers += create_boundary_layers(theme)
        layers += create_region_boundary_layers(theme)
    layers += create_water_layers(theme)
    layers += create_region_water_layers(theme)
    layers += create_bathymetry_layers(theme)
    layers += create_contour_layers(theme)
    if not hide_over_water:
        layers += create_boundary_layers(theme)
    # Ice after boundaries so they do not show through the ice sheets
    layers += create_ice_layers(theme)
    layers += create_grid_layers(theme)
    layers += create_world_road_layers(theme)
    layers += create_region_road_layers(theme)
    layers += create_region_land_layers(theme)
    if not hide_over_water:
        layers += create_region_boundary_layers(theme)
    layers += create_region_overlay_road_layers(theme)
    layers += create_aeroway_layers(theme)
    layers += create_road_label_layers(theme)
    layers += create_highway_shield_layers(theme)
    layers += create_world_labels_water_layers(theme)
    layers += create_basemap_water_label_layers(theme)
    layers += create_waterway_label_layers(theme)
    layers += create_place_label_layers(theme)
    layers += create_poi_layers(theme)
    return layers


def check_unique_ids(layers: List[Layer]) -> None:
    """Raise ValueError naming every layer id used more than once."""
    counts = Counter(layer.id for layer in layers)
    duplicates = sorted(layer_id for layer_id, count in counts.items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate layer ids: {', '.join(duplicates)}")


def insert_places_layers(layers: List[Layer], theme: Theme) -> List[Layer]:
    """Places polygons go under the place labels unless the theme wants them on top."""
    places_layers = create_places_layers(theme)
    if not places_layers:
        return layers
    if theme.places.render_above_labels:
        return layers + places_layers

    place_label_ids = {layer.id for layer in create_place_label_layers(theme)}
    index = next(
        (i for i, layer in enumerate(layers) if layer.id in place_label_ids),
        len(layers),
    )
    return layers[:index] + places_layers + layers[index:]


def create_basemap_style(theme: Theme, urls: Optional[StyleUrls] = None) -> dict:
    """Complete style document for `theme`, ready for json.dump."""
    urls = urls or StyleUrls.local()

    layers = create_all_layers(theme)
    sources = {**create_global_sources(urls), **create_basemap_sources(urls, theme)}
    if urls.places_url and domain_enabled(theme, "places"):
        sources[PLACES_SOURCE] = create_places_source(urls)
        layers = insert_places_layers(layers, theme)
    check_unique_ids(layers)

    view = resolve_view(theme)
    projection = theme.settings.projection
    return {
        "version": STYLE_VERSION,
        "name": theme.name,
        "metadata": {
            "generator": GENERATOR,
            "projection": projection,
            "description": theme.description,
        },
        "glyphs": urls.glyphs,
        "sprite": urls.sprite,
        "center": list(view.center),
        "zoom": view.zoom,
        "pitch": view.pitch,
        "bearing": view.bearing,
        "projection": {"type": projection},
        "sources": sources,
        "layers": [layer.to_json() for layer in layers],
    }
