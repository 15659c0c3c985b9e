"""Symbol layers: road names, shields, water, place and POI labels."""

from .place import create_place_label_layers
from .poi import create_poi_layers
from .road import create_highway_shield_layers, create_road_label_layers
from .water import (
    create_basemap_water_label_layers,
    create_waterway_label_layers,
    create_world_labels_water_layers,
)

__all__ = [
    "create_basemap_water_label_layers",
    "create_highway_shield_layers",
    "create_place_label_layers",
    "create_poi_layers",
    "create_road_label_layers",
    "create_waterway_label_layers",
    "create_world_labels_water_layers",
]
