"""Layer factories, one module per map feature domain."""

from .aeroway import create_aeroway_layers
from .background import create_background_layers
from .bathymetry import create_bathymetry_layers
from .boundaries import create_boundary_layers, create_region_boundary_layers
from .buildings import create_building_layers, create_overlay_building_layers
from .contours import create_contour_layers
from .grid import create_grid_layers
from .hillshade import create_hillshade_layers
from .ice import create_ice_layers
from .land import create_landcover_layers, create_region_land_layers
from .places import create_places_layers
from .roads import (
    create_region_overlay_road_layers,
    create_region_road_layers,
    create_world_road_layers,
)
from .water import create_region_water_layers, create_water_layers

__all__ = [
    "create_aeroway_layers",
    "create_background_layers",
    "create_bathymetry_layers",
    "create_boundary_layers",
    "create_building_layers",
    "create_contour_layers",
    "create_grid_layers",
    "create_hillshade_layers",
    "create_ice_layers",
    "create_landcover_layers",
    "create_overlay_building_layers",
    "create_places_layers",
    "create_region_boundary_layers",
    "create_region_land_layers",
    "create_region_overlay_road_layers",
    "create_region_road_layers",
    "create_region_water_layers",
    "create_water_layers",
    "create_world_road_layers",
]
