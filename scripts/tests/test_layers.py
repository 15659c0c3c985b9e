#!/usr/bin/env python3
"""Tests for base layer factories."""
import pytest
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.layer import Layer
from basemap_styles.layers import (
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
from basemap_styles.theme import (
    BoundaryConfig,
    BuildingsConfig,
    ContoursConfig,
    DensityColorRange,
    DensityColors,
    IceConfig,
    LandConfig,
    PlacesConfig,
    RoadVariantColors,
    WaterConfig,
)


def ids(layers):
    return [layer.id for layer in layers]


class TestLayerDescriptor:
    """Tests for the Layer dataclass."""

    def test_unknown_type(self):
        """Test unknown layer types raise."""
        with pytest.raises(ValueError, match="Unknown layer type"):
            Layer(id="x", type="extrusion", source="s")

    def test_source_rules(self):
        """Test background layers have no source and others need one."""
        with pytest.raises(ValueError):
            Layer(id="bg", type="background", source="s")
        with pytest.raises(ValueError):
            Layer(id="fill", type="fill")

    def test_to_json_keys(self):
        """Test renderer key names and omission of unset fields."""
        layer = Layer(id="water", type="fill", source="world_low", source_layer="water",
                      minzoom=0, paint={"fill-color": "#000000"})
        assert layer.to_json() == {
            "id": "water",
            "type": "fill",
            "source": "world_low",
            "source-layer": "water",
            "minzoom": 0,
            "paint": {"fill-color": "#000000"},
        }


class TestBaseLayers:
    """Tests for background, land and water layers."""

    def test_background(self, minimal_theme):
        """Test the background fill uses the theme background."""
        layers = create_background_layers(minimal_theme)
        assert ids(layers) == ["background"]
        assert layers[0].paint["background-color"] == "#0b0f14"

    def test_landcover_ids(self, minimal_theme):
        """Test world landcover and landuse for both detail levels."""
        assert ids(create_landcover_layers(minimal_theme)) == [
            "landcover-world", "landcover-world-mid", "landuse-world", "landuse-world-mid"
        ]
        assert ids(create_region_land_layers(minimal_theme)) == ["landcover-us", "landuse-us"]

    def test_landcover_excludes_ice_when_ice_on(self, minimal_theme, full_theme):
        """Test ice polygons are filtered from landcover only with ice layers."""
        assert create_landcover_layers(minimal_theme)[0].to_json()["filter"] is True
        assert create_landcover_layers(full_theme)[0].to_json()["filter"] == [
            "!=", ["get", "class"], "ice"
        ]

    def test_transparent_land(self, minimal_theme):
        """Test transparent landcover gets zero opacity."""
        theme = replace(minimal_theme, land=LandConfig(transparent=True))
        layers = create_landcover_layers(theme)
        assert layers[0].paint["fill-opacity"] == 0
        assert layers[2].paint["fill-opacity"] == 0.6

    def test_low_detail_layers_overlap_mid(self, minimal_theme):
        """Test low-detail layers run half a zoom into the mid range."""
        low, mid = create_water_layers(minimal_theme)[:2]
        assert low.maxzoom == 6.5
        assert mid.minzoom == 6

    def test_transparent_water(self, minimal_theme):
        """Test water and waterway transparency are independent."""
        theme = replace(minimal_theme, water=WaterConfig(transparent=True))
        fill, line = create_region_water_layers(theme)
        assert fill.paint["fill-opacity"] == 0
        assert line.paint["line-opacity"] == 1.0


class TestBoundaries:
    """Tests for boundary lines."""

    def test_all_kinds(self, minimal_theme):
        """Test country, maritime and state lines by default."""
        assert ids(create_boundary_layers(minimal_theme)) == [
            "boundary-country-world", "boundary-country-world-mid",
            "boundary-maritime-world", "boundary-maritime-world-mid",
            "boundary-state-world", "boundary-state-world-mid",
        ]
        assert ids(create_region_boundary_layers(minimal_theme)) == [
            "boundary-country-us", "boundary-maritime-us", "boundary-state-us"
        ]

    def test_disabled_kinds(self, minimal_theme):
        """Test switched-off boundary kinds are left out."""
        theme = replace(minimal_theme, boundary=BoundaryConfig(maritime=False, state=False))
        assert ids(create_boundary_layers(theme)) == [
            "boundary-country-world", "boundary-country-world-mid"
        ]
        assert ids(create_region_boundary_layers(theme)) == ["boundary-country-us"]

    def test_country_opacity_stops(self, minimal_theme):
        """Test zoom-stop country opacity interpolates on world layers."""
        opacities = replace(
            minimal_theme.opacities,
            boundary=replace(minimal_theme.opacities.boundary,
                             country={"z0": 0.25, "z6": 0.75, "z10": 0.8}),
        )
        theme = replace(minimal_theme, opacities=opacities)
        world = create_boundary_layers(theme)[0].to_json()
        assert world["paint"]["line-opacity"][:3] == ["interpolate", ["linear"], ["zoom"]]
        region = create_region_boundary_layers(theme)[0]
        assert region.paint["line-opacity"] == 0.8

    def test_region_country_opacity_interpolated(self, minimal_theme):
        """Test region country opacity interpolates stops that bracket z10."""
        opacities = replace(
            minimal_theme.opacities,
            boundary=replace(minimal_theme.opacities.boundary,
                             country={"z6": 0.6, "z12": 0.9}),
        )
        theme = replace(minimal_theme, opacities=opacities)
        region = create_region_boundary_layers(theme)[0]
        assert region.paint["line-opacity"] == pytest.approx(0.8)


class TestRoads:
    """Tests for road groups."""

    def test_world_roads(self, minimal_theme):
        """Test major roads from the world sources."""
        assert ids(create_world_road_layers(minimal_theme)) == ["road-world", "road-world-mid"]

    def test_region_roads(self, minimal_theme):
        """Test tunnels first, then casings, paths, bridges, railway and buildings."""
        assert ids(create_region_road_layers(minimal_theme)) == [
            "road-tunnel-casing", "road-tunnel", "road-casing", "paths",
            "road-bridge", "railway", "building",
        ]

    def test_overlay_bridges_last(self, minimal_theme):
        """Test regional overlay draws bridges after every other road."""
        layers = ids(create_region_overlay_road_layers(minimal_theme))
        assert layers[0] == "building-us"
        assert layers[-1] == "road-bridge-us"
        assert "road-parking-aisle" in layers

    def test_tunnel_dashes(self, minimal_theme):
        """Test tunnels are dashed."""
        tunnel = create_region_road_layers(minimal_theme)[1]
        assert tunnel.to_json()["paint"]["line-dasharray"] == [2, 2]

    def _with_variants(self, theme, **variants):
        road = replace(theme.colors.road, **variants)
        return replace(theme, colors=replace(theme.colors, road=road))

    def test_tunnel_table_casing(self, minimal_theme):
        """Test the tunnel table casing colours the tunnel casing."""
        theme = self._with_variants(
            minimal_theme, tunnel=RoadVariantColors(default="#222222", casing="#111111")
        )
        assert create_region_road_layers(theme)[0].paint["line-color"] == "#111111"

    def test_tunnel_casing_defaults_to_road_casing(self, minimal_theme):
        """Test tunnels without a casing colour use the road casing."""
        casing = create_region_road_layers(minimal_theme)[0]
        assert casing.paint["line-color"] == minimal_theme.colors.road.casing

    def test_bridge_casing(self, minimal_theme):
        """Test a bridge table casing adds casings just under both bridge layers."""
        theme = self._with_variants(
            minimal_theme, bridge=RoadVariantColors(default="#aaaaaa", casing="#111111")
        )
        region = create_region_road_layers(theme)
        bridge = ids(region).index("road-bridge")
        assert region[bridge - 1].id == "road-bridge-casing"
        assert region[bridge - 1].paint["line-color"] == "#111111"
        overlay = ids(create_region_overlay_road_layers(theme))
        assert overlay[-2:] == ["road-bridge-casing-us", "road-bridge-us"]

    def test_no_bridge_casing_by_default(self, minimal_theme):
        """Test bridges have no casing unless the bridge table sets one."""
        assert "road-bridge-casing" not in ids(create_region_road_layers(minimal_theme))
        assert "road-bridge-casing-us" not in ids(create_region_overlay_road_layers(minimal_theme))


class TestBuildings:
    """Tests for building footprints."""

    def test_disabled(self, minimal_theme):
        """Test disabled buildings produce no layers."""
        theme = replace(minimal_theme, buildings=BuildingsConfig(enabled=False))
        assert "building" not in ids(create_region_road_layers(theme))
        assert "building-us" not in ids(create_region_overlay_road_layers(theme))

    def test_max_zoom_fade(self, minimal_theme):
        """Test buildings hold opacity to max_zoom and fade out one zoom later."""
        theme = replace(minimal_theme, buildings=BuildingsConfig(min_zoom=13, max_zoom=15))
        building = create_region_road_layers(theme)[-1].to_json()
        assert building["maxzoom"] == 16
        assert building["paint"]["fill-opacity"] == [
            "interpolate", ["linear"], ["zoom"], 13, 0.9, 15, 0.9, 16, 0.0
        ]

    def test_min_zoom_above_range(self, minimal_theme):
        """Test the overlay layer is dropped when it would start past the range."""
        theme = replace(minimal_theme, buildings=BuildingsConfig(min_zoom=6, max_zoom=11))
        assert "building-us" not in ids(create_region_overlay_road_layers(theme))


class TestOptionalDomains:
    """Tests for opt-in domain layers."""

    @pytest.mark.parametrize("factory", [
        create_hillshade_layers, create_bathymetry_layers, create_contour_layers,
        create_ice_layers, create_grid_layers, create_aeroway_layers, create_places_layers,
    ])
    def test_off_without_config(self, minimal_theme, factory):
        """Test optional domains produce nothing when not configured."""
        assert factory(minimal_theme) == []

    def test_hillshade(self, full_theme):
        """Test hillshade fades out after its max zoom."""
        (layer,) = create_hillshade_layers(full_theme)
        assert layer.source == "world-hillshade"
        assert layer.maxzoom == 13
        assert layer.to_json()["paint"]["hillshade-exaggeration"][0] == "interpolate"

    def test_bathymetry_deepest_first(self, full_theme):
        """Test twelve depth bands drawn from deepest to shallowest."""
        layers = create_bathymetry_layers(full_theme)
        assert len(layers) == 12
        assert layers[0].source_layer == "ne_10m_bathymetry_A_10000"
        assert layers[-1].source_layer == "ne_10m_bathymetry_L_0"
        assert all(layer.maxzoom == 7 for layer in layers)

    def test_contour_boosts_inside_range(self, full_theme):
        """Test boost stops only appear strictly inside the zoom range."""
        major, minor = create_contour_layers(full_theme)
        assert major.to_json()["paint"]["line-width"][3::2] == [6, 8, 9, 12]
        assert minor.to_json()["paint"]["line-width"][3::2] == [8, 9, 12]
        assert major.to_json()["paint"]["line-opacity"][3::2] == [6, 8, 9, 12, 13]

    def test_contour_min_zoom_must_be_below_max(self, full_theme):
        """Test contours starting at their max zoom raise."""
        theme = replace(full_theme, contours=ContoursConfig(min_zoom=12, max_zoom=12))
        with pytest.raises(ValueError, match="contour-major"):
            create_contour_layers(theme)

    def test_ice_layers(self, full_theme):
        """Test ice fills with outlines and a visible edge."""
        assert ids(create_ice_layers(full_theme)) == [
            "ice-glaciated", "ice-glaciated-outline", "ice-shelves",
            "ice-shelves-outline", "ice-edge",
        ]

    def test_ice_edge_hidden(self, full_theme):
        """Test a disabled ice edge is kept as an invisible layer."""
        theme = replace(full_theme, ice=IceConfig(ice_edge=None))
        assert ids(create_ice_layers(theme))[-1] == "ice-edge-hidden"

    def test_grid_lines_and_labels(self, full_theme):
        """Test latitude and longitude lines each followed by labels."""
        layers = create_grid_layers(full_theme)
        assert ids(layers) == [
            "grid-latitude", "grid-latitude-label", "grid-longitude", "grid-longitude-label"
        ]
        assert layers[0].to_json()["filter"] == [
            "all", ["==", ["get", "kind"], "parallel"], ["==", ["get", "step"], "10"]
        ]
        label = layers[1].to_json()["layout"]["text-field"]
        assert label[0] == "concat"
        assert "°" in label

    def test_aeroway(self, full_theme):
        """Test runways through helipads, then airport labels."""
        assert ids(create_aeroway_layers(full_theme)) == [
            "aeroway-runway-major", "aeroway-runway-all", "aeroway-apron-fill",
            "aeroway-apron-outline", "aeroway-taxiway", "aeroway-helipad-fill",
            "aeroway-label-major", "aeroway-label-detailed",
        ]

    def test_places_paint(self, full_theme):
        """Test places colour by density state and fade in from z5 to z6.5."""
        fill, outline = create_places_layers(full_theme)
        paint = fill.to_json()["paint"]
        assert paint["fill-color"][0] == "case"
        assert paint["fill-color"][1] == ["!=", ["feature-state", "pop_density_sqmi"], None]
        assert paint["fill-color"][2][0] == "step"
        assert paint["fill-color"][-1] == "#6a7588"
        opacity = paint["fill-opacity"]
        assert opacity[:7] == ["interpolate", ["linear"], ["zoom"], 5, 0, 6.5, opacity[6]]
        assert opacity[6][:2] == ["*", 0.15]
        assert outline.source == "places-source"

    def test_places_without_density_ranges(self, full_theme):
        """Test places with no density ranges use the default colours directly."""
        places = PlacesConfig(density_colors=DensityColors(default_fill_color="#ecda9a"))
        fill, outline = create_places_layers(replace(full_theme, places=places))
        fill_color = fill.to_json()["paint"]["fill-color"]
        line_color = outline.to_json()["paint"]["line-color"]
        assert fill_color[2] == "#ecda9a"
        assert line_color[2] == "#b1a474"

    def test_places_single_density_range(self, full_theme):
        """Test one range gives a step with one breakpoint and a derived outline."""
        density = DensityColors(
            default_fill_color="#ecda9a", ranges=(DensityColorRange(100, "#f6e6b8"),)
        )
        places = PlacesConfig(density_colors=density)
        fill, outline = create_places_layers(replace(full_theme, places=places))
        state = ["feature-state", "pop_density_sqmi"]
        assert fill.to_json()["paint"]["fill-color"][2] == ["step", state, "#ecda9a", 100, "#f6e6b8"]
        assert outline.to_json()["paint"]["line-color"][2] == [
            "step", state, "#b1a474", 100, "#b9ad8a"
        ]
