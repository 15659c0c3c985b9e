#!/usr/bin/env python3
"""Tests for the theme model and its resolution functions."""
import pytest
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.theme import (
    BathymetryConfig,
    ClassColors,
    FEATURE_CLASSES,
    GridConfig,
    LabelFonts,
    LandConfig,
    MinZoom,
    PoiCategory,
    POIsConfig,
    RoadVariantColors,
    Theme,
    ThemeOpacities,
    ThemeSettings,
    ThemeWidths,
    WaterColors,
    WaterConfig,
    domain_enabled,
    evaluate_stops,
    normalize_zoom_stops,
    parse_zoom_key,
    poi_category_enabled,
    poi_min_zoom,
    resolve_color,
    resolve_default_color,
    resolve_label_fonts,
    resolve_min_zoom,
    road_class_width_at,
    stop_value,
)


class TestZoomKeys:
    """Tests for zoom-stop key parsing."""

    def test_prefixed_integer_key(self):
        """Test "z6" parses to 6."""
        assert parse_zoom_key("z6") == 6

    def test_underscore_fraction_key(self):
        """Test "z6_5" parses to 6.5."""
        assert parse_zoom_key("z6_5") == 6.5

    def test_numeric_keys(self):
        """Test numbers pass through, integral floats come back as int."""
        assert parse_zoom_key(6.5) == 6.5
        assert parse_zoom_key(12.0) == 12
        assert isinstance(parse_zoom_key(12.0), int)

    def test_unparseable_keys_return_none(self):
        """Test garbage, booleans and negative zooms are rejected."""
        assert parse_zoom_key("zoom") is None
        assert parse_zoom_key(True) is None
        assert parse_zoom_key(-1) is None


class TestNormalizeZoomStops:
    """Tests for zoom-stop normalization."""

    def test_sorted_by_zoom(self):
        """Test stops come back in ascending zoom order."""
        assert normalize_zoom_stops({"z12": 1, "z6": 0.5}) == [(6, 0.5), (12, 1)]

    def test_invalid_entries_dropped(self):
        """Test unparseable keys and non-numeric values are ignored."""
        stops = {"z6": 0.5, "bogus": 3, "z8": "wide", "z10": None, "z12": 1}
        assert normalize_zoom_stops(stops) == [(6, 0.5), (12, 1)]

    def test_duplicate_zoom_keeps_last(self):
        """Test "z6" and 6 name the same zoom and the later entry wins."""
        assert normalize_zoom_stops({"z6": 1, 6: 2}) == [(6, 2)]

    def test_empty_and_none(self):
        """Test missing stops normalize to an empty list."""
        assert normalize_zoom_stops(None) == []
        assert normalize_zoom_stops({}) == []

    def test_stop_value_explicit_and_default(self):
        """Test stop_value only returns explicitly given zooms."""
        stops = {"z6": 1.2, "z10": 2.0}
        assert stop_value(stops, 6, 9) == 1.2
        assert stop_value(stops, 8, 9) == 9

    def test_evaluate_stops_interpolates_and_clamps(self):
        """Test piecewise-linear evaluation with clamping at both ends."""
        stops = [(6, 1.0), (12, 3.0)]
        assert evaluate_stops(stops, 9) == pytest.approx(2.0)
        assert evaluate_stops(stops, 0) == 1.0
        assert evaluate_stops(stops, 20) == 3.0


class TestValidation:
    """Tests for construction-time validation."""

    def test_named_color_rejected(self):
        """Test colour names are not accepted."""
        with pytest.raises(ValueError, match="default"):
            ClassColors(default="red")

    def test_water_fill_must_be_hex(self):
        """Test water fill needs hex because bathymetry derives colours from it."""
        with pytest.raises(ValueError, match="water.fill"):
            WaterColors(fill="rgb(10, 20, 30)", line="#000000")

    def test_functional_color_allowed_elsewhere(self):
        """Test rgba() strings are fine where no colour math happens."""
        colors = WaterColors(fill="#000000", line="rgba(0, 0, 0, 0.5)")
        assert colors.line.startswith("rgba")

    def test_opacity_out_of_range(self):
        """Test opacities outside [0, 1] raise."""
        with pytest.raises(ValueError, match="landcover"):
            ThemeOpacities(landcover=1.5)

    def test_zoom_range_must_be_ordered(self):
        """Test min_zoom must be below max_zoom."""
        with pytest.raises(ValueError, match="bathymetry"):
            BathymetryConfig(min_zoom=6, max_zoom=6)
        with pytest.raises(ValueError, match="grid"):
            GridConfig(min_zoom=10, max_zoom=2)

    def test_unknown_projection(self):
        """Test only mercator and globe projections are accepted."""
        with pytest.raises(ValueError, match="projection"):
            ThemeSettings(projection="albers")

    def test_real_world_scale_start_below_max(self):
        """Test real-world scaling must start below z20."""
        with pytest.raises(ValueError, match="real_world_scale_min_zoom"):
            ThemeSettings(real_world_scale=True, real_world_scale_min_zoom=20)

    def test_empty_theme_name(self, minimal_theme):
        """Test themes need a name."""
        with pytest.raises(ValueError, match="name"):
            replace(minimal_theme, name="")


class TestResolveColor:
    """Tests for colour resolution."""

    def test_own_class_color(self, minimal_theme):
        """Test a class with its own colour uses it."""
        assert resolve_color("land", "wood", minimal_theme) == "#1c2a22"

    def test_alias_color(self, minimal_theme):
        """Test scrubland falls back to the scrub colour."""
        assert resolve_color("land", "scrubland", minimal_theme) == "#202820"

    def test_known_class_without_color_uses_fallback(self, minimal_theme):
        """Test a known class with no colour gets the table fallback."""
        assert resolve_color("land", "sand", minimal_theme) == "#1a1f26"

    def test_unknown_class_uses_default(self, minimal_theme):
        """Test classes outside the vocabulary get the category default."""
        assert resolve_color("landuse", "spaceport", minimal_theme) == "#1b2027"

    def test_waterway_classes(self, minimal_theme):
        """Test waterway lookups use water classes then the line colour."""
        assert resolve_color("waterway", "river", minimal_theme) == "#14283c"
        assert resolve_color("waterway", "canal", minimal_theme) == "#13263a"

    def test_minor_roads_use_residential(self, minimal_theme):
        """Test minor and unclassified roads resolve like residential."""
        assert resolve_color("road", "minor", minimal_theme) == "#3b4659"
        assert resolve_color("road", "unclassified", minimal_theme) == "#3b4659"

    def test_tunnel_inherits_road_without_table(self, minimal_theme):
        """Test tunnels resolve exactly like roads when no tunnel table exists."""
        for cls in ("motorway", "residential", "footway"):
            assert resolve_color("tunnel", cls, minimal_theme) == resolve_color("road", cls, minimal_theme)

    def test_bridge_table(self, minimal_theme):
        """Test a bridge table overrides road colours."""
        road = replace(
            minimal_theme.colors.road,
            bridge=RoadVariantColors(default="#999999", classes={"motorway": "#aaaaaa"}),
        )
        theme = replace(minimal_theme, colors=replace(minimal_theme.colors, road=road))
        assert resolve_color("bridge", "motorway", theme) == "#aaaaaa"
        assert resolve_color("bridge", "primary", theme) == "#999999"

    def test_override_color(self, minimal_theme):
        """Test an enabled land override wins over every class."""
        theme = replace(minimal_theme, land=LandConfig(use_override_color=True,
                                                       override_color="#ff0000"))
        assert resolve_color("land", "wood", theme) == "#ff0000"
        assert resolve_default_color("land", theme) == "#ff0000"

    def test_override_needs_flag(self, minimal_theme):
        """Test an override colour without the flag is ignored."""
        theme = replace(minimal_theme, water=WaterConfig(override_color="#ff0000"))
        assert resolve_color("water", "lake", theme) == "#0f1e2e"

    @pytest.mark.parametrize("category", sorted(FEATURE_CLASSES))
    def test_unknown_class_falls_back(self, full_theme, category):
        """Test classes outside the vocabulary still resolve to a colour."""
        color = resolve_color(category, "not-a-class", full_theme)
        assert color == resolve_default_color(category, full_theme)
        assert color.startswith("#")

    def test_unknown_category(self, minimal_theme):
        """Test unknown categories raise."""
        with pytest.raises(ValueError, match="category"):
            resolve_color("lava", "hot", minimal_theme)


class TestRoadClassWidth:
    """Tests for per-class road widths."""

    def test_explicit_stop(self):
        """Test an explicit class stop is used as-is."""
        widths = ThemeWidths().road
        assert road_class_width_at(widths, "motorway", 12, 0.5) == 3

    def test_interpolated_between_stops(self):
        """Test widths between stops are interpolated linearly."""
        widths = ThemeWidths().road
        assert road_class_width_at(widths, "motorway", 9, 0.5) == pytest.approx(2.0)

    def test_minor_shares_residential(self):
        """Test minor roads take the residential row."""
        widths = ThemeWidths().road
        assert road_class_width_at(widths, "minor", 15, 0.5) == 4

    def test_unknown_class_uses_default_row(self):
        """Test classes without a row use the default stops."""
        widths = ThemeWidths().road
        assert road_class_width_at(widths, "", 6, 0.5) == 0.4


class TestResolution:
    """Tests for the remaining resolve_* helpers."""

    def test_label_fonts_defaults(self, minimal_theme):
        """Test unset label fonts fall back to regular and italic stacks."""
        fonts = resolve_label_fonts(minimal_theme)
        assert fonts.place == ("Noto Sans Regular",)
        assert fonts.water == ("Noto Sans Italic",)

    def test_label_fonts_default_group(self, minimal_theme):
        """Test a default label font applies to every unset group, water included."""
        theme = replace(minimal_theme, label_fonts=LabelFonts(default=("Inter",), road=("Mono",)))
        fonts = resolve_label_fonts(theme)
        assert fonts.place == ("Inter",)
        assert fonts.water == ("Inter",)
        assert fonts.road == ("Mono",)

    def test_min_zoom_scalar(self, minimal_theme):
        """Test a single min zoom applies to both projections."""
        theme = replace(minimal_theme, settings=ThemeSettings(min_zoom=1.5))
        assert resolve_min_zoom(theme) == MinZoom(mercator=1.5, globe=1.5)

    def test_domains_off_by_default(self, minimal_theme):
        """Test optional domains are off without a sub-config."""
        for domain in ("shields", "pois", "bathymetry", "grid", "places"):
            assert not domain_enabled(minimal_theme, domain)

    def test_unknown_domain(self, minimal_theme):
        """Test unknown domain names raise."""
        with pytest.raises(ValueError, match="domain"):
            domain_enabled(minimal_theme, "weather")

    def test_poi_category_needs_config(self, minimal_theme):
        """Test POI categories are off unless configured and enabled."""
        pois = POIsConfig(airport=PoiCategory(), zoo=PoiCategory(enabled=False))
        theme = replace(minimal_theme, pois=pois)
        assert poi_category_enabled(theme, "airport")
        assert not poi_category_enabled(theme, "zoo")
        assert not poi_category_enabled(theme, "museum")

    def test_poi_min_zoom_fallbacks(self, minimal_theme):
        """Test category min zoom, then the caller default, then the POI-wide one."""
        pois = POIsConfig(min_zoom=11, airport=PoiCategory(min_zoom=9), rail=PoiCategory())
        theme = replace(minimal_theme, pois=pois)
        assert poi_min_zoom(theme, "airport") == 9
        assert poi_min_zoom(theme, "rail", 14) == 14
        assert poi_min_zoom(theme, "rail") == 11

    def test_theme_is_immutable(self, minimal_theme):
        """Test themes cannot be mutated in place."""
        with pytest.raises(Exception):
            minimal_theme.name = "Other"
        assert isinstance(minimal_theme, Theme)
