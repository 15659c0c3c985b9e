#!/usr/bin/env python3
"""Tests for symbol layer factories."""
import pytest
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.labels import (
    create_basemap_water_label_layers,
    create_highway_shield_layers,
    create_place_label_layers,
    create_poi_layers,
    create_road_label_layers,
    create_waterway_label_layers,
    create_world_labels_water_layers,
)
from basemap_styles.theme import PoiCategory, POIsConfig, ShieldsConfig, ShieldStyle


def ids(layers):
    return [layer.id for layer in layers]


class TestRoadLabels:
    """Tests for road name labels."""

    def test_tiers(self, minimal_theme):
        """Test four label tiers appear at increasing zooms."""
        layers = create_road_label_layers(minimal_theme)
        assert ids(layers) == [
            "road-label-major", "road-label-secondary", "road-label-tertiary", "road-label-other"
        ]
        assert [layer.minzoom for layer in layers] == [8, 10, 12, 14]

    def test_tone_colors(self, minimal_theme):
        """Test each tier takes its colour and opacity from the theme."""
        major = create_road_label_layers(minimal_theme)[0]
        assert major.paint["text-color"] == "#8a9ab0"
        assert major.paint["text-opacity"] == 0.9

    def test_line_placement(self, minimal_theme):
        """Test road names follow the line."""
        for layer in create_road_label_layers(minimal_theme):
            assert layer.layout["symbol-placement"] == "line"
            assert layer.source_layer == "transportation_name"


class TestShields:
    """Tests for highway shields."""

    def test_off_without_config(self, minimal_theme):
        """Test shields are opt-in."""
        assert create_highway_shield_layers(minimal_theme) == []

    def test_default_shields(self, full_theme):
        """Test all three networks with their sprite images."""
        layers = create_highway_shield_layers(full_theme)
        assert ids(layers) == [
            "highway-shield-interstate", "highway-shield-us", "highway-shield-state"
        ]
        assert [layer.layout["icon-image"] for layer in layers] == [
            "shield-interstate", "shield-us", "shield-state"
        ]
        assert [layer.minzoom for layer in layers] == [6, 7, 8]

    def test_global_min_zoom_wins_when_later(self, full_theme):
        """Test a later global shield min zoom overrides per-style ones."""
        theme = replace(full_theme, shields=ShieldsConfig(min_zoom=9))
        assert {layer.minzoom for layer in create_highway_shield_layers(theme)} == {9}

    def test_disabled_style(self, full_theme):
        """Test disabled shield kinds are skipped."""
        shields = ShieldsConfig(
            us_highway=ShieldStyle(sprite="shield-us", text_color="#ffffff",
                                   min_zoom=7, enabled=False),
        )
        theme = replace(full_theme, shields=shields)
        assert "highway-shield-us" not in ids(create_highway_shield_layers(theme))

    def test_shield_text(self, full_theme):
        """Test shields show the route ref and fit the icon to the text."""
        layer = create_highway_shield_layers(full_theme)[0].to_json()
        assert layer["layout"]["text-field"] == ["get", "ref"]
        assert layer["layout"]["icon-text-fit"] == "both"
        assert layer["layout"]["icon-text-fit-padding"] == [2, 4, 2, 4]


class TestWaterLabels:
    """Tests for water body and waterway labels."""

    def test_world_labels(self, minimal_theme):
        """Test the four layers drawn from the world_labels source."""
        layers = create_world_labels_water_layers(minimal_theme)
        assert ids(layers) == [
            "marine-label-world-labels-place-ocean",
            "marine-label-world-labels-place",
            "water-label-world-labels-watername-ocean",
            "water-label-world-labels-watername",
        ]
        assert {layer.source for layer in layers} == {"world_labels"}

    def test_basemap_water_labels(self, minimal_theme):
        """Test world, mid and regional water labels."""
        layers = ids(create_basemap_water_label_layers(minimal_theme))
        assert len(layers) == 16
        assert layers[0] == "marine-label-world-watername-ocean"
        assert layers[-1] == "water-label-us"
        assert "debug" not in " ".join(layers)

    def test_waterway_labels(self, minimal_theme):
        """Test waterway names for each detail level."""
        layers = create_waterway_label_layers(minimal_theme)
        assert ids(layers) == [
            "waterway-label-world", "waterway-label-world-mid", "waterway-label-us"
        ]
        assert all(layer.layout["symbol-placement"] == "line" for layer in layers)

    def test_water_label_colour(self, minimal_theme):
        """Test water labels take the water label colour."""
        for layer in create_basemap_water_label_layers(minimal_theme):
            assert layer.paint["text-color"] == "#6a8aa8"


class TestPlaceLabels:
    """Tests for continent, country, state and city labels."""

    def test_ids(self, minimal_theme):
        """Test place labels from continents down to towns."""
        assert ids(create_place_label_layers(minimal_theme)) == [
            "continent-label",
            "country-label-world",
            "country-label-world-mid",
            "country-label",
            "state-label-us-world",
            "state-label-us",
            "city-label-world-rank1-2",
            "city-label-us-rank1-2",
            "city-label-us-all",
        ]

    def test_country_labels_uppercase(self, minimal_theme):
        """Test country names are uppercased."""
        layers = create_place_label_layers(minimal_theme)
        assert layers[1].layout["text-transform"] == "uppercase"

    def test_state_and_town_opacity(self, minimal_theme):
        """Test states and towns are fainter than the general place opacity."""
        layers = {layer.id: layer for layer in create_place_label_layers(minimal_theme)}
        assert layers["state-label-us"].paint["text-opacity"] == 0.5
        assert layers["city-label-us-all"].paint["text-opacity"] == 0.6
        assert layers["country-label"].paint["text-opacity"] == 0.75

    def test_continent_filter_compares_zoom(self, minimal_theme):
        """Test continents only show up to their max zoom."""
        continent = create_place_label_layers(minimal_theme)[0].to_json()
        assert ["<=", ["zoom"], 2.5] in continent["filter"]


class TestPoiLabels:
    """Tests for POI icon layers."""

    def test_off_without_config(self, minimal_theme):
        """Test POIs are opt-in."""
        assert create_poi_layers(minimal_theme) == []

    def test_disabled(self, full_theme):
        """Test a disabled POI config produces nothing."""
        theme = replace(full_theme, pois=replace(full_theme.pois, enabled=False))
        assert create_poi_layers(theme) == []

    def test_every_source(self, full_theme):
        """Test each category repeats for every POI source."""
        layers = ids(create_poi_layers(full_theme))
        for source in ("poi_us", "us_high", "world_mid", "world_low"):
            assert f"poi-airport-{source}" in layers
            assert f"poi-hospital-rank1-{source}" in layers
            assert f"poi-rail-rank3plus-{source}" in layers
            assert f"place-stadium-{source}" in layers
        assert layers[-2:] == ["aerodrome-label-airport-us_high", "park-label-us_high"]
        assert len(layers) == 78
        assert len(set(layers)) == len(layers)

    def test_single_category(self, minimal_theme):
        """Test only configured categories get layers."""
        theme = replace(minimal_theme, pois=POIsConfig(zoo=PoiCategory(min_zoom=11)))
        layers = create_poi_layers(theme)
        assert ids(layers) == [
            "poi-zoo-poi_us", "poi-zoo-us_high", "poi-zoo-world_mid", "poi-zoo-world_low"
        ]
        assert {layer.minzoom for layer in layers} == {11}

    def test_rank_tier_zooms(self, full_theme):
        """Test lower-ranked tiers wait for later zooms."""
        layers = {layer.id: layer for layer in create_poi_layers(full_theme)}
        assert layers["poi-museum-rank1-poi_us"].minzoom == 14
        assert layers["poi-museum-rank2-poi_us"].minzoom == 14.5
        assert layers["poi-museum-rank3plus-poi_us"].minzoom == 15
        assert layers["poi-rail-rank1-poi_us"].minzoom == 14

    @pytest.mark.parametrize("category", ["airport", "zoo", "park"])
    def test_icon_image(self, full_theme, category):
        """Test icons are named after their category."""
        layers = {layer.id: layer for layer in create_poi_layers(full_theme)}
        assert layers[f"poi-{category}-us_high"].layout["icon-image"] == category
