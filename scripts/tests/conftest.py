#!/usr/bin/env python3
"""Pytest configuration and shared fixtures."""
import pytest
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.sources import StyleUrls
from basemap_styles.theme import (
    AerowayConfig,
    BathymetryConfig,
    BoundaryColors,
    BuildingColors,
    ClassColors,
    ContoursConfig,
    GridConfig,
    GridLabel,
    GridLine,
    HillshadeConfig,
    IceConfig,
    LabelColors,
    LabelStyle,
    PlacesConfig,
    PoiCategory,
    POIsConfig,
    RoadColors,
    RoadLabelColors,
    RoadLabelTone,
    ShieldsConfig,
    Theme,
    ThemeColors,
    WaterColors,
)


def make_colors() -> ThemeColors:
    """Small but complete colour set."""
    return ThemeColors(
        background="#0b0f14",
        land=ClassColors(default="#1a1f26", classes={"wood": "#1c2a22", "scrub": "#202820"}),
        landuse=ClassColors(default="#1b2027", classes={"park": "#1d2b23"}),
        water=WaterColors(fill="#0f1e2e", line="#13263a", classes={"river": "#14283c"}),
        boundary=BoundaryColors(country="#5a6578", state="#3a4455"),
        road=RoadColors(
            motorway="#6a7588",
            trunk="#5f6a7d",
            primary="#566174",
            secondary="#4d586b",
            tertiary="#444f62",
            residential="#3b4659",
            service="#323d50",
            other="#2a3548",
            casing="#11161d",
        ),
        path="#2a3040",
        railway="#333a48",
        building=BuildingColors(fill="#222a35", outline="#1a2029"),
        label=LabelColors(
            place=LabelStyle(color="#a8b8d0", halo="#0b0f14"),
            road=RoadLabelColors(
                major=RoadLabelTone("#8a9ab0", 0.9),
                secondary=RoadLabelTone("#7a8aa0", 0.8),
                tertiary=RoadLabelTone("#6a7a90", 0.7),
                other=RoadLabelTone("#5a6a80", 0.6),
                halo="#0b0f14",
            ),
            water=LabelStyle(color="#6a8aa8", halo="#0b0f14"),
        ),
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def minimal_theme():
    """Theme with every optional domain switched off."""
    return Theme(name="Minimal", colors=make_colors())


@pytest.fixture
def full_theme(minimal_theme):
    """Theme with every optional domain switched on."""
    pois = POIsConfig(**{
        name: PoiCategory()
        for name in ("airport", "airfield", "hospital", "museum", "zoo",
                     "stadium", "park", "rail", "school")
    })
    line = GridLine(label=GridLabel())
    return replace(
        minimal_theme,
        name="Full",
        shields=ShieldsConfig(),
        pois=pois,
        bathymetry=BathymetryConfig(),
        contours=ContoursConfig(),
        ice=IceConfig(),
        hillshade=HillshadeConfig(max_zoom=12),
        grid=GridConfig(latitude=line, longitude=line),
        aeroway=AerowayConfig(),
        places=PlacesConfig(),
    )


@pytest.fixture
def urls():
    """Deterministic endpoints, independent of the environment."""
    return StyleUrls(
        glyphs_base_url="https://glyphs.example.com",
        glyphs_path="fonts",
        sprite_base_url="https://sprites.example.com",
        sprite_path="sprites/basemap",
        data_base_url="https://tiles.example.com",
    )


@pytest.fixture
def places_urls(urls):
    return replace(urls, places_url="pmtiles://https://tiles.example.com/places.pmtiles")
