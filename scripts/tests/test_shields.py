#!/usr/bin/env python3
"""Tests for shield sprite drawing."""
import json
import pytest
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np
from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.presets import MONOCHROME
from basemap_styles.shields import (
    add_shields_to_sheet,
    build_shields,
    render_shield,
    theme_shields,
)
from basemap_styles.theme import ShieldsConfig, ShieldStyle

STYLE = ShieldStyle(
    sprite="shield-test",
    text_color="#ffffff",
    min_zoom=6,
    upper_background="#aa0000",
    lower_background="#0000aa",
    background="#00aa00",
    stroke_color="#ffffff",
    stroke_width=2,
)


class TestRenderShield:
    """Tests for drawing single shields."""

    @pytest.mark.parametrize("kind,size", [
        ("interstate", 28), ("us_highway", 26), ("state_highway", 34),
    ])
    def test_sizes(self, kind, size):
        """Test each shape has its logical size at 1x and double at 2x."""
        assert render_shield(kind, STYLE).size == (size, size)
        assert render_shield(kind, STYLE, pixel_ratio=2).size == (size * 2, size * 2)

    def test_rgba_with_transparent_corners(self):
        """Test shields are RGBA with nothing drawn in the corners."""
        img = render_shield("us_highway", STYLE, pixel_ratio=2)
        assert img.mode == "RGBA"
        assert img.getpixel((0, 0))[3] == 0

    def test_interstate_two_tone(self):
        """Test the interstate body is red above the divider and blue below."""
        pixels = np.array(render_shield("interstate", STYLE, pixel_ratio=2))
        upper = pixels[8, 28]
        lower = pixels[35, 28]
        assert upper[0] > upper[2]
        assert lower[2] > lower[0]

    def test_unknown_kind(self):
        """Test unknown shield kinds raise."""
        with pytest.raises(ValueError, match="Unknown shield kind"):
            render_shield("county", STYLE)


class TestSpriteSheet:
    """Tests for appending shields to sprite sheets."""

    def _existing_sheet(self, sprites_dir: Path):
        sprites_dir.mkdir(parents=True, exist_ok=True)
        Image.new("RGBA", (40, 20), (255, 0, 0, 255)).save(sprites_dir / "basemap.png")
        with open(sprites_dir / "basemap.json", "w") as f:
            json.dump({"airport": {"x": 0, "y": 0, "width": 20, "height": 20, "pixelRatio": 1}}, f)

    def test_appended_below_existing(self, temp_dir):
        """Test shields are stacked under existing icons."""
        self._existing_sheet(temp_dir)
        shields = [("interstate", "shield-test", STYLE)]
        png_path, json_path = add_shields_to_sheet(temp_dir, shields)

        index = json.loads(json_path.read_text())
        assert index["airport"]["y"] == 0
        assert index["shield-test"] == {
            "width": 28, "height": 28, "x": 0, "y": 20, "pixelRatio": 1
        }
        with Image.open(png_path) as sheet:
            assert sheet.size == (40, 48)
            assert sheet.getpixel((5, 5)) == (255, 0, 0, 255)

    def test_rerun_replaces_entries(self, temp_dir):
        """Test a second run does not stack another copy."""
        self._existing_sheet(temp_dir)
        shields = [("interstate", "shield-test", STYLE)]
        add_shields_to_sheet(temp_dir, shields)
        png_path, json_path = add_shields_to_sheet(temp_dir, shields)

        assert json.loads(json_path.read_text())["shield-test"]["y"] == 20
        with Image.open(png_path) as sheet:
            assert sheet.height == 48

    def test_new_sheet(self, temp_dir):
        """Test shields start a sheet when none exists."""
        png_path, json_path = add_shields_to_sheet(
            temp_dir / "sprites", theme_shields(MONOCHROME), pixel_ratio=2
        )
        index = json.loads(json_path.read_text())
        assert png_path.name == "basemap@2x.png"
        assert [index[name]["y"] for name in (
            "shield-interstate-custom", "shield-ushighway-custom", "shield-state-custom"
        )] == [0, 56, 108]
        with Image.open(png_path) as sheet:
            assert sheet.size == (68, 176)

    def test_build_both_ratios(self, temp_dir):
        """Test both sheet resolutions are written."""
        written = build_shields(MONOCHROME, temp_dir)
        assert sorted(p.name for p in written) == [
            "basemap.json", "basemap.png", "basemap@2x.json", "basemap@2x.png"
        ]

    def test_theme_without_shields(self, minimal_theme, temp_dir):
        """Test themes without shields raise."""
        with pytest.raises(ValueError, match="no shields"):
            build_shields(minimal_theme, temp_dir)

    def test_disabled_styles_skipped(self):
        """Test disabled shield kinds get no sprite."""
        shields = replace(MONOCHROME.shields,
                          us_highway=replace(MONOCHROME.shields.us_highway, enabled=False))
        theme = replace(MONOCHROME, shields=shields)
        assert [kind for kind, _, _ in theme_shields(theme)] == ["interstate", "state_highway"]

    def test_disabled_shields_raise(self, temp_dir):
        """Test a theme with shields switched off draws nothing."""
        theme = replace(MONOCHROME, shields=replace(MONOCHROME.shields, enabled=False))
        with pytest.raises(ValueError, match="shields disabled"):
            build_shields(theme, temp_dir)
        assert not (temp_dir / "basemap.png").exists()

    def test_all_styles_disabled_raise(self, full_theme):
        """Test a config with every kind disabled has nothing to draw."""
        off = ShieldStyle(sprite="shield-off", text_color="#ffffff", min_zoom=6, enabled=False)
        shields = ShieldsConfig(interstate=off, us_highway=off, state_highway=off)
        with pytest.raises(ValueError, match="no shields enabled"):
            theme_shields(replace(full_theme, shields=shields))
