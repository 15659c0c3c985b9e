"""
Built-in basemap themes.

Each preset is a complete Theme. Build one with:
    basemap-styles build --preset monochrome
"""

from .theme import (
    BathymetryConfig,
    BoundaryConfig,
    BoundaryColors,
    BoundaryOpacities,
    BuildingColors,
    BuildingsConfig,
    ClassColors,
    DensityColorRange,
    DensityColors,
    Fonts,
    HillshadeConfig,
    LabelColors,
    LabelFonts,
    LabelStyle,
    LandConfig,
    MinZoom,
    PlacesConfig,
    PlacesFill,
    PoiCategory,
    PoiLabelColors,
    POIsConfig,
    POI_CATEGORIES,
    RoadColors,
    RoadLabelColors,
    RoadLabelTone,
    ShieldsConfig,
    ShieldStyle,
    StarfieldConfig,
    Theme,
    ThemeColors,
    ThemeOpacities,
    ThemeSettings,
    ThemeWidths,
    ValueRange,
    View,
    WaterColors,
    WaterConfig,
)


def _all_pois(min_zoom: float = 12) -> POIsConfig:
    categories = {name: PoiCategory(min_zoom=min_zoom) for name in POI_CATEGORIES}
    return POIsConfig(min_zoom=min_zoom, **categories)


# =============================================================================
# MONOCHROME
# =============================================================================

_MONO_WATER = "#1e1e1e"

MONOCHROME = Theme(
    name="Monochrome",
    description="Dark grey basemap on a globe with population-density places",
    fonts=Fonts(),
    label_fonts=LabelFonts(
        default=("Noto Sans Regular",),
        place=("Noto Sans Regular",),
        road=("Noto Sans Regular",),
        water=("Noto Sans Italic",),
        poi=("Noto Sans Regular",),
        grid=("Noto Sans Regular",),
    ),
    colors=ThemeColors(
        background="#303030",
        land=ClassColors(
            default="#303030",
            classes={
                "wood": "#2e2e2e",
                "grass": "#353535",
                "scrub": "#3a3a3a",
                "cropland": "#3b3b3b",
                "farmland": "#3b3b3b",
                "rock": "#373737",
                "sand": "#3c3c3c",
                "wetland": "#343434",
            },
        ),
        landuse=ClassColors(
            default="#303030",
            classes={
                "park": "#3a3a3a",
                "cemetery": "#3a3a3a",
                "pitch": "#3a3a3a",
                "stadium": "#3a3a3a",
                "residential": "#343434",
                "college": "#3a3a3a",
                "commercial": "#3a3a3a",
                "construction": "#343434",
                "dam": "#343434",
                "farmland": "#3b3b3b",
                "grass": "#353535",
                "hospital": "#3a3a3a",
                "industrial": "#343434",
                "military": "#2f2f2f",
                "neighbourhood": "#343434",
                "quarry": "#343434",
                "quarter": "#343434",
                "railway": "#343434",
                "retail": "#3a3a3a",
                "school": "#3a3a3a",
                "suburb": "#343434",
                "theme_park": "#3a3a3a",
                "track": "#3a3a3a",
                "university": "#3a3a3a",
                "zoo": "#3a3a3a",
            },
        ),
        water=WaterColors(
            fill=_MONO_WATER,
            line="#2f2f2f",
            default=_MONO_WATER,
            classes={name: _MONO_WATER for name in (
                "ocean", "sea", "lake", "pond", "river", "canal", "stream",
                "ditch", "drain", "bay", "gulf", "reservoir",
            )},
        ),
        boundary=BoundaryColors(country="#9a9a9a", state="#6e6e6e"),
        road=RoadColors(
            motorway="#5e5e5e",
            trunk="#595959",
            primary="#545454",
            secondary="#4f4f4f",
            tertiary="#4a4a4a",
            residential="#454545",
            service="#404040",
            parking_aisle="#3d3d3d",
            other="#404040",
            casing="#252525",
        ),
        path="#292929",
        railway="#282828",
        building=BuildingColors(
            fill="#303030",
            outline="#252525",
            short="#303030",
            medium="#353535",
            tall="#3a3a3a",
            skyscraper="#3f3f3f",
            supertall="#444444",
            megatall="#494949",
            default="#303030",
        ),
        label=LabelColors(
            place=LabelStyle(color="#b1b1b1", halo="#252525"),
            road=RoadLabelColors(
                major=RoadLabelTone("#b1b1b1", 0.8),
                secondary=RoadLabelTone("#b1b1b1", 0.7),
                tertiary=RoadLabelTone("#b1b1b1", 0.7),
                other=RoadLabelTone("#b1b1b1", 0.7),
                halo="#313131",
            ),
            water=LabelStyle(color="#c1c1c1", halo="#313131"),
            poi=PoiLabelColors(
                icon_color="#a1a1a1",
                icon_size=0.8,
                text_color="#a1a1a1",
                text_halo="#313131",
                text_halo_width=1.5,
            ),
        ),
    ),
    widths=ThemeWidths(),
    opacities=ThemeOpacities(
        boundary=BoundaryOpacities(
            country={"z0": 0.25, "z3": 0.25, "z6": 0.75, "z10": 0.8},
            state=0.6,
            maritime=0,
        ),
    ),
    settings=ThemeSettings(
        projection="globe",
        min_zoom=MinZoom(mercator=0, globe=2),
        real_world_scale=True,
        real_world_scale_min_zoom=16,
        view=View(center=(-98.0, 39.0), zoom=4.25),
    ),
    shields=ShieldsConfig(
        min_zoom=6,
        interstate=ShieldStyle(
            sprite="shield-interstate-custom",
            text_color="#a1a1a1",
            min_zoom=6,
            text_padding=(5, 5, 5, 5),
            text_size=(6, 9, 14, 13),
            text_font=("Noto Sans SemiBold",),
            upper_background="#444444",
            lower_background="#444444",
            stroke_color="#444444",
            stroke_width=2,
        ),
        us_highway=ShieldStyle(
            sprite="shield-ushighway-custom",
            text_color="#a1a1a1",
            min_zoom=7,
            text_padding=(5, 5, 5, 5),
            text_size=(6, 9, 14, 13),
            text_font=("Noto Sans SemiBold",),
            background="#444444",
            stroke_color="#444444",
            stroke_width=2.5,
        ),
        state_highway=ShieldStyle(
            sprite="shield-state-custom",
            text_color="#a1a1a1",
            min_zoom=8,
            text_padding=(4, 4, 4, 4),
            text_size=(8, 8, 14, 12),
            text_font=("Noto Sans SemiBold",),
            background="#444444",
            stroke_color="#444444",
            stroke_width=1,
        ),
    ),
    pois=_all_pois(),
    bathymetry=BathymetryConfig(
        min_zoom=0,
        max_zoom=7,
        opacity=ValueRange(0.7, 0.9),
        colors={
            "shallow": "#1f1f1f",
            "shelf": "#1e1e1e",
            "slope": "#1e1e1e",
            "deep1": "#1d1d1d",
            "deep2": "#1c1c1c",
            "abyss": "#1b1b1b",
            "trench": "#1a1a1a",
        },
        depth_opacities={
            "shallow": 0.3,
            "shelf": 0.35,
            "slope": 0.45,
            "deep1": 0.55,
            "deep2": 0.7,
            "abyss": 0.85,
            "trench": 1,
        },
    ),
    hillshade=HillshadeConfig(
        min_zoom=0,
        max_zoom=12,
        opacity=0.25,
        exaggeration=0.25,
        shadow_color="#252525",
        highlight_color="#303030",
        accent_color="#252525",
    ),
    boundary=BoundaryConfig(country=True, state=True, maritime=False, hide_over_water=True),
    buildings=BuildingsConfig(min_zoom=13, height_colors_min_zoom=14),
    land=LandConfig(override_color="#0f141b"),
    landuse=LandConfig(override_color="#0e131a"),
    water=WaterConfig(override_color="#0a2846", override_color_waterway="#103457"),
    places=PlacesConfig(
        min_zoom=5,
        fill=PlacesFill(color="#6a7588", opacity=1.0),
        density_colors=DensityColors(
            default_fill_color="#ecda9a",
            default_outline_color="#c4b87a",
            ranges=(
                DensityColorRange(100, "#f6e6b8"),
                DensityColorRange(300, "#f3d28f"),
                DensityColorRange(1000, "#f0bd6b"),
                DensityColorRange(2000, "#f2a14a"),
                DensityColorRange(3000, "#f08a2a"),
                DensityColorRange(4000, "#ef6800"),
                DensityColorRange(5000, "#f04f1a"),
                DensityColorRange(7500, "#f03a34"),
                DensityColorRange(10000, "#ee2b4e"),
                DensityColorRange(15000, "#e21f64"),
                DensityColorRange(25000, "#c81b78"),
            ),
        ),
    ),
    starfield=StarfieldConfig(),
)


# =============================================================================
# PARCHMENT
# =============================================================================

_SERIF = Fonts(
    regular=("Cormorant Garamond Regular",),
    semibold=("Cormorant Garamond SemiBold",),
    italic=("Cormorant Garamond Italic",),
    bold=("Cormorant Garamond Bold",),
)

PARCHMENT = Theme(
    name="Parchment",
    description="Light sepia basemap in the manner of an old printed atlas",
    fonts=_SERIF,
    label_fonts=LabelFonts(water=("IM FELL English Italic",)),
    colors=ThemeColors(
        background="#f2e8d0",
        land=ClassColors(
            default="#efe3c6",
            classes={
                "wood": "#dcd3ad",
                "grass": "#e6dcb8",
                "scrub": "#e3d7b4",
                "cropland": "#ece0bd",
                "sand": "#f3e6c3",
                "wetland": "#dad6b6",
            },
        ),
        landuse=ClassColors(
            default="#ebdfc2",
            classes={
                "park": "#dcd5ae",
                "cemetery": "#d9d2b0",
                "residential": "#e9dcbd",
                "industrial": "#e3d5b8",
                "commercial": "#e6d6b9",
            },
        ),
        water=WaterColors(
            fill="#c9d3c0",
            line="#a9b8a8",
            classes={"river": "#a9b8a8", "canal": "#a9b8a8", "stream": "#b4c2b2"},
        ),
        boundary=BoundaryColors(country="#8c6d4f", state="#b49a7c"),
        road=RoadColors(
            motorway="#b8865b",
            trunk="#c29468",
            primary="#cca377",
            secondary="#d6b38a",
            tertiary="#ddc19c",
            residential="#e4cfae",
            service="#e8d6b8",
            other="#e8d6b8",
            casing="#a88b6a",
        ),
        path="#c9b393",
        railway="#9a8468",
        building=BuildingColors(fill="#e0d0b0", outline="#c8b48f"),
        label=LabelColors(
            place=LabelStyle(color="#4a3826", halo="#f2e8d0"),
            road=RoadLabelColors(
                major=RoadLabelTone("#5a4632", 0.9),
                secondary=RoadLabelTone("#6b5640", 0.85),
                tertiary=RoadLabelTone("#7a664f", 0.8),
                other=RoadLabelTone("#7a664f", 0.75),
                halo="#f2e8d0",
            ),
            water=LabelStyle(color="#5e7468", halo="#e4eadc"),
            poi=PoiLabelColors(
                icon_color="#7a664f",
                text_color="#5a4632",
                text_halo="#f2e8d0",
            ),
        ),
    ),
    settings=ThemeSettings(projection="mercator", min_zoom=0),
    shields=ShieldsConfig(
        interstate=ShieldStyle(
            sprite="shield-interstate-parchment",
            text_color="#f2e8d0",
            min_zoom=6,
            text_font=("Cormorant Garamond Bold",),
            upper_background="#8c3b2e",
            lower_background="#2f4a6b",
            stroke_color="#f2e8d0",
            stroke_width=2,
        ),
        us_highway=ShieldStyle(
            sprite="shield-ushighway-parchment",
            text_color="#3a2b1c",
            min_zoom=7,
            text_font=("Cormorant Garamond Bold",),
            background="#f7f0de",
            stroke_color="#3a2b1c",
            stroke_width=2,
        ),
        state_highway=ShieldStyle(
            sprite="shield-state-parchment",
            text_color="#3a2b1c",
            min_zoom=8,
            text_font=("Cormorant Garamond Bold",),
            background="#efe3c6",
            stroke_color="#6b5640",
            stroke_width=1,
        ),
    ),
    pois=_all_pois(),
)


THEMES: dict[str, Theme] = {
    "monochrome": MONOCHROME,
    "parchment": PARCHMENT,
}


def get_theme(name: str) -> Theme:
    """Get a built-in theme by name.

    Args:
        name: Preset name (case-insensitive, dashes and spaces normalized)

    Returns:
        Theme

    Raises:
        KeyError: If preset name not found
    """
    key = name.lower().replace(" ", "_").replace("-", "_")
    if key not in THEMES:
        available = ", ".join(sorted(THEMES.keys()))
        raise KeyError(f"Unknown theme '{name}'. Available: {available}")
    return THEMES[key]


def list_themes() -> list[str]:
    """List all built-in theme names."""
    return sorted(THEMES.keys())
