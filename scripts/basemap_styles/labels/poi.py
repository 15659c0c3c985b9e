"""
POI icon layers.

Each enabled category gets one layer per POI-bearing source: the dedicated
poi_us tiles first, then us_high, world_mid and world_low as fallbacks.
Tiles from different schemas tag the same POI differently, so most filters
accept several class/subclass combinations. Hospitals, museums, rail
stations and colleges are split into rank tiers that appear at increasing
zooms.
"""

from typing import List, Optional

from ..expressions import (
    all_,
    any_,
    eq,
    get,
    gt,
    has,
    in_classes,
    interpolate_linear,
    not_,
    op,
    text_field,
    zoom,
)
from ..layer import Layer
from ..theme import PoiLabelColors, Theme, poi_category_enabled, poi_min_zoom, resolve_label_fonts

POI_SOURCES = ("poi_us", "us_high", "world_mid", "world_low")

# (tier name, minzoom or None for the category's own, icon size)
RANK_TIERS = (
    ("rank1", None, 0.9),
    ("rank2", 14.5, 0.85),
    ("rank3plus", 15, 0.75),
)

PARK_CLASSES = ("national_park", "national_monument", "state_park")
STATION_SUBCLASSES = ("railway_station", "station", "subway", "train_station")


def rank_filter(tier: str):
    """Rank condition for a tier. Unranked features count as rank 1."""
    if tier == "rank1":
        return any_(not_(has("rank")), eq(get("rank"), 1))
    if tier == "rank2":
        return eq(get("rank"), 2)
    return all_(has("rank"), gt(get("rank"), 2))


def _subclass_or_none(subclass: str):
    return any_(not_(has("subclass")), eq(get("subclass"), subclass))


def hospital_filter(tier: str):
    """Hospitals only; clinics and doctors are left out."""
    rank = rank_filter(tier)
    return any_(
        all_(in_classes(("healthcare",)), eq(get("subclass"), "hospital"), rank),
        all_(eq(get("class"), "hospital"), _subclass_or_none("hospital"), rank),
        all_(in_classes(("amenity",)), eq(get("subclass"), "hospital"), rank),
    )


def museum_filter(tier: str):
    rank = rank_filter(tier)
    return any_(
        all_(
            in_classes(("entertainment", "tourism")),
            in_classes(("museum", "gallery"), prop="subclass"),
            rank,
        ),
        all_(eq(get("class"), "museum"), rank),
    )


def rail_filter(tier: str):
    rank = rank_filter(tier)
    return any_(
        all_(eq(get("class"), "railway"), eq(get("subclass"), "station"), rank),
        all_(
            in_classes(("transport",)),
            in_classes(STATION_SUBCLASSES, prop="subclass"),
            rank,
        ),
    )


def school_filter(tier: str):
    """Colleges and universities."""
    return all_(
        eq(get("class"), "college"),
        in_classes(("university", "college"), prop="subclass"),
        rank_filter(tier),
    )


AIRPORT_FILTER = any_(
    all_(in_classes(("transport",)), eq(get("subclass"), "airport")),
    eq(get("class"), "airport"),
)
AIRFIELD_FILTER = all_(in_classes(("transport",)), eq(get("subclass"), "airfield"))
ZOO_FILTER = all_(eq(get("class"), "zoo"), eq(get("subclass"), "zoo"))
STADIUM_FILTER = any_(
    all_(eq(get("class"), "stadium"), _subclass_or_none("stadium")),
    all_(in_classes(("entertainment", "sport", "leisure")), eq(get("subclass"), "stadium")),
    all_(eq(get("class"), "amenity"), eq(get("subclass"), "stadium")),
)
PARK_FILTER = any_(
    all_(
        in_classes(("leisure", "park")),
        in_classes(PARK_CLASSES, prop="subclass"),
    ),
    in_classes(("national_park", "national_monument"), prop="tourism"),
)

# Stadiums and stations keep their icons even when crowded
ALWAYS_SHOWN = {"icon-allow-overlap": True, "icon-ignore-placement": True, "icon-optional": False}


class _PoiStyle:
    """Shared paint and layout for POI symbol layers of one theme."""

    def __init__(self, theme: Theme):
        self.colors = theme.colors.label.poi or PoiLabelColors()
        self.font = resolve_label_fonts(theme).poi

    def paint(self, icon_opacity: float = 0.9) -> dict:
        c = self.colors
        return {
            "icon-color": c.icon_color,
            "icon-opacity": icon_opacity,
            "text-color": c.text_color,
            "text-halo-color": c.text_halo,
            "text-halo-width": c.text_halo_width or 1.5,
            "text-halo-blur": 1,
        }

    def layout(self, icon: str, icon_size: float, text_sizes=((12, 10), (14, 12), (16, 14)),
               **extra) -> dict:
        return {
            "icon-size": icon_size,
            "icon-allow-overlap": False,
            "icon-ignore-placement": False,
            "text-field": text_field(),
            "text-font": self.font,
            "text-size": interpolate_linear(zoom(), list(text_sizes)),
            "text-offset": [0, 1.2],
            "text-anchor": "top",
            "text-optional": True,
            "text-allow-overlap": False,
            "symbol-placement": "point",
            "icon-image": icon,
            **extra,
        }

    def layer(self, layer_id: str, source: str, source_layer: str, minzoom: float,
              condition, icon: str, icon_size: float = 0.9,
              layout: Optional[dict] = None, paint: Optional[dict] = None) -> Layer:
        return Layer(
            id=layer_id,
            type="symbol",
            source=source,
            source_layer=source_layer,
            minzoom=minzoom,
            filter=all_(has("name")) if condition is None else all_(has("name"), condition),
            layout=layout if layout is not None else self.layout(icon, icon_size),
            paint=paint if paint is not None else self.paint(),
        )


def _ranked_layers(style: _PoiStyle, category: str, source: str, base_minzoom: float,
                   build_filter, **extra) -> List[Layer]:
    layers = []
    for tier, tier_minzoom, icon_size in RANK_TIERS:
        layers.append(style.layer(
            f"poi-{category}-{tier}-{source}", source, "poi",
            tier_minzoom if tier_minzoom is not None else base_minzoom,
            build_filter(tier), category,
            layout=style.layout(category, icon_size, **extra),
        ))
    return layers


def _rail_layers(style: _PoiStyle, source: str, base_minzoom: float) -> List[Layer]:
    """Stations: lower tiers get their own text sizes and fainter icons."""
    text_sizes = {
        "rank1": ((12, 10), (14, 12), (16, 14)),
        "rank2": ((14.5, 10), (15, 12), (16, 14)),
        "rank3plus": ((15, 9), (16, 12)),
    }
    icon_opacity = {"rank1": 0.9, "rank2": 0.85, "rank3plus": 0.8}
    layers = []
    for tier, tier_minzoom, icon_size in RANK_TIERS:
        layers.append(style.layer(
            f"poi-rail-{tier}-{source}", source, "poi",
            tier_minzoom if tier_minzoom is not None else base_minzoom,
            rail_filter(tier), "rail",
            layout=style.layout("rail", icon_size, text_sizes[tier],
                                **{**ALWAYS_SHOWN, "icon-ignore-placement": False}),
            paint=style.paint(icon_opacity[tier]),
        ))
    return layers


def _source_layers(theme: Theme, style: _PoiStyle, source: str) -> List[Layer]:
    layers = []

    def enabled(category: str) -> bool:
        return poi_category_enabled(theme, category)

    if enabled("airport"):
        layers.append(style.layer(f"poi-airport-{source}", source, "poi",
                                  poi_min_zoom(theme, "airport"), AIRPORT_FILTER, "airport"))
    if enabled("airfield"):
        layers.append(style.layer(f"poi-airfield-{source}", source, "poi",
                                  poi_min_zoom(theme, "airfield"), AIRFIELD_FILTER, "airfield"))
    if enabled("airport"):
        layers.append(style.layer(f"place-airport-{source}", source, "place",
                                  poi_min_zoom(theme, "airport"),
                                  in_classes(("airport", "aerodrome"), prop="place"), "airport"))
    if enabled("hospital"):
        layers += _ranked_layers(style, "hospital", source,
                                 poi_min_zoom(theme, "hospital"), hospital_filter)
    if enabled("museum"):
        # Even top-ranked museums wait for z14
        layers += _ranked_layers(style, "museum", source, 14, museum_filter)
    if enabled("zoo"):
        layers.append(style.layer(f"poi-zoo-{source}", source, "poi",
                                  poi_min_zoom(theme, "zoo"), ZOO_FILTER, "zoo"))
    if enabled("stadium"):
        stadium_layout = style.layout("stadium", 0.9, **ALWAYS_SHOWN)
        layers.append(style.layer(f"poi-stadium-{source}", source, "poi",
                                  poi_min_zoom(theme, "stadium"), STADIUM_FILTER, "stadium",
                                  layout=stadium_layout))
        layers.append(style.layer(f"place-stadium-{source}", source, "place",
                                  poi_min_zoom(theme, "stadium"),
                                  in_classes(("stadium", "stadiums"), prop="place"), "stadium",
                                  layout=dict(stadium_layout)))
    if enabled("park"):
        layers.append(style.layer(f"poi-park-{source}", source, "poi",
                                  poi_min_zoom(theme, "park"), PARK_FILTER, "park"))
    if enabled("rail"):
        layers += _rail_layers(style, source, poi_min_zoom(theme, "rail", 14))
    if enabled("school"):
        layers += _ranked_layers(style, "school", source,
                                 poi_min_zoom(theme, "school", 14), school_filter)
    return layers


def create_poi_layers(theme: Theme) -> List[Layer]:
    """Create POI icon layers for every enabled category and source."""
    if theme.pois is None or not theme.pois.enabled:
        return []

    style = _PoiStyle(theme)
    layers: List[Layer] = []
    for source in POI_SOURCES:
        layers += _source_layers(theme, style, source)

    # aerodrome_label only exists in us_high
    if poi_category_enabled(theme, "airport"):
        layers.append(style.layer(
            "aerodrome-label-airport-us_high", "us_high", "aerodrome_label",
            poi_min_zoom(theme, "airport"), None, "airport",
            layout=style.layout("airport", 0.9, **{"text-ignore-placement": False}),
        ))

    # Park points only, from the one source carrying the park layer
    if poi_category_enabled(theme, "park"):
        layers.append(style.layer(
            "park-label-us_high", "us_high", "park", poi_min_zoom(theme, "park"),
            all_(in_classes(PARK_CLASSES), eq(op("geometry-type"), "Point")), "park",
            layout=style.layout("park", 0.9, **{"symbol-spacing": 250}),
        ))
    return layers
