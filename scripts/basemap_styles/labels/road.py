"""Road name labels and highway route shields."""

from typing import List

from ..expressions import (
    abbreviated_text_field,
    all_,
    eq,
    get,
    has,
    in_classes,
    interpolate_linear,
    not_,
    not_brunnel,
    zoom,
)
from ..layer import Layer
from ..theme import ShieldStyle, Theme, domain_enabled, resolve_label_fonts

LABELLED_ROAD_CLASSES = ("motorway", "trunk", "primary", "secondary", "tertiary", "residential")

# Default shield text size: (min zoom, min size, max zoom, max size)
DEFAULT_SHIELD_TEXT_SIZE = (6, 9, 14, 13)


def _road_label(theme: Theme, layer_id: str, minzoom: float, class_filter,
                tone, sizes) -> Layer:
    c = theme.colors.label.road
    return Layer(
        id=layer_id,
        type="symbol",
        source="us_high",
        source_layer="transportation_name",
        minzoom=minzoom,
        filter=all_(*not_brunnel(), class_filter, has("name")),
        layout={
            "text-font": resolve_label_fonts(theme).road,
            "symbol-placement": "line",
            "text-rotation-alignment": "map",
            "text-pitch-alignment": "viewport",
            "symbol-spacing": 150,
            "text-field": abbreviated_text_field(),
            "text-size": interpolate_linear(zoom(), sizes),
        },
        paint={
            "text-halo-color": c.halo,
            "text-halo-width": 1.5,
            "text-halo-blur": 1,
            "text-color": tone.color,
            "text-opacity": tone.opacity,
        },
    )


def create_road_label_layers(theme: Theme) -> List[Layer]:
    """Create road name labels, from major roads down to minor ways."""
    tones = theme.colors.label.road
    return [
        _road_label(theme, "road-label-major", 8,
                    in_classes(("motorway", "trunk", "primary")),
                    tones.major, [(8, 9), (12, 11), (15, 13)]),
        _road_label(theme, "road-label-secondary", 10,
                    eq(get("class"), "secondary"),
                    tones.secondary, [(10, 8), (12, 10), (15, 12)]),
        _road_label(theme, "road-label-tertiary", 12,
                    in_classes(("tertiary", "residential")),
                    tones.tertiary, [(12, 8), (15, 10)]),
        _road_label(theme, "road-label-other", 14,
                    not_(in_classes(LABELLED_ROAD_CLASSES)),
                    tones.other, [(14, 7), (15, 8)]),
    ]


# Route networks per shield kind
SHIELD_FILTERS = {
    "interstate": all_(has("ref"), eq(get("network"), "us-interstate")),
    "us_highway": all_(has("ref"), eq(get("network"), "us-highway")),
    "state_highway": all_(has("ref"), in_classes(("us-state", "US:US", "US"), prop="network")),
}

SHIELD_IDS = {
    "interstate": "highway-shield-interstate",
    "us_highway": "highway-shield-us",
    "state_highway": "highway-shield-state",
}


def _shield_layer(theme: Theme, kind: str, style: ShieldStyle) -> Layer:
    text_size = style.text_size or DEFAULT_SHIELD_TEXT_SIZE
    min_zoom, min_size, max_zoom, max_size = text_size
    return Layer(
        id=SHIELD_IDS[kind],
        type="symbol",
        source="us_high",
        source_layer="transportation_name",
        minzoom=max(style.min_zoom, theme.shields.min_zoom),
        filter=SHIELD_FILTERS[kind],
        layout={
            "symbol-placement": "line",
            "icon-rotation-alignment": "viewport",
            "text-rotation-alignment": "viewport",
            "icon-pitch-alignment": "viewport",
            "text-pitch-alignment": "viewport",
            "symbol-spacing": 400,
            "text-field": get("ref"),
            "icon-text-fit": "both",
            "icon-size": interpolate_linear(zoom(), [(6, 0.8), (10, 1.0), (14, 1.2)]),
            "text-letter-spacing": 0.05,
            "icon-image": style.sprite,
            "icon-text-fit-padding": list(style.text_padding),
            "text-size": interpolate_linear(zoom(), [(min_zoom, min_size), (max_zoom, max_size)]),
            "text-font": style.text_font or theme.fonts.bold or theme.fonts.regular,
        },
        paint={"text-color": style.text_color},
    )


def create_highway_shield_layers(theme: Theme) -> List[Layer]:
    """Create interstate, US highway and state highway shields."""
    if not domain_enabled(theme, "shields"):
        return []
    shields = theme.shields
    layers = []
    for kind in ("interstate", "us_highway", "state_highway"):
        style = getattr(shields, kind)
        if style.enabled:
            layers.append(_shield_layer(theme, kind, style))
    return layers
