"""
Airport runways, aprons, taxiways, helipads and airport labels.

Zoom breakdown:
    z6-7    major runways only (length >= runway.major_length)
    z8-9    all runways, aprons, major airport labels
    z10-12  taxiways
    z13+    helipads, detailed labels
"""

from typing import List

from ..expressions import all_, ge, get, has, range_expr, text_field
from ..layer import Layer
from ..theme import Theme, ValueRange, domain_enabled
from .roads import ROUND_LINE

LABEL_ZOOMS = (8, 13)


def _label_layer(theme: Theme, layer_id: str, size, padding: float, **zooms: float) -> Layer:
    label = theme.aeroway.label
    return Layer(
        id=layer_id,
        type="symbol",
        source="aeroway-world",
        # Apron polygons stand in for airports
        source_layer="apron_polys",
        filter=has("name"),
        layout={
            "text-field": text_field(),
            "text-font": theme.fonts.regular,
            "text-size": size,
            "text-anchor": "center",
            "text-optional": True,
            "text-allow-overlap": False,
            # Airport names must not hide POI icons
            "text-ignore-placement": True,
            "text-padding": padding,
            "symbol-placement": "point",
        },
        paint={
            "text-color": label.color,
            "text-halo-color": label.halo_color,
            "text-halo-width": label.halo_width,
            "text-halo-blur": 1,
            "text-opacity": label.opacity,
        },
        **zooms,
    )


def create_aeroway_layers(theme: Theme) -> List[Layer]:
    """Create airport infrastructure layers and airport name labels."""
    if not domain_enabled(theme, "aeroway"):
        return []

    aeroway = theme.aeroway
    runway = aeroway.runway
    apron = aeroway.apron
    taxiway = aeroway.taxiway
    helipad = aeroway.helipad
    label = aeroway.label

    runway_paint = {
        "line-color": runway.color,
        "line-width": runway.width,
        "line-opacity": runway.opacity,
    }

    return [
        Layer(
            id="aeroway-runway-major",
            type="line",
            source="aeroway-world",
            source_layer="runway_lines",
            minzoom=6,
            maxzoom=8,
            filter=all_(has("length"), ge(get("length"), runway.major_length)),
            layout=dict(ROUND_LINE),
            paint=dict(runway_paint),
        ),
        Layer(
            id="aeroway-runway-all",
            type="line",
            source="aeroway-world",
            source_layer="runway_lines",
            minzoom=8,
            layout=dict(ROUND_LINE),
            paint=dict(runway_paint),
        ),
        Layer(
            id="aeroway-apron-fill",
            type="fill",
            source="aeroway-world",
            source_layer="apron_polys",
            minzoom=8,
            paint={"fill-color": apron.fill_color, "fill-opacity": apron.fill_opacity},
        ),
        Layer(
            id="aeroway-apron-outline",
            type="line",
            source="aeroway-world",
            source_layer="apron_polys",
            minzoom=8,
            layout=dict(ROUND_LINE),
            paint={
                "line-color": apron.outline_color,
                "line-width": apron.outline_width,
                "line-opacity": apron.fill_opacity,
            },
        ),
        Layer(
            id="aeroway-taxiway",
            type="line",
            source="aeroway-world",
            source_layer="taxiway_lines",
            minzoom=10,
            layout=dict(ROUND_LINE),
            paint={
                "line-color": taxiway.color,
                "line-width": taxiway.width,
                "line-opacity": taxiway.opacity,
            },
        ),
        Layer(
            id="aeroway-helipad-fill",
            type="circle",
            source="aeroway-world",
            source_layer="helipad_points",
            minzoom=13,
            paint={
                "circle-color": helipad.fill_color,
                "circle-opacity": helipad.fill_opacity,
                "circle-radius": helipad.size,
                "circle-stroke-color": helipad.outline_color,
                "circle-stroke-width": helipad.outline_width,
                "circle-stroke-opacity": helipad.fill_opacity,
            },
        ),
        _label_layer(
            theme, "aeroway-label-major",
            range_expr(label.major_size, *LABEL_ZOOMS, default=ValueRange(10, 12)),
            50, minzoom=8, maxzoom=10,
        ),
        _label_layer(
            theme, "aeroway-label-detailed",
            range_expr(label.detailed_size, *LABEL_ZOOMS, default=ValueRange(12, 14)),
            30, minzoom=13,
        ),
    ]
