"""Continent, country, state and city labels."""

from typing import List

from ..expressions import (
    FILTERS,
    Labels,
    Literal,
    abbreviated_text_field,
    all_,
    case_expr,
    coalesce,
    eq,
    get,
    gt,
    has,
    in_classes,
    interpolate_linear,
    le,
    match_expr,
    ne,
    upcase,
    zoom,
)
from ..layer import Layer
from ..theme import Theme, resolve_label_fonts

STATE_LABEL_OPACITY = 0.5
TOWN_LABEL_OPACITY = 0.6

# Country labels switch in once continents fade
CONTINENT_MAX_ZOOM = 2.5

US_STATES = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana", "Maine",
    "Maryland", "Massachusetts", "Michigan", "Minnesota", "Mississippi",
    "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey",
    "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina",
    "South Dakota", "Tennessee", "Texas", "Utah", "Vermont", "Virginia",
    "Washington", "West Virginia", "Wisconsin", "Wyoming",
)

SETTLEMENT_CLASSES = ("city", "town", "village", "hamlet", "locality", "suburb")


def _name():
    return coalesce(get("name:en"), get("name"))


def _two_line_upper(names) -> list:
    """Case branches that break two-word names onto two upper-case lines."""
    return [(eq(_name(), name), name.upper().replace(" ", "\n")) for name in names]


def state_text_field():
    two_word = [state for state in US_STATES if " " in state]
    return case_expr(_two_line_upper(two_word), upcase(_name()))


def continent_text_field():
    return case_expr(_two_line_upper(("North America", "South America")), upcase(_name()))


def place_size_expr():
    """City, town and village size from rank, or from class when unranked."""
    def by_rank(r1, r2, r4, r6, r8, r10, default):
        ranked = case_expr(
            [(le(get("rank"), rank), size)
             for rank, size in ((1, r1), (2, r2), (4, r4), (6, r6), (8, r8), (10, r10))],
            default,
        )
        return case_expr(
            [(has("rank"), ranked)],
            match_expr(get("class"), [("city", round(r1 - 0.8, 2)), ("town", r4)], r6),
        )

    return interpolate_linear(zoom(), [
        (6, by_rank(10.4, 8.8, 7.6, 6.8, 7.2, 6, 5.6)),
        (10, by_rank(19, 16, 14, 12, 13, 11, 10)),
        (15, by_rank(22, 19, 16, 15, 16, 13, 12)),
    ])


def _capital_size(stops):
    """Rank 1 cities one notch larger than rank 2."""
    is_first = eq(coalesce(get("rank"), 1), 1)
    return interpolate_linear(
        zoom(), [(z, case_expr([(is_first, first)], second)) for z, first, second in stops]
    )


def create_place_label_layers(theme: Theme) -> List[Layer]:
    """Create place labels from continents down to towns and villages."""
    label = theme.colors.label.place
    font = resolve_label_fonts(theme).place
    opacity = theme.opacities.label.place

    def paint(halo_width: float, text_opacity: float) -> dict:
        return {
            "text-color": label.color,
            "text-halo-color": label.halo,
            "text-halo-width": halo_width,
            "text-halo-blur": 1,
            "text-opacity": text_opacity,
        }

    def layout(text_field, size, transform: str = "none", spacing: float = 0.05, **extra) -> dict:
        return {
            "text-field": text_field,
            "text-font": font,
            "text-size": size,
            "text-transform": transform,
            "text-letter-spacing": spacing,
            **extra,
        }

    def country(layer_id: str, source: str, stops, country_filter, **zooms) -> Layer:
        return Layer(
            id=layer_id,
            type="symbol",
            source=source,
            source_layer="place",
            filter=country_filter,
            layout=layout(abbreviated_text_field(), interpolate_linear(zoom(), stops),
                          "uppercase", 0.1),
            paint=paint(2, opacity),
            **zooms,
        )

    is_country = eq(get("class"), "country")
    past_continents = all_(is_country, gt(zoom(), CONTINENT_MAX_ZOOM))
    top_cities = all_(eq(get("class"), "city"), le(coalesce(get("rank"), 10), 2))

    return [
        Layer(
            id="continent-label",
            type="symbol",
            source="world_low",
            source_layer="place",
            minzoom=0,
            maxzoom=6.5,
            filter=all_(
                eq(get("class"), "continent"),
                le(zoom(), CONTINENT_MAX_ZOOM),
                ne(_name(), "America"),
            ),
            layout=layout(
                continent_text_field(),
                interpolate_linear(zoom(), [(0, 12), (CONTINENT_MAX_ZOOM, 16)]),
                spacing=0.1,
                **{"text-offset": case_expr(
                    [(eq(_name(), "North America"), Literal([2.0, 4.0])),
                     (eq(_name(), "South America"), Literal([0, -2.0]))],
                    Literal([0, 0]),
                )},
            ),
            paint=paint(2, opacity),
        ),
        country("country-label-world", "world_low", [(2.5, 10), (3, 12), (6, 16)],
                past_continents, minzoom=0, maxzoom=6.5),
        country("country-label-world-mid", "world_mid", [(6, 16), (10, 20)],
                past_continents, minzoom=6),
        country("country-label", "us_high", [(2, 12), (6, 18), (10, 24)],
                is_country, minzoom=6),
        Layer(
            id="state-label-us-world",
            type="symbol",
            source="world_low",
            source_layer="place",
            minzoom=3.33,
            maxzoom=6.5,
            filter=all_(eq(get("class"), "state"),
                        match_expr(_name(), [(Labels(US_STATES), True)], False)),
            layout=layout(state_text_field(), interpolate_linear(zoom(), [(3.33, 8), (6, 12)])),
            paint=paint(2, STATE_LABEL_OPACITY),
        ),
        Layer(
            id="state-label-us",
            type="symbol",
            source="us_high",
            source_layer="place",
            minzoom=4,
            filter=eq(get("class"), "state"),
            layout=layout(state_text_field(),
                          interpolate_linear(zoom(), [(4, 8), (8, 16), (12, 18)])),
            paint=paint(2, STATE_LABEL_OPACITY),
        ),
        Layer(
            id="city-label-world-rank1-2",
            type="symbol",
            source="world_low",
            source_layer="place",
            minzoom=1,
            maxzoom=6.5,
            filter=top_cities,
            layout=layout(abbreviated_text_field(),
                          _capital_size([(1, 10.8, 9), (3, 14.4, 12), (6, 16.8, 14)])),
            paint=paint(1.5, opacity),
        ),
        Layer(
            id="city-label-us-rank1-2",
            type="symbol",
            source="us_high",
            source_layer="place",
            minzoom=4,
            filter=all_(FILTERS["has_name"], top_cities),
            layout=layout(abbreviated_text_field(),
                          _capital_size([(4, 15, 12), (8, 25, 20), (12, 32, 26)])),
            paint=paint(1.5, opacity),
        ),
        # Settlements only; neighbourhood-level suburbs and minor villages are left out
        Layer(
            id="city-label-us-all",
            type="symbol",
            source="us_high",
            source_layer="place",
            minzoom=8,
            filter=all_(
                FILTERS["has_name"],
                in_classes(SETTLEMENT_CLASSES),
                case_expr([(eq(get("class"), "suburb"),
                            all_(has("rank"), le(get("rank"), 8)))], True),
                case_expr([(eq(get("class"), "village"),
                            case_expr([(has("rank"), le(get("rank"), 15))], True))], True),
            ),
            layout=layout(abbreviated_text_field(), place_size_expr()),
            paint=paint(1.5, TOWN_LABEL_OPACITY),
        ),
    ]
