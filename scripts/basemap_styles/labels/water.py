"""
Water body and waterway labels.

Oceans, seas and lakes are labelled from several sources so the labels
survive the hand-over between world_labels, the world low/mid sources and
the regional source. Label size scales with the feature's rank when it has
one, otherwise with what its name suggests ("Sea" > "Gulf" > "Bay").
"""

from typing import Any, List, Optional, Sequence

from ..expressions import (
    FILTERS,
    all_,
    any_,
    case_expr,
    coalesce,
    eq,
    get,
    gt,
    has,
    in_,
    in_classes,
    interpolate_linear,
    le,
    let,
    match_expr,
    not_,
    text_field,
    var,
    zoom,
)
from ..layer import Layer
from ..theme import Theme, resolve_label_fonts

MARINE_CLASSES = ("ocean", "sea", "gulf", "bay")


def _name_binding(body: Any):
    return let("name", coalesce(get("name:en"), get("name"), ""), body)


def _name_contains(*words: str) -> list:
    return [in_(word, var("name")) for word in words]


def _water_paint(theme: Theme, halo_width: float, opacity: Optional[float] = None) -> dict:
    label = theme.colors.label.water
    return {
        "text-color": label.color,
        "text-halo-color": label.halo,
        "text-halo-width": halo_width,
        "text-halo-blur": 1,
        "text-opacity": theme.opacities.label.water if opacity is None else opacity,
    }


def _point_label(theme: Theme, layer_id: str, source: str, source_layer: str,
                 text_size: Any, padding: float, filter: Any = None,
                 field: Any = None, thin: bool = False, **zooms: float) -> Layer:
    return Layer(
        id=layer_id,
        type="symbol",
        source=source,
        source_layer=source_layer,
        filter=filter,
        layout={
            "text-field": field if field is not None else text_field(),
            "text-font": resolve_label_fonts(theme).water,
            "text-size": text_size,
            "symbol-placement": "point",
            "text-padding": padding,
        },
        paint=_water_paint(theme, 1.5 if thin else 2),
        **zooms,
    )


def _sizes(stops: Sequence[tuple[float, float]]):
    return interpolate_linear(zoom(), stops)


# =============================================================================
# SIZE EXPRESSIONS
# =============================================================================

def _rank_sizes(sizes: Sequence[tuple[float, float]], fallback: float):
    """Size by rank: the first (max rank, size) pair the feature's rank fits."""
    return case_expr([(le(get("rank"), rank), size) for rank, size in sizes], fallback)


def water_name_size_expr():
    """Text size for named water bodies, from rank or from the name itself."""
    def size_at(base: float):
        by_name = [(cond, base + 4) for cond in _name_contains("Sea", "sea")]
        by_name += [(cond, base + 3) for cond in _name_contains("Gulf", "gulf")]
        by_name += [(cond, base + 2) for cond in _name_contains("Bay", "bay")]
        by_name += [(eq(get("class"), "bay"), base + 2), (eq(get("class"), "lake"), base + 3)]
        return _name_binding(case_expr(
            [(has("rank"), _rank_sizes(
                [(1, base + 6), (2, base + 4), (3, base + 3), (4, base + 2), (6, base + 1)], base))],
            case_expr(by_name, base + 1),
        ))

    return _sizes([(4, size_at(7)), (6, size_at(13)), (10, size_at(18))])


def region_major_water_size_expr():
    """Text size for regional water bodies. Ponds and pools stay small."""
    def size_at(pond: float, reservoir: float, default: float, ranks: Sequence[float]):
        small = [(cond, pond) for cond in _name_contains("Pond", "pond", "Pool", "pool")]
        small += [(cond, pond - 1) for cond in _name_contains("Puddle", "puddle")]
        by_rank = _rank_sizes(list(zip((1, 2, 3, 4), ranks[:4])), ranks[4])
        by_name = case_expr(
            [(cond, reservoir) for cond in _name_contains("Reservoir", "reservoir")], default
        )
        return _name_binding(case_expr(small, case_expr([(has("rank"), by_rank)], by_name)))

    return _sizes([
        (6, size_at(6, 11, 10, (16, 14, 12, 10, 8))),
        (10, size_at(6, 14, 13, (22, 19, 16, 13, 10))),
        (12, size_at(7, 18, 17, (26, 23, 20, 17, 13))),
        (15, size_at(8, 19, 18, (30, 26, 22, 18, 14))),
    ])


def _marine_class_size(sea: float, gulf: float, bay: float, lake: float, other: float):
    return match_expr(
        get("class"), [("sea", sea), ("gulf", gulf), ("bay", bay), ("lake", lake)], other
    )


# =============================================================================
# LAYERS
# =============================================================================

def create_world_labels_water_layers(theme: Theme) -> List[Layer]:
    """Create ocean, sea and lake labels from the global world_labels source."""
    has_name = FILTERS["has_name"]
    is_ocean = _name_binding(any_(*_name_contains("Ocean", "ocean")))
    not_ocean = _name_binding(all_(*(not_(c) for c in _name_contains("Ocean", "ocean"))))
    ocean_size = _sizes([(1, 11), (3, 16), (6, 22), (10, 26)])

    return [
        _point_label(
            theme, "marine-label-world-labels-place-ocean", "world_labels", "place",
            ocean_size, 10, filter=all_(has_name, eq(get("class"), "ocean")),
            minzoom=1, maxzoom=10,
        ),
        _point_label(
            theme, "marine-label-world-labels-place", "world_labels", "place",
            _sizes([
                (4, _marine_class_size(10, 8, 6, 9, 7)),
                (6, _marine_class_size(15, 11, 9, 13, 11)),
                (10, _marine_class_size(25, 20, 17, 23, 20)),
            ]),
            10,
            filter=all_(has_name, any_(in_classes(("sea", "gulf", "bay")), eq(get("class"), "lake"))),
            minzoom=4, maxzoom=10,
        ),
        _point_label(
            theme, "water-label-world-labels-watername-ocean", "world_labels", "water_name",
            ocean_size, 8, filter=all_(has_name, is_ocean), thin=True,
            minzoom=1, maxzoom=10,
        ),
        _point_label(
            theme, "water-label-world-labels-watername", "world_labels", "water_name",
            water_name_size_expr(), 8, filter=all_(has_name, not_ocean), thin=True,
            minzoom=4, maxzoom=10,
        ),
    ]


def create_basemap_water_label_layers(theme: Theme) -> List[Layer]:
    """Create water labels from the world low/mid and regional sources."""
    has_name = FILTERS["has_name"]
    marine_or_unclassed = case_expr([(has("class"), in_classes(MARINE_CLASSES))], True)
    low_size = _sizes([(1, 14), (3, 18), (6, 24)])
    mid_size = _sizes([(6, 20), (8, 24), (10, 28)])
    region_size = _sizes([(4, 16), (8, 20), (12, 26), (15, 32)])

    def ranked(test):
        return case_expr([(has("rank"), test)], False)

    return [
        # World low zoom
        _point_label(
            theme, "marine-label-world-watername-ocean", "world_low", "water_name_ocean",
            low_size, 10, field=coalesce(get("name:en"), get("name"), get("name_int"), ""),
            minzoom=1, maxzoom=6.5,
        ),
        _point_label(
            theme, "marine-label-world-watername", "world_low", "water_name",
            low_size, 10, filter=all_(has_name, marine_or_unclassed), minzoom=1, maxzoom=6.5,
        ),
        _point_label(
            theme, "marine-label-world", "world_low", "place",
            low_size, 10, filter=all_(has_name, FILTERS["marine_class"]), minzoom=1, maxzoom=6.5,
        ),
        _point_label(
            theme, "water-label-world-major", "world_low", "water_name",
            _sizes([(2, 12), (4, 14), (6, 18)]), 8, filter=all_(has_name), thin=True,
            minzoom=2, maxzoom=6.5,
        ),
        _point_label(
            theme, "water-label-world", "world_low", "water_name",
            _sizes([(4, 10), (6, 14)]), 8, filter=all_(has_name, ranked(gt(get("rank"), 2))),
            thin=True, minzoom=4, maxzoom=6.5,
        ),
        # World mid zoom
        _point_label(
            theme, "marine-label-world-mid-watername-ocean", "world_mid", "water_name_ocean",
            mid_size, 10, filter=all_(has_name), minzoom=6,
        ),
        _point_label(
            theme, "marine-label-world-mid-watername", "world_mid", "water_name",
            mid_size, 10, filter=all_(has_name, marine_or_unclassed), minzoom=6,
        ),
        _point_label(
            theme, "marine-label-world-mid", "world_mid", "place",
            mid_size, 10, filter=all_(has_name, FILTERS["marine_class"]), minzoom=6,
        ),
        _point_label(
            theme, "water-label-world-mid-major", "world_mid", "water_name",
            _sizes([(6, 16), (8, 18), (10, 22)]), 8, filter=all_(has_name), thin=True, minzoom=6,
        ),
        _point_label(
            theme, "water-label-world-mid", "world_mid", "water_name",
            _sizes([(7, 12), (10, 16)]), 8, filter=all_(has("name"), ranked(gt(get("rank"), 3))),
            thin=True, minzoom=7,
        ),
        # Regional
        _point_label(
            theme, "marine-label-us-watername-ocean", "us_high", "water_name_ocean",
            region_size, 10, filter=all_(has_name), minzoom=4,
        ),
        _point_label(
            theme, "marine-label-us-watername", "us_high", "water_name",
            region_size, 10, filter=all_(has_name, marine_or_unclassed), minzoom=4,
        ),
        _point_label(
            theme, "marine-label-us", "us_high", "place",
            region_size, 10, filter=all_(has_name, in_classes(MARINE_CLASSES + ("lake",))),
            minzoom=4,
        ),
        _point_label(
            theme, "water-label-us-place", "us_high", "place",
            _sizes([(6, 14), (10, 18), (15, 24)]), 8,
            filter=all_(has_name, eq(get("class"), "lake")), thin=True, minzoom=6,
        ),
        _point_label(
            theme, "water-label-us-major", "us_high", "water_name",
            region_major_water_size_expr(), 8,
            filter=all_(has_name, case_expr([(has("rank"), le(get("rank"), 4))], True)),
            thin=True, minzoom=6,
        ),
        _point_label(
            theme, "water-label-us", "us_high", "water_name",
            _sizes([(10, 11), (12, 14), (15, 18)]), 8,
            filter=all_(has_name, ranked(gt(get("rank"), 4))), thin=True, minzoom=10,
        ),
    ]


def _waterway_size(river: float, canal: float, stream: float, ditch: float):
    return match_expr(
        get("class"),
        [("river", river), ("canal", canal), ("stream", stream), ("ditch", ditch), ("drain", ditch)],
        stream,
    )


def create_waterway_label_layers(theme: Theme) -> List[Layer]:
    """Create river, canal and stream names along their lines."""
    label = theme.colors.label.water
    paint = {
        "text-color": label.color,
        "text-halo-color": label.halo,
        "text-halo-width": 1.5,
        "text-halo-blur": 1,
        "text-opacity": theme.opacities.label.waterway,
    }

    def line_label(layer_id: str, source: str, size_stops, **zooms: float) -> Layer:
        return Layer(
            id=layer_id,
            type="symbol",
            source=source,
            source_layer="waterway",
            filter=all_(FILTERS["has_name"]),
            layout={
                "text-font": resolve_label_fonts(theme).water,
                "symbol-placement": "line",
                "text-rotation-alignment": "map",
                "text-pitch-alignment": "viewport",
                "symbol-spacing": 200,
                "text-field": text_field(),
                "text-size": _sizes(size_stops),
            },
            paint=dict(paint),
            **zooms,
        )

    return [
        line_label("waterway-label-world", "world_low",
                   [(6, _waterway_size(10, 8, 7, 6)), (6.5, _waterway_size(12, 10, 8, 7))],
                   minzoom=6, maxzoom=6.5),
        line_label("waterway-label-world-mid", "world_mid",
                   [(6, _waterway_size(12, 10, 9, 8)), (10, _waterway_size(16, 13, 11, 10))],
                   minzoom=6),
        line_label("waterway-label-us", "us_high",
                   [(10, _waterway_size(10, 8, 7, 6)), (12, _waterway_size(12, 10, 8, 7)),
                    (15, _waterway_size(14, 11, 9, 8))],
                   minzoom=10),
    ]
