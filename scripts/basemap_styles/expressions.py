"""
MapLibre expression builders.

Expressions are built as small immutable trees (Literal, Get, Op, Labels)
and only turned into the renderer's nested-array form by to_json() when the
style document is written. Everything theme-specific (road widths, colour
tables, filters, label text) is built from the combinators in this module so
that ordering and duplicate-label checks happen in one place.

Example:
    >>> to_json(interpolate_linear(zoom(), [(6, 0.5), (12, 2)]))
    ['interpolate', ['linear'], ['zoom'], 6, 0.5, 12, 2]
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from .theme import (
    FEATURE_CLASSES,
    MAJOR_ROAD_CLASSES,
    REAL_WORLD_MAX_ZOOM,
    ROAD_WIDTH_CLASSES,
    RoadClassWidths,
    Theme,
    ValueRange,
    ZoomStops,
    normalize_zoom_stops,
    override_color,
    resolve_color,
    resolve_default_color,
    road_class_width_at,
    stop_value,
)


# =============================================================================
# EXPRESSION TREE
# =============================================================================

class Expr:
    """Base class for expression tree nodes."""

    def to_json(self) -> Any:
        raise NotImplementedError


Value = Union[Expr, str, int, float, bool, None]


@dataclass(frozen=True)
class Literal(Expr):
    """A constant. Arrays and objects are wrapped in ["literal", ...]."""

    value: Any

    def to_json(self) -> Any:
        if isinstance(self.value, (list, tuple)):
            return ["literal", [to_json(v) for v in self.value]]
        if isinstance(self.value, Mapping):
            return ["literal", {k: to_json(v) for k, v in self.value.items()}]
        return self.value


@dataclass(frozen=True)
class Get(Expr):
    """Feature property lookup."""

    name: str

    def to_json(self) -> Any:
        return ["get", self.name]


@dataclass(frozen=True)
class Op(Expr):
    """Operator applied to operands: [operator, *operands]."""

    operator: str
    operands: tuple = ()

    def to_json(self) -> Any:
        return [self.operator, *(to_json(operand) for operand in self.operands)]


@dataclass(frozen=True)
class Labels(Expr):
    """Bare label list, only valid as a match case label."""

    values: tuple

    def to_json(self) -> Any:
        return list(self.values)


def to_json(value: Any) -> Any:
    """Serialize expressions, layer property mappings and nested lists."""
    if isinstance(value, Expr):
        return value.to_json()
    if isinstance(value, Mapping):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    return value


# =============================================================================
# HELPERS
# =============================================================================

def op(operator: str, *operands: Value) -> Op:
    return Op(operator, tuple(operands))


def zoom() -> Op:
    return op("zoom")


def get(name: str) -> Get:
    return Get(name)


def has(name: str) -> Op:
    return op("has", name)


def eq(left: Value, right: Value) -> Op:
    return op("==", left, right)


def ne(left: Value, right: Value) -> Op:
    return op("!=", left, right)


def gt(left: Value, right: Value) -> Op:
    return op(">", left, right)


def ge(left: Value, right: Value) -> Op:
    return op(">=", left, right)


def lt(left: Value, right: Value) -> Op:
    return op("<", left, right)


def le(left: Value, right: Value) -> Op:
    return op("<=", left, right)


def all_(*conditions: Value) -> Op:
    return op("all", *conditions)


def any_(*conditions: Value) -> Op:
    return op("any", *conditions)


def not_(condition: Value) -> Op:
    return op("!", condition)


def coalesce(*values: Value) -> Op:
    return op("coalesce", *values)


def feature_state(name: str) -> Op:
    return op("feature-state", name)


def concat(*parts: Value) -> Op:
    return op("concat", *parts)


def to_string(value: Value) -> Op:
    return op("to-string", value)


def abs_(value: Value) -> Op:
    return op("abs", value)


def upcase(value: Value) -> Op:
    return op("upcase", value)


def var(name: str) -> Op:
    return op("var", name)


def let(name: str, value: Value, body: Value) -> Op:
    return op("let", name, value, body)


def slice_(value: Value, start: Value, end: Optional[Value] = None) -> Op:
    if end is None:
        return op("slice", value, start)
    return op("slice", value, start, end)


def length(value: Value) -> Op:
    return op("length", value)


def in_(needle: Value, haystack: Value) -> Op:
    return op("in", needle, haystack)


def add(*values: Value) -> Op:
    return op("+", *values)


def sub(left: Value, right: Value) -> Op:
    return op("-", left, right)


def mul(*values: Value) -> Op:
    return op("*", *values)


def div(left: Value, right: Value) -> Op:
    return op("/", left, right)


def in_classes(classes: Iterable[str], prop: str = "class") -> Op:
    """True when the property is one of `classes`."""
    return match_expr(get(prop), [(Labels(tuple(classes)), True)], False)


# =============================================================================
# COMBINATORS
# =============================================================================

def _check_ascending(breakpoints: Sequence[float], what: str) -> None:
    for previous, current in zip(breakpoints, breakpoints[1:]):
        if not current > previous:
            raise ValueError(
                f"{what} breakpoints must be strictly increasing, got {list(breakpoints)}"
            )


def _flatten(pairs: Sequence[tuple[Any, Value]]) -> tuple:
    flat: list = []
    for key, output in pairs:
        flat.extend((key, output))
    return tuple(flat)


def interpolate_linear(input: Value, stops: Sequence[tuple[float, Value]]) -> Op:
    if not stops:
        raise ValueError("interpolate needs at least one stop")
    _check_ascending([z for z, _ in stops], "interpolate")
    return Op("interpolate", (op("linear"), input) + _flatten(stops))


def interpolate_exponential(base: float, input: Value,
                            stops: Sequence[tuple[float, Value]]) -> Op:
    if not stops:
        raise ValueError("interpolate needs at least one stop")
    _check_ascending([z for z, _ in stops], "interpolate")
    return Op("interpolate", (op("exponential", base), input) + _flatten(stops))


def step_expr(input: Value, default: Value, pairs: Sequence[tuple[float, Value]]) -> Op:
    """Step function: `default` below the first breakpoint, then each output."""
    if not pairs:
        raise ValueError("step needs at least one breakpoint")
    _check_ascending([threshold for threshold, _ in pairs], "step")
    return Op("step", (input, default) + _flatten(pairs))


def match_expr(input: Value, cases: Sequence[tuple[Any, Value]], default: Value) -> Op:
    """Match `input` against case labels. A label may be a Labels group."""
    if not cases:
        raise ValueError("match needs at least one case")
    seen: set = set()
    for label, _ in cases:
        values = label.values if isinstance(label, Labels) else (label,)
        if isinstance(label, Labels) and not values:
            raise ValueError("match label groups must not be empty")
        for value in values:
            if value in seen:
                raise ValueError(f"Duplicate match label: {value!r}")
            seen.add(value)
    return Op("match", (input,) + _flatten(cases) + (default,))


def case_expr(branches: Sequence[tuple[Value, Value]], default: Value) -> Op:
    if not branches:
        raise ValueError("case needs at least one branch")
    return Op("case", _flatten(branches) + (default,))


# =============================================================================
# WIDTHS
# =============================================================================

ROAD_WIDTH_ZOOMS = (6, 12, 15)

# Width lookups share the residential row
_ROAD_WIDTH_LABELS: tuple[tuple[Any, str], ...] = tuple(
    (Labels(("residential", "minor", "unclassified")) if cls == "residential" else cls, cls)
    for cls in ROAD_WIDTH_CLASSES
)


def zoom_width_expr(stops: Optional[ZoomStops], default: float) -> Union[Op, float]:
    """Linear zoom interpolation over sparse stops, or `default` with fewer than two."""
    normalized = normalize_zoom_stops(stops)
    if len(normalized) < 2:
        return default
    return interpolate_linear(zoom(), normalized)


def zoom_stops_expr(stops: Optional[ZoomStops], defaults: Mapping[float, float]) -> Op:
    """Linear interpolation at fixed zooms, each value taken from `stops` or `defaults`."""
    return interpolate_linear(
        zoom(), [(z, stop_value(stops, z, default)) for z, default in defaults.items()]
    )


def zoom_fade_expr(min_zoom: float, max_zoom: float, start: float, full: float) -> Op:
    """Ramp from `start` at min_zoom to `full` at max_zoom, then fade to 0 one zoom later."""
    stops = [(min_zoom, start)] if min_zoom < max_zoom else []
    stops += [(max_zoom, full), (max_zoom + 1, 0.0)]
    return interpolate_linear(zoom(), stops)


def range_expr(value: Union[float, ValueRange, None], min_zoom: float, max_zoom: float,
               default: ValueRange) -> Union[Op, float]:
    """A fixed number, or a min/max range interpolated from min_zoom to max_zoom."""
    if isinstance(value, (int, float)):
        return value
    value = value or default
    return interpolate_linear(zoom(), [(min_zoom, value.min), (max_zoom, value.max)])


def _road_width_match(widths: RoadClassWidths, at_zoom: float, scale: float = 1) -> Op:
    cases = [
        (label, road_class_width_at(widths, cls, at_zoom, 0.5) * scale)
        for label, cls in _ROAD_WIDTH_LABELS
    ]
    fallback = road_class_width_at(widths, "", at_zoom, 0.5) * scale
    return match_expr(get("class"), cases, fallback)


def road_width_expr(widths: RoadClassWidths) -> Op:
    """Road width by class, linear between z6, z12 and z15."""
    return interpolate_linear(
        zoom(), [(z, _road_width_match(widths, z)) for z in ROAD_WIDTH_ZOOMS]
    )


def road_width_expr_real_world(widths: RoadClassWidths, min_zoom: float = 15) -> Op:
    """Road width that doubles every zoom level from `min_zoom` on.

    Below `min_zoom` the usual z6/z12 stops apply. The width at `min_zoom`
    is paired with a synthesized z20 stop of width * 2^(20 - min_zoom), and
    exponential base-2 interpolation between the two gives exactly
    width * 2^(z - min_zoom).
    """
    if min_zoom >= REAL_WORLD_MAX_ZOOM:
        raise ValueError(
            f"real-world scaling must start below z{REAL_WORLD_MAX_ZOOM}, got {min_zoom}"
        )
    stops = [(z, _road_width_match(widths, z)) for z in ROAD_WIDTH_ZOOMS[:2] if z < min_zoom]
    stops.append((min_zoom, _road_width_match(widths, min_zoom)))
    multiplier = 2 ** (REAL_WORLD_MAX_ZOOM - min_zoom)
    stops.append((REAL_WORLD_MAX_ZOOM, _road_width_match(widths, min_zoom, multiplier)))
    return interpolate_exponential(2, zoom(), stops)


def road_casing_width_expr(widths: RoadClassWidths) -> Op:
    return road_width_expr(widths)


def road_casing_width_expr_real_world(widths: RoadClassWidths, min_zoom: float = 15) -> Op:
    """Casing counterpart of road_width_expr_real_world; outlines scale with the road."""
    return road_width_expr_real_world(widths, min_zoom)


def road_width_for_theme(theme: Theme, widths: RoadClassWidths) -> Op:
    """Road or casing width honouring the theme's real-world scale setting."""
    settings = theme.settings
    if settings.real_world_scale:
        return road_width_expr_real_world(widths, settings.real_world_scale_min_zoom)
    return road_width_expr(widths)


# =============================================================================
# COLOURS
# =============================================================================

def class_color_expr(category: str, theme: Theme, prop: str = "class") -> Union[Op, str]:
    """Match on the class property using resolve_color for every known class."""
    override = override_color(category, theme)
    if override is not None:
        return override
    cases = [(cls, resolve_color(category, cls, theme)) for cls in FEATURE_CLASSES[category]]
    return match_expr(get(prop), cases, resolve_default_color(category, theme))


def landcover_fill_color(theme: Theme) -> Union[Op, str]:
    return class_color_expr("land", theme)


def landuse_fill_color(theme: Theme) -> Union[Op, str]:
    return class_color_expr("landuse", theme)


def water_fill_color(theme: Theme) -> Union[Op, str]:
    return class_color_expr("water", theme)


def waterway_line_color(theme: Theme) -> Union[Op, str]:
    return class_color_expr("waterway", theme)


def road_color_expr(theme: Theme) -> Op:
    """Major roads only: motorway through secondary, everything else `other`."""
    cases = [(cls, resolve_color("road", cls, theme)) for cls in MAJOR_ROAD_CLASSES]
    return match_expr(get("class"), cases, theme.colors.road.other)


def road_color_with_tertiary_expr(theme: Theme) -> Union[Op, str]:
    return class_color_expr("road", theme)


def tunnel_color_expr(theme: Theme) -> Union[Op, str]:
    """Tunnel colours; without a tunnel table this is the surface road expression."""
    if theme.colors.road.tunnel is None:
        return road_color_with_tertiary_expr(theme)
    return class_color_expr("tunnel", theme)


def bridge_color_expr(theme: Theme) -> Union[Op, str]:
    if theme.colors.road.bridge is None:
        return road_color_with_tertiary_expr(theme)
    return class_color_expr("bridge", theme)


# render_height (metres) where each tier colour is reached
BUILDING_HEIGHT_STOPS = (
    (0, "short"),
    (10, "medium"),
    (50, "tall"),
    (150, "skyscraper"),
    (300, "supertall"),
    (600, "megatall"),
)


def building_fill_color(theme: Theme, height_colors_min_zoom: Optional[float] = None) -> Op:
    """Building colour interpolated over render_height.

    With `height_colors_min_zoom` the height ramp only applies from that
    zoom; below it a flat default is used. The step breakpoint sits just
    under the threshold so the ramp is active at exactly that zoom.
    """
    height_color = interpolate_linear(
        coalesce(get("render_height"), 0),
        [(height, resolve_color("building", tier, theme)) for height, tier in BUILDING_HEIGHT_STOPS],
    )
    if height_colors_min_zoom is None:
        return height_color
    return step_expr(
        zoom(),
        resolve_default_color("building", theme),
        [(height_colors_min_zoom - 0.001, height_color)],
    )


# =============================================================================
# FILTERS
# =============================================================================

def _not_brunnel() -> tuple[Op, Op]:
    return ne(get("brunnel"), "tunnel"), ne(get("brunnel"), "bridge")


NORMAL_ROAD_CLASSES = ROAD_WIDTH_CLASSES + ("minor", "unclassified")

FILTERS: dict[str, Op] = {
    "has_name": any_(has("name"), has("name:en")),
    "major_road": all_(*_not_brunnel(), in_classes(MAJOR_ROAD_CLASSES)),
    # Alleys and parking aisles get their own higher-minzoom layers
    "normal_road": all_(
        *_not_brunnel(),
        in_classes(NORMAL_ROAD_CLASSES),
        ne(get("service"), "alley"),
        ne(get("service"), "parking_aisle"),
    ),
    "alley": all_(*_not_brunnel(), eq(get("class"), "service"), eq(get("service"), "alley")),
    "parking_aisle": all_(
        *_not_brunnel(), eq(get("class"), "service"), eq(get("service"), "parking_aisle")
    ),
    "tunnel": eq(get("brunnel"), "tunnel"),
    "bridge": eq(get("brunnel"), "bridge"),
    "path": in_classes(("path", "track", "footway", "cycleway")),
    "railway": eq(get("class"), "rail"),
    "country_boundary": all_(eq(get("admin_level"), 2), ne(get("maritime"), 1)),
    "maritime_boundary": all_(eq(get("admin_level"), 2), eq(get("maritime"), 1)),
    "state_boundary": eq(get("admin_level"), 4),
    "marine_class": any_(in_classes(("ocean", "sea", "gulf", "bay")), eq(get("class"), "lake")),
}


def not_brunnel() -> list[Op]:
    """Conditions excluding tunnels and bridges, for splicing into all_()."""
    return list(_not_brunnel())


# =============================================================================
# LABEL TEXT
# =============================================================================

def text_field() -> Op:
    """English name when present, local name otherwise."""
    return coalesce(get("name:en"), get("name"))


DIRECTION_ABBREVIATIONS = (
    ("North", "N"),
    ("South", "S"),
    ("East", "E"),
    ("West", "W"),
)

SUFFIX_ABBREVIATIONS = (
    ("Avenue", "Ave"),
    ("Street", "St"),
    ("Boulevard", "Blvd"),
    ("Drive", "Dr"),
    ("Road", "Rd"),
    ("Lane", "Ln"),
    ("Court", "Ct"),
    ("Circle", "Cir"),
    ("Parkway", "Pkwy"),
    ("Place", "Pl"),
    ("Highway", "Hwy"),
    ("Turnpike", "Tpke"),
)


def _direction_branches(name: Op) -> list[tuple[Op, Op]]:
    branches = []
    for word, short in DIRECTION_ABBREVIATIONS:
        prefix = f"{word} "
        branches.append((
            eq(slice_(name, 0, len(prefix)), prefix),
            concat(f"{short} ", slice_(name, len(prefix))),
        ))
    for word, short in DIRECTION_ABBREVIATIONS:
        branches.append((eq(name, word), short))
    return branches


def _suffix_branches(text: Op, text_length: Op) -> list[tuple[Op, Op]]:
    branches = []
    for leading in (" ", ""):
        for word, short in SUFFIX_ABBREVIATIONS:
            suffix = f"{leading}{word}"
            cut = sub(text_length, len(suffix))
            branches.append((
                eq(slice_(text, cut, text_length), suffix),
                concat(slice_(text, 0, cut), f"{leading}{short}"),
            ))
    return branches


def abbreviated_text_field() -> Op:
    """Display name with directional prefixes and street suffixes shortened.

    "North Main Street" -> "N Main St", "West Lake Boulevard" -> "W Lake Blvd".
    """
    name = var("name")
    directed = var("dirReplaced")
    return let(
        "name", text_field(),
        let(
            "dirReplaced", case_expr(_direction_branches(name), name),
            let(
                "len", length(directed),
                case_expr(_suffix_branches(directed, var("len")), directed),
            ),
        ),
    )
