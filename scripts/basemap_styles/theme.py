"""
Theme model for basemap style compilation.

A Theme is one immutable value holding every colour, width, opacity and
setting the layer factories read, plus optional per-domain sub-configs
(bathymetry, contours, ice, grid, ...). Sub-config defaults live on the
dataclass fields; anything a factory cannot read straight off a field goes
through one of the resolve_* functions at the bottom of this module, so the
fallback chains are defined exactly once.

Zoom-stop mappings are written the way theme authors think about them:

    {"z0": 0.4, "z6": 1.2, "z10": 2.0}
    {6: 1, 12: 3, 15: 10}
    {"z6_5": 0.8}          # zoom 6.5

and normalized to a sorted list of (zoom, value) pairs before use.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional, Union

ZoomKey = Union[str, int, float]
ZoomStops = Mapping[ZoomKey, float]
Projection = Literal["mercator", "globe"]
FontStack = tuple[str, ...]

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
FUNCTIONAL_COLOR = re.compile(r"^(?:rgb|rgba|hsl|hsla)\([^)]*\)$")
_ZOOM_KEY = re.compile(r"^z?(\d+)(?:[_.](\d+))?$")

# Real-world road scaling synthesizes its last stop at this zoom
REAL_WORLD_MAX_ZOOM = 20


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def _check_color(value: Optional[str], name: str, hex_only: bool = False) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ValueError(f"{name}: expected a colour string, got {value!r}")
    if HEX_COLOR.match(value):
        return
    if not hex_only and FUNCTIONAL_COLOR.match(value):
        return
    kind = "hex colour" if hex_only else "colour"
    raise ValueError(f"{name}: invalid {kind} {value!r}")


def _check_opacity(value: Optional[float], name: str) -> None:
    if value is None:
        return
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name}: opacity {value} outside [0, 1]")


def _check_zoom_range(min_zoom: Optional[float], max_zoom: Optional[float], name: str) -> None:
    if min_zoom is None or max_zoom is None:
        return
    if min_zoom >= max_zoom:
        raise ValueError(f"{name}: min_zoom {min_zoom} must be below max_zoom {max_zoom}")


# =============================================================================
# ZOOM STOPS
# =============================================================================

def parse_zoom_key(key: ZoomKey) -> Optional[float]:
    """Parse a zoom-stop key ("z6", "z6_5", 6, 6.5) into a zoom level.

    Returns None for anything unparseable. Integral zooms come back as int
    so they serialize as 6 rather than 6.0.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, (int, float)):
        if not math.isfinite(key) or key < 0:
            return None
        return int(key) if float(key).is_integer() else float(key)
    if isinstance(key, str):
        match = _ZOOM_KEY.match(key.strip())
        if match:
            whole, fraction = match.groups()
            if fraction is None:
                return int(whole)
            return float(f"{whole}.{fraction}")
    return None


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def normalize_zoom_stops(stops: Optional[ZoomStops]) -> list[tuple[float, float]]:
    """Normalize a sparse zoom-stop mapping into sorted (zoom, value) pairs.

    Unparseable keys and non-numeric values are dropped. When two keys name
    the same zoom ("z6" and 6) the later entry wins.
    """
    if not stops:
        return []
    merged: dict[float, float] = {}
    for key, value in stops.items():
        zoom = parse_zoom_key(key)
        if zoom is None or not _is_number(value):
            continue
        merged[zoom] = value
    return sorted(merged.items())


def stop_value(stops: Optional[ZoomStops], zoom: float, default: float) -> float:
    """Value explicitly given for `zoom`, or `default` when there is none."""
    for stop_zoom, value in normalize_zoom_stops(stops):
        if stop_zoom == zoom:
            return value
    return default


def evaluate_stops(stops: list[tuple[float, float]], zoom: float) -> float:
    """Piecewise-linear value of normalized stops at `zoom`, clamped at both ends."""
    if not stops:
        raise ValueError("evaluate_stops needs at least one stop")
    if zoom <= stops[0][0]:
        return stops[0][1]
    if zoom >= stops[-1][0]:
        return stops[-1][1]
    for (z0, v0), (z1, v1) in zip(stops, stops[1:]):
        if z0 <= zoom <= z1:
            t = (zoom - z0) / (z1 - z0)
            return v0 + t * (v1 - v0)
    return stops[-1][1]


# =============================================================================
# FONTS
# =============================================================================

@dataclass(frozen=True)
class Fonts:
    """Glyph font stacks available on the glyph server."""

    regular: FontStack = ("Noto Sans Regular",)
    semibold: FontStack = ("Noto Sans SemiBold",)
    italic: FontStack = ("Noto Sans Italic",)
    bold: Optional[FontStack] = None


@dataclass(frozen=True)
class LabelFonts:
    """Per label-group font overrides. Unset groups fall back to `default`."""

    default: Optional[FontStack] = None
    place: Optional[FontStack] = None
    road: Optional[FontStack] = None
    water: Optional[FontStack] = None
    poi: Optional[FontStack] = None
    grid: Optional[FontStack] = None


# =============================================================================
# COLOURS
# =============================================================================

@dataclass(frozen=True)
class ClassColors:
    """Colour table keyed by feature class with a mandatory default."""

    default: str
    classes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_color(self.default, "default")
        for name, value in self.classes.items():
            _check_color(value, name)


@dataclass(frozen=True)
class WaterColors:
    """Water polygon and waterway colours."""

    fill: str
    line: str
    classes: Mapping[str, str] = field(default_factory=dict)
    default: Optional[str] = None

    def __post_init__(self) -> None:
        # Bathymetry derives its depth ramp from the fill
        _check_color(self.fill, "water.fill", hex_only=True)
        _check_color(self.line, "water.line")
        _check_color(self.default, "water.default")
        for name, value in self.classes.items():
            _check_color(value, f"water.{name}")


@dataclass(frozen=True)
class BoundaryColors:
    country: str
    state: str


@dataclass(frozen=True)
class RoadVariantColors:
    """Tunnel or bridge colour table. Unset classes use `default`."""

    default: str
    classes: Mapping[str, str] = field(default_factory=dict)
    casing: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.default, "default")
        _check_color(self.casing, "casing")
        for name, value in self.classes.items():
            _check_color(value, name)


@dataclass(frozen=True)
class RoadColors:
    """Surface road colours by class, plus optional tunnel/bridge tables."""

    motorway: str
    trunk: str
    primary: str
    secondary: str
    tertiary: str
    residential: str
    service: str
    other: str
    casing: str
    parking_aisle: Optional[str] = None
    tunnel: Optional[RoadVariantColors] = None
    bridge: Optional[RoadVariantColors] = None
    tunnel_casing: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("motorway", "trunk", "primary", "secondary", "tertiary",
                     "residential", "service", "other", "casing",
                     "parking_aisle", "tunnel_casing"):
            _check_color(getattr(self, name), f"road.{name}")

    def by_class(self) -> dict[str, str]:
        return {
            "motorway": self.motorway,
            "trunk": self.trunk,
            "primary": self.primary,
            "secondary": self.secondary,
            "tertiary": self.tertiary,
            "residential": self.residential,
            "service": self.service,
        }


@dataclass(frozen=True)
class BuildingColors:
    """Building fill/outline with optional height-tier colours."""

    fill: str
    outline: str
    short: Optional[str] = None
    medium: Optional[str] = None
    tall: Optional[str] = None
    skyscraper: Optional[str] = None
    supertall: Optional[str] = None
    megatall: Optional[str] = None
    default: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("fill", "outline", "short", "medium", "tall", "skyscraper",
                     "supertall", "megatall", "default"):
            _check_color(getattr(self, name), f"building.{name}")

    def by_tier(self) -> dict[str, str]:
        tiers = {}
        for tier in BUILDING_HEIGHT_TIERS:
            value = getattr(self, tier)
            if value is not None:
                tiers[tier] = value
        return tiers


@dataclass(frozen=True)
class LabelStyle:
    color: str
    halo: str


@dataclass(frozen=True)
class RoadLabelTone:
    color: str
    opacity: float = 1.0

    def __post_init__(self) -> None:
        _check_opacity(self.opacity, "road label opacity")


@dataclass(frozen=True)
class RoadLabelColors:
    major: RoadLabelTone
    secondary: RoadLabelTone
    tertiary: RoadLabelTone
    other: RoadLabelTone
    halo: str


@dataclass(frozen=True)
class PoiLabelColors:
    icon_color: str = "#7a8ba3"
    icon_size: float = 0.8
    text_color: str = "#a8b8d0"
    text_halo: str = "#0b0f14"
    text_halo_width: float = 1.5


@dataclass(frozen=True)
class LabelColors:
    place: LabelStyle
    road: RoadLabelColors
    water: LabelStyle
    poi: Optional[PoiLabelColors] = None


@dataclass(frozen=True)
class ThemeColors:
    """Every colour the base layers use."""

    background: str
    land: ClassColors
    landuse: ClassColors
    water: WaterColors
    boundary: BoundaryColors
    road: RoadColors
    path: str
    railway: str
    building: BuildingColors
    label: LabelColors

    def __post_init__(self) -> None:
        for name in ("background", "path", "railway"):
            _check_color(getattr(self, name), name)


# =============================================================================
# WIDTHS AND OPACITIES
# =============================================================================

@dataclass(frozen=True)
class RoadClassWidths:
    """Zoom-stop widths per road class. Classes fall back to `default` per zoom."""

    default: ZoomStops
    motorway: ZoomStops = field(default_factory=dict)
    trunk: ZoomStops = field(default_factory=dict)
    primary: ZoomStops = field(default_factory=dict)
    secondary: ZoomStops = field(default_factory=dict)
    tertiary: ZoomStops = field(default_factory=dict)
    residential: ZoomStops = field(default_factory=dict)
    service: ZoomStops = field(default_factory=dict)

    def for_class(self, feature_class: str) -> ZoomStops:
        if feature_class in ROAD_WIDTH_CLASSES:
            return getattr(self, feature_class)
        return {}


def _default_road_widths() -> RoadClassWidths:
    return RoadClassWidths(
        default={"z6": 0.4, "z12": 1, "z15": 4},
        motorway={"z6": 1, "z12": 3, "z15": 10},
        trunk={"z6": 0.8, "z12": 2.75, "z15": 10},
        primary={"z6": 0.7, "z12": 2, "z15": 10},
        secondary={"z6": 0.6, "z12": 1.5, "z15": 7.5},
        tertiary={"z6": 0.5, "z12": 1.5, "z15": 6},
        residential={"z6": 0.4, "z12": 1, "z15": 4},
        service={"z6": 0.2, "z12": 1, "z15": 4},
    )


def _default_road_casing_widths() -> RoadClassWidths:
    return RoadClassWidths(
        default={"z6": 0.7, "z12": 1.8, "z15": 5},
        motorway={"z6": 1.5, "z12": 4, "z15": 11},
        trunk={"z6": 1.2, "z12": 3.5, "z15": 11},
        primary={"z6": 1.0, "z12": 2.8, "z15": 11},
        secondary={"z6": 0.9, "z12": 2.2, "z15": 8.5},
        tertiary={"z6": 0.8, "z12": 2.2, "z15": 7},
        residential={"z6": 0.7, "z12": 1.8, "z15": 5},
        service={"z6": 0.5, "z12": 1.5, "z15": 5},
    )


@dataclass(frozen=True)
class BoundaryWidths:
    country: ZoomStops = field(default_factory=lambda: {"z0": 0.4, "z6": 1.2, "z10": 2.0, "z15": 2.5})
    state: ZoomStops = field(default_factory=lambda: {"z0": 0.2, "z6": 0.8, "z10": 1.2, "z15": 1.5})


@dataclass(frozen=True)
class ThemeWidths:
    boundary: BoundaryWidths = field(default_factory=BoundaryWidths)
    water_line: ZoomStops = field(default_factory=lambda: {"z0": 0.1, "z6": 0.4, "z10": 0.8, "z15": 1.0})
    road: RoadClassWidths = field(default_factory=_default_road_widths)
    road_casing: RoadClassWidths = field(default_factory=_default_road_casing_widths)
    tunnel_road: Optional[RoadClassWidths] = None
    bridge_road: Optional[RoadClassWidths] = None
    path: ZoomStops = field(default_factory=lambda: {"z12": 0.2, "z14": 0.6})
    railway: ZoomStops = field(default_factory=lambda: {"z10": 0.3, "z14": 0.8})


@dataclass(frozen=True)
class BoundaryOpacities:
    country: Union[float, ZoomStops] = 0.8
    state: float = 0.6
    maritime: float = 0.0

    def __post_init__(self) -> None:
        if _is_number(self.country):
            _check_opacity(self.country, "boundary.country")
        _check_opacity(self.state, "boundary.state")
        _check_opacity(self.maritime, "boundary.maritime")


@dataclass(frozen=True)
class LabelOpacities:
    place: float = 0.75
    water: float = 0.9
    waterway: float = 0.85


@dataclass(frozen=True)
class ThemeOpacities:
    landcover: float = 0.6
    landuse: float = 0.6
    building: float = 0.9
    boundary: BoundaryOpacities = field(default_factory=BoundaryOpacities)
    tunnel: float = 0.7
    label: LabelOpacities = field(default_factory=LabelOpacities)

    def __post_init__(self) -> None:
        for name in ("landcover", "landuse", "building", "tunnel"):
            _check_opacity(getattr(self, name), name)
        for name in ("place", "water", "waterway"):
            _check_opacity(getattr(self.label, name), f"label.{name}")


# =============================================================================
# SETTINGS
# =============================================================================

@dataclass(frozen=True)
class MinZoom:
    """Minimum zoom per projection."""

    mercator: float = 0
    globe: float = 2


@dataclass(frozen=True)
class View:
    """Initial camera pose."""

    center: tuple[float, float] = (-98.0, 39.0)
    zoom: float = 4.25
    pitch: float = 0
    bearing: float = 0


@dataclass(frozen=True)
class ThemeSettings:
    projection: Projection = "globe"
    min_zoom: Union[float, MinZoom] = field(default_factory=MinZoom)
    real_world_scale: bool = False
    real_world_scale_min_zoom: float = 15
    view: View = field(default_factory=View)

    def __post_init__(self) -> None:
        if self.projection not in ("mercator", "globe"):
            raise ValueError(f"projection: expected 'mercator' or 'globe', got {self.projection!r}")
        if self.real_world_scale_min_zoom >= REAL_WORLD_MAX_ZOOM:
            raise ValueError(
                f"real_world_scale_min_zoom: {self.real_world_scale_min_zoom} "
                f"must be below {REAL_WORLD_MAX_ZOOM}"
            )


# =============================================================================
# DOMAIN SUB-CONFIGS
# =============================================================================

@dataclass(frozen=True)
class ValueRange:
    """A min/max pair interpolated across a zoom range."""

    min: float
    max: float


@dataclass(frozen=True)
class ShieldStyle:
    """One highway shield sprite and its label styling."""

    sprite: str
    text_color: str
    min_zoom: float
    enabled: bool = True
    text_padding: tuple[float, float, float, float] = (2, 4, 2, 4)
    # (min zoom, min size, max zoom, max size)
    text_size: Optional[tuple[float, float, float, float]] = None
    text_font: Optional[FontStack] = None
    # Sprite drawing colours
    upper_background: Optional[str] = None
    lower_background: Optional[str] = None
    background: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ("text_color", "upper_background", "lower_background",
                     "background", "stroke_color"):
            _check_color(getattr(self, name), f"shield.{name}")


@dataclass(frozen=True)
class ShieldsConfig:
    enabled: bool = True
    min_zoom: float = 6
    interstate: ShieldStyle = field(
        default_factory=lambda: ShieldStyle("shield-interstate", "#ffffff", 6))
    us_highway: ShieldStyle = field(
        default_factory=lambda: ShieldStyle("shield-us", "#000000", 7))
    state_highway: ShieldStyle = field(
        default_factory=lambda: ShieldStyle("shield-state", "#1a4d1a", 8))


@dataclass(frozen=True)
class PoiCategory:
    enabled: bool = True
    min_zoom: Optional[float] = None


@dataclass(frozen=True)
class POIsConfig:
    """POI icon layers. A category left as None is not drawn."""

    enabled: bool = True
    min_zoom: float = 12
    airport: Optional[PoiCategory] = None
    airfield: Optional[PoiCategory] = None
    hospital: Optional[PoiCategory] = None
    museum: Optional[PoiCategory] = None
    zoo: Optional[PoiCategory] = None
    stadium: Optional[PoiCategory] = None
    park: Optional[PoiCategory] = None
    rail: Optional[PoiCategory] = None
    school: Optional[PoiCategory] = None


@dataclass(frozen=True)
class BathymetryConfig:
    """Ocean depth bands. Without explicit colours the ramp is derived from water.fill."""

    enabled: bool = True
    min_zoom: float = 0
    max_zoom: float = 6
    opacity: ValueRange = field(default_factory=lambda: ValueRange(0.7, 0.9))
    # Keys: shallow, shelf, slope, deep1, deep2, abyss, trench
    colors: Optional[Mapping[str, str]] = None
    depth_opacities: Optional[Mapping[str, float]] = None

    def __post_init__(self) -> None:
        _check_zoom_range(self.min_zoom, self.max_zoom, "bathymetry")
        _check_opacity(self.opacity.min, "bathymetry.opacity.min")
        _check_opacity(self.opacity.max, "bathymetry.opacity.max")
        if self.opacity.max <= 0:
            raise ValueError("bathymetry.opacity.max: must be above 0")
        for band, value in (self.colors or {}).items():
            _check_color(value, f"bathymetry.colors.{band}")
        for band, value in (self.depth_opacities or {}).items():
            _check_opacity(value, f"bathymetry.depth_opacities.{band}")


@dataclass(frozen=True)
class ContourStyle:
    color: str
    width: ValueRange
    opacity: float
    min_zoom: Optional[float] = None


@dataclass(frozen=True)
class ContoursConfig:
    enabled: bool = True
    min_zoom: Optional[float] = None
    max_zoom: float = 12
    major: ContourStyle = field(
        default_factory=lambda: ContourStyle("#4a5568", ValueRange(0.5, 1.5), 0.6))
    minor: ContourStyle = field(
        default_factory=lambda: ContourStyle("#3a4455", ValueRange(0.25, 0.75), 0.4))


@dataclass(frozen=True)
class IceFill:
    color: str
    opacity: Optional[float] = None


@dataclass(frozen=True)
class IceEdge:
    enabled: bool = True
    color: str = "#a0c8d8"
    width: float = 0.5
    opacity: float = 0.6


@dataclass(frozen=True)
class IceConfig:
    enabled: bool = True
    min_zoom: float = 0
    max_zoom: float = 6
    opacity: ValueRange = field(default_factory=lambda: ValueRange(0.7, 0.9))
    glaciated: IceFill = field(default_factory=lambda: IceFill("#e8f4f8"))
    ice_shelves: IceFill = field(default_factory=lambda: IceFill("#d0e8f0"))
    ice_edge: Optional[IceEdge] = field(default_factory=IceEdge)

    def __post_init__(self) -> None:
        _check_zoom_range(self.min_zoom, self.max_zoom, "ice")
        if self.opacity.max <= 0:
            raise ValueError("ice.opacity.max: must be above 0")


@dataclass(frozen=True)
class HillshadeConfig:
    enabled: bool = True
    min_zoom: float = 0
    max_zoom: Optional[float] = None
    opacity: float = 0.5
    exaggeration: float = 0.5
    illumination_direction: float = 335
    illumination_anchor: Literal["map", "viewport"] = "viewport"
    shadow_color: str = "#000000"
    highlight_color: str = "#ffffff"
    accent_color: str = "#000000"

    def __post_init__(self) -> None:
        _check_zoom_range(self.min_zoom, self.max_zoom, "hillshade")
        _check_opacity(self.opacity, "hillshade.opacity")


@dataclass(frozen=True)
class GridLabel:
    enabled: bool = True
    color: Optional[str] = None
    opacity: float = 0.8
    min_zoom: Optional[float] = None
    size: Union[float, ValueRange] = field(default_factory=lambda: ValueRange(10, 12))


@dataclass(frozen=True)
class GridLine:
    color: str = "#4a5568"
    width: Union[float, ValueRange, None] = None
    opacity: float = 0.4
    interval: Optional[float] = 10
    label: Optional[GridLabel] = None


@dataclass(frozen=True)
class GridConfig:
    enabled: bool = True
    min_zoom: float = 0
    max_zoom: float = 10
    latitude: Optional[GridLine] = field(default_factory=GridLine)
    longitude: Optional[GridLine] = field(default_factory=GridLine)

    def __post_init__(self) -> None:
        _check_zoom_range(self.min_zoom, self.max_zoom, "grid")
        for line in (self.latitude, self.longitude):
            if line is not None and line.label is not None:
                _check_zoom_range(line.label.min_zoom, self.max_zoom, "grid label")


@dataclass(frozen=True)
class BoundaryConfig:
    country: bool = True
    state: bool = True
    maritime: bool = True
    # Draw boundaries under water so coastlines hide them
    hide_over_water: bool = False


@dataclass(frozen=True)
class BuildingsConfig:
    enabled: bool = True
    min_zoom: float = 6
    max_zoom: Optional[float] = None
    height_colors_min_zoom: Optional[float] = None

    def __post_init__(self) -> None:
        _check_zoom_range(self.min_zoom, self.max_zoom, "buildings")


@dataclass(frozen=True)
class LandConfig:
    """Landcover/landuse visibility and single-colour override."""

    transparent: bool = False
    use_override_color: bool = False
    override_color: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.override_color, "override_color")


@dataclass(frozen=True)
class WaterConfig:
    transparent: bool = False
    transparent_waterway: bool = False
    use_override_color: bool = False
    override_color: Optional[str] = None
    use_override_color_waterway: bool = False
    override_color_waterway: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.override_color, "override_color")
        _check_color(self.override_color_waterway, "override_color_waterway")


@dataclass(frozen=True)
class RunwayStyle:
    color: str = "#4a5568"
    width: float = 0.5
    opacity: float = 0.8
    major_length: float = 2500


@dataclass(frozen=True)
class ApronStyle:
    fill_color: str = "#3a4455"
    fill_opacity: float = 0.3
    outline_color: str = "#4a5568"
    outline_width: float = 0.3


@dataclass(frozen=True)
class TaxiwayStyle:
    color: str = "#5a6578"
    width: float = 0.4
    opacity: float = 0.7


@dataclass(frozen=True)
class HelipadStyle:
    fill_color: str = "#5a6578"
    fill_opacity: float = 0.6
    outline_color: str = "#6a7588"
    outline_width: float = 0.3
    size: float = 4


@dataclass(frozen=True)
class AerowayLabelStyle:
    color: str = "#a8b8d0"
    halo_color: str = "#0b0f14"
    halo_width: float = 2
    opacity: float = 0.9
    major_size: Union[float, ValueRange, None] = None
    detailed_size: Union[float, ValueRange, None] = None


@dataclass(frozen=True)
class AerowayConfig:
    enabled: bool = True
    runway: RunwayStyle = field(default_factory=RunwayStyle)
    apron: ApronStyle = field(default_factory=ApronStyle)
    taxiway: TaxiwayStyle = field(default_factory=TaxiwayStyle)
    helipad: HelipadStyle = field(default_factory=HelipadStyle)
    label: AerowayLabelStyle = field(default_factory=AerowayLabelStyle)


@dataclass(frozen=True)
class DensityColorRange:
    """Colour for population density at or above `threshold` (people / sq mi)."""

    threshold: float
    fill_color: str
    outline_color: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.fill_color, f"density {self.threshold} fill_color", hex_only=True)
        _check_color(self.outline_color, f"density {self.threshold} outline_color")


@dataclass(frozen=True)
class DensityColors:
    default_fill_color: str
    ranges: tuple[DensityColorRange, ...] = ()
    default_outline_color: Optional[str] = None

    def __post_init__(self) -> None:
        _check_color(self.default_fill_color, "density default_fill_color", hex_only=True)
        _check_color(self.default_outline_color, "density default_outline_color")


@dataclass(frozen=True)
class PlacesFill:
    color: str = "#6a7588"
    opacity: float = 0.15


@dataclass(frozen=True)
class PlacesOutline:
    color: str = "#8a9598"
    width: ZoomStops = field(default_factory=lambda: {"z5": 0.5, "z10": 1.0, "z15": 1.5})
    opacity: float = 0.6


@dataclass(frozen=True)
class PlacesConfig:
    """Incorporated-place polygons coloured by runtime population feature-state."""

    enabled: bool = True
    min_zoom: float = 5
    fill: PlacesFill = field(default_factory=PlacesFill)
    outline: PlacesOutline = field(default_factory=PlacesOutline)
    density_colors: Optional[DensityColors] = None
    render_above_labels: bool = False

    def __post_init__(self) -> None:
        _check_opacity(self.fill.opacity, "places.fill.opacity")
        _check_opacity(self.outline.opacity, "places.outline.opacity")


@dataclass(frozen=True)
class GlowColors:
    inner: str = "rgba(200, 200, 200, 0.9)"
    middle: str = "rgba(150, 150, 150, 0.7)"
    outer: str = "rgba(100, 100, 100, 0.4)"
    fade: str = "rgba(50, 50, 50, 0)"


@dataclass(frozen=True)
class StarfieldConfig:
    """Globe-view starfield background, consumed by the browser map config."""

    glow_colors: GlowColors = field(default_factory=GlowColors)
    star_count: int = 200
    glow_intensity: float = 0.5
    glow_size_multiplier: float = 1.25
    glow_blur_multiplier: float = 0.1


# =============================================================================
# THEME
# =============================================================================

@dataclass(frozen=True)
class Theme:
    """Complete, immutable basemap theme.

    Opt-in domains (shields, POIs, bathymetry, contours, ice, hillshade, grid,
    aeroway, places) are off while their sub-config is None. Boundary,
    buildings, land, landuse and water fall back to their config defaults.
    """

    name: str
    colors: ThemeColors
    fonts: Fonts = field(default_factory=Fonts)
    label_fonts: Optional[LabelFonts] = None
    widths: ThemeWidths = field(default_factory=ThemeWidths)
    opacities: ThemeOpacities = field(default_factory=ThemeOpacities)
    settings: ThemeSettings = field(default_factory=ThemeSettings)
    description: str = ""

    shields: Optional[ShieldsConfig] = None
    pois: Optional[POIsConfig] = None
    bathymetry: Optional[BathymetryConfig] = None
    contours: Optional[ContoursConfig] = None
    ice: Optional[IceConfig] = None
    hillshade: Optional[HillshadeConfig] = None
    grid: Optional[GridConfig] = None
    aeroway: Optional[AerowayConfig] = None
    places: Optional[PlacesConfig] = None
    starfield: Optional[StarfieldConfig] = None

    boundary: Optional[BoundaryConfig] = None
    buildings: Optional[BuildingsConfig] = None
    land: Optional[LandConfig] = None
    landuse: Optional[LandConfig] = None
    water: Optional[WaterConfig] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name: theme name must not be empty")


# =============================================================================
# RESOLUTION
# =============================================================================

MAJOR_ROAD_CLASSES = ("motorway", "trunk", "primary", "secondary")
ROAD_WIDTH_CLASSES = ("motorway", "trunk", "primary", "secondary",
                      "tertiary", "residential", "service")
BUILDING_HEIGHT_TIERS = ("short", "medium", "tall", "skyscraper", "supertall", "megatall")
BATHYMETRY_BANDS = ("shallow", "shelf", "slope", "deep1", "deep2", "abyss", "trench")
POI_CATEGORIES = ("airport", "airfield", "hospital", "museum", "zoo",
                  "stadium", "park", "rail", "school")
OPT_IN_DOMAINS = ("shields", "pois", "bathymetry", "contours", "ice",
                  "hillshade", "grid", "aeroway", "places")

# Feature classes each colour category matches on. Anything else gets the
# category default.
FEATURE_CLASSES: dict[str, tuple[str, ...]] = {
    "land": ("wood", "grass", "scrub", "scrubland", "cropland", "farmland",
             "rock", "sand", "wetland"),
    "landuse": ("park", "cemetery", "pitch", "stadium", "residential", "college",
                "commercial", "construction", "dam", "farmland", "grass",
                "hospital", "industrial", "military", "neighbourhood", "quarry",
                "quarter", "railway", "retail", "school", "suburb", "theme_park",
                "track", "university", "zoo"),
    "water": ("ocean", "sea", "lake", "pond", "river", "reservoir", "bay", "gulf"),
    "waterway": ("river", "canal", "stream", "ditch", "drain"),
    "road": ROAD_WIDTH_CLASSES + ("minor", "unclassified"),
    "tunnel": ROAD_WIDTH_CLASSES + ("minor", "unclassified"),
    "bridge": ("motorway", "trunk", "primary", "secondary", "tertiary",
               "residential", "minor", "unclassified"),
    "building": BUILDING_HEIGHT_TIERS,
}

_ROAD_ALIASES = {"minor": "residential", "unclassified": "residential"}

# Second lookup tried when a class has no colour of its own
CLASS_ALIASES: dict[str, dict[str, str]] = {
    "land": {"scrubland": "scrub", "farmland": "cropland", "rock": "scrub"},
    "road": _ROAD_ALIASES,
    "tunnel": _ROAD_ALIASES,
    "bridge": _ROAD_ALIASES,
}


def override_color(category: str, theme: Theme) -> Optional[str]:
    """Domain-wide override colour for `category`, if one is switched on."""
    if category in ("land", "landuse"):
        config = getattr(theme, category)
        if config and config.use_override_color and config.override_color:
            return config.override_color
    elif category == "water":
        config = theme.water
        if config and config.use_override_color and config.override_color:
            return config.override_color
    elif category == "waterway":
        config = theme.water
        if config and config.use_override_color_waterway and config.override_color_waterway:
            return config.override_color_waterway
    return None


def _color_table(category: str, theme: Theme) -> tuple[Mapping[str, str], str, str]:
    """(class colours, per-class fallback, category default) for a category."""
    c = theme.colors
    if category in ("land", "landuse"):
        table = getattr(c, category)
        return table.classes, table.default, table.default
    if category == "water":
        default = c.water.default or c.water.fill
        return c.water.classes, c.water.fill, default
    if category == "waterway":
        default = c.water.default or c.water.line
        return c.water.classes, c.water.line, default
    if category == "road":
        return c.road.by_class(), c.road.other, c.road.other
    if category in ("tunnel", "bridge"):
        variant = getattr(c.road, category)
        return variant.classes, variant.default, variant.default
    if category == "building":
        default = c.building.default or c.building.fill
        return c.building.by_tier(), c.building.fill, default
    raise ValueError(f"Unknown colour category: {category!r}")


def _inherits_road(category: str, theme: Theme) -> bool:
    return category in ("tunnel", "bridge") and getattr(theme.colors.road, category) is None


def resolve_color(category: str, feature_class: str, theme: Theme) -> str:
    """Concrete colour for a feature class within a colour category.

    Order: domain override, the class's own colour, its alias's colour,
    the per-class fallback, and finally the category default for classes
    outside the category vocabulary. Tunnels and bridges without their own
    table resolve exactly like surface roads.
    """
    if category not in FEATURE_CLASSES:
        raise ValueError(f"Unknown colour category: {category!r}")
    if _inherits_road(category, theme):
        return resolve_color("road", feature_class, theme)

    override = override_color(category, theme)
    if override is not None:
        return override

    classes, class_fallback, default = _color_table(category, theme)
    if feature_class not in FEATURE_CLASSES[category]:
        return default
    if classes.get(feature_class):
        return classes[feature_class]
    alias = CLASS_ALIASES.get(category, {}).get(feature_class)
    if alias and classes.get(alias):
        return classes[alias]
    return class_fallback


def resolve_default_color(category: str, theme: Theme) -> str:
    """Colour for features whose class is outside the category vocabulary."""
    if category not in FEATURE_CLASSES:
        raise ValueError(f"Unknown colour category: {category!r}")
    if _inherits_road(category, theme):
        return resolve_default_color("road", theme)
    override = override_color(category, theme)
    if override is not None:
        return override
    return _color_table(category, theme)[2]


def road_class_width_at(widths: RoadClassWidths, feature_class: str,
                        zoom: float, fallback: float) -> float:
    """Width of a road class at one zoom.

    Class stops override the default stops zoom by zoom. An explicit stop
    at `zoom` wins; otherwise the merged stops are interpolated linearly and
    clamped at the ends. `fallback` is used only when there are no stops.
    """
    feature_class = _ROAD_ALIASES.get(feature_class, feature_class)
    merged = dict(normalize_zoom_stops(widths.default))
    merged.update(normalize_zoom_stops(widths.for_class(feature_class)))
    if not merged:
        return fallback
    if zoom in merged:
        return merged[zoom]
    return evaluate_stops(sorted(merged.items()), zoom)


def resolve_label_fonts(theme: Theme) -> LabelFonts:
    """Label fonts with every group filled in."""
    lf = theme.label_fonts or LabelFonts()
    default = lf.default
    regular = default or theme.fonts.regular
    return LabelFonts(
        default=regular,
        place=lf.place or regular,
        road=lf.road or regular,
        water=lf.water or default or theme.fonts.italic,
        poi=lf.poi or regular,
        grid=lf.grid or regular,
    )


def resolve_min_zoom(theme: Theme) -> MinZoom:
    min_zoom = theme.settings.min_zoom
    if isinstance(min_zoom, MinZoom):
        return min_zoom
    return MinZoom(mercator=min_zoom, globe=min_zoom)


def resolve_view(theme: Theme) -> View:
    return theme.settings.view


def resolve_boundary(theme: Theme) -> BoundaryConfig:
    return theme.boundary or BoundaryConfig()


def resolve_buildings(theme: Theme) -> BuildingsConfig:
    return theme.buildings or BuildingsConfig()


def resolve_land(theme: Theme, category: str = "land") -> LandConfig:
    return getattr(theme, category) or LandConfig()


def resolve_water(theme: Theme) -> WaterConfig:
    return theme.water or WaterConfig()


def domain_enabled(theme: Theme, domain: str) -> bool:
    """Whether an opt-in domain (bathymetry, grid, ...) is switched on."""
    if domain not in OPT_IN_DOMAINS:
        raise ValueError(f"Unknown domain: {domain!r}")
    config = getattr(theme, domain)
    return config is not None and config.enabled


def poi_category_enabled(theme: Theme, category: str) -> bool:
    if category not in POI_CATEGORIES:
        raise ValueError(f"Unknown POI category: {category!r}")
    if not domain_enabled(theme, "pois"):
        return False
    config = getattr(theme.pois, category)
    return config is not None and config.enabled


def poi_min_zoom(theme: Theme, category: str, default: Optional[float] = None) -> float:
    """Min zoom for a POI category: its own, else `default`, else the POI-wide one."""
    config = getattr(theme.pois, category) if theme.pois else None
    if config is not None and config.min_zoom:
        return config.min_zoom
    if default is not None:
        return default
    return theme.pois.min_zoom if theme.pois and theme.pois.min_zoom else 12
