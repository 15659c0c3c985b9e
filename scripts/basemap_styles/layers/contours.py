"""Major and minor elevation contour lines."""

from typing import List

from ..expressions import interpolate_linear, zoom
from ..layer import Layer
from ..theme import ContourStyle, Theme, domain_enabled

# (zoom, width multiplier, opacity multiplier) boosts for extra detail mid-range
MAJOR_BOOST = ((8, 1.2, 1.2), (9, 1.3, 1.3))
MINOR_BOOST = ((8, 1.3, 1.5), (9, 1.5, 1.8))


def _contour_layer(layer_id: str, source_layer: str, style: ContourStyle,
                   min_zoom: float, max_zoom: float, boosts) -> Layer:
    # Boost stops only make sense strictly inside the zoom range
    inner = [b for b in boosts if min_zoom < b[0] < max_zoom]

    width = [(min_zoom, style.width.min)]
    width += [(z, style.width.max * w) for z, w, _ in inner]
    width.append((max_zoom, style.width.max))

    opacity = [(min_zoom, style.opacity)]
    opacity += [(z, min(1.0, style.opacity * o)) for z, _, o in inner]
    opacity += [(max_zoom, style.opacity), (max_zoom + 1, 0.0)]

    return Layer(
        id=layer_id,
        type="line",
        source="world-contours",
        source_layer=source_layer,
        minzoom=min_zoom,
        maxzoom=max_zoom + 1,
        paint={
            "line-color": style.color,
            "line-width": interpolate_linear(zoom(), width),
            "line-opacity": interpolate_linear(zoom(), opacity),
        },
    )


def create_contour_layers(theme: Theme) -> List[Layer]:
    """Create major and minor contour lines that fade out past max_zoom."""
    if not domain_enabled(theme, "contours"):
        return []

    contours = theme.contours
    layers = []
    for layer_id, style, default_min, boosts in (
        ("contour-major", contours.major, 6, MAJOR_BOOST),
        ("contour-minor", contours.minor, 8, MINOR_BOOST),
    ):
        min_zoom = style.min_zoom if style.min_zoom is not None else contours.min_zoom
        if min_zoom is None:
            min_zoom = default_min
        if min_zoom >= contours.max_zoom:
            raise ValueError(
                f"{layer_id}: min_zoom {min_zoom} must be below contours max_zoom {contours.max_zoom}"
            )
        layers.append(_contour_layer(layer_id, layer_id.split("-")[1], style,
                                     min_zoom, contours.max_zoom, boosts))
    return layers
