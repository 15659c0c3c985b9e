"""Background layer."""

from typing import List

from ..layer import Layer
from ..theme import Theme


def create_background_layers(theme: Theme) -> List[Layer]:
    """Create the solid background fill."""
    return [
        Layer(
            id="background",
            type="background",
            paint={"background-color": theme.colors.background},
        ),
    ]
