"""Layer descriptor emitted by every factory."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .expressions import to_json

LAYER_TYPES = ("background", "fill", "line", "symbol", "circle", "hillshade")


@dataclass(frozen=True)
class Layer:
    """One style layer. Serialized with renderer key names by to_json()."""

    id: str
    type: str
    source: Optional[str] = None
    source_layer: Optional[str] = None
    minzoom: Optional[float] = None
    maxzoom: Optional[float] = None
    filter: Any = None
    layout: Mapping[str, Any] = field(default_factory=dict)
    paint: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Layer id must not be empty")
        if self.type not in LAYER_TYPES:
            raise ValueError(f"Unknown layer type '{self.type}' for {self.id}. Available: {list(LAYER_TYPES)}")
        if self.type == "background" and self.source is not None:
            raise ValueError(f"Background layer {self.id} cannot have a source")
        if self.type != "background" and not self.source:
            raise ValueError(f"Layer {self.id} needs a source")

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "type": self.type}
        if self.source is not None:
            out["source"] = self.source
        if self.source_layer is not None:
            out["source-layer"] = self.source_layer
        if self.minzoom is not None:
            out["minzoom"] = self.minzoom
        if self.maxzoom is not None:
            out["maxzoom"] = self.maxzoom
        if self.filter is not None:
            out["filter"] = to_json(self.filter)
        if self.layout:
            out["layout"] = to_json(self.layout)
        if self.paint:
            out["paint"] = to_json(self.paint)
        return out
