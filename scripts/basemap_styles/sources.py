"""
Tile, glyph and sprite endpoints for generated styles.

Basemap data lives in PMTiles archives under {data_base_url}/pmtiles/.
Sources for optional domains are only added when the theme switches the
domain on, so a style never references archives it does not draw.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from .theme import Theme, domain_enabled

DEFAULT_DATA_URL = "https://data.storypath.studio"
LOCAL_ASSET_URL = "http://localhost:8080"


@dataclass(frozen=True)
class StyleUrls:
    """Where a style loads glyphs, sprites and tiles from."""

    glyphs_base_url: str = LOCAL_ASSET_URL
    sprite_base_url: str = LOCAL_ASSET_URL
    data_base_url: str = DEFAULT_DATA_URL
    glyphs_path: str = "shared/assets/glyphs"
    sprite_path: str = "shared/assets/sprites/basemap"
    # Full source URL for the places overlay, e.g. pmtiles://.../places.pmtiles
    places_url: Optional[str] = None

    @classmethod
    def local(cls) -> "StyleUrls":
        return cls(
            glyphs_base_url=DEFAULT_DATA_URL,
            glyphs_path="glyphs",
            sprite_base_url=LOCAL_ASSET_URL,
            sprite_path="sprites/basemap",
        )

    @classmethod
    def production(cls) -> "StyleUrls":
        return cls(
            glyphs_base_url=DEFAULT_DATA_URL,
            glyphs_path="glyphs",
            sprite_base_url=DEFAULT_DATA_URL,
            sprite_path="sprites/basemap",
        )

    @classmethod
    def from_env(cls, env: Optional[str] = None) -> "StyleUrls":
        """URL set chosen by BASEMAP_ENV, with single-field overrides.

        BASEMAP_DATA_URL, BASEMAP_GLYPHS_URL, BASEMAP_SPRITE_URL and
        BASEMAP_PLACES_URL replace the matching field when set.
        """
        env = env if env is not None else os.environ.get("BASEMAP_ENV", "local")
        urls = cls.production() if env == "production" else cls.local()
        overrides = {
            "data_base_url": os.environ.get("BASEMAP_DATA_URL"),
            "glyphs_base_url": os.environ.get("BASEMAP_GLYPHS_URL"),
            "sprite_base_url": os.environ.get("BASEMAP_SPRITE_URL"),
            "places_url": os.environ.get("BASEMAP_PLACES_URL"),
        }
        return replace(urls, **{k: v for k, v in overrides.items() if v})

    @property
    def glyphs(self) -> str:
        return f"{self.glyphs_base_url}/{self.glyphs_path}/{{fontstack}}/{{range}}.pbf"

    @property
    def sprite(self) -> str:
        return f"{self.sprite_base_url}/{self.sprite_path}"

    def pmtiles(self, filename: str) -> str:
        return f"pmtiles://{self.data_base_url}/pmtiles/{filename}"


def _vector(url: str, minzoom: float, maxzoom: Optional[float] = None) -> dict:
    source = {"type": "vector", "url": url, "minzoom": minzoom}
    if maxzoom is not None:
        source["maxzoom"] = maxzoom
    return source


def create_global_sources(urls: StyleUrls) -> dict:
    """Sources shared by every basemap."""
    return {"world_labels": _vector(urls.pmtiles("world-labels_z0-10.pmtiles"), 0, 10)}


def create_basemap_sources(urls: StyleUrls, theme: Theme) -> dict:
    """Basemap tiles plus one source per enabled optional domain."""
    sources = {
        "world_low": _vector(urls.pmtiles("world_z0-6.pmtiles"), 0),
        "world_mid": _vector(urls.pmtiles("world_z6-10.pmtiles"), 6),
        "us_high": _vector(urls.pmtiles("us_z0-15.pmtiles"), 6, 15),
        "poi_us": _vector(urls.pmtiles("poi_us_z12-15.pmtiles"), 12, 15),
    }

    if domain_enabled(theme, "bathymetry"):
        sources["ne-bathy"] = _vector(urls.pmtiles("ne_bathy_z0-6.pmtiles"), 0, 6)

    if domain_enabled(theme, "contours"):
        sources["world-contours"] = _vector(
            urls.pmtiles("world_contours_z4-10_mj800_mn350_minz6.pmtiles"), 4, 10
        )

    if domain_enabled(theme, "ice"):
        sources["ne-ice"] = _vector(urls.pmtiles("ne_ice_z0-6.pmtiles"), 0, 6)

    if domain_enabled(theme, "grid"):
        grid = theme.grid
        sources["world-grid"] = _vector(
            urls.pmtiles("graticules.pmtiles"), grid.min_zoom, grid.max_zoom
        )

    if domain_enabled(theme, "hillshade"):
        hillshade = theme.hillshade
        sources["world-hillshade"] = {
            "type": "raster-dem",
            "url": urls.pmtiles("world_mtn_hillshade.pmtiles"),
            "minzoom": hillshade.min_zoom,
        }
        if hillshade.max_zoom is not None:
            sources["world-hillshade"]["maxzoom"] = hillshade.max_zoom

    if domain_enabled(theme, "aeroway"):
        sources["aeroway-world"] = _vector(urls.pmtiles("aeroway-world.pmtiles"), 6, 15)

    return sources


def create_places_source(urls: StyleUrls) -> dict:
    """Places polygons keyed by GEOID so feature-state can be set per place."""
    return {"type": "vector", "url": urls.places_url, "promoteId": "GEOID"}
