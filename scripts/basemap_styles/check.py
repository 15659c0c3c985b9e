"""
Check that every remote endpoint a generated style references is reachable.

Covers the http(s) URLs behind pmtiles:// sources, one glyph range for the
first font stack the style uses, and the sprite index and image.
"""

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote

import requests
from tqdm import tqdm

PMTILES_PREFIX = "pmtiles://"
GLYPH_RANGE = "0-255"
DEFAULT_TIMEOUT = 10


@dataclass
class UrlCheck:
    url: str
    ok: bool
    status: Optional[int] = None
    error: Optional[str] = None


def _first_font_stack(style: dict) -> Optional[list]:
    for layer in style.get("layers", []):
        font = layer.get("layout", {}).get("text-font")
        if isinstance(font, list) and font and all(isinstance(f, str) for f in font):
            return font
    return None


def collect_urls(style: dict) -> List[str]:
    """Remote URLs the style will fetch, without duplicates, in style order."""
    urls: List[str] = []

    for source in style.get("sources", {}).values():
        url = source.get("url", "")
        if url.startswith(PMTILES_PREFIX):
            url = url[len(PMTILES_PREFIX):]
        if url.startswith(("http://", "https://")):
            urls.append(url)

    glyphs = style.get("glyphs")
    font = _first_font_stack(style)
    if glyphs and font:
        urls.append(
            glyphs.replace("{fontstack}", quote(",".join(font))).replace("{range}", GLYPH_RANGE)
        )

    sprite = style.get("sprite")
    if isinstance(sprite, str) and sprite.startswith(("http://", "https://")):
        urls += [f"{sprite}.json", f"{sprite}.png"]

    return list(dict.fromkeys(urls))


def check_url(session: requests.Session, url: str, timeout: float = DEFAULT_TIMEOUT) -> UrlCheck:
    """HEAD the URL, retrying with a streamed GET when HEAD is not allowed."""
    try:
        response = session.head(url, timeout=timeout, allow_redirects=True)
        if response.status_code == 405:
            response = session.get(url, timeout=timeout, stream=True)
            response.close()
    except requests.RequestException as e:
        return UrlCheck(url=url, ok=False, error=str(e))
    return UrlCheck(url=url, ok=response.ok, status=response.status_code)


def check_style_urls(style: dict, session: Optional[requests.Session] = None,
                     progress: bool = True, timeout: float = DEFAULT_TIMEOUT) -> List[UrlCheck]:
    """Check every URL of `style`, returning one result per URL."""
    session = session or requests.Session()
    urls = collect_urls(style)
    return [
        check_url(session, url, timeout)
        for url in tqdm(urls, desc="Checking sources", disable=not progress)
    ]
