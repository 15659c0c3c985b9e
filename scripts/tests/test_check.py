#!/usr/bin/env python3
"""Tests for endpoint reachability checks."""
import sys
from pathlib import Path

import requests

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from basemap_styles.check import check_style_urls, check_url, collect_urls
from basemap_styles.composition import create_basemap_style


class FakeResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code
        self.ok = status_code < 400
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Answers HEAD and GET from a status table and records the calls."""

    def __init__(self, head=200, get=200, error=None):
        self.head_status = head
        self.get_status = get
        self.error = error
        self.calls = []

    def head(self, url, timeout=None, allow_redirects=False):
        self.calls.append(("HEAD", url, timeout))
        if self.error:
            raise self.error
        return FakeResponse(self.head_status)

    def get(self, url, timeout=None, stream=False):
        self.calls.append(("GET", url, timeout))
        return FakeResponse(self.get_status)


class TestCollectUrls:
    """Tests for URL collection."""

    def test_style_urls(self, minimal_theme, urls):
        """Test archives, one glyph range and the sprite files."""
        found = collect_urls(create_basemap_style(minimal_theme, urls))
        assert "https://tiles.example.com/pmtiles/world_z0-6.pmtiles" in found
        assert "https://glyphs.example.com/fonts/Noto%20Sans%20Regular/0-255.pbf" in found
        assert found[-2:] == [
            "https://sprites.example.com/sprites/basemap.json",
            "https://sprites.example.com/sprites/basemap.png",
        ]
        assert len(found) == len(set(found))

    def test_skips_non_http(self):
        """Test local and inline sources are ignored."""
        style = {
            "sources": {
                "a": {"type": "vector", "url": "pmtiles://./data/a.pmtiles"},
                "b": {"type": "geojson", "data": {}},
            },
            "sprite": "/sprites/basemap",
            "layers": [],
        }
        assert collect_urls(style) == []


class TestCheckUrl:
    """Tests for single URL checks."""

    def test_ok(self):
        """Test a successful HEAD."""
        session = FakeSession()
        result = check_url(session, "https://a.example.com/x", timeout=3)
        assert result.ok and result.status == 200
        assert session.calls == [("HEAD", "https://a.example.com/x", 3)]

    def test_head_not_allowed_falls_back_to_get(self):
        """Test servers rejecting HEAD are retried with GET."""
        session = FakeSession(head=405, get=200)
        result = check_url(session, "https://a.example.com/x")
        assert result.ok
        assert [call[0] for call in session.calls] == ["HEAD", "GET"]

    def test_not_found(self):
        """Test error statuses are reported."""
        result = check_url(FakeSession(head=404), "https://a.example.com/x")
        assert not result.ok
        assert result.status == 404

    def test_connection_error(self):
        """Test request failures are reported instead of raised."""
        session = FakeSession(error=requests.ConnectionError("refused"))
        result = check_url(session, "https://a.example.com/x")
        assert not result.ok
        assert result.status is None
        assert "refused" in result.error


class TestCheckStyle:
    """Tests for whole-style checks."""

    def test_one_result_per_url(self, minimal_theme, urls):
        """Test every collected URL is checked once."""
        style = create_basemap_style(minimal_theme, urls)
        session = FakeSession()
        results = check_style_urls(style, session=session, progress=False)
        assert [r.url for r in results] == collect_urls(style)
        assert all(r.ok for r in results)
        assert len(session.calls) == len(results)
