"""Tests for HTML image map export."""

import re

import pytest

from imagemap.html_export import (
    area_tag,
    format_coords,
    regions_to_html,
    sample_points,
    save_html,
    select_polygons,
)
from imagemap.types import Coordinate, ImageMapConfig


def line(n):
    return tuple(Coordinate(i, 2 * i) for i in range(n))


class TestSamplePoints:
    """Test cases for sample_points."""

    def test_every_fifth_point(self):
        assert sample_points(line(12), 5) == [(0, 0), (5, 10), (10, 20)]

    def test_stride_one_keeps_all(self):
        assert sample_points(line(3), 1) == list(line(3))

    def test_bad_stride(self):
        with pytest.raises(ValueError):
            sample_points(line(3), 0)


class TestAreaTag:
    """Test cases for area markup."""

    def test_format_coords(self):
        assert format_coords([Coordinate(1, 2), Coordinate(30, 4)]) == "1,2,30,4"

    def test_area_tag(self):
        tag = area_tag([Coordinate(1, 2), Coordinate(3, 4)], "#Area1")

        assert tag == '<area shape="polygon" coords="1,2,3,4" href="#Area1" />'


class TestRegionsToHtml:
    """Test cases for regions_to_html."""

    def test_document_structure(self):
        html = regions_to_html([line(40)], "states.png")

        assert html.startswith("<!doctype html><html><head></head><body>")
        assert '<img src="states.png" alt="" usemap="#map" />' in html
        assert '<map name="map">' in html
        assert html.rstrip().endswith("</map>\n</body></html>")

    def test_small_polygons_skipped_and_numbering(self):
        """Only kept polygons are numbered, from 1."""
        polygons = [line(40), line(5), line(31)]

        html = regions_to_html(polygons, "a.png", ImageMapConfig(min_points=30))

        hrefs = re.findall(r'href="([^"]+)"', html)
        assert hrefs == ["#Area1", "#Area2"]

    def test_coords_are_sampled(self):
        html = regions_to_html([line(12)], "a.png", ImageMapConfig(min_points=1))

        assert 'coords="0,0,5,10,10,20"' in html

    def test_custom_names(self):
        config = ImageMapConfig(min_points=1, map_name="world", href_prefix="#Country")

        html = regions_to_html([line(2)], "w.png", config)

        assert 'usemap="#world"' in html
        assert 'href="#Country1"' in html

    def test_no_regions(self):
        html = regions_to_html([], "a.png")

        assert "<area" not in html

    def test_src_is_escaped(self):
        html = regions_to_html([], 'a "b".png')

        assert 'src="a &quot;b&quot;.png"' in html


def test_select_polygons():
    assert select_polygons([line(1), line(3)], 2) == [line(3)]


def test_save_html(tmp_path):
    path = tmp_path / "out" / "map.html"

    save_html("<html></html>", path)

    assert path.read_text(encoding="utf-8") == "<html></html>"
