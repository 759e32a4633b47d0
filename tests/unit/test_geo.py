from __future__ import annotations

import pytest

from trimetric.datasets.geo import distance_m, within_box, within_distance

# Pioneer Courthouse Square and two points east of it.
SQUARE = {"id": "square", "lat": 45.5189, "lng": -122.6793}
BRIDGE = {"id": "bridge", "lat": 45.5190, "lng": -122.6700}
GRESHAM = {"id": "gresham", "lat": 45.4985, "lng": -122.4302}
NO_COORDS = {"id": "ghost"}


def test_distance_m_one_degree_of_latitude() -> None:
    assert distance_m(45.0, -122.0, 46.0, -122.0) == pytest.approx(111_195, rel=1e-3)
    assert distance_m(45.5, -122.6, 45.5, -122.6) == 0.0


def test_within_box_includes_edges_and_skips_missing_coords() -> None:
    stops = [SQUARE, BRIDGE, GRESHAM, NO_COORDS]
    found = within_box(stops, west=-122.6793, south=45.5, east=-122.6, north=45.52)
    assert [s["id"] for s in found] == ["square", "bridge"]


def test_within_distance_sorts_nearest_first_and_adds_distance() -> None:
    stops = [BRIDGE, GRESHAM, SQUARE, NO_COORDS]
    found = within_distance(stops, lat=45.5189, lng=-122.6793, radius_m=1_000)

    assert [s["id"] for s in found] == ["square", "bridge"]
    assert found[0]["distance"] == 0.0
    assert 700 < found[1]["distance"] < 750
    assert "distance" not in BRIDGE
