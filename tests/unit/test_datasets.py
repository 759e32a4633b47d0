from __future__ import annotations

import os

import orjson
import pytest

from trimetric.errors import DatasetError
from trimetric.datasets import ALL_RECORDS, DatasetProvider, JsonFileDatasets


def _write(path, payload) -> None:
    path.write_bytes(orjson.dumps(payload))


def test_no_path_serves_empty_collections() -> None:
    datasets = JsonFileDatasets(None)
    assert isinstance(datasets, DatasetProvider)
    assert datasets.fetch_all_stops() == []
    assert datasets.fetch_routes() == []
    assert datasets.fetch_route_shapes() == []
    assert datasets.fetch_vehicle_positions() == []


def test_loads_collections_and_filters_since(tmp_path) -> None:
    path = tmp_path / "data.json"
    _write(
        path,
        {
            "stops": [{"id": "1", "lat": 45.5, "lng": -122.6}],
            "routes": [{"id": "100"}],
            "route_shapes": [{"route_id": "100"}],
            "vehicles": [{"id": "v1", "timestamp": 10}, {"id": "v2", "timestamp": 20}],
        },
    )
    datasets = JsonFileDatasets(path)

    assert datasets.fetch_all_stops() == [{"id": "1", "lat": 45.5, "lng": -122.6}]
    assert datasets.fetch_routes() == [{"id": "100"}]
    assert datasets.fetch_route_shapes() == [{"route_id": "100"}]
    assert len(datasets.fetch_vehicle_positions(ALL_RECORDS)) == 2
    assert datasets.fetch_vehicle_positions(10) == [{"id": "v2", "timestamp": 20}]


def test_reloads_when_file_changes(tmp_path) -> None:
    path = tmp_path / "data.json"
    _write(path, {"vehicles": [{"id": "v1", "timestamp": 1}]})
    datasets = JsonFileDatasets(path)
    assert len(datasets.fetch_vehicle_positions()) == 1

    _write(path, {"vehicles": [{"id": "v1", "timestamp": 2}, {"id": "v2", "timestamp": 3}]})
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
    assert len(datasets.fetch_vehicle_positions()) == 2


def test_missing_file_raises(tmp_path) -> None:
    datasets = JsonFileDatasets(tmp_path / "missing.json")
    with pytest.raises(DatasetError):
        datasets.fetch_all_stops()


@pytest.mark.parametrize("payload", [b"not json", b"[]", b'{"stops": {"id": 1}}'])
def test_malformed_file_raises(tmp_path, payload: bytes) -> None:
    path = tmp_path / "data.json"
    path.write_bytes(payload)
    with pytest.raises(DatasetError):
        JsonFileDatasets(path).fetch_routes()
