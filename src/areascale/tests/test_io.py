import json
import zipfile

import pytest

from areascale import io
from areascale.area import collection_area
from areascale.config import WGS84_PRJ_WKT
from areascale.features import Feature, FeatureCollection
from areascale.tests.fixtures.geometry_fixture import create_mixed_collection


def test_geojson_roundtrip(tmp_path):
    fc = create_mixed_collection()
    path = io.write_geojson(fc, tmp_path / "parcels.geojson")
    back = io.read_geojson(path)
    assert len(back) == len(fc)
    assert [f.properties for f in back] == [dict(f.properties) for f in fc]
    assert back[5].geometry is None
    assert abs(collection_area(back) - collection_area(fc)) < 1e-6


def test_read_geojson_rejects_non_collection(tmp_path):
    path = tmp_path / "point.geojson"
    path.write_text(json.dumps({"type": "Point", "coordinates": [0, 0]}), encoding="utf-8")
    with pytest.raises(ValueError):
        io.read_geojson(path)


def test_read_geojson_rejects_empty(tmp_path):
    path = tmp_path / "empty.geojson"
    path.write_text(json.dumps({"type": "FeatureCollection", "features": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        io.read_geojson(path)


def test_shapefile_zip_roundtrip(tmp_path):
    fc = create_mixed_collection()
    out = io.write_shapefile_zip(fc, tmp_path / "parcels.zip")
    with zipfile.ZipFile(out) as zf:
        names = sorted(zf.namelist())
    assert "parcels.shp" in names
    assert "parcels.dbf" in names
    assert io.extract_prj_text(out) == WGS84_PRJ_WKT

    back, prj = io.read_shapefile_zip(out)
    # point, line and null features are not exported
    assert len(back) == 3
    assert prj == WGS84_PRJ_WKT
    assert sorted(f.properties["name"] for f in back) == ["a", "b", "m"]
    assert abs(collection_area(back) - 15600.0) < 1e-3


def test_shapefile_zip_requires_polygons(tmp_path):
    fc = FeatureCollection((Feature(None, {"a": 1}),))
    with pytest.raises(ValueError):
        io.write_shapefile_zip(fc, tmp_path / "nothing.zip")


def test_read_zip_without_shapefile(tmp_path):
    path = tmp_path / "junk.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("readme.txt", "no shapes here")
    with pytest.raises(ValueError):
        io.read_shapefile_zip(path)


def test_load_and_save_dispatch(tmp_path):
    fc = create_mixed_collection()
    io.save_collection(fc, tmp_path / "a.json")
    back, prj = io.load_collection(tmp_path / "a.json")
    assert prj is None
    assert len(back) == len(fc)
    with pytest.raises(ValueError):
        io.load_collection(tmp_path / "a.kml")
    with pytest.raises(ValueError):
        io.save_collection(fc, tmp_path / "a.kml")


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_geojson_from_dataframe_is_strict_json(tmp_path):
    fc = FeatureCollection.from_geodataframe(create_mixed_collection().to_geodataframe())
    path = io.write_geojson(fc, tmp_path / "parcels.geojson")
    data = json.loads(path.read_text(encoding="utf-8"), parse_constant=_reject_constant)
    assert data["features"][3]["properties"] == {"name": "well", "lot": None}
