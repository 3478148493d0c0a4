from shapely.geometry import MultiPolygon, Polygon

from areascale.area import collection_area
from areascale.bounds import compute_bounds
from areascale.config import WGS84_PRJ_WKT
from areascale.features import Feature, FeatureCollection
from areascale.stats import build_stats, format_report
from areascale.tests.fixtures.geometry_fixture import (
    create_mixed_collection,
    create_square_collection,
    lonlat_square,
)


def test_stats_summary_fields():
    fc = create_mixed_collection()
    res = build_stats("parcels.zip", fc, WGS84_PRJ_WKT)
    assert res.file_name == "parcels.zip"
    assert res.feature_count == 6
    assert res.geometry_types == ["Polygon", "MultiPolygon", "Point", "LineString"]
    assert res.field_names == ["lot", "name"]
    assert res.crs_type == "Geographic"
    assert res.epsg_guess == "EPSG:4326 (WGS 84)"


def test_stats_oss_matches_core():
    fc = create_mixed_collection()
    res = build_stats("x", fc)
    assert res.total_area_oss_sqm == collection_area(fc)
    b = compute_bounds(fc)
    assert res.oss_width_meters == b.width
    assert res.oss_height_meters == b.height


def test_stats_geodesic_close_to_planar_near_equator():
    fc = create_square_collection(lon0=0.0, lat0=0.0, size_deg=0.01)
    res = build_stats("sq", fc)
    assert res.total_area_sqm > 0
    # Mercator is nearly true-scale at the equator
    assert abs(res.total_area_sqm - res.total_area_oss_sqm) / res.total_area_oss_sqm < 0.02
    assert abs(res.width_meters - 1113.19) < 5.0
    # four sides of ~1.1 km
    assert 4000.0 < res.total_perimeter_m < 4600.0
    assert res.vertex_count == 5


def test_stats_bbox_in_degrees():
    fc = create_square_collection(lon0=5.0, lat0=6.0, size_deg=0.5)
    res = build_stats("sq", fc)
    assert res.bbox == (5.0, 6.0, 5.5, 6.5)
    assert abs(res.width_degrees - 0.5) < 1e-12
    assert abs(res.height_degrees - 0.5) < 1e-12


def test_stats_empty_collection():
    res = build_stats("empty", FeatureCollection())
    assert res.feature_count == 0
    assert res.total_area_oss_sqm == 0.0
    assert res.bbox == (0.0, 0.0, 0.0, 0.0)
    assert res.crs_type == "Unknown"
    assert res.epsg_guess is None


def test_format_report_lists_areas():
    res = build_stats("parcels.zip", create_mixed_collection())
    text = format_report(res)
    assert "File: parcels.zip" in text
    assert "OSS area (m², EPSG:3857): 15,600.00" in text
    assert "EPSG guess: -" in text


def test_stats_geodesic_area_ignores_ring_orientation():
    ccw = lonlat_square(0.0, 0.0, 0.01)
    cw = Polygon(list(lonlat_square(0.02, 0.0, 0.01).exterior.coords)[::-1])
    assert not cw.exterior.is_ccw
    fc = FeatureCollection((Feature(MultiPolygon([ccw, cw]), {"id": 1}),))
    res = build_stats("mixed-winding", fc)
    single = build_stats("one", create_square_collection(lon0=0.0, lat0=0.0, size_deg=0.01))
    assert abs(res.total_area_sqm - 2.0 * single.total_area_sqm) / res.total_area_sqm < 1e-6
    assert abs(res.total_area_sqm - res.total_area_oss_sqm) / res.total_area_oss_sqm < 0.02
