from shapely.geometry import Point

from areascale.bounds import EMPTY_BOUNDS, compute_bounds
from areascale.features import Feature, FeatureCollection
from areascale.tests.fixtures.geometry_fixture import create_mixed_collection, rect_polygon


def test_bounds_single_rectangle():
    fc = FeatureCollection((Feature(rect_polygon(100.0, 200.0, 100.0, 50.0)),))
    b = compute_bounds(fc)
    assert not b.is_empty
    assert abs(b.minx - 100.0) < 1e-6
    assert abs(b.maxy - 250.0) < 1e-6
    assert abs(b.width - 100.0) < 1e-6
    assert abs(b.height - 50.0) < 1e-6
    cx, cy = b.center
    assert abs(cx - 150.0) < 1e-6
    assert abs(cy - 225.0) < 1e-6


def test_bounds_is_bbox_midpoint_not_centroid():
    # L-shaped pair: big square plus a small far-away square
    fc = FeatureCollection((
        Feature(rect_polygon(0.0, 0.0, 100.0, 100.0)),
        Feature(rect_polygon(900.0, 0.0, 100.0, 100.0)),
    ))
    cx, cy = compute_bounds(fc).center
    assert abs(cx - 500.0) < 1e-6
    assert abs(cy - 50.0) < 1e-6


def test_bounds_ignore_non_area_geometry():
    fc = create_mixed_collection()
    with_point = FeatureCollection(fc.features + (Feature(Point(50.0, 50.0), {}),))
    assert compute_bounds(with_point) == compute_bounds(fc)


def test_bounds_empty_collection():
    assert compute_bounds(FeatureCollection()) == EMPTY_BOUNDS
    only_point = FeatureCollection((Feature(Point(1.0, 1.0), {}),))
    b = compute_bounds(only_point)
    assert b.is_empty
    assert b.as_tuple() == (0.0, 0.0, 0.0, 0.0)
    assert b.center == (0.0, 0.0)
