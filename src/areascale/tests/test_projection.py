import dataclasses
import math

import numpy as np
import pytest

from areascale.config import WEB_MERCATOR, ProjectionConfig
from areascale.projection import Projector, default_projector


def test_origin_maps_to_origin():
    x, y = default_projector().forward(0.0, 0.0)
    assert abs(x) < 1e-9
    assert abs(y) < 1e-9


def test_antimeridian_is_half_circumference():
    x, _ = default_projector().forward(180.0, 0.0)
    assert abs(x - math.pi * WEB_MERCATOR.radius) < 1e-6


def test_roundtrip_within_1e9_degrees():
    p = default_projector()
    lons = np.linspace(-179.5, 179.5, 37)
    lats = np.linspace(-84.9, 84.9, 37)
    x, y = p.forward(lons, lats)
    lon2, lat2 = p.inverse(x, y)
    assert np.max(np.abs(lon2 - lons)) <= 1e-9
    assert np.max(np.abs(lat2 - lats)) <= 1e-9


def test_coords_helpers_shape():
    p = default_projector()
    pts = np.array([[10.0, 45.0], [10.5, 45.5], [11.0, 46.0]])
    xy = p.forward_coords(pts)
    assert xy.shape == (3, 2)
    back = p.inverse_coords(xy)
    assert np.allclose(back, pts, atol=1e-9)


def test_custom_radius_scales_linearly():
    half = Projector(ProjectionConfig(name="half sphere", radius=WEB_MERCATOR.radius / 2.0))
    x_full, y_full = default_projector().forward(12.0, 34.0)
    x_half, y_half = half.forward(12.0, 34.0)
    assert abs(x_half * 2.0 - x_full) < 1e-6
    assert abs(y_half * 2.0 - y_full) < 1e-6


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        WEB_MERCATOR.radius = 1.0


def test_default_projector_is_shared():
    assert default_projector() is default_projector()


def test_small_sphere_builds_and_roundtrips():
    unit = Projector(ProjectionConfig(name="1 km sphere", radius=1000.0))
    x, y = unit.forward(90.0, 0.0)
    assert abs(x - 1000.0 * math.pi / 2.0) < 1e-9
    assert abs(y) < 1e-9
    lon, lat = unit.inverse(*unit.forward(12.0, 34.0))
    assert abs(lon - 12.0) <= 1e-9
    assert abs(lat - 34.0) <= 1e-9


def test_geographic_definition_shares_radius():
    cfg = ProjectionConfig(name="custom", radius=1000.0)
    assert "+a=1000.0" in cfg.geographic_definition
    assert "+b=1000.0" in cfg.geographic_definition
    assert "+proj=longlat" in cfg.geographic_definition
