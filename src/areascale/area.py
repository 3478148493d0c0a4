"""
area.py

Planar ("OSS") area of rings, polygons and feature collections measured
in the fixed spherical Mercator, via the shoelace formula.

Rules:
- a ring is auto-closed when its first and last points are not identical;
- rings with fewer than 3 points have zero area;
- polygon area is `max(0, outer - sum(holes))`, winding is not inspected;
- geometry other than Polygon/MultiPolygon contributes nothing.
"""
from typing import Iterable, Optional

import numpy as np
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from areascale.features import Feature
from areascale.projection import Projector, default_projector


def shoelace_area(xs, ys) -> float:
    """Absolute shoelace area of a closed planar vertex sequence.

    The last vertex must repeat the first.
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.shape[0] < 2:
        return 0.0
    s = np.sum(x[:-1] * y[1:] - x[1:] * y[:-1])
    return float(abs(s) / 2.0)


def ring_area(ring, projector: Optional[Projector] = None) -> float:
    """Planar area (m^2) of one lon/lat ring."""
    pts = np.asarray(ring, dtype=float)
    if pts.ndim != 2 or pts.shape[0] < 3:
        return 0.0
    pts = pts[:, :2]
    if not (pts[0, 0] == pts[-1, 0] and pts[0, 1] == pts[-1, 1]):
        pts = np.vstack([pts, pts[:1]])
    projector = projector or default_projector()
    x, y = projector.forward(pts[:, 0], pts[:, 1])
    return shoelace_area(x, y)


def polygon_area(polygon: Polygon, projector: Optional[Projector] = None) -> float:
    if polygon.is_empty:
        return 0.0
    projector = projector or default_projector()
    outer = ring_area(polygon.exterior.coords, projector)
    holes = sum(ring_area(r.coords, projector) for r in polygon.interiors)
    return max(0.0, outer - holes)


def multipolygon_area(multipolygon: MultiPolygon, projector: Optional[Projector] = None) -> float:
    projector = projector or default_projector()
    return sum(polygon_area(p, projector) for p in multipolygon.geoms)


def geometry_area(geometry: Optional[BaseGeometry], projector: Optional[Projector] = None) -> float:
    """OSS area of any geometry; non-polygonal and missing geometry -> 0."""
    if isinstance(geometry, Polygon):
        return polygon_area(geometry, projector)
    if isinstance(geometry, MultiPolygon):
        return multipolygon_area(geometry, projector)
    return 0.0


def collection_area(collection: Iterable[Feature], projector: Optional[Projector] = None) -> float:
    """Total OSS area of every feature in `collection`."""
    projector = projector or default_projector()
    total = 0.0
    for feature in collection:
        total += geometry_area(feature.geometry, projector)
    return total
