"""
scaling.py

Uniform scale of polygon vertices about a fixed planar pivot. Each vertex
goes lon/lat -> x/y, `pivot + (p - pivot) * factor`, then back to lon/lat.

`factor` is not validated here; it must be > 0.
"""
from typing import Iterable, Optional, Sequence

import numpy as np
import shapely
from shapely.geometry.base import BaseGeometry

from areascale.features import Feature, FeatureCollection, is_polygonal
from areascale.projection import Projector, default_projector


def scale_geometry(
    geometry: Optional[BaseGeometry],
    pivot: Sequence[float],
    factor: float,
    projector: Optional[Projector] = None,
) -> Optional[BaseGeometry]:
    """Return a scaled copy of a Polygon/MultiPolygon; other input as is."""
    if not is_polygonal(geometry):
        return geometry
    projector = projector or default_projector()
    center = np.array([float(pivot[0]), float(pivot[1])])

    def _scale(coords: np.ndarray) -> np.ndarray:
        xy = projector.forward_coords(coords)
        return projector.inverse_coords(center + (xy - center) * factor)

    return shapely.transform(geometry, _scale)


def scale_collection(
    collection: Iterable[Feature],
    pivot: Sequence[float],
    factor: float,
    projector: Optional[Projector] = None,
) -> FeatureCollection:
    """Scale every polygonal feature; properties are shared, not copied."""
    projector = projector or default_projector()
    out = []
    for feature in collection:
        if is_polygonal(feature.geometry):
            out.append(feature.with_geometry(scale_geometry(feature.geometry, pivot, factor, projector)))
        else:
            out.append(feature)
    return FeatureCollection(tuple(out))
