"""
bounds.py

Planar bounding box of the polygonal vertices of a collection. Its midpoint
is the pivot used when rescaling.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np
import shapely

from areascale.features import Feature, is_polygonal
from areascale.projection import Projector, default_projector


@dataclass(frozen=True)
class PlanarBounds:
    """Axis-aligned box in projected metres."""

    minx: float
    miny: float
    maxx: float
    maxy: float
    is_empty: bool = False

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    @property
    def center(self) -> Tuple[float, float]:
        """Midpoint of the box (not a centroid)."""
        return (self.minx + self.width / 2.0, self.miny + self.height / 2.0)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.minx, self.miny, self.maxx, self.maxy)


EMPTY_BOUNDS = PlanarBounds(0.0, 0.0, 0.0, 0.0, is_empty=True)


def compute_bounds(collection: Iterable[Feature], projector: Optional[Projector] = None) -> PlanarBounds:
    """Bounds of every Polygon/MultiPolygon vertex (holes included).

    Returns `EMPTY_BOUNDS` when there is nothing to measure or the projected
    extremes are not finite; its center is not a usable pivot.
    """
    geoms = [f.geometry for f in collection if is_polygonal(f.geometry)]
    if not geoms:
        return EMPTY_BOUNDS
    coords = shapely.get_coordinates(geoms)
    if coords.shape[0] == 0:
        return EMPTY_BOUNDS

    projector = projector or default_projector()
    x, y = projector.forward(coords[:, 0], coords[:, 1])
    minx, maxx = float(np.min(x)), float(np.max(x))
    miny, maxy = float(np.min(y)), float(np.max(y))
    if not all(np.isfinite(v) for v in (minx, miny, maxx, maxy)):
        return EMPTY_BOUNDS
    return PlanarBounds(minx, miny, maxx, maxy)
