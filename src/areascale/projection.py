"""
projection.py

Bidirectional mapping between geographic lon/lat (degrees) and the fixed
planar spherical Mercator (metres) used for every OSS area measurement.

Public API:
- `Projector(config)` with `forward(lon, lat)` and `inverse(x, y)`
- `default_projector()` -> shared `Projector` built from `WEB_MERCATOR`

The projection is undefined at the poles (y diverges); callers should keep
latitudes strictly inside +/- `config.max_latitude`.
"""
from functools import lru_cache
from typing import Tuple

import numpy as np
from pyproj import Transformer

from areascale.config import WEB_MERCATOR, ProjectionConfig


def _as_input(value):
    # pyproj takes python floats or 1-d+ arrays; unwrap 0-d arrays
    arr = np.asarray(value, dtype=float)
    return float(arr) if arr.ndim == 0 else arr


class Projector:
    """Forward/inverse spherical Mercator transform.

    Both transformers are built once in the constructor; the instance holds
    no other state and can be shared between calls.
    """

    def __init__(self, config: ProjectionConfig = WEB_MERCATOR):
        self.config = config
        self._to_planar = Transformer.from_crs(
            config.geographic_definition, config.definition, always_xy=True
        )
        self._to_geographic = Transformer.from_crs(
            config.definition, config.geographic_definition, always_xy=True
        )

    def __repr__(self) -> str:
        return f"Projector({self.config.name!r}, radius={self.config.radius})"

    def forward(self, lon, lat) -> Tuple[np.ndarray, np.ndarray]:
        """Geographic (lon, lat) degrees -> planar (x, y) metres.

        Accepts scalars or array-like inputs of the same shape.
        """
        x, y = self._to_planar.transform(_as_input(lon), _as_input(lat))
        return np.asarray(x, dtype=float), np.asarray(y, dtype=float)

    def inverse(self, x, y) -> Tuple[np.ndarray, np.ndarray]:
        """Planar (x, y) metres -> geographic (lon, lat) degrees."""
        lon, lat = self._to_geographic.transform(_as_input(x), _as_input(y))
        return np.asarray(lon, dtype=float), np.asarray(lat, dtype=float)

    def forward_coords(self, coords) -> np.ndarray:
        """Project an (N, 2) lon/lat array to an (N, 2) x/y array."""
        pts = np.asarray(coords, dtype=float).reshape(-1, 2)
        x, y = self.forward(pts[:, 0], pts[:, 1])
        return np.column_stack([x, y])

    def inverse_coords(self, coords) -> np.ndarray:
        pts = np.asarray(coords, dtype=float).reshape(-1, 2)
        lon, lat = self.inverse(pts[:, 0], pts[:, 1])
        return np.column_stack([lon, lat])


@lru_cache(maxsize=1)
def default_projector() -> Projector:
    """Return the shared Web-Mercator projector."""
    return Projector(WEB_MERCATOR)
