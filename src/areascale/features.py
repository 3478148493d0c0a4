"""
features.py

Immutable feature containers passed between the reader, the area core and
the writers. Geometries are shapely objects (immutable); properties are an
opaque mapping that is carried along by reference and never edited here.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from shapely.geometry import MultiPolygon, Polygon, mapping, shape
from shapely.geometry.base import BaseGeometry

from areascale.config import GEOGRAPHIC_CRS

POLYGONAL_TYPES = (Polygon, MultiPolygon)


def is_polygonal(geometry: Optional[BaseGeometry]) -> bool:
    return isinstance(geometry, POLYGONAL_TYPES)


def _is_nan(value) -> bool:
    # covers numpy floats too (np.float64 subclasses float)
    return isinstance(value, float) and math.isnan(value)


@dataclass(frozen=True)
class Feature:
    """One geometry plus its attribute record."""

    geometry: Optional[BaseGeometry]
    properties: Mapping[str, Any] = field(default_factory=dict)

    def with_geometry(self, geometry: Optional[BaseGeometry]) -> "Feature":
        return Feature(geometry=geometry, properties=self.properties)


@dataclass(frozen=True)
class FeatureCollection:
    """Ordered, immutable sequence of `Feature`."""

    features: Tuple[Feature, ...] = ()

    def __post_init__(self):
        # accept lists/generators but always store a tuple
        object.__setattr__(self, "features", tuple(self.features))

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __getitem__(self, idx) -> Feature:
        return self.features[idx]

    @property
    def geometries(self) -> Tuple[Optional[BaseGeometry], ...]:
        return tuple(f.geometry for f in self.features)

    def polygonal(self) -> Iterator[BaseGeometry]:
        """Yield the Polygon/MultiPolygon geometries, skipping everything else."""
        for f in self.features:
            if is_polygonal(f.geometry):
                yield f.geometry

    @classmethod
    def from_features(cls, features: Iterable[Feature]) -> "FeatureCollection":
        return cls(tuple(features))

    @classmethod
    def from_geojson(cls, data: Mapping[str, Any]) -> "FeatureCollection":
        """Build from a GeoJSON FeatureCollection mapping."""
        if data.get("type") != "FeatureCollection":
            raise ValueError(f"Expected a GeoJSON FeatureCollection, got {data.get('type')!r}")
        features = []
        for raw in data.get("features") or []:
            geom = raw.get("geometry")
            features.append(
                Feature(
                    geometry=shape(geom) if geom else None,
                    properties=raw.get("properties") or {},
                )
            )
        return cls(tuple(features))

    def to_geojson(self) -> dict:
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": mapping(f.geometry) if f.geometry is not None else None,
                    "properties": {k: None if _is_nan(v) else v for k, v in f.properties.items()},
                }
                for f in self.features
            ],
        }

    @classmethod
    def from_geodataframe(cls, gdf) -> "FeatureCollection":
        """Build from a geopandas GeoDataFrame already in lon/lat."""
        geom_col = gdf.geometry.name
        records = gdf.drop(columns=geom_col).to_dict("records")
        features = []
        for geom, props in zip(gdf.geometry, records):
            # missing attribute values come back as NaN
            props = {k: None if _is_nan(v) else v for k, v in props.items()}
            if geom is not None and geom.is_empty:
                geom = None
            features.append(Feature(geometry=geom, properties=props))
        return cls(tuple(features))

    def to_geodataframe(self, crs: str = GEOGRAPHIC_CRS):
        import geopandas as gpd

        records = [dict(f.properties) for f in self.features]
        return gpd.GeoDataFrame(records, geometry=list(self.geometries), crs=crs)
